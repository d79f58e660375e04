"""Pick the format used to parse an input or to serialize a graph."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from urllib.parse import urlsplit

from ..errors import FormatGuessFailed, NoParserForFormat, NoSerializerForFormat, UnknownFormat
from ..logging import get_logger
from .registry import GUESS, FormatRegistry

LOGGER = get_logger(__name__)

DEFAULT_SNIFF_LIMIT = 1024

_JSONLD_KEYWORDS = ("@context", "@graph", "@id")
_TURTLE_DIRECTIVE = re.compile(r"(^|\n)\s*(@prefix|@base)\s", re.MULTILINE)
_SPARQL_DIRECTIVE = re.compile(r"(^|\n)\s*(PREFIX|BASE)\s", re.IGNORECASE | re.MULTILINE)
_NTRIPLES_LINE = re.compile(r"^\s*(<[^>\s]+>|_:\S+)\s*<[^>\s]+>", re.MULTILINE)
_XML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_XML_ELEMENT = re.compile(r"<([A-Za-z_][\w:.\-]*)")


def _extension_of(source_name: str) -> str | None:
    path = urlsplit(source_name).path if "://" in source_name else source_name
    suffix = PurePosixPath(path.replace("\\", "/")).suffix
    return suffix[1:].lower() if suffix else None


def _xml_markup_format(text: str) -> str:
    """TriX when the root element is TriX, RDF/XML otherwise."""
    match = _XML_ELEMENT.search(_XML_COMMENT.sub("", text))
    if match is not None and match.group(1).rsplit(":", 1)[-1] == "TriX":
        return "trix"
    return "rdfxml"


def sniff_format(head: bytes) -> str | None:
    """Return the format name suggested by the first bytes of a document."""
    text = head.decode("utf-8", errors="replace").lstrip("\ufeff").lstrip()
    if not text:
        return None
    if text[0] in "{[":
        if any(keyword in text for keyword in _JSONLD_KEYWORDS):
            return "jsonld"
        return "json" if text[0] == "{" else None
    if text.startswith("<?xml") or text.startswith("<rdf:"):
        return _xml_markup_format(text)
    if _TURTLE_DIRECTIVE.search(text) or _SPARQL_DIRECTIVE.search(text):
        return "turtle"
    if _NTRIPLES_LINE.search(text):
        return "ntriples"
    if text.startswith("<"):
        return _xml_markup_format(text)
    return None


class FormatResolver:
    """Resolution policy over a frozen FormatRegistry."""

    def __init__(self, registry: FormatRegistry, *, sniff_limit: int = DEFAULT_SNIFF_LIMIT) -> None:
        self.registry = registry
        self.sniff_limit = sniff_limit

    def resolve_for_parse(
        self,
        hint: str | None = None,
        source_name: str | None = None,
        sniffed: bytes | None = None,
        content_type: str | None = None,
    ) -> str:
        if hint is not None and hint.strip().lower() != GUESS:
            descriptor = self.registry.find(hint)
            if descriptor is None:
                raise UnknownFormat(hint)
            if not descriptor.has_parser:
                raise NoParserForFormat(descriptor.name)
            return descriptor.name

        if content_type:
            descriptor = self.registry.by_mime(content_type)
            if descriptor is not None and descriptor.has_parser:
                LOGGER.debug("Using format '%s' from content type %s", descriptor.name, content_type)
                return descriptor.name

        if source_name:
            extension = _extension_of(source_name)
            if extension:
                candidates = [d for d in self.registry.by_extension(extension) if d.has_parser]
                if len(candidates) == 1:
                    LOGGER.debug("Guessed format '%s' from extension .%s", candidates[0].name, extension)
                    return candidates[0].name
                if len(candidates) > 1:
                    LOGGER.debug("Extension .%s is ambiguous: %s", extension, [d.name for d in candidates])

        if sniffed:
            name = sniff_format(sniffed[: self.sniff_limit])
            descriptor = self.registry.find(name) if name else None
            if descriptor is not None and descriptor.has_parser:
                LOGGER.debug("Guessed format '%s' from content", descriptor.name)
                return descriptor.name

        raise FormatGuessFailed(source_name)

    def resolve_for_serialize(self, requested: str) -> str:
        descriptor = self.registry.find(requested)
        if descriptor is None:
            raise UnknownFormat(requested)
        if not descriptor.has_serializer:
            raise NoSerializerForFormat(descriptor.name)
        return descriptor.name


__all__ = ["DEFAULT_SNIFF_LIMIT", "FormatResolver", "sniff_format"]
