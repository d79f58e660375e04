"""Resolve, parse, merge and serialize: the conversion pipeline."""

from __future__ import annotations

from .formats.builtin import default_registry
from .formats.dispatch import ParserDispatch, SerializerDispatch
from .formats.registry import FormatRegistry
from .formats.resolver import DEFAULT_SNIFF_LIMIT, FormatResolver
from .logging import get_logger
from .model import Graph

LOGGER = get_logger(__name__)


class Converter:
    """Owns one Graph that every ``load`` accumulates into."""

    def __init__(self, registry: FormatRegistry | None = None, *, sniff_limit: int = DEFAULT_SNIFF_LIMIT) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.resolver = FormatResolver(self.registry, sniff_limit=sniff_limit)
        self.parsers = ParserDispatch(self.registry)
        self.serializers = SerializerDispatch(self.registry)
        self.graph = Graph()

    def load(
        self,
        data: bytes,
        hint: str | None = None,
        source_name: str | None = None,
        content_type: str | None = None,
        base: str | None = None,
    ) -> str:
        """Parse ``data`` into the shared graph and return the format used."""
        format_name = self.resolver.resolve_for_parse(hint, source_name, data, content_type)
        before = len(self.graph)
        self.parsers.parse_into(self.graph, data, format_name, base if base is not None else source_name)
        LOGGER.info("Loaded %d statements as %s", len(self.graph) - before, format_name)
        return format_name

    def dump(self, to_format: str) -> bytes:
        format_name = self.resolver.resolve_for_serialize(to_format)
        return self.serializers.serialize(self.graph, format_name)

    def convert(self, data: bytes, from_hint: str | None, to_format: str, base_name: str | None = None) -> bytes:
        """One-shot conversion on a private Graph; the shared graph is untouched."""
        output_format = self.resolver.resolve_for_serialize(to_format)
        input_format = self.resolver.resolve_for_parse(from_hint, base_name, data)
        graph = self.parsers.parse(data, input_format, base_name)
        return self.serializers.serialize(graph, output_format)


def convert(data: bytes, from_hint: str | None, to_format: str, base_name: str | None = None) -> bytes:
    return Converter().convert(data, from_hint, to_format, base_name)


__all__ = ["Converter", "convert"]
