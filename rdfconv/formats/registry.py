"""Catalog of known serialization formats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

from ..errors import DuplicateFormat, UnknownFormat
from .base import GraphParser, GraphSerializer

GUESS = "guess"


def _normalize_mime(value: str) -> str:
    return value.split(";", 1)[0].strip().lower()


@dataclass(frozen=True, slots=True)
class FormatDescriptor:
    name: str
    label: str
    mime_types: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()
    parser: GraphParser | None = None
    serializer: GraphSerializer | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.strip().lower())
        object.__setattr__(self, "mime_types", tuple(_normalize_mime(mime) for mime in self.mime_types))
        object.__setattr__(self, "extensions", tuple(ext.lower().lstrip(".") for ext in self.extensions))

    @property
    def has_parser(self) -> bool:
        return self.parser is not None

    @property
    def has_serializer(self) -> bool:
        return self.serializer is not None


class FormatListing:
    """Restartable, lazily filtered view over registered formats."""

    def __init__(self, formats: dict[str, FormatDescriptor], predicate: Callable[[FormatDescriptor], bool]) -> None:
        self._formats = formats
        self._predicate = predicate

    def __iter__(self) -> Iterator[FormatDescriptor]:
        return (descriptor for descriptor in self._formats.values() if self._predicate(descriptor))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def names(self) -> list[str]:
        return [descriptor.name for descriptor in self]


class FormatRegistry:
    """Name to descriptor mapping; read-only once frozen."""

    def __init__(self) -> None:
        self._formats: dict[str, FormatDescriptor] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, descriptor: FormatDescriptor) -> FormatDescriptor:
        if self._frozen:
            raise RuntimeError("Format registry is frozen; register formats during start-up")
        if descriptor.name == GUESS:
            raise ValueError(f"'{GUESS}' is reserved for format guessing")
        if descriptor.name in self._formats:
            raise DuplicateFormat(descriptor.name)
        self._formats[descriptor.name] = descriptor
        return descriptor

    def freeze(self) -> FormatRegistry:
        self._frozen = True
        return self

    def lookup(self, name: str) -> FormatDescriptor:
        descriptor = self._formats.get(name.strip().lower())
        if descriptor is None:
            raise UnknownFormat(name)
        return descriptor

    def find(self, name_or_mime: str) -> FormatDescriptor | None:
        """Match a format name first, then any declared MIME type."""
        key = name_or_mime.strip().lower()
        if key in self._formats:
            return self._formats[key]
        return self.by_mime(key)

    def by_mime(self, mime: str) -> FormatDescriptor | None:
        wanted = _normalize_mime(mime)
        for descriptor in self._formats.values():
            if wanted in descriptor.mime_types:
                return descriptor
        return None

    def by_extension(self, extension: str) -> list[FormatDescriptor]:
        wanted = extension.lower().lstrip(".")
        return [descriptor for descriptor in self._formats.values() if wanted in descriptor.extensions]

    def list_parseable(self) -> FormatListing:
        return FormatListing(self._formats, lambda descriptor: descriptor.has_parser)

    def list_serializable(self) -> FormatListing:
        return FormatListing(self._formats, lambda descriptor: descriptor.has_serializer)

    def __iter__(self) -> Iterator[FormatDescriptor]:
        return iter(list(self._formats.values()))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._formats

    def __len__(self) -> int:
        return len(self._formats)


__all__ = ["FormatDescriptor", "FormatListing", "FormatRegistry", "GUESS"]
