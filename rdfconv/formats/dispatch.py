"""Route documents and graphs to the codec registered for a format."""

from __future__ import annotations

from ..errors import NoParserForFormat, NoSerializerForFormat
from ..logging import get_logger
from ..model import Graph
from .registry import FormatRegistry

LOGGER = get_logger(__name__)


class ParserDispatch:
    def __init__(self, registry: FormatRegistry) -> None:
        self.registry = registry

    def parse(self, data: bytes, format_name: str, base: str | None = None) -> Graph:
        descriptor = self.registry.lookup(format_name)
        if descriptor.parser is None:
            raise NoParserForFormat(descriptor.name)
        LOGGER.debug("Parsing %d bytes as %s (base=%s)", len(data), descriptor.name, base)
        graph = descriptor.parser.parse(data, base)
        LOGGER.debug("Parsed %d statements", len(graph))
        return graph

    def parse_into(self, graph: Graph, data: bytes, format_name: str, base: str | None = None) -> Graph:
        """Parse and merge into ``graph``, renaming clashing blank nodes."""
        parsed = self.parse(data, format_name, base)
        renamed = {source: target for source, target in graph.merge(parsed).items() if source != target}
        if renamed:
            LOGGER.debug("Renamed %d blank nodes while merging", len(renamed))
        return graph


class SerializerDispatch:
    def __init__(self, registry: FormatRegistry) -> None:
        self.registry = registry

    def serialize(self, graph: Graph, format_name: str) -> bytes:
        descriptor = self.registry.lookup(format_name)
        if descriptor.serializer is None:
            raise NoSerializerForFormat(descriptor.name)
        LOGGER.debug("Serializing %d statements as %s", len(graph), descriptor.name)
        return descriptor.serializer.serialize(graph)


__all__ = ["ParserDispatch", "SerializerDispatch"]
