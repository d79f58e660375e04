"""Capability interfaces implemented by concrete format codecs."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import Graph


class GraphParser(ABC):
    """Turn a complete byte document into a new Graph."""

    name: str

    @abstractmethod
    def parse(self, data: bytes, base: str | None = None) -> Graph:
        """Parse ``data``; ``base`` resolves relative IRIs where the syntax allows them."""


class GraphSerializer(ABC):
    """Render a Graph into a complete byte document."""

    name: str

    @abstractmethod
    def serialize(self, graph: Graph) -> bytes:
        """Return the serialized graph."""


__all__ = ["GraphParser", "GraphSerializer"]
