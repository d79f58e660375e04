"""Codecs delegating to rdflib's parser and serializer plugins."""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Iterator
from xml.sax import SAXParseException

import rdflib
from rdflib import BNode as RdfBNode
from rdflib import Dataset
from rdflib import Graph as RdfGraph
from rdflib import Literal as RdfLiteral
from rdflib import URIRef
from rdflib.plugins.stores.memory import Memory
from rdflib.term import Node

from ..errors import MalformedInput
from ..formats.base import GraphParser, GraphSerializer
from ..model import BNode, Graph, IRI, Literal, Statement, Term
from .rdfxml import check_xml_text


class RecordingStore(Memory):
    """Memory store that also keeps every asserted triple in arrival order.

    rdflib graphs are sets; the recording keeps document order and repeats.
    Triples inside N3 formulae (``quoted=True``) are not asserted and are skipped.
    """

    def __init__(self) -> None:
        super().__init__()
        self.recorded: list[tuple[Node, Node, Node]] = []

    def add(self, triple, context, quoted=False):  # type: ignore[no-untyped-def, override]
        if not quoted:
            self.recorded.append(triple)
        super().add(triple, context, quoted=quoted)


@contextmanager
def preserved_lexical_forms() -> Iterator[None]:
    """Keep rdflib from canonicalizing literals (``"01"^^xsd:integer`` stays ``01``)."""
    previous = rdflib.NORMALIZE_LITERALS
    rdflib.NORMALIZE_LITERALS = False
    try:
        yield
    finally:
        rdflib.NORMALIZE_LITERALS = previous


def _error_position(error: Exception) -> tuple[int | None, int | None]:
    if isinstance(error, SAXParseException):
        return error.getLineNumber(), error.getColumnNumber()
    lineno = getattr(error, "lineno", None)
    if isinstance(lineno, int):
        colno = getattr(error, "colno", None)
        return lineno, colno if isinstance(colno, int) else None
    # notation3.BadSyntax counts lines from zero
    lines = getattr(error, "lines", None)
    if isinstance(lines, int):
        return lines + 1, None
    return None, None


def to_rdflib(term: Term) -> Node:
    if isinstance(term, IRI):
        return URIRef(term.value)
    if isinstance(term, BNode):
        return RdfBNode(term.label)
    datatype = URIRef(term.datatype) if term.datatype else None
    return RdfLiteral(term.value, lang=term.lang, datatype=datatype, normalize=False)


def from_rdflib(node: Node, labels: dict[str, str] | None = None) -> Term:
    """Convert an rdflib term.

    With ``labels``, blank nodes are renamed ``b0``, ``b1``, ... through that
    mapping; without it they keep the label rdflib holds.
    """
    if isinstance(node, URIRef):
        return IRI(str(node))
    if isinstance(node, RdfBNode):
        label = str(node)
        return BNode(label if labels is None else labels.setdefault(label, f"b{len(labels)}"))
    if isinstance(node, RdfLiteral):
        datatype = str(node.datatype) if node.datatype is not None else None
        return Literal(str(node), datatype=datatype, lang=node.language)
    raise TypeError(f"unsupported term {type(node).__name__} ({node})")


class RdflibParser(GraphParser):
    """Parse with an rdflib plugin, keeping statement order and duplicates.

    rdflib mints random blank node ids; they are relabelled ``b0``, ``b1``, ...
    in order of first appearance so repeated conversions are identical.
    Literals keep their lexical form as written.
    """

    def __init__(self, name: str, rdflib_format: str, *, allow_empty: bool = True) -> None:
        self.name = name
        self.rdflib_format = rdflib_format
        self.allow_empty = allow_empty

    def parse(self, data: bytes, base: str | None = None) -> Graph:
        if self.allow_empty and not data.strip():
            return Graph()
        store = RecordingStore()
        sink = RdfGraph(store=store)
        with preserved_lexical_forms():
            try:
                sink.parse(data=data, format=self.rdflib_format, publicID=base)
            except Exception as error:  # noqa: BLE001 - rdflib plugins raise many unrelated exception types
                line, column = _error_position(error)
                message = error.msg if isinstance(error, json.JSONDecodeError) else str(error)
                raise MalformedInput(self.name, message or type(error).__name__, line=line, column=column) from error

        graph = Graph()
        labels: dict[str, str] = {}
        for triple in store.recorded:
            try:
                graph.add(Statement(*(from_rdflib(node, labels) for node in triple)))
            except (TypeError, ValueError) as error:
                raise MalformedInput(self.name, str(error)) from error
        return graph


class RdflibSerializer(GraphSerializer):
    """Serialize the default graph of an rdflib Dataset; rdflib set semantics apply (duplicates collapse)."""

    def __init__(self, name: str, rdflib_format: str, *, xml: bool = False) -> None:
        self.name = name
        self.rdflib_format = rdflib_format
        self.xml = xml

    def serialize(self, graph: Graph) -> bytes:
        if self.xml:
            check_xml_text(graph, self.name)
        sink = Dataset()
        for statement in graph:
            sink.add(tuple(to_rdflib(term) for term in statement))
        return sink.serialize(format=self.rdflib_format, encoding="utf-8")


__all__ = [
    "RdflibParser",
    "RdflibSerializer",
    "RecordingStore",
    "from_rdflib",
    "preserved_lexical_forms",
    "to_rdflib",
]
