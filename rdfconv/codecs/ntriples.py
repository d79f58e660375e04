"""N-Triples and N-Quads codecs.

Parsing runs rdflib's line parser one line at a time so errors carry a line
and column. Both directions keep statements exactly in document order,
duplicates included, and keep blank node labels as written.
"""

from __future__ import annotations

import re

from rdflib.exceptions import ParserError
from rdflib.plugins.parsers.ntriples import W3CNTriplesParser, r_literal, r_tail, r_wspace

from ..errors import MalformedInput
from ..formats.base import GraphParser, GraphSerializer
from ..model import Graph, Statement
from .rdflib_bridge import from_rdflib, preserved_lexical_forms
from .terms import format_term_nt

_EOL = re.compile(r"\r\n|\r|\n")
_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")
_IRIREF = re.compile(r'<((?:[^\x00-\x20<>"{}|^`\\]|\\u[0-9A-Fa-f]{4}|\\U[0-9A-Fa-f]{8})*)>')
_BAD_ESCAPE = re.compile(r"""\\(?![tbnrf"'\\]|u[0-9A-Fa-f]{4}|U[0-9A-Fa-f]{8})""")


def decode_document(data: bytes, format_name: str) -> str:
    """Decode UTF-8 input, reporting the line of the first invalid byte."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as error:
        line = data[: error.start].count(b"\n") + 1
        raise MalformedInput(format_name, f"invalid UTF-8 byte at offset {error.start}", line=line) from error
    return text[1:] if text.startswith("\ufeff") else text


class _LabelsAsWritten(dict):
    """Blank node context handing every label back unchanged."""

    def get(self, key, default=None):  # type: ignore[no-untyped-def, override]
        return key


class _StatementSink:
    def __init__(self) -> None:
        self.statements: list[Statement] = []

    def triple(self, subject, predicate, obj) -> None:  # type: ignore[no-untyped-def]
        self.statements.append(Statement(from_rdflib(subject), from_rdflib(predicate), from_rdflib(obj)))


class _TripleLineParser(W3CNTriplesParser):
    """rdflib's N-Triples line parser with absolute IRIs and strict escapes enforced."""

    def uriref(self):  # type: ignore[no-untyped-def]
        if self.peek("<"):
            match = _IRIREF.match(self.line)
            if match is None:
                raise ParserError("invalid IRI")
            if not _SCHEME.match(match.group(1)):
                raise ParserError(f"IRI <{match.group(1)}> is not absolute")
        return super().uriref()

    def literal(self):  # type: ignore[no-untyped-def]
        match = r_literal.match(self.line) if self.peek('"') else None
        if match is not None and _BAD_ESCAPE.search(match.group(1)):
            raise ParserError("invalid escape sequence in string literal")
        return super().literal()


class _QuadLineParser(_TripleLineParser):
    def parseline(self, bnode_context=None) -> None:  # type: ignore[no-untyped-def]
        self.eat(r_wspace)
        if not self.line or self.line.startswith("#"):
            return
        subject = self.subject(bnode_context)
        self.eat(r_wspace)
        predicate = self.predicate()
        self.eat(r_wspace)
        obj = self.object(bnode_context)
        self.eat(r_wspace)
        # Named graph labels are read and dropped: the Graph holds one default graph.
        self.uriref() or self.nodeid(bnode_context)
        self.eat(r_tail)
        if self.line:
            raise ParserError(f"unexpected content after '.': {self.line}")
        self.sink.triple(subject, predicate, obj)


class NTriplesParser(GraphParser):
    name = "ntriples"
    line_parser: type[W3CNTriplesParser] = _TripleLineParser

    def parse(self, data: bytes, base: str | None = None) -> Graph:
        text = decode_document(data, self.name)
        sink = _StatementSink()
        parser = self.line_parser(sink=sink, bnode_context=_LabelsAsWritten())
        with preserved_lexical_forms():
            for number, line in enumerate(_EOL.split(text), start=1):
                parser.line = line
                try:
                    parser.parseline()
                except (ParserError, ValueError) as error:
                    column = len(line) - len(parser.line or "") + 1
                    raise MalformedInput(self.name, str(error), line=number, column=column) from error
        return Graph(sink.statements)


class NQuadsParser(NTriplesParser):
    name = "nquads"
    line_parser = _QuadLineParser


class NTriplesSerializer(GraphSerializer):
    name = "ntriples"

    def serialize(self, graph: Graph) -> bytes:
        lines = [f"{format_term_nt(s)} {format_term_nt(p)} {format_term_nt(o)} ." for s, p, o in graph]
        if not lines:
            return b""
        return ("\n".join(lines) + "\n").encode("utf-8")


class NQuadsSerializer(NTriplesSerializer):
    """Writes every statement into the default graph."""

    name = "nquads"


__all__ = [
    "NQuadsParser",
    "NQuadsSerializer",
    "NTriplesParser",
    "NTriplesSerializer",
    "decode_document",
]
