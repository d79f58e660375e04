"""In-memory statement graph shared by every parser and serializer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Union


@dataclass(frozen=True, slots=True)
class IRI:
    value: str


@dataclass(frozen=True, slots=True)
class BNode:
    """Blank node; the label is only meaningful inside one Graph."""

    label: str


@dataclass(frozen=True, slots=True)
class Literal:
    value: str
    datatype: str | None = None
    lang: str | None = None

    def __post_init__(self) -> None:
        if self.datatype is not None and self.lang is not None:
            raise ValueError("A literal cannot carry both a datatype and a language tag")


Term = Union[IRI, BNode, Literal]


@dataclass(frozen=True, slots=True)
class Statement:
    subject: IRI | BNode
    predicate: IRI
    object: Term

    def __post_init__(self) -> None:
        if not isinstance(self.subject, (IRI, BNode)):
            raise ValueError(f"Statement subject must be an IRI or blank node, got {self.subject!r}")
        if not isinstance(self.predicate, IRI):
            raise ValueError(f"Statement predicate must be an IRI, got {self.predicate!r}")
        if not isinstance(self.object, (IRI, BNode, Literal)):
            raise ValueError(f"Statement object must be an RDF term, got {self.object!r}")

    def __iter__(self) -> Iterator[Term]:
        return iter((self.subject, self.predicate, self.object))


class Graph:
    """Insertion-ordered list of statements; duplicates are kept."""

    def __init__(self, statements: Iterable[Statement] = ()) -> None:
        self._statements: list[Statement] = []
        self._blank_labels: set[str] = set()
        for statement in statements:
            self.add(statement)

    def add(self, statement: Statement) -> None:
        for term in (statement.subject, statement.object):
            if isinstance(term, BNode):
                self._blank_labels.add(term.label)
        self._statements.append(statement)

    def __len__(self) -> int:
        return len(self._statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self._statements)

    def __contains__(self, statement: object) -> bool:
        return statement in self._statements

    def __repr__(self) -> str:
        return f"<Graph statements={len(self._statements)} blank_nodes={len(self._blank_labels)}>"

    @property
    def statements(self) -> tuple[Statement, ...]:
        return tuple(self._statements)

    @property
    def blank_labels(self) -> frozenset[str]:
        return frozenset(self._blank_labels)

    def bnode(self, hint: str = "b") -> BNode:
        """Return a blank node whose label is not used in this graph yet."""
        label = self._fresh_label(hint)
        self._blank_labels.add(label)
        return BNode(label)

    def _fresh_label(self, hint: str) -> str:
        if hint not in self._blank_labels:
            return hint
        counter = 1
        while f"{hint}_{counter}" in self._blank_labels:
            counter += 1
        return f"{hint}_{counter}"

    def merge(self, other: Graph) -> dict[str, str]:
        """Append ``other`` into this graph without aliasing blank nodes.

        Every blank node label of ``other`` goes through one substitution
        table: labels this graph has never used are kept, labels already in
        use are replaced by a fresh one. The table is returned.
        """
        table: dict[str, str] = {}

        def _rename(term: Term) -> Term:
            if not isinstance(term, BNode):
                return term
            label = table.get(term.label)
            if label is None:
                label = self.bnode(term.label).label
                table[term.label] = label
            return BNode(label)

        for statement in list(other):
            self.add(Statement(_rename(statement.subject), statement.predicate, _rename(statement.object)))
        return table


__all__ = ["BNode", "Graph", "IRI", "Literal", "Statement", "Term"]
