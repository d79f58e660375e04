"""Turtle and TriG writers.

Statements are grouped by subject (subjects in first-appearance order,
predicates in first-appearance order per subject, objects in statement
order). Nothing is dropped: repeated statements repeat their object.
Namespaces from WELL_KNOWN_PREFIXES are declared only when used.
"""

from __future__ import annotations

from ..formats.base import GraphSerializer
from ..model import BNode, Graph, IRI, Literal, Term
from .terms import RDF_TYPE, WELL_KNOWN_PREFIXES, compact_iri, encode_iri, escape_string


def group_by_subject(graph: Graph) -> dict[IRI | BNode, dict[IRI, list[Term]]]:
    grouped: dict[IRI | BNode, dict[IRI, list[Term]]] = {}
    for subject, predicate, obj in graph:
        grouped.setdefault(subject, {}).setdefault(predicate, []).append(obj)
    return grouped


def _iris_of(graph: Graph) -> list[str]:
    iris: list[str] = []
    for subject, predicate, obj in graph:
        if predicate.value != RDF_TYPE:
            iris.append(predicate.value)
        for term in (subject, obj):
            if isinstance(term, IRI):
                iris.append(term.value)
            elif isinstance(term, Literal) and term.datatype:
                iris.append(term.datatype)
    return iris


class TurtleSerializer(GraphSerializer):
    name = "turtle"

    def __init__(self, name: str = "turtle", prefixes: dict[str, str] | None = None) -> None:
        self.name = name
        self.prefixes = dict(WELL_KNOWN_PREFIXES if prefixes is None else prefixes)

    def _used_prefixes(self, graph: Graph) -> dict[str, str]:
        used: set[str] = set()
        for iri in _iris_of(graph):
            compacted = compact_iri(iri, self.prefixes)
            if compacted:
                used.add(compacted.split(":", 1)[0])
        return {prefix: ns for prefix, ns in self.prefixes.items() if prefix in used}

    def _term(self, term: Term, prefixes: dict[str, str]) -> str:
        if isinstance(term, IRI):
            return compact_iri(term.value, prefixes) or encode_iri(term.value)
        if isinstance(term, BNode):
            return f"_:{term.label}"
        text = f'"{escape_string(term.value)}"'
        if term.lang:
            return f"{text}@{term.lang}"
        if term.datatype:
            return f"{text}^^{compact_iri(term.datatype, prefixes) or encode_iri(term.datatype)}"
        return text

    def _subject_blocks(self, graph: Graph, prefixes: dict[str, str]) -> list[str]:
        blocks: list[str] = []
        for subject, predicates in group_by_subject(graph).items():
            parts: list[str] = []
            for predicate, objects in predicates.items():
                verb = "a" if predicate.value == RDF_TYPE else self._term(predicate, prefixes)
                parts.append(f"{verb} {', '.join(self._term(obj, prefixes) for obj in objects)}")
            blocks.append(f"{self._term(subject, prefixes)} " + " ;\n    ".join(parts) + " .")
        return blocks

    def _prefix_block(self, prefixes: dict[str, str]) -> list[str]:
        if not prefixes:
            return []
        return ["\n".join(f"@prefix {prefix}: <{ns}> ." for prefix, ns in prefixes.items())]

    def serialize(self, graph: Graph) -> bytes:
        prefixes = self._used_prefixes(graph)
        blocks = self._subject_blocks(graph, prefixes)
        if not blocks:
            return b""
        return ("\n\n".join(self._prefix_block(prefixes) + blocks) + "\n").encode("utf-8")


class TrigSerializer(TurtleSerializer):
    """TriG writer: the Turtle body, indented, inside one default graph block."""

    name = "trig"

    def __init__(self, name: str = "trig", prefixes: dict[str, str] | None = None) -> None:
        super().__init__(name, prefixes)

    def serialize(self, graph: Graph) -> bytes:
        prefixes = self._used_prefixes(graph)
        blocks = self._subject_blocks(graph, prefixes)
        if not blocks:
            return b""
        body = "\n".join(f"    {line}" if line else "" for line in "\n\n".join(blocks).split("\n"))
        return ("\n\n".join(self._prefix_block(prefixes) + [f"{{\n{body}\n}}"]) + "\n").encode("utf-8")


__all__ = ["TrigSerializer", "TurtleSerializer", "group_by_subject"]
