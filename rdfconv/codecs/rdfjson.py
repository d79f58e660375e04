"""RDF/JSON codec.

Resource-centric JSON: ``{subject: {predicate: [value, ...]}}`` where each
value is ``{"type": "uri"|"bnode"|"literal", "value": ..., "lang"?, "datatype"?}``
and blank nodes are written ``_:label``.
"""

from __future__ import annotations

from typing import Any

import orjson

from ..errors import MalformedInput
from ..formats.base import GraphParser, GraphSerializer
from ..model import BNode, Graph, IRI, Literal, Statement, Term
from .turtle import group_by_subject


def _resource_key(term: IRI | BNode) -> str:
    return term.value if isinstance(term, IRI) else f"_:{term.label}"


def _value(term: Term) -> dict[str, str]:
    if isinstance(term, IRI):
        return {"type": "uri", "value": term.value}
    if isinstance(term, BNode):
        return {"type": "bnode", "value": f"_:{term.label}"}
    value = {"type": "literal", "value": term.value}
    if term.lang:
        value["lang"] = term.lang
    elif term.datatype:
        value["datatype"] = term.datatype
    return value


def graph_to_rdfjson(graph: Graph) -> dict[str, dict[str, list[dict[str, str]]]]:
    return {
        _resource_key(subject): {
            predicate.value: [_value(obj) for obj in objects] for predicate, objects in predicates.items()
        }
        for subject, predicates in group_by_subject(graph).items()
    }


class RdfJsonParser(GraphParser):
    name = "json"

    def _fail(self, message: str) -> MalformedInput:
        return MalformedInput(self.name, message)

    def _bnode(self, value: str, where: str) -> BNode:
        if not value[2:]:
            raise self._fail(f"{where}: blank node label is empty")
        return BNode(value[2:])

    def _resource(self, key: str) -> IRI | BNode:
        return self._bnode(key, key) if key.startswith("_:") else IRI(key)

    def _term(self, raw: Any, where: str) -> Term:
        if not isinstance(raw, dict):
            raise self._fail(f"{where}: value must be an object")
        kind = raw.get("type")
        value = raw.get("value")
        if not isinstance(value, str):
            raise self._fail(f"{where}: 'value' must be a string")
        if kind == "uri":
            return IRI(value)
        if kind == "bnode":
            if not value.startswith("_:"):
                raise self._fail(f"{where}: blank node values must start with '_:'")
            return self._bnode(value, where)
        if kind == "literal":
            lang = raw.get("lang")
            datatype = raw.get("datatype")
            if lang is not None and datatype is not None:
                raise self._fail(f"{where}: a literal cannot have both 'lang' and 'datatype'")
            if not isinstance(lang or "", str) or not isinstance(datatype or "", str):
                raise self._fail(f"{where}: 'lang' and 'datatype' must be strings")
            return Literal(value, datatype=datatype, lang=lang)
        raise self._fail(f"{where}: unknown value type {kind!r}")

    def parse(self, data: bytes, base: str | None = None) -> Graph:
        try:
            document = orjson.loads(data)
        except orjson.JSONDecodeError as error:
            raise MalformedInput(self.name, error.msg, line=error.lineno, column=error.colno) from error
        if not isinstance(document, dict):
            raise self._fail("top-level value must be an object")
        graph = Graph()
        for subject_key, predicates in document.items():
            if not isinstance(predicates, dict):
                raise self._fail(f"{subject_key}: predicates must be an object")
            subject = self._resource(subject_key)
            for predicate_key, values in predicates.items():
                if not isinstance(values, list):
                    raise self._fail(f"{subject_key} {predicate_key}: values must be an array")
                for index, raw in enumerate(values):
                    where = f"{subject_key} {predicate_key}[{index}]"
                    graph.add(Statement(subject, IRI(predicate_key), self._term(raw, where)))
        return graph


class RdfJsonSerializer(GraphSerializer):
    name = "json"

    def serialize(self, graph: Graph) -> bytes:
        return orjson.dumps(graph_to_rdfjson(graph), option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)


__all__ = ["RdfJsonParser", "RdfJsonSerializer", "graph_to_rdfjson"]
