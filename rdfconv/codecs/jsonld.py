"""JSON-LD writer producing expanded node objects under ``@graph``.

Node objects follow subject first-appearance order; property arrays keep
statement order and keep repeated values.
"""

from __future__ import annotations

from typing import Any

import orjson

from ..formats.base import GraphSerializer
from ..model import BNode, Graph, IRI, Term


def _node_id(term: IRI | BNode) -> str:
    return term.value if isinstance(term, IRI) else f"_:{term.label}"


def _value_object(term: Term) -> dict[str, str]:
    if isinstance(term, (IRI, BNode)):
        return {"@id": _node_id(term)}
    value: dict[str, str] = {"@value": term.value}
    if term.lang:
        value["@language"] = term.lang
    elif term.datatype:
        value["@type"] = term.datatype
    return value


class JsonLdSerializer(GraphSerializer):
    name = "jsonld"

    def serialize(self, graph: Graph) -> bytes:
        nodes: dict[str, dict[str, Any]] = {}
        for subject, predicate, obj in graph:
            key = _node_id(subject)
            node = nodes.setdefault(key, {"@id": key})
            node.setdefault(predicate.value, []).append(_value_object(obj))
        document = {"@graph": list(nodes.values())}
        return orjson.dumps(document, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)


__all__ = ["JsonLdSerializer"]
