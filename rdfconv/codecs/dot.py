"""GraphViz DOT writer: one edge per statement, in statement order."""

from __future__ import annotations

from ..formats.base import GraphSerializer
from ..model import BNode, Graph, IRI, Literal, Term
from .terms import WELL_KNOWN_PREFIXES, compact_iri


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n") + '"'


class DotSerializer(GraphSerializer):
    name = "dot"

    def _label(self, term: Term) -> str:
        if isinstance(term, IRI):
            return compact_iri(term.value, WELL_KNOWN_PREFIXES) or term.value
        if isinstance(term, BNode):
            return f"_:{term.label}"
        return term.value

    def serialize(self, graph: Graph) -> bytes:
        node_lines: list[str] = []
        edge_lines: list[str] = []
        resource_ids: dict[Term, str] = {}

        def _node(term: Term) -> str:
            if isinstance(term, Literal):
                # Literals are drawn once per occurrence.
                node_id = f"n{len(node_lines)}"
                node_lines.append(f"  {node_id} [label={_quote(self._label(term))}, shape=box];")
                return node_id
            node_id = resource_ids.get(term)
            if node_id is None:
                node_id = f"n{len(node_lines)}"
                resource_ids[term] = node_id
                shape = "ellipse" if isinstance(term, IRI) else "circle"
                node_lines.append(f"  {node_id} [label={_quote(self._label(term))}, shape={shape}];")
            return node_id

        for subject, predicate, obj in graph:
            source = _node(subject)
            target = _node(obj)
            edge_lines.append(f"  {source} -> {target} [label={_quote(self._label(predicate))}];")

        lines = ["digraph rdf {", "  rankdir=LR;", *node_lines, *edge_lines, "}"]
        return ("\n".join(lines) + "\n").encode("utf-8")


__all__ = ["DotSerializer"]
