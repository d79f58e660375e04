"""RDF/XML writer.

One ``rdf:Description`` per subject in first-appearance order; property
elements keep statement order and repeated statements are written again.
Blank nodes use ``rdf:nodeID``.
"""

from __future__ import annotations

import re
from xml.sax.saxutils import escape, quoteattr

from ..errors import UnserializableGraph
from ..formats.base import GraphSerializer
from ..model import BNode, Graph, IRI, Literal
from .terms import RDF_NS, WELL_KNOWN_PREFIXES
from .turtle import group_by_subject

_NCNAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")
_NCNAME_TAIL = re.compile(r"[A-Za-z_][A-Za-z0-9_.\-]*$")
_TEXT_ENTITIES = {"\r": "&#13;"}
# Code points XML 1.0 cannot carry, even as character references.
_XML_INVALID = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class _NodeIds:
    """Map blank node labels onto XML NCNames, one per label."""

    def __init__(self) -> None:
        self._ids: dict[str, str] = {}
        self._taken: set[str] = set()

    def __call__(self, node: BNode) -> str:
        node_id = self._ids.get(node.label)
        if node_id is None:
            candidate = node.label if _NCNAME.match(node.label) else f"_{node.label}"
            counter = 0
            node_id = candidate
            while node_id in self._taken or not _NCNAME.match(node_id):
                counter += 1
                node_id = f"b{counter}"
            self._ids[node.label] = node_id
            self._taken.add(node_id)
        return node_id


def check_xml_text(graph: Graph, format_name: str) -> None:
    """Raise UnserializableGraph if any term holds a character XML 1.0 forbids."""
    for statement in graph:
        for term in statement:
            texts = [term.label] if isinstance(term, BNode) else [term.value]
            if isinstance(term, Literal) and term.datatype:
                texts.append(term.datatype)
            for text in texts:
                match = _XML_INVALID.search(text)
                if match is not None:
                    raise UnserializableGraph(
                        format_name, f"character U+{ord(match.group(0)):04X} in {text!r} cannot be written as XML"
                    )


def split_predicate(iri: str) -> tuple[str, str] | None:
    """Split an IRI into namespace and an NCName local part."""
    match = _NCNAME_TAIL.search(iri)
    if match is None:
        return None
    local = match.group(0)
    return iri[: match.start()], local


class RdfXmlSerializer(GraphSerializer):
    name = "rdfxml"

    def _namespaces(self, graph: Graph) -> dict[str, str]:
        namespaces: dict[str, str] = {RDF_NS: "rdf"}
        known = {ns: prefix for prefix, ns in WELL_KNOWN_PREFIXES.items()}
        for statement in graph:
            iri = statement.predicate.value
            parts = split_predicate(iri)
            if parts is None or not parts[0]:
                raise UnserializableGraph(self.name, f"predicate <{iri}> has no XML local name")
            namespace = parts[0]
            if namespace not in namespaces:
                prefix = known.get(namespace)
                if prefix is None or prefix in namespaces.values():
                    prefix = f"ns{len(namespaces)}"
                namespaces[namespace] = prefix
        return namespaces

    def serialize(self, graph: Graph) -> bytes:
        check_xml_text(graph, self.name)
        namespaces = self._namespaces(graph)
        node_ids = _NodeIds()
        declarations = "\n".join(f"   xmlns:{prefix}={quoteattr(ns)}" for ns, prefix in namespaces.items())
        lines = ['<?xml version="1.0" encoding="utf-8"?>', f"<rdf:RDF\n{declarations}>"]

        for subject, predicates in group_by_subject(graph).items():
            if isinstance(subject, BNode):
                lines.append(f"  <rdf:Description rdf:nodeID={quoteattr(node_ids(subject))}>")
            else:
                lines.append(f"  <rdf:Description rdf:about={quoteattr(subject.value)}>")
            for predicate, objects in predicates.items():
                namespace, local = split_predicate(predicate.value)
                tag = f"{namespaces[namespace]}:{local}"
                for obj in objects:
                    if isinstance(obj, IRI):
                        lines.append(f"    <{tag} rdf:resource={quoteattr(obj.value)}/>")
                    elif isinstance(obj, BNode):
                        lines.append(f"    <{tag} rdf:nodeID={quoteattr(node_ids(obj))}/>")
                    elif isinstance(obj, Literal):
                        attributes = ""
                        if obj.lang:
                            attributes = f" xml:lang={quoteattr(obj.lang)}"
                        elif obj.datatype:
                            attributes = f" rdf:datatype={quoteattr(obj.datatype)}"
                        lines.append(f"    <{tag}{attributes}>{escape(obj.value, _TEXT_ENTITIES)}</{tag}>")
            lines.append("  </rdf:Description>")

        lines.append("</rdf:RDF>")
        return ("\n".join(lines) + "\n").encode("utf-8")


__all__ = ["RdfXmlSerializer", "check_xml_text", "split_predicate"]
