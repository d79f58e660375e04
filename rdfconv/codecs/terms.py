"""Term rendering helpers shared by the text serializers."""

from __future__ import annotations

import re

from rdflib.namespace import DCTERMS, FOAF, OWL, RDF, RDFS, SKOS, XSD

from ..model import BNode, IRI, Literal, Term

RDF_NS = str(RDF)
RDF_TYPE = str(RDF.type)

# Ordered: serializers emit prefix declarations in this order.
WELL_KNOWN_PREFIXES: dict[str, str] = {
    "rdf": RDF_NS,
    "rdfs": str(RDFS),
    "xsd": str(XSD),
    "owl": str(OWL),
    "foaf": str(FOAF),
    "dcterms": str(DCTERMS),
    "skos": str(SKOS),
    "schema": "https://schema.org/",
}

_LOCAL_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_IRI_FORBIDDEN = '<>"{}|^`\\'
_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\t": "\\t",
    "\b": "\\b",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
}


def escape_string(value: str) -> str:
    out: list[str] = []
    for ch in value:
        escaped = _STRING_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)


def encode_iri(value: str) -> str:
    out: list[str] = ["<"]
    for ch in value:
        cp = ord(ch)
        if ch in _IRI_FORBIDDEN or cp <= 0x20:
            out.append(f"\\u{cp:04X}" if cp <= 0xFFFF else f"\\U{cp:08X}")
        else:
            out.append(ch)
    out.append(">")
    return "".join(out)


def format_term_nt(term: Term) -> str:
    """Render a term in N-Triples syntax."""
    if isinstance(term, IRI):
        return encode_iri(term.value)
    if isinstance(term, BNode):
        return f"_:{term.label}"
    if isinstance(term, Literal):
        text = f'"{escape_string(term.value)}"'
        if term.lang:
            return f"{text}@{term.lang}"
        if term.datatype:
            return f"{text}^^{encode_iri(term.datatype)}"
        return text
    raise TypeError(f"unsupported term type: {type(term)!r}")


def compact_iri(iri: str, prefixes: dict[str, str]) -> str | None:
    """Return ``prefix:local`` when a namespace in ``prefixes`` covers ``iri``."""
    for prefix, namespace in prefixes.items():
        if iri.startswith(namespace):
            local = iri[len(namespace) :]
            if _LOCAL_NAME.match(local):
                return f"{prefix}:{local}"
    return None


__all__ = [
    "RDF_NS",
    "RDF_TYPE",
    "WELL_KNOWN_PREFIXES",
    "compact_iri",
    "encode_iri",
    "escape_string",
    "format_term_nt",
]
