"""The built-in format catalog and the process-wide registry."""

from __future__ import annotations

from functools import lru_cache

from ..codecs.dot import DotSerializer
from ..codecs.jsonld import JsonLdSerializer
from ..codecs.ntriples import NQuadsParser, NQuadsSerializer, NTriplesParser, NTriplesSerializer
from ..codecs.rdfjson import RdfJsonParser, RdfJsonSerializer
from ..codecs.rdflib_bridge import RdflibParser, RdflibSerializer
from ..codecs.rdfxml import RdfXmlSerializer
from ..codecs.turtle import TrigSerializer, TurtleSerializer
from .registry import FormatDescriptor, FormatRegistry


def builtin_formats() -> list[FormatDescriptor]:
    """Descriptors in registration order; the order drives help listings."""
    return [
        FormatDescriptor(
            name="jsonld",
            label="JSON-LD",
            mime_types=("application/ld+json",),
            extensions=("jsonld",),
            parser=RdflibParser("jsonld", "json-ld", allow_empty=False),
            serializer=JsonLdSerializer(),
        ),
        FormatDescriptor(
            name="json",
            label="RDF/JSON Resource-Centric",
            mime_types=("application/json", "text/json", "application/rdf+json"),
            extensions=("json",),
            parser=RdfJsonParser(),
            serializer=RdfJsonSerializer(),
        ),
        FormatDescriptor(
            name="ntriples",
            label="N-Triples",
            mime_types=("application/n-triples", "text/ntriples", "application/ntriples", "application/x-ntriples"),
            extensions=("nt",),
            parser=NTriplesParser(),
            serializer=NTriplesSerializer(),
        ),
        FormatDescriptor(
            name="nquads",
            label="N-Quads",
            mime_types=("application/n-quads", "text/x-nquads"),
            extensions=("nq",),
            parser=NQuadsParser(),
            serializer=NQuadsSerializer(),
        ),
        FormatDescriptor(
            name="turtle",
            label="Turtle Terse RDF Triple Language",
            mime_types=("text/turtle", "application/turtle", "application/x-turtle"),
            extensions=("ttl",),
            parser=RdflibParser("turtle", "turtle"),
            serializer=TurtleSerializer(),
        ),
        FormatDescriptor(
            name="n3",
            label="Notation3",
            mime_types=("text/n3", "text/rdf+n3"),
            extensions=("n3",),
            parser=RdflibParser("n3", "n3"),
            serializer=TurtleSerializer("n3"),
        ),
        FormatDescriptor(
            name="rdfxml",
            label="RDF/XML",
            mime_types=("application/rdf+xml", "text/rdf"),
            extensions=("rdf", "xrdf", "owl"),
            parser=RdflibParser("rdfxml", "xml", allow_empty=False),
            serializer=RdfXmlSerializer(),
        ),
        FormatDescriptor(
            name="trig",
            label="TriG",
            mime_types=("application/trig",),
            extensions=("trig",),
            parser=RdflibParser("trig", "trig"),
            serializer=TrigSerializer(),
        ),
        FormatDescriptor(
            name="trix",
            label="TriX",
            mime_types=("application/trix",),
            extensions=("trix",),
            parser=RdflibParser("trix", "trix", allow_empty=False),
            serializer=RdflibSerializer("trix", "trix", xml=True),
        ),
        FormatDescriptor(
            name="dot",
            label="Graphviz",
            mime_types=("text/vnd.graphviz",),
            extensions=("gv", "dot"),
            serializer=DotSerializer(),
        ),
    ]


def build_registry() -> FormatRegistry:
    registry = FormatRegistry()
    for descriptor in builtin_formats():
        registry.register(descriptor)
    return registry.freeze()


@lru_cache(maxsize=None)
def default_registry() -> FormatRegistry:
    """Process-wide registry, built once and frozen."""
    return build_registry()


__all__ = ["build_registry", "builtin_formats", "default_registry"]
