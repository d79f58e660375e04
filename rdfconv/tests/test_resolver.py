"""Format resolution: explicit hints, content types, extensions and sniffing."""

from __future__ import annotations

import pytest

from rdfconv.codecs.ntriples import NTriplesParser
from rdfconv.errors import FormatGuessFailed, NoParserForFormat, NoSerializerForFormat, UnknownFormat
from rdfconv.formats.builtin import default_registry
from rdfconv.formats.registry import FormatDescriptor, FormatRegistry
from rdfconv.formats.resolver import FormatResolver, sniff_format


@pytest.fixture()
def resolver() -> FormatResolver:
    return FormatResolver(default_registry())


@pytest.mark.parametrize(
    ("head", "expected"),
    [
        (b'{"@context": {}, "@id": "http://example.org/a"}', "jsonld"),
        (b'  [{"@id": "http://example.org/a"}]', "jsonld"),
        (b'{"http://example.org/a": {}}', "json"),
        (b'<?xml version="1.0"?>\n<rdf:RDF/>', "rdfxml"),
        (b'<?xml version="1.0"?>\n<TriX xmlns="http://www.w3.org/2004/03/trix/trix-1/"/>', "trix"),
        (b'<TriX xmlns="http://www.w3.org/2004/03/trix/trix-1/"><graph/></TriX>', "trix"),
        (b'<?xml version="1.0"?>\n<!-- see <TriX> -->\n<rdf:RDF/>', "rdfxml"),
        (b'<http://e.org/a> <http://e.org/p> "see <TriX> docs" .\n', "ntriples"),
        (b"\xef\xbb\xbf@prefix ex: <http://example.org/> .", "turtle"),
        (b"PREFIX ex: <http://example.org/>\nex:a ex:b ex:c .", "turtle"),
        (b"<http://example.org/a> <http://example.org/b> \"c\" .\n", "ntriples"),
        (b"_:x <http://example.org/b> _:y .\n", "ntriples"),
        (b"hello world", None),
        (b"   ", None),
    ],
)
def test_sniff_format(head: bytes, expected: str | None) -> None:
    assert sniff_format(head) == expected


def test_explicit_hint_wins_over_everything(resolver: FormatResolver) -> None:
    name = resolver.resolve_for_parse("Turtle", "data.rdf", b'{"@context": {}}', "application/ld+json")
    assert name == "turtle"


def test_hint_may_be_a_mime_type(resolver: FormatResolver) -> None:
    assert resolver.resolve_for_parse("application/n-triples") == "ntriples"


def test_unknown_hint(resolver: FormatResolver) -> None:
    with pytest.raises(UnknownFormat):
        resolver.resolve_for_parse("yaml", None, b"<http://a> <http://b> <http://c> .")


def test_hint_without_parser(resolver: FormatResolver) -> None:
    with pytest.raises(NoParserForFormat):
        resolver.resolve_for_parse("dot")


def test_guess_hint_falls_through(resolver: FormatResolver) -> None:
    assert resolver.resolve_for_parse("guess", "people.ttl") == "turtle"


def test_content_type_before_extension(resolver: FormatResolver) -> None:
    name = resolver.resolve_for_parse(None, "http://example.org/data.ttl", None, "application/rdf+xml; charset=utf-8")
    assert name == "rdfxml"


def test_extension_from_path_and_url(resolver: FormatResolver) -> None:
    assert resolver.resolve_for_parse(None, "dir/people.NT") == "ntriples"
    assert resolver.resolve_for_parse(None, "http://example.org/onto.owl?version=2#top") == "rdfxml"


def test_extension_without_parser_falls_back_to_sniffing(resolver: FormatResolver) -> None:
    name = resolver.resolve_for_parse(None, "graph.dot", b"@prefix ex: <http://example.org/> .")
    assert name == "turtle"


def test_sniffing_respects_limit() -> None:
    resolver = FormatResolver(default_registry(), sniff_limit=8)
    with pytest.raises(FormatGuessFailed):
        resolver.resolve_for_parse(None, None, b"        @prefix ex: <http://example.org/> .")


def test_guess_failed_names_source(resolver: FormatResolver) -> None:
    with pytest.raises(FormatGuessFailed) as excinfo:
        resolver.resolve_for_parse(None, "notes.txt", b"just some prose")
    assert "notes.txt" in str(excinfo.value)


def test_resolve_for_serialize(resolver: FormatResolver) -> None:
    assert resolver.resolve_for_serialize("DOT") == "dot"
    assert resolver.resolve_for_serialize("text/turtle") == "turtle"
    with pytest.raises(UnknownFormat):
        resolver.resolve_for_serialize("guess")


def test_resolve_for_serialize_without_serializer() -> None:
    registry = FormatRegistry()
    registry.register(FormatDescriptor(name="readonly", label="Read only", parser=NTriplesParser()))
    with pytest.raises(NoSerializerForFormat):
        FormatResolver(registry.freeze()).resolve_for_serialize("readonly")
