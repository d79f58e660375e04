"""Graph model invariants."""

from __future__ import annotations

import pytest

from rdfconv.model import BNode, Graph, IRI, Literal, Statement

EX = "http://example.org/"


def _stmt(subject: IRI | BNode, obj: IRI | BNode | Literal) -> Statement:
    return Statement(subject, IRI(f"{EX}p"), obj)


def test_literal_rejects_datatype_and_language() -> None:
    with pytest.raises(ValueError):
        Literal("chat", datatype="http://www.w3.org/2001/XMLSchema#string", lang="fr")


def test_statement_rejects_literal_subject() -> None:
    with pytest.raises(ValueError):
        Statement(Literal("x"), IRI(f"{EX}p"), IRI(f"{EX}o"))  # type: ignore[arg-type]


def test_statement_rejects_blank_predicate() -> None:
    with pytest.raises(ValueError):
        Statement(IRI(f"{EX}s"), BNode("p"), IRI(f"{EX}o"))  # type: ignore[arg-type]


def test_graph_keeps_order_and_duplicates() -> None:
    first = _stmt(IRI(f"{EX}a"), Literal("1"))
    second = _stmt(IRI(f"{EX}b"), Literal("2"))
    graph = Graph([first, second, first])
    assert graph.statements == (first, second, first)
    assert len(graph) == 3
    assert second in graph


def test_bnode_allocates_unused_labels() -> None:
    graph = Graph([_stmt(BNode("b"), BNode("b_1"))])
    assert graph.bnode().label == "b_2"
    assert graph.bnode("x").label == "x"
    assert graph.bnode("x").label == "x_1"


def test_merge_keeps_free_labels_and_renames_clashes() -> None:
    target = Graph([_stmt(BNode("b1"), Literal("target"))])
    other = Graph(
        [
            _stmt(BNode("b1"), Literal("other")),
            _stmt(BNode("b2"), BNode("b1")),
        ]
    )

    table = target.merge(other)

    assert table == {"b1": "b1_1", "b2": "b2"}
    subjects = [statement.subject for statement in target]
    assert subjects == [BNode("b1"), BNode("b1_1"), BNode("b2")]
    assert target.statements[2].object == BNode("b1_1")
    assert target.blank_labels == frozenset({"b1", "b1_1", "b2"})


def test_merge_leaves_source_graph_untouched() -> None:
    target = Graph([_stmt(BNode("n"), Literal("a"))])
    other = Graph([_stmt(BNode("n"), Literal("b"))])
    target.merge(other)
    assert other.statements == (_stmt(BNode("n"), Literal("b")),)


def test_merging_the_same_document_twice_gives_disjoint_nodes() -> None:
    document = Graph([_stmt(BNode("b0"), Literal("x"))])
    target = Graph()
    target.merge(document)
    target.merge(document)
    assert {statement.subject for statement in target} == {BNode("b0"), BNode("b0_1")}
