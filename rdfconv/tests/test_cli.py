"""End-to-end tests for the rdfconv command line."""

from __future__ import annotations

from pathlib import Path

import orjson
import pytest
from typer.testing import CliRunner

from rdfconv.cli import app

DATA = Path(__file__).resolve().parent / "data"
PEOPLE_TTL = DATA / "people.ttl"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def test_convert_file_to_ntriples(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", str(PEOPLE_TTL), "--to", "ntriples"])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    lines = result.stdout.splitlines()
    assert len(lines) == 8
    assert '<http://example.org/alice> <http://xmlns.com/foaf/0.1/name> "Alice" .' in lines
    assert '_:b0 <http://xmlns.com/foaf/0.1/name> "Carol"@en .' in lines


def test_default_output_is_jsonld(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", str(DATA / "people.nt")])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    document = orjson.loads(result.stdout)
    assert [node["@id"] for node in document["@graph"]] == ["http://example.org/alice", "_:carol"]


def test_convert_from_stdin(runner: CliRunner) -> None:
    result = runner.invoke(
        app,
        ["convert", "--from", "turtle", "--to", "ntriples"],
        input=PEOPLE_TTL.read_bytes(),
    )
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert "<http://example.org/bob>" in result.stdout


def test_guess_from_stdin_content(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", "--to", "turtle"], input=(DATA / "people.jsonld").read_bytes())
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert "a foaf:Person" in result.stdout


def test_relative_iris_resolve_against_input_file(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", str(DATA / "people.rdf"), "--to", "ntriples"])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    expected = (DATA / "relative" / "bob").resolve().as_uri()
    assert f"<{expected}>" in result.stdout


def test_multiple_inputs_merge(runner: CliRunner) -> None:
    result = runner.invoke(
        app,
        ["convert", str(DATA / "people.nt"), str(DATA / "people.nt"), "--to", "ntriples"],
    )
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    lines = result.stdout.splitlines()
    assert len(lines) == 10
    assert any(line.startswith("_:carol_1 ") for line in lines)


def test_output_file(runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "out" / "people.xml"
    result = runner.invoke(app, ["convert", str(PEOPLE_TTL), "--to", "rdfxml", "-o", str(target)])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert result.stdout == ""
    text = target.read_text(encoding="utf-8")
    assert text.startswith('<?xml version="1.0" encoding="utf-8"?>')
    assert list(target.parent.iterdir()) == [target]


def test_unknown_output_format(runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "never.txt"
    result = runner.invoke(app, ["convert", str(PEOPLE_TTL), "--to", "yaml", "-o", str(target)])
    assert result.exit_code == 1
    assert "UnknownFormat" in result.output
    assert not target.exists()


def test_missing_input_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["convert", str(tmp_path / "missing.ttl"), "--to", "ntriples"])
    assert result.exit_code == 1
    assert "SourceUnreadable" in result.output


def test_unguessable_stdin(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", "--to", "ntriples"], input=b"plain prose, no triples here")
    assert result.exit_code == 1
    assert "FormatGuessFailed" in result.output


def test_malformed_input_reports_position(runner: CliRunner) -> None:
    result = runner.invoke(
        app,
        ["convert", "--from", "ntriples", "--to", "turtle"],
        input=b"<http://example.org/a> <http://example.org/b> .\n",
    )
    assert result.exit_code == 1
    assert "MalformedInput: ntriples: line 1, column 47" in result.output


def test_php_export(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", str(DATA / "people.nt"), "--to", "php"])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert result.stdout.startswith("<?php\nreturn [\n    'http://example.org/alice' => [\n")
    assert "'type' => 'literal'," in result.stdout
    assert result.stdout.endswith("];\n")


def test_python_export(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", str(DATA / "people.nt"), "--to", "py"])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert result.stdout.startswith("DATA = {")
    assert "'http://example.org/alice'" in result.stdout


def test_config_file_supplies_defaults(runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "rdfconv.yaml"
    config.write_text(f"inputs:\n  - \"{PEOPLE_TTL}\"\nto_format: ntriples\n", encoding="utf-8")
    result = runner.invoke(app, ["convert", "--config", str(config)])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert len(result.stdout.splitlines()) == 8

    overridden = runner.invoke(app, ["convert", "--config", str(config), "--to", "dot"])
    assert overridden.exit_code == 0, f"CLI failed: {overridden.output}"
    assert overridden.stdout.startswith("digraph rdf {")


def test_invalid_config_file(runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "bad.yaml"
    config.write_text("sniff_bytes: 0\n", encoding="utf-8")
    result = runner.invoke(app, ["convert", "--config", str(config)])
    assert result.exit_code == 2


def test_convert_help_lists_formats(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", "--help"])
    assert result.exit_code == 0
    assert "Supported input formats" in result.output
    assert "dot" in result.output


def test_formats_command(runner: CliRunner) -> None:
    result = runner.invoke(app, ["formats"])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    for name in ("jsonld", "turtle", "rdfxml", "dot"):
        assert name in result.stdout


def test_unwritable_output_reports_error(runner: CliRunner, tmp_path: Path) -> None:
    blocker = tmp_path / "taken"
    blocker.write_text("not a directory", encoding="utf-8")
    result = runner.invoke(app, ["convert", str(PEOPLE_TTL), "--to", "ntriples", "-o", str(blocker / "out.nt")])
    assert result.exit_code == 1
    assert "OutputUnwritable: Unable to write" in result.output
    assert blocker.read_text(encoding="utf-8") == "not a directory"


def test_log_level_is_case_insensitive(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", str(PEOPLE_TTL), "--to", "ntriples", "--log-level", "error"])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert len(result.stdout.splitlines()) == 8


def test_unknown_log_level_is_rejected(runner: CliRunner) -> None:
    result = runner.invoke(app, ["convert", str(PEOPLE_TTL), "--to", "ntriples", "--log-level", "LOUD"])
    assert result.exit_code == 2
