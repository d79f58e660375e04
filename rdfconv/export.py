"""Literal-data export: embed a serialized graph as a source-code literal.

This is a post-processing step over serializer output, not an RDF format.
The graph is serialized as RDF/JSON and the decoded structure is rendered as
a PHP or Python literal that can be loaded without any RDF parsing.
"""

from __future__ import annotations

import pprint
from dataclasses import dataclass
from typing import Any, Callable

import orjson

_INDENT = "    "


def _php_string(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def php_literal(value: Any, depth: int = 0) -> str:
    if isinstance(value, dict):
        if not value:
            return "[]"
        pad = _INDENT * (depth + 1)
        items = [f"{pad}{_php_string(str(key))} => {php_literal(item, depth + 1)}," for key, item in value.items()]
        return "[\n" + "\n".join(items) + "\n" + _INDENT * depth + "]"
    if isinstance(value, list):
        if not value:
            return "[]"
        pad = _INDENT * (depth + 1)
        items = [f"{pad}{php_literal(item, depth + 1)}," for item in value]
        return "[\n" + "\n".join(items) + "\n" + _INDENT * depth + "]"
    if isinstance(value, str):
        return _php_string(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    raise TypeError(f"cannot export {type(value).__name__} as a PHP literal")


def render_php(serialized: bytes) -> bytes:
    structure = orjson.loads(serialized)
    return f"<?php\nreturn {php_literal(structure)};\n".encode("utf-8")


def render_python(serialized: bytes) -> bytes:
    structure = orjson.loads(serialized)
    return f"DATA = {pprint.pformat(structure, sort_dicts=False, width=100)}\n".encode("utf-8")


@dataclass(frozen=True, slots=True)
class LiteralExport:
    alias: str
    base_format: str
    render: Callable[[bytes], bytes]


LITERAL_EXPORTS: dict[str, LiteralExport] = {
    "php": LiteralExport("php", "json", render_php),
    "py": LiteralExport("py", "json", render_python),
}


def literal_export_for(requested: str) -> LiteralExport | None:
    return LITERAL_EXPORTS.get(requested.strip().lower())


__all__ = ["LITERAL_EXPORTS", "LiteralExport", "literal_export_for", "php_literal", "render_php", "render_python"]
