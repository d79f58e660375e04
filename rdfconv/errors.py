"""Error kinds raised by the conversion core and its collaborators."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for every failure surfaced to the caller."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class UnknownFormat(ConversionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown format '{name}'")
        self.name = name


class DuplicateFormat(ConversionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Format '{name}' is already registered")
        self.name = name


class NoParserForFormat(ConversionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Format '{name}' cannot be parsed")
        self.name = name


class NoSerializerForFormat(ConversionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Format '{name}' cannot be serialized")
        self.name = name


class FormatGuessFailed(ConversionError):
    def __init__(self, source_name: str | None = None) -> None:
        where = f" for '{source_name}'" if source_name else ""
        super().__init__(f"Unable to guess input format{where}; pass an explicit format")
        self.source_name = source_name


class MalformedInput(ConversionError):
    """Syntax error found by a concrete parser."""

    def __init__(
        self,
        format_name: str,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.format_name = format_name
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{format_name}: {self.position + ': ' if self.position else ''}{message}")

    @property
    def position(self) -> str:
        if self.line is None:
            return ""
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line}, column {self.column}"


class UnserializableGraph(ConversionError):
    def __init__(self, format_name: str, message: str) -> None:
        super().__init__(f"{format_name}: {message}")
        self.format_name = format_name


class SourceUnreadable(ConversionError):
    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Unable to read '{source}': {reason}")
        self.source = source


class OutputUnwritable(ConversionError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unable to write '{path}': {reason}")
        self.path = path


__all__ = [
    "ConversionError",
    "DuplicateFormat",
    "FormatGuessFailed",
    "MalformedInput",
    "NoParserForFormat",
    "NoSerializerForFormat",
    "OutputUnwritable",
    "SourceUnreadable",
    "UnknownFormat",
    "UnserializableGraph",
]
