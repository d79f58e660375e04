"""Acquire raw input bytes from stdin, a URL or a local file."""

from __future__ import annotations

import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO
from urllib.error import URLError

from .errors import SourceUnreadable
from .formats.registry import FormatRegistry
from .logging import get_logger
from .paths import is_url

LOGGER = get_logger(__name__)

STDIN = "-"


@dataclass(slots=True)
class SourceData:
    data: bytes
    name: str | None
    content_type: str | None = None

    @property
    def kilobytes(self) -> int:
        return round(len(self.data) / 1024)


def accept_header(registry: FormatRegistry) -> str:
    """Accept header listing every parseable MIME type, anything else last."""
    mimes: list[str] = []
    for descriptor in registry.list_parseable():
        for mime in descriptor.mime_types:
            if mime not in mimes:
                mimes.append(mime)
    return ", ".join([*mimes, "*/*;q=0.1"])


def read_source(
    source: str | None,
    *,
    stdin: BinaryIO,
    timeout: float = 30.0,
    accept: str | None = None,
) -> SourceData:
    if source is None or source == STDIN:
        LOGGER.info("Reading from STDIN...")
        return SourceData(stdin.read(), None)

    if is_url(source):
        LOGGER.info("Reading from URL: %s", source)
        request = urllib.request.Request(source, headers={"Accept": accept or "*/*"})
        try:
            with urllib.request.urlopen(request, timeout=timeout) as response:
                return SourceData(response.read(), source, response.headers.get("Content-Type"))
        except (URLError, OSError, ValueError) as error:
            raise SourceUnreadable(source, str(getattr(error, "reason", error))) from error

    path = Path(source)
    LOGGER.info('Reading from file: "%s" ...', source)
    try:
        data = path.read_bytes()
    except OSError as error:
        raise SourceUnreadable(source, error.strerror or str(error)) from error
    return SourceData(data, source)


__all__ = ["STDIN", "SourceData", "accept_header", "read_source"]
