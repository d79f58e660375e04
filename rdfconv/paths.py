"""Path helper utilities."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from .errors import OutputUnwritable

_URL = re.compile(r"^(http|https)://", re.IGNORECASE)


def is_url(source: str) -> bool:
    return bool(_URL.match(source))


def base_iri_for(source: str | None) -> str | None:
    """Return the IRI relative references in ``source`` resolve against."""
    if not source or source == "-":
        return None
    if is_url(source):
        return source
    return Path(source).resolve().as_uri()


def write_atomic(path: Path, payload: bytes) -> None:
    """Write ``payload`` next to ``path`` and rename it into place."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as error:
        raise OutputUnwritable(str(path), error.strerror or str(error)) from error
    try:
        with os.fdopen(handle, "wb") as stream:
            stream.write(payload)
        os.replace(temp_name, path)
    except OSError as error:
        Path(temp_name).unlink(missing_ok=True)
        raise OutputUnwritable(str(path), error.strerror or str(error)) from error
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise


__all__ = ["base_iri_for", "is_url", "write_atomic"]
