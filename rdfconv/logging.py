"""Logging utilities."""

from __future__ import annotations

import logging
from typing import Iterable

from rich.console import Console
from rich.logging import RichHandler

NOISY_LOGGERS = ("rdflib", "urllib3")


def configure_logging(level: str = "WARNING", *, verbose: bool = False, rich_tracebacks: bool = True) -> None:
    """Send log records to stderr so converted output on stdout stays clean."""
    console = Console(stderr=True)
    handler = RichHandler(console=console, rich_tracebacks=rich_tracebacks, markup=False, show_path=False)
    effective = "INFO" if verbose and level.upper() not in ("DEBUG", "INFO") else level.upper()
    logging.basicConfig(level=effective, format="%(message)s", handlers=[handler], force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, *extra_names: Iterable[str]) -> logging.Logger:
    """Return a namespaced logger."""
    namespace = ".".join([name, *extra_names]) if extra_names else name
    return logging.getLogger(namespace)


__all__ = ["configure_logging", "get_logger"]
