"""Logging configuration for the CLI.

Call `configure_logging()` once at startup. Core and adapters only use
`logging.getLogger(__name__)` and never configure handlers themselves.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


# Third-party loggers capped regardless of the requested level.
_NOISY_LOGGERS: dict[str, int] = {
    "pypdf": logging.ERROR,
    "weasyprint": logging.ERROR,
    "fontTools": logging.ERROR,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


def resolve_level(level_name: str, *, verbose: bool = False, quiet: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return getattr(logging, level_name.upper(), logging.WARNING)


def configure_logging(level: int = logging.WARNING, *, console: Console | None = None) -> None:
    """Install a single RichHandler on the root logger (stderr by default)."""

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    for logger_name, cap in _NOISY_LOGGERS.items():
        logging.getLogger(logger_name).setLevel(max(level, cap))
