"""PDF input sources (concrete `core.interfaces.source.PdfSource` implementations).

Why a package:
- Groups one module per origin (filesystem, HTTP).
- `default_sources` is the single place that decides the lookup order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from adapters.pdf_sources.local import LocalFileSource
from adapters.pdf_sources.remote import HttpSource
from core.config import AppSettings
from core.errors import NoSourceError
from core.interfaces.source import PdfSource


def default_sources(
    *,
    predir: Path | None = None,
    settings: AppSettings | None = None,
    password: str | None = None,
) -> list[PdfSource]:
    """Remote URLs first, then the filesystem (which accepts anything else)."""

    settings = settings or AppSettings()
    password = password if password is not None else settings.pdf_password
    return [
        HttpSource(settings, password=password),
        LocalFileSource(predir, password=password),
    ]


def resolve_source(reference: str, sources: Sequence[PdfSource]) -> PdfSource:
    for source in sources:
        if source.accepts(reference):
            return source
    raise NoSourceError(f"no source can open {reference}", reference=reference)


__all__ = [
    "HttpSource",
    "LocalFileSource",
    "default_sources",
    "resolve_source",
]
