"""Contracts for PDF input sources.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- Local files and URLs are interchangeable, and tests can plug a fake source
  without touching the merge pipeline.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pypdf import PdfReader


@runtime_checkable
class PdfSource(Protocol):
    """Minimal contract for a document source.

    Design rules:
    - `open` is synchronous: the merge is sequential and CPU bound.
    - `open` returns a ready-to-read (already decrypted) `PdfReader` or raises
      a `core.errors.DocumentError` subclass.
    """

    def accepts(self, reference: str) -> bool:
        """Return True when this source knows how to open `reference`."""

        ...

    def describe(self, reference: str) -> str:
        """Resolved location (path or URL) used in reports and messages."""

        ...

    def open(self, reference: str) -> PdfReader:
        """Load the document behind `reference`."""

        ...
