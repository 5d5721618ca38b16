"""Source: local filesystem.

References are joined to `predir` the way `Path` joins them, so an absolute
reference replaces `predir` entirely.
"""

from __future__ import annotations

from pathlib import Path

from pypdf import PdfReader

from adapters.pdf_sources.loading import read_pdf
from core.errors import DocumentNotFoundError


class LocalFileSource:
    """Opens PDFs relative to a base directory."""

    def __init__(self, predir: Path | None = None, *, password: str | None = None) -> None:
        self._predir = predir or Path(".")
        self._password = password

    def accepts(self, reference: str) -> bool:
        return "://" not in reference

    def resolve(self, reference: str) -> Path:
        return self._predir / reference

    def describe(self, reference: str) -> str:
        return str(self.resolve(reference))

    def open(self, reference: str) -> PdfReader:
        path = self.resolve(reference)
        if not path.is_file():
            raise DocumentNotFoundError(f"{path} is not found", reference=reference)
        return read_pdf(path, reference=str(path), password=self._password)
