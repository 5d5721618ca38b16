from __future__ import annotations

import os
from io import BytesIO
from pathlib import Path

import pytest
from pypdf import PdfWriter
from pypdf.generic import ContentStream


def build_pdf_bytes(
    *,
    pages: int = 1,
    width: float = 200,
    height: float = 300,
    title: str | None = None,
    outline_title: str | None = None,
    password: str | None = None,
    text: str | None = None,
) -> bytes:
    """Blank-page PDF; the width identifies which input a page came from."""

    writer = PdfWriter()
    for _ in range(pages):
        page = writer.add_blank_page(width=width, height=height)
        if text:
            content = ContentStream(None, writer)
            content.set_data(f"BT /F1 12 Tf 20 100 Td ({text}) Tj ET".encode("latin-1"))
            page.replace_contents(content)
    if outline_title and pages:
        writer.add_outline_item(outline_title, 0)
    if title:
        writer.add_metadata({"/Title": title})
    if password:
        writer.encrypt(password, algorithm="RC4-128")
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer MERGE_PDF_* variables out of the tests."""

    for key in list(os.environ):
        if key.upper().startswith("MERGE_PDF_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings():
    from core.config import AppSettings

    return AppSettings(_env_file=None)


@pytest.fixture
def pdf_bytes():
    return build_pdf_bytes


@pytest.fixture
def make_pdf(tmp_path):
    """Factory writing a PDF under tmp_path and returning its path."""

    def _make(name: str, **kwargs) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_pdf_bytes(**kwargs))
        return path

    return _make
