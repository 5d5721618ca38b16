"""Table-of-contents page rendering.

Why it lives in adapters:
- HTML/PDF rendering is an infrastructure detail (Jinja2/WeasyPrint).
- The core only hands over `ContentsEntry` rows and gets PDF bytes back.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from core.domain.models import ContentsEntry
from core.errors import ContentsPageError


logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_TEMPLATES_DIR_FALLBACK = Path(__file__).resolve().parents[1] / "templates"


def _templates_dir() -> Path:
    return _TEMPLATES_DIR if _TEMPLATES_DIR.is_dir() else _TEMPLATES_DIR_FALLBACK


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_templates_dir())),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_contents_html(title: str, entries: Sequence[ContentsEntry]) -> str:
    """Render a self-contained HTML page for the contents."""

    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    try:
        template = _get_env().get_template("contents.html")
        return template.render(title=title, entries=list(entries), generated_at=generated_at)
    except TemplateError as exc:
        raise ContentsPageError("contents template could not be rendered", detail=str(exc)) from exc


def render_contents_pdf(title: str, entries: Sequence[ContentsEntry]) -> bytes:
    """Render the contents page to PDF bytes.

    Design:
    - Synchronous: WeasyPrint is local CPU/IO.
    - WeasyPrint is imported lazily; its native libraries (Pango) may be
      missing, in which case the caller merges without a contents page.
    """

    html = render_contents_html(title, entries)
    try:
        from weasyprint import HTML  # noqa: PLC0415

        payload = HTML(string=html, base_url=str(_templates_dir())).write_pdf()
    except (ImportError, OSError) as exc:
        raise ContentsPageError("WeasyPrint is not available", detail=str(exc)) from exc
    except Exception as exc:
        logger.debug("WeasyPrint failed", exc_info=True)
        raise ContentsPageError("WeasyPrint could not render the contents page", detail=str(exc)) from exc

    if not payload:
        raise ContentsPageError("WeasyPrint returned an empty document")
    return payload

