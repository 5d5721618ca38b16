"""PDF merge orchestration.

This module owns the whole merge flow so the CLI only parses flags and
prints. Side-effects other than writing the output file (printing, progress
bars) are delegated to `PipelineHooks`, which keeps the pipeline reusable
from tests and other entry-points.

Flow:
1. Validate the request (at least two files, a valid label template).
2. Load every input in order; the first failure aborts, nothing is written.
3. Optionally render the contents page (its page count shifts every index).
4. Concatenate pages, plan the outline, write it with pypdf.
5. Set the page mode, carry metadata, optionally compress, save once.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from pypdf import PdfReader, PdfWriter

from adapters.contents_page import render_contents_pdf
from adapters.pdf_sources import default_sources, resolve_source
from adapters.pdf_sources.loading import read_pdf
from core.config import AppSettings
from core.domain.labels import LabelPreset, render_label, validate_template
from core.domain.models import Bookmark, ContentsEntry, MergeReport, SourceDocument
from core.errors import (
    ContentsPageError,
    DocumentLoadError,
    EmptyMergeError,
    LabelTemplateError,
    NotEnoughFilesError,
    OutputWriteError,
)
from core.interfaces.source import PdfSource
from core.services.outline import plan_outline


logger = logging.getLogger(__name__)

PRODUCER = "merge-pdf"
MIN_FILES = 2
_MAX_CONTENTS_PASSES = 3

ContentsRenderer = Callable[[str, Sequence[ContentsEntry]], bytes]


@dataclass
class MergeRequest:
    """Parameters that control one merge.

    `None` means "use the settings default" for every optional field.
    """

    files: Sequence[str]
    predir: Path = field(default_factory=lambda: Path("."))
    output: Path | None = None
    bookmark_label: str | None = None
    contents_page: bool | None = None
    compress: bool | None = None
    password: str | None = None


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    warning: Callable[[str], None] | None = None
    document_loaded: Callable[[int, int, str], None] | None = None


@dataclass
class MergeResult:
    """Output of a pipeline invocation."""

    report: MergeReport
    warnings: list[str] = field(default_factory=list)


@dataclass
class _LoadedDocument:
    reference: str
    location: str
    reader: PdfReader

    @property
    def page_count(self) -> int:
        return len(self.reader.pages)


def resolve_output_path(request: MergeRequest, settings: AppSettings) -> Path:
    if request.output is not None:
        return request.output
    return request.predir / settings.output_name


def merge_documents(
    request: MergeRequest,
    *,
    settings: AppSettings | None = None,
    sources: Sequence[PdfSource] | None = None,
    hooks: PipelineHooks | None = None,
    contents_renderer: ContentsRenderer | None = None,
) -> MergeResult:
    """Merge `request.files` into one PDF with a generated outline."""

    settings = settings or AppSettings()
    hooks = hooks or PipelineHooks()
    warnings: list[str] = []

    def warn(message: str) -> None:
        logger.warning(message)
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    if len(request.files) < MIN_FILES:
        raise NotEnoughFilesError("files must be more than 1")

    label_template = LabelPreset.lookup(request.bookmark_label or settings.bookmark_label)
    try:
        validate_template(label_template)
    except ValueError as exc:
        raise LabelTemplateError(str(exc)) from exc

    want_contents = settings.contents_page if request.contents_page is None else request.contents_page
    compress = settings.compress if request.compress is None else request.compress
    output_path = resolve_output_path(request, settings)

    if sources is None:
        sources = default_sources(predir=request.predir, settings=settings, password=request.password)

    loaded = _load_documents(request.files, sources=sources, hooks=hooks)

    body_pages = sum(doc.page_count for doc in loaded)
    if body_pages == 0:
        raise EmptyMergeError("merged document has no pages")
    for doc in loaded:
        if doc.page_count == 0:
            warn(f"{doc.location} has no pages; its bookmark points at the next page")

    contents_reader: PdfReader | None = None
    if want_contents:
        try:
            contents_reader = _build_contents(
                loaded,
                title=settings.contents_title,
                label_template=label_template,
                renderer=contents_renderer or render_contents_pdf,
            )
        except ContentsPageError as exc:
            warn(f"contents page skipped: {exc}")
    offset = len(contents_reader.pages) if contents_reader is not None else 0

    source_docs = _describe_sources(loaded, offset=offset)
    total_pages = body_pages + offset

    writer = PdfWriter()
    if contents_reader is not None:
        writer.append(contents_reader, import_outline=False)
    for doc in loaded:
        if doc.page_count:
            # Source outlines are not carried into merged output.
            writer.append(doc.reader, import_outline=False)

    outline = plan_outline(
        source_docs,
        contents_title=settings.contents_title,
        label_template=label_template,
        total_pages=total_pages,
    )
    _write_outline(writer, outline)
    writer.page_mode = "/UseOutlines"
    _copy_metadata(writer, loaded[0].reader)

    if compress:
        for page in writer.pages:
            page.compress_content_streams()

    _write_output(writer, output_path)
    logger.info("wrote %s (%d pages)", output_path, total_pages)

    report = MergeReport(
        output_path=output_path,
        sources=source_docs,
        total_pages=total_pages,
        outline=outline,
        contents_page_count=offset,
        compressed=compress,
    )
    return MergeResult(report=report, warnings=warnings)


def _load_documents(
    files: Sequence[str],
    *,
    sources: Sequence[PdfSource],
    hooks: PipelineHooks,
) -> list[_LoadedDocument]:
    loaded: list[_LoadedDocument] = []
    total = len(files)
    for index, reference in enumerate(files, start=1):
        source = resolve_source(reference, sources)
        reader = source.open(reference)
        loaded.append(_LoadedDocument(reference=reference, location=source.describe(reference), reader=reader))
        if hooks.document_loaded:
            hooks.document_loaded(index, total, reference)
    return loaded


def _describe_sources(loaded: Sequence[_LoadedDocument], *, offset: int) -> list[SourceDocument]:
    out: list[SourceDocument] = []
    cursor = offset
    for doc in loaded:
        count = doc.page_count
        out.append(
            SourceDocument(
                reference=doc.reference,
                location=doc.location,
                page_count=count,
                first_page_index=cursor if count else None,
            )
        )
        cursor += count
    return out


def _contents_entries(
    loaded: Sequence[_LoadedDocument],
    *,
    label_template: str,
    offset: int,
) -> list[ContentsEntry]:
    entries: list[ContentsEntry] = []
    for index, source in enumerate(_describe_sources(loaded, offset=offset), start=1):
        page_number = source.first_page_index + 1 if source.first_page_index is not None else None
        entries.append(
            ContentsEntry(
                label=render_label(label_template, index=index, name=source.name),
                source=source.name,
                page_number=page_number,
            )
        )
    return entries


def _build_contents(
    loaded: Sequence[_LoadedDocument],
    *,
    title: str,
    label_template: str,
    renderer: ContentsRenderer,
) -> PdfReader:
    """Render the contents page until its own page count stops changing."""

    assumed = 1
    for _ in range(_MAX_CONTENTS_PASSES):
        entries = _contents_entries(loaded, label_template=label_template, offset=assumed)
        payload = renderer(title, entries)
        try:
            reader = read_pdf(payload, reference="contents page")
        except DocumentLoadError as exc:
            raise ContentsPageError("rendered contents page is not a readable PDF", detail=str(exc)) from exc
        actual = len(reader.pages)
        if actual == assumed:
            return reader
        logger.debug("contents page spans %d pages, re-rendering", actual)
        assumed = actual
    raise ContentsPageError("contents page layout did not settle")


def _write_outline(writer: PdfWriter, bookmark: Bookmark, parent=None) -> None:
    if bookmark.page_index is None:
        return
    item = writer.add_outline_item(
        bookmark.title,
        bookmark.page_index,
        parent=parent,
        color=bookmark.style.color,
        bold=bookmark.style.bold,
        italic=bookmark.style.italic,
    )
    for child in bookmark.children:
        _write_outline(writer, child, parent=item)


def _write_output(writer: PdfWriter, output_path: Path) -> None:
    """Write to a sibling temp file, then move it over `output_path`."""

    tmp_path: Path | None = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp")
        tmp_path = Path(name)
        with os.fdopen(fd, "wb") as fh:
            writer.write(fh)
        os.replace(tmp_path, output_path)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise OutputWriteError(f"{output_path} could not be written", detail=str(exc)) from exc


def _copy_metadata(writer: PdfWriter, first: PdfReader) -> None:
    info = first.metadata
    values: dict[str, str] = {}
    if info is not None:
        for key in list(info.keys()):
            value = info[key]
            if isinstance(value, str):
                values[key] = value
    values["/Producer"] = PRODUCER
    writer.add_metadata(values)
