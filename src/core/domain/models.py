"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to pypdf or the CLI.
- The merge report serializes straight to JSON for pipelines.

Note:
- These models describe *what* a merge produced, not *how* pages are copied.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookmarkStyle(BaseModel):
    """Visual style of an outline entry.

    Color channels are normalized (0..1), as PDF viewers expect them.
    """

    color: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        description="RGB color of the entry.",
    )
    bold: bool = Field(default=False)
    italic: bool = Field(default=False)

    @field_validator("color")
    @classmethod
    def _check_channels(cls, value: tuple[float, float, float]) -> tuple[float, float, float]:
        if any(not 0.0 <= channel <= 1.0 for channel in value):
            raise ValueError("color channels must be within 0..1")
        return value


class Bookmark(BaseModel):
    """An outline entry of the merged document.

    Why `page_index` may be None:
    - A bookmark for a document without pages is planned before the target
      page is known; it is resolved against the following pages afterwards.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=512,
        description="Text shown in the outline pane.",
    )
    page_index: int | None = Field(
        default=None,
        ge=0,
        description="Zero-based page index in the merged output.",
    )
    style: BookmarkStyle = Field(default_factory=BookmarkStyle)
    children: list[Bookmark] = Field(default_factory=list)

    def walk(self) -> list[Bookmark]:
        """Depth-first list of this bookmark and all descendants."""

        out = [self]
        for child in self.children:
            out.extend(child.walk())
        return out


class SourceDocument(BaseModel):
    """One input of the merge, in input order."""

    reference: str = Field(
        ...,
        min_length=1,
        description="Reference as given by the user (relative path or URL).",
    )
    location: str = Field(
        ...,
        min_length=1,
        description="Resolved path or URL the document was read from.",
    )
    page_count: int = Field(default=0, ge=0)
    first_page_index: int | None = Field(
        default=None,
        ge=0,
        description="Index of its first page in the merged output (None without pages).",
    )

    @property
    def name(self) -> str:
        return Path(self.location.rstrip("/")).name or self.reference


class ContentsEntry(BaseModel):
    """One row of the rendered table-of-contents page."""

    label: str = Field(..., min_length=1)
    source: str = Field(..., min_length=1, description="File name (or URL) of the input.")
    page_number: int | None = Field(
        default=None,
        ge=1,
        description="1-based page number in the final output (None without pages).",
    )


class MergeReport(BaseModel):
    """Aggregate describing a finished merge.

    Why an aggregate:
    - The CLI tables, the JSON export and the tests all read the same object.
    """

    output_path: Path = Field(..., description="Where the merged PDF was written.")
    sources: list[SourceDocument] = Field(default_factory=list)
    total_pages: int = Field(default=0, ge=0)
    outline: Bookmark | None = Field(default=None, description="Root of the outline tree.")
    contents_page_count: int = Field(
        default=0,
        ge=0,
        description="Pages of the rendered table of contents (0 when not requested or failed).",
    )
    compressed: bool = Field(default=False)
    generated_at: datetime = Field(default_factory=_utcnow)
