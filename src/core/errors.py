"""Typed errors for merge-pdf.

Why a hierarchy:
- Adapters translate library failures (pypdf, httpx, WeasyPrint) into these types.
- The CLI is the only layer that turns them into exit codes and messages.
"""

from __future__ import annotations

__all__ = [
    "MergePdfError",
    "NotEnoughFilesError",
    "LabelTemplateError",
    "DocumentError",
    "DocumentNotFoundError",
    "DocumentLoadError",
    "EncryptedDocumentError",
    "RemoteFetchError",
    "NoSourceError",
    "EmptyMergeError",
    "ContentsPageError",
    "OutputWriteError",
]


class MergePdfError(Exception):
    """Root exception.

    Attributes:
        error_code: Machine-readable code (also written to JSON reports).
    """

    error_code: str = "MERGE_PDF_ERROR"

    def __init__(self, message: str, *, detail: str | None = None):
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": str(self),
            "detail": self.detail,
        }


class NotEnoughFilesError(MergePdfError):
    """Fewer than two input files were given."""

    error_code = "NOT_ENOUGH_FILES"


class LabelTemplateError(MergePdfError):
    error_code = "INVALID_LABEL_TEMPLATE"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Input documents
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class DocumentError(MergePdfError):
    """Base for failures tied to one input document."""

    error_code = "DOCUMENT_ERROR"

    def __init__(self, message: str, *, reference: str = "", **kwargs):
        self.reference = reference
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["reference"] = self.reference
        return d


class DocumentNotFoundError(DocumentError):
    error_code = "DOCUMENT_NOT_FOUND"


class DocumentLoadError(DocumentError):
    """The bytes could not be parsed as a PDF."""

    error_code = "DOCUMENT_LOAD_FAILED"


class EncryptedDocumentError(DocumentError):
    error_code = "DOCUMENT_ENCRYPTED"


class RemoteFetchError(DocumentError):
    """Download of an URL reference failed (transport error or non-2xx status)."""

    error_code = "REMOTE_FETCH_FAILED"


class NoSourceError(DocumentError):
    error_code = "NO_SOURCE"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Output
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class EmptyMergeError(MergePdfError):
    """None of the inputs contributed a page."""

    error_code = "EMPTY_MERGE"


class ContentsPageError(MergePdfError):
    """The table-of-contents page could not be rendered."""

    error_code = "CONTENTS_PAGE_FAILED"


class OutputWriteError(MergePdfError):
    """The merged PDF or the JSON report could not be written."""

    error_code = "OUTPUT_WRITE_FAILED"
