"""Shared pypdf loading rules for every source.

Rules:
- Unparseable bytes become `DocumentLoadError`.
- Encrypted inputs are tried with an empty password, then with the configured
  one; if neither works the input is rejected with `EncryptedDocumentError`.
- The page tree is read eagerly so broken files fail here, not mid-merge.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from pypdf import PasswordType, PdfReader
from pypdf.errors import DependencyError, PdfReadError

from core.errors import DocumentLoadError, EncryptedDocumentError


logger = logging.getLogger(__name__)


def read_pdf(
    stream: Path | BinaryIO | bytes,
    *,
    reference: str,
    password: str | None = None,
) -> PdfReader:
    if isinstance(stream, bytes):
        stream = BytesIO(stream)

    try:
        reader = PdfReader(stream, strict=False)
    except (PdfReadError, ValueError) as exc:
        raise DocumentLoadError(
            f"{reference} is not a readable PDF",
            reference=reference,
            detail=str(exc),
        ) from exc

    if reader.is_encrypted:
        _decrypt(reader, reference=reference, password=password)

    try:
        page_count = len(reader.pages)
    except (PdfReadError, ValueError, KeyError) as exc:
        raise DocumentLoadError(
            f"{reference} has a broken page tree",
            reference=reference,
            detail=str(exc),
        ) from exc

    logger.debug("loaded %s (%d pages)", reference, page_count)
    return reader


def _decrypt(reader: PdfReader, *, reference: str, password: str | None) -> None:
    candidates = [""]
    if password:
        candidates.append(password)

    for candidate in candidates:
        try:
            result = reader.decrypt(candidate)
        except DependencyError as exc:
            raise EncryptedDocumentError(
                f"{reference} uses an encryption that needs an optional dependency",
                reference=reference,
                detail=str(exc),
            ) from exc
        if result != PasswordType.NOT_DECRYPTED:
            logger.info("decrypted %s", reference)
            return

    raise EncryptedDocumentError(
        f"{reference} is encrypted and the password did not match",
        reference=reference,
    )
