"""Source: http(s) URLs, downloaded in memory with httpx."""

from __future__ import annotations

import httpx
from pypdf import PdfReader

from adapters.http_client import build_client, fetch_bytes
from adapters.pdf_sources.loading import read_pdf
from core.config import AppSettings
from core.errors import RemoteFetchError


class HttpSource:
    """Downloads each reference once per `open` call."""

    _schemes = ("http://", "https://")

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        password: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._password = password
        self._transport = transport

    def accepts(self, reference: str) -> bool:
        return reference.lower().startswith(self._schemes)

    def describe(self, reference: str) -> str:
        return reference

    def open(self, reference: str) -> PdfReader:
        try:
            with build_client(self._settings, transport=self._transport) as client:
                payload = fetch_bytes(client, reference)
        except httpx.HTTPStatusError as exc:
            raise RemoteFetchError(
                f"{reference} answered HTTP {exc.response.status_code}",
                reference=reference,
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteFetchError(
                f"{reference} could not be downloaded",
                reference=reference,
                detail=str(exc),
            ) from exc

        return read_pdf(payload, reference=reference, password=self._password)
