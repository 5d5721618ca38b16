"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and redirects for every remote download.
- Makes testing easy: a `httpx.MockTransport` can be injected.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings


logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` with safe defaults.

    Why a builder:
    - Centralizes timeouts/headers so every remote source behaves the same.
    - Tests pass a transport instead of patching the network.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/pdf,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def fetch_bytes(client: httpx.Client, url: str) -> bytes:
    """GET `url` and return the body; raises `httpx.HTTPError` on failure."""

    logger.debug("GET %s", url)
    response = client.get(url)
    response.raise_for_status()
    content_type = response.headers.get("content-type", "")
    if content_type and "pdf" not in content_type and "octet-stream" not in content_type:
        logger.warning("%s answered with content-type %r, trying to parse it anyway", url, content_type)
    return response.content
