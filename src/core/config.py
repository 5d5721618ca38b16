"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking them into the CLI.
- Lets adapters (HTTP/WeasyPrint) and the merge pipeline read the same defaults.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "merge-pdf"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies).

    Goal: let the PyInstaller binary be configured without editing a project `.env`.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# merge-pdf user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without polluting the core.
    - A single configuration contract for CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="MERGE_PDF_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the per-user config (PyInstaller).
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    output_name: str = Field(
        default="merged.pdf",
        min_length=1,
        description="File name of the merged PDF when no --output is given (relative to predir).",
    )
    contents_title: str = Field(
        default="Table of Contents",
        min_length=1,
        description="Title of the root bookmark (and of the rendered contents page).",
    )
    bookmark_label: str = Field(
        default="Page {index}",
        min_length=1,
        description="Label template per document. Placeholders: {index}, {name}, {stem}.",
    )
    contents_page: bool = Field(
        default=False,
        description="Prepend a rendered table-of-contents page (WeasyPrint).",
    )
    compress: bool = Field(
        default=False,
        description="Recompress page content streams before saving.",
    )
    pdf_password: str | None = Field(
        default=None,
        description="Password tried on encrypted inputs (an empty password is always tried first).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request when a file is given as an URL (seconds).",
    )
    user_agent: str = Field(
        default="merge-pdf/0.1 (+https://local)",
        min_length=1,
        description="User-Agent for remote downloads.",
    )

    log_level: str = Field(
        default="WARNING",
        pattern=r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level for the CLI (overridden by --verbose/--quiet).",
    )
