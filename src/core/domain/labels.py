"""Bookmark label templates.

Labels are `str.format` templates with three placeholders:
`{index}` (1-based document ordinal), `{name}` (file name) and `{stem}`
(file name without suffix). Presets keep the common cases short on the CLI.
"""

from __future__ import annotations

import string
from enum import Enum
from pathlib import PurePath


ALLOWED_FIELDS = frozenset({"index", "name", "stem"})
MAX_LABEL_LENGTH = 512


class LabelPreset(str, Enum):
    """Named templates accepted wherever a template is."""

    INDEX = "Page {index}"
    NAME = "{name}"
    STEM = "{stem}"

    @classmethod
    def default(cls) -> "LabelPreset":
        return cls.INDEX

    @classmethod
    def lookup(cls, value: str) -> str:
        """Return the template for a preset name, or `value` unchanged."""

        try:
            return cls[value.strip().upper()].value
        except KeyError:
            return value


def validate_template(template: str) -> str:
    """Reject templates with unknown placeholders or bad syntax."""

    try:
        fields = {name for _, name, _, _ in string.Formatter().parse(template) if name is not None}
    except ValueError as exc:
        raise ValueError(f"invalid bookmark label template {template!r}: {exc}") from exc

    unknown = fields - ALLOWED_FIELDS
    if "" in unknown:
        raise ValueError(f"positional placeholders are not allowed in {template!r}")
    if unknown:
        names = ", ".join(sorted(unknown))
        raise ValueError(f"unknown placeholder(s) in bookmark label: {names}")

    # Format specs and conversions only fail once applied.
    try:
        template.format(index=1, name="a.pdf", stem="a")
    except (ValueError, IndexError, KeyError) as exc:
        raise ValueError(f"invalid bookmark label template {template!r}: {exc}") from exc
    return template


def render_label(template: str, *, index: int, name: str) -> str:
    stem = PurePath(name).stem or name
    label = template.format(index=index, name=name, stem=stem).strip()
    if len(label) > MAX_LABEL_LENGTH:
        label = label[: MAX_LABEL_LENGTH - 1].rstrip() + "…"
    return label or f"Document {index}"
