"""JSON export of the merge report.

Why JSON:
- Build scripts and pipelines can check page offsets without opening the PDF.
- Keeps a stable record of which inputs produced an output.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import MergeReport
from core.errors import OutputWriteError


def export_merge_report_json(*, report: MergeReport, output_path: Path) -> Path:
    """Export `MergeReport` to UTF-8 JSON with a stable layout."""

    payload = report.model_dump(mode="json")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise OutputWriteError(f"{output_path} could not be written", detail=str(exc)) from exc
    return output_path
