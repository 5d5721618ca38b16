from __future__ import annotations

import json

import pytest

from adapters.json_exporter import export_merge_report_json
from core.domain.models import Bookmark, MergeReport, SourceDocument
from core.errors import OutputWriteError


def test_export_is_stable_and_complete(tmp_path):
    report = MergeReport(
        output_path=tmp_path / "merged.pdf",
        sources=[
            SourceDocument(reference="a.pdf", location="docs/a.pdf", page_count=2, first_page_index=0),
            SourceDocument(reference="b.pdf", location="docs/b.pdf", page_count=0),
        ],
        total_pages=2,
        outline=Bookmark(title="Table of Contents", page_index=0, children=[Bookmark(title="Page 1", page_index=0)]),
    )
    target = tmp_path / "nested" / "report.json"

    export_merge_report_json(report=report, output_path=target)

    text = target.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    payload = json.loads(text)
    assert list(payload) == sorted(payload)
    assert payload["output_path"] == str(tmp_path / "merged.pdf")
    assert payload["sources"][1]["first_page_index"] is None
    assert payload["outline"]["children"][0]["style"] == {"bold": False, "color": [0.0, 0.0, 0.0], "italic": False}


def test_unwritable_target_is_an_output_error(tmp_path):
    report = MergeReport(output_path=tmp_path / "merged.pdf", sources=[], total_pages=1)
    target = tmp_path / "report.json"
    target.mkdir()

    with pytest.raises(OutputWriteError, match="could not be written"):
        export_merge_report_json(report=report, output_path=target)
