from __future__ import annotations

import json

import pytest
from pypdf import PdfReader
from typer.testing import CliRunner

import cli.main as cli_main
from cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    """The CLI installs a root RichHandler; keep pytest's handlers intact."""

    monkeypatch.setattr(cli_main, "configure_logging", lambda level: None)


class TestMergeCommand:
    def test_merge_writes_output_and_report(self, tmp_path, make_pdf):
        make_pdf("a.pdf", pages=2)
        make_pdf("b.pdf", pages=1)
        report_path = tmp_path / "report.json"

        result = runner.invoke(
            app,
            ["merge", "-p", str(tmp_path), "-f", "a.pdf", "-f", "b.pdf", "--report-json", str(report_path)],
        )

        assert result.exit_code == 0, result.output
        assert len(PdfReader(tmp_path / "merged.pdf").pages) == 3
        payload = json.loads(report_path.read_text(encoding="utf-8"))
        assert payload["total_pages"] == 3
        assert [s["reference"] for s in payload["sources"]] == ["a.pdf", "b.pdf"]
        assert "Table of Contents" in result.output

    def test_quiet_prints_nothing_on_success(self, tmp_path, make_pdf):
        make_pdf("a.pdf")
        make_pdf("b.pdf")
        out = tmp_path / "out.pdf"

        result = runner.invoke(
            app,
            ["merge", "-q", "-p", str(tmp_path), "-f", "a.pdf", "-f", "b.pdf", "-o", str(out)],
        )

        assert result.exit_code == 0
        assert result.output.strip() == ""
        assert out.is_file()

    def test_single_file_fails(self, tmp_path, make_pdf):
        make_pdf("a.pdf")

        result = runner.invoke(app, ["merge", "-q", "-p", str(tmp_path), "-f", "a.pdf"])

        assert result.exit_code == 1
        assert "ERROR:" in result.output
        assert "files must be more than 1" in result.output
        assert not (tmp_path / "merged.pdf").exists()

    def test_missing_file_fails(self, tmp_path, make_pdf):
        make_pdf("a.pdf")

        result = runner.invoke(app, ["merge", "-q", "-p", str(tmp_path), "-f", "a.pdf", "-f", "gone.pdf"])

        assert result.exit_code == 1
        assert "is not found" in result.output

    def test_bookmark_label_option(self, tmp_path, make_pdf):
        make_pdf("intro.pdf")
        make_pdf("annex.pdf")
        report_path = tmp_path / "r.json"

        result = runner.invoke(
            app,
            [
                "merge", "-q", "-p", str(tmp_path),
                "-f", "intro.pdf", "-f", "annex.pdf",
                "--bookmark-label", "stem",
                "--report-json", str(report_path),
            ],
        )

        assert result.exit_code == 0, result.output
        outline = json.loads(report_path.read_text(encoding="utf-8"))["outline"]
        assert [c["title"] for c in outline["children"]] == ["intro", "annex"]

    def test_bad_label_format_spec_fails_cleanly(self, tmp_path, make_pdf):
        make_pdf("a.pdf")
        make_pdf("b.pdf")

        result = runner.invoke(
            app,
            ["merge", "-q", "-p", str(tmp_path), "-f", "a.pdf", "-f", "b.pdf", "--bookmark-label", "{name:d}"],
        )

        assert result.exit_code == 1
        assert "ERROR:" in result.output

    def test_output_directory_fails_cleanly(self, tmp_path, make_pdf):
        make_pdf("a.pdf")
        make_pdf("b.pdf")
        (tmp_path / "out").mkdir()

        result = runner.invoke(
            app,
            ["merge", "-q", "-p", str(tmp_path), "-f", "a.pdf", "-f", "b.pdf", "-o", str(tmp_path / "out")],
        )

        assert result.exit_code == 1
        assert "ERROR:" in result.output
        assert "could not be written" in result.output

    def test_unwritable_report_fails_cleanly(self, tmp_path, make_pdf):
        make_pdf("a.pdf")
        make_pdf("b.pdf")
        (tmp_path / "report.json").mkdir()

        result = runner.invoke(
            app,
            [
                "merge", "-q", "-p", str(tmp_path),
                "-f", "a.pdf", "-f", "b.pdf",
                "--report-json", str(tmp_path / "report.json"),
            ],
        )

        assert result.exit_code == 1
        assert "ERROR:" in result.output
        assert (tmp_path / "merged.pdf").is_file()


class TestMiscCommands:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert result.output.startswith("merge-pdf ")

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])

        assert "merge" in result.output

    def test_doctor_init_config_writes_user_env(self, tmp_path, monkeypatch):
        import core.config

        env_path = tmp_path / "user" / ".env"
        monkeypatch.setattr(core.config, "get_user_env_file", lambda: env_path)

        result = runner.invoke(
            app,
            ["doctor", "init-config"],
            input="book.pdf\nIndex\nstem\ny\nn\n",
        )

        assert result.exit_code == 0, result.output
        text = env_path.read_text(encoding="utf-8")
        assert "MERGE_PDF_OUTPUT_NAME=book.pdf" in text
        assert "MERGE_PDF_BOOKMARK_LABEL=stem" in text
        assert "MERGE_PDF_CONTENTS_PAGE=true" in text
        assert "MERGE_PDF_COMPRESS=false" in text

    def test_doctor_run_reports_pypdf(self):
        result = runner.invoke(app, ["doctor", "run"])

        assert result.exit_code == 0, result.output
        assert "pypdf" in result.output
