from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import AppSettings, _parse_env_lines, write_user_env_vars


class TestAppSettings:
    def test_defaults(self, settings):
        assert settings.output_name == "merged.pdf"
        assert settings.contents_title == "Table of Contents"
        assert settings.bookmark_label == "Page {index}"
        assert settings.contents_page is False
        assert settings.compress is False

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("MERGE_PDF_OUTPUT_NAME", "all.pdf")
        monkeypatch.setenv("MERGE_PDF_COMPRESS", "true")

        settings = AppSettings(_env_file=None)

        assert settings.output_name == "all.pdf"
        assert settings.compress is True

    def test_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("MERGE_PDF_LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            AppSettings(_env_file=None)

    def test_env_file_is_read(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("MERGE_PDF_CONTENTS_TITLE=Index\n", encoding="utf-8")

        assert AppSettings(_env_file=env_file).contents_title == "Index"


class TestUserEnvFile:
    def test_write_merges_existing_values(self, tmp_path):
        env_path = tmp_path / "cfg" / ".env"
        env_path.parent.mkdir()
        env_path.write_text("MERGE_PDF_OUTPUT_NAME=old.pdf\nMERGE_PDF_COMPRESS=true\n", encoding="utf-8")

        write_user_env_vars({"MERGE_PDF_OUTPUT_NAME": "new.pdf", "MERGE_PDF_USER_AGENT": None}, env_path=env_path)

        data = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        assert data == {"MERGE_PDF_COMPRESS": "true", "MERGE_PDF_OUTPUT_NAME": "new.pdf"}

    def test_parse_skips_comments_and_quotes(self):
        text = '# comment\n\nA="1"\nB=\'two\'\nbroken line\n'

        assert _parse_env_lines(text) == {"A": "1", "B": "two"}
