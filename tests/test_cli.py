"""
Tests for the command-line interface.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from file_indexer.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(clear_settings_cache: None, monkeypatch: pytest.MonkeyPatch) -> None:
    """Read settings from a clean environment for each CLI call."""
    for key in ("ENABLED_FILE_INDEXERS", "MAX_FILE_SIZE", "MAX_TEXT_LENGTH"):
        monkeypatch.delenv(f"FILE_INDEXER_{key}", raising=False)


class TestExtractCommand:
    """Tests for the extract command."""

    def test_extract_batch(self, sample_txt_file: Path, dummy_file) -> None:
        """Test a batch with one indexed and one skipped file."""
        result = runner.invoke(app, ["extract", str(sample_txt_file), str(dummy_file("a.zip"))])

        assert result.exit_code == 0
        assert "Indexed: 1 / 2" in result.output

    def test_extract_prints_text(self, sample_txt_file: Path) -> None:
        """Test printing the extracted text."""
        result = runner.invoke(app, ["extract", "--text", str(sample_txt_file)])

        assert result.exit_code == 0
        assert "hello world" in result.output

    def test_extract_respects_length_policy(
        self, sample_txt_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that policies from the environment apply."""
        monkeypatch.setenv("FILE_INDEXER_MAX_TEXT_LENGTH", "5 txt")

        result = runner.invoke(app, ["extract", "--text", str(sample_txt_file)])

        assert result.exit_code == 0
        assert "hello" in result.output
        assert "hello world" not in result.output

    def test_extract_reports_policy_warnings(
        self, sample_txt_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that malformed policy rows are reported."""
        monkeypatch.setenv("FILE_INDEXER_MAX_FILE_SIZE", "abc txt")

        result = runner.invoke(app, ["extract", str(sample_txt_file)])

        assert result.exit_code == 0
        assert "Warning" in result.output


class TestExtractorsCommand:
    """Tests for the extractors command."""

    def test_lists_builtin_extractors(self) -> None:
        """Test that all built-in extractors are listed."""
        result = runner.invoke(app, ["extractors"])

        assert result.exit_code == 0
        for extractor_id in ("spreadsheet", "word", "pdf_parser", "plain_text"):
            assert extractor_id in result.output


class TestPolicyCommand:
    """Tests for the policy command."""

    def test_resolves_limits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test resolution per extension with wildcard fallback."""
        monkeypatch.setenv("FILE_INDEXER_MAX_FILE_SIZE", "1048576 pdf\n5242880")

        result = runner.invoke(app, ["policy", "max_file_size", "pdf", "csv"])

        assert result.exit_code == 0
        assert "1048576" in result.output
        assert "5242880" in result.output

    def test_unlimited(self) -> None:
        """Test that an unset policy resolves to unlimited."""
        result = runner.invoke(app, ["policy", "max_text_length", "txt"])

        assert result.exit_code == 0
        assert "unlimited" in result.output

    def test_unknown_policy_key(self) -> None:
        """Test that only known policies are accepted."""
        result = runner.invoke(app, ["policy", "max_pages", "pdf"])

        assert result.exit_code != 0
