"""Integration tests for CLI commands.

These tests invoke the click application end to end against CSV files
written to a temporary directory.
"""

from pathlib import Path

from click.testing import CliRunner
import pytest

from sheetstream.cli import app


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "orders.csv"
    path.write_text(
        "id,placed,paid,total\n"
        "1,2024-01-15,true,19.5\n"
        "2,01-20-2024,false,#N/A\n",
        encoding="utf-8",
    )
    return path


@pytest.mark.integration
class TestAppGroup:
    def test_help_lists_commands(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "read" in result.output
        assert "batches" in result.output
        assert "normalize" in result.output


@pytest.mark.integration
class TestReadCommand:
    """Integration tests for the read command."""

    def test_read_help(self, runner):
        result = runner.invoke(app, ["read", "--help"])

        assert result.exit_code == 0
        assert "CSV_FILE" in result.output
        assert "--date-format" in result.output
        assert "--limit" in result.output

    def test_read_prints_rows(self, runner, sample_csv):
        result = runner.invoke(app, ["read", str(sample_csv), "--sheet-name", "orders"])

        assert result.exit_code == 0, result.output
        assert "Sheet: orders" in result.output
        assert "#N/A" in result.output
        assert "2024-01-20" in result.output

    def test_read_limit(self, runner, sample_csv):
        result = runner.invoke(app, ["read", str(sample_csv), "--limit", "1"])

        assert result.exit_code == 0, result.output
        assert "2 more rows not shown" in result.output

    def test_read_missing_file(self, runner, tmp_path):
        result = runner.invoke(app, ["read", str(tmp_path / "missing.csv")])

        assert result.exit_code != 0
        assert "does not exist" in result.output

    def test_read_line_limit_from_config(self, runner, sample_csv, tmp_path):
        """A line limit from the config file aborts the read with an error."""
        config_file = tmp_path / "sheetstream.toml"
        config_file.write_text("[scanner]\nmax_line_count = 1\n", encoding="utf-8")

        result = runner.invoke(
            app, ["read", str(sample_csv), "--config", str(config_file)]
        )

        assert result.exit_code == 1
        assert "Line limit of 1" in result.output


@pytest.mark.integration
class TestBatchesCommand:
    """Integration tests for the batches command."""

    def test_batches_summary(self, runner, tmp_path):
        """2500 rows with the default batch size arrive in three batches."""
        path = tmp_path / "big.csv"
        path.write_text(
            "".join(f"{i},name{i}\n" for i in range(2500)), encoding="utf-8"
        )

        result = runner.invoke(app, ["batches", str(path)])

        assert result.exit_code == 0, result.output
        assert "Batch 3: 500 rows (2,500 total)" in result.output
        assert "Delivered: 3" in result.output
        assert "Rows: 2,500" in result.output

    def test_batches_quiet_with_size(self, runner, sample_csv):
        result = runner.invoke(
            app, ["batches", str(sample_csv), "--batch-size", "2", "--quiet"]
        )

        assert result.exit_code == 0, result.output
        assert "Batch 1:" not in result.output
        assert "Delivered: 2" in result.output

    def test_batches_rejects_zero_size(self, runner, sample_csv):
        result = runner.invoke(app, ["batches", str(sample_csv), "--batch-size", "0"])

        assert result.exit_code == 2


@pytest.mark.integration
class TestNormalizeCommand:
    """Integration tests for the normalize command."""

    def test_normalize_rewrites_values(self, runner, sample_csv, tmp_path):
        destination = tmp_path / "normalized.csv"

        result = runner.invoke(
            app,
            [
                "normalize",
                str(sample_csv),
                str(destination),
                "--date-format",
                "%Y/%m/%d",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Wrote 3 rows" in result.output
        assert destination.read_text(encoding="utf-8") == (
            "id,placed,paid,total\n"
            "1,2024/01/15,true,19.5\n"
            "2,2024/01/20,false,#N/A\n"
        )

    def test_normalize_with_read_date_format(self, runner, tmp_path):
        source = tmp_path / "eu.csv"
        source.write_text("15.01.2024\n", encoding="utf-8")
        destination = tmp_path / "out.csv"

        result = runner.invoke(
            app,
            [
                "normalize",
                str(source),
                str(destination),
                "--read-date-format",
                "%d.%m.%Y",
            ],
        )

        assert result.exit_code == 0, result.output
        assert destination.read_text(encoding="utf-8") == "2024-01-15T00:00:00\n"
