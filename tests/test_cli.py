"""End-to-end tests for the importmap CLI.

This module tests the CLI interface using Typer's CliRunner against a
small built site on disk.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from importmap import __version__
from importmap.cli import app
from importmap.errors import ScanError


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CliRunner instance for testing."""
    return CliRunner()


class TestCliBasics:
    """Tests for help and version."""

    def test_help_exits_zero(self, cli_runner: CliRunner) -> None:
        """Test that --help prints usage and exits 0."""
        result = cli_runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "IMPORTMAP" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        """Test that --version prints the version and exits 0."""
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestCliUpdate:
    """Tests for updating a document."""

    def test_updates_index_html(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test a successful run writes the import map."""
        result = cli_runner.invoke(app, [str(site_dir)])

        assert result.exit_code == 0, result.output
        html = (site_dir / "index.html").read_text(encoding="utf-8")
        assert '<script type="importmap">' in html
        assert '"/js/main.js": "/js/main.' in html
        assert '<link rel="modulepreload" href="/js/util.' in html
        assert "/sw.js" not in html
        assert "vendor.dev" not in html

    def test_second_run_is_noop(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that running twice leaves the document unchanged and prints nothing."""
        cli_runner.invoke(app, [str(site_dir)])
        first = (site_dir / "index.html").read_bytes()

        result = cli_runner.invoke(app, [str(site_dir)])

        assert result.exit_code == 0
        assert (site_dir / "index.html").read_bytes() == first
        assert result.stdout == ""

    def test_second_run_verbose_reports_up_to_date(
        self, cli_runner: CliRunner, site_dir: Path
    ) -> None:
        """Test that --verbose still reports an unchanged document."""
        cli_runner.invoke(app, [str(site_dir)])

        result = cli_runner.invoke(app, [str(site_dir), "--verbose"])

        assert result.exit_code == 0
        assert "Up to date" in result.stdout

    def test_default_directory_is_cwd(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that the directory argument defaults to the current directory."""
        original_cwd = os.getcwd()
        try:
            os.chdir(site_dir)
            result = cli_runner.invoke(app, [])
        finally:
            os.chdir(original_cwd)

        assert result.exit_code == 0, result.output
        assert "importmap" in (site_dir / "index.html").read_text(encoding="utf-8")

    def test_base_url(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that --base-url prefixes every entry."""
        result = cli_runner.invoke(app, [str(site_dir), "--base-url", "/static/"])

        assert result.exit_code == 0
        assert '"/static/js/main.js": "/static/js/main.' in (site_dir / "index.html").read_text(encoding="utf-8")

    def test_base_url_from_environment(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test the IMPORTMAP_BASE_URL environment variable."""
        result = cli_runner.invoke(app, [str(site_dir)], env={"IMPORTMAP_BASE_URL": "/env"})

        assert result.exit_code == 0
        assert '"/env/js/main.js"' in (site_dir / "index.html").read_text(encoding="utf-8")

    def test_custom_html_name(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that --html selects another document."""
        (site_dir / "index.html").rename(site_dir / "app.html")

        result = cli_runner.invoke(app, [str(site_dir), "--html", "app.html"])

        assert result.exit_code == 0
        assert "importmap" in (site_dir / "app.html").read_text(encoding="utf-8")

    def test_dev_mode_clears_region(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that --dev empties a previously filled region."""
        cli_runner.invoke(app, [str(site_dir)])

        result = cli_runner.invoke(app, [str(site_dir), "--dev"])

        assert result.exit_code == 0
        html = (site_dir / "index.html").read_text(encoding="utf-8")
        assert "<!-- IMPORTMAP -->\n\n    <!-- /IMPORTMAP -->" in html

    def test_dry_run_does_not_write(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that --dry-run leaves the document untouched."""
        before = (site_dir / "index.html").read_bytes()

        result = cli_runner.invoke(app, [str(site_dir), "--dry-run"])

        assert result.exit_code == 0
        assert "Would update" in result.output
        assert (site_dir / "index.html").read_bytes() == before

    def test_keep_tests(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that --keep-tests includes test files."""
        (site_dir / "js" / "app.test.js").write_text("test();")

        cli_runner.invoke(app, [str(site_dir)])
        assert "app.test.js" not in (site_dir / "index.html").read_text(encoding="utf-8")

        cli_runner.invoke(app, [str(site_dir), "--keep-tests"])
        assert "app.test.js" in (site_dir / "index.html").read_text(encoding="utf-8")

    def test_verbose_lists_exclusions(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that --verbose shows excluded files."""
        result = cli_runner.invoke(app, [str(site_dir), "--verbose"])

        assert result.exit_code == 0
        assert "Excluded files" in result.output
        assert "root_script" in result.output

    def test_log_file(self, cli_runner: CliRunner, site_dir: Path, temp_dir: Path) -> None:
        """Test that --log-file writes a structured log."""
        log_path = temp_dir / "importmap.log"

        result = cli_runner.invoke(app, [str(site_dir), "--log-file", str(log_path)])

        assert result.exit_code == 0
        content = log_path.read_text(encoding="utf-8")
        assert "SCAN PHASE" in content
        assert "Result: updated" in content


class TestCliErrors:
    """Tests for error exit codes and messages."""

    def test_missing_directory(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        """Test that a missing directory exits 1."""
        result = cli_runner.invoke(app, [str(temp_dir / "nope")])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Directory does not exist" in result.output

    def test_directory_is_file(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        """Test that a file argument exits 1."""
        file_path = temp_dir / "file.txt"
        file_path.write_text("x")

        result = cli_runner.invoke(app, [str(file_path)])

        assert result.exit_code == 1
        assert "Not a directory" in result.output

    def test_missing_document(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that a missing index.html exits 1 with a distinct message."""
        (site_dir / "index.html").unlink()

        result = cli_runner.invoke(app, [str(site_dir)])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_missing_markers(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that a document without markers exits 1 and stays unchanged."""
        (site_dir / "index.html").write_text("<html></html>", encoding="utf-8")

        result = cli_runner.invoke(app, [str(site_dir)])

        assert result.exit_code == 1
        assert "Missing <!-- IMPORTMAP -->" in result.output
        assert (site_dir / "index.html").read_text(encoding="utf-8") == "<html></html>"

    def test_document_not_utf8(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that an undecodable document exits 1 and names the file."""
        (site_dir / "index.html").write_bytes(b"<!-- IMPORTMAP --><!-- /IMPORTMAP -->\xff\xfe")

        result = cli_runner.invoke(app, [str(site_dir)])

        assert result.exit_code == 1
        assert "Cannot decode" in result.output
        assert "index.html" in result.output

    def test_scan_error(self, cli_runner: CliRunner, site_dir: Path) -> None:
        """Test that a read failure exits 1 naming the file."""
        with patch(
            "importmap.scanning.file_sources.DirectorySource.read_bytes",
            side_effect=ScanError("css/base.css", "Permission denied"),
        ):
            result = cli_runner.invoke(app, [str(site_dir)])

        assert result.exit_code == 1
        assert "css/base.css" in result.output
