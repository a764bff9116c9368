"""UpdateLogger for writing a structured log of an import map run.

The log file has four sections separated by 65-character rules: a header,
the scan phase (every entry and every skipped file), the update phase and
a summary.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from importmap.models import ImportMap, SkipReason, UpdateSummary


class UpdateLogger:
    """Logger for import map runs with structured output format.

    Usage:
        with UpdateLogger(log_path, dry_run=False) as logger:
            logger.log_header()
            logger.log_scan_phase(root, base_url, import_map, skipped)
            logger.log_update_phase(html_path, changed)
            logger.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(
        self,
        log_file_path: Optional[Path] = None,
        dry_run: bool = False,
    ) -> None:
        """Initialize the UpdateLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.
            dry_run: Whether this is a dry run (document not written).

        Raises:
            OSError: If the log file's directory does not exist or is not writable.
        """
        self._dry_run = dry_run
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"importmap_{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        parent = self._log_file_path.parent
        if not parent.is_dir():
            raise OSError(f"Log directory does not exist: {parent}")

    def __enter__(self) -> "UpdateLogger":
        """Open the log file for writing.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        try:
            self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}") from e
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title, timestamp and mode (UPDATE or DRY RUN)."""
        self._write_separator()
        self._write_line("importmap - Update Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        mode = "DRY RUN" if self._dry_run else "UPDATE"
        self._write_line(f"Mode: {mode}")
        self._write_line("")

    def log_scan_phase(
        self,
        source: str,
        base_url: str,
        import_map: ImportMap,
        skipped: List[Tuple[str, SkipReason]],
    ) -> None:
        """Write the scan phase section.

        Args:
            source: Description of the scanned tree.
            base_url: URL prefix used for entries.
            import_map: The resulting map.
            skipped: Files excluded by the scan policy.
        """
        self._write_separator()
        self._write_line("SCAN PHASE")
        self._write_separator()
        self._write_line(f"Source: {source}")
        self._write_line(f"Base URL: {base_url or '(none)'}")
        self._write_line(f"Entries: {len(import_map)}")
        self._write_line(f"Skipped files: {len(skipped)}")
        self._write_line("")

        if import_map:
            self._write_line("Entries:")
        for original_url, hashed_url in import_map.items():
            self._write_line(f"{original_url} -> {hashed_url}", indent=2)

        # Unsupported extensions are noise; only list policy exclusions
        excluded = [
            (path, reason)
            for path, reason in skipped
            if reason is not SkipReason.UNSUPPORTED_EXTENSION
        ]
        if excluded:
            self._write_line("Excluded:")
        for path, reason in excluded:
            self._write_line(f"- {path} ({reason.value})", indent=2)
        self._write_line("")

    def log_update_phase(self, html_path: Path, changed: bool) -> None:
        """Write the update phase section."""
        self._write_separator()
        self._write_line("UPDATE PHASE")
        self._write_separator()
        self._write_line(f"Document: {html_path}")
        if not changed:
            self._write_line("Result: unchanged")
        elif self._dry_run:
            self._write_line("Result: would update")
        else:
            self._write_line(
                f"[{self._format_timestamp(datetime.now())}] Result: updated"
            )
        self._write_line("")

    def log_summary(self, summary: UpdateSummary) -> None:
        """Write the summary section."""
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Entries: {summary.entries}")
        self._write_line(f"Modules: {summary.scripts}")
        self._write_line(f"Stylesheets: {summary.stylesheets}")
        self._write_line(f"Skipped files: {len(summary.skipped)}")
        self._write_line(f"Development mode: {'yes' if summary.dev_mode else 'no'}")
        self._write_line(f"Changed: {'yes' if summary.changed else 'no'}")
        self._write_line(f"Duration: {summary.duration:.2f}s")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation.

        Args:
            text: The text to write.
            indent: Number of spaces to indent the line.
        """
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
