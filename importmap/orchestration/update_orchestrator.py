"""UpdateOrchestrator for the scan-then-update workflow.

This module provides the UpdateOrchestrator class, which coordinates
AssetScanner, the HTML transformer, ReportTUI and UpdateLogger: it scans a
directory, rewrites the marker region of the directory's HTML document and
reports what happened.

Example:
    from importmap.orchestration import UpdateOrchestrator
    from pathlib import Path

    orchestrator = UpdateOrchestrator(base_path=Path("dist"), base_url="/static")
    summary = orchestrator.run()
    print(summary.changed)
"""

import sys
import time
from pathlib import Path
from typing import Optional

from importmap.errors import DocumentNotFoundError
from importmap.models import ImportMap, UpdateSummary
from importmap.orchestration.update_logger import UpdateLogger
from importmap.rendering import update_html_file
from importmap.scanning import AssetScanner, DirectorySource, ScanPolicy
from importmap.ui import ReportTUI


class UpdateOrchestrator:
    """Orchestrates one import map run over a directory.

    The run has two phases that share nothing but the ImportMap:
    1. Scan - build the map from the directory (skipped in dev mode)
    2. Update - rewrite the marker region of the HTML document

    Attributes:
        base_path: Directory to scan; also holds the HTML document.
        html_path: The HTML document to update.
        base_url: URL prefix for every entry.
        dev_mode: Whether to use the empty map and clear the region.
        dry_run: Whether to skip writing the document.
        verbose: Whether to display the entry table and excluded files.
        log_file_path: Optional path for a structured log file.
    """

    def __init__(
        self,
        base_path: Path,
        html_name: str = "index.html",
        base_url: str = "",
        policy: Optional[ScanPolicy] = None,
        dev_mode: bool = False,
        dry_run: bool = False,
        verbose: bool = False,
        log_file_path: Optional[Path] = None,
        tui: Optional[ReportTUI] = None,
    ) -> None:
        """Initialize the UpdateOrchestrator.

        Args:
            base_path: Directory to scan.
            html_name: Name of the HTML document inside base_path.
            base_url: URL prefix for entries. Defaults to "".
            policy: Optional ScanPolicy for the scanner.
            dev_mode: If True, clear the region instead of scanning.
            dry_run: If True, report changes without writing.
            verbose: If True, display additional details.
            log_file_path: Optional path for a structured log file.
            tui: Optional ReportTUI for output.

        Raises:
            ValueError: If base_path does not exist or is not a directory.
        """
        resolved_path = Path(base_path).resolve()
        if not resolved_path.exists():
            raise ValueError(f"Base path does not exist: {base_path}")
        if not resolved_path.is_dir():
            raise ValueError(f"Base path is not a directory: {base_path}")

        self.base_path = resolved_path
        self.html_path = resolved_path / html_name
        self.base_url = base_url
        self.dev_mode = dev_mode
        self.dry_run = dry_run
        self.verbose = verbose
        self.log_file_path = log_file_path

        self._scanner = AssetScanner(policy=policy)
        self._tui = tui if tui is not None else ReportTUI()

    def scan(self) -> ImportMap:
        """Build the ImportMap for the directory, or the empty map in dev mode.

        Raises:
            ScanError: If the directory cannot be traversed or a file read.
        """
        if self.dev_mode:
            return ImportMap.empty()
        return self._scanner.scan(DirectorySource(self.base_path), self.base_url)

    def run(self) -> UpdateSummary:
        """Execute the scan and update phases.

        Returns:
            UpdateSummary describing the run.

        Raises:
            DocumentNotFoundError: If the HTML document does not exist.
            ScanError: If scanning fails.
            MarkersNotFoundError: If the document lacks the marker pair.
            OSError: If the document cannot be written.
        """
        start_time = time.monotonic()

        # Check the document first so a missing file is not reported as a scan error
        if not self.html_path.is_file():
            raise DocumentNotFoundError(self.html_path)

        self._scanner.clear_skipped()
        import_map = self.scan()
        skipped = self._scanner.get_skipped()

        if self.verbose:
            self._tui.display_import_map(import_map)
            self._tui.display_skipped(skipped)

        changed = update_html_file(self.html_path, import_map, dry_run=self.dry_run)

        summary = UpdateSummary(
            html_path=self.html_path,
            entries=len(import_map),
            scripts=len(import_map.scripts()),
            stylesheets=len(import_map.stylesheets()),
            skipped=skipped,
            changed=changed,
            dry_run=self.dry_run,
            dev_mode=self.dev_mode,
            duration=time.monotonic() - start_time,
        )

        # A run that changes nothing stays quiet unless verbose
        if summary.changed or self.verbose:
            self._tui.display_summary(summary)
        if self.log_file_path is not None:
            self._write_log(import_map, summary)

        return summary

    def _write_log(self, import_map: ImportMap, summary: UpdateSummary) -> None:
        try:
            with UpdateLogger(self.log_file_path, dry_run=self.dry_run) as logger:
                logger.log_header()
                logger.log_scan_phase(
                    source=str(self.base_path),
                    base_url=self.base_url,
                    import_map=import_map,
                    skipped=summary.skipped,
                )
                logger.log_update_phase(self.html_path, summary.changed)
                logger.log_summary(summary)

                if self.verbose:
                    self._tui.console.print(
                        f"[dim]Log file: {logger.get_log_path()}[/dim]"
                    )
        except OSError as e:
            # Logging is not critical to the run
            print(f"Warning: Could not create log file: {e}", file=sys.stderr)
