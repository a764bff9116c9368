"""Terminal UI package for importmap."""

from importmap.ui.report_tui import ReportTUI

__all__ = ["ReportTUI"]
