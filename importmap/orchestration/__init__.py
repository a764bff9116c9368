"""Workflow orchestration package for importmap.

This package contains orchestration components for update runs:
- UpdateLogger: Structured logging of a run to a log file.
- UpdateOrchestrator: Central coordinator for the scan and update phases.
"""

from importmap.orchestration.update_logger import UpdateLogger
from importmap.orchestration.update_orchestrator import UpdateOrchestrator

__all__ = ["UpdateLogger", "UpdateOrchestrator"]
