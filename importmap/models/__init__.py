"""
Models package for the import map generator.

This package provides convenient imports for all data models:
- AssetKind: Rendering category of a recognized extension
- SkipReason: Why the scanner excluded a file
- ImportMap: Sorted, read-only original URL -> fingerprinted URL mapping
- FileCandidate: File seen by the scanner
- MarkerRegion: Location of the marker pair in a document
- UpdateSummary: Result of one update run
"""

from .asset_kind import AssetKind, SkipReason
from .data_models import (
    FileCandidate,
    ImportMap,
    MarkerRegion,
    UpdateSummary,
)

__all__ = [
    "AssetKind",
    "SkipReason",
    "ImportMap",
    "FileCandidate",
    "MarkerRegion",
    "UpdateSummary",
]
