"""importmap - Cache-busting import map generator.

Scans a directory of static assets, maps every script, module and stylesheet
to a URL embedding a hash of its contents, and injects the resulting import
map into an HTML document between <!-- IMPORTMAP --> markers.
"""

__version__ = "0.1.0"

from .errors import (
    DocumentDecodeError,
    DocumentNotFoundError,
    ImportMapError,
    MarkersNotFoundError,
    ScanError,
    SerializationError,
)
from .models import (
    AssetKind,
    FileCandidate,
    ImportMap,
    MarkerRegion,
    SkipReason,
    UpdateSummary,
)
from .rendering import transform_html, update_html_file
from .scanning import AssetScanner, ScanPolicy

__all__ = [
    "__version__",
    "ImportMapError",
    "ScanError",
    "DocumentNotFoundError",
    "DocumentDecodeError",
    "MarkersNotFoundError",
    "SerializationError",
    "AssetKind",
    "SkipReason",
    "ImportMap",
    "FileCandidate",
    "MarkerRegion",
    "UpdateSummary",
    "AssetScanner",
    "ScanPolicy",
    "transform_html",
    "update_html_file",
]


def main() -> None:
    """Entry point for the importmap CLI application.

    Imports and runs the Typer app from the importmap.cli module.
    """
    from importmap.cli import app
    app()
