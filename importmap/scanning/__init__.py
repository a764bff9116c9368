"""Asset scanning package for importmap.

This package walks trees of static assets and fingerprints them:

- ContentHasher: Computes short xxHash fingerprints of file contents.
- FileSource and its implementations (DirectorySource, ResourceSource,
  MemorySource, ChainedSource): the trees the scanner can walk.
- ScanPolicy: Which files take part in the import map.
- AssetScanner: Builds an ImportMap from a FileSource.

Example:
    >>> from importmap.scanning import AssetScanner
    >>> from pathlib import Path
    >>>
    >>> scanner = AssetScanner()
    >>> imports = scanner.scan_directory(Path("dist"), base_url="/static")
"""

from .asset_scanner import AssetScanner, ScanPolicy
from .content_hasher import ContentHasher
from .file_sources import (
    ChainedSource,
    DirectorySource,
    FileSource,
    MemorySource,
    ResourceSource,
)

__all__ = [
    "AssetScanner",
    "ScanPolicy",
    "ContentHasher",
    "FileSource",
    "DirectorySource",
    "ResourceSource",
    "MemorySource",
    "ChainedSource",
]
