"""
Core data models for the import map generator.

This module contains the following types:
- ImportMap: Immutable, key-sorted mapping of original URL to fingerprinted URL
- FileCandidate: A file seen by the scanner before filtering
- MarkerRegion: Location of the <!-- IMPORTMAP --> region inside a document
- UpdateSummary: Result of one scan-and-update run
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, TypeVar, Union

from importmap.errors import SerializationError

from .asset_kind import AssetKind, SkipReason

PathT = TypeVar("PathT", str, PurePath)

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


class ImportMap(Mapping):
    """Mapping of original asset URLs to their fingerprinted URLs.

    Entries are kept sorted by key so iteration, rendering and serialization
    never depend on traversal order. The map is read-only once built; when
    the same key is supplied more than once, the last value wins.

    Example:
        >>> imports = ImportMap({"/app/main.js": "/app/main.1a2b3c4d.js"})
        >>> imports["/app/main.js"]
        '/app/main.1a2b3c4d.js'
        >>> ImportMap.strip_hash("/app/main.1a2b3c4d.js")
        '/app/main.js'
    """

    EXTENSIONS: Tuple[str, ...] = ("js", "mjs", "css", "json", "wasm")
    HASH_LEN = 8
    MARKER_OPEN = "<!-- IMPORTMAP -->"
    MARKER_CLOSE = "<!-- /IMPORTMAP -->"

    def __init__(
        self,
        entries: Optional[Union[Mapping, Iterable[Tuple[str, str]]]] = None,
    ) -> None:
        collected: Dict[str, str] = {}
        if entries is not None:
            items = entries.items() if isinstance(entries, Mapping) else entries
            for original_url, hashed_url in items:
                collected[original_url] = hashed_url
        self._entries: Dict[str, str] = dict(sorted(collected.items()))

    @classmethod
    def empty(cls) -> "ImportMap":
        """Return an empty map, used in development mode."""
        return cls()

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ImportMap({self._entries!r})"

    def lookup(self, original_url: str) -> Optional[str]:
        """Return the fingerprinted URL for an original URL, if present."""
        return self._entries.get(original_url)

    def original_for(self, hashed_url: str) -> Optional[str]:
        """Return the original URL that maps to a fingerprinted URL."""
        for original_url, value in self._entries.items():
            if value == hashed_url:
                return original_url
        return None

    def scripts(self) -> Dict[str, str]:
        """Entries rendered as modules (scripts and data modules), sorted."""
        return {
            key: value
            for key, value in self._entries.items()
            if _kind_of(value) is not AssetKind.STYLESHEET
        }

    def stylesheets(self) -> Dict[str, str]:
        """Stylesheet entries, sorted by key."""
        return {
            key: value
            for key, value in self._entries.items()
            if _kind_of(value) is AssetKind.STYLESHEET
        }

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        """Return the browser import map structure for the module entries."""
        return {"imports": self.scripts()}

    def to_json(self) -> str:
        """Serialize ``to_dict()`` as pretty-printed JSON.

        Raises:
            SerializationError: If an entry cannot be represented in JSON.
        """
        try:
            return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize import map: {e}") from e

    @classmethod
    def strip_hash(cls, path: PathT) -> Optional[PathT]:
        """Remove the fingerprint from a filename: ``foo.abc12345.js`` -> ``foo.js``.

        Accepts URL strings or filesystem paths and returns the same type.
        The check is purely syntactic: the stem's last dot-separated segment
        must be exactly HASH_LEN hex digits and the extension must be
        recognized. The result is not checked against any map or file.

        Args:
            path: URL path or filesystem path of a fingerprinted asset.

        Returns:
            The path with the fingerprint removed, or None when the path
            carries no fingerprint or has an unrecognized extension.
        """
        if isinstance(path, PurePath):
            name = path.name
        else:
            name = path.rsplit("/", 1)[-1]

        if "." not in name:
            return None
        stem, ext = name.rsplit(".", 1)
        if not stem or ext not in cls.EXTENSIONS:
            return None
        if "." not in stem:
            return None

        base, fingerprint = stem.rsplit(".", 1)
        if len(fingerprint) != cls.HASH_LEN or not _HEX_RE.match(fingerprint):
            return None

        stripped = f"{base}.{ext}"
        if isinstance(path, PurePath):
            return path.with_name(stripped)
        return path[: len(path) - len(name)] + stripped


def _kind_of(url: str) -> Optional[AssetKind]:
    return AssetKind.from_path(url)


@dataclass
class FileCandidate:
    """A file found while walking a source, before any filtering."""
    relative_path: str                # Slash-separated path under the scan root
    contents: bytes                   # Raw file bytes
    extension: str = ""               # Extension without the dot

    def __post_init__(self) -> None:
        self.relative_path = self.relative_path.replace("\\", "/").strip("/")
        if not self.extension:
            self.extension = self.extension_of(self.name)

    @staticmethod
    def extension_of(name: str) -> str:
        """Return the extension without the dot; dotfiles like ".js" have none."""
        if "." not in name[1:]:
            return ""
        return name.rsplit(".", 1)[1]

    @property
    def name(self) -> str:
        return self.relative_path.rsplit("/", 1)[-1]

    @property
    def stem(self) -> str:
        if not self.extension_of(self.name):
            return self.name
        return self.name.rsplit(".", 1)[0]

    @property
    def parent(self) -> str:
        if "/" not in self.relative_path:
            return ""
        return self.relative_path.rsplit("/", 1)[0]

    @property
    def is_root_level(self) -> bool:
        return self.parent == ""


@dataclass(frozen=True)
class MarkerRegion:
    """Position of the marker pair inside an HTML document."""
    open_start: int                   # Index of the open marker
    content_start: int                # Index just past the open marker
    close_start: int                  # Index of the close marker
    indent: str                       # Text between line start and open marker
    inner: str                        # Text currently between the markers


@dataclass
class UpdateSummary:
    """Summary of one scan-and-update run returned by UpdateOrchestrator."""
    html_path: Path                   # Document that was (or would be) updated
    entries: int = 0                  # Total import map entries
    scripts: int = 0                  # Module entries (scripts and data)
    stylesheets: int = 0              # Stylesheet entries
    skipped: List[Tuple[str, SkipReason]] = field(default_factory=list)
    changed: bool = False             # Whether the document content changed
    dry_run: bool = False             # Dry run mode flag
    dev_mode: bool = False            # Empty map used to clear the region
    duration: float = 0.0             # Total run duration in seconds
