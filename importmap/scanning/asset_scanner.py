"""Asset scanning and URL fingerprinting.

This module provides the AssetScanner class, which walks a file source,
decides which files take part in the import map, and computes the
fingerprinted URL for each of them.

Example:
    >>> from importmap.scanning import AssetScanner
    >>> scanner = AssetScanner()
    >>> imports = scanner.scan_directory(Path("dist"), base_url="/static")
    >>> for original_url, hashed_url in imports.items():
    ...     print(f"{original_url} -> {hashed_url}")
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from importmap.models import FileCandidate, ImportMap, SkipReason

from .content_hasher import ContentHasher
from .file_sources import DirectorySource, FileSource

DEV_BUILD_MARKERS = (".development.", ".dev.")
TEST_FILE_MARKER = ".test."
TESTS_DIRECTORY = "tests"


@dataclass(frozen=True)
class ScanPolicy:
    """Rules deciding which files take part in the import map.

    Rules are applied in declaration order and the first one that rejects a
    file decides its SkipReason.
    """
    extensions: Tuple[str, ...] = ImportMap.EXTENSIONS
    exclude_root_scripts: bool = True   # service-worker.js and friends
    exclude_dev_builds: bool = True     # foo.development.js, foo.dev.js
    exclude_internal: bool = True       # _partials, tests/, foo.test.js

    def evaluate(self, candidate: FileCandidate) -> Optional[SkipReason]:
        """Return why a candidate is excluded, or None when it is accepted."""
        if candidate.extension not in self.extensions:
            return SkipReason.UNSUPPORTED_EXTENSION

        # Root-level scripts must stay at a fixed, unhashed URL
        if (
            self.exclude_root_scripts
            and candidate.extension == "js"
            and candidate.is_root_level
        ):
            return SkipReason.ROOT_SCRIPT

        name = candidate.name
        if self.exclude_dev_builds and any(marker in name for marker in DEV_BUILD_MARKERS):
            return SkipReason.DEVELOPMENT_BUILD

        if self.exclude_internal:
            if name.startswith("_"):
                return SkipReason.UNDERSCORE_PARTIAL
            if TESTS_DIRECTORY in candidate.parent.split("/"):
                return SkipReason.TESTS_DIRECTORY
            if TEST_FILE_MARKER in name:
                return SkipReason.TEST_FILE

        return None


class AssetScanner:
    """Builds ImportMaps from trees of static assets.

    The scanner is the same for every kind of file tree; only the FileSource
    changes. A read failure on any file aborts the whole scan, so an
    ImportMap is always complete for the tree it describes.

    Attributes:
        policy: The ScanPolicy applied to each file.
        _hasher: ContentHasher used for fingerprints.
        _skipped: Files excluded during the last scans, with reasons.

    Example:
        >>> scanner = AssetScanner(policy=ScanPolicy(exclude_internal=False))
        >>> imports = scanner.scan(MemorySource({"js/app.js": b"..."}), "/assets")
        >>> list(imports)
        ['/assets/js/app.js']
    """

    def __init__(
        self,
        hasher: Optional[ContentHasher] = None,
        policy: Optional[ScanPolicy] = None,
    ) -> None:
        """Initialize the AssetScanner.

        Args:
            hasher: Optional ContentHasher instance. If not provided, a new
                instance with the default fingerprint length is created.
            policy: Optional ScanPolicy. Defaults to all rules enabled.
        """
        self._hasher = hasher if hasher is not None else ContentHasher(ImportMap.HASH_LEN)
        self.policy = policy if policy is not None else ScanPolicy()
        self._skipped: List[Tuple[str, SkipReason]] = []

    def scan(self, source: FileSource, base_url: str = "") -> ImportMap:
        """Scan a file source and build its ImportMap.

        Args:
            source: The tree of files to scan.
            base_url: URL prefix for every entry. Trailing slashes are removed.

        Returns:
            ImportMap of original URL -> fingerprinted URL, sorted by key.

        Raises:
            ScanError: If the source cannot be traversed or a file cannot be read.
        """
        base_url = base_url.rstrip("/")
        entries: List[Tuple[str, str]] = []

        for relative_path in source.iter_files():
            name = relative_path.rsplit("/", 1)[-1]
            extension = FileCandidate.extension_of(name)

            # Cheap rejection before reading the file
            if extension not in self.policy.extensions:
                self._skipped.append((relative_path, SkipReason.UNSUPPORTED_EXTENSION))
                continue

            candidate = FileCandidate(
                relative_path=relative_path,
                contents=source.read_bytes(relative_path),
                extension=extension,
            )
            entry = self.process_candidate(candidate, base_url)
            if entry is not None:
                entries.append(entry)

        # Later entries overwrite earlier ones with the same original URL
        return ImportMap(entries)

    def scan_directory(self, root: Path, base_url: str = "") -> ImportMap:
        """Scan a directory on the local filesystem."""
        return self.scan(DirectorySource(root), base_url)

    def process_candidate(
        self, candidate: FileCandidate, base_url: str = ""
    ) -> Optional[Tuple[str, str]]:
        """Apply the policy to one file and build its URL pair.

        Args:
            candidate: The file to process.
            base_url: URL prefix, already stripped of trailing slashes.

        Returns:
            (original URL, fingerprinted URL), or None if the file is excluded.
        """
        reason = self.policy.evaluate(candidate)
        if reason is not None:
            self._skipped.append((candidate.relative_path, reason))
            return None

        fingerprint = self._hasher.fingerprint(candidate.contents)
        hashed_name = f"{candidate.stem}.{fingerprint}.{candidate.extension}"

        original_url = f"{base_url}/{candidate.relative_path}"
        if candidate.parent:
            hashed_url = f"{base_url}/{candidate.parent}/{hashed_name}"
        else:
            hashed_url = f"{base_url}/{hashed_name}"

        return original_url, hashed_url

    def get_skipped(self) -> List[Tuple[str, SkipReason]]:
        """Get the files excluded so far, with the rule that excluded them.

        Returns:
            List of (relative path, SkipReason) tuples in scan order.
        """
        return self._skipped.copy()

    def clear_skipped(self) -> None:
        """Clear the list of excluded files."""
        self._skipped.clear()

    @property
    def hasher(self) -> ContentHasher:
        """Get the ContentHasher instance used by this scanner."""
        return self._hasher
