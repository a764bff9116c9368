"""File sources the asset scanner can walk.

The scanner only needs two capabilities from a file tree: list every file
(as a slash-separated path relative to the root) and read a file's bytes.
This module provides those capabilities for:

- DirectorySource: a directory on the local filesystem
- ResourceSource: package data exposed through ``importlib.resources``
- MemorySource: an in-memory ``{path: bytes}`` mapping
- ChainedSource: several sources merged, later sources winning on conflicts

Example:
    >>> from importlib.resources import files
    >>> from importmap.scanning import AssetScanner, ResourceSource
    >>> source = ResourceSource(files("mypkg") / "static")  # doctest: +SKIP
    >>> AssetScanner().scan(source, "/static")  # doctest: +SKIP
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, List, Mapping, Set, Tuple

from importmap.errors import ScanError

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable


class FileSource:
    """Base class for trees of files the scanner can read."""

    def iter_files(self) -> Iterator[str]:
        """Yield the slash-separated relative path of every file."""
        raise NotImplementedError

    def read_bytes(self, relative_path: str) -> bytes:
        """Return the contents of the file at a relative path."""
        raise NotImplementedError

    def describe(self) -> str:
        """Short human-readable description used in logs."""
        return type(self).__name__


class DirectorySource(FileSource):
    """Files under a directory on the local filesystem.

    Directory symlinks are followed once; a symlink that leads back to a
    directory already visited is skipped so cyclic links cannot loop.

    Attributes:
        root: Resolved path of the scanned directory.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()

    def describe(self) -> str:
        return str(self.root)

    def iter_files(self) -> Iterator[str]:
        """Walk the directory tree.

        Raises:
            ScanError: If the root is missing or any directory cannot be listed.
        """
        if not self.root.exists():
            raise ScanError(self.root, "directory not found")
        if not self.root.is_dir():
            raise ScanError(self.root, "not a directory")

        try:
            root_stat = self.root.stat()
        except OSError as e:
            raise ScanError(self.root, e.strerror or str(e)) from e

        # Track visited directories by (device, inode) to detect cycles
        visited_dirs: Set[Tuple[int, int]] = {(root_stat.st_dev, root_stat.st_ino)}

        def on_error(error: OSError) -> None:
            raise ScanError(error.filename or self.root, error.strerror or str(error)) from error

        for dirpath, dirnames, filenames in os.walk(
            self.root, onerror=on_error, followlinks=True
        ):
            dirs_to_remove: List[str] = []
            for dirname in dirnames:
                try:
                    dir_stat = os.stat(os.path.join(dirpath, dirname))
                except OSError:
                    # Directory vanished or cannot be stat-ed
                    dirs_to_remove.append(dirname)
                    continue
                dir_id = (dir_stat.st_dev, dir_stat.st_ino)
                if dir_id in visited_dirs:
                    dirs_to_remove.append(dirname)
                else:
                    visited_dirs.add(dir_id)

            for dirname in dirs_to_remove:
                dirnames.remove(dirname)

            relative_dir = Path(dirpath).relative_to(self.root)
            for filename in filenames:
                yield (relative_dir / filename).as_posix()

    def read_bytes(self, relative_path: str) -> bytes:
        file_path = self.root / relative_path
        try:
            return file_path.read_bytes()
        except OSError as e:
            raise ScanError(file_path, e.strerror or str(e)) from e


class ResourceSource(FileSource):
    """Files inside an ``importlib.resources`` tree (embedded package data).

    Args:
        root: A Traversable, e.g. ``importlib.resources.files("pkg") / "static"``.
    """

    def __init__(self, root: "Traversable") -> None:
        self.root = root

    def describe(self) -> str:
        return f"resources:{self.root.name}"

    def iter_files(self) -> Iterator[str]:
        if not self.root.is_dir():
            raise ScanError(self.root.name, "not a resource directory")
        yield from self._walk(self.root, "")

    def _walk(self, directory: "Traversable", prefix: str) -> Iterator[str]:
        subdirs = []
        for entry in directory.iterdir():
            if entry.is_file():
                yield prefix + entry.name
            elif entry.is_dir():
                subdirs.append(entry)
        for subdir in subdirs:
            yield from self._walk(subdir, f"{prefix}{subdir.name}/")

    def read_bytes(self, relative_path: str) -> bytes:
        entry = self.root
        for part in relative_path.split("/"):
            entry = entry / part
        try:
            return entry.read_bytes()
        except OSError as e:
            raise ScanError(relative_path, e.strerror or str(e)) from e


class MemorySource(FileSource):
    """Files held in memory as a mapping of relative path to bytes."""

    def __init__(self, files: Mapping[str, bytes]) -> None:
        self._files: Dict[str, bytes] = {
            path.replace("\\", "/").strip("/"): contents
            for path, contents in files.items()
        }

    def describe(self) -> str:
        return f"memory:{len(self._files)} files"

    def iter_files(self) -> Iterator[str]:
        yield from self._files

    def read_bytes(self, relative_path: str) -> bytes:
        try:
            return self._files[relative_path]
        except KeyError as e:
            raise ScanError(relative_path, "no such file") from e


class ChainedSource(FileSource):
    """Several sources presented as one tree.

    When two sources hold the same relative path, the later source wins
    and the file is read from it.
    """

    def __init__(self, *sources: FileSource) -> None:
        self._sources = sources
        self._owners: Dict[str, FileSource] = {}

    def describe(self) -> str:
        return " + ".join(source.describe() for source in self._sources)

    def iter_files(self) -> Iterator[str]:
        owners: Dict[str, FileSource] = {}
        for source in self._sources:
            for relative_path in source.iter_files():
                owners[relative_path] = source
        self._owners = owners
        yield from owners

    def read_bytes(self, relative_path: str) -> bytes:
        source = self._owners.get(relative_path)
        if source is None:
            raise ScanError(relative_path, "no such file")
        return source.read_bytes(relative_path)
