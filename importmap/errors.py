"""
Exception types for the import map generator.

Each failure kind has its own class so the CLI can report it with a distinct
message. The classes also derive from the closest built-in exception, so
callers that only care about ``OSError`` or ``ValueError`` keep working.
"""

from pathlib import Path
from typing import Optional, Union


class ImportMapError(Exception):
    """Base class for all import map errors."""


class ScanError(ImportMapError, OSError):
    """A file or directory could not be traversed or read during a scan."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        self.path = str(path)
        self.reason = reason
        message = f"Cannot read {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class DocumentNotFoundError(ImportMapError, FileNotFoundError):
    """The target HTML document does not exist."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)
        super().__init__(f"{self.path} not found")

    def __str__(self) -> str:
        return self.args[0]


class MarkersNotFoundError(ImportMapError, ValueError):
    """The HTML document lacks the <!-- IMPORTMAP --> marker pair."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = str(path) if path is not None else None
        message = "Missing <!-- IMPORTMAP --> or <!-- /IMPORTMAP --> markers"
        if self.path:
            message = f"{message} in {self.path}"
        super().__init__(message)


class SerializationError(ImportMapError, ValueError):
    """The import map could not be serialized to JSON."""


class DocumentDecodeError(ImportMapError, ValueError):
    """The HTML document is not valid UTF-8."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        self.path = str(path)
        message = f"Cannot decode {self.path} as UTF-8"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
