"""
Enums describing how the scanner classifies files.

AssetKind groups recognized extensions by how they are rendered into HTML:
1. SCRIPT (js, mjs) - listed in the importmap and preloaded
2. STYLESHEET (css) - emitted as <link rel="stylesheet"> in document order
3. DATA (json, wasm) - module formats, rendered like scripts

SkipReason records why a file was left out of the import map.
"""

from enum import Enum
from pathlib import PurePath
from typing import Optional, Union


class AssetKind(Enum):
    """Rendering category of a recognized asset."""
    SCRIPT = "script"
    STYLESHEET = "stylesheet"
    DATA = "data"

    @classmethod
    def from_extension(cls, extension: str) -> Optional["AssetKind"]:
        """Return the kind for an extension (without the dot), or None."""
        return _EXTENSION_KINDS.get(extension)

    @classmethod
    def from_path(cls, path: Union[str, PurePath]) -> Optional["AssetKind"]:
        """Return the kind for a URL or file path based on its extension."""
        name = str(path).rsplit("/", 1)[-1]
        if "." not in name:
            return None
        return cls.from_extension(name.rsplit(".", 1)[1])

    @property
    def is_module(self) -> bool:
        """Whether assets of this kind belong in the importmap script block."""
        return self is not AssetKind.STYLESHEET


_EXTENSION_KINDS = {
    "js": AssetKind.SCRIPT,
    "mjs": AssetKind.SCRIPT,
    "css": AssetKind.STYLESHEET,
    "json": AssetKind.DATA,
    "wasm": AssetKind.DATA,
}


class SkipReason(Enum):
    """Why the scanner excluded a file, in the order the rules are applied."""
    UNSUPPORTED_EXTENSION = "unsupported_extension"  # Not in the allow-list
    ROOT_SCRIPT = "root_script"                      # .js directly under the root
    DEVELOPMENT_BUILD = "development_build"          # .development. / .dev. infix
    UNDERSCORE_PARTIAL = "underscore_partial"        # Filename starts with _
    TESTS_DIRECTORY = "tests_directory"              # Inside a tests/ directory
    TEST_FILE = "test_file"                          # .test. infix
