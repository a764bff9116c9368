"""Pytest fixtures for importmap tests."""

import tempfile
from pathlib import Path
from typing import Dict, Generator

import pytest

from importmap.models import ImportMap
from importmap.scanning import ContentHasher


SAMPLE_HTML = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <!-- IMPORTMAP -->
    <!-- /IMPORTMAP -->
  </head>
  <body>
    <script type="module" src="/js/main.js"></script>
  </body>
</html>
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def hasher() -> ContentHasher:
    """Return a ContentHasher with the default fingerprint length."""
    return ContentHasher(ImportMap.HASH_LEN)


@pytest.fixture
def exclusion_files() -> Dict[str, bytes]:
    """Files where every rule but one excludes something.

    Only assets/app.js should survive the default policy.
    """
    return {
        "app.js": b"self.addEventListener('fetch', () => {});",
        "assets/app.js": b"export const app = 1;",
        "assets/app.development.js": b"export const app = 'debug';",
        "assets/_partial.css": b".partial { color: red; }",
        "assets/app.test.js": b"test('app', () => {});",
        "assets/tests/x.css": b".x { color: blue; }",
    }


@pytest.fixture
def site_dir(temp_dir: Path) -> Path:
    """Create a small built site.

    Creates:
        site/
        ├── index.html (with an empty marker region)
        ├── sw.js (root script, excluded)
        ├── favicon.ico (unsupported extension)
        ├── css/
        │   ├── base.css
        │   └── theme.css
        ├── js/
        │   ├── main.js
        │   ├── util.mjs
        │   └── vendor.dev.js (development build, excluded)
        └── data/
            └── config.json

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Path to the site directory.
    """
    site = temp_dir / "site"
    (site / "css").mkdir(parents=True)
    (site / "js").mkdir()
    (site / "data").mkdir()

    (site / "index.html").write_text(SAMPLE_HTML, encoding="utf-8")
    (site / "sw.js").write_text("self.skipWaiting();")
    (site / "favicon.ico").write_bytes(b"\x00\x00\x01\x00")
    (site / "css" / "base.css").write_text("body { margin: 0; }")
    (site / "css" / "theme.css").write_text("body { color: #333; }")
    (site / "js" / "main.js").write_text("import './util.mjs';")
    (site / "js" / "util.mjs").write_text("export const util = true;")
    (site / "js" / "vendor.dev.js").write_text("console.log('dev');")
    (site / "data" / "config.json").write_text('{"debug": false}')

    return site


@pytest.fixture
def sample_map() -> ImportMap:
    """An ImportMap with modules and stylesheets, built by hand."""
    return ImportMap({
        "/js/main.js": "/js/main.0123abcd.js",
        "/css/a.css": "/css/a.aaaaaaaa.css",
        "/css/b.css": "/css/b.bbbbbbbb.css",
        "/data/config.json": "/data/config.4567cdef.json",
    })
