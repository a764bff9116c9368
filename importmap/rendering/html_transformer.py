"""Marker-delimited HTML rewriting.

The generated markup lives between two literal comments:

    <!-- IMPORTMAP -->
    ...generated links and importmap script...
    <!-- /IMPORTMAP -->

Everything outside the markers, the markers included, is left untouched.
All functions here are pure except ``update_html_file``, which reads and
writes the document.

Example:
    >>> html = "<head>\\n  <!-- IMPORTMAP --><!-- /IMPORTMAP -->\\n</head>"
    >>> imports = ImportMap({"/app.mjs": "/app.0123abcd.mjs"})
    >>> print(transform_html(html, imports))  # doctest: +SKIP
"""

import html as html_lib
import re
from pathlib import Path
from typing import Dict, List, Optional

from importmap.errors import (
    DocumentDecodeError,
    DocumentNotFoundError,
    MarkersNotFoundError,
    SerializationError,
)
from importmap.models import ImportMap, MarkerRegion

_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_LINK_TAG_RE = re.compile(r"<link\b[^>]*>", re.IGNORECASE)
_ATTR_RE = re.compile(
    r"""([^\s"'<>/=]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+))"""
)


def find_marker_region(html: str) -> Optional[MarkerRegion]:
    """Locate the marker pair in a document.

    The close marker is searched only after the first open marker.

    Returns:
        The MarkerRegion, or None if either marker is missing.
    """
    open_start = html.find(ImportMap.MARKER_OPEN)
    if open_start == -1:
        return None
    content_start = open_start + len(ImportMap.MARKER_OPEN)
    close_start = html.find(ImportMap.MARKER_CLOSE, content_start)
    if close_start == -1:
        return None

    line_start = html.rfind("\n", 0, open_start) + 1
    return MarkerRegion(
        open_start=open_start,
        content_start=content_start,
        close_start=close_start,
        indent=html[line_start:open_start],
        inner=html[content_start:close_start],
    )


def indent_lines(content: str, indent: str) -> str:
    """Prefix every non-empty line with the indent; blank lines stay blank."""
    if not content:
        return ""
    return "\n".join(indent + line if line else "" for line in content.split("\n"))


def replace_between_markers(html: str, content: str) -> Optional[str]:
    """Replace the text between the markers with indented content.

    Args:
        html: The document text.
        content: Unindented markup to place between the markers.

    Returns:
        The new document text, or None if the markers are missing.
    """
    region = find_marker_region(html)
    if region is None:
        return None
    return _splice(html, region, content)


def _splice(html: str, region: MarkerRegion, content: str) -> str:
    return (
        html[: region.content_start]
        + "\n"
        + indent_lines(content, region.indent)
        + "\n"
        + region.indent
        + html[region.close_start :]
    )


def existing_stylesheet_hrefs(text: str) -> List[str]:
    """Return hrefs of ``<link rel="stylesheet">`` tags in document order.

    Links inside HTML comments are ignored.
    """
    hrefs: List[str] = []
    for tag in _LINK_TAG_RE.finditer(_COMMENT_RE.sub("", text)):
        attrs: Dict[str, str] = {}
        for match in _ATTR_RE.finditer(tag.group(0)):
            name = match.group(1).lower()
            value = next(v for v in match.groups()[1:] if v is not None)
            attrs.setdefault(name, html_lib.unescape(value))
        if "stylesheet" in attrs.get("rel", "").lower().split() and attrs.get("href"):
            hrefs.append(attrs["href"])
    return hrefs


def _resolve_stylesheet(href: str, stylesheets: Dict[str, str]) -> Optional[str]:
    """Map an href found in the document to a current fingerprinted URL."""
    if href in stylesheets:
        return stylesheets[href]
    if href in stylesheets.values():
        return href
    # Fingerprinted URL from a previous build
    original = ImportMap.strip_hash(href)
    if original is not None:
        return stylesheets.get(original)
    return None


def _ordered_stylesheets(text: str, stylesheets: Dict[str, str]) -> List[str]:
    ordered: List[str] = []
    for href in existing_stylesheet_hrefs(text):
        hashed_url = _resolve_stylesheet(href, stylesheets)
        if hashed_url is not None and hashed_url not in ordered:
            ordered.append(hashed_url)
    return ordered


def _attr(value: str) -> str:
    return html_lib.escape(value, quote=True)


def render_content(import_map: ImportMap, html: str, region: Optional[MarkerRegion] = None) -> str:
    """Build the unindented markup for the marker region.

    Sections, each omitted when empty: stylesheet links in the order the
    document already lists them, the importmap script block, and one
    modulepreload link per module entry.

    Stylesheet order comes from the links in the region that resolve to a
    map entry. If none resolve, the whole document is searched instead.

    Args:
        import_map: The map to render. An empty map renders nothing.
        html: The current document, searched for existing stylesheet order.
        region: The document's marker region, if already located.

    Raises:
        SerializationError: If the import map cannot be serialized.
    """
    if not import_map:
        return ""

    sections: List[str] = []

    stylesheets = import_map.stylesheets()
    if stylesheets:
        ordered: List[str] = []
        if region is not None:
            ordered = _ordered_stylesheets(region.inner, stylesheets)
        if not ordered:
            ordered = _ordered_stylesheets(html, stylesheets)
        if ordered:
            sections.append(
                "\n".join(f'<link rel="stylesheet" href="{_attr(url)}">' for url in ordered)
            )

    modules = import_map.scripts()
    if modules:
        sections.append(f'<script type="importmap">\n{import_map.to_json()}\n</script>')
        sections.append(
            "\n".join(
                f'<link rel="modulepreload" href="{_attr(url)}">' for url in modules.values()
            )
        )

    return "\n".join(sections)


def transform_html(html: str, import_map: ImportMap) -> Optional[str]:
    """Rewrite the marker region of a document for an import map.

    Re-running on the output with the same map returns identical text.

    Args:
        html: The current document text.
        import_map: The map to render; empty clears the region.

    Returns:
        The new document text, or None if the markers are missing or the
        map cannot be serialized.
    """
    region = find_marker_region(html)
    if region is None:
        return None
    try:
        content = render_content(import_map, html, region)
    except SerializationError:
        return None
    return _splice(html, region, content)


def update_html_file(path: Path, import_map: ImportMap, dry_run: bool = False) -> bool:
    """Update a document in place between the markers.

    The file is only written when its content changes. Line endings are
    preserved.

    Args:
        path: The HTML document.
        import_map: The map to render.
        dry_run: If True, never write; only report whether it would change.

    Returns:
        True if the document changed (or would change in dry-run mode).

    Raises:
        DocumentNotFoundError: If the document does not exist.
        DocumentDecodeError: If the document is not valid UTF-8.
        MarkersNotFoundError: If the document lacks the marker pair.
        OSError: If the document cannot be read or written.
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentNotFoundError(path)

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            html = f.read()
    except UnicodeDecodeError as e:
        raise DocumentDecodeError(path, e.reason) from e

    updated = transform_html(html, import_map)
    if updated is None:
        raise MarkersNotFoundError(path)
    if updated == html:
        return False

    if not dry_run:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(updated)
    return True
