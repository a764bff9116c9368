"""HTML rendering package for importmap.

Rewrites the region between ``<!-- IMPORTMAP -->`` and ``<!-- /IMPORTMAP -->``
with stylesheet links, an importmap script and modulepreload links.
"""

from .html_transformer import (
    existing_stylesheet_hrefs,
    find_marker_region,
    indent_lines,
    render_content,
    replace_between_markers,
    transform_html,
    update_html_file,
)

__all__ = [
    "existing_stylesheet_hrefs",
    "find_marker_region",
    "indent_lines",
    "render_content",
    "replace_between_markers",
    "transform_html",
    "update_html_file",
]
