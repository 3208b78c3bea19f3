"""I/O layer for blueprint2d.

This module handles everything that leaves or enters the process:

Key responsibilities:
- Save and load shapes as JSON profile files
- Render shapes as SVG documents
- Outline text from TTF/OTF fonts using fonttools

Key classes:
- ProfileReader: Load shapes from profile files
- ProfileWriter: Save shapes to profile files
- FontOutlineReader: Extract glyph outlines as blueprints
"""

from blueprint2d.io.font import FontOutlineReader, text_blueprints
from blueprint2d.io.profile import ProfileReader, ProfileWriter
from blueprint2d.io.svg import shape_to_svg, shape_to_svg_paths, view_box

__all__ = [
    "FontOutlineReader",
    "ProfileReader",
    "ProfileWriter",
    "shape_to_svg",
    "shape_to_svg_paths",
    "text_blueprints",
    "view_box",
]
