"""Text outlines from TTF/OTF fonts.

This module provides the FontOutlineReader class for loading font files
and turning glyph outlines and whole strings into blueprints.
"""

from pathlib import Path

import structlog
from fontTools.pens.recordingPen import RecordingPen
from fontTools.ttLib import TTFont, TTLibError

from blueprint2d.core.organise import organise_blueprints
from blueprint2d.domain import Blueprint, Blueprints, PointLike, Transform2D, as_point
from blueprint2d.exceptions import FontLoadError
from blueprint2d.io.converter import recording_to_blueprints

logger = structlog.get_logger(__name__)


class FontOutlineReader:
    """Loads TTF/OTF fonts and extracts glyph outlines as blueprints.

    Example:
        reader = FontOutlineReader(Path("font.ttf"))
        reader.load()
        shape = reader.text_blueprints("Hi", font_size=16)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def __enter__(self) -> "FontOutlineReader":
        self.load()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the font file is missing or invalid
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            self._font = TTFont(str(self._font_path))
        except (OSError, TTLibError, AssertionError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    def close(self) -> None:
        if self._font is not None:
            self._font.close()
            self._font = None

    @property
    def font(self) -> TTFont:
        """The loaded fontTools font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self.font["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        return self.font["maxp"].numGlyphs

    def glyph_name(self, character: str) -> str:
        """Name of the glyph drawing a character, ``.notdef`` if it has none."""
        cmap = self.font.getBestCmap() or {}
        return cmap.get(ord(character), ".notdef")

    def advance_width(self, glyph_name: str) -> int:
        hmtx = self.font["hmtx"]
        if glyph_name not in hmtx.metrics:
            return 0
        return hmtx.metrics[glyph_name][0]

    def glyph_blueprints(self, glyph_name: str) -> list[Blueprint]:
        """Outline loops of a glyph, in font units.

        Returns:
            One blueprint per contour; empty for unknown or blank glyphs
        """
        glyph_set = self.font.getGlyphSet()
        if glyph_name not in glyph_set:
            return []
        pen = RecordingPen()
        glyph_set[glyph_name].draw(pen)
        return recording_to_blueprints(pen.value)

    def text_blueprints(
        self, text: str, font_size: float = 16.0, start: PointLike = (0.0, 0.0)
    ) -> Blueprints:
        """Outline a line of text.

        Glyphs are placed side by side using their advance widths, scaled so
        that one em measures font_size, with the baseline starting at start.

        Args:
            text: Characters to draw
            font_size: Size of one em in output units
            start: Origin of the baseline

        Returns:
            One region per glyph part, holes grouped with their outer loop
        """
        origin = as_point(start)
        scale = font_size / self.units_per_em
        cursor = 0.0

        regions = []
        for character in text:
            name = self.glyph_name(character)
            loops = self.glyph_blueprints(name)
            if loops:
                placement = Transform2D.scaling(scale).then(
                    Transform2D.translation(origin.x + cursor * scale, origin.y)
                )
                placed = [loop.transform(placement) for loop in loops]
                regions.extend(organise_blueprints(placed).blueprints)
            cursor += self.advance_width(name)

        logger.debug("Text outlined", text=text, regions=len(regions), font=str(self._font_path))
        return Blueprints(tuple(regions))


def text_blueprints(
    text: str,
    font_path: Path,
    font_size: float = 16.0,
    start: PointLike = (0.0, 0.0),
) -> Blueprints:
    """Outline a line of text with the given font.

    Raises:
        FontLoadError: If the font cannot be loaded
    """
    with FontOutlineReader(font_path) as reader:
        return reader.text_blueprints(text, font_size, start)
