"""Shared test fixtures."""

from pathlib import Path
from typing import Callable

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from blueprint2d.domain import Shape2D
from blueprint2d.io import ProfileWriter

UNITS_PER_EM = 1000


def _rectangle_glyph(*rectangles: tuple[int, int, int, int, bool]):
    """Draw rectangles (x_min, y_min, x_max, y_max, clockwise) into a TrueType glyph."""
    pen = TTGlyphPen(None)
    for x_min, y_min, x_max, y_max, clockwise in rectangles:
        corners = [(x_min, y_min), (x_max, y_min), (x_max, y_max), (x_min, y_max)]
        if clockwise:
            corners = [corners[0], *reversed(corners[1:])]
        pen.moveTo(corners[0])
        for corner in corners[1:]:
            pen.lineTo(corner)
        pen.closePath()
    return pen.glyph()


@pytest.fixture(scope="session")
def font_path(tmp_path_factory) -> Path:
    """A tiny TrueType font drawing "O" (with a counter), "I" and a space.

    Outlines follow the TrueType convention: outer contours clockwise,
    counters counter-clockwise.
    """
    builder = FontBuilder(unitsPerEm=UNITS_PER_EM, isTTF=True)
    builder.setupGlyphOrder([".notdef", "O", "I", "space"])
    builder.setupCharacterMap({ord("O"): "O", ord("I"): "I", ord(" "): "space"})
    builder.setupGlyf(
        {
            ".notdef": TTGlyphPen(None).glyph(),
            "O": _rectangle_glyph((100, 0, 500, 700, True), (200, 100, 400, 600, False)),
            "I": _rectangle_glyph((50, 0, 150, 700, True)),
            "space": TTGlyphPen(None).glyph(),
        }
    )
    builder.setupHorizontalMetrics(
        {".notdef": (500, 0), "O": (600, 100), "I": (200, 50), "space": (250, 0)}
    )
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "Blueprint Test", "styleName": "Regular"})
    builder.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    builder.setupPost()

    path = tmp_path_factory.mktemp("fonts") / "BlueprintTest.ttf"
    builder.save(str(path))
    return path


@pytest.fixture
def write_profile(tmp_path) -> Callable[[str, Shape2D], Path]:
    """Write a shape as a profile file in the test's temporary directory."""

    def write(name: str, shape: Shape2D) -> Path:
        path = tmp_path / name
        ProfileWriter(path).save(shape)
        return path

    return write
