"""
Unit tests for palette export: CSS/SCSS variables and the PNG palette sheet.
"""

import cv2
import numpy as np
import pytest

from chromapal.services.colors.colorspace import Color
from chromapal.services.colors.complementary import synthesize_complementary
from chromapal.services.colors.selection import PaletteEntry
from chromapal.services.colors.swatches import (
    PADDING, SHEET_WIDTH, TITLE_HEIGHT, render_palette_sheet, render_palette_sheet_b64
)
from chromapal.services.colors.variables import generate_color_variables

PALETTE = [
    PaletteEntry(color=Color(255, 0, 0), percentage=60),
    PaletteEntry(color=Color(0, 0, 255), percentage=30),
    PaletteEntry(color=Color(0, 255, 0), percentage=10),
]


class TestColorVariables:
    """Test CSS/SCSS variable generation"""

    def test_css(self):
        text = generate_color_variables(PALETTE[:1], "css")
        assert text == (
            ":root {\n"
            "  --color-1: rgb(255, 0, 0);\n"
            "  --color-1-rgb: 255, 0, 0;\n"
            "  --color-1-hsl: 0, 100%, 50%;\n"
            "  --color-1-percentage: 60%;\n"
            "}"
        )

    def test_scss(self):
        lines = generate_color_variables(PALETTE, "scss").split("\n")
        assert len(lines) == 4 * len(PALETTE)
        assert lines[4] == "$color-2: rgb(0, 0, 255);"
        assert lines[-1] == "$color-3-percentage: 10%;"

    def test_empty_palette(self):
        assert generate_color_variables([], "css") == ""

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            generate_color_variables(PALETTE, "less")


class TestPaletteSheet:
    """Test PNG palette sheet rendering"""

    def _decode(self, png):
        return cv2.imdecode(np.frombuffer(png, dtype=np.uint8), cv2.IMREAD_COLOR)

    def test_primary_only(self):
        png = render_palette_sheet(PALETTE)
        assert png.startswith(b'\x89PNG\r\n\x1a\n')

        img = self._decode(png)
        # One row of three swatches
        assert img.shape == (PADDING * 2 + TITLE_HEIGHT + 160, SHEET_WIDTH, 3)

        # First swatch is red (BGR)
        y = PADDING + TITLE_HEIGHT + 10
        assert tuple(img[y, PADDING + 10]) == (0, 0, 255)

    def test_with_complementary_section(self):
        derived = synthesize_complementary(PALETTE).entries
        img = self._decode(render_palette_sheet(PALETTE, derived))
        # 1 row primary + 4 rows complementary + spacing
        assert img.shape[0] == PADDING * 2 + (TITLE_HEIGHT + 160) + 80 + (TITLE_HEIGHT + 4 * 160)

    def test_base64_variant(self):
        assert render_palette_sheet_b64(PALETTE).startswith("iVBOR")

    def test_empty_palette(self):
        with pytest.raises(ValueError):
            render_palette_sheet([])
