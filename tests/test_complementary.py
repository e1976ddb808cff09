"""
Unit tests for complementary palette synthesis.
"""

from chromapal.services.colors.colorspace import Color, hsl_to_rgb, hue_difference
from chromapal.services.colors.complementary import (
    EMPTY_BASE_NOTICE, complementary_color, rotate_hue, synthesize_complementary
)
from chromapal.services.colors.selection import PaletteEntry


class TestHueRotation:
    """Test hue arithmetic wraparound"""

    def test_wraps_forward(self):
        assert rotate_hue(350, 30) == 20
        assert rotate_hue(200, 180) == 20

    def test_wraps_negative(self):
        assert rotate_hue(20, -30) == 350
        assert rotate_hue(0, -30) == 330


class TestComplementaryColor:
    """Test single color complements"""

    def test_red_to_cyan(self):
        assert complementary_color(Color(255, 0, 0)) == Color(0, 255, 255)

    def test_achromatic_unchanged(self):
        assert complementary_color(Color(128, 128, 128)) == Color(128, 128, 128)


class TestSynthesizeComplementary:
    """Test palette-level synthesis"""

    def test_empty_palette_sets_notice(self):
        result = synthesize_complementary([])
        assert result.entries == []
        assert result.is_empty
        assert result.notice == EMPTY_BASE_NOTICE

    def test_single_red_entry(self):
        base = PaletteEntry(color=Color(255, 0, 0), percentage=40)
        result = synthesize_complementary([base])

        assert result.notice is None
        assert [e.color for e in result.entries] == [
            Color(255, 0, 0),
            Color(0, 255, 255),
            Color(*hsl_to_rgb(210, 100, 50)),
            Color(*hsl_to_rgb(150, 100, 50)),
        ]
        assert [e.percentage for e in result.entries] == [40, 40, 28, 28]

    def test_shape_and_order(self):
        base = [
            PaletteEntry(color=Color(200, 80, 40), percentage=35),
            PaletteEntry(color=Color(20, 60, 180), percentage=25),
            PaletteEntry(color=Color(240, 240, 240), percentage=10),
        ]
        result = synthesize_complementary(base)

        assert len(result.entries) == 4 * len(base)
        for i, entry in enumerate(base):
            assert result.entries[4 * i] is entry

    def test_complement_hue_is_opposite(self):
        base = [PaletteEntry(color=Color(*rgb), percentage=20)
                for rgb in [(200, 80, 40), (20, 60, 180), (90, 200, 60), (255, 0, 4)]]
        result = synthesize_complementary(base)

        for i, entry in enumerate(base):
            base_hue = entry.color.hsl[0]
            derived_hue = result.entries[4 * i + 1].color.hsl[0]
            assert hue_difference(derived_hue, (base_hue + 180) % 360) <= 2

    def test_analogous_share_seventy_percent(self):
        base = [PaletteEntry(color=Color(0, 0, 255), percentage=10)]
        entries = synthesize_complementary(base).entries
        assert [e.percentage for e in entries] == [10, 10, 7, 7]

    def test_input_not_mutated(self):
        base = [PaletteEntry(color=Color(10, 200, 30), percentage=50)]
        snapshot = list(base)
        synthesize_complementary(base)
        assert base == snapshot
