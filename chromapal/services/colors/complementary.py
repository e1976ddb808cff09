"""
Complementary palette synthesis.

For each base entry the output holds the entry itself, its complement
(hue + 180°) and two analogous variants of the complement at ±30°, all with
the base saturation and lightness.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from loguru import logger

from .colorspace import Color, hsl_to_rgb, round_half_up
from .selection import PaletteEntry

COMPLEMENT_ROTATION = 180
ANALOGOUS_ROTATION = 30
ANALOGOUS_WEIGHT = 0.7

EMPTY_BASE_NOTICE = "No base palette to generate complements"


@dataclass
class ComplementaryResult:
    """Derived palette plus a notice when there was nothing to derive from."""
    entries: List[PaletteEntry] = field(default_factory=list)
    notice: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.entries


def rotate_hue(h: int, degrees: int) -> int:
    """Rotate an integer hue, wrapping into [0, 360)."""
    return (h + degrees) % 360


def complementary_color(color: Color) -> Color:
    """The color with the opposite hue and the same saturation and lightness."""
    h, s, l = color.hsl
    return Color(*hsl_to_rgb(rotate_hue(h, COMPLEMENT_ROTATION), s, l))


def synthesize_complementary(palette: Sequence[PaletteEntry]) -> ComplementaryResult:
    """
    Derive the complementary palette from a finalized palette.

    Args:
        palette: Base palette entries, in display order

    Returns:
        ComplementaryResult with 4 entries per base entry, in input order.
        An empty base yields no entries and sets `notice`.
    """
    if not palette:
        logger.warning(EMPTY_BASE_NOTICE)
        return ComplementaryResult(entries=[], notice=EMPTY_BASE_NOTICE)

    entries: List[PaletteEntry] = []
    for entry in palette:
        h, s, l = entry.color.hsl
        complement = rotate_hue(h, COMPLEMENT_ROTATION)
        analogous_pct = round_half_up(entry.percentage * ANALOGOUS_WEIGHT)

        variations = [
            (complement, entry.percentage),
            (rotate_hue(complement, ANALOGOUS_ROTATION), analogous_pct),
            (rotate_hue(complement, -ANALOGOUS_ROTATION), analogous_pct),
        ]

        entries.append(entry)
        for hue, percentage in variations:
            entries.append(PaletteEntry(color=Color(*hsl_to_rgb(hue, s, l)), percentage=percentage))

    logger.info(f"Derived {len(entries)} complementary entries from {len(palette)} base colors")
    return ComplementaryResult(entries=entries)
