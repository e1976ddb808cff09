"""
Swatch Rendering Module

Renders palettes as a PNG sheet: one titled section per palette, swatches
laid out in rows with RGB, HSL and percentage labels underneath.
"""

import base64
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np
from loguru import logger

from .selection import PaletteEntry

SHEET_WIDTH = 800
PADDING = 40
COLORS_PER_ROW = 3
COLOR_HEIGHT = 100
LABEL_HEIGHT = 60
TITLE_HEIGHT = 60
SECTION_SPACING = 80

BACKGROUND = (255, 255, 255)
TITLE_BAND = (245, 245, 245)
TEXT_COLOR = (54, 54, 54)
FONT = cv2.FONT_HERSHEY_SIMPLEX


def _bgr(entry: PaletteEntry) -> Tuple[int, int, int]:
    color = entry.color
    return (color.b, color.g, color.r)


def _section_height(count: int) -> int:
    rows = max(1, (count + COLORS_PER_ROW - 1) // COLORS_PER_ROW)
    return TITLE_HEIGHT + rows * (COLOR_HEIGHT + LABEL_HEIGHT)


def _put_centered(img: np.ndarray, text: str, center_x: int, baseline_y: int,
                  scale: float, thickness: int = 1) -> None:
    text_size = cv2.getTextSize(text, FONT, scale, thickness)[0]
    cv2.putText(img, text, (int(center_x - text_size[0] / 2), baseline_y),
                FONT, scale, TEXT_COLOR, thickness, cv2.LINE_AA)


def _draw_section(img: np.ndarray, palette: Sequence[PaletteEntry], start_y: int, title: str) -> None:
    cv2.rectangle(img, (0, start_y), (SHEET_WIDTH - 1, start_y + TITLE_HEIGHT - 1), TITLE_BAND, -1)
    _put_centered(img, title, SHEET_WIDTH // 2, start_y + TITLE_HEIGHT // 2 + 8, 0.8, 2)

    swatch_width = (SHEET_WIDTH - PADDING * 2) // COLORS_PER_ROW
    for i, entry in enumerate(palette):
        row, col = divmod(i, COLORS_PER_ROW)
        x = PADDING + col * swatch_width
        y = start_y + TITLE_HEIGHT + row * (COLOR_HEIGHT + LABEL_HEIGHT)

        cv2.rectangle(img, (x, y), (x + swatch_width - 11, y + COLOR_HEIGHT - 1), _bgr(entry), -1)

        h, s, l = entry.color.hsl
        center_x = x + (swatch_width - 10) // 2
        _put_centered(img, f"RGB: {entry.color.r}, {entry.color.g}, {entry.color.b}",
                      center_x, y + COLOR_HEIGHT + 18, 0.45)
        _put_centered(img, f"HSL: {h}, {s}%, {l}%", center_x, y + COLOR_HEIGHT + 36, 0.45)
        _put_centered(img, f"{entry.percentage}%", center_x, y + COLOR_HEIGHT + 54, 0.45)


def render_palette_sheet(primary: Sequence[PaletteEntry],
                         complementary: Optional[Sequence[PaletteEntry]] = None) -> bytes:
    """
    Render the primary palette, and the complementary one if given, to PNG.

    Args:
        primary: Base palette entries
        complementary: Optional derived palette drawn as a second section

    Returns:
        PNG-encoded image bytes

    Raises:
        ValueError: If the primary palette is empty
        RuntimeError: If PNG encoding fails
    """
    if not primary:
        raise ValueError("Empty palette provided")

    sections: List[Tuple[str, Sequence[PaletteEntry]]] = [("PRIMARY PALETTE", primary)]
    if complementary:
        sections.append(("COMPLEMENTARY PALETTE", complementary))

    height = PADDING * 2 + sum(_section_height(len(p)) for _, p in sections) \
        + SECTION_SPACING * (len(sections) - 1)
    img = np.full((height, SHEET_WIDTH, 3), BACKGROUND, dtype=np.uint8)

    logger.debug(f"Rendering palette sheet {SHEET_WIDTH}×{height} with {len(sections)} sections")

    y = PADDING
    for title, palette in sections:
        _draw_section(img, palette, y, title)
        y += _section_height(len(palette)) + SECTION_SPACING

    success, buffer = cv2.imencode('.png', img)
    if not success:
        raise RuntimeError("Failed to encode palette sheet as PNG")

    return buffer.tobytes()


def render_palette_sheet_b64(primary: Sequence[PaletteEntry],
                             complementary: Optional[Sequence[PaletteEntry]] = None) -> str:
    """Base64-encoded variant of `render_palette_sheet`."""
    return base64.b64encode(render_palette_sheet(primary, complementary)).decode('ascii')
