"""
Color space conversions and the perceptual distance metric.

RGB channels are bytes in [0, 255]. HSL uses integer degrees in [0, 360)
and integer percentages in [0, 100], matching what the palette UI shows.
"""

import math
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

import numpy as np

_RGB_PATTERN = re.compile(r"rgb\((\d+),\s*(\d+),\s*(\d+)\)")
_HEX_PATTERN = re.compile(r"^#([0-9A-Fa-f]{6})$")

# Weight of the HSL term in the combined distance. Fixed, not configurable.
HSL_WEIGHT = 2.0


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Color:
    """Immutable 8-bit RGB triple."""
    r: int
    g: int
    b: int

    @property
    def hsl(self) -> Tuple[int, int, int]:
        return rgb_to_hsl(self.r, self.g, self.b)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return format_rgb(self)


@lru_cache(maxsize=65536)
def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[int, int, int]:
    """
    Convert RGB bytes to HSL.

    Args:
        r, g, b: Channel values in [0, 255]

    Returns:
        Tuple of (h, s, l) with h in [0, 360) degrees and s, l in [0, 100] percent
    """
    rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
    hi = max(rf, gf, bf)
    lo = min(rf, gf, bf)
    l = (hi + lo) / 2

    if hi == lo:
        # Achromatic
        h = s = 0.0
    else:
        d = hi - lo
        s = d / (2 - hi - lo) if l > 0.5 else d / (hi + lo)
        if hi == rf:
            h = (gf - bf) / d + (6 if gf < bf else 0)
        elif hi == gf:
            h = (bf - rf) / d + 2
        else:
            h = (rf - gf) / d + 4
        h /= 6

    return (
        round_half_up(h * 360) % 360,
        round_half_up(s * 100),
        round_half_up(l * 100),
    )


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def _to_byte(value: float) -> int:
    return max(0, min(255, round_half_up(value * 255)))


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """
    Convert HSL to RGB bytes.

    Args:
        h: Hue in degrees [0, 360)
        s: Saturation percent [0, 100]
        l: Lightness percent [0, 100]

    Returns:
        Tuple of (r, g, b) clamped to [0, 255]
    """
    h /= 360.0
    s /= 100.0
    l /= 100.0

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return _to_byte(r), _to_byte(g), _to_byte(b)


def hue_difference(h1: float, h2: float) -> float:
    """Circular hue distance in degrees, in [0, 180]."""
    diff = abs(h1 - h2)
    return min(diff, 360 - diff)


def distance(color_a: Color, color_b: Color) -> float:
    """
    Combined RGB/HSL distance between two colors.

    Euclidean RGB distance is averaged with a Euclidean HSL distance
    (hue scaled to 0-100 on the circle) weighted double.
    """
    rgb_distance = math.sqrt(
        (color_a.r - color_b.r) ** 2
        + (color_a.g - color_b.g) ** 2
        + (color_a.b - color_b.b) ** 2
    )

    h1, s1, l1 = color_a.hsl
    h2, s2, l2 = color_b.hsl
    hsl_distance = math.sqrt(
        (hue_difference(h1, h2) / 360 * 100) ** 2
        + (s1 - s2) ** 2
        + (l1 - l2) ** 2
    )

    return (rgb_distance + hsl_distance * HSL_WEIGHT) / (1 + HSL_WEIGHT)


def distance_to_many(rgb: np.ndarray, hsl: np.ndarray, centroid: Color) -> np.ndarray:
    """
    Vectorised form of `distance` from many colors to one centroid.

    Args:
        rgb: (N, 3) channel values
        hsl: (N, 3) integer HSL values matching `rgb`
        centroid: Color to measure against

    Returns:
        (N,) float64 distances
    """
    rgb_delta = rgb.astype(np.float64) - np.array(centroid.as_tuple(), dtype=np.float64)
    rgb_distance = np.sqrt(np.sum(rgb_delta ** 2, axis=1))

    ch, cs, cl = centroid.hsl
    hue_diff = np.abs(hsl[:, 0].astype(np.float64) - ch)
    hue_diff = np.minimum(hue_diff, 360 - hue_diff)
    hsl_distance = np.sqrt(
        (hue_diff / 360 * 100) ** 2
        + (hsl[:, 1].astype(np.float64) - cs) ** 2
        + (hsl[:, 2].astype(np.float64) - cl) ** 2
    )

    return (rgb_distance + hsl_distance * HSL_WEIGHT) / (1 + HSL_WEIGHT)


def parse_color(text: str) -> Optional[Color]:
    """
    Parse "rgb(r, g, b)" or "#RRGGBB" into a Color.

    Returns None when the text is not a recognised encoding or a channel
    is out of byte range.
    """
    if not isinstance(text, str):
        return None

    match = _RGB_PATTERN.search(text)
    if match:
        channels = tuple(int(v) for v in match.groups())
        if all(0 <= c <= 255 for c in channels):
            return Color(*channels)
        return None

    match = _HEX_PATTERN.match(text.strip())
    if match:
        hex_clean = match.group(1)
        return Color(*(int(hex_clean[i:i + 2], 16) for i in (0, 2, 4)))

    return None


def format_rgb(color: Color) -> str:
    return f"rgb({color.r}, {color.g}, {color.b})"


def format_hsl(color: Color) -> str:
    h, s, l = color.hsl
    return f"hsl({h}, {s}%, {l}%)"


def format_hex(color: Color) -> str:
    """Convert color to hex string (#RRGGBB, uppercase)."""
    return f"#{color.r:02X}{color.g:02X}{color.b:02X}"
