"""
CSS / SCSS custom property generation for a palette.
"""

from typing import List, Sequence

from .colorspace import format_rgb
from .selection import PaletteEntry


def generate_color_variables(palette: Sequence[PaletteEntry], fmt: str = "css") -> str:
    """
    Render palette entries as CSS custom properties or SCSS variables.

    Each entry N produces color-N, color-N-rgb, color-N-hsl and
    color-N-percentage. An empty palette renders as an empty string.

    Raises:
        ValueError: For formats other than "css" and "scss"
    """
    if fmt not in ("css", "scss"):
        raise ValueError(f"Unsupported variable format: {fmt}")
    if not palette:
        return ""

    prefix = "--" if fmt == "css" else "$"
    variables: List[str] = []
    for index, entry in enumerate(palette, start=1):
        color = entry.color
        h, s, l = color.hsl
        name = f"{prefix}color-{index}"
        variables.append(f"{name}: {format_rgb(color)};")
        variables.append(f"{name}-rgb: {color.r}, {color.g}, {color.b};")
        variables.append(f"{name}-hsl: {h}, {s}%, {l}%;")
        variables.append(f"{name}-percentage: {entry.percentage}%;")

    if fmt == "css":
        body = "\n  ".join(variables)
        return f":root {{\n  {body}\n}}"
    return "\n".join(variables)
