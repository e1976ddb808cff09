"""
Chromapal Colors Module

Provides pixel sampling, clustering, diverse palette selection and
complementary palette synthesis, plus palette export helpers.
"""

from .colorspace import Color, distance, hsl_to_rgb, parse_color, rgb_to_hsl
from .complementary import ComplementaryResult, synthesize_complementary
from .extraction import ExtractionResult, ExtractionSettings, PaletteExtractor, extract_palette
from .selection import PaletteEntry

__all__ = [
    'Color',
    'ComplementaryResult',
    'ExtractionResult',
    'ExtractionSettings',
    'PaletteEntry',
    'PaletteExtractor',
    'distance',
    'extract_palette',
    'hsl_to_rgb',
    'parse_color',
    'rgb_to_hsl',
    'synthesize_complementary',
]
