"""
Chromapal

Extracts representative color palettes from raster images and derives
complementary palettes from them.
"""

__version__ = "1.0.0"
