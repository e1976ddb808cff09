"""
Pixel sampling for palette extraction.

Reduces a decoded RGBA buffer to an opaque, stride-sampled set of RGB
samples whose size stays roughly constant across image resolutions.
"""

import math
from typing import Sequence, Union

import numpy as np
from loguru import logger

# Pixels with alpha below this are skipped entirely
ALPHA_THRESHOLD = 127

# Target samples per axis; larger images get a larger stride
SAMPLES_PER_AXIS = 100

PixelBuffer = Union[bytes, bytearray, memoryview, np.ndarray, Sequence[int]]


def sample_rate(width: int, height: int) -> int:
    """Stride used in both axes for an image of the given size."""
    return max(1, int(math.floor(math.sqrt(width * height) / SAMPLES_PER_AXIS)))


def _as_rgba_array(rgba: PixelBuffer, width: int, height: int) -> np.ndarray:
    if isinstance(rgba, np.ndarray):
        if rgba.dtype != np.uint8:
            raise ValueError(f"Pixel array must be uint8, got {rgba.dtype}")
        arr = rgba.reshape(-1)
    elif isinstance(rgba, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(rgba, dtype=np.uint8)
    else:
        values = np.asarray(rgba, dtype=np.int64).reshape(-1)
        if values.size and (values.min() < 0 or values.max() > 255):
            raise ValueError("Pixel values must be in the range 0-255")
        arr = values.astype(np.uint8)

    expected = width * height * 4
    if arr.size != expected:
        raise ValueError(
            f"Pixel buffer length mismatch: expected {expected} bytes for "
            f"{width}×{height} RGBA, got {arr.size}"
        )

    return arr.reshape(height, width, 4)


def sample_pixels(rgba: PixelBuffer, width: int, height: int) -> np.ndarray:
    """
    Sample opaque pixels from a row-major RGBA buffer.

    Args:
        rgba: width×height×4 bytes (flat) or an (H, W, 4) uint8 array
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        RGB samples array (N, 3) uint8 in row-major visitation order.
        Empty (0, 3) when every visited pixel is transparent.

    Raises:
        ValueError: If the buffer size does not match the dimensions, or
            the pixel values are not bytes
    """
    if width < 0 or height < 0:
        raise ValueError(f"Invalid image dimensions: {width}×{height}")

    pixels = _as_rgba_array(rgba, width, height)
    rate = sample_rate(width, height)

    visited = pixels[::rate, ::rate].reshape(-1, 4)
    opaque = visited[:, 3] >= ALPHA_THRESHOLD
    samples = np.ascontiguousarray(visited[opaque, :3])

    logger.debug(
        f"Sampled {len(samples)}/{len(visited)} visited pixels "
        f"(stride={rate}, image={width}×{height})"
    )
    return samples
