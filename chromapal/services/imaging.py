"""
Chromapal Imaging Utilities
Handles upload validation and decoding into the RGBA buffer the engine reads.
"""
import io
from typing import Tuple

import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image

from chromapal.config import config


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file for format compliance.

    Raises:
        HTTPException: 413 for oversized files, 415 for unsupported formats
    """
    if getattr(file, 'size', None) and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename:
        ext = file.filename.lower().split('.')[-1] if '.' in file.filename else ''
        if f".{ext}" not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for invalid/corrupt files
    """
    if len(file_bytes) < 12:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    elif file_bytes[:4] == b'RIFF' and file_bytes[8:12] == b'WEBP':
        return "image/webp"
    else:
        raise HTTPException(
            status_code=400,
            detail="Invalid image file. Magic bytes don't match supported formats."
        )


def decode_rgba(file_bytes: bytes) -> Tuple[np.ndarray, int, int]:
    """
    Decode image bytes into an (H, W, 4) uint8 RGBA array.

    Returns:
        Tuple of (rgba_array, width, height)

    Raises:
        HTTPException: 400 for decode errors or animated input, 413 for oversized images
    """
    validate_magic_bytes(file_bytes)

    try:
        pil_image = Image.open(io.BytesIO(file_bytes))
        width, height = pil_image.size
        if width * height > config.MAX_IMAGE_PIXELS:
            raise HTTPException(
                status_code=413,
                detail=f"Image too large. Maximum pixels: {config.MAX_IMAGE_PIXELS}"
            )
        if getattr(pil_image, "n_frames", 1) > 1:
            raise HTTPException(status_code=400, detail="Animated images are not supported")

        if pil_image.mode != 'RGBA':
            pil_image = pil_image.convert('RGBA')
        rgba_array = np.array(pil_image, dtype=np.uint8)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=400,
            detail=f"Failed to decode image: {str(e)}"
        )

    return rgba_array, width, height


async def read_image(file: UploadFile) -> Tuple[np.ndarray, int, int]:
    """
    Safely read and decode an uploaded image to RGBA.

    Returns:
        Tuple of (rgba_array, width, height)
    """
    validate_file_upload(file)

    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    return decode_rgba(file_bytes)
