"""
Chromapal API Schemas
Pydantic models for palette extraction and derivation request/response validation.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from chromapal.services.colors.colorspace import format_hex, format_rgb
from chromapal.services.colors.selection import PaletteEntry


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("chromapal", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


# ============================================================================
# PALETTE SCHEMAS
# ============================================================================

class ColorOut(BaseModel):
    """Single palette color with its share of the sampled pixels."""
    rgb: List[int] = Field(..., min_length=3, max_length=3, description="[r, g, b] bytes")
    css: str = Field(..., description="CSS rgb() notation")
    hex: str = Field(..., pattern=r"^#[0-9A-F]{6}$", description="Hex color code in format #RRGGBB")
    hsl: List[int] = Field(..., min_length=3, max_length=3, description="[h, s, l] in degrees/percent")
    percentage: int = Field(..., ge=0, le=100, description="Share of sampled pixels, rounded")
    backfilled: bool = Field(False, description="Added to reach the minimum palette size without diversity filtering")

    @classmethod
    def from_entry(cls, entry: PaletteEntry) -> "ColorOut":
        color = entry.color
        return cls(
            rgb=list(color.as_tuple()),
            css=format_rgb(color),
            hex=format_hex(color),
            hsl=list(color.hsl),
            percentage=entry.percentage,
            backfilled=entry.backfilled,
        )


class ExtractResponse(BaseModel):
    """Palette extraction response."""
    request_id: str = Field(..., description="Request identifier for tracing")
    width: int = Field(..., description="Image width in pixels")
    height: int = Field(..., description="Image height in pixels")
    sample_rate: int = Field(..., ge=1, description="Pixel stride used in both axes")
    sampled_pixels: int = Field(..., ge=0, description="Opaque pixels sampled")
    cluster_count: int = Field(..., ge=0, description="Clusters left after refinement")
    palette: List[ColorOut] = Field(..., max_length=10, description="Palette, largest clusters first")


class ColorIn(BaseModel):
    """Palette color supplied by a client, as 'rgb(r, g, b)' or '#RRGGBB'."""
    color: str = Field(..., description="Color encoding")
    percentage: int = Field(..., ge=0, le=100, description="Share of the source image")


class PaletteRequest(BaseModel):
    """Base palette for derivation and export endpoints."""
    palette: List[ColorIn] = Field(default_factory=list, description="Base palette entries")


class ComplementaryResponse(BaseModel):
    """Complementary palette response."""
    request_id: str = Field(..., description="Request identifier for tracing")
    palette: List[ColorOut] = Field(..., description="Base + complement + two analogous entries per base color")
    skipped: int = Field(0, ge=0, description="Input entries whose color could not be parsed")
    notice: Optional[str] = Field(None, description="Set when there was no base palette to derive from")


class SwatchRequest(PaletteRequest):
    """Palette sheet rendering request."""
    include_complementary: bool = Field(False, description="Draw the complementary palette as a second section")
    as_base64: bool = Field(False, description="Return the PNG base64-encoded inside JSON")


class SwatchResponse(BaseModel):
    """Base64-encoded palette sheet."""
    media_type: str = Field("image/png", description="Encoded image type")
    image_base64: str = Field(..., description="PNG bytes, base64-encoded")
