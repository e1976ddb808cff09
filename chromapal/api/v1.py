"""
Chromapal v1 API Routes
Palette extraction, complementary derivation and palette export endpoints.
"""
import time
from typing import List, Optional, Sequence, Tuple

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from chromapal.config import config
from chromapal.schemas import (
    ColorIn, ColorOut, ComplementaryResponse, ErrorResponse, ExtractResponse, PaletteRequest,
    SwatchRequest, SwatchResponse
)
from chromapal.services.colors.colorspace import parse_color
from chromapal.services.colors.complementary import synthesize_complementary
from chromapal.services.colors.extraction import ExtractionSettings, PaletteExtractor
from chromapal.services.colors.selection import PaletteEntry
from chromapal.services.colors.swatches import render_palette_sheet, render_palette_sheet_b64
from chromapal.services.colors.variables import generate_color_variables
from chromapal.services.imaging import read_image
from chromapal.utils.ids import generate_request_id
from chromapal.utils.logging import get_logger
from chromapal.utils.metrics import get_metrics

router = APIRouter(prefix="/v1/palette", tags=["Palette"])
log = get_logger()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    415: {"model": ErrorResponse},
}


def _to_entries(items: Sequence[ColorIn]) -> Tuple[List[PaletteEntry], int]:
    """Parse client colors, skipping any that are not a valid encoding."""
    entries = []
    skipped = 0
    for item in items:
        color = parse_color(item.color)
        if color is None:
            log.warning("Skipping unparseable palette color", extra={"color": item.color})
            skipped += 1
            continue
        entries.append(PaletteEntry(color=color, percentage=item.percentage))
    return entries, skipped


@router.post("/extract",
             response_model=ExtractResponse,
             responses=ERROR_RESPONSES,
             summary="Extract Palette",
             description="Extract up to 10 representative colors from an uploaded image")
async def extract(
    file: UploadFile = File(..., description="PNG, JPEG or WebP image"),
    seed: Optional[int] = Query(None, description="Random seed for reproducible clustering")
) -> ExtractResponse:
    request_id = generate_request_id("pal")
    metrics = get_metrics()
    metrics.increment("palette_requests_total")
    start_time = time.time()

    log.info("Starting palette extraction", extra={"request_id": request_id, "upload": file.filename})

    try:
        rgba, width, height = await read_image(file)
    except HTTPException as e:
        metrics.increment_failure_count(f"http_{e.status_code}")
        log.warning("Rejected upload", extra={"request_id": request_id, "detail": e.detail})
        raise

    settings = ExtractionSettings.from_config()
    if seed is not None:
        settings.seed = seed

    result = await run_in_threadpool(PaletteExtractor(settings).extract, rgba, width, height)

    duration_ms = (time.time() - start_time) * 1000
    if config.METRICS_ENABLED:
        metrics.record_timing("extract", duration_ms)
        for stage, stage_ms in result.timings_ms.items():
            metrics.record_timing(stage, stage_ms)
        metrics.record_palette_size(len(result.palette))

    log.info("Palette extraction complete", extra={
        "request_id": request_id,
        "palette_size": len(result.palette),
        "ms_total": round(duration_ms, 2),
    })

    return ExtractResponse(
        request_id=request_id,
        width=width,
        height=height,
        sample_rate=result.sample_rate,
        sampled_pixels=result.sample_count,
        cluster_count=result.cluster_count,
        palette=[ColorOut.from_entry(entry) for entry in result.palette],
    )


@router.post("/complementary",
             response_model=ComplementaryResponse,
             summary="Complementary Palette",
             description="Derive complement and analogous variants for each base color")
async def complementary(body: PaletteRequest) -> ComplementaryResponse:
    request_id = generate_request_id("comp")
    get_metrics().increment("complementary_requests_total")

    entries, skipped = _to_entries(body.palette)
    result = synthesize_complementary(entries)

    if result.is_empty:
        log.warning(result.notice, extra={"request_id": request_id, "skipped": skipped})

    return ComplementaryResponse(
        request_id=request_id,
        palette=[ColorOut.from_entry(entry) for entry in result.entries],
        skipped=skipped,
        notice=result.notice,
    )


@router.post("/variables",
             response_class=PlainTextResponse,
             responses={400: {"model": ErrorResponse}},
             summary="Export Variables",
             description="Render the palette as CSS custom properties or SCSS variables")
async def variables(
    body: PaletteRequest,
    format: str = Query("css", description="Output format: css or scss")
) -> PlainTextResponse:
    if not config.validate_variable_format(format):
        raise HTTPException(status_code=400, detail="Invalid format value")

    entries, _ = _to_entries(body.palette)
    text = generate_color_variables(entries, format)
    if not text:
        raise HTTPException(status_code=400, detail="No palette to export variables from")

    get_metrics().increment(f"variables_exported_total_{format}")
    return PlainTextResponse(text, headers={
        "Content-Disposition": f'attachment; filename="palette-variables.{format}"'
    })


@router.post("/swatch",
             response_class=Response,
             responses={200: {"content": {"image/png": {}}, "model": SwatchResponse},
                        400: {"model": ErrorResponse}},
             summary="Palette Sheet",
             description="Render the palette (and optionally its complements) as a PNG, raw or base64")
async def swatch(body: SwatchRequest) -> Response:
    entries, _ = _to_entries(body.palette)
    if not entries:
        raise HTTPException(status_code=400, detail="No palette to export")

    derived = synthesize_complementary(entries).entries if body.include_complementary else None
    get_metrics().increment("swatches_rendered_total")

    if body.as_base64:
        encoded = await run_in_threadpool(render_palette_sheet_b64, entries, derived)
        return JSONResponse(SwatchResponse(image_base64=encoded).model_dump())

    png = await run_in_threadpool(render_palette_sheet, entries, derived)
    return Response(content=png, media_type="image/png", headers={
        "Content-Disposition": 'attachment; filename="palette.png"'
    })
