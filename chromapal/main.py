"""
Chromapal FastAPI application.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chromapal import __version__
from chromapal.api.v1 import router as v1_router
from chromapal.config import config
from chromapal.schemas import HealthResponse
from chromapal.utils.metrics import get_metrics

app = FastAPI(
    title="Chromapal",
    description="Palette extraction and complementary palette generation",
    version=__version__
)

origins = config.allowed_origins()
if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint"""
    return HealthResponse(ok=True, version=__version__)


@app.get("/metrics")
def metrics_summary():
    """In-process counters and timing statistics"""
    return get_metrics().get_summary()
