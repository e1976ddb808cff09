"""
Palette extraction pipeline.

Runs the sampling, clustering and selection stages over a decoded RGBA
buffer. Each call owns its own engine state; nothing is shared between calls.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
from loguru import logger

from chromapal.config import config
from .clustering import ClusterEngine, INITIAL_CLUSTERS, MAX_ITERATIONS
from .sampling import PixelBuffer, sample_pixels, sample_rate
from .selection import PaletteEntry, select_palette


@dataclass
class ExtractionSettings:
    """Tunable clustering options. Distance and selection constants are fixed."""
    initial_clusters: int = INITIAL_CLUSTERS
    max_iterations: int = MAX_ITERATIONS
    stop_on_convergence: bool = False
    seed: Optional[int] = None

    @classmethod
    def from_config(cls) -> "ExtractionSettings":
        max_iterations = config.MAX_ITERATIONS
        if not config.validate_max_iterations(max_iterations):
            logger.warning(
                f"Invalid CHROMAPAL_MAX_ITERATIONS={max_iterations}; using {MAX_ITERATIONS}"
            )
            max_iterations = MAX_ITERATIONS

        return cls(
            max_iterations=max_iterations,
            stop_on_convergence=config.STOP_ON_CONVERGENCE,
            seed=config.RNG_SEED,
        )


@dataclass
class ExtractionResult:
    """Palette plus the bookkeeping the API reports."""
    palette: List[PaletteEntry]
    sample_count: int
    cluster_count: int
    sample_rate: int
    timings_ms: Dict[str, float] = field(default_factory=dict)


class PaletteExtractor:
    """Sampler → ClusterEngine → PaletteSelector over one image."""

    def __init__(self,
                 settings: Optional[ExtractionSettings] = None,
                 rng: Optional[np.random.Generator] = None):
        self.settings = settings or ExtractionSettings()
        self.rng = rng

    def extract(self, rgba: PixelBuffer, width: int, height: int) -> ExtractionResult:
        """
        Extract a palette from a row-major RGBA buffer.

        Raises:
            ValueError: If the buffer does not match the dimensions
        """
        timings: Dict[str, float] = {}

        start_time = time.time()
        samples = sample_pixels(rgba, width, height)
        timings["sampling"] = (time.time() - start_time) * 1000

        if len(samples) == 0:
            logger.warning(f"No opaque pixels in {width}×{height} image; palette is empty")

        start_time = time.time()
        engine = ClusterEngine(
            initial_clusters=self.settings.initial_clusters,
            max_iterations=self.settings.max_iterations,
            stop_on_convergence=self.settings.stop_on_convergence,
            rng=self.rng,
            seed=self.settings.seed,
        )
        clusters = engine.cluster(samples)
        timings["clustering"] = (time.time() - start_time) * 1000

        start_time = time.time()
        palette = select_palette(clusters, len(samples))
        timings["selection"] = (time.time() - start_time) * 1000

        logger.info(
            f"Extracted {len(palette)} colors from {len(samples)} samples",
            extra={"width": width, "height": height, "timings_ms": timings}
        )

        return ExtractionResult(
            palette=palette,
            sample_count=len(samples),
            cluster_count=len(clusters),
            sample_rate=sample_rate(width, height),
            timings_ms=timings,
        )


def extract_palette(rgba: PixelBuffer, width: int, height: int,
                    seed: Optional[int] = None,
                    rng: Optional[np.random.Generator] = None) -> List[PaletteEntry]:
    """Functional wrapper returning just the palette."""
    extractor = PaletteExtractor(ExtractionSettings(seed=seed), rng=rng)
    return extractor.extract(rgba, width, height).palette
