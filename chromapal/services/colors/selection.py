"""
Final palette selection from ranked clusters.

Larger clusters claim their region of color space first: a candidate is
accepted only if it is far enough from every accepted color and present in
more than MIN_PERCENTAGE of the samples. If that leaves fewer than
MIN_PALETTE_SIZE colors, remaining clusters are appended without the filters.
"""

from dataclasses import dataclass
from typing import List

from loguru import logger

from .clustering import Cluster
from .colorspace import Color, distance, round_half_up

MIN_COLOR_DISTANCE = 25
MIN_PERCENTAGE = 1
MAX_PALETTE_SIZE = 10
MIN_PALETTE_SIZE = 7


@dataclass(frozen=True)
class PaletteEntry:
    """A finalized (color, percentage) pair."""
    color: Color
    percentage: int
    backfilled: bool = False


def select_palette(clusters: List[Cluster], total_samples: int) -> List[PaletteEntry]:
    """
    Turn ranked clusters into a bounded, diverse palette.

    Args:
        clusters: Non-empty clusters, largest first
        total_samples: Number of samples that were clustered

    Returns:
        Palette entries: diverse entries first, backfilled entries after
    """
    if not clusters or total_samples <= 0:
        return []

    palette: List[PaletteEntry] = []
    accepted = set()

    for index, cluster in enumerate(clusters):
        centroid = cluster.centroid()
        if centroid is None:
            continue
        percentage = cluster.size / total_samples * 100

        is_diverse = all(distance(centroid, entry.color) > MIN_COLOR_DISTANCE for entry in palette)
        if is_diverse and percentage > MIN_PERCENTAGE:
            palette.append(PaletteEntry(color=centroid, percentage=round_half_up(percentage)))
            accepted.add(index)
            if len(palette) == MAX_PALETTE_SIZE:
                break

    primary_count = len(palette)

    if len(palette) < MIN_PALETTE_SIZE:
        for index, cluster in enumerate(clusters):
            if len(palette) >= MIN_PALETTE_SIZE:
                break
            if index in accepted:
                continue
            centroid = cluster.centroid()
            if centroid is None or any(entry.color == centroid for entry in palette):
                continue
            percentage = cluster.size / total_samples * 100
            palette.append(PaletteEntry(color=centroid,
                                        percentage=round_half_up(percentage),
                                        backfilled=True))

    logger.info(f"Selected {primary_count} diverse colors, "
                f"{len(palette) - primary_count} backfilled")
    return palette
