"""
Iterative k-means style clustering of color samples.

Clusters are seeded from random samples and refined for a fixed number of
rounds using the combined RGB/HSL distance. Empty clusters are dropped after
each round, so the cluster count never grows.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from loguru import logger

from .colorspace import Color, distance_to_many, rgb_to_hsl, round_half_up

INITIAL_CLUSTERS = 15
MAX_ITERATIONS = 10


def find_centroid(colors: np.ndarray) -> Optional[Color]:
    """
    Mean color of an (N, 3) sample array, rounded half-up per channel.

    Returns None for an empty array.
    """
    if len(colors) == 0:
        return None

    sums = np.sum(colors.astype(np.int64), axis=0)
    n = len(colors)
    return Color(*(round_half_up(int(s) / n) for s in sums))


@dataclass(eq=False)
class Cluster:
    """Working group of samples during refinement."""
    members: np.ndarray  # (M, 3) uint8

    @property
    def size(self) -> int:
        return len(self.members)

    def centroid(self) -> Optional[Color]:
        return find_centroid(self.members)


class ClusterEngine:
    """
    Partition color samples into up to `initial_clusters` groups.

    Ties in nearest-centroid assignment go to the lowest cluster index;
    the final size ordering is a stable sort, so equal-sized clusters keep
    their seed order.
    """

    def __init__(self,
                 initial_clusters: int = INITIAL_CLUSTERS,
                 max_iterations: int = MAX_ITERATIONS,
                 stop_on_convergence: bool = False,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        if initial_clusters < 1:
            raise ValueError(f"initial_clusters must be >= 1, got {initial_clusters}")
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")

        self.initial_clusters = initial_clusters
        self.max_iterations = max_iterations
        self.stop_on_convergence = stop_on_convergence
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def seed_clusters(self, samples: np.ndarray) -> List[Cluster]:
        """One randomly chosen sample per cluster; duplicates allowed."""
        indices = self.rng.integers(0, len(samples), size=self.initial_clusters)
        return [Cluster(members=samples[i:i + 1]) for i in indices]

    def cluster(self, samples: np.ndarray) -> List[Cluster]:
        """
        Cluster samples and rank the result by member count (descending).

        Args:
            samples: RGB samples array (N, 3) uint8

        Returns:
            Non-empty clusters, largest first. Empty list for empty input.
        """
        if len(samples) == 0:
            logger.info("No samples to cluster")
            return []

        # Assignment depends only on the color, so work on unique colors
        unique_rgb, inverse = np.unique(samples, axis=0, return_inverse=True)
        inverse = inverse.reshape(-1)
        unique_hsl = np.array([rgb_to_hsl(int(r), int(g), int(b)) for r, g, b in unique_rgb],
                              dtype=np.int64).reshape(-1, 3)

        clusters = self.seed_clusters(samples)
        previous_centroids = None
        rounds = 0

        for iteration in range(self.max_iterations):
            centroids = [c.centroid() for c in clusters]
            if self.stop_on_convergence and centroids == previous_centroids:
                logger.debug(f"Converged after {iteration} iterations")
                break
            previous_centroids = centroids

            live = [(i, c) for i, c in enumerate(centroids) if c is not None]
            distances = np.column_stack([
                distance_to_many(unique_rgb, unique_hsl, centroid) for _, centroid in live
            ])
            # argmin returns the first minimum, so ties go to the lowest index
            nearest = np.array([i for i, _ in live])[np.argmin(distances, axis=1)]
            labels = nearest[inverse]

            reassigned = [Cluster(members=samples[labels == i]) for i in range(len(clusters))]
            clusters = [c for c in reassigned if c.size > 0]
            rounds = iteration + 1

            logger.debug(f"Iteration {rounds}: {len(clusters)} clusters")

        ranked = sorted(clusters, key=lambda c: -c.size)
        logger.info(f"Clustered {len(samples)} samples into {len(ranked)} clusters in {rounds} rounds")
        return ranked
