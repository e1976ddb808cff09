"""
Unit tests for diverse palette selection.
"""

import itertools

import numpy as np

from chromapal.services.colors.clustering import Cluster
from chromapal.services.colors.colorspace import Color, distance
from chromapal.services.colors.selection import (
    MAX_PALETTE_SIZE, MIN_COLOR_DISTANCE, MIN_PALETTE_SIZE, select_palette
)

DISTINCT = [
    (255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0),
    (0, 255, 255), (255, 0, 255), (255, 255, 255), (0, 0, 0),
    (128, 128, 128), (255, 128, 0), (0, 128, 255), (128, 0, 128),
]


def _cluster(rgb, count):
    return Cluster(members=np.tile(np.array(rgb, dtype=np.uint8), (count, 1)))


def _clusters(*groups):
    clusters = [_cluster(rgb, count) for rgb, count in groups]
    return clusters, sum(c.size for c in clusters)


class TestSelectPalette:
    """Test greedy selection and backfill"""

    def test_empty(self):
        assert select_palette([], 0) == []

    def test_diverse_clusters_all_accepted(self):
        clusters, total = _clusters(((255, 0, 0), 50), ((0, 255, 255), 30), ((0, 0, 255), 20))
        palette = select_palette(clusters, total)

        assert [e.color for e in palette] == [Color(255, 0, 0), Color(0, 255, 255), Color(0, 0, 255)]
        assert [e.percentage for e in palette] == [50, 30, 20]
        assert not any(e.backfilled for e in palette)

    def test_near_duplicate_is_backfilled_after_diverse_colors(self):
        clusters, total = _clusters(((255, 0, 0), 60), ((250, 0, 0), 30), ((0, 0, 255), 10))
        palette = select_palette(clusters, total)

        assert [e.color for e in palette] == [Color(255, 0, 0), Color(0, 0, 255), Color(250, 0, 0)]
        assert [e.backfilled for e in palette] == [False, False, True]
        assert palette[2].percentage == 30

    def test_exact_duplicate_not_backfilled(self):
        clusters, total = _clusters(((255, 0, 0), 50), ((255, 0, 0), 40), ((0, 0, 255), 10))
        palette = select_palette(clusters, total)
        assert [e.color for e in palette] == [Color(255, 0, 0), Color(0, 0, 255)]

    def test_low_presence_rejected_when_palette_is_full_enough(self):
        groups = [(rgb, 100) for rgb in DISTINCT[:8]] + [((128, 128, 128), 1)]
        clusters, total = _clusters(*groups)
        palette = select_palette(clusters, total)

        assert len(palette) == 8
        assert Color(128, 128, 128) not in [e.color for e in palette]

    def test_exactly_one_percent_is_not_enough(self):
        groups = [(rgb, 99) for rgb in DISTINCT[:8]] + [((128, 128, 128), 8)]
        clusters, total = _clusters(*groups)
        # 8 / 800 samples is exactly 1%
        assert total == 800
        palette = select_palette(clusters, total)
        assert Color(128, 128, 128) not in [e.color for e in palette]

    def test_capped_at_max_size(self):
        groups = [(rgb, 100 - i * 5) for i, rgb in enumerate(DISTINCT)]
        clusters, total = _clusters(*groups)
        palette = select_palette(clusters, total)

        assert len(palette) == MAX_PALETTE_SIZE
        assert [e.color.as_tuple() for e in palette] == DISTINCT[:MAX_PALETTE_SIZE]

    def test_backfill_stops_at_minimum_size(self):
        # Ten shades of red: only the first is diverse, the rest are backfill
        groups = [((255 - i * 3, 0, 0), 20 - i) for i in range(10)]
        clusters, total = _clusters(*groups)
        palette = select_palette(clusters, total)

        assert len(palette) == MIN_PALETTE_SIZE
        assert not palette[0].backfilled
        assert all(e.backfilled for e in palette[1:])

    def test_primary_entries_are_pairwise_diverse(self):
        rng = np.random.default_rng(5)
        groups = [(tuple(int(v) for v in rng.integers(0, 256, size=3)), int(rng.integers(5, 60)))
                  for _ in range(15)]
        groups.sort(key=lambda g: -g[1])
        clusters, total = _clusters(*groups)
        palette = select_palette(clusters, total)

        primary = [e for e in palette if not e.backfilled]
        for a, b in itertools.combinations(primary, 2):
            assert distance(a.color, b.color) > MIN_COLOR_DISTANCE
        assert all(e.percentage >= 1 for e in primary)
