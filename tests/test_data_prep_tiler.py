# -*- coding: utf-8 -*-
"""
Tiling Tests - Tile coverage, edge snapping and halo expansion.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-07

Modified
--------
2026-03-12
"""

import numpy as np
import pytest

from shoreline.data_prep import ChipRegion, Tiler, expand_region


# ---------------------------------------------------------------------------
# Constructor
# ---------------------------------------------------------------------------

class TestTilerInit:

    def test_square_tile(self):
        tiler = Tiler(nrows=60, ncols=70, tile_size=16)
        assert tiler.shape == (60, 70)
        assert tiler.tile_size == (16, 16)
        assert tiler.stride == (16, 16)

    def test_rectangular_tile_and_stride(self):
        tiler = Tiler(nrows=60, ncols=70, tile_size=(8, 20), stride=(8, 10))
        assert tiler.tile_size == (8, 20)
        assert tiler.stride == (8, 10)

    def test_stride_larger_than_tile(self):
        with pytest.raises(ValueError, match="must not exceed"):
            Tiler(nrows=60, ncols=70, tile_size=16, stride=32)

    @pytest.mark.parametrize("kwargs", [
        {'nrows': 0, 'ncols': 10, 'tile_size': 4},
        {'nrows': 10, 'ncols': 10, 'tile_size': 0},
        {'nrows': 10, 'ncols': 10, 'tile_size': (4, -1)},
    ])
    def test_non_positive(self, kwargs):
        with pytest.raises(ValueError, match="positive"):
            Tiler(**kwargs)

    @pytest.mark.parametrize("kwargs", [
        {'nrows': 10.0, 'ncols': 10, 'tile_size': 4},
        {'nrows': 10, 'ncols': 10, 'tile_size': True},
        {'nrows': 10, 'ncols': 10, 'tile_size': (4, 4, 4)},
    ])
    def test_wrong_types(self, kwargs):
        with pytest.raises(TypeError):
            Tiler(**kwargs)

    def test_repr(self):
        tiler = Tiler(nrows=60, ncols=70, tile_size=(16, 8))
        assert repr(tiler) == (
            "Tiler(nrows=60, ncols=70, tile_size=(16, 8), stride=(16, 8))"
        )


# ---------------------------------------------------------------------------
# Tile positions
# ---------------------------------------------------------------------------

class TestTilePositions:

    def test_exact_fit(self):
        regions = Tiler(nrows=64, ncols=32, tile_size=32).tile_positions()
        assert regions == [
            ChipRegion(0, 0, 32, 32),
            ChipRegion(32, 0, 64, 32),
        ]

    def test_row_major_order(self):
        regions = Tiler(nrows=40, ncols=40, tile_size=20).tile_positions()
        starts = [(r.row_start, r.col_start) for r in regions]
        assert starts == [(0, 0), (0, 20), (20, 0), (20, 20)]

    def test_edge_tiles_snap_inward(self):
        regions = Tiler(nrows=50, ncols=30, tile_size=20).tile_positions()
        assert all(r.shape == (20, 20) for r in regions)
        assert max(r.row_end for r in regions) == 50
        assert max(r.col_end for r in regions) == 30
        assert ChipRegion(30, 10, 50, 30) in regions

    def test_tile_larger_than_raster(self):
        regions = Tiler(nrows=10, ncols=12, tile_size=256).tile_positions()
        assert regions == [ChipRegion(0, 0, 10, 12)]

    def test_len_matches_positions(self):
        tiler = Tiler(nrows=61, ncols=97, tile_size=(16, 24), stride=(12, 24))
        assert len(tiler) == len(tiler.tile_positions())

    @pytest.mark.parametrize("shape,tile", [
        ((60, 70), 16),
        ((7, 300), (4, 64)),
        ((33, 33), 33),
    ])
    def test_full_coverage(self, shape, tile):
        covered = np.zeros(shape, dtype=bool)
        for r in Tiler(shape[0], shape[1], tile_size=tile).tile_positions():
            assert 0 <= r.row_start < r.row_end <= shape[0]
            assert 0 <= r.col_start < r.col_end <= shape[1]
            covered[r.row_start:r.row_end, r.col_start:r.col_end] = True
        assert covered.all()


# ---------------------------------------------------------------------------
# ChipRegion / expand_region
# ---------------------------------------------------------------------------

class TestChipRegion:

    def test_shape(self):
        assert ChipRegion(2, 3, 12, 8).shape == (10, 5)

    def test_offset(self):
        assert ChipRegion(2, 3, 12, 8).offset(-2, 1) == ChipRegion(0, 4, 10, 9)


class TestExpandRegion:

    def test_interior(self):
        expanded, core = expand_region(ChipRegion(10, 10, 20, 20), 3, 60, 70)
        assert expanded == ChipRegion(7, 7, 23, 23)
        assert core == ChipRegion(3, 3, 13, 13)

    def test_clipped_at_raster_corner(self):
        expanded, core = expand_region(ChipRegion(0, 60, 10, 70), 4, 60, 70)
        assert expanded == ChipRegion(0, 56, 14, 70)
        assert core == ChipRegion(0, 4, 10, 14)

    def test_zero_halo(self):
        region = ChipRegion(5, 6, 7, 8)
        expanded, core = expand_region(region, 0, 60, 70)
        assert expanded == region
        assert core.shape == region.shape

    def test_core_crop_recovers_region(self):
        image = np.arange(60 * 70).reshape(60, 70)
        region = ChipRegion(50, 2, 60, 12)
        expanded, core = expand_region(region, 5, 60, 70)
        block = image[expanded.row_start:expanded.row_end,
                      expanded.col_start:expanded.col_end]
        np.testing.assert_array_equal(
            block[core.row_start:core.row_end, core.col_start:core.col_end],
            image[50:60, 2:12],
        )

    def test_negative_halo(self):
        with pytest.raises(ValueError, match="halo"):
            expand_region(ChipRegion(0, 0, 4, 4), -1, 10, 10)
