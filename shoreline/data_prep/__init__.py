# -*- coding: utf-8 -*-
"""
Data Preparation Module - Tile planning for tiled raster evaluation.

Compute tile positions covering a raster:

    >>> from shoreline.data_prep import Tiler
    >>> tiler = Tiler(nrows=1000, ncols=2000, tile_size=256)
    >>> for region in tiler.tile_positions():
    ...     tile = image[region.row_start:region.row_end,
    ...                  region.col_start:region.col_end]

Grow a tile by the context halo a filter chain needs:

    >>> from shoreline.data_prep import expand_region
    >>> expanded, core = expand_region(region, halo=2, nrows=1000, ncols=2000)

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
2026-03-07
"""

from shoreline.data_prep.base import ChipBase, ChipRegion, expand_region
from shoreline.data_prep.tiler import Tiler

__all__ = [
    'ChipBase',
    'ChipRegion',
    'Tiler',
    'expand_region',
]
