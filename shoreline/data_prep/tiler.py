# -*- coding: utf-8 -*-
"""
Tiler - Plan the tile grid that drives tiled raster evaluation.

Computes row-major ``ChipRegion`` positions covering a raster. Edge tiles
snap inward so every tile keeps the full tile size when the raster is at
least that large; the resulting overlap is harmless because tile output
is a pure function of its region.

Author
------
Steven Siebert

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

# Standard library
import math
from typing import List, Optional, Tuple, Union

# Shoreline internal
from shoreline.data_prep.base import ChipBase, ChipRegion, _normalize_pair


class Tiler(ChipBase):
    """Compute tile positions over a raster.

    Parameters
    ----------
    nrows : int
        Raster rows.
    ncols : int
        Raster columns.
    tile_size : int or Tuple[int, int]
        ``(tile_rows, tile_cols)``. If int, square tiles.
    stride : int or Tuple[int, int], optional
        ``(stride_rows, stride_cols)``. Defaults to ``tile_size``.

    Raises
    ------
    TypeError
        If a size argument has the wrong type.
    ValueError
        If a size is not positive or stride exceeds tile_size.

    Examples
    --------
    >>> tiler = Tiler(nrows=1000, ncols=2000, tile_size=256)
    >>> regions = tiler.tile_positions()
    >>> regions[0]
    ChipRegion(row_start=0, col_start=0, row_end=256, col_end=256)
    """

    def __init__(
        self,
        nrows: int,
        ncols: int,
        tile_size: Union[int, Tuple[int, int]],
        stride: Optional[Union[int, Tuple[int, int]]] = None,
    ) -> None:
        super().__init__(nrows, ncols)
        self._tile_size = _normalize_pair(tile_size, 'tile_size')
        if stride is None:
            self._stride = self._tile_size
        else:
            self._stride = _normalize_pair(stride, 'stride')
        if self._stride[0] > self._tile_size[0] or \
                self._stride[1] > self._tile_size[1]:
            raise ValueError(
                f"stride {self._stride} must not exceed "
                f"tile_size {self._tile_size}"
            )

    @property
    def tile_size(self) -> Tuple[int, int]:
        """The ``(tile_rows, tile_cols)`` dimensions."""
        return self._tile_size

    @property
    def stride(self) -> Tuple[int, int]:
        """The ``(stride_rows, stride_cols)`` step sizes."""
        return self._stride

    @staticmethod
    def _count(extent: int, size: int, step: int) -> int:
        if extent <= size:
            return 1
        return 1 + math.ceil((extent - size) / step)

    def tile_positions(self) -> List[ChipRegion]:
        """Compute tile regions in row-major order.

        Returns
        -------
        List[ChipRegion]
            Regions covering the whole raster.
        """
        tr, tc = self._tile_size
        sr, sc = self._stride
        n_row = self._count(self._nrows, tr, sr)
        n_col = self._count(self._ncols, tc, sc)

        regions = []
        for i in range(n_row):
            for j in range(n_col):
                regions.append(self._snap_region(i * sr, j * sc, tr, tc))
        return regions

    def __len__(self) -> int:
        tr, tc = self._tile_size
        sr, sc = self._stride
        return (self._count(self._nrows, tr, sr)
                * self._count(self._ncols, tc, sc))

    def __repr__(self) -> str:
        return (
            f"Tiler(nrows={self._nrows}, ncols={self._ncols}, "
            f"tile_size={self._tile_size}, stride={self._stride})"
        )
