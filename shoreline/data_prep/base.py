# -*- coding: utf-8 -*-
"""
Data Preparation Base - Pixel regions and shared helpers for tiling.

Defines ``ChipRegion``, the pixel rectangle used for every tile request,
the ``ChipBase`` ABC that manages raster dimensions and snaps regions
inside them, and ``expand_region`` which adds the context halo a filter
chain needs around a tile.

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
2026-03-10
"""

# Standard library
from abc import ABC
from typing import NamedTuple, Tuple, Union


class ChipRegion(NamedTuple):
    """Rectangular pixel region, end-exclusive.

    Use directly for numpy slicing::

        tile = image[region.row_start:region.row_end,
                     region.col_start:region.col_end]

    Attributes
    ----------
    row_start : int
        First row (inclusive).
    col_start : int
        First column (inclusive).
    row_end : int
        Last row (exclusive).
    col_end : int
        Last column (exclusive).
    """

    row_start: int
    col_start: int
    row_end: int
    col_end: int

    @property
    def shape(self) -> Tuple[int, int]:
        """``(rows, cols)`` of the region."""
        return (self.row_end - self.row_start, self.col_end - self.col_start)

    def offset(self, rows: int, cols: int) -> 'ChipRegion':
        """Return the region shifted by ``(rows, cols)``."""
        return ChipRegion(self.row_start + rows, self.col_start + cols,
                          self.row_end + rows, self.col_end + cols)


class ChipBase(ABC):
    """Base class for tile index computation over a raster.

    Parameters
    ----------
    nrows : int
        Number of rows in the raster.
    ncols : int
        Number of columns in the raster.

    Raises
    ------
    TypeError
        If ``nrows`` or ``ncols`` is not ``int``.
    ValueError
        If ``nrows`` or ``ncols`` is not positive.
    """

    def __init__(self, nrows: int, ncols: int) -> None:
        if not isinstance(nrows, int) or not isinstance(ncols, int):
            raise TypeError(
                f"nrows and ncols must be int, got "
                f"nrows={type(nrows).__name__}, ncols={type(ncols).__name__}"
            )
        if nrows <= 0 or ncols <= 0:
            raise ValueError(
                f"nrows and ncols must be positive, got "
                f"nrows={nrows}, ncols={ncols}"
            )
        self._nrows = nrows
        self._ncols = ncols

    @property
    def nrows(self) -> int:
        """Number of raster rows."""
        return self._nrows

    @property
    def ncols(self) -> int:
        """Number of raster columns."""
        return self._ncols

    @property
    def shape(self) -> Tuple[int, int]:
        """Raster dimensions as ``(nrows, ncols)``."""
        return (self._nrows, self._ncols)

    def _snap_region(
        self,
        row_start: int,
        col_start: int,
        row_width: int,
        col_width: int,
    ) -> ChipRegion:
        """Snap a region to fit entirely within raster bounds.

        Slides the window inward to keep the requested dimensions; when
        a dimension exceeds the raster it is clamped to the full extent.

        Examples
        --------
        500-row raster, tile of 100 near the bottom edge:

        >>> base._snap_region(425, 0, 100, 100)
        ChipRegion(row_start=400, col_start=0, row_end=500, col_end=100)
        """
        rw = min(row_width, self._nrows)
        cw = min(col_width, self._ncols)
        rs = max(0, min(row_start, self._nrows - rw))
        cs = max(0, min(col_start, self._ncols - cw))
        return ChipRegion(rs, cs, rs + rw, cs + cw)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nrows={self._nrows}, ncols={self._ncols})"


def expand_region(
    region: ChipRegion,
    halo: int,
    nrows: int,
    ncols: int,
) -> Tuple[ChipRegion, ChipRegion]:
    """Grow *region* by *halo* pixels, clipped to the raster.

    Parameters
    ----------
    region : ChipRegion
        Core region inside ``[0, nrows) x [0, ncols)``.
    halo : int
        Context pixels to add on every side. Must be >= 0.
    nrows, ncols : int
        Raster dimensions.

    Returns
    -------
    expanded : ChipRegion
        Region to read, in raster coordinates.
    core : ChipRegion
        Location of *region* inside the expanded array, for cropping.

    Raises
    ------
    ValueError
        If *halo* is negative.
    """
    if halo < 0:
        raise ValueError(f"halo must be >= 0, got {halo}")
    expanded = ChipRegion(
        max(0, region.row_start - halo),
        max(0, region.col_start - halo),
        min(nrows, region.row_end + halo),
        min(ncols, region.col_end + halo),
    )
    core = region.offset(-expanded.row_start, -expanded.col_start)
    return expanded, core


def _normalize_pair(
    value: Union[int, Tuple[int, int]], name: str
) -> Tuple[int, int]:
    """Convert an int or ``(int, int)`` to a validated ``(rows, cols)`` pair.

    Raises
    ------
    TypeError
        If value is not int or tuple of two ints.
    ValueError
        If any element is not positive.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
        return (value, value)
    if isinstance(value, tuple) and len(value) == 2:
        r, c = value
        if not isinstance(r, int) or not isinstance(c, int):
            raise TypeError(f"{name} tuple elements must be int")
        if r <= 0 or c <= 0:
            raise ValueError(
                f"{name} elements must be positive, got ({r}, {c})"
            )
        return (r, c)
    raise TypeError(
        f"{name} must be int or Tuple[int, int], got {type(value).__name__}"
    )
