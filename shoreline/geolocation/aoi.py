# -*- coding: utf-8 -*-
"""
Area of Interest - Ground rectangle and pixel window processed by a run.

An ``AreaOfInterest`` pairs the ground-space rectangle a caller asked for
with the pixel window of the band images that covers it. Tile requests
are expressed in AOI pixel coordinates, so ``(0, 0)`` is the upper-left
pixel of ``view_rect``.

Dependencies
------------
rasterio

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
2026-03-08

Modified
--------
2026-03-11
"""

# Standard library
import math
from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional, Tuple

try:
    from rasterio import windows as rio_windows
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

# Shoreline internal
from shoreline.data_prep.base import ChipRegion
from shoreline.exceptions import DependencyError, InvalidAOI
from shoreline.IO.base import ImageReader


class GroundRect(NamedTuple):
    """Axis-aligned rectangle in the image's ground coordinate system.

    Attributes
    ----------
    min_x, min_y, max_x, max_y : float
        Bounds in CRS units (or pixels for sources without a CRS).
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def has_nans(self) -> bool:
        """True when any bound is undefined."""
        return any(v is None or math.isnan(v) for v in self)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def pixel_shape_for(
    ground_rect: GroundRect,
    resolution: Tuple[float, float],
) -> Tuple[int, int]:
    """Pixel ``(rows, cols)`` covering *ground_rect* at *resolution*.

    Parameters
    ----------
    ground_rect : GroundRect
        Ground rectangle.
    resolution : Tuple[float, float]
        ``(res_x, res_y)`` ground units per pixel, both positive.

    Raises
    ------
    InvalidAOI
        If the rectangle has NaN bounds or the resolution is not positive.
    """
    if ground_rect.has_nans():
        raise InvalidAOI(f"Ground rectangle has undefined bounds: {ground_rect}")
    res_x, res_y = resolution
    if res_x <= 0 or res_y <= 0:
        raise InvalidAOI(f"Resolution must be positive, got {resolution}")
    return (int(math.ceil(abs(ground_rect.height) / res_y)),
            int(math.ceil(abs(ground_rect.width) / res_x)))


@dataclass(frozen=True)
class AreaOfInterest:
    """Region of the band images a shoreline run processes.

    Parameters
    ----------
    ground_rect : GroundRect
        Requested ground rectangle.
    view_rect : ChipRegion
        Pixel window of the band images covering ``ground_rect``.

    Examples
    --------
    >>> aoi = AreaOfInterest.from_reader(green_reader)
    >>> aoi.shape
    (7801, 7681)
    """

    ground_rect: Optional[GroundRect]
    view_rect: Optional[ChipRegion]

    def validate(self) -> None:
        """Reject an AOI that cannot drive a run.

        Raises
        ------
        InvalidAOI
            If either rectangle is missing, the ground rectangle has NaN
            bounds, or the pixel window is empty.
        """
        if self.ground_rect is None or self.view_rect is None:
            raise InvalidAOI("Area of interest is not defined")
        if self.ground_rect.has_nans():
            raise InvalidAOI(
                f"Area of interest has undefined bounds: {self.ground_rect}"
            )
        rows, cols = self.view_rect.shape
        if rows <= 0 or cols <= 0 or \
                self.view_rect.row_start < 0 or self.view_rect.col_start < 0:
            raise InvalidAOI(f"Area of interest pixel window is empty: {self.view_rect}")

    @property
    def shape(self) -> Tuple[int, int]:
        """``(rows, cols)`` of the pixel window."""
        return self.view_rect.shape

    def contains(self, region: ChipRegion) -> bool:
        """True when *region* (AOI pixel coordinates) lies inside the AOI."""
        rows, cols = self.shape
        return (0 <= region.row_start < region.row_end <= rows
                and 0 <= region.col_start < region.col_end <= cols)

    def to_image(self, region: ChipRegion) -> ChipRegion:
        """Map *region* from AOI to image pixel coordinates."""
        return region.offset(self.view_rect.row_start, self.view_rect.col_start)

    def geolocation(
        self, source: Optional[Dict[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        """Georeferencing of the AOI window, derived from the image's.

        The affine transform is shifted to the window origin so products
        written for the AOI stay registered with the band images.
        """
        if not source or source.get('transform') is None:
            return source
        if not _HAS_RASTERIO:
            raise DependencyError(
                "rasterio is required for windowed georeferencing. "
                "Install with: pip install rasterio"
            )
        window = rio_windows.Window(
            self.view_rect.col_start, self.view_rect.row_start,
            self.view_rect.shape[1], self.view_rect.shape[0],
        )
        result = dict(source)
        result['transform'] = rio_windows.transform(window, source['transform'])
        result['bounds'] = GroundRect(
            *rio_windows.bounds(window, source['transform']))
        return result

    @classmethod
    def from_reader(cls, reader: ImageReader) -> 'AreaOfInterest':
        """Whole-image AOI of *reader*.

        Sources without georeferencing get a ground rectangle in pixel
        units.
        """
        rows, cols = reader.get_shape()[:2]
        geo = reader.get_geolocation()
        bounds = geo.get('bounds') if geo else None
        if bounds is None:
            ground = GroundRect(0.0, 0.0, float(cols), float(rows))
        else:
            ground = GroundRect(*(float(b) for b in bounds))
        return cls(ground, ChipRegion(0, 0, rows, cols))

    @classmethod
    def from_ground_rect(
        cls,
        ground: GroundRect,
        transform: Any,
        shape: Tuple[int, int],
    ) -> 'AreaOfInterest':
        """AOI covering *ground*, clipped to an image of *shape*.

        Parameters
        ----------
        ground : GroundRect
            Requested ground rectangle.
        transform : affine.Affine
            Image affine transform (pixel to ground).
        shape : Tuple[int, int]
            Image ``(rows, cols)``.

        Raises
        ------
        InvalidAOI
            If the rectangle is undefined or misses the image.
        """
        if ground.has_nans():
            raise InvalidAOI(f"Ground rectangle has undefined bounds: {ground}")
        if not _HAS_RASTERIO:
            raise DependencyError(
                "rasterio is required for ground to pixel conversion. "
                "Install with: pip install rasterio"
            )
        window = rio_windows.from_bounds(
            ground.min_x, ground.min_y, ground.max_x, ground.max_y,
            transform=transform,
        )
        # float noise on exact pixel edges must not add a row or column
        r0, c0 = round(window.row_off, 6), round(window.col_off, 6)
        r1 = round(window.row_off + window.height, 6)
        c1 = round(window.col_off + window.width, 6)
        row_start = max(0, int(math.floor(r0)))
        col_start = max(0, int(math.floor(c0)))
        row_end = min(shape[0], int(math.ceil(r1)))
        col_end = min(shape[1], int(math.ceil(c1)))
        if row_end <= row_start or col_end <= col_start:
            raise InvalidAOI(f"Ground rectangle {ground} does not overlap the image")
        return cls(ground, ChipRegion(row_start, col_start, row_end, col_end))
