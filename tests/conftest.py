# -*- coding: utf-8 -*-
"""
Shared fixtures for the shoreline test suite.

Synthetic band scenes with a known water / land layout, plus helpers for
georeferenced in-memory readers.

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

try:
    import rasterio  # noqa: F401
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

requires_rasterio = pytest.mark.skipif(
    not _HAS_RASTERIO, reason="rasterio not installed"
)


def make_geolocation(res: float = 30.0):
    """UTM georeferencing with *res* metre pixels (needs rasterio)."""
    from rasterio.crs import CRS
    from rasterio.transform import from_origin

    return {
        'crs': CRS.from_epsg(32633),
        'transform': from_origin(500000.0, 4200000.0, res, res),
    }


@pytest.fixture
def ndwi_bands():
    """Green / NIR pair, 60 x 70, water on the left, land on the right.

    Columns 0-29 are water (NDWI 0.9), columns 30-34 marginal (NDWI
    0.55), columns 35+ land (NDWI 0.2). Pixel (5, 60) has both bands 0.
    """
    rows, cols = 60, 70
    green = np.full((rows, cols), 20, dtype=np.uint16)
    nir = np.full((rows, cols), 80, dtype=np.uint16)
    green[:, :30] = 90
    nir[:, :30] = 10
    green[:, 30:35] = 55
    nir[:, 30:35] = 45
    green[5, 60] = 0
    nir[5, 60] = 0
    return green, nir


@pytest.fixture
def random_bands():
    """Four positive random reflectance bands, 45 x 53."""
    rng = np.random.default_rng(42)
    return [rng.uniform(1.0, 1000.0, size=(45, 53)).astype(np.float32)
            for _ in range(4)]
