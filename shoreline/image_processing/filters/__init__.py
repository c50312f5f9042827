# -*- coding: utf-8 -*-
"""
Spatial Filters - Smoothing and edge stages of the shoreline chain.

``GaussianFilter``
    Separable Gaussian smoothing (optional stage, ``smoothing > 0``).
``RobertsEdgeFilter``
    Roberts cross edge strength (edge-detect rendering).

Both handle 3D ``(bands, rows, cols)`` stacks band by band via
``BandwiseTransformMixin`` and declare the ``halo`` they need.

Dependencies
------------
scipy

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
2026-03-06

Modified
--------
2026-03-06
"""

from shoreline.image_processing.filters.linear import GaussianFilter, kernel_radius
from shoreline.image_processing.filters.edge import RobertsEdgeFilter

__all__ = [
    'GaussianFilter',
    'RobertsEdgeFilter',
    'kernel_radius',
]
