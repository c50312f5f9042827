# -*- coding: utf-8 -*-
"""
Geolocation Module - Area of interest handling for shoreline runs.

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
2026-03-08
"""

from shoreline.geolocation.aoi import AreaOfInterest, GroundRect, pixel_shape_for

__all__ = [
    'AreaOfInterest',
    'GroundRect',
    'pixel_shape_for',
]
