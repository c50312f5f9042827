# -*- coding: utf-8 -*-
"""
Shoreline - Water index classification and shoreline vectorization.

Computes a spectral water index (NDWI or AWEI) from multispectral band
images, classifies it into water, marginal and land zones with a tolerance
band around the threshold, optionally smooths or edge-filters the result,
and traces the water zone into vector output. Large scenes are processed
tile by tile with results independent of the tiling.

Dependencies
------------
numpy
scipy
rasterio
shapely

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
2026-03-03

Modified
--------
2026-03-13
"""

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from shoreline.exceptions import (
    ShorelineError,
    ValidationError,
    InvalidConfiguration,
    InsufficientInputs,
    UnsupportedConfiguration,
    InvalidAOI,
    ProcessorError,
    DependencyError,
    DegradedOutputWarning,
)
from shoreline.vocabulary import (
    WaterIndex,
    Sensor,
    ProcessorCategory,
    VectorMode,
)
from shoreline.config import ColorCoding, ShorelineConfig, load_keyword_file

__all__ = [
    'ShorelineError',
    'ValidationError',
    'InvalidConfiguration',
    'InsufficientInputs',
    'UnsupportedConfiguration',
    'InvalidAOI',
    'ProcessorError',
    'DependencyError',
    'DegradedOutputWarning',
    'WaterIndex',
    'Sensor',
    'ProcessorCategory',
    'VectorMode',
    'ColorCoding',
    'ShorelineConfig',
    'load_keyword_file',
]
