# -*- coding: utf-8 -*-
"""
Image Processing Module - Stages of the shoreline classification chain.

All stages inherit from ``ImageProcessor``, which provides version
checking, ``Annotated`` tunable parameter validation and the ``halo``
declaration used for tiled evaluation.

Sub-modules
-----------
index.py
    ``WaterIndexEvaluator`` -- NDWI / AWEI band algebra.
threshold.py
    ``ThresholdClassifier`` -- interpolated water / marginal / land lookup
    table; ``PassThrough`` for skip-threshold runs.
filters/
    ``GaussianFilter`` smoothing and ``RobertsEdgeFilter`` edge strength.
pipeline.py
    ``Pipeline`` -- sequential composition of stages.
versioning.py, params.py
    ``@processor_version``, ``@processor_tags`` and ``Range`` / ``Options``
    / ``Desc`` parameter markers.

Usage
-----
    >>> import numpy as np
    >>> from shoreline.image_processing import (
    ...     Pipeline, WaterIndexEvaluator, ThresholdClassifier, GaussianFilter)
    >>> chain = Pipeline([
    ...     WaterIndexEvaluator('ndwi'),
    ...     ThresholdClassifier(threshold=0.55, tolerance=0.01),
    ...     GaussianFilter(sigma=0.2),
    ... ])
    >>> zones = chain.apply(np.stack([green, nir]))

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
2026-03-03

Modified
--------
2026-03-12
"""

from shoreline.image_processing.base import (
    BandwiseTransformMixin,
    ImageProcessor,
    ImageTransform,
)
from shoreline.image_processing.index import (
    FORMULAS,
    WaterIndexEvaluator,
    required_band_count,
)
from shoreline.image_processing.threshold import (
    BREAKPOINT_EPSILON,
    LookupTable,
    PassThrough,
    ThresholdClassifier,
    build_lookup_table,
)
from shoreline.image_processing.filters import GaussianFilter, RobertsEdgeFilter
from shoreline.image_processing.pipeline import Pipeline
from shoreline.image_processing.versioning import processor_tags, processor_version
from shoreline.image_processing.params import Desc, Options, ParamSpec, Range

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'BandwiseTransformMixin',
    'FORMULAS',
    'WaterIndexEvaluator',
    'required_band_count',
    'BREAKPOINT_EPSILON',
    'LookupTable',
    'PassThrough',
    'ThresholdClassifier',
    'build_lookup_table',
    'GaussianFilter',
    'RobertsEdgeFilter',
    'Pipeline',
    'processor_version',
    'processor_tags',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
]
