# -*- coding: utf-8 -*-
"""
Extraction Module - Shoreline pipeline orchestration and vectorization.

``ShorelinePipeline`` builds the tile processor and drives tiled runs;
``ProductFinalizer`` vectorizes the finished raster product through the
``Vectorizer`` registry.

Usage
-----
    >>> from shoreline.extraction import ShorelinePipeline
    >>> result = (ShorelinePipeline()
    ...           .with_bands([green, swir])
    ...           .with_vector_output('coast.json')
    ...           .run())

Dependencies
------------
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
2026-03-09

Modified
--------
2026-03-13
"""

from shoreline.extraction.vectorize import (
    FinalizeResult,
    FinalizeStatus,
    ProductFinalizer,
    RasterVectorizer,
    Vectorizer,
    available_vectorizers,
    create_vectorizer,
    register_vectorizer,
)
from shoreline.extraction.shoreline_pipeline import (
    ShorelinePipeline,
    ShorelineResult,
    TileProcessor,
    build_chain,
)

__all__ = [
    'FinalizeResult',
    'FinalizeStatus',
    'ProductFinalizer',
    'RasterVectorizer',
    'Vectorizer',
    'available_vectorizers',
    'create_vectorizer',
    'register_vectorizer',
    'ShorelinePipeline',
    'ShorelineResult',
    'TileProcessor',
    'build_chain',
]
