# -*- coding: utf-8 -*-
"""
Edge Filters - Roberts cross gradient magnitude.

``RobertsEdgeFilter`` accentuates zone boundaries with the 2x2 Roberts
cross operator::

    gx = I[r, c] - I[r+1, c+1]
    gy = I[r+1, c] - I[r, c+1]
    edge = hypot(gx, gy)

The operator reads one pixel below and to the right of each output
pixel; the last row and column are edge-replicated, so a flat region and
the raster border both produce zero response.

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

# Standard library
from typing import Any

# Third-party
import numpy as np

# Shoreline internal
from shoreline.image_processing.base import BandwiseTransformMixin, ImageTransform
from shoreline.image_processing.versioning import processor_tags, processor_version
from shoreline.vocabulary import ProcessorCategory


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES,
                description='Roberts cross edge strength')
class RobertsEdgeFilter(BandwiseTransformMixin, ImageTransform):
    """Roberts cross edge-strength filter.

    Output is continuous-valued float32 boundary strength, not zone codes.
    Non-finite inputs are treated as 0.

    Examples
    --------
    >>> edges = RobertsEdgeFilter().apply(classified_tile)
    """

    @property
    def halo(self) -> int:
        return 1

    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        working = np.nan_to_num(source.astype(np.float32), nan=0.0,
                                posinf=0.0, neginf=0.0)
        padded = np.pad(working, ((0, 1), (0, 1)), mode='edge')
        gx = padded[:-1, :-1] - padded[1:, 1:]
        gy = padded[1:, :-1] - padded[:-1, 1:]
        return np.hypot(gx, gy).astype(np.float32)
