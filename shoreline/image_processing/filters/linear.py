# -*- coding: utf-8 -*-
"""
Linear Spatial Filters - Gaussian smoothing of index and zone rasters.

``GaussianFilter`` is a separable Gaussian blur backed by
``scipy.ndimage.gaussian_filter``. Tile boundaries use edge replication
(``mode='nearest'``) by default. The filter's ``halo`` equals the scipy
kernel radius, so a tile evaluated with that many context pixels matches
whole-raster evaluation of the same region.

Integer tiles (classified zone codes) are smoothed in float32 and rounded
back to their dtype; floating tiles (raw index) stay floating.

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
2026-03-12
"""

# Standard library
from typing import Annotated, Any

# Third-party
import numpy as np
from scipy.ndimage import gaussian_filter

# Shoreline internal
from shoreline.image_processing.base import BandwiseTransformMixin, ImageTransform
from shoreline.image_processing.params import Desc, Options, Range
from shoreline.image_processing.versioning import processor_tags, processor_version
from shoreline.image_processing.filters._validation import (
    BOUNDARY_MODES,
    validate_mode,
    validate_sigma,
)
from shoreline.vocabulary import ProcessorCategory


def kernel_radius(sigma: float, truncate: float = 4.0) -> int:
    """Radius in pixels of scipy's truncated Gaussian kernel."""
    return int(truncate * float(sigma) + 0.5)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS,
                description='Separable Gaussian smoothing')
class GaussianFilter(BandwiseTransformMixin, ImageTransform):
    """Gaussian smoothing filter using separable convolution.

    Parameters
    ----------
    sigma : float
        Gaussian standard deviation in pixels. Must be > 0.
        Default is 0.2.
    truncate : float
        Truncate the filter at this many standard deviations. Default 4.0.
    mode : str
        Boundary handling mode. Default ``'nearest'`` (edge replication).
    preserve_dtype : bool
        Round and cast integer inputs back to their dtype. Default True.

    Examples
    --------
    >>> f = GaussianFilter(sigma=1.5)
    >>> smoothed = f.apply(index_tile)
    >>> f.halo
    6
    """

    sigma: Annotated[float, Range(min=0.0, max=100.0),
                     Desc('Gaussian standard deviation')] = 0.2
    truncate: Annotated[float, Range(min=1.0, max=10.0),
                        Desc('Truncate filter at this many sigmas')] = 4.0
    mode: Annotated[str, Options(*BOUNDARY_MODES),
                    Desc('Boundary handling mode')] = 'nearest'

    def __init__(
        self,
        sigma: float = 0.2,
        truncate: float = 4.0,
        mode: str = 'nearest',
        preserve_dtype: bool = True,
    ) -> None:
        validate_sigma(sigma)
        validate_mode(mode)
        self.sigma = sigma
        self.truncate = truncate
        self.mode = mode
        self.preserve_dtype = preserve_dtype

    @property
    def halo(self) -> int:
        return kernel_radius(self.sigma, self.truncate)

    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the Gaussian filter to a single 2D tile.

        Parameters
        ----------
        source : np.ndarray
            2D array, shape ``(rows, cols)``.

        Returns
        -------
        np.ndarray
            Smoothed tile, same shape.
        """
        params = self._resolve_params(kwargs)
        validate_sigma(params['sigma'])

        if source.dtype == np.float64:
            working = source
        else:
            working = source.astype(np.float32)
        smoothed = gaussian_filter(
            working,
            sigma=params['sigma'],
            truncate=params['truncate'],
            mode=params['mode'],
        )

        if self.preserve_dtype and np.issubdtype(source.dtype, np.integer):
            info = np.iinfo(source.dtype)
            return np.clip(np.rint(smoothed), info.min, info.max).astype(
                source.dtype
            )
        return smoothed
