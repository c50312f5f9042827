# -*- coding: utf-8 -*-
"""
Threshold Classifier - Three-zone water/marginal/land lookup table.

Maps a normalized water index tile to single-byte zone codes through an
interpolated lookup table built once from the configuration. Given
``threshold`` and ``tolerance``, the table's control points are::

    index:  0     lo1    lo2        hi1       hi2     1
    code:   land  land   marginal   marginal  water   water

with ``lo1 = threshold - tolerance``, ``hi1 = threshold + tolerance`` and
``lo2``/``hi2`` one ``BREAKPOINT_EPSILON`` above them. Between control
points the code is linearly interpolated, which anti-aliases the zone
boundaries over an epsilon-wide sliver. With ``tolerance == 0`` the
marginal points are dropped and the table steps straight from land to
water, so the marginal code is never produced.

Evaluating a table is a pure per-pixel function, so classification
results do not depend on how the raster is tiled.

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
2026-03-05

Modified
--------
2026-03-12
"""

# Standard library
import logging
from typing import Any, Optional, Tuple

# Third-party
import numpy as np

# Shoreline internal
from shoreline.config import ColorCoding
from shoreline.exceptions import InvalidConfiguration
from shoreline.image_processing.base import ImageTransform
from shoreline.image_processing.versioning import processor_tags, processor_version
from shoreline.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

#: Separation between coincident breakpoints (single-precision epsilon).
BREAKPOINT_EPSILON = float(np.finfo(np.float32).eps)


class LookupTable:
    """Immutable piecewise-linear lookup table.

    Parameters
    ----------
    inputs : Tuple[float, ...]
        Non-decreasing control point inputs.
    outputs : Tuple[int, ...]
        Output code at each control point.
    nan_value : int
        Code assigned to non-finite inputs.
    """

    def __init__(
        self,
        inputs: Tuple[float, ...],
        outputs: Tuple[int, ...],
        nan_value: int,
    ) -> None:
        if len(inputs) != len(outputs) or len(inputs) < 2:
            raise ValueError(
                "LookupTable requires matching inputs and outputs with at "
                "least two control points"
            )
        xp = np.asarray(inputs, dtype=np.float64)
        if np.any(np.diff(xp) < 0):
            raise ValueError(f"LookupTable inputs must be non-decreasing: {inputs}")
        self._xp = xp
        self._fp = np.asarray(outputs, dtype=np.float64)
        self._xp.setflags(write=False)
        self._fp.setflags(write=False)
        self.nan_value = int(nan_value)

    @property
    def inputs(self) -> Tuple[float, ...]:
        return tuple(float(x) for x in self._xp)

    @property
    def outputs(self) -> Tuple[int, ...]:
        return tuple(int(f) for f in self._fp)

    def apply(self, values: np.ndarray) -> np.ndarray:
        """Evaluate the table.

        Values below the first or above the last control point clamp to
        the end codes. Non-finite values map to ``nan_value``.

        Parameters
        ----------
        values : np.ndarray
            Index values, any shape.

        Returns
        -------
        np.ndarray
            uint8 codes, same shape.
        """
        v = np.asarray(values, dtype=np.float64)
        finite = np.isfinite(v)
        mapped = np.interp(np.where(finite, v, 0.0), self._xp, self._fp)
        codes = np.rint(mapped).astype(np.uint8)
        codes[~finite] = self.nan_value
        return codes

    def __repr__(self) -> str:
        points = ', '.join(
            f"({x:.9g}, {f})" for x, f in zip(self.inputs, self.outputs)
        )
        return f"LookupTable([{points}])"


def build_lookup_table(
    threshold: float,
    tolerance: float,
    color_coding: Optional[ColorCoding] = None,
) -> LookupTable:
    """Build the three-zone classification table.

    Parameters
    ----------
    threshold : float
        Normalized threshold in [0, 1].
    tolerance : float
        Half-width of the marginal band. 0 disables the marginal zone;
        otherwise it must be at least ``BREAKPOINT_EPSILON``.
    color_coding : ColorCoding, optional
        Zone codes. Defaults to water 255, marginal 128, land 0.

    Returns
    -------
    LookupTable

    Raises
    ------
    InvalidConfiguration
        If threshold is outside [0, 1] or tolerance is invalid.
    """
    codes = color_coding or ColorCoding()
    if not np.isfinite(threshold) or not 0.0 <= threshold <= 1.0:
        raise InvalidConfiguration(
            f"threshold must be in [0, 1], got {threshold!r}"
        )
    if not np.isfinite(tolerance) or tolerance < 0:
        raise InvalidConfiguration(
            f"tolerance must be >= 0, got {tolerance!r}"
        )
    if 0 < tolerance < BREAKPOINT_EPSILON:
        raise InvalidConfiguration(
            f"tolerance must be 0 or at least {BREAKPOINT_EPSILON:.3g}, "
            f"got {tolerance!r}"
        )

    lo1 = threshold - tolerance
    lo2 = lo1 + BREAKPOINT_EPSILON
    start = min(0.0, lo1)

    if tolerance == 0:
        end = max(1.0, lo2)
        inputs = (start, lo1, lo2, end)
        outputs = (codes.land, codes.land, codes.water, codes.water)
    else:
        hi1 = threshold + tolerance
        hi2 = hi1 + BREAKPOINT_EPSILON
        end = max(1.0, hi2)
        inputs = (start, lo1, lo2, hi1, hi2, end)
        outputs = (codes.land, codes.land, codes.marginal,
                   codes.marginal, codes.water, codes.water)

    table = LookupTable(inputs, outputs, nan_value=codes.land)
    logger.debug("Threshold table: %r", table)
    return table


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD,
                description='Water / marginal / land zone classification')
class ThresholdClassifier(ImageTransform):
    """Classify an index tile into water, marginal and land codes.

    The lookup table is built once at construction; ``apply`` only
    evaluates it.

    Parameters
    ----------
    threshold : float
        Normalized threshold in [0, 1]. Default 0.55.
    tolerance : float
        Marginal band half-width. Default 0.01.
    color_coding : ColorCoding, optional
        Zone codes. Default water 255, marginal 128, land 0.

    Examples
    --------
    >>> clf = ThresholdClassifier(threshold=0.55, tolerance=0.01)
    >>> clf.apply(np.array([[0.1, 0.55, 0.9]]))
    array([[  0, 128, 255]], dtype=uint8)
    """

    def __init__(
        self,
        threshold: float = 0.55,
        tolerance: float = 0.01,
        color_coding: Optional[ColorCoding] = None,
    ) -> None:
        self.threshold = float(threshold)
        self.tolerance = float(tolerance)
        self.color_coding = color_coding or ColorCoding()
        self._table = build_lookup_table(
            self.threshold, self.tolerance, self.color_coding
        )

    @property
    def table(self) -> LookupTable:
        """The lookup table evaluated by ``apply``."""
        return self._table

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Classify an index tile.

        Parameters
        ----------
        source : np.ndarray
            ``(rows, cols)`` index tile.

        Returns
        -------
        np.ndarray
            ``(rows, cols)`` uint8 zone codes.
        """
        return self._table.apply(source)

    def __repr__(self) -> str:
        return (
            f"ThresholdClassifier(threshold={self.threshold}, "
            f"tolerance={self.tolerance}, color_coding='{self.color_coding}')"
        )


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD,
                description='Skip-threshold identity stage')
class PassThrough(ImageTransform):
    """Identity stage used when thresholding is skipped."""

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        return source
