# -*- coding: utf-8 -*-
"""
Water Index Evaluator - Spectral water index band algebra.

Computes a per-pixel scalar water index from a fixed set of co-registered
band tiles. The supported formulas form a closed table keyed by
``WaterIndex``:

- ``NDWI``: ``b0 / (b0 + b1)`` (2 bands; Landsat 8 bands 3 and 5 or 6)
- ``AWEI``: ``4*(b0 + b1) - 0.25*b2 - 2.75*b3`` (4 bands; Landsat 8 bands
  3, 6, 5 and 7)

Arithmetic runs in float64 and the index tile is returned as float32.
A zero NDWI denominator yields NaN, which downstream stages treat as a
defined sentinel (the threshold classifier maps it to the land code).

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
2026-03-04

Modified
--------
2026-03-12
"""

# Standard library
from typing import Any, Callable, Dict, NamedTuple, Sequence, Union

# Third-party
import numpy as np

# Shoreline internal
from shoreline.config import as_water_index
from shoreline.exceptions import InsufficientInputs, ValidationError
from shoreline.image_processing.base import ImageTransform
from shoreline.image_processing.versioning import processor_tags, processor_version
from shoreline.vocabulary import ProcessorCategory, WaterIndex


def _ndwi(b: np.ndarray) -> np.ndarray:
    denom = b[0] + b[1]
    out = np.full(denom.shape, np.nan, dtype=np.float64)
    np.divide(b[0], denom, out=out, where=denom != 0)
    return out


def _awei(b: np.ndarray) -> np.ndarray:
    return 4.0 * (b[0] + b[1]) - 0.25 * b[2] - 2.75 * b[3]


class IndexFormula(NamedTuple):
    """One entry of the formula table."""

    band_count: int
    expression: str
    evaluate: Callable[[np.ndarray], np.ndarray]


FORMULAS: Dict[WaterIndex, IndexFormula] = {
    WaterIndex.NDWI: IndexFormula(2, "in[0]/(in[0]+in[1])", _ndwi),
    WaterIndex.AWEI: IndexFormula(
        4, "4*(in[0]+in[1]) - 0.25*in[2] - 2.75*in[3]", _awei
    ),
}


def required_band_count(algorithm: Union[str, WaterIndex]) -> int:
    """Number of input bands the index formula consumes.

    Parameters
    ----------
    algorithm : str or WaterIndex

    Returns
    -------
    int
        2 for NDWI, 4 for AWEI.
    """
    return FORMULAS[as_water_index(algorithm)].band_count


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.MATH,
                description='Spectral water index from co-registered bands')
class WaterIndexEvaluator(ImageTransform):
    """Compute a water index tile from a stack of band tiles.

    Parameters
    ----------
    algorithm : str or WaterIndex
        Index formula. Default NDWI.

    Examples
    --------
    >>> ev = WaterIndexEvaluator('ndwi')
    >>> index = ev.apply(np.stack([green, nir]))
    """

    def __init__(self, algorithm: Union[str, WaterIndex] = WaterIndex.NDWI) -> None:
        self.algorithm = as_water_index(algorithm)
        self._formula = FORMULAS[self.algorithm]

    @property
    def band_count(self) -> int:
        """Bands consumed by the configured formula."""
        return self._formula.band_count

    @property
    def expression(self) -> str:
        """Human-readable formula, ``in[i]`` denoting band *i*."""
        return self._formula.expression

    def apply(
        self,
        source: Union[np.ndarray, Sequence[np.ndarray]],
        **kwargs: Any,
    ) -> np.ndarray:
        """Evaluate the index.

        Parameters
        ----------
        source : np.ndarray or Sequence[np.ndarray]
            ``(bands, rows, cols)`` stack, or a sequence of equal-shape 2D
            band tiles. Bands beyond the required count are ignored.

        Returns
        -------
        np.ndarray
            ``(rows, cols)`` float32 index tile.

        Raises
        ------
        InsufficientInputs
            If fewer bands than the formula requires are supplied.
        ValidationError
            If the band tiles do not share one geometry.
        """
        if isinstance(source, np.ndarray):
            if source.ndim != 3:
                raise ValidationError(
                    f"Band stack must be 3D (bands, rows, cols), "
                    f"got {source.ndim}D"
                )
            bands = source
        else:
            shapes = {np.shape(b) for b in source}
            if len(shapes) > 1:
                raise ValidationError(
                    f"Band tiles must share one geometry, got shapes "
                    f"{sorted(shapes)}"
                )
            bands = np.stack([np.asarray(b) for b in source]) if source else None

        n = 0 if bands is None else bands.shape[0]
        if n < self.band_count:
            raise InsufficientInputs(
                f"{self.algorithm.name} expects {self.band_count} input bands "
                f"but only found {n}"
            )

        working = bands[:self.band_count].astype(np.float64)
        return self._formula.evaluate(working).astype(np.float32)

    def __repr__(self) -> str:
        return f"WaterIndexEvaluator(algorithm={self.algorithm.value!r})"
