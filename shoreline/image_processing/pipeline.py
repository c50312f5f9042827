# -*- coding: utf-8 -*-
"""
Pipeline - Ordered chain of raster transforms.

Chains ``ImageTransform`` stages into a single callable: the output of
each stage feeds the next. The chain's halo is the sum of its stages'
halos, which is the margin a tile request must carry for the chained
result to match whole-raster evaluation.

Author
------
Steven Siebert

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
2026-03-14
"""

# Standard library
import logging
from typing import Any, Callable, List, Sequence

# Third-party
import numpy as np

# Shoreline internal
from shoreline.image_processing.base import ImageTransform

logger = logging.getLogger(__name__)


class Pipeline(ImageTransform):
    """Sequential chain of image transforms.

    Parameters
    ----------
    steps : Sequence[ImageTransform]
        Ordered transforms to apply. Must contain at least one.

    Examples
    --------
    >>> from shoreline.image_processing import (
    ...     Pipeline, WaterIndexEvaluator, ThresholdClassifier)
    >>> pipe = Pipeline([
    ...     WaterIndexEvaluator('ndwi'),
    ...     ThresholdClassifier(threshold=0.55, tolerance=0.01),
    ... ])
    >>> classified = pipe.apply(band_stack)

    With progress reporting:

    >>> pipe.apply(band_stack, progress_callback=lambda f: print(f"{f:.0%}"))
    """

    __processor_version__ = '1.0.0'

    def __init__(self, steps: Sequence[ImageTransform]) -> None:
        if not steps:
            raise ValueError("Pipeline requires at least one transform")
        for i, step in enumerate(steps):
            if not isinstance(step, ImageTransform):
                raise TypeError(
                    f"Step {i} is not an ImageTransform: {type(step).__name__}"
                )
        self._steps: List[ImageTransform] = list(steps)

    @property
    def steps(self) -> List[ImageTransform]:
        """Shallow copy of the ordered step list."""
        return list(self._steps)

    @property
    def halo(self) -> int:
        """Total context pixels required by the chained stages."""
        return sum(step.halo for step in self._steps)

    @property
    def provenance(self) -> str:
        """Stage names with their processor versions, e.g.
        ``'WaterIndexEvaluator/1.0.0 > ThresholdClassifier/1.0.0'``."""
        return ' > '.join(
            f"{type(s).__name__}/{getattr(s, '__processor_version__', 'unknown')}"
            for s in self._steps
        )

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        step_names = [type(s).__name__ for s in self._steps]
        return f"Pipeline({step_names})"

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply all transforms in sequence.

        Parameters
        ----------
        source : np.ndarray
            Input array for the first stage.
        **kwargs
            Forwarded to every stage. ``progress_callback`` is intercepted
            and rescaled so each stage reports its share of the chain.

        Returns
        -------
        np.ndarray
            Output of the last stage.
        """
        report = kwargs.pop('progress_callback', None)
        count = len(self._steps)
        tile = source
        for index, stage in enumerate(self._steps):
            logger.debug("Stage %d of %d: %s", index + 1, count,
                         type(stage).__qualname__)
            stage_kwargs = dict(kwargs)
            if report is not None:
                stage_kwargs['progress_callback'] = _stage_share(
                    report, index, count)
            tile = stage.apply(tile, **stage_kwargs)
            if report is not None:
                report((index + 1) / count)
        return tile


def _stage_share(report: Callable[[float], None], index: int,
                 count: int) -> Callable[[float], None]:
    """Map a stage's own 0..1 progress onto its slice of the chain."""
    return lambda fraction: report((index + fraction) / count)
