# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for raster processors.

Defines ``ImageProcessor``, the common base of every stage in the shoreline
chain, and the ``ImageTransform`` ABC for dense raster transforms.
``ImageProcessor`` warns once per class when no processor version is
declared, collects ``typing.Annotated`` tunable parameters into
``__param_specs__`` and resolves runtime overrides through ``**kwargs``.

Processors are stateless after construction: ``apply()`` must not mutate
the instance, so a single processor can serve concurrent tile requests.

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
2026-03-11
"""

# Standard library
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# Shoreline internal
from shoreline.image_processing.params import ParamSpec, collect_param_specs

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all raster processors.

    **Version checking**: concrete subclasses that do not declare a
    processor version via ``@processor_version('x.y.z')`` trigger a
    ``UserWarning`` at first instantiation. The check lives in ``__new__``
    so class decorators have already been applied when it runs.

    **Tunable parameters**: subclasses declare parameters as
    ``typing.Annotated`` class-body fields using the markers from
    :mod:`shoreline.image_processing.params`. ``_resolve_params(kwargs)``
    merges instance values with keyword overrides and validates them.

    **Halo**: ``halo`` is the number of context pixels the processor needs
    on every side of a tile to reproduce whole-raster output. The default
    is 0 (per-pixel processors).
    """

    # Track which classes have been checked to warn only once per class.
    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    @property
    def halo(self) -> int:
        """Context pixels required on each side of a tile.

        Returns
        -------
        int
        """
        return 0

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance values with runtime *kwargs* overrides.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            Runtime keyword arguments. Non-parameter keys (e.g.
            ``progress_callback``) are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        ValueError
            If a value violates range or choices constraints.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs.get(spec.name, getattr(self, spec.name))
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(
        self, kwargs: Dict[str, Any], fraction: float
    ) -> None:
        """Report progress to an optional ``progress_callback`` kwarg."""
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class ImageTransform(ImageProcessor):
    """
    Abstract base class for dense raster transforms.

    Subclasses implement ``apply`` which maps one numpy array to another.
    The first stage of a shoreline chain consumes a ``(bands, rows, cols)``
    stack; later stages consume and produce ``(rows, cols)`` tiles.
    """

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Apply the transform to a source array.

        Parameters
        ----------
        source : np.ndarray
            Input raster tile.

        Returns
        -------
        np.ndarray
            Transformed tile.
        """
        ...


class BandwiseTransformMixin:
    """Mixin that applies a 2D transform across bands of a 3D stack.

    Mixed into an ``ImageTransform`` subclass, it accepts 3D
    ``(bands, rows, cols)`` arrays by calling ``_apply_2d()`` on each band
    and stacking the results. 2D inputs go straight to ``_apply_2d()``.
    """

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the transform, handling both 2D and 3D inputs.

        Parameters
        ----------
        source : np.ndarray
            2D ``(rows, cols)`` or 3D ``(bands, rows, cols)`` array.

        Returns
        -------
        np.ndarray
            Transformed image with same dimensionality as input.
        """
        if source.ndim == 3:
            return np.stack(
                [self._apply_2d(source[b], **kwargs)
                 for b in range(source.shape[0])]
            )
        return self._apply_2d(source, **kwargs)

    @abstractmethod
    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the transform to a single 2D band."""
        ...
