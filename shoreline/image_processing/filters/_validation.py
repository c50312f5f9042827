# -*- coding: utf-8 -*-
"""
Filter Validation Helpers - Shared sigma and boundary mode validation.

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
import math

# Shoreline internal
from shoreline.exceptions import ValidationError


BOUNDARY_MODES = ('nearest', 'reflect', 'mirror', 'constant', 'wrap')


def validate_sigma(sigma: float, name: str = 'sigma') -> None:
    """Validate that a Gaussian sigma is a positive finite number.

    Parameters
    ----------
    sigma : float
        Standard deviation in pixels.
    name : str
        Parameter name for error messages. Default ``'sigma'``.

    Raises
    ------
    ValidationError
        If ``sigma`` is not a number, not finite, or not positive.
    """
    if isinstance(sigma, bool) or not isinstance(sigma, (int, float)):
        raise ValidationError(
            f"{name} must be a number, got {type(sigma).__name__}"
        )
    if not math.isfinite(sigma) or sigma <= 0:
        raise ValidationError(f"{name} must be > 0, got {sigma}")


def validate_mode(mode: str) -> None:
    """Validate that a boundary mode is supported by scipy.ndimage.

    Parameters
    ----------
    mode : str
        Boundary handling mode to validate.

    Raises
    ------
    ValidationError
        If ``mode`` is not one of ``BOUNDARY_MODES``.
    """
    if mode not in BOUNDARY_MODES:
        raise ValidationError(
            f"mode must be one of {BOUNDARY_MODES}, got {mode!r}"
        )
