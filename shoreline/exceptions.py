# -*- coding: utf-8 -*-
"""
Shoreline Exception Hierarchy - Domain-specific exceptions and warnings.

Lets callers catch shoreline errors distinctly from Python built-in
exceptions. Every exception subclasses both ``ShorelineError`` and the
appropriate built-in so existing ``except ValueError`` handlers keep
working.

Configuration and precondition errors (``InvalidConfiguration``,
``InsufficientInputs``, ``UnsupportedConfiguration``, ``InvalidAOI``) are
raised before any tile is computed. ``DegradedOutputWarning`` is the only
non-fatal outcome: the classified raster is valid but no vector product
was produced.

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
2026-03-02

Modified
--------
2026-03-09
"""


class ShorelineError(Exception):
    """Base exception for all shoreline errors."""


class ValidationError(ShorelineError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for shape mismatches, out-of-range parameters, and other
    input validation failures.
    """


class InvalidConfiguration(ValidationError):
    """Malformed classification configuration.

    Raised for an unknown algorithm name, a threshold outside [0, 1],
    a negative tolerance, or a color coding that is not three bytes.
    Detected eagerly when the configuration is built.
    """


class InsufficientInputs(ValidationError):
    """Fewer band sources than the water index requires.

    NDWI needs two bands and AWEI four. Detected when the pipeline is
    built, before any tile work begins.
    """


class UnsupportedConfiguration(ValidationError):
    """Sensor profile or algorithm the pipeline cannot run."""


class InvalidAOI(ValidationError):
    """Area of interest has undefined bounds, or a tile lies outside it."""


class ProcessorError(ShorelineError, RuntimeError):
    """Non-recoverable failure inside a processing stage."""


class DependencyError(ShorelineError, ImportError):
    """Missing optional dependency required for a specific component.

    Raised when a component requires an optional package (rasterio,
    shapely) that is not installed.
    """


class DegradedOutputWarning(UserWarning):
    """Vectorization was not performed; the raster product is still valid."""
