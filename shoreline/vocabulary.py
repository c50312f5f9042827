# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the shoreline package.

Single source of truth for the controlled vocabularies used across the
package: water index formulas, sensor profiles, processor categories and
vector output modes. Configuration parsing, the processors and the CLI
all import from here so names are consistent and typo-free.

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
2026-03-02
"""

from enum import Enum


class WaterIndex(Enum):
    """Spectral water index formulas.

    The value is the name accepted by the ``algorithm`` configuration key.
    """

    NDWI = "ndwi"
    AWEI = "awei"


class Sensor(Enum):
    """Sensor profiles that select band combinations for the indices."""

    LS8 = "ls8"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    MATH = "math"
    THRESHOLD = "threshold"
    FILTERS = "filters"
    EDGES = "edges"


class VectorMode(Enum):
    """Geometry type emitted by the vectorizer."""

    POLYGON = "polygon"
    LINESTRING = "linestring"
