# -*- coding: utf-8 -*-
"""
Classification Configuration - Immutable, validated run options.

Parses the name/value configuration surface of a shoreline run into a
frozen ``ShorelineConfig``. Validation is eager and all-or-nothing: a bad
value raises ``InvalidConfiguration`` before anything is applied, and a
constructed configuration never changes for the lifetime of a pipeline.

Recognized keys
---------------
``algorithm``
    ``ndwi`` (default) or ``awei``.
``color_coding``
    ``"<water> <marginal> <land>"``, three byte values. Default
    ``"255 128 0"``.
``threshold``
    Normalized threshold in [0, 1] (default 0.55), or ``X`` to skip
    thresholding and pass the raw index through.
``tolerance``
    Half-width of the marginal band around the threshold. Default 0.01.
``smoothing``
    Gaussian sigma in pixels; 0 disables smoothing. Default 0.2.
``do_edge_detect``
    Boolean; render edges instead of zones. Default false.
``sensor`` (alias ``sensor_id``)
    Sensor profile. Only ``ls8`` is supported.

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
2026-03-05

Modified
--------
2026-03-16
"""

# Standard library
import logging
import math
import numbers
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

# Shoreline internal
from shoreline.exceptions import InvalidConfiguration
from shoreline.vocabulary import WaterIndex

logger = logging.getLogger(__name__)

ALGORITHM_KW = 'algorithm'
COLOR_CODING_KW = 'color_coding'
SMOOTHING_KW = 'smoothing'
THRESHOLD_KW = 'threshold'
TOLERANCE_KW = 'tolerance'
DO_EDGE_DETECT_KW = 'do_edge_detect'
SENSOR_KW = 'sensor'
SENSOR_ID_KW = 'sensor_id'

#: Token that disables thresholding (raw index pass-through).
SKIP_THRESHOLD_TOKEN = 'X'

_TRUE = frozenset(('true', 'yes', 'on', '1', 't', 'y'))
_FALSE = frozenset(('false', 'no', 'off', '0', 'f', 'n'))


def as_water_index(algorithm: Union[str, WaterIndex]) -> WaterIndex:
    """Coerce an algorithm name or enum member to ``WaterIndex``.

    Parameters
    ----------
    algorithm : str or WaterIndex
        ``'ndwi'`` / ``'awei'`` (case-insensitive) or an enum member.

    Returns
    -------
    WaterIndex

    Raises
    ------
    InvalidConfiguration
        If the name is not a supported index.
    """
    if isinstance(algorithm, WaterIndex):
        return algorithm
    try:
        return WaterIndex(str(algorithm).strip().lower())
    except ValueError:
        names = [w.value for w in WaterIndex]
        raise InvalidConfiguration(
            f"Bad value encountered for keyword <{ALGORITHM_KW}>: "
            f"{algorithm!r}. Expected one of {names}."
        ) from None


def _to_byte(value: Any, role: str) -> int:
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidConfiguration(
            f"{role} value must be an integer 0-255, got {value!r}"
        ) from None
    if not 0 <= number <= 255:
        raise InvalidConfiguration(
            f"{role} value must be in 0-255, got {number}"
        )
    return number


def _to_float(value: Any, key: str) -> float:
    try:
        number = float(str(value).strip())
    except ValueError:
        raise InvalidConfiguration(
            f"Bad value encountered for keyword <{key}>: {value!r}"
        ) from None
    if not math.isfinite(number):
        raise InvalidConfiguration(
            f"Keyword <{key}> must be finite, got {value!r}"
        )
    return number


def _to_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    token = str(value).strip().lower()
    if token in _TRUE:
        return True
    if token in _FALSE:
        return False
    raise InvalidConfiguration(
        f"Bad value encountered for keyword <{key}>: {value!r}"
    )


@dataclass(frozen=True)
class ColorCoding:
    """Output pixel codes for the three zones.

    Pairwise distinct values are recommended but not enforced.

    Attributes
    ----------
    water : int
        Code for water pixels. Default 255.
    marginal : int
        Code for the marginal band around the threshold. Default 128.
    land : int
        Code for land pixels. Default 0.
    """

    water: int = 255
    marginal: int = 128
    land: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, 'algorithm', as_water_index(self.algorithm))
        if not isinstance(self.color_coding, ColorCoding):
            raise InvalidConfiguration(
                f"color_coding must be a ColorCoding, "
                f"got {type(self.color_coding).__name__}"
            )
        for name in ('threshold', 'tolerance', 'smoothing'):
            value = getattr(self, name)
            if value is None and name == 'threshold':
                continue
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidConfiguration(
                    f"{name} must be a number, got {type(value).__name__} "
                    f"{value!r}"
                )
            object.__setattr__(self, name, float(value))
        if self.threshold is not None:
            if not math.isfinite(self.threshold) \
                    or not 0.0 <= self.threshold <= 1.0:
                raise InvalidConfiguration(
                    f"threshold must be in [0, 1] or skipped, "
                    f"got {self.threshold!r}"
                )
        if not math.isfinite(self.tolerance) or self.tolerance < 0:
            raise InvalidConfiguration(
                f"tolerance must be >= 0, got {self.tolerance!r}"
            )
        if not math.isfinite(self.smoothing) or self.smoothing < 0:
            raise InvalidConfiguration(
                f"smoothing must be >= 0, got {self.smoothing!r}"
            )
        object.__setattr__(self, 'sensor', str(self.sensor).strip().lower())

    @property
    def skip_threshold(self) -> bool:
        """Whether the raw index is passed through unclassified."""
        return self.threshold is None

    @classmethod
    def from_keywords(
        cls,
        keywords: Mapping[str, Any],
        base: Optional['ShorelineConfig'] = None,
    ) -> 'ShorelineConfig':
        """Build a configuration from name/value pairs.

        Keys that are absent keep their value from *base* (the defaults
        when *base* is None). Unknown keys are ignored.

        Parameters
        ----------
        keywords : Mapping[str, Any]
            Parsed name/value configuration.
        base : ShorelineConfig, optional
            Configuration providing values for absent keys.

        Returns
        -------
        ShorelineConfig

        Raises
        ------
        InvalidConfiguration
            If any value is malformed. Nothing is applied in that case.
        """
        kw = {str(k).strip().lower(): v for k, v in keywords.items()
              if v is not None and str(v).strip() != ''}
        changes: Dict[str, Any] = {}

        if ALGORITHM_KW in kw:
            changes['algorithm'] = as_water_index(kw[ALGORITHM_KW])
        if COLOR_CODING_KW in kw:
            changes['color_coding'] = ColorCoding.parse(kw[COLOR_CODING_KW])
        if SENSOR_KW in kw:
            changes['sensor'] = str(kw[SENSOR_KW])
        elif SENSOR_ID_KW in kw:
            changes['sensor'] = str(kw[SENSOR_ID_KW])
        if DO_EDGE_DETECT_KW in kw:
            changes['do_edge_detect'] = _to_bool(
                kw[DO_EDGE_DETECT_KW], DO_EDGE_DETECT_KW
            )
        if SMOOTHING_KW in kw:
            changes['smoothing'] = _to_float(kw[SMOOTHING_KW], SMOOTHING_KW)
        if THRESHOLD_KW in kw:
            value = kw[THRESHOLD_KW]
            if str(value).strip().upper() == SKIP_THRESHOLD_TOKEN:
                changes['threshold'] = None
            else:
                changes['threshold'] = _to_float(value, THRESHOLD_KW)
        if TOLERANCE_KW in kw:
            changes['tolerance'] = _to_float(kw[TOLERANCE_KW], TOLERANCE_KW)

        config = replace(base or cls(), **changes)
        logger.debug("Configuration resolved: %s", config.to_keywords())
        return config

    def to_keywords(self) -> Dict[str, str]:
        """Render as a keyword dictionary accepted by ``from_keywords``."""
        return {
            ALGORITHM_KW: self.algorithm.value,
            COLOR_CODING_KW: str(self.color_coding),
            THRESHOLD_KW: (
                SKIP_THRESHOLD_TOKEN if self.threshold is None
                else repr(float(self.threshold))
            ),
            TOLERANCE_KW: repr(float(self.tolerance)),
            SMOOTHING_KW: repr(float(self.smoothing)),
            DO_EDGE_DETECT_KW: 'true' if self.do_edge_detect else 'false',
            SENSOR_KW: self.sensor,
        }


def load_keyword_file(path: Union[str, Path]) -> Dict[str, str]:
    """Read a persisted keyword list.

    Lines have the form ``key: value``; blank lines and lines starting
    with ``#`` or ``//`` are ignored.

    Parameters
    ----------
    path : str or Path
        Keyword list file.

    Returns
    -------
    Dict[str, str]

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    InvalidConfiguration
        If a non-comment line has no ``:`` separator.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Keyword file not found: {path}")

    keywords: Dict[str, str] = {}
    with open(path, 'r', encoding='utf-8') as f:
        for lineno, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith('#') or line.startswith('//'):
                continue
            key, sep, value = line.partition(':')
            if not sep:
                raise InvalidConfiguration(
                    f"{path}:{lineno}: expected 'key: value', got {line!r}"
                )
            keywords[key.strip()] = value.strip()
    return keywords
