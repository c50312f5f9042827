# -*- coding: utf-8 -*-
"""
Array Reader - In-memory band source over a numpy array.

Lets callers that already hold band pixels (and the test suite) feed the
shoreline pipeline without a file on disk.

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
2026-03-05
"""

# Standard library
from typing import Any, Dict, List, Optional, Tuple

# Third-party
import numpy as np

# Shoreline internal
from shoreline.IO.base import ImageReader


class ArrayReader(ImageReader):
    """Serve pixel windows of an in-memory array.

    Parameters
    ----------
    data : np.ndarray
        ``(rows, cols)`` single band or ``(bands, rows, cols)`` stack.
        Kept read-only.
    geolocation : Dict[str, Any], optional
        Georeferencing returned by ``get_geolocation``.

    Raises
    ------
    ValueError
        If *data* is not 2D or 3D.

    Examples
    --------
    >>> reader = ArrayReader(np.zeros((64, 64), dtype=np.uint16))
    >>> reader.read_chip(0, 8, 0, 8).shape
    (8, 8)
    """

    def __init__(
        self,
        data: np.ndarray,
        geolocation: Optional[Dict[str, Any]] = None,
    ) -> None:
        data = np.asarray(data)
        if data.ndim not in (2, 3):
            raise ValueError(f"Expected 2D or 3D data, got shape {data.shape}")
        self._data = data.view() if data.ndim == 3 else data[np.newaxis]
        self._data.flags.writeable = False
        self._geolocation = geolocation
        self.filepath = None
        self._load_metadata()

    def _load_metadata(self) -> None:
        bands, rows, cols = self._data.shape
        self.metadata = {
            'format': 'array',
            'rows': rows,
            'cols': cols,
            'bands': bands,
            'dtype': str(self._data.dtype),
        }

    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
        bands: Optional[List[int]] = None,
    ) -> np.ndarray:
        if row_start < 0 or col_start < 0:
            raise ValueError("Start indices must be non-negative")
        if row_end > self.metadata['rows'] or col_end > self.metadata['cols']:
            raise ValueError("End indices exceed image dimensions")

        data = self._data if bands is None else self._data[list(bands)]
        chip = data[:, row_start:row_end, col_start:col_end]
        if chip.shape[0] == 1:
            return chip[0]
        return chip

    def get_shape(self) -> Tuple[int, ...]:
        if self.metadata['bands'] == 1:
            return (self.metadata['rows'], self.metadata['cols'])
        return (
            self.metadata['rows'],
            self.metadata['cols'],
            self.metadata['bands'],
        )

    def get_dtype(self) -> np.dtype:
        return self._data.dtype

    def get_geolocation(self) -> Optional[Dict[str, Any]]:
        return self._geolocation
