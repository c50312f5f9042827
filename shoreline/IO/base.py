# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interfaces for raster band readers and writers.

Every band source the shoreline pipeline reads from is an ``ImageReader``
and the classified product is written through an ``ImageWriter``. The
pipeline only ever asks for pixel windows, the raster shape and the
georeferencing, so that is all the interfaces require.

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
2026-03-11
"""

# Standard library
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

# Third-party
import numpy as np


class ImageReader(ABC):
    """
    Abstract base class for raster band readers.

    Concrete readers open their source in ``_load_metadata`` and serve
    pixel windows through ``read_chip``. Readers must tolerate concurrent
    ``read_chip`` calls or serialize them internally; the tile processor
    may be driven from several threads.

    Attributes
    ----------
    filepath : Path or None
        Path to the image file, ``None`` for in-memory sources.
    metadata : Dict[str, Any]
        Format-specific metadata (``rows``, ``cols``, ``bands``,
        ``dtype`` at minimum).
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        """
        Initialize the reader.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path to the image file.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        """
        self.filepath = Path(filepath)
        self.metadata: Dict[str, Any] = {}

        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")

        self._load_metadata()

    @abstractmethod
    def _load_metadata(self) -> None:
        """
        Load metadata from the source into ``self.metadata``.

        Raises
        ------
        ValueError
            If the source cannot be interpreted.
        """
        pass

    @abstractmethod
    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
        bands: Optional[List[int]] = None,
    ) -> np.ndarray:
        """
        Read a spatial window.

        Parameters
        ----------
        row_start, row_end : int
            Row range, end-exclusive.
        col_start, col_end : int
            Column range, end-exclusive.
        bands : Optional[List[int]]
            0-based band indices. ``None`` reads all bands.

        Returns
        -------
        np.ndarray
            ``(rows, cols)`` when one band is read, otherwise
            ``(bands, rows, cols)``.

        Raises
        ------
        ValueError
            If the window falls outside the image.
        """
        pass

    def read_full(self, bands: Optional[List[int]] = None) -> np.ndarray:
        """Read the entire image."""
        rows, cols = self.get_shape()[:2]
        return self.read_chip(0, rows, 0, cols, bands=bands)

    @abstractmethod
    def get_shape(self) -> Tuple[int, ...]:
        """
        Image dimensions.

        Returns
        -------
        Tuple[int, ...]
            ``(rows, cols)`` or ``(rows, cols, bands)``.
        """
        pass

    @abstractmethod
    def get_dtype(self) -> np.dtype:
        """Pixel data type."""
        pass

    def get_geolocation(self) -> Optional[Dict[str, Any]]:
        """
        Georeferencing of the image.

        Returns
        -------
        Optional[Dict[str, Any]]
            ``crs``, ``transform`` (affine), ``bounds`` and
            ``resolution``; ``None`` when the source has none.
        """
        return None

    def close(self) -> None:
        """Release resources. Default implementation does nothing."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


class ImageWriter(ABC):
    """
    Abstract base class for raster writers.

    Attributes
    ----------
    filepath : Path
        Path where the image will be written.
    metadata : Dict[str, Any]
        Extra tags to store with the image.
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        self.filepath = Path(filepath)
        self.metadata = metadata or {}

    @abstractmethod
    def write(
        self,
        data: np.ndarray,
        geolocation: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write a whole image.

        Parameters
        ----------
        data : np.ndarray
            ``(rows, cols)`` or ``(bands, rows, cols)``.
        geolocation : Optional[Dict[str, Any]]
            ``crs`` and ``transform`` to embed.
        """
        pass

    @abstractmethod
    def write_chip(
        self,
        data: np.ndarray,
        row_start: int,
        col_start: int,
        geolocation: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write a spatial subset into an image that already exists.

        Parameters
        ----------
        data : np.ndarray
            Chip pixels.
        row_start, col_start : int
            Upper-left placement in the output image.
        geolocation : Optional[Dict[str, Any]]
            Ignored by writers that fix georeferencing at creation.

        Raises
        ------
        ValueError
            If the chip falls outside the image.
        """
        pass

    def close(self) -> None:
        """Flush and release resources. Default implementation does nothing."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
