# -*- coding: utf-8 -*-
"""
GeoTIFF Reader / Writer - Band sources and classified products on rasterio.

``GeoTIFFReader`` serves pixel windows of any GeoTIFF (Landsat 8 band
files in particular). ``GeoTIFFWriter`` writes the shoreline raster
product, either whole or tile by tile after ``create``.

Dependencies
------------
rasterio

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
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

# Third-party
import numpy as np

try:
    import rasterio
    from rasterio.windows import Window
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

# Shoreline internal
from shoreline.exceptions import DependencyError
from shoreline.IO.base import ImageReader, ImageWriter

logger = logging.getLogger(__name__)


def _require_rasterio(what: str) -> None:
    if not _HAS_RASTERIO:
        raise DependencyError(
            f"rasterio is required for {what}. "
            "Install with: pip install rasterio"
        )


class GeoTIFFReader(ImageReader):
    """Read GeoTIFF band imagery.

    GDAL dataset handles are not safe to share between threads, so
    window reads are serialized with a lock.

    Parameters
    ----------
    filepath : str or Path
        Path to the GeoTIFF file.

    Attributes
    ----------
    dataset : rasterio.DatasetReader
        Open rasterio dataset.

    Raises
    ------
    DependencyError
        If rasterio is not installed.
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file cannot be opened as a GeoTIFF.

    Examples
    --------
    >>> with GeoTIFFReader('LC08_B3.TIF') as reader:
    ...     green = reader.read_chip(0, 512, 0, 512)
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        _require_rasterio("GeoTIFF reading")
        self.dataset = None
        self._lock = threading.Lock()
        super().__init__(filepath)

    def _load_metadata(self) -> None:
        """Open the dataset and record its metadata."""
        try:
            self.dataset = rasterio.open(str(self.filepath))
        except Exception as e:
            raise ValueError(f"Failed to open GeoTIFF {self.filepath}: {e}") from e

        self.metadata = {
            'format': 'GeoTIFF',
            'rows': self.dataset.height,
            'cols': self.dataset.width,
            'bands': self.dataset.count,
            'dtype': str(self.dataset.dtypes[0]),
            'crs': self.dataset.crs,
            'transform': self.dataset.transform,
            'bounds': self.dataset.bounds,
            'resolution': self.dataset.res,
            'nodata': self.dataset.nodata,
        }

    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
        bands: Optional[List[int]] = None,
    ) -> np.ndarray:
        """Read a spatial window from the GeoTIFF.

        Parameters
        ----------
        row_start, row_end : int
            Row range, end-exclusive.
        col_start, col_end : int
            Column range, end-exclusive.
        bands : Optional[List[int]]
            Band indices to read (0-based). If None, read all bands.

        Returns
        -------
        np.ndarray
            ``(rows, cols)`` for a single band, else ``(bands, rows, cols)``.

        Raises
        ------
        ValueError
            If indices are out of bounds.
        """
        if row_start < 0 or col_start < 0:
            raise ValueError("Start indices must be non-negative")
        if row_end > self.metadata['rows'] or col_end > self.metadata['cols']:
            raise ValueError("End indices exceed image dimensions")

        window = Window(
            col_start, row_start,
            col_end - col_start, row_end - row_start,
        )
        indexes = None if bands is None else [b + 1 for b in bands]
        with self._lock:
            data = self.dataset.read(indexes, window=window)

        if data.shape[0] == 1:
            return data[0]
        return data

    def get_shape(self) -> Tuple[int, ...]:
        """``(rows, cols)`` for one band, else ``(rows, cols, bands)``."""
        if self.metadata['bands'] == 1:
            return (self.metadata['rows'], self.metadata['cols'])
        return (
            self.metadata['rows'],
            self.metadata['cols'],
            self.metadata['bands'],
        )

    def get_dtype(self) -> np.dtype:
        return np.dtype(self.metadata['dtype'])

    def get_geolocation(self) -> Optional[Dict[str, Any]]:
        """CRS, affine transform, bounds, and resolution."""
        return {
            'crs': self.metadata['crs'],
            'transform': self.metadata['transform'],
            'bounds': self.metadata['bounds'],
            'resolution': self.metadata['resolution'],
        }

    def close(self) -> None:
        """Close the rasterio dataset."""
        if self.dataset is not None:
            self.dataset.close()
            self.dataset = None


class GeoTIFFWriter(ImageWriter):
    """Write a single- or multi-band GeoTIFF.

    Two usage patterns:

    - ``write(data, geolocation)`` writes a whole array at once.
    - ``create(rows, cols, dtype, geolocation)`` opens the file for
      tile-by-tile ``write_chip`` calls; ``close`` finalizes it.

    The writer is not thread-safe. Callers driving tiles from a pool
    must funnel writes through one thread.

    Parameters
    ----------
    filepath : str or Path
        Output path.
    metadata : Dict[str, Any], optional
        String tags stored in the GeoTIFF. ``nodata`` is honoured as the
        band nodata value.

    Examples
    --------
    >>> with GeoTIFFWriter('shoreline.tif') as writer:
    ...     writer.create(1024, 1024, np.uint8, geolocation)
    ...     writer.write_chip(tile, 0, 0)
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        _require_rasterio("GeoTIFF writing")
        super().__init__(filepath, metadata)
        self._dataset = None

    @property
    def is_open(self) -> bool:
        """True between ``create`` and ``close``."""
        return self._dataset is not None

    def _profile(
        self,
        rows: int,
        cols: int,
        count: int,
        dtype: Any,
        geolocation: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        profile = {
            'driver': 'GTiff',
            'height': rows,
            'width': cols,
            'count': count,
            'dtype': np.dtype(dtype).name,
        }
        if geolocation:
            if geolocation.get('crs') is not None:
                profile['crs'] = geolocation['crs']
            if geolocation.get('transform') is not None:
                profile['transform'] = geolocation['transform']
        if self.metadata.get('nodata') is not None:
            profile['nodata'] = self.metadata['nodata']
        return profile

    def _tags(self) -> Dict[str, str]:
        return {str(k): str(v) for k, v in self.metadata.items() if k != 'nodata'}

    def create(
        self,
        rows: int,
        cols: int,
        dtype: Any,
        geolocation: Optional[Dict[str, Any]] = None,
        count: int = 1,
    ) -> None:
        """Open the output for chip-wise writing.

        Raises
        ------
        ValueError
            If the writer is already open or the size is not positive.
        """
        if self._dataset is not None:
            raise ValueError(f"{self.filepath} is already open for writing")
        if rows <= 0 or cols <= 0 or count <= 0:
            raise ValueError(
                f"rows, cols and count must be positive, got "
                f"({rows}, {cols}, {count})"
            )
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        profile = self._profile(rows, cols, count, dtype, geolocation)
        self._dataset = rasterio.open(str(self.filepath), 'w', **profile)
        tags = self._tags()
        if tags:
            self._dataset.update_tags(**tags)
        logger.debug("Created %s (%d x %d, %s)", self.filepath, rows, cols,
                     profile['dtype'])

    def write(
        self,
        data: np.ndarray,
        geolocation: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Write a whole ``(rows, cols)`` or ``(bands, rows, cols)`` array.

        Raises
        ------
        ValueError
            If *data* is not 2D or 3D.
        """
        data = np.asarray(data)
        if data.ndim == 2:
            stack = data[np.newaxis]
        elif data.ndim == 3:
            stack = data
        else:
            raise ValueError(f"Expected 2D or 3D data, got shape {data.shape}")

        if self._dataset is None:
            self.create(stack.shape[1], stack.shape[2], stack.dtype,
                        geolocation, count=stack.shape[0])
        self.write_chip(stack, 0, 0)

    def write_chip(
        self,
        data: np.ndarray,
        row_start: int,
        col_start: int,
        geolocation: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Write a chip at ``(row_start, col_start)``.

        Raises
        ------
        ValueError
            If ``create`` has not been called or the chip is out of bounds.
        """
        if self._dataset is None:
            raise ValueError("create() must be called before write_chip()")
        data = np.asarray(data)
        stack = data[np.newaxis] if data.ndim == 2 else data
        _, rows, cols = stack.shape
        if (row_start < 0 or col_start < 0
                or row_start + rows > self._dataset.height
                or col_start + cols > self._dataset.width):
            raise ValueError(
                f"Chip at ({row_start}, {col_start}) with shape "
                f"({rows}, {cols}) exceeds output "
                f"({self._dataset.height}, {self._dataset.width})"
            )
        window = Window(col_start, row_start, cols, rows)
        self._dataset.write(
            stack.astype(self._dataset.dtypes[0], copy=False), window=window,
        )

    def close(self) -> None:
        """Flush and close the output file."""
        if self._dataset is not None:
            self._dataset.close()
            self._dataset = None
            logger.debug("Closed %s", self.filepath)
