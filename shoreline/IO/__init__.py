# -*- coding: utf-8 -*-
"""
IO Module - Band sources and raster product writers.

``ImageReader`` / ``ImageWriter`` define the interface the shoreline
pipeline relies on. ``GeoTIFFReader`` / ``GeoTIFFWriter`` implement it on
rasterio; ``ArrayReader`` serves in-memory arrays.

Usage
-----
    >>> from shoreline.IO import open_image
    >>> with open_image('LC08_B3.TIF') as green:
    ...     print(green.get_shape())

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
2026-03-11
"""

# Standard library
from pathlib import Path
from typing import Union

from shoreline.IO.base import ImageReader, ImageWriter
from shoreline.IO.array import ArrayReader
from shoreline.IO.geotiff import GeoTIFFReader, GeoTIFFWriter

_EXTENSIONS = ('.tif', '.tiff', '.geotiff')


def open_image(filepath: Union[str, Path]) -> ImageReader:
    """Open a band image file.

    Parameters
    ----------
    filepath : str or Path
        Path to a GeoTIFF band file.

    Returns
    -------
    ImageReader

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the format is not supported.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")
    if filepath.suffix.lower() not in _EXTENSIONS:
        raise ValueError(
            f"Unsupported image format '{filepath.suffix}'. "
            f"Supported extensions: {list(_EXTENSIONS)}"
        )
    return GeoTIFFReader(filepath)


__all__ = [
    'ImageReader',
    'ImageWriter',
    'ArrayReader',
    'GeoTIFFReader',
    'GeoTIFFWriter',
    'open_image',
]
