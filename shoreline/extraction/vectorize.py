# -*- coding: utf-8 -*-
"""
Vectorization - Trace the classified shoreline raster into vector output.

The ``ProductFinalizer`` runs once, after the classified raster product
has been fully written and closed. It looks up a ``Vectorizer`` in a
small name registry, hands it the raster path and the vector target, and
reports ``SUCCESS`` or ``DEGRADED``. A missing or failing vectorizer never
fails the run: the raster product stays valid, a ``DegradedOutputWarning``
is issued, and the outcome is logged at WARNING level.

``RasterVectorizer`` (registered as ``"polygon"``) polygonizes the water
code of the product with ``rasterio.features.shapes`` and writes a
GeoJSON FeatureCollection built with ``shapely``.

Dependencies
------------
rasterio
shapely

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
2026-03-09

Modified
--------
2026-03-16
"""

# Standard library
import importlib
import json
import logging
import sys
import warnings
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, TextIO, Tuple, Union

# Third-party
import numpy as np

try:
    import rasterio
    from rasterio import features as rio_features
    from rasterio.errors import RasterioError
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

try:
    from shapely.geometry import mapping as shapely_mapping
    from shapely.geometry import shape as shapely_shape
    _HAS_SHAPELY = True
except ImportError:
    _HAS_SHAPELY = False

# Shoreline internal
from shoreline.exceptions import DegradedOutputWarning, DependencyError, ValidationError
from shoreline.vocabulary import VectorMode

logger = logging.getLogger(__name__)

IMAGE_FILE_KW = 'image_file'
OUTPUT_FILE_KW = 'output_file'
MODE_KW = 'mode'
FOREGROUND_KW = 'foreground'

DEFAULT_VECTORIZER = 'polygon'


class FinalizeStatus(Enum):
    """Outcome of product finalization."""

    SUCCESS = 'success'
    DEGRADED = 'degraded'


class FinalizeResult(NamedTuple):
    """Result of ``ProductFinalizer.finalize``.

    Attributes
    ----------
    status : FinalizeStatus
        ``SUCCESS`` when vector output was produced.
    raster_path : Path
        Classified raster product (always valid).
    vector_target : Path or None
        Vector output file, ``None`` when written to the output stream.
    message : str
        Human readable summary.
    """

    status: FinalizeStatus
    raster_path: Path
    vector_target: Optional[Path]
    message: str

    @property
    def degraded(self) -> bool:
        return self.status is FinalizeStatus.DEGRADED


class Vectorizer(ABC):
    """Interface of a raster-to-vector tracing capability.

    Usage is ``initialize`` with a configuration dictionary, optionally
    ``set_output_stream``, then ``execute``. Instances are single-use per
    product and are not shared between threads.
    """

    def __init__(self) -> None:
        self._config: Dict[str, Any] = {}
        self._stream: Optional[TextIO] = None

    def initialize(self, config: Dict[str, Any]) -> None:
        """Configure a run.

        Parameters
        ----------
        config : Dict[str, Any]
            ``image_file`` (required), ``output_file`` (empty or absent
            writes to the output stream), ``mode`` and ``foreground``
            (zone code to trace, an int).

        Raises
        ------
        ValidationError
            If ``image_file`` is missing or ``mode`` is unknown.
        """
        if not config.get(IMAGE_FILE_KW):
            raise ValidationError(f"Vectorizer config requires '{IMAGE_FILE_KW}'")
        mode = config.get(MODE_KW, VectorMode.POLYGON.value)
        try:
            VectorMode(str(getattr(mode, 'value', mode)).lower())
        except ValueError:
            raise ValidationError(
                f"Unknown vectorization mode {mode!r}. "
                f"Expected one of {[m.value for m in VectorMode]}"
            ) from None
        self._config = dict(config)

    def set_output_stream(self, stream: Optional[TextIO]) -> None:
        """Stream receiving vector output when no output file is set."""
        self._stream = stream

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    @property
    def output_stream(self) -> Optional[TextIO]:
        return self._stream

    @abstractmethod
    def execute(self) -> bool:
        """Produce the vector output.

        Returns
        -------
        bool
            True on success, False when no output was produced.
        """
        ...


class RasterVectorizer(Vectorizer):
    """Polygonize the water zone of a classified shoreline raster.

    Parameters
    ----------
    foreground : int
        Pixel code traced as foreground. Default 255 (water). Overridden
        by a ``foreground`` key passed to ``initialize``.
    connectivity : int
        4 or 8 pixel connectivity for grouping foreground pixels.

    Raises
    ------
    DependencyError
        If rasterio or shapely is not installed.
    ValueError
        If connectivity is not 4 or 8.
    """

    def __init__(self, foreground: int = 255, connectivity: int = 8) -> None:
        if not (_HAS_RASTERIO and _HAS_SHAPELY):
            raise DependencyError(
                "rasterio and shapely are required for vectorization. "
                "Install with: pip install rasterio shapely"
            )
        if connectivity not in (4, 8):
            raise ValueError(f"connectivity must be 4 or 8, got {connectivity}")
        super().__init__()
        self.foreground = int(foreground)
        self.connectivity = connectivity

    def _trace(self, image_file: str, foreground: int, mode: VectorMode) -> Dict[str, Any]:
        with rasterio.open(image_file) as src:
            band = src.read(1)
            transform = src.transform
            crs = src.crs

        mask = band == foreground
        feats: List[Dict[str, Any]] = []
        if mask.any():
            source = mask.astype(np.uint8)
            for geom, _ in rio_features.shapes(
                source, mask=mask, transform=transform,
                connectivity=self.connectivity,
            ):
                polygon = shapely_shape(geom)
                out = polygon.boundary if mode is VectorMode.LINESTRING else polygon
                feats.append({
                    'type': 'Feature',
                    'geometry': shapely_mapping(out),
                    'properties': {
                        'id': len(feats),
                        'value': foreground,
                        'area': float(polygon.area),
                    },
                })

        collection: Dict[str, Any] = {
            'type': 'FeatureCollection',
            'features': feats,
        }
        if crs is not None:
            collection['crs'] = {
                'type': 'name',
                'properties': {'name': crs.to_string()},
            }
        return collection

    def execute(self) -> bool:
        if not self._config:
            logger.error("RasterVectorizer.execute() called before initialize()")
            return False

        image_file = str(self._config[IMAGE_FILE_KW])
        output_file = self._config.get(OUTPUT_FILE_KW) or None
        mode_value = self._config.get(MODE_KW, VectorMode.POLYGON.value)
        mode = VectorMode(str(getattr(mode_value, 'value', mode_value)).lower())
        value = self._config.get(FOREGROUND_KW)
        foreground = self.foreground if value is None else int(value)

        try:
            collection = self._trace(image_file, foreground, mode)
        except (RasterioError, OSError, ValueError) as e:
            logger.error("Vectorization of %s failed: %s", image_file, e)
            return False

        n = len(collection['features'])
        if output_file:
            try:
                path = Path(output_file)
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, 'w', encoding='utf-8') as f:
                    json.dump(collection, f)
            except OSError as e:
                logger.error("Could not write vector output %s: %s", output_file, e)
                return False
            logger.info("Wrote %d %s features to %s", n, mode.value, output_file)
        else:
            stream = self._stream if self._stream is not None else sys.stdout
            stream.write(json.dumps(collection))
            stream.write('\n')
            stream.flush()
            logger.info("Wrote %d %s features to output stream", n, mode.value)
        return True


# Vectorizer registry: maps names to (module_path, class_name)
_VECTORIZER_REGISTRY: Dict[str, Tuple[str, str]] = {
    DEFAULT_VECTORIZER: ('shoreline.extraction.vectorize', 'RasterVectorizer'),
}


def register_vectorizer(name: str, module_path: str, class_name: str) -> None:
    """Register a vectorizer class under *name*.

    The module is only imported when the vectorizer is created, so a
    registration never fails on missing dependencies.
    """
    _VECTORIZER_REGISTRY[name.lower()] = (module_path, class_name)


def available_vectorizers() -> List[str]:
    """Registered vectorizer names."""
    return sorted(_VECTORIZER_REGISTRY)


def create_vectorizer(name: str) -> Optional[Vectorizer]:
    """Instantiate the vectorizer registered as *name*.

    Returns
    -------
    Vectorizer or None
        ``None`` when nothing is registered under *name* or the
        implementation cannot be loaded in this environment.
    """
    key = name.lower()
    if key not in _VECTORIZER_REGISTRY:
        logger.debug("No vectorizer registered as %r", name)
        return None
    module_path, class_name = _VECTORIZER_REGISTRY[key]
    try:
        module = importlib.import_module(module_path)
        vectorizer_cls = getattr(module, class_name)
        vectorizer = vectorizer_cls()
    except (ImportError, AttributeError) as e:
        logger.debug("Vectorizer %r could not be loaded: %s", name, e)
        return None
    if not isinstance(vectorizer, Vectorizer):
        logger.debug("%s.%s is not a Vectorizer", module_path, class_name)
        return None
    return vectorizer


class ProductFinalizer:
    """Hand a finished classified raster product to a vectorizer.

    Parameters
    ----------
    vectorizer : str or Vectorizer, optional
        Registered vectorizer name, or an instance to use directly.
        Default ``"polygon"``.
    output_stream : TextIO, optional
        Passed unchanged to the vectorizer for stream output.
    mode : VectorMode or str
        Vectorization mode. Default polygon.
    foreground : int or None
        Zone code traced as water, passed to the vectorizer as the
        ``foreground`` key. Default 255. ``None`` marks a product without
        zone codes (the raw index of a skip-threshold run); finalizing it
        is a degraded outcome and the raster is kept as the product.

    Examples
    --------
    >>> finalizer = ProductFinalizer()
    >>> result = finalizer.finalize('coast.tif', 'coast.json')
    >>> result.status
    <FinalizeStatus.SUCCESS: 'success'>
    """

    def __init__(
        self,
        vectorizer: Optional[Union[str, Vectorizer]] = None,
        output_stream: Optional[TextIO] = None,
        mode: Union[VectorMode, str] = VectorMode.POLYGON,
        foreground: Optional[int] = 255,
    ) -> None:
        self._vectorizer = DEFAULT_VECTORIZER if vectorizer is None else vectorizer
        self.output_stream = output_stream
        self.mode = VectorMode(mode.lower()) if isinstance(mode, str) else mode
        self.foreground = None if foreground is None else int(foreground)

    @property
    def vectorizer_name(self) -> str:
        if isinstance(self._vectorizer, Vectorizer):
            return type(self._vectorizer).__name__
        return str(self._vectorizer)

    def _resolve(self) -> Optional[Vectorizer]:
        if isinstance(self._vectorizer, Vectorizer):
            return self._vectorizer
        return create_vectorizer(self._vectorizer)

    def _degraded(
        self, raster_path: Path, target: Optional[Path], reason: str
    ) -> FinalizeResult:
        message = (
            f"{reason}; vector output not produced. "
            f"Classified raster product retained at {raster_path}"
        )
        logger.warning(message)
        warnings.warn(message, DegradedOutputWarning, stacklevel=3)
        return FinalizeResult(FinalizeStatus.DEGRADED, raster_path, target, message)

    def finalize(
        self,
        classified_raster_path: Union[str, Path],
        vector_output_target: Optional[Union[str, Path]] = None,
    ) -> FinalizeResult:
        """Vectorize the classified raster product.

        Parameters
        ----------
        classified_raster_path : str or Path
            Completed, closed raster product.
        vector_output_target : str or Path, optional
            Vector output file. ``None`` writes to the output stream.

        Returns
        -------
        FinalizeResult

        Raises
        ------
        FileNotFoundError
            If the raster product does not exist.
        """
        raster_path = Path(classified_raster_path)
        if not raster_path.exists():
            raise FileNotFoundError(f"Classified raster product not found: {raster_path}")
        target = Path(vector_output_target) if vector_output_target else None

        vectorizer = self._resolve()
        if vectorizer is None:
            return self._degraded(
                raster_path, target,
                f"Vectorizer '{self.vectorizer_name}' is unavailable",
            )
        if self.foreground is None:
            return self._degraded(
                raster_path, target,
                "Raster product holds an unclassified index with no water "
                "code to trace",
            )

        logger.info("Vectorizing %s with %s", raster_path, type(vectorizer).__name__)
        vectorizer.initialize({
            IMAGE_FILE_KW: str(raster_path),
            OUTPUT_FILE_KW: str(target) if target else '',
            MODE_KW: self.mode.value,
            FOREGROUND_KW: self.foreground,
        })
        vectorizer.set_output_stream(self.output_stream)
        if not vectorizer.execute():
            return self._degraded(
                raster_path, target,
                f"Vectorizer '{self.vectorizer_name}' failed",
            )

        message = f"Vector output written to {target or 'output stream'}"
        logger.info(message)
        return FinalizeResult(FinalizeStatus.SUCCESS, raster_path, target, message)
