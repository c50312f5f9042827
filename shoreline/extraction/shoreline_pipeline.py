# -*- coding: utf-8 -*-
"""
Shoreline Pipeline - Builder and tiled driver for shoreline extraction.

``ShorelinePipeline`` collects band sources, an area of interest and a
``ShorelineConfig``, validates them eagerly and assembles the processing
chain once::

    WaterIndexEvaluator -> [ThresholdClassifier | PassThrough]
                        -> [GaussianFilter]  (smoothing > 0)
                        -> [RobertsEdgeFilter]  (edge-detect mode)

In edge-detect mode the Roberts stage is the terminal rendering and the
threshold stage is not part of the chain, so Roberts sees the (smoothed)
index. This departs from the original ossim shoreline tool, which kept
the threshold table in edge mode and ran Roberts on the zone codes.

``build()`` returns a ``TileProcessor`` whose ``get_tile(region)`` is a
pure function of the region; it can be called from several threads.
``run()`` drives the processor over the whole AOI, writes the classified
raster product through a single ``GeoTIFFWriter`` and finally hands the
closed product to the ``ProductFinalizer`` for vectorization.

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
2026-03-09

Modified
--------
2026-03-16
"""

# Standard library
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, TextIO, Tuple, Union

# Third-party
import numpy as np

# Shoreline internal
from shoreline.config import ShorelineConfig
from shoreline.data_prep import ChipRegion, Tiler, expand_region
from shoreline.exceptions import (
    InsufficientInputs,
    InvalidAOI,
    UnsupportedConfiguration,
    ValidationError,
)
from shoreline.extraction.vectorize import (
    FinalizeStatus,
    ProductFinalizer,
    Vectorizer,
)
from shoreline.geolocation.aoi import AreaOfInterest, GroundRect
from shoreline.image_processing import (
    GaussianFilter,
    ImageTransform,
    PassThrough,
    Pipeline,
    RobertsEdgeFilter,
    ThresholdClassifier,
    WaterIndexEvaluator,
    required_band_count,
)
from shoreline.IO.base import ImageReader
from shoreline.IO.geotiff import GeoTIFFWriter
from shoreline.vocabulary import Sensor

logger = logging.getLogger(__name__)

DEFAULT_TILE_SIZE = 256

#: Prefix of the raster product name when no output file is given.
TEMP_PRODUCT_PREFIX = 'temp_shoreline'


def build_chain(config: ShorelineConfig) -> Pipeline:
    """Assemble the processing chain for *config*.

    Parameters
    ----------
    config : ShorelineConfig
        Validated configuration.

    Returns
    -------
    Pipeline
    """
    steps: List[ImageTransform] = [WaterIndexEvaluator(config.algorithm)]
    if not config.do_edge_detect:
        if config.skip_threshold:
            steps.append(PassThrough())
        else:
            steps.append(ThresholdClassifier(
                threshold=config.threshold,
                tolerance=config.tolerance,
                color_coding=config.color_coding,
            ))
    if config.smoothing > 0:
        steps.append(GaussianFilter(sigma=config.smoothing))
    if config.do_edge_detect:
        steps.append(RobertsEdgeFilter())
    return Pipeline(steps)


class TileProcessor:
    """Answer tile requests for a configured shoreline run.

    Built by ``ShorelinePipeline.build()``. Holds only immutable state:
    the band sources, the AOI and the prebuilt chain.

    Parameters
    ----------
    sources : Sequence[Tuple[ImageReader, int]]
        ``(reader, band)`` pairs in formula order.
    aoi : AreaOfInterest
        Validated area of interest.
    chain : Pipeline
        Processing chain.
    output_dtype : np.dtype
        dtype of returned tiles.
    """

    def __init__(
        self,
        sources: Sequence[Tuple[ImageReader, int]],
        aoi: AreaOfInterest,
        chain: Pipeline,
        output_dtype: Any,
    ) -> None:
        self._sources = tuple(sources)
        self._aoi = aoi
        self._chain = chain
        self._output_dtype = np.dtype(output_dtype)
        self._image_shape = tuple(sources[0][0].get_shape()[:2])

    @property
    def aoi(self) -> AreaOfInterest:
        return self._aoi

    @property
    def shape(self) -> Tuple[int, int]:
        """``(rows, cols)`` of the AOI in pixels."""
        return self._aoi.shape

    @property
    def chain(self) -> Pipeline:
        return self._chain

    @property
    def halo(self) -> int:
        """Context pixels read around every tile."""
        return self._chain.halo

    @property
    def output_dtype(self) -> np.dtype:
        """``uint8`` for zone classification, ``float32`` otherwise."""
        return self._output_dtype

    def _read_bands(self, window: ChipRegion) -> np.ndarray:
        bands = [
            reader.read_chip(
                window.row_start, window.row_end,
                window.col_start, window.col_end,
                bands=[band],
            )
            for reader, band in self._sources
        ]
        return np.stack(bands)

    def get_tile(self, region: ChipRegion) -> np.ndarray:
        """Compute the output tile covering *region*.

        Parameters
        ----------
        region : ChipRegion
            Pixel rectangle in AOI coordinates.

        Returns
        -------
        np.ndarray
            ``region.shape`` array of ``output_dtype``.

        Raises
        ------
        InvalidAOI
            If *region* is empty or extends outside the AOI.
        """
        if not self._aoi.contains(region):
            raise InvalidAOI(
                f"Tile {region} lies outside the area of interest "
                f"{self._aoi.shape}"
            )
        image_region = self._aoi.to_image(region)
        window, core = expand_region(image_region, self.halo, *self._image_shape)
        logger.debug("Tile %s: reading %s (halo %d)", region, window, self.halo)

        result = self._chain.apply(self._read_bands(window))
        tile = result[core.row_start:core.row_end, core.col_start:core.col_end]
        return np.ascontiguousarray(tile, dtype=self._output_dtype)

    def __repr__(self) -> str:
        return (
            f"TileProcessor(shape={self.shape}, halo={self.halo}, "
            f"chain={self._chain!r})"
        )


class ShorelineResult:
    """Outcome of ``ShorelinePipeline.run()``.

    Attributes
    ----------
    product_path : Path
        Classified (or edge-strength) raster product.
    vector_target : Path or None
        Vector output file; ``None`` when vectors went to the output
        stream or were not requested (edge-detect mode).
    status : FinalizeStatus
        ``DEGRADED`` when vectorization was unavailable or failed.
    tiles_written : int
        Number of tiles written to the product.
    messages : List[str]
        Human readable notes about the run.
    """

    def __init__(
        self,
        product_path: Path,
        vector_target: Optional[Path],
        status: FinalizeStatus,
        tiles_written: int,
        messages: Optional[List[str]] = None,
    ) -> None:
        self.product_path = product_path
        self.vector_target = vector_target
        self.status = status
        self.tiles_written = tiles_written
        self.messages = list(messages or [])

    @property
    def degraded(self) -> bool:
        return self.status is FinalizeStatus.DEGRADED

    def __repr__(self) -> str:
        return (
            f"ShorelineResult(product_path='{self.product_path}', "
            f"vector_target={self.vector_target!r}, "
            f"status={self.status.value}, tiles_written={self.tiles_written})"
        )


class ShorelinePipeline:
    """Builder for shoreline classification runs.

    Examples
    --------
    Classify two Landsat 8 bands and vectorize the water zone::

        from shoreline.IO import open_image
        from shoreline.extraction import ShorelinePipeline

        with open_image('LC08_B3.TIF') as green, \\
                open_image('LC08_B6.TIF') as swir:
            result = (ShorelinePipeline()
                      .with_config({'algorithm': 'ndwi', 'threshold': '0.5'})
                      .with_band(green)
                      .with_band(swir)
                      .with_vector_output('coast.json')
                      .run())
        print(result.product_path, result.status)

    Tile requests without writing a product::

        processor = (ShorelinePipeline()
                     .with_bands([green, swir])
                     .build())
        tile = processor.get_tile(ChipRegion(0, 0, 512, 512))
    """

    def __init__(self) -> None:
        self._config = ShorelineConfig()
        self._sources: List[Tuple[ImageReader, int]] = []
        self._aoi: Optional[Union[AreaOfInterest, GroundRect]] = None
        self._tile_size: Union[int, Tuple[int, int]] = DEFAULT_TILE_SIZE
        self._workers = 1
        self._raster_output: Optional[Path] = None
        self._vector_output: Optional[Path] = None
        self._output_stream: Optional[TextIO] = None
        self._vectorizer: Optional[Union[str, Vectorizer]] = None

    # ------------------------------------------------------------------
    # Builder methods
    # ------------------------------------------------------------------

    def with_config(
        self, config: Union[ShorelineConfig, Mapping[str, Any]]
    ) -> 'ShorelinePipeline':
        """Set the configuration.

        Parameters
        ----------
        config : ShorelineConfig or Mapping[str, Any]
            A configuration, or name/value keywords applied over the
            defaults.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.

        Raises
        ------
        InvalidConfiguration
            If keyword values are malformed.
        """
        if isinstance(config, ShorelineConfig):
            self._config = config
        else:
            self._config = ShorelineConfig.from_keywords(config)
        return self

    def with_band(
        self, reader: ImageReader, band: int = 0
    ) -> 'ShorelinePipeline':
        """Append a band source.

        Sources are consumed in formula order: NDWI ``(b0, b1)``, AWEI
        ``(b0, b1, b2, b3)``.

        Parameters
        ----------
        reader : ImageReader
            Open reader.
        band : int
            0-based band of *reader* to use.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.
        """
        if not isinstance(reader, ImageReader):
            raise TypeError(
                f"reader must be an ImageReader, got {type(reader).__name__}"
            )
        if band < 0:
            raise ValueError(f"band must be >= 0, got {band}")
        self._sources.append((reader, int(band)))
        return self

    def with_bands(
        self,
        readers: Sequence[Union[ImageReader, Tuple[ImageReader, int]]],
    ) -> 'ShorelinePipeline':
        """Replace all band sources.

        Parameters
        ----------
        readers : Sequence
            Readers (band 0 of each) or ``(reader, band)`` pairs.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.
        """
        self._sources = []
        for item in readers:
            if isinstance(item, tuple):
                self.with_band(*item)
            else:
                self.with_band(item)
        return self

    def with_aoi(
        self, aoi: Union[AreaOfInterest, GroundRect]
    ) -> 'ShorelinePipeline':
        """Restrict the run to an area of interest.

        A ``GroundRect`` is converted to a pixel window with the first
        band source's affine transform at build time. Without an AOI the
        whole extent of the first band source is processed.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.
        """
        self._aoi = aoi
        return self

    def with_tile_size(
        self, tile_size: Union[int, Tuple[int, int]]
    ) -> 'ShorelinePipeline':
        """Set the tile dimensions used by ``run()``. Default 256.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.
        """
        self._tile_size = tile_size
        return self

    def with_workers(self, workers: int) -> 'ShorelinePipeline':
        """Compute tiles on a thread pool of *workers* threads.

        Writes always happen in the calling thread.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self._workers = int(workers)
        return self

    def with_output(self, path: Union[str, Path]) -> 'ShorelinePipeline':
        """Set the raster product path explicitly.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.
        """
        self._raster_output = Path(path)
        return self

    def with_vector_output(
        self, path: Optional[Union[str, Path]]
    ) -> 'ShorelinePipeline':
        """Set the vector output file. ``None`` writes to the output stream.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.
        """
        self._vector_output = Path(path) if path else None
        return self

    def with_output_stream(self, stream: TextIO) -> 'ShorelinePipeline':
        """Stream receiving vector output when no vector file is set.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.
        """
        self._output_stream = stream
        return self

    def with_vectorizer(
        self, vectorizer: Union[str, Vectorizer]
    ) -> 'ShorelinePipeline':
        """Select the vectorizer by registered name or instance.

        Returns
        -------
        ShorelinePipeline
            Self for chaining.
        """
        self._vectorizer = vectorizer
        return self

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @property
    def config(self) -> ShorelineConfig:
        return self._config

    def _resolve_aoi(self) -> AreaOfInterest:
        aoi = self._aoi
        if aoi is None:
            if not self._sources:
                raise InvalidAOI(
                    "Area of interest is not defined. Call .with_aoi() "
                    "or add band sources with .with_band()."
                )
            aoi = AreaOfInterest.from_reader(self._sources[0][0])
        elif isinstance(aoi, GroundRect):
            if not self._sources:
                raise InvalidAOI(
                    "A ground rectangle AOI needs a band source to locate it"
                )
            reader = self._sources[0][0]
            geo = reader.get_geolocation()
            if not geo or geo.get('transform') is None:
                raise InvalidAOI(
                    "Band source has no georeferencing; use a pixel "
                    "AreaOfInterest instead of a ground rectangle"
                )
            aoi = AreaOfInterest.from_ground_rect(
                aoi, geo['transform'], reader.get_shape()[:2],
            )
        aoi.validate()
        return aoi

    def build(self) -> TileProcessor:
        """Validate inputs and assemble the tile processor.

        Checks run in order, before any pixel is read: area of interest,
        sensor profile, band count, band geometry.

        Returns
        -------
        TileProcessor

        Raises
        ------
        InvalidAOI
            If the AOI is undefined, has NaN bounds or misses the bands.
        UnsupportedConfiguration
            If the sensor profile is not supported.
        InsufficientInputs
            If fewer band sources are set than the algorithm requires.
        ValidationError
            If the band sources differ in size.
        """
        config = self._config
        aoi = self._resolve_aoi()

        supported = [s.value for s in Sensor]
        if config.sensor not in supported:
            raise UnsupportedConfiguration(
                f"Unsupported sensor profile {config.sensor!r}. "
                f"Supported: {supported}"
            )

        required = required_band_count(config.algorithm)
        if len(self._sources) < required:
            raise InsufficientInputs(
                f"{config.algorithm.value.upper()} requires {required} band "
                f"sources, got {len(self._sources)}"
            )
        sources = self._sources[:required]
        if len(self._sources) > required:
            logger.debug("Ignoring %d extra band sources",
                         len(self._sources) - required)

        shapes = {tuple(r.get_shape()[:2]) for r, _ in sources}
        if len(shapes) != 1:
            raise ValidationError(
                f"All band sources must share one geometry, got {sorted(shapes)}"
            )
        rows, cols = shapes.pop()
        view = aoi.view_rect
        if view.row_end > rows or view.col_end > cols:
            raise InvalidAOI(
                f"Area of interest {view} exceeds the band images ({rows}, {cols})"
            )

        chain = build_chain(config)
        if config.do_edge_detect or config.skip_threshold:
            dtype = np.float32
        else:
            dtype = np.uint8

        processor = TileProcessor(sources, aoi, chain, dtype)
        logger.debug("Built %r", processor)
        return processor

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def product_paths(self) -> Tuple[Path, Optional[Path]]:
        """Raster product path and vector target for a run.

        With a vector output file the raster product sits beside it with
        a ``.tif`` suffix; without one it is a timestamped
        ``temp_shoreline_<YYYYmmddHHMMSS>.tif`` in the working directory
        and vectors go to the output stream. An explicit ``with_output``
        path always wins.

        In edge-detect mode the raster is the final product: the output
        path named with ``with_vector_output`` is used for the raster
        itself and there is no vector target.

        Returns
        -------
        Tuple[Path, Optional[Path]]
        """
        vector = self._vector_output
        if self._raster_output is not None:
            raster = self._raster_output
        elif vector is not None and self._config.do_edge_detect:
            raster = vector
        elif vector is not None:
            raster = vector.with_suffix('.tif')
            if raster == vector:
                raster = vector.with_name(f"{vector.stem}_classified.tif")
        else:
            stamp = time.strftime('%Y%m%d%H%M%S')
            raster = Path(f"{TEMP_PRODUCT_PREFIX}_{stamp}.tif")
        if self._config.do_edge_detect:
            vector = None
        return raster, vector

    def run(self) -> ShorelineResult:
        """Classify the whole AOI, write the product, then vectorize it.

        Returns
        -------
        ShorelineResult

        Raises
        ------
        InvalidAOI, UnsupportedConfiguration, InsufficientInputs
            Raised by ``build()`` before any tile work.
        FileNotFoundError
            If the raster product disappeared before finalization.
        """
        processor = self.build()
        raster_path, vector_target = self.product_paths()
        rows, cols = processor.shape
        regions = Tiler(rows, cols, tile_size=self._tile_size).tile_positions()

        geolocation = processor.aoi.geolocation(
            self._sources[0][0].get_geolocation()
        )
        logger.info("Shoreline run: %s, AOI %dx%d, %d tiles -> %s",
                    self._config.algorithm.value, rows, cols, len(regions),
                    raster_path)

        tags = dict(self._config.to_keywords())
        tags['processing_chain'] = processor.chain.provenance
        written = 0
        with GeoTIFFWriter(raster_path, metadata=tags) as writer:
            writer.create(rows, cols, processor.output_dtype, geolocation)
            if self._workers > 1:
                with ThreadPoolExecutor(max_workers=self._workers) as pool:
                    for region, tile in zip(regions,
                                            pool.map(processor.get_tile, regions)):
                        writer.write_chip(tile, region.row_start, region.col_start)
                        written += 1
            else:
                for region in regions:
                    tile = processor.get_tile(region)
                    writer.write_chip(tile, region.row_start, region.col_start)
                    written += 1
        logger.info("Wrote %d tiles to %s", written, raster_path)

        if self._config.do_edge_detect:
            message = f"Edge-detect mode: raster product {raster_path} is the final output"
            logger.info(message)
            return ShorelineResult(raster_path, None, FinalizeStatus.SUCCESS,
                                   written, [message])

        # the unclassified index has no zone code to trace
        foreground = None if self._config.skip_threshold \
            else self._config.color_coding.water
        finalizer = ProductFinalizer(self._vectorizer, self._output_stream,
                                     foreground=foreground)
        outcome = finalizer.finalize(raster_path, vector_target)
        return ShorelineResult(raster_path, outcome.vector_target,
                               outcome.status, written, [outcome.message])
