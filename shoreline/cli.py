# -*- coding: utf-8 -*-
"""
Shoreline CLI - Command-line entry point for shoreline extraction.

Classifies water, marginal and land zones from Landsat 8 band images and
vectorizes the water zone::

    shoreline LC08_B3.TIF LC08_B6.TIF -o coast.json
    shoreline --algorithm awei --threshold 0.4 B2.TIF B3.TIF B5.TIF B6.TIF
    shoreline --threshold X --smooth 1.5 --raster-output ndwi.tif B3.TIF B6.TIF

Options given on the command line override those read from ``--config``.
A single multi-band image supplies all bands the algorithm needs.

Exit status is 0 on success, 1 when the raster product was written but
vectorization was degraded, and 2 on configuration or input errors.

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
2026-03-10

Modified
--------
2026-03-13
"""

# Standard library
import argparse
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Dict, List, Optional, Sequence

# Shoreline internal
from shoreline.config import (
    ALGORITHM_KW,
    COLOR_CODING_KW,
    DO_EDGE_DETECT_KW,
    SENSOR_KW,
    SMOOTHING_KW,
    THRESHOLD_KW,
    TOLERANCE_KW,
    ShorelineConfig,
    load_keyword_file,
)
from shoreline.exceptions import DependencyError, ShorelineError
from shoreline.extraction import ShorelinePipeline
from shoreline.image_processing import required_band_count
from shoreline.IO import open_image

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DEGRADED = 1
EXIT_ERROR = 2

DEFAULT_SMOOTHING = 0.2


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns
    -------
    argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='shoreline',
        description=(
            'Extract a shoreline from multispectral band images: compute a '
            'water index, classify water / marginal / land zones and trace '
            'the water boundary to vectors.'
        ),
    )
    parser.add_argument(
        'images',
        nargs='+',
        type=Path,
        help='Band images in formula order (NDWI: green nir-or-swir; '
             'AWEI: four bands), or one multi-band image.',
    )
    parser.add_argument(
        '-o', '--output',
        type=Path,
        default=None,
        help='Vector output file (GeoJSON). Default: write vectors to stdout '
             'and keep a timestamped temp_shoreline_*.tif raster product. '
             'With --edge this names the raster product itself.',
    )
    parser.add_argument(
        '--algorithm',
        type=str,
        default=None,
        help='Water index: ndwi or awei (default: ndwi).',
    )
    parser.add_argument(
        '--color-coding',
        nargs=3,
        type=int,
        metavar=('WATER', 'MARGINAL', 'LAND'),
        default=None,
        help='Output codes for water, marginal and land (default: 255 128 0).',
    )
    parser.add_argument(
        '--edge',
        action='store_true',
        default=None,
        help='Render edge strength instead of zone classification. The '
             'raster product is the final output.',
    )
    parser.add_argument(
        '--sensor',
        type=str,
        default=None,
        help='Sensor profile (default: ls8).',
    )
    parser.add_argument(
        '--smooth',
        nargs='?',
        type=float,
        const=DEFAULT_SMOOTHING,
        default=None,
        metavar='SIGMA',
        help=f'Gaussian smoothing sigma in pixels; 0 disables '
             f'(default: {DEFAULT_SMOOTHING}).',
    )
    parser.add_argument(
        '--threshold',
        type=str,
        default=None,
        help="Normalized threshold in [0, 1], or X to skip classification "
             "(default: 0.55).",
    )
    parser.add_argument(
        '--tolerance',
        type=float,
        default=None,
        help='Half-width of the marginal zone around the threshold '
             '(default: 0.01).',
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help="Keyword list file of 'key: value' lines.",
    )
    parser.add_argument(
        '--raster-output',
        type=Path,
        default=None,
        help='Raster product path. Default: the vector output path with a '
             '.tif suffix.',
    )
    parser.add_argument(
        '--vectorizer',
        type=str,
        default=None,
        help='Registered vectorizer name (default: polygon).',
    )
    parser.add_argument(
        '--tile-size',
        type=int,
        default=256,
        help='Tile size in pixels (default: 256).',
    )
    parser.add_argument(
        '--workers',
        type=int,
        default=1,
        help='Threads computing tiles (default: 1).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log per-tile detail.',
    )
    return parser


def keywords_from_args(args: argparse.Namespace) -> Dict[str, str]:
    """Merge the ``--config`` keyword list with command-line overrides.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed arguments.

    Returns
    -------
    Dict[str, str]
        Keywords for ``ShorelineConfig.from_keywords``.
    """
    keywords: Dict[str, str] = {}
    if args.config is not None:
        keywords.update(load_keyword_file(args.config))

    overrides = {
        ALGORITHM_KW: args.algorithm,
        COLOR_CODING_KW: (
            ' '.join(str(v) for v in args.color_coding)
            if args.color_coding else None
        ),
        DO_EDGE_DETECT_KW: 'true' if args.edge else None,
        SENSOR_KW: args.sensor,
        SMOOTHING_KW: None if args.smooth is None else str(args.smooth),
        THRESHOLD_KW: args.threshold,
        TOLERANCE_KW: None if args.tolerance is None else str(args.tolerance),
    }
    keywords.update({k: v for k, v in overrides.items() if v is not None})
    return keywords


def _add_bands(
    pipeline: ShorelinePipeline,
    readers: List,
    config: ShorelineConfig,
) -> None:
    required = required_band_count(config.algorithm)
    if len(readers) == 1:
        shape = readers[0].get_shape()
        n_bands = shape[2] if len(shape) == 3 else 1
        if n_bands >= required:
            pipeline.with_bands([(readers[0], b) for b in range(required)])
            return
    pipeline.with_bands(readers)


def run(args: argparse.Namespace) -> int:
    """Execute a shoreline run from parsed arguments.

    Returns
    -------
    int
        Process exit status.
    """
    config = ShorelineConfig.from_keywords(keywords_from_args(args))
    logger.info("Configuration: %s", config.to_keywords())

    with ExitStack() as stack:
        readers = [stack.enter_context(open_image(p)) for p in args.images]
        pipeline = (ShorelinePipeline()
                    .with_config(config)
                    .with_tile_size(args.tile_size)
                    .with_workers(args.workers)
                    .with_vector_output(args.output)
                    .with_output_stream(sys.stdout))
        if args.raster_output is not None:
            pipeline.with_output(args.raster_output)
        if args.vectorizer is not None:
            pipeline.with_vectorizer(args.vectorizer)
        _add_bands(pipeline, readers, config)
        result = pipeline.run()

    logger.info("Raster product: %s", result.product_path)
    if result.degraded:
        return EXIT_DEGRADED
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point.

    Parameters
    ----------
    argv : Sequence[str], optional
        Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )
    try:
        return run(args)
    except DependencyError as e:
        logger.error("Missing dependency: %s", e)
        return EXIT_ERROR
    except (ShorelineError, FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
