# -*- coding: utf-8 -*-
"""
CLI Tests - Argument parsing, keyword merging, exit statuses.

Dependencies
------------
pytest
rasterio
shapely

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
2026-03-16
"""

import json

import numpy as np
import pytest

from conftest import make_geolocation, requires_rasterio
from shoreline import cli
from shoreline.exceptions import DegradedOutputWarning


@pytest.fixture
def band_files(tmp_path, ndwi_bands):
    """Green and NIR GeoTIFFs on disk."""
    pytest.importorskip("rasterio")
    from shoreline.IO import GeoTIFFWriter

    paths = []
    for name, band in zip(("B3.tif", "B5.tif"), ndwi_bands):
        path = tmp_path / name
        with GeoTIFFWriter(path) as writer:
            writer.write(band, make_geolocation())
        paths.append(str(path))
    return paths


class TestParser:

    def test_defaults(self):
        args = cli.build_parser().parse_args(['a.tif', 'b.tif'])
        assert [str(p) for p in args.images] == ['a.tif', 'b.tif']
        assert args.output is None
        assert args.smooth is None
        assert args.edge is None
        assert args.tile_size == 256
        assert args.workers == 1
        assert cli.keywords_from_args(args) == {}

    def test_smooth_without_value(self):
        args = cli.build_parser().parse_args(['a.tif', '--smooth'])
        assert args.smooth == pytest.approx(0.2)

    def test_overrides(self):
        args = cli.build_parser().parse_args([
            'a.tif', 'b.tif', '--algorithm', 'awei', '--color-coding', '9', '5', '1',
            '--edge', '--smooth', '1.5', '--threshold', 'X', '--tolerance', '0.02',
            '--sensor', 'LS8',
        ])
        assert cli.keywords_from_args(args) == {
            'algorithm': 'awei',
            'color_coding': '9 5 1',
            'do_edge_detect': 'true',
            'sensor': 'LS8',
            'smoothing': '1.5',
            'threshold': 'X',
            'tolerance': '0.02',
        }

    def test_config_file_then_overrides(self, tmp_path):
        kwl = tmp_path / "run.kwl"
        kwl.write_text("algorithm: awei\nthreshold: 0.3\n")
        args = cli.build_parser().parse_args(
            ['a.tif', '--config', str(kwl), '--threshold', '0.6'])
        assert cli.keywords_from_args(args) == {
            'algorithm': 'awei',
            'threshold': '0.6',
        }

    def test_no_images(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestExitStatus:

    def test_bad_algorithm(self, tmp_path):
        assert cli.main([str(tmp_path / "a.tif"), '--algorithm', 'ndvi']) == cli.EXIT_ERROR

    def test_bad_threshold(self, tmp_path):
        assert cli.main([str(tmp_path / "a.tif"), '--threshold', '2']) == cli.EXIT_ERROR

    def test_missing_image(self, tmp_path):
        assert cli.main([str(tmp_path / "absent.tif")]) == cli.EXIT_ERROR

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "band.jpg"
        path.write_bytes(b"\xff\xd8")
        assert cli.main([str(path)]) == cli.EXIT_ERROR

    def test_missing_config_file(self, tmp_path):
        assert cli.main(['a.tif', '--config', str(tmp_path / "none.kwl")]) == cli.EXIT_ERROR


@requires_rasterio
class TestRuns:

    def test_success(self, band_files, tmp_path):
        pytest.importorskip("shapely")
        out = tmp_path / "coast.json"
        assert cli.main(band_files + ['-o', str(out), '--tile-size', '32']) == cli.EXIT_OK
        assert out.exists()
        assert (tmp_path / "coast.tif").exists()
        assert json.loads(out.read_text())['features']

    def test_insufficient_bands(self, band_files, tmp_path):
        out = tmp_path / "coast.json"
        assert cli.main(band_files + ['-o', str(out), '--algorithm', 'awei']) == cli.EXIT_ERROR
        assert not (tmp_path / "coast.tif").exists()

    def test_unsupported_sensor(self, band_files):
        assert cli.main(band_files + ['--sensor', 's2']) == cli.EXIT_ERROR

    def test_degraded(self, band_files, tmp_path):
        out = tmp_path / "coast.json"
        with pytest.warns(DegradedOutputWarning):
            status = cli.main(band_files + ['-o', str(out), '--vectorizer', 'potrace'])
        assert status == cli.EXIT_DEGRADED
        assert (tmp_path / "coast.tif").exists()
        assert not out.exists()

    def test_edge_mode(self, band_files, tmp_path):
        out = tmp_path / "coast.json"
        raster = tmp_path / "edges.tif"
        status = cli.main(band_files + ['-o', str(out), '--edge',
                                        '--raster-output', str(raster)])
        assert status == cli.EXIT_OK
        assert raster.exists()
        assert not out.exists()

    def test_edge_mode_output_is_raster(self, band_files, tmp_path):
        out = tmp_path / "edges.tif"
        assert cli.main(band_files + ['--edge', '-o', str(out)]) == cli.EXIT_OK
        assert out.exists()
        assert not (tmp_path / "edges_classified.tif").exists()

    def test_custom_color_coding_traced(self, band_files, tmp_path):
        pytest.importorskip("shapely")
        out = tmp_path / "coast.json"
        status = cli.main(band_files + ['-o', str(out),
                                        '--color-coding', '200', '100', '0'])
        assert status == cli.EXIT_OK
        features = json.loads(out.read_text())['features']
        assert features
        assert all(f['properties']['value'] == 200 for f in features)

    def test_vectors_to_stdout(self, band_files, tmp_path, monkeypatch, capsys):
        pytest.importorskip("shapely")
        monkeypatch.chdir(tmp_path)
        assert cli.main(band_files) == cli.EXIT_OK
        collection = json.loads(capsys.readouterr().out)
        assert collection['type'] == 'FeatureCollection'
        assert list(tmp_path.glob("temp_shoreline_*.tif"))

    def test_single_multiband_image(self, ndwi_bands, tmp_path):
        pytest.importorskip("shapely")
        from shoreline.IO import GeoTIFFWriter

        stack = tmp_path / "stack.tif"
        with GeoTIFFWriter(stack) as writer:
            writer.write(np.stack(ndwi_bands), make_geolocation())
        out = tmp_path / "coast.json"
        assert cli.main([str(stack), '-o', str(out), '--workers', '2']) == cli.EXIT_OK
        assert out.exists()
