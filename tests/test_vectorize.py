# -*- coding: utf-8 -*-
"""
Vectorization Tests - Vectorizer registry, RasterVectorizer, ProductFinalizer.

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
2026-03-09

Modified
--------
2026-03-16
"""

import io
import json

import numpy as np
import pytest

from conftest import make_geolocation, requires_rasterio
from shoreline.exceptions import DegradedOutputWarning, ValidationError
from shoreline.extraction import vectorize
from shoreline.extraction import (
    FinalizeStatus,
    ProductFinalizer,
    Vectorizer,
    available_vectorizers,
    create_vectorizer,
    register_vectorizer,
)
from shoreline.vocabulary import VectorMode


class RecordingVectorizer(Vectorizer):
    """Writes a marker to the stream or output file; can be told to fail."""

    succeed = True

    def execute(self):
        if not self.succeed:
            return False
        target = self.config.get('output_file')
        if target:
            with open(target, 'w') as f:
                f.write('{}')
        else:
            self.output_stream.write('traced')
        return True


class FailingVectorizer(RecordingVectorizer):
    succeed = False


class NotAVectorizer:
    pass


@pytest.fixture
def raster(tmp_path):
    path = tmp_path / "coast.tif"
    path.write_bytes(b"product")
    return path


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:

    def test_default_registered(self):
        assert 'polygon' in available_vectorizers()

    def test_unknown_name(self):
        assert create_vectorizer('potrace') is None

    def test_register_and_create(self, monkeypatch):
        monkeypatch.setitem(vectorize._VECTORIZER_REGISTRY, 'recording',
                            (__name__, 'RecordingVectorizer'))
        assert isinstance(create_vectorizer('Recording'), RecordingVectorizer)

    def test_register_lowercases(self, monkeypatch):
        monkeypatch.setattr(vectorize, '_VECTORIZER_REGISTRY',
                            dict(vectorize._VECTORIZER_REGISTRY))
        register_vectorizer('Tracer', __name__, 'RecordingVectorizer')
        assert 'tracer' in available_vectorizers()

    def test_missing_module(self, monkeypatch):
        monkeypatch.setitem(vectorize._VECTORIZER_REGISTRY, 'ghost',
                            ('shoreline.no_such_module', 'Ghost'))
        assert create_vectorizer('ghost') is None

    def test_missing_class(self, monkeypatch):
        monkeypatch.setitem(vectorize._VECTORIZER_REGISTRY, 'ghost',
                            (__name__, 'Ghost'))
        assert create_vectorizer('ghost') is None

    def test_not_a_vectorizer(self, monkeypatch):
        monkeypatch.setitem(vectorize._VECTORIZER_REGISTRY, 'plain',
                            (__name__, 'NotAVectorizer'))
        assert create_vectorizer('plain') is None


# ---------------------------------------------------------------------------
# Vectorizer interface
# ---------------------------------------------------------------------------

class TestVectorizerInitialize:

    def test_requires_image_file(self):
        with pytest.raises(ValidationError, match="image_file"):
            RecordingVectorizer().initialize({'output_file': 'x.json'})

    def test_rejects_unknown_mode(self):
        with pytest.raises(ValidationError, match="mode"):
            RecordingVectorizer().initialize({'image_file': 'a.tif', 'mode': 'raster'})

    def test_accepts_mode_enum(self):
        v = RecordingVectorizer()
        v.initialize({'image_file': 'a.tif', 'mode': VectorMode.LINESTRING})
        assert v.config['image_file'] == 'a.tif'

    def test_config_is_copy(self):
        v = RecordingVectorizer()
        v.initialize({'image_file': 'a.tif'})
        v.config['image_file'] = 'b.tif'
        assert v.config['image_file'] == 'a.tif'


# ---------------------------------------------------------------------------
# ProductFinalizer
# ---------------------------------------------------------------------------

class TestProductFinalizer:

    def test_default_vectorizer_name(self):
        assert ProductFinalizer().vectorizer_name == 'polygon'

    def test_missing_raster(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ProductFinalizer(RecordingVectorizer()).finalize(tmp_path / "absent.tif")

    def test_unavailable_vectorizer_degrades(self, raster, caplog):
        finalizer = ProductFinalizer('potrace')
        with pytest.warns(DegradedOutputWarning, match="potrace"):
            result = finalizer.finalize(raster, raster.with_suffix('.json'))
        assert result.status is FinalizeStatus.DEGRADED
        assert result.degraded
        assert result.raster_path == raster
        assert raster.exists()
        assert not raster.with_suffix('.json').exists()
        assert "retained" in result.message
        assert any(r.levelname == 'WARNING' for r in caplog.records)

    def test_failing_vectorizer_degrades(self, raster):
        with pytest.warns(DegradedOutputWarning, match="failed"):
            result = ProductFinalizer(FailingVectorizer()).finalize(raster)
        assert result.degraded
        assert raster.exists()

    def test_stream_passed_through(self, raster):
        stream = io.StringIO()
        vectorizer = RecordingVectorizer()
        result = ProductFinalizer(vectorizer, output_stream=stream).finalize(raster)
        assert result.status is FinalizeStatus.SUCCESS
        assert result.vector_target is None
        assert vectorizer.output_stream is stream
        assert stream.getvalue() == 'traced'

    def test_file_target(self, raster):
        target = raster.with_suffix('.json')
        vectorizer = RecordingVectorizer()
        result = ProductFinalizer(vectorizer, mode='LineString').finalize(raster, target)
        assert result.status is FinalizeStatus.SUCCESS
        assert result.vector_target == target
        assert target.exists()
        assert vectorizer.config['image_file'] == str(raster)
        assert vectorizer.config['mode'] == 'linestring'
        assert vectorizer.config['foreground'] == 255

    def test_foreground_forwarded(self, raster):
        vectorizer = RecordingVectorizer()
        ProductFinalizer(vectorizer, output_stream=io.StringIO(),
                         foreground=200).finalize(raster)
        assert vectorizer.config['foreground'] == 200

    def test_no_zone_code_degrades(self, raster):
        vectorizer = RecordingVectorizer()
        finalizer = ProductFinalizer(vectorizer, foreground=None)
        with pytest.warns(DegradedOutputWarning, match="unclassified index"):
            result = finalizer.finalize(raster)
        assert result.degraded
        assert vectorizer.config == {}
        assert raster.exists()


# ---------------------------------------------------------------------------
# RasterVectorizer
# ---------------------------------------------------------------------------

@requires_rasterio
class TestRasterVectorizer:

    @pytest.fixture
    def water_block(self, tmp_path):
        from shoreline.IO import GeoTIFFWriter

        zones = np.zeros((10, 12), dtype=np.uint8)
        zones[2:6, 3:7] = 255
        zones[8, 0:2] = 128
        path = tmp_path / "zones.tif"
        with GeoTIFFWriter(path) as writer:
            writer.write(zones, make_geolocation(res=30.0))
        return path

    def _run(self, path, **config):
        pytest.importorskip("shapely")
        from shoreline.extraction import RasterVectorizer

        stream = io.StringIO()
        v = RasterVectorizer()
        v.initialize({'image_file': str(path), **config})
        v.set_output_stream(stream)
        ok = v.execute()
        return ok, stream

    def test_polygon_area(self, water_block):
        ok, stream = self._run(water_block)
        assert ok
        collection = json.loads(stream.getvalue())
        assert collection['type'] == 'FeatureCollection'
        assert len(collection['features']) == 1
        feature = collection['features'][0]
        assert feature['geometry']['type'] == 'Polygon'
        assert feature['properties']['area'] == pytest.approx(4 * 4 * 30.0 * 30.0)
        assert feature['properties']['value'] == 255
        assert 'EPSG:32633' in collection['crs']['properties']['name']

    def test_linestring_mode(self, water_block):
        ok, stream = self._run(water_block, mode='linestring')
        assert ok
        feature = json.loads(stream.getvalue())['features'][0]
        assert feature['geometry']['type'] == 'LineString'

    def test_marginal_foreground(self, water_block):
        ok, stream = self._run(water_block, foreground=128)
        assert ok
        feature = json.loads(stream.getvalue())['features'][0]
        assert feature['properties']['area'] == pytest.approx(2 * 900.0)

    def test_no_water(self, tmp_path):
        from shoreline.IO import GeoTIFFWriter

        path = tmp_path / "land.tif"
        with GeoTIFFWriter(path) as writer:
            writer.write(np.zeros((4, 4), dtype=np.uint8))
        ok, stream = self._run(path)
        assert ok
        assert json.loads(stream.getvalue())['features'] == []

    def test_output_file(self, water_block, tmp_path):
        target = tmp_path / "out" / "coast.json"
        ok, _ = self._run(water_block, output_file=str(target))
        assert ok
        assert json.loads(target.read_text())['features']

    def test_unreadable_raster_returns_false(self, tmp_path):
        path = tmp_path / "junk.tif"
        path.write_text("junk")
        ok, stream = self._run(path)
        assert not ok
        assert stream.getvalue() == ''

    def test_execute_before_initialize(self):
        pytest.importorskip("shapely")
        from shoreline.extraction import RasterVectorizer

        assert RasterVectorizer().execute() is False

    def test_bad_connectivity(self):
        pytest.importorskip("shapely")
        from shoreline.extraction import RasterVectorizer

        with pytest.raises(ValueError):
            RasterVectorizer(connectivity=6)
