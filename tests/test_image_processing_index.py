# -*- coding: utf-8 -*-
"""
Water Index Tests - NDWI / AWEI band algebra.

Dependencies
------------
pytest

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
2026-03-05

Modified
--------
2026-03-12
"""

import numpy as np
import pytest

from shoreline.exceptions import InsufficientInputs, InvalidConfiguration, ValidationError
from shoreline.image_processing import (
    FORMULAS,
    WaterIndexEvaluator,
    required_band_count,
)
from shoreline.vocabulary import WaterIndex


class TestFormulaTable:

    def test_band_counts(self):
        assert required_band_count('ndwi') == 2
        assert required_band_count(WaterIndex.AWEI) == 4

    def test_table_is_closed(self):
        assert set(FORMULAS) == set(WaterIndex)

    def test_unknown_algorithm(self):
        with pytest.raises(InvalidConfiguration):
            WaterIndexEvaluator('ndvi')

    def test_expression(self):
        assert WaterIndexEvaluator('ndwi').expression == "in[0]/(in[0]+in[1])"


class TestNDWI:

    def test_matches_ratio(self, random_bands):
        b0, b1 = random_bands[:2]
        index = WaterIndexEvaluator('ndwi').apply(np.stack([b0, b1]))
        expected = (b0.astype(np.float64)
                    / (b0.astype(np.float64) + b1.astype(np.float64)))
        assert index.dtype == np.float32
        np.testing.assert_allclose(index, expected, rtol=1e-6)

    def test_exact_values(self):
        b0 = np.array([[30, 100, 90]], dtype=np.uint16)
        b1 = np.array([[70, 100, 10]], dtype=np.uint16)
        index = WaterIndexEvaluator('ndwi').apply([b0, b1])
        np.testing.assert_array_equal(
            index, np.array([[0.3, 0.5, 0.9]], dtype=np.float32))

    def test_integer_inputs_do_not_overflow(self):
        b0 = np.array([[60000]], dtype=np.uint16)
        b1 = np.array([[60000]], dtype=np.uint16)
        index = WaterIndexEvaluator('ndwi').apply([b0, b1])
        assert index[0, 0] == pytest.approx(0.5)

    def test_zero_denominator_is_nan(self):
        b0 = np.array([[0, 5]], dtype=np.float32)
        b1 = np.array([[0, -5]], dtype=np.float32)
        index = WaterIndexEvaluator('ndwi').apply([b0, b1])
        assert np.isnan(index).all()

    def test_extra_bands_ignored(self, random_bands):
        ev = WaterIndexEvaluator('ndwi')
        np.testing.assert_array_equal(
            ev.apply(np.stack(random_bands)),
            ev.apply(np.stack(random_bands[:2])),
        )


class TestAWEI:

    def test_formula(self, random_bands):
        b = [band.astype(np.float64) for band in random_bands]
        expected = 4.0 * (b[0] + b[1]) - 0.25 * b[2] - 2.75 * b[3]
        index = WaterIndexEvaluator(WaterIndex.AWEI).apply(random_bands)
        np.testing.assert_allclose(index, expected.astype(np.float32),
                                   rtol=1e-6)

    def test_two_bands_insufficient(self, random_bands):
        with pytest.raises(InsufficientInputs, match="expects 4"):
            WaterIndexEvaluator('awei').apply(random_bands[:2])


class TestInputValidation:

    def test_mismatched_geometry(self):
        with pytest.raises(ValidationError, match="geometry"):
            WaterIndexEvaluator().apply([np.zeros((4, 4)), np.zeros((4, 5))])

    def test_2d_stack_rejected(self):
        with pytest.raises(ValidationError, match="3D"):
            WaterIndexEvaluator().apply(np.zeros((4, 4)))

    def test_empty_sequence_insufficient(self):
        with pytest.raises(InsufficientInputs):
            WaterIndexEvaluator().apply([])

    def test_insufficient_is_validation_error(self):
        assert issubclass(InsufficientInputs, ValidationError)
