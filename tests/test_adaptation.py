# -*- coding: utf-8 -*-
"""
Tests for chromatic adaptation and white balancing.
"""

import numpy as np
import pytest

import tint_adaptation
from tint_adaptation import ChromaticAdaptation, whitebalance
from tint_colortypes import AlphaColor, Lab, RGB, XYZ
from tint_convert import WP_A, WP_D50, WP_D65, convert


def test_equal_whites_return_input():
    c = RGB(0.3, 0.5, 0.7)
    assert whitebalance(c, WP_D65, WP_D65) is c
    assert whitebalance(c, "D65", [0.95047, 1.0, 1.08883]) is c


@pytest.mark.parametrize("method", ["cat02", "bradford"])
def test_source_white_maps_to_reference_white(method):
    adapted = whitebalance(WP_A, WP_A, WP_D65, method=method)
    np.testing.assert_allclose(adapted.to_array(), WP_D65.to_array(), atol=1e-12)


def test_type_is_preserved():
    c = Lab(60.0, 20.0, -10.0)
    out = whitebalance(c, WP_D50, WP_D65)
    assert isinstance(out, Lab)
    assert out != c


def test_alpha_is_preserved():
    c = AlphaColor(RGB(0.8, 0.6, 0.4), 0.5)
    out = whitebalance(c, WP_A, WP_D65)
    assert isinstance(out, AlphaColor)
    assert out.alpha == 0.5
    assert isinstance(out.color, RGB)


def test_warm_light_is_corrected_towards_blue():
    # A gray under illuminant A looks orange; balancing to D65 lifts blue
    seen = convert(RGB, WP_A)
    balanced = whitebalance(seen, WP_A, WP_D65)
    assert balanced.b > seen.b
    np.testing.assert_allclose(balanced.to_array(), [1.0, 1.0, 1.0], atol=1e-3)


def test_methods_differ():
    c = RGB(0.2, 0.6, 0.3)
    cat02 = whitebalance(c, WP_A, WP_D65, method="cat02")
    bradford = whitebalance(c, WP_A, WP_D65, method="bradford")
    assert not np.allclose(cat02.to_array(), bradford.to_array())


def test_round_trip():
    c = XYZ(0.3, 0.4, 0.2)
    back = whitebalance(whitebalance(c, WP_D50, WP_A), WP_A, WP_D50)
    np.testing.assert_allclose(back.to_array(), c.to_array(), atol=1e-12)


def test_unknown_method():
    with pytest.raises(ValueError):
        whitebalance(RGB(0.3, 0.5, 0.7), WP_A, WP_D65, method="vonkries")


def test_zero_white_is_rejected():
    with pytest.raises(ValueError):
        whitebalance(XYZ(0.3, 0.4, 0.2), [0.0, 0.0, 0.0], WP_D65)


def test_method_name_is_case_insensitive():
    m1 = ChromaticAdaptation.calc_transform_matrix(WP_A.to_array(), WP_D65.to_array(), "Bradford")
    m2 = ChromaticAdaptation.calc_transform_matrix(WP_A.to_array(), WP_D65.to_array(), "bradford")
    np.testing.assert_array_equal(m1, m2)


def test_matrix_is_cached():
    tint_adaptation._get_cached_adaptation_matrix.cache_clear()
    src, dst = WP_D50.to_array(), WP_A.to_array()
    first = ChromaticAdaptation.calc_transform_matrix(src, dst)
    second = ChromaticAdaptation.calc_transform_matrix(src.copy(), dst.copy())
    assert first is second
    assert tint_adaptation._get_cached_adaptation_matrix.cache_info().hits == 1


def test_batch_adapt_shapes():
    xyz = np.array([[0.3, 0.4, 0.2], [0.1, 0.1, 0.1], [0.9, 1.0, 1.1]])
    out = ChromaticAdaptation.adapt(xyz, WP_D50.to_array(), WP_D65.to_array())
    assert out.shape == (3, 3)
    single = ChromaticAdaptation.adapt(xyz[0], WP_D50.to_array(), WP_D65.to_array())
    assert single.shape == (3,)
    np.testing.assert_allclose(single, out[0])
    with pytest.raises(ValueError):
        ChromaticAdaptation.adapt(np.zeros((2, 2)), WP_D50.to_array(), WP_D65.to_array())


def test_adapt_with_equal_whites_copies():
    xyz = np.array([[0.3, 0.4, 0.2]])
    out = ChromaticAdaptation.adapt(xyz, WP_D65.to_array(), WP_D65.to_array())
    np.testing.assert_array_equal(out, xyz)
    assert out is not xyz
