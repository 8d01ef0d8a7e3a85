# -*- coding: utf-8 -*-
"""
Tests for hue helpers and color interpolation.
"""

import numpy as np
import pytest

from tint_colortypes import AlphaColor, BGR, HSV, Lab, LCHab, Norm8, RGB, RGB24
from tint_convert import convert
from tint_utilities import linspace, mean_hue, normalize_hue, weighted_color_mean


@pytest.mark.parametrize("h, expected", [
    (0.0, 0.0),
    (360.0, 0.0),
    (-30.0, 330.0),
    (725.0, 5.0),
    (359.5, 359.5),
    (-1e-20, 0.0),
])
def test_normalize_hue(h, expected):
    assert normalize_hue(h) == pytest.approx(expected)
    assert 0.0 <= normalize_hue(h) < 360.0


@pytest.mark.parametrize("h1, h2, expected", [
    (10.0, 50.0, 30.0),
    (350.0, 10.0, 0.0),
    (10.0, 350.0, 0.0),
    (300.0, 20.0, 340.0),
    (0.0, 180.0, 90.0),
    (90.0, 90.0, 90.0),
])
def test_mean_hue_takes_shorter_arc(h1, h2, expected):
    assert mean_hue(h1, h2) == pytest.approx(expected)


def test_weighted_mean_of_red_and_blue():
    mixed = weighted_color_mean(0.5, RGB(1.0, 0.0, 0.0), RGB(0.0, 0.0, 1.0))
    assert mixed == RGB(0.5, 0.0, 0.5)


@pytest.mark.parametrize("w", [0.0, 0.25, 1.0])
def test_weighted_mean_weights(w):
    c1, c2 = Lab(20.0, 10.0, -5.0), Lab(80.0, -30.0, 45.0)
    mixed = weighted_color_mean(w, c1, c2)
    np.testing.assert_allclose(mixed.to_array(), w * c1.to_array() + (1 - w) * c2.to_array())


@pytest.mark.parametrize("w", [-0.1, 1.5])
def test_weighted_mean_rejects_bad_weight(w):
    with pytest.raises(ValueError):
        weighted_color_mean(w, RGB(1.0, 0.0, 0.0), RGB(0.0, 0.0, 1.0))


def test_weighted_mean_converts_second_color():
    c1 = Lab(50.0, 0.0, 0.0)
    c2 = RGB(1.0, 0.0, 0.0)
    mixed = weighted_color_mean(0.5, c1, c2)
    assert isinstance(mixed, Lab)
    expected = 0.5 * c1.to_array() + 0.5 * convert(Lab, c2).to_array()
    np.testing.assert_allclose(mixed.to_array(), expected)


def test_weighted_mean_mixes_alpha():
    c1 = AlphaColor(RGB(1.0, 0.0, 0.0), 0.2)
    mixed = weighted_color_mean(0.5, c1, RGB(0.0, 0.0, 1.0))
    assert isinstance(mixed, AlphaColor)
    assert mixed.alpha == pytest.approx(0.6)
    assert mixed.color == RGB(0.5, 0.0, 0.5)


def test_weighted_mean_keeps_channel_order():
    mixed = weighted_color_mean(0.5, BGR(b=1.0, g=0.0, r=0.0), RGB(1.0, 0.0, 0.0))
    assert isinstance(mixed, BGR)
    assert (mixed.r, mixed.g, mixed.b) == (0.5, 0.0, 0.5)


def test_linspace_endpoints_and_count():
    c1, c2 = RGB(0.0, 0.0, 0.0), RGB(1.0, 0.5, 0.25)
    ramp = linspace(c1, c2, 5)
    assert len(ramp) == 5
    assert ramp[0] == c1
    assert ramp[-1] == c2
    assert ramp[2] == RGB(0.5, 0.25, 0.125)
    assert all(isinstance(c, RGB) for c in ramp)


def test_linspace_default_count():
    assert len(linspace(Lab(0.0, 0.0, 0.0), Lab(100.0, 0.0, 0.0))) == 100


def test_linspace_single_color():
    c1 = HSV(120.0, 0.5, 0.5)
    assert linspace(c1, HSV(240.0, 1.0, 1.0), 1) == [c1]


@pytest.mark.parametrize("n", [0, -3, 2.5])
def test_linspace_rejects_bad_count(n):
    with pytest.raises(ValueError):
        linspace(RGB(0.0, 0.0, 0.0), RGB(1.0, 1.0, 1.0), n)


def test_linspace_hue_is_component_wise():
    ramp = linspace(LCHab(50.0, 30.0, 350.0), LCHab(50.0, 30.0, 10.0), 3)
    assert ramp[1].h == pytest.approx(180.0)


def test_linspace_keeps_fixed_point():
    ramp = linspace(RGB(Norm8(0.0), Norm8(0.0), Norm8(0.0)), RGB(1.0, 1.0, 1.0), 3)
    assert all(isinstance(v, Norm8) for c in ramp for v in c)
    assert ramp[1].r.raw == 128
    assert float(ramp[-1].g) == 1.0


def test_linspace_in_rgb24():
    ramp = linspace(RGB24(0x000000), RGB24(0xFFFFFF), 3)
    assert [c.value for c in ramp] == [0x000000, 0x808080, 0xFFFFFF]


def test_linspace_alpha():
    ramp = linspace(AlphaColor(RGB(0.0, 0.0, 0.0), 0.0), RGB(1.0, 1.0, 1.0), 3)
    assert [c.alpha for c in ramp] == pytest.approx([0.0, 0.5, 1.0])
    assert all(isinstance(c, AlphaColor) for c in ramp)
