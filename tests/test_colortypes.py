# -*- coding: utf-8 -*-
"""
Tests for the color records and their numeric representations.
"""

import dataclasses

import numpy as np
import pytest

from tint_colortypes import (
    AbstractRGB, AlphaColor, BGR, Color, ColorParser, ColorTransform,
    DichromacySimulator, FixedPoint, HSL, HSV, Lab, LCHab, Norm16, Norm8,
    PaletteGenerator, RGB, RGB24, XYZ,
)


# =============================================================================
# FIXED POINT
# =============================================================================

def test_norm8_quantises():
    v = Norm8(0.5)
    assert v.raw == 128
    assert float(v) == pytest.approx(128 / 255)
    assert v.eps == pytest.approx(1 / 255)
    assert Norm16(0.5).raw == 32768


@pytest.mark.parametrize("value", [-0.01, 1.01, float("nan")])
def test_fixed_point_range(value):
    with pytest.raises(ValueError):
        Norm8(value)


def test_fixed_point_arithmetic():
    a, b = Norm8(0.2), Norm8(0.3)
    s = a + b
    assert isinstance(s, Norm8)
    assert float(s) == pytest.approx(0.5, abs=1 / 255)
    assert isinstance(0.5 * a, Norm8)
    assert float(a * 2) == pytest.approx(0.4, abs=1 / 255)
    assert a < b
    assert b >= a
    assert Norm8(1.0) == 1.0
    with pytest.raises(ValueError):
        Norm8(0.8) + Norm8(0.8)
    with pytest.raises(ValueError):
        Norm8(0.5) * -1


def test_fixed_point_from_raw():
    assert Norm8.from_raw(255) == Norm8(1.0)
    assert repr(Norm16.from_raw(0)) == "Norm16(0.0)"
    with pytest.raises(ValueError):
        Norm8.from_raw(256)


def test_fixed_point_is_hashable():
    assert len({Norm8(0.5), Norm8(0.5), Norm8(0.25)}) == 2


# =============================================================================
# RECORDS
# =============================================================================

def test_records_are_immutable():
    c = Lab(50.0, 10.0, -10.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.l = 60.0


def test_records_hold_out_of_gamut_values():
    c = RGB(1.5, -0.2, 0.0)
    assert c.r == 1.5
    np.testing.assert_array_equal(c.to_array(), [1.5, -0.2, 0.0])


def test_fixed_point_allowed_in_rgb_only():
    c = RGB(Norm8(1.0), Norm8(0.5), Norm16(0.0))
    assert isinstance(c.g, Norm8)
    np.testing.assert_allclose(c.to_array(), [1.0, 128 / 255, 0.0])
    with pytest.raises(TypeError):
        HSV(Norm8(0.5), 0.5, 0.5)
    with pytest.raises(TypeError):
        LCHab(50.0, 20.0, Norm8(0.5))
    with pytest.raises(TypeError):
        HSL(120.0, Norm8(0.5), 0.5)


def test_iteration_and_arrays():
    c = XYZ(0.1, 0.2, 0.3)
    assert tuple(c) == (0.1, 0.2, 0.3)
    assert XYZ.from_array(c.to_array()) == c
    with pytest.raises(ValueError):
        XYZ.from_array([0.1, 0.2])


def test_bgr_memory_and_logical_order():
    c = BGR(0.1, 0.2, 0.3)
    assert (c.b, c.g, c.r) == (0.1, 0.2, 0.3)
    assert tuple(c) == (0.1, 0.2, 0.3)
    np.testing.assert_array_equal(c.to_array(), [0.3, 0.2, 0.1])
    assert BGR.from_array([0.3, 0.2, 0.1]) == c
    assert BGR.from_rgb(0.3, 0.2, 0.1) == c


def test_rgb_like_capability():
    for cls in (RGB, BGR, RGB24):
        assert issubclass(cls, AbstractRGB)
    assert not issubclass(HSV, AbstractRGB)


@pytest.mark.parametrize("rgb, packed", [
    ((1.0, 0.5, 0.0), 0xFF8000),
    ((0.0, 0.0, 0.0), 0x000000),
    ((1.0, 1.0, 1.0), 0xFFFFFF),
    ((1.7, -0.3, 0.2), 0xFF0033),
])
def test_rgb24_packing(rgb, packed):
    c = RGB24.from_rgb(*rgb)
    assert c.value == packed


def test_rgb24_accessors():
    c = RGB24(0x336699)
    assert c.r == pytest.approx(0x33 / 255)
    assert c.g == pytest.approx(0x66 / 255)
    assert c.b == pytest.approx(0x99 / 255)
    np.testing.assert_allclose(c.to_array(), [0.2, 0.4, 0.6])
    assert repr(c) == "RGB24(0x336699)"
    assert RGB24.from_array(c.to_array()) == c


@pytest.mark.parametrize("value, error", [
    (-1, ValueError),
    (0x1000000, ValueError),
    (0.5, TypeError),
    ("0xFF0000", TypeError),
    (True, TypeError),
])
def test_rgb24_validation(value, error):
    with pytest.raises(error):
        RGB24(value)


def test_alpha_color():
    c = AlphaColor(Lab(50.0, 0.0, 0.0), 0.3)
    assert c.alpha == 0.3
    assert AlphaColor(RGB(0.0, 0.0, 0.0)).alpha == 1.0
    assert AlphaColor(RGB(0.0, 0.0, 0.0), Norm8(0.5)).alpha == Norm8(0.5)
    with pytest.raises(TypeError):
        AlphaColor((0.1, 0.2, 0.3), 0.5)
    with pytest.raises(TypeError):
        AlphaColor(c, 0.5)


def test_equality_and_hashing():
    assert Lab(50.0, 1.0, 2.0) == Lab(50.0, 1.0, 2.0)
    assert Lab(50.0, 1.0, 2.0) != LCHab(50.0, 1.0, 2.0)
    assert len({RGB(0.1, 0.2, 0.3), RGB(0.1, 0.2, 0.3)}) == 1


def test_collaborator_protocols():
    def identity(color):
        return color

    def simulate(color, severity=1.0):
        return color

    def parse(text):
        return RGB(0.0, 0.0, 0.0)

    def palette(*hues, **shape):
        return ()

    assert isinstance(identity, ColorTransform)
    assert isinstance(simulate, DichromacySimulator)
    assert isinstance(parse, ColorParser)
    assert isinstance(palette, PaletteGenerator)
    assert not isinstance(42, ColorTransform)


def test_base_types_are_exported():
    assert issubclass(Norm8, FixedPoint)
    assert issubclass(Lab, Color)
