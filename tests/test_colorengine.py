# -*- coding: utf-8 -*-
"""
Tests for the batch array engine.
"""

import numpy as np
import pytest

import tint_colorengine as ce
from tint_colorengine import REF_WHITE_D50, REF_WHITE_D65, ColorSpaceEngine as CSE


@pytest.fixture
def rgb_batch():
    rng = np.random.default_rng(7)
    return rng.random((200, 3))


@pytest.fixture
def strict_mode():
    ce.set_strict_ieee(True)
    try:
        yield
    finally:
        ce.set_strict_ieee(False)


# =============================================================================
# SHAPES
# =============================================================================

def test_single_and_batch_shapes(rgb_batch):
    assert CSE.srgb_to_xyz(rgb_batch).shape == (200, 3)
    assert CSE.srgb_to_xyz(rgb_batch[0]).shape == (3,)
    np.testing.assert_allclose(CSE.srgb_to_xyz(rgb_batch[0]), CSE.srgb_to_xyz(rgb_batch)[0])


@pytest.mark.parametrize("bad", [np.zeros((10, 5)), np.zeros(4), np.zeros((2, 3, 3))])
def test_bad_shapes(bad):
    with pytest.raises(ValueError):
        CSE.srgb_to_xyz(bad)


def test_integer_input_is_cast():
    out = CSE.rgb_to_hsv(np.array([0, 0, 1]))
    assert out.dtype == np.float64
    np.testing.assert_allclose(out, [240.0, 1.0, 1.0])


# =============================================================================
# sRGB / XYZ / Lab
# =============================================================================

def test_srgb_primaries():
    xyz = CSE.srgb_to_xyz(np.eye(3))
    np.testing.assert_allclose(xyz[0], [0.4124564, 0.2126729, 0.0193339], atol=1e-7)
    np.testing.assert_allclose(xyz.sum(axis=0), REF_WHITE_D65, atol=1e-6)


def test_srgb_round_trip_is_exact(rgb_batch):
    back = CSE.xyz_to_srgb(CSE.srgb_to_xyz(rgb_batch))
    np.testing.assert_allclose(back, rgb_batch, atol=1e-12)


def test_no_clamping_unless_asked():
    rgb = np.array([1.3, -0.2, 0.5])
    xyz = CSE.srgb_to_xyz(rgb)
    np.testing.assert_allclose(CSE.xyz_to_srgb(xyz), rgb, atol=1e-12)
    clipped = CSE.xyz_to_srgb(xyz, clip=True)
    assert clipped.min() >= 0.0 and clipped.max() <= 1.0
    np.testing.assert_allclose(CSE.srgb_to_xyz(rgb, clip=True), CSE.srgb_to_xyz([1.0, 0.0, 0.5]))


def test_white_is_lab_100():
    np.testing.assert_allclose(CSE.xyz_to_lab(REF_WHITE_D65), [100.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(CSE.xyz_to_lab(REF_WHITE_D50, REF_WHITE_D50), [100.0, 0.0, 0.0], atol=1e-12)


def test_lab_round_trip_across_threshold():
    # Y values straddling (6/29)^3
    xyz = np.array([[0.0, 0.0, 0.0], [0.005, 0.008, 0.01], [0.0089, 0.00886, 0.0088], [0.3, 0.4, 0.5]])
    back = CSE.lab_to_xyz(CSE.xyz_to_lab(xyz))
    np.testing.assert_allclose(back, xyz, atol=1e-12)


def test_srgb_lab_shortcut(rgb_batch):
    lab = CSE.srgb_to_lab(rgb_batch)
    np.testing.assert_allclose(lab, CSE.xyz_to_lab(CSE.srgb_to_xyz(rgb_batch)))
    np.testing.assert_allclose(CSE.lab_to_srgb(lab), rgb_batch, atol=1e-10)


def test_lch_hue_convention():
    lch = CSE.lab_to_lch(np.array([[50.0, 0.0, 0.0], [50.0, 0.0, 10.0], [50.0, -10.0, 0.0], [50.0, 0.0, -10.0]]))
    np.testing.assert_allclose(lch[:, 2], [0.0, 90.0, 180.0, 270.0])
    np.testing.assert_allclose(lch[:, 1], [0.0, 10.0, 10.0, 10.0])
    np.testing.assert_allclose(CSE.lch_to_lab(lch), [[50.0, 0.0, 0.0], [50.0, 0.0, 10.0],
                                                    [50.0, -10.0, 0.0], [50.0, 0.0, -10.0]], atol=1e-12)


# =============================================================================
# xyY / Luv / LMS / Oklab
# =============================================================================

def test_xyY_black_takes_white_chromaticity():
    out = CSE.xyz_to_xyY(np.zeros(3))
    np.testing.assert_allclose(out, [0.312727, 0.329023, 0.0], atol=1e-6)
    np.testing.assert_allclose(CSE.xyY_to_xyz(out), [0.0, 0.0, 0.0])


def test_xyY_zero_luminance_takes_white_chromaticity():
    out = CSE.xyz_to_xyY(np.array([[0.1, 0.0, 0.1], [0.2, 0.3, 0.1]]))
    np.testing.assert_allclose(out[0], [0.312727, 0.329023, 0.0], atol=1e-6)
    np.testing.assert_allclose(out[1], [1.0 / 3.0, 0.5, 0.3], atol=1e-12)


def test_xyY_round_trip(rgb_batch):
    xyz = CSE.srgb_to_xyz(rgb_batch)
    np.testing.assert_allclose(CSE.xyY_to_xyz(CSE.xyz_to_xyY(xyz)), xyz, atol=1e-12)


def test_luv_white_and_black():
    np.testing.assert_allclose(CSE.xyz_to_luv(REF_WHITE_D65), [100.0, 0.0, 0.0], atol=1e-10)
    np.testing.assert_allclose(CSE.xyz_to_luv(np.zeros(3)), [0.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_array_equal(CSE.luv_to_xyz(np.array([0.0, 40.0, -40.0])), [0.0, 0.0, 0.0])


def test_luv_round_trip(rgb_batch):
    xyz = CSE.srgb_to_xyz(rgb_batch)
    np.testing.assert_allclose(CSE.luv_to_xyz(CSE.xyz_to_luv(xyz)), xyz, atol=1e-12)
    np.testing.assert_allclose(CSE.luv_to_xyz(CSE.xyz_to_luv(xyz, REF_WHITE_D50), REF_WHITE_D50), xyz,
                               atol=1e-12)


def test_lms_round_trip(rgb_batch):
    xyz = CSE.srgb_to_xyz(rgb_batch)
    np.testing.assert_allclose(CSE.lms_to_xyz(CSE.xyz_to_lms(xyz)), xyz, atol=1e-12)


def test_oklab_white():
    np.testing.assert_allclose(CSE.xyz_to_oklab(REF_WHITE_D65), [1.0, 0.0, 0.0], atol=1e-3)


def test_oklab_round_trip(rgb_batch):
    xyz = CSE.srgb_to_xyz(rgb_batch)
    np.testing.assert_allclose(CSE.oklab_to_xyz(CSE.xyz_to_oklab(xyz)), xyz, atol=1e-10)


# =============================================================================
# RGB CYLINDERS AND ENCODINGS
# =============================================================================

@pytest.mark.parametrize("rgb, hsv, hsl", [
    ([1.0, 0.0, 0.0], [0.0, 1.0, 1.0], [0.0, 1.0, 0.5]),
    ([0.0, 1.0, 0.0], [120.0, 1.0, 1.0], [120.0, 1.0, 0.5]),
    ([1.0, 1.0, 0.0], [60.0, 1.0, 1.0], [60.0, 1.0, 0.5]),
    ([0.5, 0.25, 0.75], [270.0, 2.0 / 3.0, 0.75], [270.0, 0.5, 0.5]),
    ([1.0, 1.0, 1.0], [0.0, 0.0, 1.0], [0.0, 0.0, 1.0]),
    ([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]),
])
def test_hexcone_values(rgb, hsv, hsl):
    np.testing.assert_allclose(CSE.rgb_to_hsv(np.array(rgb)), hsv, atol=1e-12)
    np.testing.assert_allclose(CSE.rgb_to_hsl(np.array(rgb)), hsl, atol=1e-12)


def test_hsi_values():
    np.testing.assert_allclose(CSE.rgb_to_hsi(np.array([1.0, 0.0, 0.0])), [0.0, 1.0, 1.0 / 3.0], atol=1e-9)
    np.testing.assert_allclose(CSE.rgb_to_hsi(np.array([0.0, 0.0, 1.0])), [240.0, 1.0, 1.0 / 3.0], atol=1e-9)
    np.testing.assert_allclose(CSE.rgb_to_hsi(np.array([0.4, 0.4, 0.4])), [0.0, 0.0, 0.4], atol=1e-12)


@pytest.mark.parametrize("forward, inverse", [
    (CSE.rgb_to_hsv, CSE.hsv_to_rgb),
    (CSE.rgb_to_hsl, CSE.hsl_to_rgb),
    (CSE.rgb_to_hsi, CSE.hsi_to_rgb),
    (CSE.rgb_to_yiq, CSE.yiq_to_rgb),
    (CSE.rgb_to_ycbcr, CSE.ycbcr_to_rgb),
])
def test_rgb_encoding_round_trips(rgb_batch, forward, inverse):
    np.testing.assert_allclose(inverse(forward(rgb_batch)), rgb_batch, atol=1e-10)


def test_cylinder_hues_in_range(rgb_batch):
    for forward in (CSE.rgb_to_hsv, CSE.rgb_to_hsl, CSE.rgb_to_hsi):
        h = forward(rgb_batch)[:, 0]
        assert np.all((h >= 0.0) & (h < 360.0))


def test_ycbcr_studio_range():
    np.testing.assert_allclose(CSE.rgb_to_ycbcr(np.array([1.0, 1.0, 1.0])), [235.0, 128.0, 128.0], atol=1e-9)
    np.testing.assert_allclose(CSE.rgb_to_ycbcr(np.array([0.0, 0.0, 0.0])), [16.0, 128.0, 128.0])


def test_yiq_gray_has_no_chroma():
    np.testing.assert_allclose(CSE.rgb_to_yiq(np.array([0.6, 0.6, 0.6])), [0.6, 0.0, 0.0], atol=1e-6)


# =============================================================================
# DIN99 FAMILY
# =============================================================================

def test_din99_neutral_axis():
    din = CSE.lab_to_din99(np.array([[0.0, 0.0, 0.0], [50.0, 0.0, 0.0], [100.0, 0.0, 0.0]]))
    np.testing.assert_allclose(din[:, 1:], 0.0)
    np.testing.assert_allclose(din[0, 0], 0.0)
    np.testing.assert_allclose(din[2, 0], 105.51 * np.log(1.0 + 1.58), rtol=1e-10)


@pytest.mark.parametrize("forward, inverse", [
    (CSE.lab_to_din99, CSE.din99_to_lab),
    (CSE.lab_to_din99o, CSE.din99o_to_lab),
])
def test_din99_round_trips(rgb_batch, forward, inverse):
    lab = CSE.srgb_to_lab(rgb_batch)
    np.testing.assert_allclose(inverse(forward(lab)), lab, atol=1e-9)
    np.testing.assert_allclose(inverse(forward(lab, 2.0, 0.5), 2.0, 0.5), lab, atol=1e-9)


def test_din99_weights_scale_coordinates():
    lab = np.array([60.0, 20.0, -30.0])
    base = CSE.lab_to_din99(lab)
    weighted = CSE.lab_to_din99(lab, 2.0, 1.0)
    np.testing.assert_allclose(weighted, base / 2.0)


def test_din99d_round_trip(rgb_batch):
    xyz = CSE.srgb_to_xyz(rgb_batch)
    np.testing.assert_allclose(CSE.din99d_to_xyz(CSE.xyz_to_din99d(xyz)), xyz, atol=1e-10)
    np.testing.assert_allclose(CSE.din99d_to_xyz(CSE.xyz_to_din99d(xyz, REF_WHITE_D50), REF_WHITE_D50),
                               xyz, atol=1e-10)


def test_din99d_white_is_neutral():
    din = CSE.xyz_to_din99d(REF_WHITE_D65)
    np.testing.assert_allclose(din[1:], 0.0, atol=1e-10)
    assert din[0] == pytest.approx(325.22 * np.log(1.0 + 0.36))


# =============================================================================
# STRICT MODE
# =============================================================================

def test_strict_kernels_agree(rgb_batch, strict_mode):
    strict = CSE.srgb_to_lab(rgb_batch)
    ce.set_strict_ieee(False)
    fast = CSE.srgb_to_lab(rgb_batch)
    np.testing.assert_allclose(strict, fast, atol=1e-9)


def test_strict_mode_propagates_nan(strict_mode):
    out = CSE.srgb_to_xyz(np.array([np.nan, 0.5, 0.5]))
    assert np.all(np.isnan(out))
