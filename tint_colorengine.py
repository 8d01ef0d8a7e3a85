# -*- coding: utf-8 -*-
"""
Tint: Converting, comparing and choosing colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Array Color Engine
==================
Batch (N, 3) transforms for every edge of the Tint conversion graph.

All non-trivial routes pass through CIE XYZ.  The typed layer in
``tint_convert`` only ever calls the ``_raw`` methods of
:class:`ColorSpaceEngine`; the public methods wrap them with
:func:`handle_shapes` so that single colors (3,) and batches (N, 3) share
one code path.

Conventions:
    - XYZ is relative (reference white has Y = 1.0).
    - sRGB components are gamma encoded and nominally in [0, 1].  Nothing is
      clamped unless ``clip=True`` is requested; out-of-gamut input runs
      through the same formulas and produces out-of-gamut output.
    - Hue is in degrees, normalised into [0, 360).  When chroma (or
      saturation) is below ``ACHROMATIC_EPS`` the hue is reported as 0.
    - xyY of a color with X + Y + Z = 0 takes the chromaticity of the
      reference white (Lindbloom convention, not mandated by CIE).

References:
    - CIE 15:2004 "Colorimetry"
    - IEC 61966-2-1:1999 (sRGB Standard)
    - DIN 6176:2001 (DIN99 / DIN99o)
    - Cui, Luo, Rigg, Roesler, Witt (2002). "Uniform colour spaces based on
      the DIN99 colour-difference formula" (DIN99d).
    - Moroney et al. (2002). "The CIECAM02 color appearance model" (CAT02).
    - Ottosson, B. (2020). "A perceptual color space for image processing".
"""

import functools
import numpy as np
from numba import njit, float64
from typing import Final, TypeAlias, Callable, Dict, Tuple, Any

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Constants ---
    "REF_WHITE_D65",
    "REF_WHITE_D50",
    "LAB_EPSILON",
    "LAB_KAPPA",
    "C25_7",
    "DEG2RAD",
    "RAD2DEG",
    "ACHROMATIC_EPS",

    # --- Configuration ---
    "set_strict_ieee",

    # --- Matrices ---
    "M_SRGB_TO_XYZ_T",
    "M_XYZ_TO_SRGB_T",
    "M_CAT02_T",
    "M_CAT02_INV_T",
    "M_BRADFORD_T",
    "M_BRADFORD_INV_T",
    "M1_XYZ_TO_LMS_OKLAB_T",
    "M2_LMS_TO_LAB_OKLAB_T",
    "M_RGB_TO_YIQ_T",
    "M_RGB_TO_YCBCR_T",

    # --- DIN99 family parameter sets ---
    "DIN99_PARAMS",
    "DIN99O_PARAMS",
    "DIN99D_PARAMS",

    # --- Decorators ---
    "handle_shapes",

    # --- Classes ---
    "ColorSpaceEngine",
]

# --- Type Aliases ---
# Kernels compile to float64; handle_shapes casts everything else on entry.
ArrayFloat: TypeAlias = np.typing.NDArray[np.floating]

# --- Constants & Pre-Transposed Matrices ---

# Standard Illuminants (Y=1.0)
# D65: Average daylight (approx 6500K), the sRGB white.
REF_WHITE_D65: Final[ArrayFloat] = np.array([0.95047, 1.00000, 1.08883], dtype=np.float64)
# D50: Horizon daylight (approx 5000K), standard for printing (ICC)
REF_WHITE_D50: Final[ArrayFloat] = np.array([0.96422, 1.00000, 0.82521], dtype=np.float64)

# sRGB primaries (IEC 61966-2-1).  The inverse is derived rather than typed
# in so that RGB -> XYZ -> RGB closes to machine precision.
# Matrices are stored transposed because colors are row vectors: xyz = rgb @ M.T
_M_SRGB_TO_XYZ_BASE = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041]
], dtype=np.float64)
M_SRGB_TO_XYZ_T: Final[ArrayFloat] = _M_SRGB_TO_XYZ_BASE.T.copy()
M_XYZ_TO_SRGB_T: Final[ArrayFloat] = np.linalg.inv(_M_SRGB_TO_XYZ_BASE).T.copy()

# CAT02 cone response (CIECAM02).  Defines the LMS space of this engine.
_M_CAT02 = np.array([
    [ 0.7328, 0.4296, -0.1624],
    [-0.7036, 1.6975,  0.0061],
    [ 0.0030, 0.0136,  0.9834]
], dtype=np.float64)
M_CAT02_T: Final[ArrayFloat] = _M_CAT02.T.copy()
M_CAT02_INV_T: Final[ArrayFloat] = np.linalg.inv(_M_CAT02).T.copy()

# Bradford "sharpened" cone response, alternative adaptation basis.
_M_BRADFORD = np.array([
    [ 0.8951000,  0.2664000, -0.1614000],
    [-0.7502000,  1.7135000,  0.0367000],
    [ 0.0389000, -0.0685000,  1.0296000]
], dtype=np.float64)
M_BRADFORD_T: Final[ArrayFloat] = _M_BRADFORD.T.copy()
M_BRADFORD_INV_T: Final[ArrayFloat] = np.linalg.inv(_M_BRADFORD).T.copy()

# Oklab (XYZ oriented, D65).
# M1: XYZ to cone response, M2: cube-rooted cone response to Lab.
_M1_XYZ_TO_LMS_OKLAB = np.array([
    [0.8189330101, 0.3618667424, -0.1288597137],
    [0.0329845436, 0.9293118715,  0.0361456387],
    [0.0482003018, 0.2643662691,  0.6338517070]
], dtype=np.float64)
M1_XYZ_TO_LMS_OKLAB_T: Final[ArrayFloat] = _M1_XYZ_TO_LMS_OKLAB.T.copy()
M1_LMS_TO_XYZ_OKLAB_T: Final[ArrayFloat] = np.linalg.inv(_M1_XYZ_TO_LMS_OKLAB).T.copy()

_M2_LMS_TO_LAB_OKLAB = np.array([
    [0.2104542553,  0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050,  0.4505937099],
    [0.0259040371,  0.7827717662, -0.8086757660]
], dtype=np.float64)
M2_LMS_TO_LAB_OKLAB_T: Final[ArrayFloat] = _M2_LMS_TO_LAB_OKLAB.T.copy()
M2_LAB_TO_LMS_OKLAB_T: Final[ArrayFloat] = np.linalg.inv(_M2_LMS_TO_LAB_OKLAB).T.copy()

# NTSC YIQ, applied to gamma-encoded RGB.
_M_RGB_TO_YIQ = np.array([
    [0.299,     0.587,     0.114],
    [0.595716, -0.274453, -0.321263],
    [0.211456, -0.522591,  0.311135]
], dtype=np.float64)
M_RGB_TO_YIQ_T: Final[ArrayFloat] = _M_RGB_TO_YIQ.T.copy()
M_YIQ_TO_RGB_T: Final[ArrayFloat] = np.linalg.inv(_M_RGB_TO_YIQ).T.copy()

# ITU-R BT.601 YCbCr with 8-bit studio offsets.
_M_RGB_TO_YCBCR = np.array([
    [ 65.481, 128.553,  24.966],
    [-37.797, -74.203, 112.000],
    [112.000, -93.786, -18.214]
], dtype=np.float64)
M_RGB_TO_YCBCR_T: Final[ArrayFloat] = _M_RGB_TO_YCBCR.T.copy()
M_YCBCR_TO_RGB_T: Final[ArrayFloat] = np.linalg.inv(_M_RGB_TO_YCBCR).T.copy()
_YCBCR_OFFSET: Final[ArrayFloat] = np.array([16.0, 128.0, 128.0], dtype=np.float64)

# --- Exact Rational Math Constants ---
# CIE 1976: delta = 6/29 is where f(t) switches from cube root to linear.
_LAB_DELTA: Final[float] = 6.0 / 29.0
LAB_EPSILON: Final[float] = _LAB_DELTA * _LAB_DELTA * _LAB_DELTA  # ~0.008856
LAB_KAPPA: Final[float]   = (116.0 * 29.0 * 29.0) / (3.0 * 6.0 * 6.0) # ~903.296

C25_7: Final[float]          = 25.0**7
DEG2RAD: Final[float]        = np.pi / 180.0
RAD2DEG: Final[float]        = 180.0 / np.pi
ACHROMATIC_EPS: Final[float] = 1e-12

# DIN99 family, one tuple per space:
# (l_scale, l_coef, rotation_deg, f_scale, c_div, c_coef, hue_offset_deg)
#   L99 = l_scale * ln(1 + l_coef * L) / kE
#   e   = a cos(rot) + b sin(rot),  f = f_scale * (b cos(rot) - a sin(rot))
#   C99 = ln(1 + c_coef * hypot(e, f)) / (c_div * kCH * kE)
#   h99 = atan2(f, e) + hue_offset
DIN99_PARAMS: Final[Tuple[float, ...]]  = (105.51, 0.0158, 16.0, 0.70, 0.045, 0.045, 0.0)
DIN99O_PARAMS: Final[Tuple[float, ...]] = (303.67, 0.0039, 26.0, 0.83, 0.0435, 0.075, 26.0)
DIN99D_PARAMS: Final[Tuple[float, ...]] = (325.22, 0.0036, 50.0, 1.14, 1.0 / 22.5, 0.06, 50.0)

# DIN99d tristimulus correction: X' = 1.12 X - 0.12 Z
_DIN99D_X_GAIN: Final[float] = 1.12
_DIN99D_Z_LEAK: Final[float] = 0.12


# --- Runtime Configuration ---
# When True, the element-wise transfer kernels (sRGB OETF/EOTF, Lab f and
# f^-1) run with fastmath=False, preserving strict IEEE 754 semantics
# (inf / NaN propagation, no FP reassociation).
#
#     import tint_colorengine as ce
#     ce.set_strict_ieee(True)   # strict mode
#     ce.set_strict_ieee(False)  # back to fast mode (default)
_STRICT_IEEE: bool = False

def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between fast (default) and strict IEEE 754 transfer kernels.

    The strict variants are compiled lazily on first use and are not cached
    to disk.

    Args:
        enabled: If True, use strict IEEE mode.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)


# =============================================================================
# 1. ROBUST DECORATORS
# =============================================================================

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to contiguous float64 (N, 3).

    Args:
        func: The function to decorate.

    Returns:
        The wrapped function with shape handling.
        - If input is (3,), returns (3,)
        - If input is (N, 3), returns (N, 3)
    """
    @functools.wraps(func)
    def wrapper(arr: ArrayFloat, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr), dtype=np.float64)

        if arr_in.ndim != 2 or arr_in.shape[-1] != 3:
            raise ValueError(f"Expected shape (3,) or (N, 3), got {arr.shape}")

        res = func(arr_in, *args, **kwargs)

        if arr.ndim == 1:
            return res[0]
        return res
    return wrapper


# =============================================================================
# 2. ELEMENT-WISE TRANSFER FUNCTIONS (fast / strict variants)
# =============================================================================
# Each function below is compiled twice: once with fastmath=True (cached, the
# default) and once with fastmath=False for strict IEEE mode.  The loops use
# .ravel() views instead of np.where to avoid allocating boolean masks.

def _srgb_oetf(linear: ArrayFloat) -> ArrayFloat:
    """sRGB OETF (gamma encoding), IEC 61966-2-1."""
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()
    for i in range(linear.size):
        v = linear_flat[i]
        if v <= 0.0031308:
            out_flat[i] = 12.92 * v
        else:
            out_flat[i] = 1.055 * (v ** (1.0 / 2.4)) - 0.055
    return out

def _srgb_eotf(srgb: ArrayFloat) -> ArrayFloat:
    """sRGB EOTF (linearisation), IEC 61966-2-1."""
    out = np.empty_like(srgb)
    srgb_flat = srgb.ravel()
    out_flat = out.ravel()
    for i in range(srgb.size):
        v = srgb_flat[i]
        if v <= 0.04045:
            out_flat[i] = v / 12.92
        else:
            out_flat[i] = ((v + 0.055) / 1.055) ** 2.4
    return out

def _lab_f(t: ArrayFloat) -> ArrayFloat:
    """
    CIELAB f(t): cube root above (6/29)^3, linear segment below it.
    """
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()
    for i in range(t.size):
        v = t_flat[i]
        if v > LAB_EPSILON:
            out_flat[i] = v ** (1.0 / 3.0)
        else:
            out_flat[i] = (LAB_KAPPA * v + 16.0) / 116.0
    return out

def _lab_f_inv(t: ArrayFloat) -> ArrayFloat:
    """
    Inverse of CIELAB f(t).

    Uses (116*t - 16)/kappa rather than (t - 16/116)/(kappa/116) to keep
    rounding low next to the threshold.
    """
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()
    for i in range(t.size):
        v = t_flat[i]
        if v > _LAB_DELTA:
            out_flat[i] = v * v * v
        else:
            out_flat[i] = (116.0 * v - 16.0) / LAB_KAPPA
    return out


_TRANSFER_FUNCTIONS: Dict[str, Callable[[ArrayFloat], ArrayFloat]] = {
    "srgb_oetf": _srgb_oetf,
    "srgb_eotf": _srgb_eotf,
    "lab_f": _lab_f,
    "lab_f_inv": _lab_f_inv,
}
_FAST_KERNELS: Dict[str, Callable[[ArrayFloat], ArrayFloat]] = {
    name: njit(cache=True, fastmath=True)(fn) for name, fn in _TRANSFER_FUNCTIONS.items()
}
_STRICT_KERNELS: Dict[str, Callable[[ArrayFloat], ArrayFloat]] = {
    name: njit(fastmath=False)(fn) for name, fn in _TRANSFER_FUNCTIONS.items()
}

def _transfer(name: str, arr: ArrayFloat) -> ArrayFloat:
    """Dispatch a transfer function to the fast or strict kernel."""
    table = _STRICT_KERNELS if _STRICT_IEEE else _FAST_KERNELS
    return table[name](np.ascontiguousarray(arr, dtype=np.float64))


# =============================================================================
# 3. LOW-LEVEL MATH KERNELS (Numba Optimized)
# =============================================================================
# NOTE: fastmath=True allows reassociation and relaxed IEEE compliance.
# Results may differ from strict reference implementations in the last ulp.

@njit(cache=True, fastmath=True)
def _xyz_to_uv_prime(xyz_arr: ArrayFloat) -> ArrayFloat:
    """
    CIE 1976 u', v' chromaticity from XYZ.

    Formulas:
        u' = 4X / (X + 15Y + 3Z)
        v' = 9Y / (X + 15Y + 3Z)
    """
    out = np.zeros((xyz_arr.shape[0], 2), dtype=np.float64)
    X = xyz_arr[:, 0]
    Y = xyz_arr[:, 1]
    Z = xyz_arr[:, 2]

    denom = X + 15.0 * Y + 3.0 * Z

    for i in range(denom.shape[0]):
        d = denom[i]
        # Black returns (0, 0)
        if abs(d) > 1e-12:
            inv_d = 1.0 / d
            out[i, 0] = 4.0 * X[i] * inv_d
            out[i, 1] = 9.0 * Y[i] * inv_d
    return out

@njit(float64(float64, float64), cache=True, fastmath=True)
def _hue_degrees(y: float, x: float) -> float:
    """atan2 in degrees, folded into [0, 360)."""
    h = np.arctan2(y, x) * RAD2DEG
    if h < 0.0:
        h += 360.0
    if h >= 360.0:
        h -= 360.0
    return h

@njit(cache=True, fastmath=True)
def _cartesian_to_polar_kernel(arr: ArrayFloat) -> ArrayFloat:
    """
    (L, a, b) -> (L, C, h) for any opponent space (Lab, Luv, Oklab).

    Achromatic rows (C < ACHROMATIC_EPS) get h = 0.
    """
    n = arr.shape[0]
    out = np.empty_like(arr)

    for i in range(n):
        L, a, b = arr[i, 0], arr[i, 1], arr[i, 2]
        C = np.hypot(a, b)
        if C < ACHROMATIC_EPS:
            h = 0.0
        else:
            h = _hue_degrees(b, a)
        out[i, 0], out[i, 1], out[i, 2] = L, C, h
    return out

@njit(cache=True, fastmath=True)
def _polar_to_cartesian_kernel(arr: ArrayFloat) -> ArrayFloat:
    """(L, C, h) -> (L, a, b)."""
    n = arr.shape[0]
    out = np.empty_like(arr)

    for i in range(n):
        L, C, h_deg = arr[i, 0], arr[i, 1], arr[i, 2]
        h_rad = h_deg * DEG2RAD
        out[i, 0] = L
        out[i, 1] = C * np.cos(h_rad)
        out[i, 2] = C * np.sin(h_rad)
    return out

@njit(float64(float64, float64, float64, float64, float64), cache=True, fastmath=True)
def _hexcone_hue(r: float, g: float, b: float, cmax: float, delta: float) -> float:
    """Shared HSV/HSL hue of an RGB triple, degrees in [0, 360)."""
    if delta < ACHROMATIC_EPS:
        return 0.0
    if cmax == r:
        h = 60.0 * (((g - b) / delta) % 6.0)
    elif cmax == g:
        h = 60.0 * ((b - r) / delta + 2.0)
    else:
        h = 60.0 * ((r - g) / delta + 4.0)
    if h >= 360.0:
        h -= 360.0
    return h

@njit(cache=True, fastmath=True)
def _hexcone_rgb(h: float, c: float, m: float) -> Tuple[float, float, float]:
    """Inverse hexcone: hue, chroma and offset back to an RGB triple."""
    hp = (h % 360.0) / 60.0
    x = c * (1.0 - abs(hp % 2.0 - 1.0))
    sector = int(hp)
    if sector == 0:
        r, g, b = c, x, 0.0
    elif sector == 1:
        r, g, b = x, c, 0.0
    elif sector == 2:
        r, g, b = 0.0, c, x
    elif sector == 3:
        r, g, b = 0.0, x, c
    elif sector == 4:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x
    return r + m, g + m, b + m

@njit(cache=True, fastmath=True)
def _rgb_to_hsv_kernel(rgb: ArrayFloat) -> ArrayFloat:
    n = rgb.shape[0]
    out = np.empty_like(rgb)
    for i in range(n):
        r, g, b = rgb[i, 0], rgb[i, 1], rgb[i, 2]
        cmax = max(r, g, b)
        delta = cmax - min(r, g, b)
        out[i, 0] = _hexcone_hue(r, g, b, cmax, delta)
        out[i, 1] = delta / cmax if cmax > 0.0 else 0.0
        out[i, 2] = cmax
    return out

@njit(cache=True, fastmath=True)
def _hsv_to_rgb_kernel(hsv: ArrayFloat) -> ArrayFloat:
    n = hsv.shape[0]
    out = np.empty_like(hsv)
    for i in range(n):
        h, s, v = hsv[i, 0], hsv[i, 1], hsv[i, 2]
        c = v * s
        out[i, 0], out[i, 1], out[i, 2] = _hexcone_rgb(h, c, v - c)
    return out

@njit(cache=True, fastmath=True)
def _rgb_to_hsl_kernel(rgb: ArrayFloat) -> ArrayFloat:
    n = rgb.shape[0]
    out = np.empty_like(rgb)
    for i in range(n):
        r, g, b = rgb[i, 0], rgb[i, 1], rgb[i, 2]
        cmax = max(r, g, b)
        cmin = min(r, g, b)
        delta = cmax - cmin
        light = 0.5 * (cmax + cmin)
        denom = 1.0 - abs(2.0 * light - 1.0)
        out[i, 0] = _hexcone_hue(r, g, b, cmax, delta)
        if delta < ACHROMATIC_EPS or abs(denom) < ACHROMATIC_EPS:
            out[i, 1] = 0.0
        else:
            out[i, 1] = delta / denom
        out[i, 2] = light
    return out

@njit(cache=True, fastmath=True)
def _hsl_to_rgb_kernel(hsl: ArrayFloat) -> ArrayFloat:
    n = hsl.shape[0]
    out = np.empty_like(hsl)
    for i in range(n):
        h, s, light = hsl[i, 0], hsl[i, 1], hsl[i, 2]
        c = (1.0 - abs(2.0 * light - 1.0)) * s
        out[i, 0], out[i, 1], out[i, 2] = _hexcone_rgb(h, c, light - 0.5 * c)
    return out

@njit(cache=True, fastmath=True)
def _rgb_to_hsi_kernel(rgb: ArrayFloat) -> ArrayFloat:
    """
    RGB -> HSI (Gonzalez & Woods).

    H = theta if B <= G else 360 - theta, with
    cos(theta) = ((R-G) + (R-B)) / (2 sqrt((R-G)^2 + (R-B)(G-B))).
    """
    n = rgb.shape[0]
    out = np.empty_like(rgb)
    for i in range(n):
        r, g, b = rgb[i, 0], rgb[i, 1], rgb[i, 2]
        intensity = (r + g + b) / 3.0
        cmin = min(r, g, b)
        den = np.sqrt((r - g) * (r - g) + (r - b) * (g - b))
        if den < ACHROMATIC_EPS:
            h = 0.0
        else:
            cos_t = 0.5 * ((r - g) + (r - b)) / den
            cos_t = min(1.0, max(-1.0, cos_t))
            h = np.arccos(cos_t) * RAD2DEG
            if b > g:
                h = 360.0 - h
            if h >= 360.0:
                h -= 360.0
        out[i, 0] = h
        out[i, 1] = 1.0 - cmin / intensity if intensity > 0.0 else 0.0
        out[i, 2] = intensity
    return out

@njit(cache=True, fastmath=True)
def _hsi_to_rgb_kernel(hsi: ArrayFloat) -> ArrayFloat:
    n = hsi.shape[0]
    out = np.empty_like(hsi)
    for i in range(n):
        h, s, intensity = hsi[i, 0] % 360.0, hsi[i, 1], hsi[i, 2]
        low = intensity * (1.0 - s)
        sector = int(h // 120.0)
        hh = (h - 120.0 * sector) * DEG2RAD
        high = intensity * (1.0 + s * np.cos(hh) / np.cos(np.pi / 3.0 - hh))
        mid = 3.0 * intensity - (low + high)
        if sector == 0:
            r, g, b = high, mid, low
        elif sector == 1:
            r, g, b = low, high, mid
        else:
            r, g, b = mid, low, high
        out[i, 0], out[i, 1], out[i, 2] = r, g, b
    return out

@njit(cache=True, fastmath=True)
def _lab_to_din99_family_kernel(lab: ArrayFloat, l_scale: float, l_coef: float,
                                rot_deg: float, f_scale: float, c_div: float,
                                c_coef: float, hue_offset_deg: float,
                                kE: float, kCH: float) -> ArrayFloat:
    """
    CIELAB -> DIN99 / DIN99o / DIN99d (the latter from its corrected Lab).

    The a, b plane is rotated by ``rot_deg``, the new yellow-blue axis is
    compressed by ``f_scale``, chroma is log-compressed and the hue is turned
    back by ``hue_offset_deg``.
    """
    n = lab.shape[0]
    out = np.empty_like(lab)

    cos_r = np.cos(rot_deg * DEG2RAD)
    sin_r = np.sin(rot_deg * DEG2RAD)
    offset = hue_offset_deg * DEG2RAD

    for i in range(n):
        L, a, b = lab[i, 0], lab[i, 1], lab[i, 2]
        out[i, 0] = l_scale * np.log(1.0 + l_coef * L) / kE
        e = a * cos_r + b * sin_r
        f = f_scale * (b * cos_r - a * sin_r)
        G = np.hypot(e, f)
        if G < ACHROMATIC_EPS:
            out[i, 1] = 0.0
            out[i, 2] = 0.0
        else:
            C99 = np.log(1.0 + c_coef * G) / (c_div * kCH * kE)
            h99 = np.arctan2(f, e) + offset
            out[i, 1] = C99 * np.cos(h99)
            out[i, 2] = C99 * np.sin(h99)
    return out

@njit(cache=True, fastmath=True)
def _din99_family_to_lab_kernel(din: ArrayFloat, l_scale: float, l_coef: float,
                                rot_deg: float, f_scale: float, c_div: float,
                                c_coef: float, hue_offset_deg: float,
                                kE: float, kCH: float) -> ArrayFloat:
    """Inverse of :func:`_lab_to_din99_family_kernel`."""
    n = din.shape[0]
    out = np.empty_like(din)

    cos_r = np.cos(rot_deg * DEG2RAD)
    sin_r = np.sin(rot_deg * DEG2RAD)
    offset = hue_offset_deg * DEG2RAD

    for i in range(n):
        L99, a99, b99 = din[i, 0], din[i, 1], din[i, 2]
        out[i, 0] = (np.exp(L99 * kE / l_scale) - 1.0) / l_coef
        C99 = np.hypot(a99, b99)
        if C99 < ACHROMATIC_EPS:
            out[i, 1] = 0.0
            out[i, 2] = 0.0
        else:
            h = np.arctan2(b99, a99) - offset
            G = (np.exp(c_div * kCH * kE * C99) - 1.0) / c_coef
            e = G * np.cos(h)
            f = G * np.sin(h) / f_scale
            out[i, 1] = e * cos_r - f * sin_r
            out[i, 2] = e * sin_r + f * cos_r
    return out


# =============================================================================
# 4. COLOR SPACE ENGINE
# =============================================================================

class ColorSpaceEngine:
    """Static utility class for batch color space transformations.

    Architecture Note:
        Every transform exists as an internal ``_raw`` method that assumes
        validated contiguous (N, 3) float64 input, plus a public
        ``@handle_shapes`` wrapper.  Multi-stage pipelines and the typed
        conversion graph call the ``_raw`` variants to skip repeated shape
        checks.
    """

    # =====================================================================
    #  Internal _raw fast-path methods  (assume validated (N, 3) float64)
    # =====================================================================

    # --- sRGB ---
    @staticmethod
    def _srgb_to_xyz_raw(rgb_array: ArrayFloat, clip: bool = False) -> ArrayFloat:
        if clip:
            rgb_array = np.clip(rgb_array, 0.0, 1.0)
        linear = _transfer("srgb_eotf", rgb_array)
        return np.dot(linear, M_SRGB_TO_XYZ_T)

    @staticmethod
    def _xyz_to_srgb_raw(xyz_array: ArrayFloat, clip: bool = False) -> ArrayFloat:
        linear = np.dot(xyz_array, M_XYZ_TO_SRGB_T)
        if clip:
            linear = np.clip(linear, 0.0, 1.0)
        return _transfer("srgb_oetf", linear)

    @staticmethod
    def _xyz_to_linear_rgb_raw(xyz_array: ArrayFloat) -> ArrayFloat:
        """XYZ -> linear-light sRGB, used for gamut tests."""
        return np.dot(xyz_array, M_XYZ_TO_SRGB_T)

    # --- RGB cylinders and opponent encodings ---
    @staticmethod
    def _rgb_to_hsv_raw(rgb_array: ArrayFloat) -> ArrayFloat:
        return _rgb_to_hsv_kernel(rgb_array)

    @staticmethod
    def _hsv_to_rgb_raw(hsv_array: ArrayFloat) -> ArrayFloat:
        return _hsv_to_rgb_kernel(hsv_array)

    @staticmethod
    def _rgb_to_hsl_raw(rgb_array: ArrayFloat) -> ArrayFloat:
        return _rgb_to_hsl_kernel(rgb_array)

    @staticmethod
    def _hsl_to_rgb_raw(hsl_array: ArrayFloat) -> ArrayFloat:
        return _hsl_to_rgb_kernel(hsl_array)

    @staticmethod
    def _rgb_to_hsi_raw(rgb_array: ArrayFloat) -> ArrayFloat:
        return _rgb_to_hsi_kernel(rgb_array)

    @staticmethod
    def _hsi_to_rgb_raw(hsi_array: ArrayFloat) -> ArrayFloat:
        return _hsi_to_rgb_kernel(hsi_array)

    @staticmethod
    def _rgb_to_yiq_raw(rgb_array: ArrayFloat) -> ArrayFloat:
        return np.dot(rgb_array, M_RGB_TO_YIQ_T)

    @staticmethod
    def _yiq_to_rgb_raw(yiq_array: ArrayFloat) -> ArrayFloat:
        return np.dot(yiq_array, M_YIQ_TO_RGB_T)

    @staticmethod
    def _rgb_to_ycbcr_raw(rgb_array: ArrayFloat) -> ArrayFloat:
        return np.dot(rgb_array, M_RGB_TO_YCBCR_T) + _YCBCR_OFFSET

    @staticmethod
    def _ycbcr_to_rgb_raw(ycc_array: ArrayFloat) -> ArrayFloat:
        return np.dot(ycc_array - _YCBCR_OFFSET, M_YCBCR_TO_RGB_T)

    # --- xyY ---
    @staticmethod
    def _xyz_to_xyY_raw(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        sum_xyz = np.sum(xyz_array, axis=-1)
        mask = (np.abs(xyz_array[:, 1]) > 1e-12) & (np.abs(sum_xyz) > 1e-12)
        xyY = np.empty_like(xyz_array)

        if np.any(mask):
            inv_sum = 1.0 / sum_xyz[mask]
            xyY[mask, 0] = xyz_array[mask, 0] * inv_sum
            xyY[mask, 1] = xyz_array[mask, 1] * inv_sum

        # NOTE (Design Decision): with Y = 0 the chromaticity cannot be
        # recovered on the way back to XYZ. Such rows take the reference
        # white's chromaticity so the output stays NaN-free (Lindbloom
        # convention).
        white_sum = float(np.sum(illuminant))
        xyY[~mask, 0] = illuminant[0] / white_sum
        xyY[~mask, 1] = illuminant[1] / white_sum
        xyY[:, 2] = xyz_array[:, 1]
        return xyY

    @staticmethod
    def _xyY_to_xyz_raw(xyY_array: ArrayFloat) -> ArrayFloat:
        x, y, Y = xyY_array[:, 0], xyY_array[:, 1], xyY_array[:, 2]
        xyz = np.zeros_like(xyY_array)
        mask = np.abs(y) > 1e-12
        if np.any(mask):
            factor = Y[mask] / y[mask]
            xyz[mask, 0] = x[mask] * factor
            xyz[mask, 1] = Y[mask]
            xyz[mask, 2] = (1.0 - x[mask] - y[mask]) * factor
        return xyz

    # --- CIELAB ---
    @staticmethod
    def _xyz_to_lab_raw(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        f_xyz = _transfer("lab_f", xyz_array / illuminant)

        out = np.empty_like(xyz_array)
        out[:, 0] = 116.0 * f_xyz[:, 1] - 16.0
        out[:, 1] = 500.0 * (f_xyz[:, 0] - f_xyz[:, 1])
        out[:, 2] = 200.0 * (f_xyz[:, 1] - f_xyz[:, 2])
        return out

    @staticmethod
    def _lab_to_xyz_raw(lab_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        L, a, b = lab_array[:, 0], lab_array[:, 1], lab_array[:, 2]

        f = np.empty_like(lab_array)
        f[:, 1] = (L + 16.0) / 116.0
        f[:, 0] = a / 500.0 + f[:, 1]
        f[:, 2] = f[:, 1] - b / 200.0

        return _transfer("lab_f_inv", f) * illuminant

    @staticmethod
    def _to_polar_raw(arr: ArrayFloat) -> ArrayFloat:
        return _cartesian_to_polar_kernel(arr)

    @staticmethod
    def _from_polar_raw(arr: ArrayFloat) -> ArrayFloat:
        return _polar_to_cartesian_kernel(arr)

    # --- CIELUV ---
    @staticmethod
    def _white_uv_prime(illuminant: ArrayFloat) -> Tuple[float, float]:
        ill_2d = np.ascontiguousarray(np.atleast_2d(illuminant), dtype=np.float64)
        uv_prime_n = _xyz_to_uv_prime(ill_2d)
        return uv_prime_n[0, 0], uv_prime_n[0, 1]

    @staticmethod
    def _xyz_to_luv_raw(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        uv_prime = _xyz_to_uv_prime(xyz_array)
        u_n, v_n = ColorSpaceEngine._white_uv_prime(illuminant)

        f_y = _transfer("lab_f", xyz_array[:, 1] / illuminant[1])
        L = 116.0 * f_y - 16.0

        out = np.empty_like(xyz_array)
        out[:, 0] = L
        out[:, 1] = 13.0 * L * (uv_prime[:, 0] - u_n)
        out[:, 2] = 13.0 * L * (uv_prime[:, 1] - v_n)
        return out

    @staticmethod
    def _luv_to_xyz_raw(luv_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        L, u, v = luv_array[:, 0], luv_array[:, 1], luv_array[:, 2]
        u_n, v_n = ColorSpaceEngine._white_uv_prime(illuminant)

        # L = 0 is black regardless of u, v
        mask = L > 1e-12
        u_prime = np.full_like(L, u_n)
        v_prime = np.full_like(L, v_n)

        if np.any(mask):
            inv_13L = 1.0 / (13.0 * L[mask])
            u_prime[mask] = (u[mask] * inv_13L) + u_n
            v_prime[mask] = (v[mask] * inv_13L) + v_n

        Y = _transfer("lab_f_inv", (L + 16.0) / 116.0) * illuminant[1]

        X = np.zeros_like(Y)
        Z = np.zeros_like(Y)

        mask_v = (v_prime > 1e-12) & mask
        if np.any(mask_v):
            Y_valid = Y[mask_v]
            up, vp = u_prime[mask_v], v_prime[mask_v]
            inv_4vp = 1.0 / (4.0 * vp)
            X[mask_v] = Y_valid * 9.0 * up * inv_4vp
            Z[mask_v] = Y_valid * (12.0 - 3.0 * up - 20.0 * vp) * inv_4vp

        out = np.empty_like(luv_array)
        out[:, 0] = X
        out[:, 1] = np.where(mask, Y, 0.0)
        out[:, 2] = Z
        return out

    # --- LMS (CAT02) ---
    @staticmethod
    def _xyz_to_lms_raw(xyz_array: ArrayFloat) -> ArrayFloat:
        return np.dot(xyz_array, M_CAT02_T)

    @staticmethod
    def _lms_to_xyz_raw(lms_array: ArrayFloat) -> ArrayFloat:
        return np.dot(lms_array, M_CAT02_INV_T)

    # --- Oklab ---
    @staticmethod
    def _xyz_to_oklab_raw(xyz_array: ArrayFloat) -> ArrayFloat:
        lms = np.dot(xyz_array, M1_XYZ_TO_LMS_OKLAB_T)
        return np.dot(np.cbrt(lms), M2_LMS_TO_LAB_OKLAB_T)

    @staticmethod
    def _oklab_to_xyz_raw(oklab_array: ArrayFloat) -> ArrayFloat:
        lms_prime = np.dot(oklab_array, M2_LAB_TO_LMS_OKLAB_T)
        return np.dot(lms_prime * lms_prime * lms_prime, M1_LMS_TO_XYZ_OKLAB_T)

    # --- DIN99 family ---
    @staticmethod
    def _lab_to_din99_raw(lab_array: ArrayFloat, kE: float = 1.0, kCH: float = 1.0) -> ArrayFloat:
        return _lab_to_din99_family_kernel(lab_array, *DIN99_PARAMS, kE, kCH)

    @staticmethod
    def _din99_to_lab_raw(din_array: ArrayFloat, kE: float = 1.0, kCH: float = 1.0) -> ArrayFloat:
        return _din99_family_to_lab_kernel(din_array, *DIN99_PARAMS, kE, kCH)

    @staticmethod
    def _lab_to_din99o_raw(lab_array: ArrayFloat, kE: float = 1.0, kCH: float = 1.0) -> ArrayFloat:
        return _lab_to_din99_family_kernel(lab_array, *DIN99O_PARAMS, kE, kCH)

    @staticmethod
    def _din99o_to_lab_raw(din_array: ArrayFloat, kE: float = 1.0, kCH: float = 1.0) -> ArrayFloat:
        return _din99_family_to_lab_kernel(din_array, *DIN99O_PARAMS, kE, kCH)

    @staticmethod
    def _din99d_correct(xyz_array: ArrayFloat) -> ArrayFloat:
        """X' = 1.12 X - 0.12 Z, applied to samples and white alike."""
        out = np.array(xyz_array, dtype=np.float64, copy=True)
        out[..., 0] = _DIN99D_X_GAIN * xyz_array[..., 0] - _DIN99D_Z_LEAK * xyz_array[..., 2]
        return out

    @staticmethod
    def _xyz_to_din99d_raw(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        white = ColorSpaceEngine._din99d_correct(illuminant)
        lab = ColorSpaceEngine._xyz_to_lab_raw(ColorSpaceEngine._din99d_correct(xyz_array), white)
        return _lab_to_din99_family_kernel(lab, *DIN99D_PARAMS, 1.0, 1.0)

    @staticmethod
    def _din99d_to_xyz_raw(din_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        white = ColorSpaceEngine._din99d_correct(illuminant)
        lab = _din99_family_to_lab_kernel(din_array, *DIN99D_PARAMS, 1.0, 1.0)
        xyz = ColorSpaceEngine._lab_to_xyz_raw(lab, white)
        xyz[:, 0] = (xyz[:, 0] + _DIN99D_Z_LEAK * xyz[:, 2]) / _DIN99D_X_GAIN
        return xyz

    # =====================================================================
    #  Public API  (shape-safe wrappers)
    # =====================================================================

    @staticmethod
    @handle_shapes
    def srgb_to_xyz(rgb_array: ArrayFloat, clip: bool = False) -> ArrayFloat:
        """
        Converts sRGB to XYZ (D65).

        Args:
            rgb_array: Input sRGB data, shape (N, 3) or (3,).
            clip: If True, clamps input to [0, 1] before the EOTF.  Off by
                  default so out-of-gamut values pass through unchanged.

        Returns:
            XYZ coordinates (D65 relative).
        """
        return ColorSpaceEngine._srgb_to_xyz_raw(rgb_array, clip=clip)

    @staticmethod
    @handle_shapes
    def xyz_to_srgb(xyz_array: ArrayFloat, clip: bool = False) -> ArrayFloat:
        """
        Converts XYZ (D65) to sRGB.

        Args:
            xyz_array: Input XYZ data, shape (N, 3) or (3,).
            clip: If True, clamps linear RGB to [0, 1] before gamma encoding.

        Returns:
            sRGB coordinates, gamma corrected.
        """
        return ColorSpaceEngine._xyz_to_srgb_raw(xyz_array, clip=clip)

    @staticmethod
    @handle_shapes
    def rgb_to_hsv(rgb_array: ArrayFloat) -> ArrayFloat:
        """sRGB -> HSV (hue in degrees, S and V in [0, 1])."""
        return ColorSpaceEngine._rgb_to_hsv_raw(rgb_array)

    @staticmethod
    @handle_shapes
    def hsv_to_rgb(hsv_array: ArrayFloat) -> ArrayFloat:
        """HSV -> sRGB."""
        return ColorSpaceEngine._hsv_to_rgb_raw(hsv_array)

    @staticmethod
    @handle_shapes
    def rgb_to_hsl(rgb_array: ArrayFloat) -> ArrayFloat:
        """sRGB -> HSL (hue in degrees, S and L in [0, 1])."""
        return ColorSpaceEngine._rgb_to_hsl_raw(rgb_array)

    @staticmethod
    @handle_shapes
    def hsl_to_rgb(hsl_array: ArrayFloat) -> ArrayFloat:
        """HSL -> sRGB."""
        return ColorSpaceEngine._hsl_to_rgb_raw(hsl_array)

    @staticmethod
    @handle_shapes
    def rgb_to_hsi(rgb_array: ArrayFloat) -> ArrayFloat:
        """sRGB -> HSI."""
        return ColorSpaceEngine._rgb_to_hsi_raw(rgb_array)

    @staticmethod
    @handle_shapes
    def hsi_to_rgb(hsi_array: ArrayFloat) -> ArrayFloat:
        return ColorSpaceEngine._hsi_to_rgb_raw(hsi_array)

    @staticmethod
    @handle_shapes
    def rgb_to_yiq(rgb_array: ArrayFloat) -> ArrayFloat:
        return ColorSpaceEngine._rgb_to_yiq_raw(rgb_array)

    @staticmethod
    @handle_shapes
    def yiq_to_rgb(yiq_array: ArrayFloat) -> ArrayFloat:
        return ColorSpaceEngine._yiq_to_rgb_raw(yiq_array)

    @staticmethod
    @handle_shapes
    def rgb_to_ycbcr(rgb_array: ArrayFloat) -> ArrayFloat:
        """sRGB [0..1] -> YCbCr (BT.601, Y in [16, 235])."""
        return ColorSpaceEngine._rgb_to_ycbcr_raw(rgb_array)

    @staticmethod
    @handle_shapes
    def ycbcr_to_rgb(ycc_array: ArrayFloat) -> ArrayFloat:
        return ColorSpaceEngine._ycbcr_to_rgb_raw(ycc_array)

    @staticmethod
    @handle_shapes
    def xyz_to_xyY(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        Converts XYZ to xyY (Chromaticity + Luminance).

        Standard formula:
            x = X / (X+Y+Z)
            y = Y / (X+Y+Z)
            Y = Y

        Design Decision - Black-Pixel Handling:
            When X+Y+Z = 0 the chromaticity is undefined; the chromaticity
            of ``illuminant`` is returned instead, with Y = 0.

        Args:
            xyz_array: Input XYZ data, shape (N, 3) or (3,).
            illuminant: Reference white supplying the fallback chromaticity.

        Returns:
            xyY coordinates.
        """
        return ColorSpaceEngine._xyz_to_xyY_raw(xyz_array, illuminant)

    @staticmethod
    @handle_shapes
    def xyY_to_xyz(xyY_array: ArrayFloat) -> ArrayFloat:
        """
        Converts xyY to XYZ.  Rows with y = 0 map to black.
        """
        return ColorSpaceEngine._xyY_to_xyz_raw(xyY_array)

    @staticmethod
    @handle_shapes
    def xyz_to_lab(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        Converts XYZ to CIELAB (L*a*b*).

        Args:
            xyz_array: Input XYZ data, shape (N, 3) or (3,).
            illuminant: Reference white point (default D65).

        Returns:
            Lab coordinates.
        """
        return ColorSpaceEngine._xyz_to_lab_raw(xyz_array, illuminant)

    @staticmethod
    @handle_shapes
    def lab_to_xyz(lab_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        Converts CIELAB to XYZ.

        Args:
            lab_array: Input Lab data, shape (N, 3) or (3,).
            illuminant: Reference white point (default D65).

        Returns:
            XYZ coordinates.
        """
        return ColorSpaceEngine._lab_to_xyz_raw(lab_array, illuminant)

    @staticmethod
    @handle_shapes
    def lab_to_lch(lab_array: ArrayFloat) -> ArrayFloat:
        """
        Converts an opponent space (Lab, Luv, Oklab) to its polar form.

        Returns:
            (Lightness, Chroma, Hue in degrees); hue is 0 for neutral input.
        """
        return ColorSpaceEngine._to_polar_raw(lab_array)

    @staticmethod
    @handle_shapes
    def lch_to_lab(lch_array: ArrayFloat) -> ArrayFloat:
        """Converts a polar (L, C, h) triple back to (L, a, b)."""
        return ColorSpaceEngine._from_polar_raw(lch_array)

    @staticmethod
    @handle_shapes
    def xyz_to_luv(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        Converts XYZ to CIELUV.

        Args:
            xyz_array: Input XYZ data.
            illuminant: Reference white point (default D65).

        Returns:
            Luv coordinates.
        """
        return ColorSpaceEngine._xyz_to_luv_raw(xyz_array, illuminant)

    @staticmethod
    @handle_shapes
    def luv_to_xyz(luv_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """Converts CIELUV to XYZ.  L <= 0 maps to black."""
        return ColorSpaceEngine._luv_to_xyz_raw(luv_array, illuminant)

    @staticmethod
    @handle_shapes
    def xyz_to_lms(xyz_array: ArrayFloat) -> ArrayFloat:
        """XYZ -> CAT02 cone response."""
        return ColorSpaceEngine._xyz_to_lms_raw(xyz_array)

    @staticmethod
    @handle_shapes
    def lms_to_xyz(lms_array: ArrayFloat) -> ArrayFloat:
        return ColorSpaceEngine._lms_to_xyz_raw(lms_array)

    @staticmethod
    @handle_shapes
    def xyz_to_oklab(xyz_array: ArrayFloat) -> ArrayFloat:
        """
        Converts XYZ (D65) to Oklab with the standard M1/M2 matrices.
        """
        return ColorSpaceEngine._xyz_to_oklab_raw(xyz_array)

    @staticmethod
    @handle_shapes
    def oklab_to_xyz(oklab_array: ArrayFloat) -> ArrayFloat:
        return ColorSpaceEngine._oklab_to_xyz_raw(oklab_array)

    @staticmethod
    @handle_shapes
    def lab_to_din99(lab_array: ArrayFloat, kE: float = 1.0, kCH: float = 1.0) -> ArrayFloat:
        """
        Converts CIELAB to DIN99 (DIN 6176).

        Args:
            lab_array: Input Lab data.
            kE: Lightness weight (2.0 for textiles).
            kCH: Chroma/hue weight (0.5 for textiles).
        """
        return ColorSpaceEngine._lab_to_din99_raw(lab_array, kE, kCH)

    @staticmethod
    @handle_shapes
    def din99_to_lab(din_array: ArrayFloat, kE: float = 1.0, kCH: float = 1.0) -> ArrayFloat:
        return ColorSpaceEngine._din99_to_lab_raw(din_array, kE, kCH)

    @staticmethod
    @handle_shapes
    def lab_to_din99o(lab_array: ArrayFloat, kE: float = 1.0, kCH: float = 1.0) -> ArrayFloat:
        """Converts CIELAB to DIN99o (DIN 6176:2001)."""
        return ColorSpaceEngine._lab_to_din99o_raw(lab_array, kE, kCH)

    @staticmethod
    @handle_shapes
    def din99o_to_lab(din_array: ArrayFloat, kE: float = 1.0, kCH: float = 1.0) -> ArrayFloat:
        return ColorSpaceEngine._din99o_to_lab_raw(din_array, kE, kCH)

    @staticmethod
    @handle_shapes
    def xyz_to_din99d(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        Converts XYZ to DIN99d.

        DIN99d starts from XYZ rather than Lab: X is first replaced by
        1.12 X - 0.12 Z (for the sample and the white), which approximates
        the blue-region rotation term of CIEDE2000.
        """
        return ColorSpaceEngine._xyz_to_din99d_raw(xyz_array, illuminant)

    @staticmethod
    @handle_shapes
    def din99d_to_xyz(din_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        return ColorSpaceEngine._din99d_to_xyz_raw(din_array, illuminant)

    # --- Convenience: sRGB <-> Lab ---

    @staticmethod
    @handle_shapes
    def srgb_to_lab(rgb_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """Direct conversion sRGB -> CIELAB."""
        xyz = ColorSpaceEngine._srgb_to_xyz_raw(rgb_array)
        return ColorSpaceEngine._xyz_to_lab_raw(xyz, illuminant)

    @staticmethod
    @handle_shapes
    def lab_to_srgb(lab_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65,
                    clip: bool = False) -> ArrayFloat:
        """Direct conversion CIELAB -> sRGB."""
        xyz = ColorSpaceEngine._lab_to_xyz_raw(lab_array, illuminant)
        return ColorSpaceEngine._xyz_to_srgb_raw(xyz, clip=clip)


if __name__ == "__main__":
    print("--- Tint Color Engine Validation ---")

    # 1. Round-Trip Invariant Test (sRGB -> XYZ -> Lab -> XYZ -> sRGB)
    print("1. Testing Round-Trip Stability (sRGB->Lab)...")
    rgb_in = np.random.rand(1000, 3)
    lab = ColorSpaceEngine.srgb_to_lab(rgb_in)
    rgb_out = ColorSpaceEngine.lab_to_srgb(lab)
    max_err = np.max(np.abs(rgb_in - rgb_out))
    print(f"   Max Error (sRGB->Lab->sRGB): {max_err:.2e} "
          f"{'[PASS]' if max_err < 1e-10 else '[FAIL]'}")

    # 2. Shape Safety Test
    print("2. Testing Shape Safety...")
    try:
        ColorSpaceEngine.srgb_to_xyz(np.zeros((10, 5)))
    except ValueError as e:
        print(f"   Caught expected error: {e}")

    # 3. Achromatic hue convention
    print("3. Testing Neutral Hue...")
    lch = ColorSpaceEngine.lab_to_lch(np.array([[50.0, 0.0, 0.0], [0.0, 0.0, 0.0]]))
    print(f"   Hue of grays: {lch[:, 2]} {'[PASS]' if np.all(lch[:, 2] == 0.0) else '[FAIL]'}")

    # 4. Strict IEEE toggle
    print("4. Testing Strict Kernels...")
    set_strict_ieee(True)
    strict = ColorSpaceEngine.srgb_to_xyz(rgb_in)
    set_strict_ieee(False)
    fast = ColorSpaceEngine.srgb_to_xyz(rgb_in)
    print(f"   Max |strict - fast|: {np.max(np.abs(strict - fast)):.2e}")
