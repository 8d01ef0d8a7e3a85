# -*- coding: utf-8 -*-
"""
Tint: Converting, comparing and choosing colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Difference Metrics
========================
A closed family of color difference formulas, each a frozen parameter
record, evaluated through one dispatch table.

    ===========  =============  ==========================================
    Metric       Working space  Formula
    ===========  =============  ==========================================
    DE_2000      Lab            CIEDE2000 (CIE 142-2001)
    DE_94        Lab            CIE94 (CIE 116-1995)
    DE_CMC       Lab            CMC l:c (Clarke, McDonald & Rigg 1984)
    DE_BFD       XYZ            BFD (Luo & Rigg 1987), own white point
    DE_JPC79     Lab            JPC79 (Coats J&P, McDonald 1980)
    DE_AB        Lab            CIE76, Euclidean in Lab
    DE_DIN99     Lab            Euclidean in DIN99
    DE_DIN99d    DIN99d         Euclidean in DIN99d
    DE_DIN99o    Lab            Euclidean in DIN99o
    ===========  =============  ==========================================

``colordiff(a, b, metric)`` takes color records of any space.
``delta_e(metric, arr1, arr2)`` takes (N, 3) or (3,) arrays that are
already in the metric's working space and broadcasts 1 vs N.

Every metric here is symmetric, ``colordiff(a, b) == colordiff(b, a)``.
CIE94 and CMC are published as reference-weighted formulas; with
``symmetric=True`` (the default) CIE94 weights by the geometric mean chroma
and CMC averages both orientations.  ``symmetric=False`` gives the
published value with ``a`` as the reference.

Shared sub-formulas (hue difference with wrap-around, mean hue, the CMC
chroma weight and T factor) are plain Numba functions used by several
kernels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, Final, Tuple, Type, Union

import numpy as np
from numba import njit, float64, prange

from tint_colorengine import (
    ArrayFloat, ColorSpaceEngine as CSE,
    C25_7, DEG2RAD, RAD2DEG, ACHROMATIC_EPS,
)
from tint_colortypes import AlphaColor, Color, Lab, XYZ, DIN99d
from tint_convert import WP_D65, WhitePoint, convert, white_point_array

__all__ = [
    # --- Metric variants ---
    "DifferenceMetric",
    "DE_2000",
    "DE_94",
    "DE_CMC",
    "DE_BFD",
    "DE_JPC79",
    "DE_AB",
    "DE_DIN99",
    "DE_DIN99d",
    "DE_DIN99o",

    # --- Evaluation ---
    "delta_e",
    "colordiff",
]


# =============================================================================
# 1. METRIC VARIANTS
# =============================================================================

@dataclass(frozen=True, slots=True)
class DifferenceMetric:
    """Base of the metric variants; ``space`` is the working color space."""
    space: ClassVar[Type[Color]] = Lab


@dataclass(frozen=True, slots=True)
class DE_2000(DifferenceMetric):
    """
    CIEDE2000 with parametric factors.

    Args:
        kl: Lightness weight (2.0 is common for textiles).
        kc: Chroma weight.
        kh: Hue weight.
    """
    kl: float = 1.0
    kc: float = 1.0
    kh: float = 1.0


@dataclass(frozen=True, slots=True)
class DE_94(DifferenceMetric):
    """
    CIE94.  Graphic arts defaults; textiles use kl=2, k1=0.048, k2=0.014.
    """
    kl: float = 1.0
    kc: float = 1.0
    kh: float = 1.0
    k1: float = 0.045
    k2: float = 0.015
    symmetric: bool = True


@dataclass(frozen=True, slots=True)
class DE_CMC(DifferenceMetric):
    """
    CMC l:c.  ``l=2, c=1`` is the acceptability setting, ``l=c=1`` the
    perceptibility setting.
    """
    l: float = 1.0
    c: float = 1.0
    symmetric: bool = True


@dataclass(frozen=True, slots=True)
class DE_BFD(DifferenceMetric):
    """
    BFD, computed from XYZ.  Lightness uses the BFD log formula relative to
    ``wp`` and chroma/hue come from Lab under ``wp``.
    """
    space: ClassVar[Type[Color]] = XYZ
    wp: WhitePoint = WP_D65
    kl: float = 1.0
    kc: float = 1.0


@dataclass(frozen=True, slots=True)
class DE_JPC79(DifferenceMetric):
    """JPC79; fixed parameters."""


@dataclass(frozen=True, slots=True)
class DE_AB(DifferenceMetric):
    """CIE76: Euclidean distance in Lab."""


@dataclass(frozen=True, slots=True)
class DE_DIN99(DifferenceMetric):
    """
    Euclidean distance in DIN99 (DIN 6176).

    Args:
        ke: Lightness weight (2.0 for textiles).
        kch: Chroma/hue weight (0.5 for textiles).
    """
    ke: float = 1.0
    kch: float = 1.0


@dataclass(frozen=True, slots=True)
class DE_DIN99d(DifferenceMetric):
    """Euclidean distance in DIN99d."""
    space: ClassVar[Type[Color]] = DIN99d


@dataclass(frozen=True, slots=True)
class DE_DIN99o(DifferenceMetric):
    """Euclidean distance in DIN99o."""
    ke: float = 1.0
    kch: float = 1.0


# =============================================================================
# 2. SHARED SUB-FORMULAS
# =============================================================================

@njit(float64(float64, float64, float64), cache=True, fastmath=True)
def _hue_angle(a: float, b: float, C: float) -> float:
    """Hue in degrees [0, 360); 0 for achromatic input."""
    if C < ACHROMATIC_EPS:
        return 0.0
    h = np.arctan2(b, a) * RAD2DEG
    if h < 0.0:
        h += 360.0
    return h

@njit(float64(float64, float64, float64, float64), cache=True, fastmath=True)
def _hue_diff(h1: float, h2: float, C1: float, C2: float) -> float:
    """Signed h2 - h1 wrapped into [-180, 180]; 0 if either color is neutral."""
    if C1 * C2 < ACHROMATIC_EPS:
        return 0.0
    dh = h2 - h1
    if dh > 180.0:
        dh -= 360.0
    elif dh < -180.0:
        dh += 360.0
    return dh

@njit(float64(float64, float64, float64, float64), cache=True, fastmath=True)
def _mean_hue(h1: float, h2: float, C1: float, C2: float) -> float:
    """
    Circular mean of two hues.  If either color is neutral its hue is
    meaningless and the other hue is returned (as h1 + h2, one being 0).
    """
    s = h1 + h2
    if C1 * C2 < ACHROMATIC_EPS:
        return s
    if abs(h2 - h1) > 180.0:
        if s < 360.0:
            return (s + 360.0) * 0.5
        return (s - 360.0) * 0.5
    return s * 0.5

@njit(float64(float64, float64, float64, float64), cache=True, fastmath=True)
def _delta_big_h(h1: float, h2: float, C1: float, C2: float) -> float:
    """Metric hue difference 2 sqrt(C1 C2) sin(dh / 2)."""
    dh = _hue_diff(h1, h2, C1, C2)
    return 2.0 * np.sqrt(C1 * C2) * np.sin(dh * DEG2RAD * 0.5)

@njit(float64(float64), cache=True, fastmath=True)
def _cmc_chroma_weight(C: float) -> float:
    """S_C of CMC l:c, shared by JPC79."""
    return (0.0638 * C) / (1.0 + 0.0131 * C) + 0.638

@njit(float64(float64), cache=True, fastmath=True)
def _cmc_t(h: float) -> float:
    """T factor of CMC l:c, shared by JPC79 (h in degrees)."""
    if 164.0 <= h <= 345.0:
        return 0.56 + abs(0.2 * np.cos((h + 168.0) * DEG2RAD))
    return 0.36 + abs(0.4 * np.cos((h + 35.0) * DEG2RAD))


# =============================================================================
# 3. PER-PAIR KERNELS
# =============================================================================

@njit(float64(float64, float64, float64, float64, float64, float64, float64, float64, float64), cache=True, fastmath=True)
def _delta_e_2000_single_opt(L1: float, a1: float, b1: float, L2: float, a2: float, b2: float, k_L: float, k_C: float, k_H: float) -> float:
    """Single-pixel CIEDE2000 with parametric factors."""
    C1 = np.hypot(a1, b1)
    C2 = np.hypot(a2, b2)
    C_bar = (C1 + C2) * 0.5
    C_bar_7 = C_bar**7
    G = 0.5 * (1.0 - np.sqrt(C_bar_7 / (C_bar_7 + C25_7)))
    scale = 1.0 + G
    a1_p = scale * a1
    a2_p = scale * a2
    C1_p = np.hypot(a1_p, b1)
    C2_p = np.hypot(a2_p, b2)
    h1_p = _hue_angle(a1_p, b1, C1_p)
    h2_p = _hue_angle(a2_p, b2, C2_p)
    dL_p = L2 - L1
    dC_p = C2_p - C1_p
    # Both hue terms vanish when either chroma is zero (removable singularity)
    dH_p = _delta_big_h(h1_p, h2_p, C1_p, C2_p)
    L_bar_p = (L1 + L2) * 0.5
    C_bar_p = (C1_p + C2_p) * 0.5
    h_bar_p = _mean_hue(h1_p, h2_p, C1_p, C2_p)
    T = 1.0 - 0.17 * np.cos((h_bar_p - 30.0) * DEG2RAD) + \
        0.24 * np.cos((2.0 * h_bar_p) * DEG2RAD) + \
        0.32 * np.cos((3.0 * h_bar_p + 6.0) * DEG2RAD) - \
        0.20 * np.cos((4.0 * h_bar_p - 63.0) * DEG2RAD)
    d_theta = 30.0 * np.exp(-((h_bar_p - 275.0) / 25.0)**2)
    C_bar_p_7 = C_bar_p**7
    RC = 2.0 * np.sqrt(C_bar_p_7 / (C_bar_p_7 + C25_7))
    RT = -np.sin((2.0 * d_theta) * DEG2RAD) * RC
    L_term = (L_bar_p - 50.0)**2
    SL = 1.0 + (0.015 * L_term) / np.sqrt(20.0 + L_term)
    SC = 1.0 + 0.045 * C_bar_p
    SH = 1.0 + 0.015 * C_bar_p * T
    term_L = dL_p / (k_L * SL)
    term_C = dC_p / (k_C * SC)
    term_H = dH_p / (k_H * SH)
    return np.sqrt(term_L * term_L + term_C * term_C + term_H * term_H + RT * term_C * term_H)

@njit(float64(float64, float64, float64, float64, float64, float64, float64, float64), cache=True, fastmath=True)
def _delta_e_cmc_single(L1: float, a1: float, b1: float, L2: float, a2: float, b2: float, pl: float, pc: float) -> float:
    """CMC l:c with sample 1 as the reference (standard)."""
    dL = L1 - L2
    C1 = np.hypot(a1, b1)
    C2 = np.hypot(a2, b2)
    dC = C1 - C2

    da = a1 - a2
    db = b1 - b2
    # dH^2 = da^2 + db^2 - dC^2 (can be negative due to FP noise -> clamp)
    dH_sq = da * da + db * db - dC * dC
    if dH_sq < 0.0:
        dH_sq = 0.0

    h1 = _hue_angle(a1, b1, C1)

    if L1 < 16.0:
        SL = 0.511
    else:
        SL = (0.040975 * L1) / (1.0 + 0.01765 * L1)

    SC = _cmc_chroma_weight(C1)

    C1_4 = C1**4
    F = np.sqrt(C1_4 / (C1_4 + 1900.0))
    SH = SC * (F * _cmc_t(h1) + 1.0 - F)

    term_L = dL / (pl * SL)
    term_C = dC / (pc * SC)
    return np.sqrt(term_L * term_L + term_C * term_C + dH_sq / (SH * SH))


# =============================================================================
# 4. BATCH KERNELS
# =============================================================================

@njit(cache=True, fastmath=True, parallel=True)
def _batch_delta_e_2000(lab1: ArrayFloat, lab2: ArrayFloat, k_L: float, k_C: float, k_H: float) -> ArrayFloat:
    """Vectorized and Parallelized loop for CIEDE2000."""
    n = len(lab1)
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        res[i] = _delta_e_2000_single_opt(lab1[i, 0], lab1[i, 1], lab1[i, 2], lab2[i, 0], lab2[i, 1], lab2[i, 2], k_L, k_C, k_H)
    return res

@njit(cache=True, fastmath=True, parallel=True)
def _batch_euclidean(arr1: ArrayFloat, arr2: ArrayFloat) -> ArrayFloat:
    """Row-wise Euclidean distance (CIE76 and the DIN99 family)."""
    n = len(arr1)
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        d0 = arr1[i, 0] - arr2[i, 0]
        d1 = arr1[i, 1] - arr2[i, 1]
        d2 = arr1[i, 2] - arr2[i, 2]
        res[i] = np.sqrt(d0*d0 + d1*d1 + d2*d2)
    return res

@njit(cache=True, fastmath=True, parallel=True)
def _batch_delta_e_94(lab1: ArrayFloat, lab2: ArrayFloat, k_L: float, k_C: float, k_H: float,
                      K1: float, K2: float, symmetric: bool) -> ArrayFloat:
    """
    Vectorized CIE 1994 Delta E (CIE Publication 116-1995).

    The chroma used by S_C and S_H is that of lab1 (the reference), or the
    geometric mean of both chromas when ``symmetric`` is set.
    """
    n = len(lab1)
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        L1, a1, b1 = lab1[i, 0], lab1[i, 1], lab1[i, 2]
        L2, a2, b2 = lab2[i, 0], lab2[i, 1], lab2[i, 2]

        dL = L1 - L2
        C1 = np.sqrt(a1*a1 + b1*b1)
        C2 = np.sqrt(a2*a2 + b2*b2)
        dC = C1 - C2

        da = a1 - a2
        db = b1 - b2
        dH_sq = da*da + db*db - dC*dC
        if dH_sq < 0.0:
            dH_sq = 0.0

        C_w = np.sqrt(C1 * C2) if symmetric else C1
        SC = 1.0 + K1 * C_w
        SH = 1.0 + K2 * C_w

        term_L = dL / k_L
        term_C = dC / (k_C * SC)
        term_H_sq = dH_sq / (k_H * k_H * SH * SH)

        res[i] = np.sqrt(term_L*term_L + term_C*term_C + term_H_sq)
    return res

@njit(cache=True, fastmath=True, parallel=True)
def _batch_delta_e_cmc(lab1: ArrayFloat, lab2: ArrayFloat, pl: float, pc: float, symmetric: bool) -> ArrayFloat:
    """
    Vectorized CMC l:c (1984) Delta E.

    Reference: Clarke, McDonald, Rigg (1984).
    """
    n = len(lab1)
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        L1, a1, b1 = lab1[i, 0], lab1[i, 1], lab1[i, 2]
        L2, a2, b2 = lab2[i, 0], lab2[i, 1], lab2[i, 2]
        d = _delta_e_cmc_single(L1, a1, b1, L2, a2, b2, pl, pc)
        if symmetric:
            d = 0.5 * (d + _delta_e_cmc_single(L2, a2, b2, L1, a1, b1, pl, pc))
        res[i] = d
    return res

@njit(cache=True, fastmath=True, parallel=True)
def _batch_delta_e_jpc79(lab1: ArrayFloat, lab2: ArrayFloat) -> ArrayFloat:
    """
    Vectorized JPC79 Delta E.

    Weights are evaluated at the mean lightness, chroma and hue of the pair:
    S_L = 0.08195 L / (1 + 0.01765 L), S_C from CMC, S_H = S_C * T(h).
    """
    n = len(lab1)
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        L1, a1, b1 = lab1[i, 0], lab1[i, 1], lab1[i, 2]
        L2, a2, b2 = lab2[i, 0], lab2[i, 1], lab2[i, 2]

        C1 = np.hypot(a1, b1)
        C2 = np.hypot(a2, b2)
        h1 = _hue_angle(a1, b1, C1)
        h2 = _hue_angle(a2, b2, C2)

        L_bar = 0.5 * (L1 + L2)
        C_bar = 0.5 * (C1 + C2)
        h_bar = _mean_hue(h1, h2, C1, C2)

        dL = L1 - L2
        dC = C1 - C2
        dH = _delta_big_h(h1, h2, C1, C2)

        SL = 0.08195 * L_bar / (1.0 + 0.01765 * L_bar)
        SC = _cmc_chroma_weight(C_bar)
        SH = SC * _cmc_t(h_bar)

        # S_L vanishes at zero mean lightness; that term is left unweighted
        if dL == 0.0:
            term_L = 0.0
        elif SL == 0.0:
            term_L = dL
        else:
            term_L = dL / SL
        term_C = dC / SC
        term_H = dH / SH
        res[i] = np.sqrt(term_L*term_L + term_C*term_C + term_H*term_H)
    return res

@njit(cache=True, fastmath=True, parallel=True)
def _batch_delta_e_bfd(bfd1: ArrayFloat, bfd2: ArrayFloat, k_L: float, k_C: float) -> ArrayFloat:
    """
    Vectorized BFD Delta E.

    Input rows are (L_BFD, a*, b*): BFD lightness with CIELAB chromatic
    axes.  Reference: Luo & Rigg (1987), J. Soc. Dyers Colour. 103, 86-94.
    """
    n = len(bfd1)
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        L1, a1, b1 = bfd1[i, 0], bfd1[i, 1], bfd1[i, 2]
        L2, a2, b2 = bfd2[i, 0], bfd2[i, 1], bfd2[i, 2]

        C1 = np.hypot(a1, b1)
        C2 = np.hypot(a2, b2)
        h1 = _hue_angle(a1, b1, C1)
        h2 = _hue_angle(a2, b2, C2)

        C_bar = 0.5 * (C1 + C2)
        h = _mean_hue(h1, h2, C1, C2) * DEG2RAD

        dL = L1 - L2
        dC = C1 - C2
        dH = _delta_big_h(h1, h2, C1, C2)

        C_bar_4 = C_bar**4
        G = np.sqrt(C_bar_4 / (C_bar_4 + 14000.0))
        T = 0.627 + 0.055 * np.cos(h - 254.0 * DEG2RAD) \
                  - 0.040 * np.cos(2.0 * h - 136.0 * DEG2RAD) \
                  + 0.070 * np.cos(3.0 * h - 32.0 * DEG2RAD) \
                  + 0.049 * np.cos(4.0 * h + 114.0 * DEG2RAD) \
                  - 0.015 * np.cos(5.0 * h - 103.0 * DEG2RAD)
        RH = -0.260 * np.cos(h - 308.0 * DEG2RAD) \
             - 0.379 * np.cos(2.0 * h - 160.0 * DEG2RAD) \
             - 0.636 * np.cos(3.0 * h + 254.0 * DEG2RAD) \
             + 0.226 * np.cos(4.0 * h + 140.0 * DEG2RAD) \
             - 0.194 * np.cos(5.0 * h + 280.0 * DEG2RAD)
        C_bar_6 = C_bar**6
        RC = np.sqrt(C_bar_6 / (C_bar_6 + 7e7))
        RT = RH * RC

        DC = 0.035 * C_bar / (1.0 + 0.00365 * C_bar) + 0.521
        DH = DC * (G * T + 1.0 - G)

        term_L = dL / k_L
        term_C = dC / (k_C * DC)
        term_H = dH / DH
        sq = term_L*term_L + term_C*term_C + term_H*term_H + RT * (dC / DC) * term_H
        res[i] = np.sqrt(sq) if sq > 0.0 else 0.0
    return res


# =============================================================================
# 5. DISPATCH
# =============================================================================

def _bfd_coordinates(xyz: ArrayFloat, white: ArrayFloat) -> ArrayFloat:
    """XYZ -> (L_BFD, a*, b*) under ``white``."""
    out = CSE._xyz_to_lab_raw(xyz, white)
    out[:, 0] = 54.6 * np.log10(100.0 * xyz[:, 1] / white[1] + 1.5) - 9.6
    return out

def _eval_bfd(m: DE_BFD, x1: ArrayFloat, x2: ArrayFloat) -> ArrayFloat:
    white = white_point_array(m.wp)
    return _batch_delta_e_bfd(_bfd_coordinates(x1, white), _bfd_coordinates(x2, white), m.kl, m.kc)

_EVALUATORS: Final[Dict[type, Callable[..., ArrayFloat]]] = {
    DE_2000: lambda m, a, b: _batch_delta_e_2000(a, b, m.kl, m.kc, m.kh),
    DE_94: lambda m, a, b: _batch_delta_e_94(a, b, m.kl, m.kc, m.kh, m.k1, m.k2, m.symmetric),
    DE_CMC: lambda m, a, b: _batch_delta_e_cmc(a, b, m.l, m.c, m.symmetric),
    DE_BFD: _eval_bfd,
    DE_JPC79: lambda m, a, b: _batch_delta_e_jpc79(a, b),
    DE_AB: lambda m, a, b: _batch_euclidean(a, b),
    DE_DIN99: lambda m, a, b: _batch_euclidean(CSE._lab_to_din99_raw(a, m.ke, m.kch),
                                               CSE._lab_to_din99_raw(b, m.ke, m.kch)),
    DE_DIN99d: lambda m, a, b: _batch_euclidean(a, b),
    DE_DIN99o: lambda m, a, b: _batch_euclidean(CSE._lab_to_din99o_raw(a, m.ke, m.kch),
                                                CSE._lab_to_din99o_raw(b, m.ke, m.kch)),
}


def _prepare_inputs(arr1: ArrayFloat, arr2: ArrayFloat) -> Tuple[ArrayFloat, ArrayFloat]:
    """
    Broadcasting helper.

    ``broadcast_to`` creates read-only strided views; the explicit
    ``ascontiguousarray`` materialises them into dense float64 arrays
    suitable for the prange kernels.
    """
    l1 = np.ascontiguousarray(np.atleast_2d(arr1), dtype=np.float64)
    l2 = np.ascontiguousarray(np.atleast_2d(arr2), dtype=np.float64)

    if l1.ndim != 2 or l2.ndim != 2 or l1.shape[-1] != 3 or l2.shape[-1] != 3:
        raise ValueError(f"Inputs must have shape (N, 3), got {l1.shape} and {l2.shape}")

    if l1.shape[0] != l2.shape[0]:
        if l1.shape[0] == 1: l1 = np.ascontiguousarray(np.broadcast_to(l1, l2.shape))
        elif l2.shape[0] == 1: l2 = np.ascontiguousarray(np.broadcast_to(l2, l1.shape))
        else: raise ValueError(f"Shapes {l1.shape} and {l2.shape} are not broadcastable.")
    return l1, l2


def _evaluator(metric: DifferenceMetric) -> Callable[..., ArrayFloat]:
    try:
        return _EVALUATORS[type(metric)]
    except KeyError:
        raise TypeError(f"Unknown difference metric: {metric!r}") from None


def delta_e(metric: DifferenceMetric, arr1: ArrayFloat, arr2: ArrayFloat) -> Union[float, ArrayFloat]:
    """
    Batch color difference.

    Args:
        metric: A metric variant, e.g. ``DE_2000()``.
        arr1: Colors in ``metric.space``, shape (N, 3) or (3,).
        arr2: Colors in ``metric.space``, shape (N, 3) or (3,).
              Supports broadcasting (1 vs N).

    Returns:
        Differences as an (N,) array, or a float if both inputs are (3,).
    """
    evaluate = _evaluator(metric)
    a1 = np.asarray(arr1)
    a2 = np.asarray(arr2)
    l1, l2 = _prepare_inputs(a1, a2)
    res = evaluate(metric, l1, l2)
    if a1.ndim == 1 and a2.ndim == 1:
        return float(res[0])
    return res


def colordiff(a: Union[Color, AlphaColor], b: Union[Color, AlphaColor],
              metric: DifferenceMetric = DE_2000()) -> float:
    """
    Perceptual difference between two colors.

    Both colors are converted to the metric's working space first, under
    the metric's own white point where it has one (D65 otherwise); alpha is
    ignored.

    Args:
        a: First (reference) color, any space.
        b: Second color, any space.
        metric: Metric variant (default CIEDE2000).

    Returns:
        A non-negative difference; 0 for identical colors.

    Examples:
        >>> round(colordiff(Lab(50, 2.6772, -79.7751), Lab(50, 0, -82.7485)), 4)
        2.0425
    """
    _evaluator(metric)
    if isinstance(a, AlphaColor):
        a = a.color
    if isinstance(b, AlphaColor):
        b = b.color
    wp = getattr(metric, "wp", WP_D65)
    arr1 = convert(metric.space, a, wp).to_array()
    arr2 = convert(metric.space, b, wp).to_array()
    return delta_e(metric, arr1, arr2)
