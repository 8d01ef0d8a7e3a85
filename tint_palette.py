# -*- coding: utf-8 -*-
"""
Tint: Converting, comparing and choosing colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Palette Construction
====================
Distinguishable color sets and most saturated colors.

Distinguishable colors:
    Greedy farthest-point selection over a discrete LCHab grid.  Each pick
    is the candidate whose distance to its nearest already chosen color is
    largest (first maximum in pool order on ties).  This maximises the
    worst-case distance one pick at a time; it is not a global optimum.
    The per-candidate nearest distance is kept in a local buffer and only
    ever decreases, so each new pick costs one 1-vs-N metric evaluation.

Most saturated color (MSC):
    The sRGB gamut boundary at an LCHuv hue.  Without a lightness the cusp
    lies on one of the six cube edges joining a primary to a secondary and
    is found in closed form; with a lightness the chroma axis is searched
    with ``scipy.optimize.brentq``.
"""

from __future__ import annotations

import logging
import warnings
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
from scipy.optimize import brentq

from tint_colorengine import ArrayFloat, ColorSpaceEngine as CSE, M_SRGB_TO_XYZ_T
from tint_colortypes import AlphaColor, Color, ColorTransform, LCHab, LCHuv, RGB, XYZ
from tint_convert import WP_D65, convert, convert_array
from tint_difference import DE_2000, DifferenceMetric, delta_e
from tint_utilities import normalize_hue

__all__ = [
    "distinguishable_colors",
    "MSC",
]

logger = logging.getLogger(__name__)


# =============================================================================
# 1. DISTINGUISHABLE COLORS
# =============================================================================

def _seed_list(seed: Union[Color, AlphaColor, Iterable[Union[Color, AlphaColor]], None]) -> List[RGB]:
    if seed is None:
        return []
    if isinstance(seed, (Color, AlphaColor)):
        seed = [seed]
    out = []
    for s in seed:
        if isinstance(s, AlphaColor):
            s = s.color
        out.append(convert(RGB, s))
    return out


def _working_values(rgb: ArrayFloat, transform: Optional[ColorTransform],
                    metric: DifferenceMetric) -> ArrayFloat:
    """RGB rows -> (transformed) rows in the metric's working space."""
    if transform is None:
        return convert_array(RGB, metric.space, rgb)
    rows = [convert(metric.space, transform(RGB(*row))).to_array() for row in rgb.tolist()]
    return np.asarray(rows, dtype=np.float64).reshape(-1, 3)


def _candidate_pool(lchoices: ArrayFloat, cchoices: ArrayFloat, hchoices: ArrayFloat) -> ArrayFloat:
    """
    In-gamut sRGB rows for the LCHab grid, ordered hue-major, lightness
    fastest; the first candidate is L = C = H = grid start (black by default).
    """
    hh, cc, ll = np.meshgrid(hchoices, cchoices, lchoices, indexing="ij")
    lch = np.column_stack([ll.ravel(), cc.ravel(), hh.ravel()])
    xyz = convert_array(LCHab, XYZ, lch)
    return np.clip(CSE._xyz_to_srgb_raw(xyz, clip=True), 0.0, 1.0)


def _grid(values: Optional[Sequence[float]], start: float, stop: float, num: int, name: str) -> ArrayFloat:
    if values is None:
        return np.linspace(start, stop, num)
    arr = np.asarray(values, dtype=np.float64).ravel()
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    return arr


def distinguishable_colors(n: int,
                           seed: Union[Color, AlphaColor, Iterable[Union[Color, AlphaColor]], None] = (),
                           *,
                           lchoices: Optional[Sequence[float]] = None,
                           cchoices: Optional[Sequence[float]] = None,
                           hchoices: Optional[Sequence[float]] = None,
                           transform: Optional[ColorTransform] = None,
                           dropseed: bool = False,
                           metric: DifferenceMetric = DE_2000()) -> List[RGB]:
    """
    Picks ``n`` maximally distinguishable colors.

    Seeds are accepted unconditionally and come first.  Without seeds the
    first pool candidate (black for the default grids) starts the set.

    Args:
        n: Number of colors to return.
        seed: Color(s) the result must start with, in any space.
        lchoices: Lightness grid (default 15 values over [0, 100]).
        cchoices: Chroma grid (default 15 values over [0, 100]).
        hchoices: Hue grid (default 20 values over [0, 340]).
        transform: Applied to every color before comparison, e.g. a color
                   deficiency simulation.
        dropseed: If True, the seeds are left out and ``n`` new colors are
                  returned.
        metric: Objective of the search (default CIEDE2000).

    Returns:
        ``n`` RGB records.

    Raises:
        ValueError: If ``n`` is negative, larger than the candidate pool, or
                    the pool runs out of colors distinct from those chosen.
    """
    if int(n) != n or n < 0:
        raise ValueError(f"Number of colors must be a non-negative integer, got {n}")
    n = int(n)

    seeds = _seed_list(seed)
    if n <= len(seeds) and not dropseed:
        return seeds[:n]
    if n == 0:
        return []

    lgrid = _grid(lchoices, 0.0, 100.0, 15, "lchoices")
    cgrid = _grid(cchoices, 0.0, 100.0, 15, "cchoices")
    hgrid = _grid(hchoices, 0.0, 340.0, 20, "hchoices")

    pool = _candidate_pool(lgrid, cgrid, hgrid)
    n_picks = n if dropseed else n - len(seeds)
    if n_picks > len(pool):
        raise ValueError(
            f"Requested {n_picks} new colors but the candidate pool has only {len(pool)}; "
            f"pass finer lchoices/cchoices/hchoices"
        )
    logger.debug("distinguishable_colors: %d picks from a pool of %d (%d seeds)",
                 n_picks, len(pool), len(seeds))

    pool_t = _working_values(pool, transform, metric)

    # Distance of every candidate to its nearest chosen color
    ds = np.full(len(pool), np.inf)
    if seeds:
        seeds_t = _working_values(np.array([s.to_array() for s in seeds]), transform, metric)
        for row in seeds_t:
            ds = np.minimum(ds, delta_e(metric, row, pool_t))

    picks: List[RGB] = []
    for k in range(n_picks):
        j = int(np.argmax(ds))
        if not ds[j] > 0.0:
            raise ValueError(
                f"Candidate pool exhausted after {k} picks: every remaining candidate "
                f"matches a chosen color"
            )
        logger.debug("pick %d: candidate %d, nearest distance %.4f", k, j, ds[j])
        picks.append(RGB.from_array(pool[j]))
        ds = np.minimum(ds, delta_e(metric, pool_t[j], pool_t))

    return picks if dropseed else seeds + picks


# =============================================================================
# 2. MOST SATURATED COLOR
# =============================================================================

# Primaries and secondaries in order of increasing LCHuv hue
_CUBE_CORNERS: ArrayFloat = np.array([
    [1.0, 0.0, 0.0],  # red
    [1.0, 1.0, 0.0],  # yellow
    [0.0, 1.0, 0.0],  # green
    [0.0, 1.0, 1.0],  # cyan
    [0.0, 0.0, 1.0],  # blue
    [1.0, 0.0, 1.0],  # magenta
], dtype=np.float64)

_WHITE: ArrayFloat = WP_D65.to_array()
_CORNER_HUES: ArrayFloat = convert_array(RGB, LCHuv, _CUBE_CORNERS)[:, 2]


def _cusp_edge(h: float) -> Tuple[ArrayFloat, ArrayFloat]:
    """Linear RGB endpoints of the cube edge whose hue range holds ``h``."""
    n = len(_CUBE_CORNERS)
    for i in range(n):
        lo = _CORNER_HUES[i]
        span = (_CORNER_HUES[(i + 1) % n] - lo) % 360.0
        if (h - lo) % 360.0 <= span:
            return _CUBE_CORNERS[i], _CUBE_CORNERS[(i + 1) % n]
    raise ValueError(f"Hue {h} not covered by the sRGB cube edges")


def _msc_cusp(h: float) -> LCHuv:
    start, end = _cusp_edge(h)
    p = int(np.flatnonzero(start != end)[0])   # varying channel
    t = int(np.flatnonzero((start == 1.0) & (end == 1.0))[0])  # channel held at 1

    m = M_SRGB_TO_XYZ_T  # rows are the XYZ of each linear channel
    un, vn = CSE._white_uv_prime(_WHITE)
    alpha = -np.sin(np.deg2rad(h))
    beta = np.cos(np.deg2rad(h))
    k = alpha * un + beta * vn

    # Hue line through the white in u'v': alpha u' + beta v' = k, i.e.
    # 4 alpha X + 9 beta Y = k (X + 15 Y + 3 Z) along X = m_t + c m_p
    a1 = 4.0 * alpha * m[t, 0] + 9.0 * beta * m[t, 1]
    f1 = 4.0 * alpha * m[p, 0] + 9.0 * beta * m[p, 1]
    a2 = m[t, 0] + 15.0 * m[t, 1] + 3.0 * m[t, 2]
    f2 = m[p, 0] + 15.0 * m[p, 1] + 3.0 * m[p, 2]
    cp = float(np.clip((k * a2 - a1) / (f1 - k * f2), 0.0, 1.0))

    linear = np.zeros(3)
    linear[t] = 1.0
    linear[p] = cp
    lch = convert_array(XYZ, LCHuv, np.dot(linear, m), _WHITE)
    logger.debug("MSC cusp at h=%.3f: L=%.4f C=%.4f (edge channel %d at %.6f)",
                 h, lch[0], lch[1], p, cp)
    return LCHuv(float(lch[0]), float(lch[1]), h)


def _gamut_excess(c: float, l: float, h: float) -> float:
    """Distance of LCHuv(l, c, h) outside the linear sRGB cube (<= 0 inside)."""
    luv = CSE._from_polar_raw(np.array([[l, c, h]], dtype=np.float64))
    linear = CSE._xyz_to_linear_rgb_raw(CSE._luv_to_xyz_raw(luv, _WHITE))[0]
    return max(float(linear.max()) - 1.0, -float(linear.min()))


def MSC(h: float, l: Optional[float] = None) -> LCHuv:
    """
    Most saturated sRGB color at LCHuv hue ``h``.

    Args:
        h: Hue in degrees (any value, wrapped into [0, 360)).
        l: Optional lightness.  If given, the result is the most saturated
           in-gamut color of that lightness; values outside [0, 100] are
           clamped with a warning.

    Returns:
        The boundary color as an LCHuv record with hue ``h``.
    """
    h = normalize_hue(h)
    if l is None:
        return _msc_cusp(h)

    l = float(l)
    if not 0.0 <= l <= 100.0:
        warnings.warn(f"Lightness {l} outside [0, 100], clamped", stacklevel=2)
        l = min(100.0, max(0.0, l))
    if l <= 0.0 or l >= 100.0:
        return LCHuv(l, 0.0, h)

    # The cusp chroma is not an upper bound at every lightness near blue
    hi = max(_msc_cusp(h).c, 1.0)
    while _gamut_excess(hi, l, h) <= 0.0:
        hi *= 2.0
    c = brentq(_gamut_excess, 0.0, hi, args=(l, h), xtol=1e-10)
    return LCHuv(l, float(c), h)
