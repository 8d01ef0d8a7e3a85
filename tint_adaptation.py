# -*- coding: utf-8 -*-
"""
Tint: Converting, comparing and choosing colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Chromatic Adaptation
====================
Von Kries style white balancing in a cone response space.

A color seen under ``src_white`` is mapped to its corresponding color under
``ref_white``: XYZ is taken to LMS, each cone channel is scaled by
``ref_lms / src_lms`` and the result is taken back to XYZ.  The composite
3x3 matrix is cached per (white, white, method) triple.

Methods:
    - ``"cat02"`` (default): CIECAM02 cone response, the same basis as the
      :class:`tint_colortypes.LMS` record.
    - ``"bradford"``: Lam (1985) sharpened cone response.
"""

from __future__ import annotations

import functools
from typing import Dict, Final, Sequence, Tuple, TypeVar, Union

import numpy as np

from tint_colorengine import (
    ArrayFloat, handle_shapes,
    M_BRADFORD_T, M_BRADFORD_INV_T, M_CAT02_T, M_CAT02_INV_T,
)
from tint_colortypes import AlphaColor, Color, XYZ
from tint_convert import WhitePoint, convert, white_point_array

__all__ = [
    "ADAPTATION_METHODS",
    "ChromaticAdaptation",
    "whitebalance",
]

C = TypeVar("C", bound=Union[Color, AlphaColor])

# Forward and inverse cone response, transposed for row vectors.
ADAPTATION_METHODS: Final[Dict[str, Tuple[ArrayFloat, ArrayFloat]]] = {
    "cat02": (M_CAT02_T, M_CAT02_INV_T),
    "bradford": (M_BRADFORD_T, M_BRADFORD_INV_T),
}


def _to_hashable(obj: Union[ArrayFloat, Sequence[float]]) -> Tuple[float, ...]:
    """Helper to ensure inputs are hashable tuples for caching."""
    if isinstance(obj, np.ndarray):
        return tuple(float(v) for v in obj.ravel())
    return tuple(float(v) for v in obj)


@functools.lru_cache(maxsize=32)
def _get_cached_adaptation_matrix(src_white_tuple: Tuple[float, ...],
                                  dst_white_tuple: Tuple[float, ...],
                                  method: str) -> ArrayFloat:
    """
    Cached worker for the composite adaptation matrix.

    Derivation:
    M_composite = M_inv * Gain * M
    Since we operate on row vectors: M_comp = M.T @ Gain @ M_inv.T
    """
    m_t, m_inv_t = ADAPTATION_METHODS[method]
    src = np.array(src_white_tuple, dtype=np.float64)
    dst = np.array(dst_white_tuple, dtype=np.float64)

    # 1. White points -> cone response
    src_lms = np.dot(src, m_t)
    dst_lms = np.dot(dst, m_t)

    # 2. Von Kries gain factors
    if np.any(src_lms == 0.0) or np.any(dst_lms == 0.0):
        raise ValueError(
            f"White point has a zero cone response ({method}): "
            f"source LMS {src_lms}, reference LMS {dst_lms}"
        )
    gains = dst_lms / src_lms

    # 3. Composite matrix for row vectors
    return m_t @ np.diag(gains) @ m_inv_t


class ChromaticAdaptation:
    """Handles white point adaptation of XYZ batches."""

    @staticmethod
    def calc_transform_matrix(src_white: ArrayFloat, dst_white: ArrayFloat,
                              method: str = "cat02") -> ArrayFloat:
        """
        Computes the adaptation matrix between two white points.

        Args:
            src_white: Source white point (XYZ).
            dst_white: Destination white point (XYZ).
            method: ``"cat02"`` or ``"bradford"``.

        Returns:
            3x3 Adaptation Matrix (for row-vector multiplication).

        Raises:
            ValueError: On an unknown method or a white point with a zero
                        cone response.
        """
        key = method.lower()
        if key not in ADAPTATION_METHODS:
            raise ValueError(
                f"Unknown adaptation method '{method}'. Known: {', '.join(ADAPTATION_METHODS)}"
            )
        return _get_cached_adaptation_matrix(_to_hashable(src_white), _to_hashable(dst_white), key)

    @staticmethod
    @handle_shapes
    def adapt(xyz: ArrayFloat, src_white: ArrayFloat, dst_white: ArrayFloat,
              method: str = "cat02") -> ArrayFloat:
        """
        Adapts XYZ color(s) from the source to the destination white point.

        Args:
            xyz: Input XYZ colors, shape (N, 3) or (3,).
            src_white: Source white point.
            dst_white: Destination white point.
            method: ``"cat02"`` (default) or ``"bradford"``.

        Returns:
            Adapted XYZ colors.  Negative values are kept.
        """
        if np.array_equal(np.asarray(src_white, dtype=np.float64),
                          np.asarray(dst_white, dtype=np.float64)):
            return xyz.copy()
        M = ChromaticAdaptation.calc_transform_matrix(src_white, dst_white, method)
        return np.dot(xyz, M)


def whitebalance(color: C, src_white: WhitePoint, ref_white: WhitePoint,
                 method: str = "cat02") -> C:
    """
    White-balances a color seen under ``src_white`` to ``ref_white``.

    The color is converted to XYZ, adapted in cone space and converted back
    to its own type.  Alpha is preserved.  When both white points are equal
    the input is returned unchanged.

    Args:
        color: Any color record, optionally alpha-wrapped.
        src_white: White point the color was observed under.
        ref_white: White point to adapt to.
        method: ``"cat02"`` (default) or ``"bradford"``.

    Returns:
        A record of the same type as ``color``.

    Raises:
        ValueError: If either white point has a zero cone response.
    """
    if isinstance(color, AlphaColor):
        return AlphaColor(whitebalance(color.color, src_white, ref_white, method), color.alpha)

    src = white_point_array(src_white)
    ref = white_point_array(ref_white)
    if np.array_equal(src, ref):
        return color

    xyz = convert(XYZ, color).to_array()
    adapted = ChromaticAdaptation.adapt(xyz, src, ref, method)
    return convert(type(color), XYZ.from_array(adapted))
