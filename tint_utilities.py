# -*- coding: utf-8 -*-
"""
Tint: Converting, comparing and choosing colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Utilities
===============
Hue helpers and component-wise interpolation of color records.

Interpolation happens in whatever space the first color is expressed in;
for perceptually even steps convert to Lab or Luv first.  Hue components
are interpolated like any other number, so a blend of h = 350 and h = 10
passes through h = 180.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar, Union

import numpy as np

from tint_colorengine import ArrayFloat
from tint_colortypes import AbstractRGB, AlphaColor, Color, FixedPoint
from tint_convert import convert

__all__ = [
    "normalize_hue",
    "mean_hue",
    "linspace",
    "weighted_color_mean",
]

C = TypeVar("C", bound=Union[Color, AlphaColor])


def normalize_hue(h: float) -> float:
    """Wraps a hue angle in degrees into [0, 360)."""
    h = float(h) % 360.0
    # -1e-20 % 360 rounds to 360.0
    return 0.0 if h >= 360.0 else h


def mean_hue(h1: float, h2: float) -> float:
    """
    Midpoint of two hues along the shorter arc, in [0, 360).

    Opposite hues (180 degrees apart) resolve to ``h1 + 90``.
    """
    h1 = normalize_hue(h1)
    h2 = normalize_hue(h2)
    d = normalize_hue(h2 - h1)
    if d > 180.0:
        d -= 360.0
    return normalize_hue(h1 + 0.5 * d)


def _cast(template: object, v: float) -> Union[float, FixedPoint]:
    if isinstance(template, FixedPoint):
        # Interpolants can overshoot [0, 1] by an ulp
        return type(template)(min(1.0, max(0.0, float(v))))
    return float(v)


def _rebuild(template: Color, values: ArrayFloat) -> Color:
    """
    Builds a record of ``template``'s type from logical component values,
    keeping fixed-point component representations.
    """
    if isinstance(template, AbstractRGB):
        return type(template).from_rgb(
            r=_cast(template.r, values[0]),
            g=_cast(template.g, values[1]),
            b=_cast(template.b, values[2]),
        )
    return type(template)(*(_cast(t, v) for t, v in zip(template, values)))


def _split_alpha(color: Union[Color, AlphaColor]) -> Tuple[Color, float, bool]:
    if isinstance(color, AlphaColor):
        return color.color, float(color.alpha), True
    return color, 1.0, False


def _rewrap(template: Union[Color, AlphaColor], color: Color, alpha: float) -> Union[Color, AlphaColor]:
    if isinstance(template, AlphaColor):
        return AlphaColor(color, _cast(template.alpha, alpha))
    return AlphaColor(color, alpha)


def weighted_color_mean(w: float, c1: C, c2: Union[Color, AlphaColor]) -> C:
    """
    Component-wise ``w * c1 + (1 - w) * c2``.

    ``c2`` is first converted to the space of ``c1``.  If either color
    carries alpha, the result does too (a missing alpha counts as 1).

    Args:
        w: Weight of ``c1``, in [0, 1].
        c1: First color; its type is the type of the result.
        c2: Second color, any space.

    Raises:
        ValueError: If ``w`` is outside [0, 1].
    """
    w = float(w)
    if not 0.0 <= w <= 1.0:
        raise ValueError(f"Weight must be in [0, 1], got {w}")

    base1, alpha1, has1 = _split_alpha(c1)
    base2, alpha2, has2 = _split_alpha(c2)
    base2 = convert(type(base1), base2)

    values = w * base1.to_array() + (1.0 - w) * base2.to_array()
    mixed = _rebuild(base1, values)
    if has1 or has2:
        return _rewrap(c1, mixed, w * alpha1 + (1.0 - w) * alpha2)
    return mixed


def linspace(c1: C, c2: Union[Color, AlphaColor], n: int = 100) -> List[C]:
    """
    ``n`` colors evenly spaced from ``c1`` to ``c2``, both included.

    Args:
        c1: Start color; all results share its type.
        c2: End color, converted to the space of ``c1``.
        n: Number of colors (>= 1).  ``n == 1`` gives ``[c1]``.

    Raises:
        ValueError: If ``n`` is smaller than 1.
    """
    if int(n) != n or n < 1:
        raise ValueError(f"Number of colors must be a positive integer, got {n}")
    n = int(n)

    base1, alpha1, has1 = _split_alpha(c1)
    base2, alpha2, has2 = _split_alpha(c2)
    base2 = convert(type(base1), base2)

    values = np.linspace(base1.to_array(), base2.to_array(), n)
    alphas = np.linspace(alpha1, alpha2, n)

    result = []
    for row, alpha in zip(values, alphas):
        mixed = _rebuild(base1, row)
        result.append(_rewrap(c1, mixed, alpha) if has1 or has2 else mixed)
    return result
