# -*- coding: utf-8 -*-
"""
Tint: Converting, comparing and choosing colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Conversion Graph
================
Typed ``convert(target, color)`` for every ordered pair of color spaces.

Every space is a node with a parent and two array functions (to parent,
from parent).  The nodes form a tree rooted at CIE XYZ::

    XYZ
    +-- RGB ----- HSV, HSL, HSI, YIQ, YCbCr   (and every AbstractRGB type)
    +-- Lab ----- LCHab, DIN99, DIN99o
    +-- Luv ----- LCHuv
    +-- Oklab --- Oklch
    +-- xyY, LMS, DIN99d

A conversion climbs from the source to the lowest common ancestor and
descends to the target.  Unrelated spaces therefore meet in XYZ, while
siblings such as HSV and HSL only pass through RGB.  All arithmetic is done
by the batch kernels of :class:`tint_colorengine.ColorSpaceEngine`.

Standard illuminants (CIE 1931 2 degree observer, Y = 1) are provided as
``WP_*`` XYZ records; ``wp`` arguments also accept any color record, an XYZ
triple or a name from :data:`WHITE_POINTS`.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Final, Optional, Sequence, Tuple, Type, TypeVar, Union

import numpy as np

from tint_colorengine import ArrayFloat, ColorSpaceEngine as CSE
from tint_colortypes import (
    AbstractRGB, AlphaColor, Color,
    RGB, HSV, HSL, HSI, YIQ, YCbCr,
    XYZ, xyY, Lab, LCHab, Luv, LCHuv, LMS,
    DIN99, DIN99d, DIN99o, Oklab, Oklch,
)

__all__ = [
    # --- White points ---
    "WP_A", "WP_B", "WP_C",
    "WP_D50", "WP_D55", "WP_D65", "WP_D75",
    "WP_E", "WP_F2", "WP_F7", "WP_F11",
    "WHITE_POINTS",
    "WhitePoint",
    "white_point_array",

    # --- Graph ---
    "register_space",
    "conversion_path",
    "convert",
    "convert_array",
]

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Color)
EdgeFunc = Callable[[ArrayFloat, ArrayFloat], ArrayFloat]


# =============================================================================
# 1. REFERENCE WHITES
# =============================================================================

WP_A: Final[XYZ]   = XYZ(1.09850, 1.00000, 0.35585)
WP_B: Final[XYZ]   = XYZ(0.99072, 1.00000, 0.85223)
WP_C: Final[XYZ]   = XYZ(0.98074, 1.00000, 1.18232)
WP_D50: Final[XYZ] = XYZ(0.96422, 1.00000, 0.82521)
WP_D55: Final[XYZ] = XYZ(0.95682, 1.00000, 0.92149)
WP_D65: Final[XYZ] = XYZ(0.95047, 1.00000, 1.08883)
WP_D75: Final[XYZ] = XYZ(0.94972, 1.00000, 1.22638)
WP_E: Final[XYZ]   = XYZ(1.00000, 1.00000, 1.00000)
WP_F2: Final[XYZ]  = XYZ(0.99186, 1.00000, 0.67393)
WP_F7: Final[XYZ]  = XYZ(0.95041, 1.00000, 1.08747)
WP_F11: Final[XYZ] = XYZ(1.00962, 1.00000, 0.64350)

WHITE_POINTS: Final[Dict[str, XYZ]] = {
    "A": WP_A, "B": WP_B, "C": WP_C,
    "D50": WP_D50, "D55": WP_D55, "D65": WP_D65, "D75": WP_D75,
    "E": WP_E, "F2": WP_F2, "F7": WP_F7, "F11": WP_F11,
}

WhitePoint = Union[Color, AlphaColor, str, Sequence[float], ArrayFloat]


def white_point_array(wp: WhitePoint) -> ArrayFloat:
    """
    Resolves any accepted white point form to an XYZ (3,) float64 array.

    Args:
        wp: An XYZ record, any other color record (converted to XYZ under
            D65), a name from ``WHITE_POINTS`` or a sequence of three floats.

    Returns:
        The white point tristimulus values.
    """
    if isinstance(wp, AlphaColor):
        wp = wp.color
    if isinstance(wp, XYZ):
        return wp.to_array()
    if isinstance(wp, Color):
        return convert(XYZ, wp).to_array()
    if isinstance(wp, str):
        try:
            return WHITE_POINTS[wp.upper()].to_array()
        except KeyError:
            raise ValueError(
                f"Unknown white point '{wp}'. Known: {', '.join(WHITE_POINTS)}"
            ) from None
    arr = np.asarray(wp, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"White point must be 3 XYZ values, got shape {arr.shape}")
    return arr


_D65: Final[ArrayFloat] = WP_D65.to_array()


# =============================================================================
# 2. GRAPH REGISTRY
# =============================================================================

@dataclass(frozen=True, slots=True)
class _Edge:
    parent: Type[Color]
    to_parent: EdgeFunc
    from_parent: EdgeFunc


_GRAPH: Dict[Type[Color], _Edge] = {}


def _ignore_white(func: Callable[[ArrayFloat], ArrayFloat]) -> EdgeFunc:
    @functools.wraps(func)
    def edge(arr: ArrayFloat, wp: ArrayFloat) -> ArrayFloat:
        return func(arr)
    return edge


def register_space(cls: Type[Color], parent: Type[Color],
                   to_parent: Callable[..., ArrayFloat],
                   from_parent: Callable[..., ArrayFloat],
                   uses_white: bool = False) -> None:
    """
    Adds (or replaces) a node of the conversion graph.

    Args:
        cls: The color record type to register.
        parent: An already registered space (or XYZ) the new one derives from.
        to_parent: Maps an (N, 3) array of ``cls`` values to ``parent``.
        from_parent: Maps an (N, 3) array of ``parent`` values to ``cls``.
        uses_white: If True, both functions are called as ``f(arr, wp)``
                    with the white point as an XYZ (3,) array; otherwise
                    as ``f(arr)``.

    Raises:
        TypeError: If ``cls`` or ``parent`` is not a Color type.
        ValueError: If ``cls`` is XYZ, ``parent`` is unknown, or the edge
                    would make ``cls`` its own ancestor.
    """
    if not (isinstance(cls, type) and issubclass(cls, Color)):
        raise TypeError(f"Expected a Color subclass, got {cls!r}")
    if not (isinstance(parent, type) and issubclass(parent, Color)):
        raise TypeError(f"Expected a Color subclass as parent, got {parent!r}")
    if cls is XYZ:
        raise ValueError("XYZ is the root of the graph and cannot be re-parented")
    if parent is not XYZ and parent not in _GRAPH:
        raise ValueError(f"Parent space {parent.__name__} is not registered")
    if cls in _ancestors(parent):
        raise ValueError(f"Registering {cls.__name__} under {parent.__name__} would create a cycle")

    if not uses_white:
        to_parent = _ignore_white(to_parent)
        from_parent = _ignore_white(from_parent)

    if cls in _GRAPH:
        logger.debug("Replacing conversion node %s", cls.__name__)
    _GRAPH[cls] = _Edge(parent, to_parent, from_parent)
    _route.cache_clear()


def _node(cls: Type[Color]) -> Type[Color]:
    """Graph node for a record type; RGB-like types share the RGB node."""
    if cls is XYZ or cls in _GRAPH:
        return cls
    if isinstance(cls, type) and issubclass(cls, AbstractRGB):
        return RGB
    raise TypeError(f"No conversion registered for {getattr(cls, '__name__', cls)!r}")


def _ancestors(node: Type[Color]) -> Tuple[Type[Color], ...]:
    """``node`` followed by its parents up to and including XYZ."""
    chain = [node]
    while node is not XYZ:
        node = _GRAPH[node].parent
        chain.append(node)
    return tuple(chain)


@functools.lru_cache(maxsize=256)
def _route(src: Type[Color], dst: Type[Color]) -> Tuple[Tuple[Type[Color], ...], Tuple[Type[Color], ...]]:
    """
    Nodes to climb from ``src`` (applying to_parent) and to descend into
    ``dst`` (applying from_parent), meeting at the lowest common ancestor.
    """
    src_chain = _ancestors(src)
    dst_chain = _ancestors(dst)
    common = next(node for node in src_chain if node in dst_chain)
    up = src_chain[:src_chain.index(common)]
    down = tuple(reversed(dst_chain[:dst_chain.index(common)]))
    return up, down


def conversion_path(source: Type[Color], target: Type[Color]) -> Tuple[Type[Color], ...]:
    """
    Sequence of graph nodes visited converting ``source`` into ``target``,
    both ends included.
    """
    src, dst = _node(source), _node(target)
    up, down = _route(src, dst)
    if not up and not down:
        return (src,)
    common = _GRAPH[up[-1]].parent if up else _GRAPH[down[0]].parent
    return up + (common,) + down


# --- Built-in spaces ---

register_space(RGB, XYZ, CSE._srgb_to_xyz_raw, CSE._xyz_to_srgb_raw)
register_space(HSV, RGB, CSE._hsv_to_rgb_raw, CSE._rgb_to_hsv_raw)
register_space(HSL, RGB, CSE._hsl_to_rgb_raw, CSE._rgb_to_hsl_raw)
register_space(HSI, RGB, CSE._hsi_to_rgb_raw, CSE._rgb_to_hsi_raw)
register_space(YIQ, RGB, CSE._yiq_to_rgb_raw, CSE._rgb_to_yiq_raw)
register_space(YCbCr, RGB, CSE._ycbcr_to_rgb_raw, CSE._rgb_to_ycbcr_raw)

register_space(xyY, XYZ, lambda a, wp: CSE._xyY_to_xyz_raw(a), CSE._xyz_to_xyY_raw, uses_white=True)
register_space(Lab, XYZ, CSE._lab_to_xyz_raw, CSE._xyz_to_lab_raw, uses_white=True)
register_space(LCHab, Lab, CSE._from_polar_raw, CSE._to_polar_raw)
register_space(DIN99, Lab, CSE._din99_to_lab_raw, CSE._lab_to_din99_raw)
register_space(DIN99o, Lab, CSE._din99o_to_lab_raw, CSE._lab_to_din99o_raw)
register_space(Luv, XYZ, CSE._luv_to_xyz_raw, CSE._xyz_to_luv_raw, uses_white=True)
register_space(LCHuv, Luv, CSE._from_polar_raw, CSE._to_polar_raw)
register_space(LMS, XYZ, CSE._lms_to_xyz_raw, CSE._xyz_to_lms_raw)
register_space(DIN99d, XYZ, CSE._din99d_to_xyz_raw, CSE._xyz_to_din99d_raw, uses_white=True)
register_space(Oklab, XYZ, CSE._oklab_to_xyz_raw, CSE._xyz_to_oklab_raw)
register_space(Oklch, Oklab, CSE._from_polar_raw, CSE._to_polar_raw)


# =============================================================================
# 3. CONVERSION
# =============================================================================

def convert_array(source: Type[Color], target: Type[Color], arr: ArrayFloat,
                  wp: WhitePoint = WP_D65) -> ArrayFloat:
    """
    Batch conversion of raw component arrays between two record types.

    Args:
        source: Record type describing the rows of ``arr``.
        target: Record type to convert into.
        arr: Component data, shape (3,) or (N, 3), in the logical component
             order of ``source`` (r, g, b for RGB-like types).
        wp: Reference white for every white-dependent step.

    Returns:
        Array with the same shape as ``arr``.
    """
    a = np.asarray(arr)
    data = np.ascontiguousarray(np.atleast_2d(a), dtype=np.float64)
    if data.ndim != 2 or data.shape[-1] != 3:
        raise ValueError(f"Expected shape (3,) or (N, 3), got {a.shape}")

    src, dst = _node(source), _node(target)
    up, down = _route(src, dst)
    if up or down:
        white = _D65 if wp is WP_D65 else white_point_array(wp)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Converting %d value(s) %s -> %s via %s", data.shape[0],
                         source.__name__, target.__name__,
                         " -> ".join(n.__name__ for n in conversion_path(source, target)))
        for node in up:
            data = _GRAPH[node].to_parent(data, white)
        for node in down:
            data = _GRAPH[node].from_parent(data, white)

    if a.ndim == 1:
        return data[0]
    return data


def convert(target: Type[C], color: Union[Color, AlphaColor], wp: WhitePoint = WP_D65) -> Union[C, AlphaColor]:
    """
    Converts a color record into another color space.

    Total over finite input: out-of-gamut values pass through the formulas
    and come back out-of-gamut, nothing is clamped (except by the RGB24
    storage format).  Alpha is stripped before and reattached after.

    Args:
        target: Destination record type, e.g. ``Lab`` or ``HSV``.
        color: The color to convert, optionally wrapped in ``AlphaColor``.
        wp: Reference white for Lab, Luv, xyY and DIN99d steps (default D65).

    Returns:
        A ``target`` instance (wrapped in ``AlphaColor`` if the input was).

    Example:
        convert(XYZ, RGB(1.0, 0.0, 0.0)) gives approximately
        XYZ(0.4125, 0.2127, 0.0193), the sRGB red primary under D65.
    """
    if isinstance(color, AlphaColor):
        return AlphaColor(convert(target, color.color, wp), color.alpha)
    if not isinstance(color, Color):
        raise TypeError(f"Expected a Color record, got {type(color).__name__}")
    if not (isinstance(target, type) and issubclass(target, Color)):
        raise TypeError(f"Conversion target must be a Color type, got {target!r}")
    if type(color) is target:
        return color

    values = convert_array(type(color), target, color.to_array(), wp)
    return target.from_array(values)
