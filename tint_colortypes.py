# -*- coding: utf-8 -*-
"""
Tint: Converting, comparing and choosing colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Value Types
=================
Immutable three-component records, one per color space, plus an alpha
wrapper and the numeric representations they may hold.

Numeric representation:
    Components are plain floats.  RGB-like records may also hold
    :class:`FixedPoint` fractions (:class:`Norm8`, :class:`Norm16`), which
    behave like floats at their quantised precision.  Every other space has
    components outside [0, 1] (hue in degrees, Lab a*/b*, ...), so placing a
    fixed-point value there raises ``TypeError`` on construction.

Nothing is clamped on construction: records may hold out-of-gamut values.

RGB-like capability:
    :class:`AbstractRGB` marks a record as "an sRGB color with accessors
    r, g, b".  Memory order is free (see :class:`BGR`); ``to_array`` always
    yields the logical (r, g, b) order and ``from_rgb`` builds the record
    from it.  The conversion graph routes every subclass through the RGB
    node, so new channel orders need no graph changes.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Final, Iterator, Protocol, Sequence, Tuple, Union, runtime_checkable

import numpy as np

__all__ = [
    # --- Numeric representations ---
    "FixedPoint",
    "Norm8",
    "Norm16",
    "Component",

    # --- Base types ---
    "Color",
    "AbstractRGB",
    "AlphaColor",

    # --- RGB family ---
    "RGB",
    "BGR",
    "RGB24",
    "HSV",
    "HSL",
    "HSI",
    "YIQ",
    "YCbCr",

    # --- CIE family ---
    "XYZ",
    "xyY",
    "Lab",
    "LCHab",
    "Luv",
    "LCHuv",
    "LMS",
    "DIN99",
    "DIN99d",
    "DIN99o",
    "Oklab",
    "Oklch",

    # --- Collaborator interfaces ---
    "ColorTransform",
    "ColorParser",
    "DichromacySimulator",
    "PaletteGenerator",
]


# =============================================================================
# 1. NUMERIC REPRESENTATIONS
# =============================================================================

@functools.total_ordering
class FixedPoint:
    """
    Unsigned normalised fraction in [0, 1], stored as ``raw / (2**bits - 1)``.

    Supports the operations color math needs: addition, scaling by a real,
    comparison and conversion to float.  Results are re-quantised and must
    stay inside [0, 1], otherwise ``ValueError`` is raised.
    """

    __slots__ = ("_raw",)
    bits: ClassVar[int] = 8

    def __init__(self, value: float) -> None:
        v = float(value)
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"{type(self).__name__} only represents values in [0, 1], got {value!r}")
        self._raw = int(round(v * self.scale()))

    @classmethod
    def scale(cls) -> int:
        return (1 << cls.bits) - 1

    @classmethod
    def from_raw(cls, raw: int) -> FixedPoint:
        """Builds a value directly from its integer code."""
        raw = int(raw)
        if not 0 <= raw <= cls.scale():
            raise ValueError(f"Raw value {raw} out of range for {cls.__name__}")
        obj = cls.__new__(cls)
        obj._raw = raw
        return obj

    @property
    def raw(self) -> int:
        return self._raw

    @property
    def eps(self) -> float:
        """Quantisation step of this representation."""
        return 1.0 / self.scale()

    def __float__(self) -> float:
        return self._raw / self.scale()

    def __add__(self, other: Any) -> FixedPoint:
        if not isinstance(other, (FixedPoint, int, float)):
            return NotImplemented
        return type(self)(float(self) + float(other))

    __radd__ = __add__

    def __mul__(self, factor: Any) -> FixedPoint:
        if not isinstance(factor, (FixedPoint, int, float)):
            return NotImplemented
        return type(self)(float(self) * float(factor))

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (FixedPoint, int, float)):
            return float(self) == float(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, (FixedPoint, int, float)):
            return float(self) < float(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(float(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self)!r})"


class Norm8(FixedPoint):
    """8-bit normalised fraction (step 1/255)."""
    __slots__ = ()
    bits: ClassVar[int] = 8


class Norm16(FixedPoint):
    """16-bit normalised fraction (step 1/65535)."""
    __slots__ = ()
    bits: ClassVar[int] = 16


Component = Union[float, FixedPoint]


# =============================================================================
# 2. BASE TYPES
# =============================================================================

@dataclass(frozen=True, slots=True)
class Color:
    """Base of every three-component color record."""

    # Only RGB-like spaces live entirely inside [0, 1].
    _fixed_point_ok: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if self._fixed_point_ok:
            return
        for f in fields(self):
            if isinstance(getattr(self, f.name), FixedPoint):
                raise TypeError(
                    f"{type(self).__name__}.{f.name} cannot hold a fixed-point value; "
                    f"its range exceeds [0, 1]. Use float."
                )

    def __iter__(self) -> Iterator[Any]:
        return (getattr(self, f.name) for f in fields(self))

    def to_array(self) -> np.ndarray:
        """Components as a float64 (3,) array."""
        return np.array([float(v) for v in self], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> Color:
        """Builds a record from a (3,) array of floats."""
        a = np.asarray(arr, dtype=np.float64)
        if a.shape != (3,):
            raise ValueError(f"{cls.__name__} needs 3 components, got shape {a.shape}")
        return cls(*(float(v) for v in a))


@dataclass(frozen=True, slots=True)
class AbstractRGB(Color):
    """
    Capability: a gamma-encoded sRGB color with accessors ``r``, ``g``, ``b``.

    Subclasses declare the fields ``r``, ``g`` and ``b`` in any memory order,
    or expose them as properties and override :meth:`from_rgb`.
    """

    _fixed_point_ok: ClassVar[bool] = True

    def to_array(self) -> np.ndarray:
        return np.array([float(self.r), float(self.g), float(self.b)], dtype=np.float64)

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> AbstractRGB:
        return cls(r=r, g=g, b=b)

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> AbstractRGB:
        a = np.asarray(arr, dtype=np.float64)
        if a.shape != (3,):
            raise ValueError(f"{cls.__name__} needs 3 components, got shape {a.shape}")
        return cls.from_rgb(float(a[0]), float(a[1]), float(a[2]))


@dataclass(frozen=True, slots=True)
class AlphaColor:
    """
    Any color record plus an opacity.

    Alpha rides along untouched: conversions and differences strip it,
    operate on ``color`` and (where a color is returned) reattach it.
    """

    color: Color
    alpha: Component = 1.0

    def __post_init__(self) -> None:
        if not isinstance(self.color, Color):
            raise TypeError(f"AlphaColor wraps a Color record, got {type(self.color).__name__}")


# =============================================================================
# 3. RGB FAMILY
# =============================================================================

@dataclass(frozen=True, slots=True)
class RGB(AbstractRGB):
    """sRGB, gamma encoded, nominally in [0, 1]."""
    r: Component
    g: Component
    b: Component


@dataclass(frozen=True, slots=True)
class BGR(AbstractRGB):
    """sRGB stored in blue-green-red memory order."""
    b: Component
    g: Component
    r: Component


_RGB24_MAX: Final[int] = 0xFFFFFF

@dataclass(frozen=True, slots=True)
class RGB24(AbstractRGB):
    """
    sRGB packed into one integer, 8 bits per channel (0xRRGGBB).

    A storage format only.  Encoding clamps each channel to [0, 1] and
    rounds to the nearest 1/255 step, so it is lossy by construction.
    """
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, (int, np.integer)) or isinstance(self.value, bool):
            raise TypeError(f"RGB24 value must be an integer, got {type(self.value).__name__}")
        if not 0 <= self.value <= _RGB24_MAX:
            raise ValueError(f"RGB24 value must be in [0, 0xFFFFFF], got {self.value:#x}")

    @property
    def r(self) -> float:
        return ((self.value >> 16) & 0xFF) / 255.0

    @property
    def g(self) -> float:
        return ((self.value >> 8) & 0xFF) / 255.0

    @property
    def b(self) -> float:
        return (self.value & 0xFF) / 255.0

    @staticmethod
    def _quantise(v: float) -> int:
        return int(round(min(1.0, max(0.0, float(v))) * 255.0))

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> RGB24:
        return cls((cls._quantise(r) << 16) | (cls._quantise(g) << 8) | cls._quantise(b))

    def __iter__(self) -> Iterator[Any]:
        return iter((self.r, self.g, self.b))

    def __repr__(self) -> str:
        return f"RGB24(0x{self.value:06X})"


@dataclass(frozen=True, slots=True)
class HSV(Color):
    """Hue in degrees [0, 360), saturation and value in [0, 1]."""
    h: float
    s: float
    v: float


@dataclass(frozen=True, slots=True)
class HSL(Color):
    """Hue in degrees [0, 360), saturation and lightness in [0, 1]."""
    h: float
    s: float
    l: float


@dataclass(frozen=True, slots=True)
class HSI(Color):
    """Hue in degrees [0, 360), saturation and intensity in [0, 1]."""
    h: float
    s: float
    i: float


@dataclass(frozen=True, slots=True)
class YIQ(Color):
    y: float
    i: float
    q: float


@dataclass(frozen=True, slots=True)
class YCbCr(Color):
    """ITU-R BT.601, 8-bit studio range (Y in [16, 235])."""
    y: float
    cb: float
    cr: float


# =============================================================================
# 4. CIE FAMILY
# =============================================================================

@dataclass(frozen=True, slots=True)
class XYZ(Color):
    """CIE 1931 tristimulus values, relative (white Y = 1)."""
    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class xyY(Color):
    x: float
    y: float
    Y: float


@dataclass(frozen=True, slots=True)
class Lab(Color):
    """CIE 1976 L*a*b*."""
    l: float
    a: float
    b: float


@dataclass(frozen=True, slots=True)
class LCHab(Color):
    l: float
    c: float
    h: float


@dataclass(frozen=True, slots=True)
class Luv(Color):
    """CIE 1976 L*u*v*."""
    l: float
    u: float
    v: float


@dataclass(frozen=True, slots=True)
class LCHuv(Color):
    l: float
    c: float
    h: float


@dataclass(frozen=True, slots=True)
class LMS(Color):
    """Cone response (CAT02 basis)."""
    l: float
    m: float
    s: float


@dataclass(frozen=True, slots=True)
class DIN99(Color):
    l: float
    a: float
    b: float


@dataclass(frozen=True, slots=True)
class DIN99d(Color):
    l: float
    a: float
    b: float


@dataclass(frozen=True, slots=True)
class DIN99o(Color):
    l: float
    a: float
    b: float


@dataclass(frozen=True, slots=True)
class Oklab(Color):
    l: float
    a: float
    b: float


@dataclass(frozen=True, slots=True)
class Oklch(Color):
    l: float
    c: float
    h: float


# =============================================================================
# 5. COLLABORATOR INTERFACES
# =============================================================================

@runtime_checkable
class ColorTransform(Protocol):
    """Maps a color to another color, e.g. a deficiency simulation."""

    def __call__(self, color: Color) -> Color: ...


@runtime_checkable
class ColorParser(Protocol):
    """Parses a CSS color string into an RGB or HSL record."""

    def __call__(self, text: str) -> Union[RGB, HSL, AlphaColor]: ...


@runtime_checkable
class DichromacySimulator(Protocol):
    """
    Simulates a color vision deficiency.  ``severity`` is in [0, 1]; the
    result is in the same space as the input.
    """

    def __call__(self, color: Color, severity: float = 1.0) -> Color: ...


@runtime_checkable
class PaletteGenerator(Protocol):
    """Builds an ordered palette from hue(s) and shape parameters."""

    def __call__(self, *hues: float, **shape: float) -> Tuple[Color, ...]: ...
