# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
IconForge Core Types Module

This module contains the value types shared by every stage of the icon
pipeline: the parsed markup document, the interpreted path geometry and the
finished bitmap.

Sharing Model:
- IconDocument and StyledPath are frozen and hold tuples only, so a document
  taken from the markup cache can be read by any number of rendering threads
- Geometry elements are frozen value objects with structural equality
- Bitmap holds immutable bytes and is shared through the bitmap cache
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, Union

from .error import AllocationError


# Icon weights
WEIGHT_REGULAR = "regular"
WEIGHT_THIN = "thin"
WEIGHT_LIGHT = "light"
WEIGHT_BOLD = "bold"
WEIGHT_FILL = "fill"
WEIGHT_DUOTONE = "duotone"

WEIGHTS = (
    WEIGHT_REGULAR,
    WEIGHT_THIN,
    WEIGHT_LIGHT,
    WEIGHT_BOLD,
    WEIGHT_FILL,
    WEIGHT_DUOTONE,
)

# Fill rules
FILL_RULE_NONZERO = "nonzero"
FILL_RULE_EVEN_ODD = "evenodd"

# Color tokens with a fixed meaning; any other token is passed through
CURRENT_COLOR = "currentColor"
NONE = "none"

# Stroke width assumed when a path does not declare one
DEFAULT_STROKE_WIDTH = 1.5

# Size presets (width, height) in pixels
SIZE_SMALL = (16, 16)
SIZE_MEDIUM = (24, 24)
SIZE_LARGE = (32, 32)
DEFAULT_SIZE = SIZE_MEDIUM

COLOR_SPACE_DEVICE_RGB = "DeviceRGB"
PIXEL_FORMAT_ARGB32 = "ARGB32"


def validate_weight(weight: str) -> str:
    """Return weight unchanged, raising ValueError if it is not a known weight."""
    if weight not in WEIGHTS:
        raise ValueError(f"Unknown icon weight {weight!r}; expected one of {', '.join(WEIGHTS)}")
    return weight


def normalize_size(size: Union[int, tuple[int, int]]) -> tuple[int, int]:
    """Accept an int (square) or a (width, height) pair and return a pair."""
    if isinstance(size, (tuple, list)):
        if len(size) != 2:
            raise AllocationError(size, None, f"Bitmap size must be a (width, height) pair, got {size!r}")
        width, height = size
        return (width, height)
    return (size, size)


# Document Elements
@dataclass(frozen=True)
class Viewport:
    """Rectangle in which the path data is authored."""
    x: float = 0.0
    y: float = 0.0
    width: float = 256.0
    height: float = 256.0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


DEFAULT_VIEWPORT = Viewport(0.0, 0.0, 256.0, 256.0)


@dataclass(frozen=True)
class StyledPath:
    """One drawable shape: raw path data plus paint attributes.

    path_data is kept as text. It is interpreted into Geometry only at
    rasterization time, so weight variants can rewrite attributes without
    touching geometry.
    """
    path_data: str
    fill_rule: Optional[str] = None
    stroke_width: Optional[float] = None
    fill: Optional[str] = None
    stroke: Optional[str] = None
    opacity: Optional[float] = None


@dataclass(frozen=True)
class IconDocument:
    """Parsed icon markup: a viewport and at least one styled path."""
    viewport: Viewport
    paths: tuple[StyledPath, ...]

    def __post_init__(self) -> None:
        if not self.paths:
            raise ValueError("IconDocument requires at least one path")
        if not isinstance(self.paths, tuple):
            object.__setattr__(self, "paths", tuple(self.paths))


# Geometry Elements
@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class MoveTo:
    p: Point


@dataclass(frozen=True)
class LineTo:
    p: Point


@dataclass(frozen=True)
class CurveTo:
    p1: Point
    p2: Point
    p3: Point


@dataclass(frozen=True)
class ClosePath:
    pass


class Geometry(list):
    """Ordered list of MoveTo/LineTo/CurveTo/ClosePath in absolute coordinates."""

    def __init__(self, elements=()) -> None:
        super().__init__(elements)


# Output
@dataclass(frozen=True)
class Bitmap:
    """Rendered icon pixels.

    data holds premultiplied ARGB32 pixels, one native-endian 32-bit word per
    pixel, rows `stride` bytes apart (the layout cairo image surfaces use).
    """
    width: int
    height: int
    stride: int
    data: bytes
    color_space: str = COLOR_SPACE_DEVICE_RGB
    pixel_format: str = PIXEL_FORMAT_ARGB32
    is_placeholder: bool = False

    @property
    def nbytes(self) -> int:
        return len(self.data)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the premultiplied (r, g, b, a) channels at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} bitmap")
        offset = y * self.stride + x * 4
        word = int.from_bytes(self.data[offset:offset + 4], sys.byteorder)
        return ((word >> 16) & 0xFF, (word >> 8) & 0xFF, word & 0xFF, (word >> 24) & 0xFF)

    def alpha_at(self, x: int, y: int) -> int:
        return self.pixel(x, y)[3]

    def is_blank(self) -> bool:
        return not any(self.data)
