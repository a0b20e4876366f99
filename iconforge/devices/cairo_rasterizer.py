# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cairo Rasterizer

This module draws an IconDocument into a fresh ARGB32 cairo image surface
and returns its pixels as an immutable Bitmap.

Pipeline:
1. Allocate a transparent surface of the target size
2. Fit the viewport into the surface: one uniform scale (the smaller of the
   two axis ratios) and centering offsets for the unused axis
3. Install the viewport-to-device matrix
4. For every StyledPath in document order: interpret its path data, fill it
   (nonzero or evenodd) and then stroke it (round caps and joins)

Coordinate Systems:
The content matrix places the icon in a bottom-left-origin space, the way
PostScript and Core Graphics contexts do, which flips the Y axis. Cairo
surfaces are top-left-origin, so the device matrix flips it back. The two
flips cancel and icon Y-down coordinates land upright in the bitmap.

Only allocation can fail. Empty or unparsable path data just leaves pixels
transparent.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import cairo

from ..core import types as ic
from ..core.error import AllocationError
from ..core.path_interpreter import interpret

logger = logging.getLogger(__name__)

# Largest width or height cairo accepts for an image surface
MAX_DIMENSION = 32767

STROKE_MITER_LIMIT = 4.0

# Opaque black; callers usually recolor template icons afterwards
DEFAULT_FOREGROUND = (0.0, 0.0, 0.0, 1.0)

# Default anti-aliasing; ANTIALIAS_MAP keys are the --antialias choices
ANTIALIAS_MODE = cairo.ANTIALIAS_GRAY

ANTIALIAS_MAP = {
    "none": cairo.ANTIALIAS_NONE,
    "fast": cairo.ANTIALIAS_FAST,
    "good": cairo.ANTIALIAS_GOOD,
    "best": cairo.ANTIALIAS_BEST,
    "gray": cairo.ANTIALIAS_GRAY,
    "subpixel": cairo.ANTIALIAS_SUBPIXEL,
}


@dataclass(frozen=True)
class ViewportFit:
    """Uniform scale and centering offsets mapping a viewport into a target."""
    scale: float
    offset_x: float
    offset_y: float


def fit_viewport(viewport: ic.Viewport, width: int, height: int) -> ViewportFit:
    """
    Compute the aspect-preserving fit of viewport into a width x height target.

    The scaled content is centered on whichever axis has room to spare.
    """
    scale = min(width / viewport.width, height / viewport.height)
    offset_x = (width - viewport.width * scale) / 2
    offset_y = (height - viewport.height * scale) / 2
    return ViewportFit(scale, offset_x, offset_y)


def viewport_matrix(viewport: ic.Viewport, width: int, height: int) -> cairo.Matrix:
    """
    Build the matrix taking viewport coordinates to surface pixels.

    Content matrix: translate to the centered offset in a bottom-left-origin
    space, flip Y, scale, then shift the viewport origin to zero. Device
    matrix: flip Y again to reach cairo's top-left origin.
    """
    fit = fit_viewport(viewport, width, height)
    s = fit.scale
    content = cairo.Matrix(
        s, 0.0, 0.0, -s,
        fit.offset_x - viewport.x * s,
        (height - fit.offset_y) + viewport.y * s,
    )
    device = cairo.Matrix(1.0, 0.0, 0.0, -1.0, 0.0, float(height))
    # multiply() applies content first, then device
    return content.multiply(device)


def _is_invertible(matrix: cairo.Matrix) -> bool:
    # cairo rejects matrices whose determinant or inverse is not a finite
    # nonzero number; tiny viewport scales underflow to exactly that
    values = (matrix.xx, matrix.yx, matrix.xy, matrix.yy, matrix.x0, matrix.y0)
    if not all(math.isfinite(v) for v in values):
        return False
    det = matrix.xx * matrix.yy - matrix.yx * matrix.xy
    return det != 0 and math.isfinite(1.0 / det)


def _check_size(width: object, height: object) -> None:
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, int):
            raise AllocationError(width, height, f"Bitmap size must be integral, got {width!r}x{height!r}")
        if value < 1 or value > MAX_DIMENSION:
            raise AllocationError(width, height)


def _create_surface(width: int, height: int) -> cairo.ImageSurface:
    _check_size(width, height)
    try:
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    except (cairo.Error, MemoryError) as e:
        raise AllocationError(width, height, f"Cannot allocate a {width}x{height} bitmap: {e}") from e
    if surface.get_status() != cairo.STATUS_SUCCESS:
        raise AllocationError(width, height)
    return surface


def rasterize(doc: ic.IconDocument, size: tuple[int, int],
              foreground: tuple[float, float, float, float] = DEFAULT_FOREGROUND,
              antialias: int = ANTIALIAS_MODE, is_placeholder: bool = False) -> ic.Bitmap:
    """
    Render an IconDocument into a Bitmap.

    Args:
        doc: Document to draw (read only)
        size: (width, height) in pixels
        foreground: RGBA floats used for every paint token other than none
        antialias: cairo antialias constant
        is_placeholder: Recorded on the returned Bitmap

    Returns:
        Bitmap of exactly size pixels

    Raises:
        AllocationError: If size is not a drawable pixel size
    """
    width, height = size
    surface = _create_surface(width, height)
    viewport = doc.viewport

    matrix = None
    if viewport.width > 0 and viewport.height > 0:
        matrix = viewport_matrix(viewport, width, height)

    if matrix is not None and _is_invertible(matrix):
        cc = cairo.Context(surface)
        cc.set_antialias(antialias)
        cc.set_matrix(matrix)
        for index, path in enumerate(doc.paths):
            _render_path(cc, path, foreground, index)
    else:
        logger.debug("Degenerate viewport %r, returning blank bitmap", viewport)

    surface.flush()
    return ic.Bitmap(
        width=width,
        height=height,
        stride=surface.get_stride(),
        data=bytes(surface.get_data()),
        is_placeholder=is_placeholder,
    )


def _paints(token: str | None) -> bool:
    return token is not None and token != ic.NONE


def _render_path(cc: cairo.Context, path: ic.StyledPath,
                 foreground: tuple[float, float, float, float], index: int) -> None:
    geometry = interpret(path.path_data)
    if not geometry:
        logger.debug("Path %d produced no geometry, skipping", index)
        return

    do_fill = _paints(path.fill)
    do_stroke = _paints(path.stroke)
    if not (do_fill or do_stroke):
        return

    r, g, b, a = foreground
    if path.opacity is not None:
        a *= max(0.0, min(1.0, path.opacity))

    cc.new_path()
    _append_geometry(cc, geometry)

    if do_fill:
        # Color tokens are not resolved; everything paints in the foreground
        cc.set_source_rgba(r, g, b, a)
        if path.fill_rule == ic.FILL_RULE_EVEN_ODD:
            cc.set_fill_rule(cairo.FILL_RULE_EVEN_ODD)
        else:
            cc.set_fill_rule(cairo.FILL_RULE_WINDING)
        cc.fill_preserve()

    if do_stroke:
        cc.set_source_rgba(r, g, b, a)
        stroke_width = path.stroke_width
        if stroke_width is None or not math.isfinite(stroke_width):
            stroke_width = ic.DEFAULT_STROKE_WIDTH
        cc.set_line_width(stroke_width)
        cc.set_line_cap(cairo.LINE_CAP_ROUND)
        cc.set_line_join(cairo.LINE_JOIN_ROUND)
        cc.set_miter_limit(STROKE_MITER_LIMIT)
        cc.stroke_preserve()

    cc.new_path()


def _append_geometry(cc: cairo.Context, geometry: ic.Geometry) -> None:
    for element in geometry:
        if isinstance(element, ic.MoveTo):
            cc.move_to(element.p.x, element.p.y)
        elif isinstance(element, ic.LineTo):
            cc.line_to(element.p.x, element.p.y)
        elif isinstance(element, ic.CurveTo):
            cc.curve_to(
                element.p1.x, element.p1.y,
                element.p2.x, element.p2.y,
                element.p3.x, element.p3.y,
            )
        elif isinstance(element, ic.ClosePath):
            cc.close_path()
