# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
PNG Output Device

Encodes a finished Bitmap as a PNG file by wrapping its pixels back into a
cairo image surface.
"""

import io
import os
from typing import BinaryIO, Union

import cairo

from ..core import types as ic


def encode_png(bitmap: ic.Bitmap, target: Union[str, BinaryIO]) -> None:
    """
    Write bitmap as PNG to a filename or a binary file object.

    Args:
        bitmap: Rendered icon (ARGB32)
        target: Path or writable binary stream
    """
    # create_for_data needs a writable buffer; the Bitmap bytes are immutable
    backing = bytearray(bitmap.data)
    surface = cairo.ImageSurface.create_for_data(
        backing, cairo.FORMAT_ARGB32, bitmap.width, bitmap.height, bitmap.stride)
    surface.write_to_png(target)
    surface.finish()


def png_bytes(bitmap: ic.Bitmap) -> bytes:
    """Return bitmap encoded as PNG file bytes."""
    buffer = io.BytesIO()
    encode_png(bitmap, buffer)
    return buffer.getvalue()


def output_name(icon_id: str, weight: str, size: tuple[int, int]) -> str:
    """Default file name for a rendered icon, e.g. house-bold-24x24.png"""
    return f"{icon_id}-{weight}-{size[0]}x{size[1]}.png"


def write_png(bitmap: ic.Bitmap, path: str) -> str:
    """Write bitmap to path, creating parent directories. Returns the path."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    encode_png(bitmap, path)
    return path
