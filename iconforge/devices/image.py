# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Pillow Output Device

Converts a Bitmap into a PIL Image for callers that want an image object or
a format cairo cannot write (TIFF, WebP, ICO, ...). PNG files still go
through the cairo PNG device.
"""

import os
import sys

from PIL import Image

from ..core import types as ic
from .png import write_png

# Cairo ARGB32 is a native-endian word: BGRA bytes on little-endian hosts
_RAW_MODE = "BGRa" if sys.byteorder == "little" else "ARGB"


def to_pil_image(bitmap: ic.Bitmap) -> Image.Image:
    """Return bitmap as a straight-alpha RGBA PIL Image.

    Uses direct buffer access (no PNG round-trip).
    """
    return Image.frombuffer(
        "RGBA", (bitmap.width, bitmap.height), bitmap.data,
        "raw", _RAW_MODE, bitmap.stride, 1,
    ).copy()


def write_image(bitmap: ic.Bitmap, path: str) -> str:
    """Write bitmap to path in the format named by its extension.

    Returns:
        The path written
    """
    if path.lower().endswith(".png"):
        return write_png(bitmap, path)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    to_pil_image(bitmap).save(path)
    return path
