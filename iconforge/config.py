# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Render parameter defaults.

The command line starts from init_render_params() and overrides entries from
its flags; library users can do the same before calling
IconRenderer.from_params().
"""

from __future__ import annotations

from typing import Any, Dict

from .core import types as ic
from .core.icon_cache import BitmapCache, MarkupCache
from .core.weight_transformer import DUOTONE_SECONDARY_OPACITY
from .devices.cairo_rasterizer import DEFAULT_FOREGROUND


def init_render_params() -> Dict[str, Any]:
    """
    Initialize render parameters.

    Returns:
        Dict[str, Any]: Render parameters dictionary containing:
            - IconDir: Directory of <icon>.svg files, or None
            - DefaultSize: (width, height) used when no size is given
            - ForegroundColor: RGBA floats for every painted token
            - MarkupCacheEntries: Markup tier entry limit
            - BitmapCacheEntries: Bitmap tier entry limit
            - BitmapCacheBytes: Bitmap tier memory limit
            - AntiAlias: Name of the cairo anti-aliasing mode
            - DuotoneSecondaryOpacity: Opacity of odd duotone layers
    """
    return {
        "IconDir": None,
        "DefaultSize": ic.DEFAULT_SIZE,
        "ForegroundColor": DEFAULT_FOREGROUND,
        "MarkupCacheEntries": MarkupCache.DEFAULT_MAX_ENTRIES,
        "BitmapCacheEntries": BitmapCache.DEFAULT_MAX_ENTRIES,
        "BitmapCacheBytes": BitmapCache.DEFAULT_MAX_BYTES,
        "AntiAlias": "gray",
        "DuotoneSecondaryOpacity": DUOTONE_SECONDARY_OPACITY,
    }


def parse_hex_color(value: str) -> tuple[float, float, float, float]:
    """Parse #rgb, #rrggbb or #rrggbbaa into RGBA floats.

    Raises:
        ValueError: If value is not one of those forms
    """
    text = value.strip()
    if text.startswith("#"):
        text = text[1:]
    if len(text) == 3:
        text = "".join(c * 2 for c in text)
    if len(text) == 6:
        text += "ff"
    if len(text) != 8:
        raise ValueError(f"Invalid color {value!r}")
    try:
        channels = [int(text[i:i + 2], 16) for i in range(0, 8, 2)]
    except ValueError:
        raise ValueError(f"Invalid color {value!r}")
    return tuple(c / 255.0 for c in channels)  # type: ignore[return-value]
