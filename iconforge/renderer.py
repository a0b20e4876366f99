# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
IconForge render pipeline.

IconRenderer ties the stages together for one request:

    bitmap cache hit -> done
    miss -> markup cache (resolve + parse on miss) -> weight transform
         -> rasterize -> store in bitmap cache -> done

If the icon cannot be resolved or its markup has no paths, the placeholder
icon is drawn instead and is not cached. Only AllocationError (unusable
size) and ValueError (unknown weight or antialias mode) reach the caller.

A renderer is an ordinary object: construct one, share it between threads,
and pass it to whoever needs icons. Several renderers may also share a single
IconCache instance.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, Union

from .core import types as ic
from .core.error import ParseError
from .core.icon_cache import BitmapCacheKey, IconCache
from .core.markup_parser import parse_markup
from .core.resolvers import DirectoryResolver, MarkupResolver
from .core.weight_transformer import DUOTONE_SECONDARY_OPACITY, transform
from .devices.cairo_rasterizer import ANTIALIAS_MAP, DEFAULT_FOREGROUND, rasterize

logger = logging.getLogger(__name__)

# Filled circle, radius 104, centered in the default viewport. Drawn with
# cubic curves (k = 0.5523) because path data has no arc command.
PLACEHOLDER_PATH_DATA = (
    "M128,24 "
    "C185.44,24 232,70.56 232,128 "
    "C232,185.44 185.44,232 128,232 "
    "C70.56,232 24,185.44 24,128 "
    "C24,70.56 70.56,24 128,24 Z"
)

PLACEHOLDER_DOCUMENT = ic.IconDocument(
    viewport=ic.DEFAULT_VIEWPORT,
    paths=(ic.StyledPath(PLACEHOLDER_PATH_DATA, fill=ic.CURRENT_COLOR),),
)

SizeSpec = Union[int, Tuple[int, int]]


class MemoryPressureSource(Protocol):
    """External event source that calls back when memory runs low."""

    def subscribe(self, callback: Callable[[], None]) -> None:
        ...


class IconRenderer:
    """Renders icons by identifier, weight and size with two-tier caching."""

    def __init__(self, resolver: MarkupResolver, cache: Optional[IconCache] = None,
                 foreground: tuple = DEFAULT_FOREGROUND, antialias: str = "gray",
                 default_size: tuple[int, int] = ic.DEFAULT_SIZE,
                 duotone_secondary_opacity: float = DUOTONE_SECONDARY_OPACITY) -> None:
        """
        Args:
            resolver: Supplies markup text for icon identifiers
            cache: Shared cache tiers; a private IconCache when None
            foreground: RGBA floats painted for every non-none color token
            antialias: Key of devices.cairo_rasterizer.ANTIALIAS_MAP
            default_size: Size used when render() gets no size
            duotone_secondary_opacity: Opacity of odd-indexed duotone paths
        """
        if antialias not in ANTIALIAS_MAP:
            raise ValueError(f"Unknown antialias mode {antialias!r}")
        self.resolver = resolver
        self.cache = cache if cache is not None else IconCache()
        self.foreground = tuple(foreground)
        self.antialias = antialias
        self.default_size = ic.normalize_size(default_size)
        self.duotone_secondary_opacity = duotone_secondary_opacity

    @classmethod
    def from_params(cls, params: Dict[str, Any], resolver: Optional[MarkupResolver] = None,
                    cache: Optional[IconCache] = None) -> "IconRenderer":
        """Build a renderer from a config.init_render_params() dictionary.

        When no resolver is given, params["IconDir"] must name a directory.
        """
        if resolver is None:
            if not params.get("IconDir"):
                raise ValueError("No resolver given and IconDir is not set")
            resolver = DirectoryResolver(params["IconDir"])
        if cache is None:
            cache = IconCache(
                markup_entries=params.get("MarkupCacheEntries"),
                bitmap_entries=params.get("BitmapCacheEntries"),
                bitmap_bytes=params.get("BitmapCacheBytes"),
            )
        return cls(
            resolver,
            cache=cache,
            foreground=params.get("ForegroundColor", DEFAULT_FOREGROUND),
            antialias=params.get("AntiAlias", "gray"),
            default_size=params.get("DefaultSize", ic.DEFAULT_SIZE),
            duotone_secondary_opacity=params.get("DuotoneSecondaryOpacity", DUOTONE_SECONDARY_OPACITY),
        )

    def render(self, icon_id: str, weight: str = ic.WEIGHT_REGULAR,
               size: Optional[SizeSpec] = None) -> ic.Bitmap:
        """
        Render icon_id at weight and size.

        Args:
            icon_id: Icon identifier understood by the resolver
            weight: One of types.WEIGHTS
            size: (width, height) or a single int for a square; default_size if None

        Returns:
            The rendered Bitmap, or the placeholder Bitmap if the icon is
            missing or unparsable

        Raises:
            ValueError: For an unknown weight
            AllocationError: If no bitmap of that size can be created
        """
        ic.validate_weight(weight)
        width, height = ic.normalize_size(size if size is not None else self.default_size)

        key = BitmapCacheKey(icon_id, weight, width, height)
        bitmap = self.cache.bitmaps.get(key)
        if bitmap is not None:
            logger.debug("Bitmap cache hit for %s/%s at %dx%d", icon_id, weight, width, height)
            return bitmap

        doc = self.load_document(icon_id)
        if doc is None:
            return self._render_placeholder(icon_id, (width, height))

        styled = transform(doc, weight, self.duotone_secondary_opacity)
        bitmap = rasterize(
            styled, (width, height),
            foreground=self.foreground,
            antialias=ANTIALIAS_MAP[self.antialias],
        )
        self.cache.bitmaps.put(key, bitmap)
        logger.debug("Rendered %s/%s at %dx%d", icon_id, weight, width, height)
        return bitmap

    def load_document(self, icon_id: str) -> Optional[ic.IconDocument]:
        """Return the parsed document for icon_id, or None if unavailable.

        Parsed documents are cached; failures are not, so an icon added
        later is picked up on the next request.
        """
        doc = self.cache.markup.get(icon_id)
        if doc is not None:
            return doc

        text = self.resolver.resolve(icon_id)
        if text is None:
            logger.warning("No markup found for icon %r", icon_id)
            return None
        try:
            doc = parse_markup(text)
        except ParseError as e:
            logger.warning("Cannot parse icon %r: %s", icon_id, e)
            return None

        self.cache.markup.put(icon_id, doc)
        return doc

    def _render_placeholder(self, icon_id: str, size: tuple[int, int]) -> ic.Bitmap:
        logger.debug("Rendering placeholder for %r", icon_id)
        return rasterize(
            PLACEHOLDER_DOCUMENT, size,
            foreground=self.foreground,
            antialias=ANTIALIAS_MAP[self.antialias],
            is_placeholder=True,
        )

    def small(self, icon_id: str, weight: str = ic.WEIGHT_REGULAR) -> ic.Bitmap:
        return self.render(icon_id, weight, ic.SIZE_SMALL)

    def medium(self, icon_id: str, weight: str = ic.WEIGHT_REGULAR) -> ic.Bitmap:
        return self.render(icon_id, weight, ic.SIZE_MEDIUM)

    def large(self, icon_id: str, weight: str = ic.WEIGHT_REGULAR) -> ic.Bitmap:
        return self.render(icon_id, weight, ic.SIZE_LARGE)

    def clear_caches(self) -> None:
        """Empty both cache tiers. Later renders recompute, results are unchanged."""
        self.cache.clear()

    def cache_stats(self) -> dict:
        return self.cache.stats()

    def attach_memory_pressure(self, source: MemoryPressureSource) -> None:
        """Clear caches whenever source reports memory pressure."""
        source.subscribe(self.clear_caches)
