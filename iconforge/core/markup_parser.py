# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Icon Markup Parser

A small, regex-driven reader for the restricted markup dialect used by icon
sources. It does not build an XML tree: it scans for the first viewBox
declaration and for every <path> element carrying a `d` attribute.

Extraction rules:
- viewBox: exactly four whitespace- or comma-separated finite numbers with
  a positive size, otherwise the default 0 0 256 256 viewport is used (never
  an error)
- paths: `d` is captured verbatim; fill, stroke, stroke-width and fill-rule
  are matched inside the text of that one element only
- zero path elements is a ParseError, not an empty document

Path data syntax is not checked here. Bad path data renders as nothing.
"""

import logging
import math
import re

from . import types as ic
from .error import NO_PATHS, ParseError

logger = logging.getLogger(__name__)

_VIEWBOX_RE = re.compile(r'viewBox\s*=\s*["\']([^"\']*)["\']')

# A whole <path .../> or <path ...> tag; the d attribute is pulled from it below
_PATH_ELEMENT_RE = re.compile(r"<path\b[^>]*>", re.IGNORECASE)
_PATH_DATA_RE = re.compile(r'(?<![\w-])d\s*=\s*(["\'])(.*?)\1', re.IGNORECASE | re.DOTALL)

# Lookbehind rejects suffix matches such as data-fill or marker-stroke
_ATTRIBUTE_RES = {
    "fill": re.compile(r'(?<![\w-])fill\s*=\s*(["\'])(.*?)\1', re.IGNORECASE),
    "stroke": re.compile(r'(?<![\w-])stroke\s*=\s*(["\'])(.*?)\1', re.IGNORECASE),
    "stroke-width": re.compile(r'(?<![\w-])stroke-width\s*=\s*(["\'])(.*?)\1', re.IGNORECASE),
    "fill-rule": re.compile(r'(?<![\w-])fill-rule\s*=\s*(["\'])(.*?)\1', re.IGNORECASE),
}

_TITLE_RE = re.compile(r"<title>([^<]+)</title>", re.IGNORECASE)


def parse_markup(text: str) -> ic.IconDocument:
    """
    Parse icon markup into an IconDocument.

    Args:
        text: Raw markup text

    Returns:
        IconDocument with the extracted viewport and paths

    Raises:
        ParseError: If the markup contains no path element with path data
    """
    viewport = extract_viewport(text)
    paths = extract_paths(text)
    if not paths:
        raise ParseError(NO_PATHS, "Icon markup contains no <path> elements")
    return ic.IconDocument(viewport=viewport, paths=tuple(paths))


def extract_viewport(text: str) -> ic.Viewport:
    """Return the first viewBox in text, or the default viewport."""
    match = _VIEWBOX_RE.search(text)
    if match is None:
        return ic.DEFAULT_VIEWPORT

    parts = match.group(1).replace(",", " ").split()
    if len(parts) != 4:
        logger.debug("Malformed viewBox %r, using default", match.group(1))
        return ic.DEFAULT_VIEWPORT
    try:
        x, y, width, height = (float(p) for p in parts)
    except ValueError:
        logger.debug("Non-numeric viewBox %r, using default", match.group(1))
        return ic.DEFAULT_VIEWPORT
    if not all(math.isfinite(v) for v in (x, y, width, height, width * height)):
        logger.debug("Out of range viewBox %r, using default", match.group(1))
        return ic.DEFAULT_VIEWPORT
    if width <= 0 or height <= 0:
        logger.debug("Empty viewBox %r, using default", match.group(1))
        return ic.DEFAULT_VIEWPORT
    return ic.Viewport(x, y, width, height)


def extract_paths(text: str) -> list[ic.StyledPath]:
    """Return a StyledPath for every <path> element that has path data."""
    paths: list[ic.StyledPath] = []
    for element_match in _PATH_ELEMENT_RE.finditer(text):
        element = element_match.group(0)
        data_match = _PATH_DATA_RE.search(element)
        if data_match is None or not data_match.group(2):
            continue
        attributes = _parse_path_attributes(element)
        paths.append(ic.StyledPath(
            path_data=data_match.group(2),
            fill_rule=attributes.get("fill-rule"),
            stroke_width=_parse_stroke_width(attributes.get("stroke-width")),
            fill=attributes.get("fill"),
            stroke=attributes.get("stroke"),
        ))
    return paths


def _parse_path_attributes(element: str) -> dict[str, str]:
    # The d value may contain anything, so blank it before looking for styles
    element = _PATH_DATA_RE.sub("", element, count=1)
    attributes: dict[str, str] = {}
    for name, pattern in _ATTRIBUTE_RES.items():
        match = pattern.search(element)
        if match is not None:
            attributes[name] = match.group(2).strip()
    return attributes


def _parse_stroke_width(value: str | None) -> float | None:
    if not value:
        return None
    if value.endswith("px"):
        value = value[:-2]
    try:
        width = float(value)
    except ValueError:
        return None
    return width if width > 0 and math.isfinite(width) else None


def is_valid_icon_markup(text: str) -> bool:
    """Quick structural check that text looks like a single-icon document."""
    return ("<svg" in text
            and "viewBox" in text
            and "<path" in text
            and "</svg>" in text)


def extract_title(text: str) -> str | None:
    """Return the text of the first <title> element, if any."""
    match = _TITLE_RE.search(text)
    if match is None:
        return None
    return match.group(1)
