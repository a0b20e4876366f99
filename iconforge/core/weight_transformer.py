# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Weight Transformer

Derives every icon weight from the single canonical (regular) path set by
rewriting paint attributes. Geometry is never touched: thin and light trade
fills for thinner strokes, bold thickens strokes, fill and duotone turn every
path into a solid fill.

The input document may be shared through the markup cache, so every rule
builds new StyledPath values with dataclasses.replace() and a new
IconDocument. The input is never mutated.
"""

from __future__ import annotations

from dataclasses import replace

from . import types as ic

THIN_STROKE_SCALE = 0.67
LIGHT_STROKE_SCALE = 0.83
BOLD_STROKE_SCALE = 1.67
BOLD_FILLED_STROKE_WIDTH = 2.5
DUOTONE_PRIMARY_OPACITY = 1.0
DUOTONE_SECONDARY_OPACITY = 0.3


def transform(doc: ic.IconDocument, weight: str,
              duotone_secondary_opacity: float = DUOTONE_SECONDARY_OPACITY) -> ic.IconDocument:
    """
    Return the document restyled for weight.

    Args:
        doc: Canonical document (left untouched)
        weight: One of types.WEIGHTS
        duotone_secondary_opacity: Opacity of odd-indexed paths for duotone

    Returns:
        A document with the same viewport and path data, new paint attributes

    Raises:
        ValueError: For an unknown weight
    """
    ic.validate_weight(weight)

    if weight == ic.WEIGHT_REGULAR:
        # Frozen, so sharing the canonical document is safe
        return doc
    if weight == ic.WEIGHT_DUOTONE:
        paths = tuple(
            _duotone(path, index, duotone_secondary_opacity)
            for index, path in enumerate(doc.paths)
        )
    else:
        rule = _RULES[weight]
        paths = tuple(rule(path) for path in doc.paths)
    return ic.IconDocument(viewport=doc.viewport, paths=paths)


def _stroke_width(path: ic.StyledPath) -> float:
    if path.stroke_width is None:
        return ic.DEFAULT_STROKE_WIDTH
    return path.stroke_width


def _outline(path: ic.StyledPath, scale: float) -> ic.StyledPath:
    # Fills are dropped, the shape is drawn as a foreground outline
    return replace(
        path,
        fill=ic.NONE,
        stroke=ic.CURRENT_COLOR,
        stroke_width=_stroke_width(path) * scale,
    )


def _thin(path: ic.StyledPath) -> ic.StyledPath:
    return _outline(path, THIN_STROKE_SCALE)


def _light(path: ic.StyledPath) -> ic.StyledPath:
    return _outline(path, LIGHT_STROKE_SCALE)


def _bold(path: ic.StyledPath) -> ic.StyledPath:
    if path.stroke_width is not None:
        return replace(path, stroke_width=path.stroke_width * BOLD_STROKE_SCALE)
    # Filled shape: outline it in the foreground color to fatten it
    return replace(
        path,
        fill=ic.CURRENT_COLOR,
        stroke=ic.CURRENT_COLOR,
        stroke_width=BOLD_FILLED_STROKE_WIDTH,
    )


def _fill(path: ic.StyledPath) -> ic.StyledPath:
    return replace(
        path,
        fill=ic.CURRENT_COLOR,
        stroke=None,
        stroke_width=None,
        fill_rule=ic.FILL_RULE_NONZERO,
    )


def _duotone(path: ic.StyledPath, index: int, secondary_opacity: float) -> ic.StyledPath:
    opacity = DUOTONE_PRIMARY_OPACITY if index % 2 == 0 else secondary_opacity
    return replace(
        path,
        fill=ic.CURRENT_COLOR,
        stroke=None,
        stroke_width=None,
        fill_rule=path.fill_rule or ic.FILL_RULE_NONZERO,
        opacity=opacity,
    )


_RULES = {
    ic.WEIGHT_THIN: _thin,
    ic.WEIGHT_LIGHT: _light,
    ic.WEIGHT_BOLD: _bold,
    ic.WEIGHT_FILL: _fill,
}
