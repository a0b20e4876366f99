# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for IconForge.

Handles command-line argument definition, parsing, size specifications,
and output file naming.
"""

from __future__ import annotations

import argparse
import os
from importlib import metadata

from .core import types as ic
from .devices.cairo_rasterizer import ANTIALIAS_MAP, MAX_DIMENSION
from .devices.png import output_name


def parse_size(spec: str) -> tuple[int, int]:
    """Parse a size specification into a (width, height) pair.

    Supports square sizes (``24``) and explicit ``WxH`` pairs (``48x32``).

    Args:
        spec: Size string, e.g. ``"24"`` or ``"100x50"``

    Returns:
        (width, height) in pixels.

    Raises:
        ValueError: If the specification is malformed or out of range.
    """
    parts = spec.lower().split("x")
    if len(parts) == 1:
        parts = parts * 2
    if len(parts) != 2:
        raise ValueError(f"Invalid size: '{spec}'")
    try:
        width = int(parts[0])
        height = int(parts[1])
    except ValueError:
        raise ValueError(f"Invalid size: '{spec}'")
    if not (0 < width <= MAX_DIMENSION and 0 < height <= MAX_DIMENSION):
        raise ValueError(f"Size out of range (1-{MAX_DIMENSION}): '{spec}'")
    return (width, height)


def _size_type(spec: str) -> tuple[int, int]:
    try:
        return parse_size(spec)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def get_output_path(outputfile: str | None, output_dir: str, icon_id: str,
                    weight: str, size: tuple[int, int]) -> str:
    """
    Derive the output path for one rendered icon.

    Args:
        outputfile: The -o argument value (or None)
        output_dir: The --output-dir argument value
        icon_id: Icon being written
        weight: Weight it was rendered at
        size: (width, height) it was rendered at

    Returns:
        File path for the image
    """
    if outputfile:
        return outputfile
    return os.path.join(output_dir, output_name(icon_id, weight, size))


def _get_version() -> str:
    try:
        return metadata.version("iconforge")
    except metadata.PackageNotFoundError:
        return "unknown"


def build_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the IconForge argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="iconforge",
        description="IconForge - render vector icons to PNG at any weight and size",
    )

    parser.add_argument(
        "-V", "--version", action="version",
        version=f"IconForge {_get_version()}"
    )
    parser.add_argument("icons", nargs="+", help="Icon identifiers to render")
    parser.add_argument(
        "-i", "--icon-dir", dest="icon_dir", required=True,
        help="Directory containing <icon>.svg markup files"
    )
    parser.add_argument(
        "-w", "--weight", choices=ic.WEIGHTS, default=ic.WEIGHT_REGULAR,
        help="Icon weight (default: regular)"
    )
    parser.add_argument(
        "-s", "--size", type=_size_type,
        help="Output size in pixels, N or WxH (default: 24)"
    )
    parser.add_argument(
        "-o", "--output", dest="outputfile",
        help="Output filename; the extension picks the format (only valid with a single icon)"
    )
    parser.add_argument(
        "--output-dir", dest="output_dir", default="if_output",
        help="Specify output directory (default: if_output)"
    )
    parser.add_argument(
        "--antialias",
        choices=sorted(ANTIALIAS_MAP),
        help="Set anti-aliasing mode for Cairo rendering (default: gray)"
    )
    parser.add_argument(
        "--foreground",
        help="Foreground color as #rgb, #rrggbb or #rrggbbaa (default: #000000)"
    )
    parser.add_argument(
        "--cache-stats", action="store_true",
        help="Print cache statistics after rendering"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    return parser
