#!/usr/bin/env python3
# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
IconForge - command line entry point

Renders one or more icons from a directory of markup files to PNG.

Usage:
    iconforge -i icons/ house
    iconforge -i icons/ -w bold -s 48 house gear
    iconforge -i icons/ -s 100x50 -o house.png house
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from .cli_args import build_argument_parser, get_output_path
from .config import init_render_params, parse_hex_color
from .core.error import AllocationError
from .devices.image import write_image
from .renderer import IconRenderer


def _print_cache_stats(stats: dict) -> None:
    for tier, values in stats.items():
        line = ", ".join(
            f"{name}={value:.2f}" if isinstance(value, float) else f"{name}={value}"
            for name, value in values.items()
        )
        print(f"{tier}: {line}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for IconForge.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.outputfile and len(args.icons) > 1:
        parser.error("-o/--output can only be used with a single icon")

    params = init_render_params()
    params["IconDir"] = args.icon_dir
    if args.size:
        params["DefaultSize"] = args.size
    if args.antialias:
        params["AntiAlias"] = args.antialias
    if args.foreground:
        try:
            params["ForegroundColor"] = parse_hex_color(args.foreground)
        except ValueError as e:
            parser.error(str(e))

    renderer = IconRenderer.from_params(params)
    size = renderer.default_size

    status = 0
    for icon_id in args.icons:
        try:
            bitmap = renderer.render(icon_id, args.weight, size)
        except AllocationError as e:
            print(f"Error: {icon_id}: {e}", file=sys.stderr)
            status = 1
            continue
        path = get_output_path(args.outputfile, args.output_dir, icon_id, args.weight, size)
        write_image(bitmap, path)
        if bitmap.is_placeholder:
            print(f"{path} (placeholder: icon {icon_id!r} not found or unparsable)")
        else:
            print(path)

    if args.cache_stats:
        _print_cache_stats(renderer.cache_stats())

    return status


if __name__ == "__main__":
    sys.exit(main())
