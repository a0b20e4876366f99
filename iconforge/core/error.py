# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
IconForge error types.

Only two conditions are raised as exceptions:
- ParseError: markup yielded no path elements (recovered by the renderer)
- AllocationError: the pixel buffer cannot be created (propagated to callers)

A path command with bad operands is not an error; the interpreter drops that
command and carries on.
"""

from __future__ import annotations

# parse failure reasons
NO_PATHS = "nopaths"


class IconForgeError(Exception):
    """Base class for IconForge errors"""
    pass


class ParseError(IconForgeError):
    """Raised when markup text cannot produce an IconDocument"""

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or f"Icon markup parse failed: {reason}")


class AllocationError(IconForgeError):
    """Raised when a pixel buffer of the requested size cannot be created"""

    def __init__(self, width: object, height: object, message: str | None = None) -> None:
        self.width = width
        self.height = height
        super().__init__(message or f"Cannot allocate a {width}x{height} bitmap")
