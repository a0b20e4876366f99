# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Path Data Interpreter

This module turns the path-data mini-language found in icon markup `d`
attributes into Geometry: a flat list of MoveTo, LineTo, CurveTo and
ClosePath elements in absolute viewport coordinates.

Architecture:
- Tokenizer: splits the text into command letters and numbers; commas,
  whitespace and any other characters only separate tokens
- Command interpreter: each command letter consumes a fixed number of
  numeric operands and updates the current point

Supported commands:
- M/m: moveto (2 operands)
- L/l: lineto (2 operands)
- H/h: horizontal lineto (1 operand)
- V/v: vertical lineto (1 operand)
- C/c: cubic curveto (6 operands)
- Z/z: closepath (no operands)

Lower-case commands are relative to the current point. Unknown letters and
stray numbers are skipped. A command with too few operands is dropped and
interpretation continues with the next command.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Tuple, Union

from . import types as ic

logger = logging.getLogger(__name__)

# Number first so exponents ("1e-3") are not split into a command letter
_TOKEN_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?|[A-Za-z]")

_ARITY = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "Z": 0,
}

Token = Union[str, float]


def tokenize(path_data: str) -> Iterator[Token]:
    """Yield command letters (str) and operands (float) from path data."""
    for match in _TOKEN_RE.finditer(path_data):
        text = match.group(0)
        if text.isalpha():
            yield text
        else:
            yield float(text)


class PathInterpreter:
    """
    Path data execution engine

    Walks the token stream once, keeping the current point so relative
    commands can be resolved to absolute coordinates.
    """

    def __init__(self) -> None:
        self.geometry = ic.Geometry()
        self.current_point = (0.0, 0.0)
        self.subpath_start = (0.0, 0.0)
        # Second control point of the last curve. Nothing reads it yet; a
        # smooth curveto (S/s) would reflect it.
        self.last_control_point = (0.0, 0.0)
        self.dropped = 0

    def interpret(self, path_data: str) -> ic.Geometry:
        """
        Interpret path data into Geometry.

        Args:
            path_data: Raw `d` attribute text

        Returns:
            Geometry in absolute coordinates, possibly empty
        """
        for command, operands in self._parse_commands(path_data):
            self._execute_command(command, operands)
        return self.geometry

    def _parse_commands(self, path_data: str) -> List[Tuple[str, Optional[List[float]]]]:
        """
        Group tokens into (command, operands) pairs.

        Operands is None when the command did not get all the numbers it needs
        before the next letter or the end of the text.
        """
        commands: List[Tuple[str, Optional[List[float]]]] = []
        pending: Optional[str] = None
        operands: List[float] = []

        for token in tokenize(path_data):
            if isinstance(token, str):
                if pending is not None:
                    commands.append((pending, None))
                    pending = None
                key = token.upper()
                if key not in _ARITY:
                    logger.debug("Skipping unknown path command %r", token)
                    continue
                if _ARITY[key] == 0:
                    commands.append((token, []))
                    continue
                pending = token
                operands = []
                continue

            if pending is None:
                # Numbers beyond a command's arity are ignored
                continue
            operands.append(token)
            if len(operands) == _ARITY[pending.upper()]:
                commands.append((pending, operands))
                pending = None

        if pending is not None:
            commands.append((pending, None))
        return commands

    def _execute_command(self, command: str, operands: Optional[List[float]]) -> None:
        if operands is None:
            self.dropped += 1
            logger.debug("Dropping path command %r: missing operands", command)
            return

        relative = command.islower()
        key = command.upper()

        if key == "M":
            self._cmd_moveto(operands, relative)
        elif key == "L":
            self._cmd_lineto(operands, relative)
        elif key == "H":
            self._cmd_hlineto(operands, relative)
        elif key == "V":
            self._cmd_vlineto(operands, relative)
        elif key == "C":
            self._cmd_curveto(operands, relative)
        elif key == "Z":
            self._cmd_closepath()

    def _resolve(self, x: float, y: float, relative: bool) -> Tuple[float, float]:
        if relative:
            return (self.current_point[0] + x, self.current_point[1] + y)
        return (x, y)

    def _cmd_moveto(self, operands: List[float], relative: bool) -> None:
        """moveto: start a new subpath"""
        point = self._resolve(operands[0], operands[1], relative)
        self.geometry.append(ic.MoveTo(ic.Point(*point)))
        self.current_point = point
        self.subpath_start = point
        self.last_control_point = point

    def _cmd_lineto(self, operands: List[float], relative: bool) -> None:
        """lineto: straight line to a point"""
        point = self._resolve(operands[0], operands[1], relative)
        self._line_to(point)

    def _cmd_hlineto(self, operands: List[float], relative: bool) -> None:
        """hlineto: horizontal line, y stays put"""
        x = self.current_point[0] + operands[0] if relative else operands[0]
        self._line_to((x, self.current_point[1]))

    def _cmd_vlineto(self, operands: List[float], relative: bool) -> None:
        """vlineto: vertical line, x stays put"""
        y = self.current_point[1] + operands[0] if relative else operands[0]
        self._line_to((self.current_point[0], y))

    def _cmd_curveto(self, operands: List[float], relative: bool) -> None:
        """curveto: cubic Bezier with two control points"""
        # All three points of a relative curve are offsets from the same start
        cp1 = self._resolve(operands[0], operands[1], relative)
        cp2 = self._resolve(operands[2], operands[3], relative)
        end = self._resolve(operands[4], operands[5], relative)
        self.geometry.append(ic.CurveTo(ic.Point(*cp1), ic.Point(*cp2), ic.Point(*end)))
        self.current_point = end
        self.last_control_point = cp2

    def _cmd_closepath(self) -> None:
        """closepath: close the subpath, current point returns to its start"""
        self.geometry.append(ic.ClosePath())
        self.current_point = self.subpath_start
        self.last_control_point = self.subpath_start

    def _line_to(self, point: Tuple[float, float]) -> None:
        self.geometry.append(ic.LineTo(ic.Point(*point)))
        self.current_point = point
        self.last_control_point = point


def interpret(path_data: str) -> ic.Geometry:
    """Interpret path data into absolute Geometry. Never raises on bad input."""
    return PathInterpreter().interpret(path_data)
