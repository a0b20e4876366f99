# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Markup resolvers: map an icon identifier to raw markup text.

Resolution runs before parsing and outside every cache lock. A resolver
returns None when it has nothing for an identifier; the renderer then draws
the placeholder icon.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Protocol

logger = logging.getLogger(__name__)


class MarkupResolver(Protocol):
    """Anything that can supply markup text for an icon identifier."""

    def resolve(self, icon_id: str) -> Optional[str]:
        ...


class MappingResolver:
    """Resolve identifiers from an in-memory mapping."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = dict(mapping)

    def resolve(self, icon_id: str) -> Optional[str]:
        return self._mapping.get(icon_id)


class DirectoryResolver:
    """Resolve identifiers to `<root>/<icon_id><extension>` files.

    Identifiers that would point outside root (path separators, "..") are
    treated as misses. Unreadable or undecodable files are misses too.
    """

    def __init__(self, root: str, extension: str = ".svg") -> None:
        self.root = os.path.abspath(root)
        self.extension = extension

    def path_for(self, icon_id: str) -> Optional[str]:
        if not icon_id or icon_id in (".", "..") or "/" in icon_id or "\\" in icon_id:
            return None
        return os.path.join(self.root, icon_id + self.extension)

    def resolve(self, icon_id: str) -> Optional[str]:
        path = self.path_for(icon_id)
        if path is None:
            logger.warning("Rejected icon identifier %r", icon_id)
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read icon markup %s: %s", path, e)
            return None

    def icon_ids(self) -> list[str]:
        """Return the identifiers available under root, sorted."""
        if not os.path.isdir(self.root):
            return []
        return sorted(
            name[:-len(self.extension)]
            for name in os.listdir(self.root)
            if name.endswith(self.extension)
        )
