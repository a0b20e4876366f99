"""Shared test fixtures."""

from __future__ import annotations

from collections import Counter

import pytest

from iconforge.core.resolvers import MappingResolver
from iconforge.renderer import IconRenderer


# Sample icons in the markup dialect the parser reads

HOUSE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 256">
  <title>house</title>
  <path d="M40,216 V112 L128,40 L216,112 V216 Z" fill="none" stroke="currentColor" stroke-width="16"/>
  <path d="M104,216 V152 H152 V216" fill="none" stroke="currentColor" stroke-width="16"/>
</svg>'''

SQUARE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 256">
  <path d="M0,0 H256 V256 H0 Z" fill="currentColor"/>
</svg>'''

TOP_HALF_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 256">
  <path d="M0,0 H256 V128 H0 Z" fill="currentColor"/>
</svg>'''

FRAME_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 256">
  <path d="M0,0 H256 V256 H0 Z M64,64 H192 V192 H64 Z" fill="currentColor" fill-rule="evenodd"/>
</svg>'''

CIRCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 256">
  <path d="M128,24 C185.44,24 232,70.56 232,128 C232,185.44 185.44,232 128,232 C70.56,232 24,185.44 24,128 C24,70.56 70.56,24 128,24 Z" fill="currentColor"/>
</svg>'''

NO_PATHS_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 256">
  <rect x="0" y="0" width="256" height="256"/>
</svg>'''

ICONS = {
    "house": HOUSE_SVG,
    "square": SQUARE_SVG,
    "top-half": TOP_HALF_SVG,
    "frame": FRAME_SVG,
    "circle": CIRCLE_SVG,
    "broken": NO_PATHS_SVG,
}


class CountingResolver(MappingResolver):
    """MappingResolver that records how often each identifier is resolved."""

    def __init__(self, mapping) -> None:
        super().__init__(mapping)
        self.calls: Counter[str] = Counter()

    def resolve(self, icon_id):
        self.calls[icon_id] += 1
        return super().resolve(icon_id)


@pytest.fixture
def resolver():
    return CountingResolver(ICONS)


@pytest.fixture
def renderer(resolver):
    return IconRenderer(resolver)


@pytest.fixture
def icon_dir(tmp_path):
    """Directory of <icon>.svg files holding the sample icons."""
    directory = tmp_path / "icons"
    directory.mkdir()
    for name, markup in ICONS.items():
        (directory / f"{name}.svg").write_text(markup, encoding="utf-8")
    return directory


@pytest.fixture
def icons():
    return dict(ICONS)
