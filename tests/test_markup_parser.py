"""Tests for the icon markup parser."""

from __future__ import annotations

import pytest

from iconforge.core import types as ic
from iconforge.core.error import NO_PATHS, ParseError
from iconforge.core.markup_parser import (
    extract_paths,
    extract_title,
    extract_viewport,
    is_valid_icon_markup,
    parse_markup,
)


def _svg(body, view_box='viewBox="0 0 256 256"'):
    return f'<svg xmlns="http://www.w3.org/2000/svg" {view_box}>{body}</svg>'


class TestParseMarkup:
    def test_house(self, icons):
        doc = parse_markup(icons["house"])
        assert doc.viewport == ic.Viewport(0, 0, 256, 256)
        assert len(doc.paths) == 2
        first = doc.paths[0]
        assert first.path_data == "M40,216 V112 L128,40 L216,112 V216 Z"
        assert first.fill == "none"
        assert first.stroke == "currentColor"
        assert first.stroke_width == 16.0
        assert first.fill_rule is None
        assert first.opacity is None

    def test_single_path_with_fill(self):
        doc = parse_markup(_svg('<path d="M0,0L10,0L10,10Z" fill="currentColor"/>'))
        assert doc.paths == (ic.StyledPath("M0,0L10,0L10,10Z", fill="currentColor"),)

    def test_document_order_is_kept(self):
        doc = parse_markup(_svg('<path d="M1,1"/><path d="M2,2"/><path d="M3,3"/>'))
        assert [p.path_data for p in doc.paths] == ["M1,1", "M2,2", "M3,3"]

    def test_no_paths_is_parse_error(self, icons):
        with pytest.raises(ParseError) as excinfo:
            parse_markup(icons["broken"])
        assert excinfo.value.reason == NO_PATHS

    def test_empty_text_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_markup("")

    def test_path_without_data_is_skipped(self):
        doc = parse_markup(_svg('<path fill="red"/><path d=""/><path d="M5,5"/>'))
        assert [p.path_data for p in doc.paths] == ["M5,5"]

    def test_fill_rule(self, icons):
        doc = parse_markup(icons["frame"])
        assert doc.paths[0].fill_rule == ic.FILL_RULE_EVEN_ODD

    def test_single_quotes(self):
        doc = parse_markup(_svg("<path d='M0,0 L1,1' stroke='currentColor'/>"))
        assert doc.paths[0].path_data == "M0,0 L1,1"
        assert doc.paths[0].stroke == "currentColor"

    def test_attributes_are_scoped_to_their_element(self):
        doc = parse_markup(_svg(
            '<path d="M0,0" fill="none"/>'
            '<path d="M1,1"/>'
        ))
        assert doc.paths[0].fill == "none"
        assert doc.paths[1].fill is None

    def test_prefixed_attributes_do_not_match(self):
        doc = parse_markup(_svg('<path data-fill="red" marker-stroke="blue" d="M0,0"/>'))
        assert doc.paths[0].fill is None
        assert doc.paths[0].stroke is None

    def test_attribute_text_inside_path_data_is_ignored(self):
        doc = parse_markup(_svg('<path d="M0,0 fill=\'x\'" stroke-width="2"/>'))
        assert doc.paths[0].fill is None
        assert doc.paths[0].stroke_width == 2.0

    def test_stroke_width_units_and_garbage(self):
        doc = parse_markup(_svg(
            '<path d="M0,0" stroke-width="12px"/>'
            '<path d="M0,0" stroke-width="wide"/>'
            '<path d="M0,0" stroke-width="-3"/>'
            '<path d="M0,0" stroke-width="1e999"/>'
            '<path d="M0,0" stroke-width="nan"/>'
        ))
        assert [p.stroke_width for p in doc.paths] == [12.0, None, None, None, None]

    def test_bad_path_data_still_parses(self):
        doc = parse_markup(_svg('<path d="hello world"/>'))
        assert doc.paths[0].path_data == "hello world"


class TestViewport:
    def test_declared_viewport(self):
        assert extract_viewport(_svg("", 'viewBox="-8 4 48 24"')) == ic.Viewport(-8, 4, 48, 24)

    def test_comma_separated(self):
        assert extract_viewport(_svg("", 'viewBox="0,0,32,32"')) == ic.Viewport(0, 0, 32, 32)

    def test_missing_viewbox_uses_default(self):
        assert extract_viewport("<svg><path d='M0,0'/></svg>") == ic.DEFAULT_VIEWPORT

    @pytest.mark.parametrize("value", [
        "0 0 256", "0 0 a b", "", "0 0 0 10", "0 0 10 -1",
        "0 0 inf 256", "0 0 nan 256", "0 0 1e300 1e300", "inf 0 256 256",
    ])
    def test_malformed_viewbox_uses_default(self, value):
        assert extract_viewport(_svg("", f'viewBox="{value}"')) == ic.DEFAULT_VIEWPORT

    def test_first_viewbox_wins(self):
        text = _svg('<svg viewBox="0 0 10 10"></svg>', 'viewBox="0 0 20 20"')
        assert extract_viewport(text).width == 20


class TestHelpers:
    def test_extract_paths_empty(self):
        assert extract_paths("<svg></svg>") == []

    def test_is_valid_icon_markup(self, icons):
        assert is_valid_icon_markup(icons["house"])
        assert not is_valid_icon_markup("<svg><path d='M0,0'/></svg>")
        assert not is_valid_icon_markup("plain text")

    def test_extract_title(self, icons):
        assert extract_title(icons["house"]) == "house"
        assert extract_title(icons["square"]) is None
