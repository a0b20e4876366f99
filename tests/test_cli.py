"""Tests for the iconforge command line."""

from __future__ import annotations

import os

import pytest
from PIL import Image

from iconforge.cli import main
from iconforge.cli_args import build_argument_parser, get_output_path, parse_size
from iconforge.config import parse_hex_color


class TestParseSize:
    def test_square(self):
        assert parse_size("24") == (24, 24)

    def test_pair(self):
        assert parse_size("100x50") == (100, 50)
        assert parse_size("100X50") == (100, 50)

    @pytest.mark.parametrize("spec", ["", "x", "0", "10x", "1x2x3", "abc", "40000", "-5"])
    def test_invalid(self, spec):
        with pytest.raises(ValueError):
            parse_size(spec)


class TestArguments:
    def test_defaults(self):
        args = build_argument_parser().parse_args(["-i", "icons", "house"])
        assert args.icons == ["house"]
        assert args.weight == "regular"
        assert args.size is None
        assert args.output_dir == "if_output"

    @pytest.mark.parametrize("mode", ["none", "fast", "good", "best", "gray", "subpixel"])
    def test_antialias_modes(self, mode):
        args = build_argument_parser().parse_args(["-i", "icons", "--antialias", mode, "house"])
        assert args.antialias == mode

    def test_invalid_antialias(self):
        with pytest.raises(SystemExit):
            build_argument_parser().parse_args(["-i", "icons", "--antialias", "blurry", "house"])

    def test_invalid_weight(self):
        with pytest.raises(SystemExit):
            build_argument_parser().parse_args(["-i", "icons", "-w", "heavy", "house"])

    def test_invalid_size(self):
        with pytest.raises(SystemExit):
            build_argument_parser().parse_args(["-i", "icons", "-s", "0", "house"])

    def test_output_path(self):
        assert get_output_path("out.png", "dir", "house", "bold", (24, 24)) == "out.png"
        assert get_output_path(None, "dir", "house", "bold", (48, 32)) == os.path.join(
            "dir", "house-bold-48x32.png")


class TestHexColor:
    def test_forms(self):
        assert parse_hex_color("#fff") == (1.0, 1.0, 1.0, 1.0)
        assert parse_hex_color("#ff0000") == (1.0, 0.0, 0.0, 1.0)
        assert parse_hex_color("00000000") == (0.0, 0.0, 0.0, 0.0)

    @pytest.mark.parametrize("value", ["", "#12", "#zzzzzz", "#1234567"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_hex_color(value)


class TestMain:
    def test_writes_png_per_icon(self, icon_dir, tmp_path, capsys):
        out = tmp_path / "out"
        status = main(["-i", str(icon_dir), "-w", "bold", "-s", "48x32",
                       "--output-dir", str(out), "house", "square"])
        assert status == 0
        for name in ("house-bold-48x32.png", "square-bold-48x32.png"):
            with Image.open(out / name) as image:
                assert image.size == (48, 32)
        assert "house-bold-48x32.png" in capsys.readouterr().out

    def test_missing_icon_writes_placeholder(self, icon_dir, tmp_path, capsys):
        target = tmp_path / "nope.png"
        status = main(["-i", str(icon_dir), "-o", str(target), "nope"])
        assert status == 0
        assert target.exists()
        assert "placeholder" in capsys.readouterr().out

    def test_output_with_several_icons_is_rejected(self, icon_dir, tmp_path):
        with pytest.raises(SystemExit):
            main(["-i", str(icon_dir), "-o", str(tmp_path / "x.png"), "house", "square"])

    def test_bad_foreground_is_rejected(self, icon_dir, tmp_path):
        with pytest.raises(SystemExit):
            main(["-i", str(icon_dir), "--foreground", "blue",
                  "--output-dir", str(tmp_path), "house"])

    def test_foreground_and_tiff_output(self, icon_dir, tmp_path):
        target = tmp_path / "square.tiff"
        status = main(["-i", str(icon_dir), "-s", "8", "--foreground", "#ff0000",
                       "-o", str(target), "square"])
        assert status == 0
        with Image.open(target) as image:
            assert image.size == (8, 8)
            assert image.convert("RGBA").getpixel((4, 4)) == (255, 0, 0, 255)

    def test_cache_stats(self, icon_dir, tmp_path, capsys):
        main(["-i", str(icon_dir), "--cache-stats", "--output-dir", str(tmp_path), "circle"])
        out = capsys.readouterr().out
        assert "markup:" in out
        assert "bitmaps:" in out
        assert "memory_bytes=" in out
