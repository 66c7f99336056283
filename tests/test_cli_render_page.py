"""Tests for the render-page CLI."""

from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup

from cli import render_page
from grayscale_mode.app.options_store import GrayscaleOptions, save_options


def test_render_sample_page_defaults(tmp_path, capsys):
    code = render_page.main(["--options-dir", str(tmp_path)])
    out = capsys.readouterr().out
    assert code == 0
    soup = BeautifulSoup(out, "html.parser")
    assert soup.find(id="sgm-grayscale-style") is not None
    assert soup.find(id="sgmToggleBtn") is not None
    assert soup.find(id="sgmToggleInline") is not None
    assert soup.find(class_="no-grayscale") is not None


def test_render_input_with_intensity_override(tmp_path: Path, capsys):
    save_options(GrayscaleOptions(intensity=10), tmp_path)
    page = tmp_path / "page.html"
    page.write_text("<html><head></head><body><p>Hi</p></body></html>", encoding="utf-8")
    code = render_page.main(["--options-dir", str(tmp_path), "--input", str(page), "--intensity", "400"])
    out = capsys.readouterr().out
    assert code == 0
    assert "grayscale(100%)" in out


def test_render_admin_context_disabled_by_default(tmp_path, capsys):
    code = render_page.main(["--options-dir", str(tmp_path), "--admin", "--role", "administrator"])
    out = capsys.readouterr().out
    assert code == 0
    assert "sgm-grayscale-style" not in out


def test_missing_input_file(tmp_path, capsys):
    code = render_page.main(["--input", str(tmp_path / "nope.html")])
    assert code == 2
    assert "Input file not found" in capsys.readouterr().err
