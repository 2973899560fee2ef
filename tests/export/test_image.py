from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from ringchart.core.arc import ArcDescriptor
from ringchart.core.geometry import RectF
from ringchart.core.runtime_config import runtime_config, set_config_path
from ringchart.export import image


# `ringchart.export.image`（SVG→PNG / resvg）をテストする。

@pytest.fixture(autouse=True)
def _reset_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


def _arcs() -> list[ArcDescriptor]:
    return [
        ArcDescriptor(
            rect=RectF(8.0, 8.0, 92.0, 92.0),
            start_angle=0.0,
            sweep_angle=270.0,
            color=0xFF336699,
            stroke_width=16.0,
        )
    ]


def _write_svg(path: Path, size: int) -> None:
    path.write_text(
        "\n".join(
            [
                '<?xml version="1.0" encoding="UTF-8"?>',
                f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {size} {size}" width="{size}" height="{size}">',
                "</svg>",
                "",
            ]
        ),
        encoding="utf-8",
    )


def test_png_output_size_scales_canvas_by_png_scale():
    scale = float(runtime_config().png_scale)
    expected = (int(300 * scale), int(300 * scale))
    assert image.png_output_size((300, 300)) == expected


def test_png_output_size_rejects_empty_canvas():
    with pytest.raises(ValueError):
        image.png_output_size((0, 300))


def test_rasterize_svg_to_png_invokes_resvg(tmp_path, monkeypatch: pytest.MonkeyPatch):
    src_svg = tmp_path / "in.svg"
    _write_svg(src_svg, 300)
    out_png = tmp_path / "out.png"

    def fake_run(cmd, *, capture_output: bool, text: bool, check: bool):
        assert capture_output is True
        assert text is True
        assert check is False
        assert cmd[0] == "resvg"
        assert cmd[cmd.index("--width") + 1] == "1200"
        assert cmd[cmd.index("--height") + 1] == "1200"
        assert cmd[cmd.index("--background") + 1] == "#FFFFFF"
        assert Path(cmd[-2]) == src_svg
        assert Path(cmd[-1]) == out_png
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr="")

    monkeypatch.setattr(image.subprocess, "run", fake_run)

    path = image.rasterize_svg_to_png(src_svg, out_png, output_size=(1200, 1200))
    assert path == out_png


def test_rasterize_svg_to_png_raises_when_resvg_is_missing(tmp_path, monkeypatch: pytest.MonkeyPatch):
    src_svg = tmp_path / "in.svg"
    _write_svg(src_svg, 10)

    def missing(*args, **kwargs):
        raise FileNotFoundError

    monkeypatch.setattr(image.subprocess, "run", missing)

    with pytest.raises(RuntimeError, match="resvg が見つかりません"):
        image.rasterize_svg_to_png(src_svg, tmp_path / "out.png", output_size=(10, 10))


def test_rasterize_svg_to_png_reports_resvg_failure(tmp_path, monkeypatch: pytest.MonkeyPatch):
    src_svg = tmp_path / "in.svg"
    _write_svg(src_svg, 10)

    def failing(cmd, **kwargs):
        return subprocess.CompletedProcess(args=cmd, returncode=2, stdout="", stderr="bad svg")

    monkeypatch.setattr(image.subprocess, "run", failing)

    with pytest.raises(RuntimeError, match="bad svg"):
        image.rasterize_svg_to_png(src_svg, tmp_path / "out.png", output_size=(10, 10))


def test_export_image_png_writes_svg_then_rasterizes(tmp_path, monkeypatch: pytest.MonkeyPatch):
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(list(cmd))
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr="")

    monkeypatch.setattr(image.subprocess, "run", fake_run)

    out_png = tmp_path / "chart.png"
    path = image.export_image(_arcs(), out_png, canvas_size=(100, 100), background_color=0xFF000000)

    assert path == out_png
    assert (tmp_path / "chart.svg").exists()
    assert len(calls) == 1
    assert calls[0][calls[0].index("--width") + 1] == "400"
    assert calls[0][calls[0].index("--background") + 1] == "#000000"


def test_export_image_svg_skips_rasterizer(tmp_path, monkeypatch: pytest.MonkeyPatch):
    def unexpected(*args, **kwargs):
        raise AssertionError("resvg should not run for .svg")

    monkeypatch.setattr(image.subprocess, "run", unexpected)

    path = image.export_image(_arcs(), tmp_path / "chart.svg", canvas_size=(100, 100))
    assert path.read_text(encoding="utf-8").count("<path") == 1


def test_export_image_rejects_unknown_suffix_and_missing_canvas(tmp_path):
    with pytest.raises(ValueError):
        image.export_image(_arcs(), tmp_path / "chart.gif", canvas_size=(100, 100))
    with pytest.raises(ValueError):
        image.export_image(_arcs(), tmp_path / "chart.png", canvas_size=None)
