"""
どこで: `src/ringchart/export/svg.py`。
何を: ArcDescriptor 列を SVG として保存する関数とレンダラを提供する。
なぜ: UI ツールキットなしでレイアウト結果を目視・比較できる最小の headless 出力を用意するため。
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np

from ringchart.core.arc import ArcDescriptor
from ringchart.core.color import argb_alpha01, argb_to_hex
from ringchart.core.geometry import arc_polyline

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _polyline_to_d(polyline_xy: np.ndarray) -> str:
    """polyline（shape (N,2)）を SVG path の d 属性へ変換して返す。"""
    x0 = _fmt(polyline_xy[0, 0])
    y0 = _fmt(polyline_xy[0, 1])
    parts = [f"M {x0} {y0}"]
    for xy in polyline_xy[1:]:
        parts.append(f"L {_fmt(xy[0])} {_fmt(xy[1])}")
    return " ".join(parts)


def _arc_to_path(arc: ArcDescriptor) -> str | None:
    polyline = arc_polyline(arc.rect, arc.start_angle, arc.sweep_angle)
    if polyline.shape[0] < 2:
        return None

    d = _polyline_to_d(polyline)
    if arc.filled:
        cx, cy = arc.rect.center
        d = f"M {_fmt(cx)} {_fmt(cy)} L{d[1:]} Z"
        paint = f'fill="{argb_to_hex(arc.color)}" stroke="none"'
    else:
        paint = (
            f'fill="none" stroke="{argb_to_hex(arc.color)}" '
            f'stroke-width="{_fmt(arc.stroke_width)}" stroke-linecap="{arc.cap.value}"'
        )

    alpha = argb_alpha01(arc.color)
    opacity = "" if alpha >= 1.0 else f' opacity="{_fmt(alpha)}"'
    return f'  <path d="{d}" {paint}{opacity} />'


def export_svg(
    arcs: Sequence[ArcDescriptor],
    path: str | Path,
    *,
    canvas_size: tuple[int, int] | None = None,
) -> Path:
    """弧の列を描画順に SVG として保存する。

    Parameters
    ----------
    arcs : Sequence[ArcDescriptor]
        描画順の弧。後の要素ほど上に重なる。
    path : str or Path
        出力先パス。
    canvas_size : tuple[int, int] or None, optional
        キャンバス寸法 (width, height)。None は許容しない。

    Returns
    -------
    Path
        保存先パス。

    Raises
    ------
    ValueError
        canvas_size が None、または正でない場合。

    Notes
    -----
    sweep が 0 の弧は出力しない。
    """
    _path = Path(path)
    if canvas_size is None:
        raise ValueError("canvas_size=None は未対応（現在は必須）")

    canvas_w, canvas_h = canvas_size
    if canvas_w <= 0 or canvas_h <= 0:
        raise ValueError("canvas_size は正の値である必要がある")

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {int(canvas_w)} {int(canvas_h)}" '
            f'width="{int(canvas_w)}" height="{int(canvas_h)}">'
        )
    )
    for arc in arcs:
        element = _arc_to_path(arc)
        if element is not None:
            lines.append(element)
    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")

    return _path


class SvgArcRenderer:
    """受け取った弧を溜めて SVG に書き出すレンダラ。"""

    def __init__(self, *, canvas_size: tuple[int, int]) -> None:
        self._canvas_size = (int(canvas_size[0]), int(canvas_size[1]))
        self._arcs: list[ArcDescriptor] = []

    @property
    def arcs(self) -> tuple[ArcDescriptor, ...]:
        return tuple(self._arcs)

    def draw_arc(self, arc: ArcDescriptor) -> None:
        self._arcs.append(arc)

    def clear(self) -> None:
        self._arcs.clear()

    def save(self, path: str | Path) -> Path:
        return export_svg(self._arcs, path, canvas_size=self._canvas_size)


__all__ = ["SvgArcRenderer", "export_svg"]
