"""
どこで: `src/ringchart/core/geometry.py`。
何を: リングを描く外接矩形の算出と、弧のポリライン化を提供する。
なぜ: ストロークが widget 境界からはみ出さない矩形を 1 箇所で決め、export 側でも同じ弧を再現するため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Padding:
    """コンテナ内側の余白（left/top/right/bottom）。"""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True, slots=True)
class RectF:
    """弧の外接矩形（y 軸下向きのスクリーン座標）。"""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return float(self.right - self.left)

    @property
    def height(self) -> float:
        return float(self.bottom - self.top)

    @property
    def center(self) -> tuple[float, float]:
        return (
            float(self.left + self.right) / 2.0,
            float(self.top + self.bottom) / 2.0,
        )

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0


def solve_arc_rect(
    width: float,
    height: float,
    padding: Padding,
    stroke_width: float,
    background_stroke_width: float | None = None,
) -> RectF | None:
    """余白と線幅からリングの外接矩形を返す。

    Parameters
    ----------
    width, height : float
        コンテナ寸法。
    padding : Padding
        コンテナ内側の余白。
    stroke_width : float
        前景の線幅。
    background_stroke_width : float or None, optional
        背景の線幅。None なら前景と同じ。

    Returns
    -------
    RectF or None
        内接正方形を半線幅だけ内側へ寄せた矩形。正の大きさを取れない場合は None。

    Notes
    -----
    前景と背景で線幅が異なる場合は細い方の半分だけ内側へ寄せる。
    太い方のストロークはリングからわずかにはみ出す。
    """

    stroke = float(stroke_width)
    if stroke <= 0.0:
        raise ValueError(f"stroke_width は正の値である必要がある: got={stroke_width!r}")
    if background_stroke_width is None:
        bg_stroke = stroke
    else:
        bg_stroke = float(background_stroke_width)
        if bg_stroke <= 0.0:
            raise ValueError(
                f"background_stroke_width は正の値である必要がある: got={background_stroke_width!r}"
            )

    inner_w = float(width) - float(padding.left) - float(padding.right)
    inner_h = float(height) - float(padding.top) - float(padding.bottom)
    if inner_w <= 0.0 or inner_h <= 0.0:
        return None

    half_size = min(inner_w, inner_h) / 2.0
    center_x = (float(width) + float(padding.left) - float(padding.right)) / 2.0
    center_y = (float(height) + float(padding.top) - float(padding.bottom)) / 2.0
    half_stroke = min(stroke, bg_stroke) / 2.0

    rect = RectF(
        left=center_x - half_size + half_stroke,
        top=center_y - half_size + half_stroke,
        right=center_x + half_size - half_stroke,
        bottom=center_y + half_size - half_stroke,
    )
    if rect.is_empty:
        return None
    return rect


def arc_polyline(
    rect: RectF,
    start_angle: float,
    sweep_angle: float,
    *,
    segments_per_turn: int = 360,
) -> np.ndarray:
    """rect に内接する楕円上の弧を (N, 2) の float32 ポリラインとして返す。

    角度は度数で +X 軸から時計回り（y 軸下向き）。
    sweep は [0, 360] にクランプし、0 なら空配列を返す。
    """

    sweep = min(max(float(sweep_angle), 0.0), 360.0)
    if sweep == 0.0:
        return np.zeros((0, 2), dtype=np.float32)

    segments = max(1, int(math.ceil(int(segments_per_turn) * sweep / 360.0)))
    start_rad = math.radians(float(start_angle))
    angles = np.linspace(
        start_rad,
        start_rad + math.radians(sweep),
        num=segments + 1,
        dtype=np.float64,
    )

    cx, cy = rect.center
    rx = rect.width / 2.0
    ry = rect.height / 2.0
    x = cx + rx * np.cos(angles)
    y = cy + ry * np.sin(angles)
    return np.stack([x, y], axis=1).astype(np.float32, copy=False)


__all__ = ["Padding", "RectF", "arc_polyline", "solve_arc_rect"]
