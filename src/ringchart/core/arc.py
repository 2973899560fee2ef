# どこで: `src/ringchart/core/arc.py`。
# 何を: レンダラへ渡す 1 本の弧（ArcDescriptor）と線端スタイルを定義する。
# なぜ: レイアウト結果を描画 API から独立した値として扱い、テストと export で共有するため。

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ringchart.core.color import ColorARGB
from ringchart.core.geometry import RectF


class CapStyle(Enum):
    """ストロークの線端形状。"""

    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


@dataclass(frozen=True, slots=True)
class ArcDescriptor:
    """描画すべき弧 1 本。

    Parameters
    ----------
    rect : RectF
        弧を内接させる外接矩形。
    start_angle : float
        開始角 [deg]。+X 軸から時計回り。
    sweep_angle : float
        角度幅 [deg]。値の合計が範囲を超える場合は 360 を超えうる。
    color : int
        ARGB 色。
    stroke_width : float
        線幅（デバイス px）。
    cap : CapStyle
        線端形状。
    filled : bool
        扇形として塗るか。リングでは常に False。
    """

    rect: RectF
    start_angle: float
    sweep_angle: float
    color: ColorARGB
    stroke_width: float
    cap: CapStyle = CapStyle.ROUND
    filled: bool = False


__all__ = ["ArcDescriptor", "CapStyle"]
