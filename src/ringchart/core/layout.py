"""
どこで: `src/ringchart/core/layout.py`。
何を: ValueModel とアニメーション進捗 f から、描画順に並んだ ArcDescriptor 列を生成する。
なぜ: 並列/逐次アニメーションの意味論と重ね描き順をレンダラから切り離して検証可能にするため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ringchart.core.arc import ArcDescriptor, CapStyle
from ringchart.core.color import ColorARGB
from ringchart.core.geometry import RectF
from ringchart.core.value_model import ValueModel

_logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND_COLOR = 0xFFCCCCCC


class AnimationType(Enum):
    """値の伸び方。"""

    NONE = "none"
    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"

    @classmethod
    def coerce(cls, value: AnimationType | str) -> AnimationType:
        """AnimationType か名前文字列（大小無視）を AnimationType にする。"""

        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"未対応の animation_type: {value!r}")


@dataclass(frozen=True, slots=True)
class RingStyle:
    """1 フレーム分の線幅・背景色。"""

    stroke_width: float
    background_stroke_width: float
    background_color: ColorARGB = DEFAULT_BACKGROUND_COLOR


def layout_arcs(
    model: ValueModel,
    rect: RectF | None,
    *,
    animation_type: AnimationType,
    fraction: float,
    style: RingStyle,
) -> list[ArcDescriptor]:
    """描画順の ArcDescriptor 列を返す。

    Parameters
    ----------
    model : ValueModel
        角度範囲・値範囲・値列。
    rect : RectF or None
        外接矩形。None なら何も描かない。
    animation_type : AnimationType
        NONE と PARALLEL は同じ配置（全セグメントが f に比例して伸びる）。
        SEQUENTIAL はセグメントが先頭から順に満ちる。
    fraction : float
        アニメーション進捗。[0, 1] にクランプする。
    style : RingStyle
        線幅と背景色。

    Returns
    -------
    list[ArcDescriptor]
        先頭が背景弧。続く前景弧は入力の逆順で、後から描く弧ほど上に重なる。
        そのため先頭の値が最前面に見える。
    """

    if rect is None:
        return []

    arcs = [
        ArcDescriptor(
            rect=rect,
            start_angle=model.start_angle,
            sweep_angle=model.sweep,
            color=style.background_color,
            stroke_width=style.background_stroke_width,
        )
    ]

    values = model.values
    total = model.total_value
    if not values or total == 0:
        return arcs

    if total > model.value_span:
        _logger.debug(
            "values の合計が値範囲を超えている: total=%s, span=%s", total, model.value_span
        )

    f = min(max(float(fraction), 0.0), 1.0)
    if animation_type is AnimationType.SEQUENTIAL:
        arcs.extend(_sequential_arcs(model, rect, f, style))
    else:
        arcs.extend(_parallel_arcs(model, rect, f, style))
    return arcs


def _foreground(
    model: ValueModel,
    rect: RectF,
    sweep_angle: float,
    color: ColorARGB,
    style: RingStyle,
) -> ArcDescriptor:
    return ArcDescriptor(
        rect=rect,
        start_angle=model.start_angle,
        sweep_angle=sweep_angle,
        color=color,
        stroke_width=style.stroke_width,
        cap=CapStyle.ROUND,
    )


def _parallel_arcs(
    model: ValueModel, rect: RectF, f: float, style: RingStyle
) -> list[ArcDescriptor]:
    values = model.values
    cumulative = model.cumulative
    out: list[ArcDescriptor] = []
    for i in range(len(values) - 1, -1, -1):
        sweep = model.sweep_for(int(cumulative[i])) * f
        out.append(_foreground(model, rect, sweep, values[i].color, style))
    return out


def _sequential_arcs(
    model: ValueModel, rect: RectF, f: float, style: RingStyle
) -> list[ArcDescriptor]:
    values = model.values
    cumulative = model.cumulative
    target = float(model.total_value) * f

    # cumulative[k] >= target を満たす最小の k（cut index）。
    # f == 1 では末尾の 0 値も含めて全セグメントを出し、PARALLEL の終端と揃える。
    if f >= 1.0:
        cut = len(values) - 1
    else:
        cut = min(int(np.searchsorted(cumulative, target, side="left")), len(values) - 1)

    out = [_foreground(model, rect, model.sweep_for(target), values[cut].color, style)]
    for i in range(cut - 1, -1, -1):
        sweep = model.sweep_for(int(cumulative[i]))
        out.append(_foreground(model, rect, sweep, values[i].color, style))
    return out


__all__ = ["DEFAULT_BACKGROUND_COLOR", "AnimationType", "RingStyle", "layout_arcs"]
