# どこで: `src/ringchart/__init__.py`。
# 何を: ルート `ringchart` パッケージを定義する。
# なぜ: 利用側の import 起点を `ringchart` に統一するため。

from __future__ import annotations

from ringchart.chart import ChartConfig, RingChart
from ringchart.core.arc import ArcDescriptor, CapStyle
from ringchart.core.geometry import Padding, RectF
from ringchart.core.layout import AnimationType
from ringchart.core.value_model import Value

__all__ = [
    "AnimationType",
    "ArcDescriptor",
    "CapStyle",
    "ChartConfig",
    "Padding",
    "RectF",
    "RingChart",
    "Value",
]
