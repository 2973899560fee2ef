# どこで: `src/ringchart/animation/easing.py`。
# 何を: 経過率 x ∈ [0, 1] を進捗 f ∈ [0, 1] へ写す easing 関数を定義する。
# なぜ: ドライバから曲線を差し替えられるようにしつつ、既定の減速曲線を固定するため。

from __future__ import annotations

from collections.abc import Callable

Easing = Callable[[float], float]


def _clamp01(x: float) -> float:
    fx = float(x)
    return 0.0 if fx < 0.0 else 1.0 if fx > 1.0 else fx


def decelerate(x: float, factor: float = 1.0) -> float:
    """減速カーブ `1 - (1 - x)^(2 * factor)` を返す。

    factor == 1 のとき `1 - (1 - x)^2`。x は [0, 1] にクランプする。
    """

    fx = _clamp01(x)
    if factor == 1.0:
        return 1.0 - (1.0 - fx) * (1.0 - fx)
    if factor <= 0.0:
        raise ValueError(f"factor は正の値である必要がある: got={factor!r}")
    return 1.0 - (1.0 - fx) ** (2.0 * float(factor))


def decelerate_with(factor: float) -> Easing:
    """factor を固定した decelerate を返す。"""

    f = float(factor)
    if f <= 0.0:
        raise ValueError(f"factor は正の値である必要がある: got={factor!r}")

    def _ease(x: float) -> float:
        return decelerate(x, f)

    return _ease


def linear(x: float) -> float:
    """恒等カーブ。"""

    return _clamp01(x)


__all__ = ["Easing", "decelerate", "decelerate_with", "linear"]
