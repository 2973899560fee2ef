"""
どこで: `src/ringchart/core/value_model.py`。
何を: 角度範囲・値範囲・色付き値列を保持する ValueModel を定義する。
なぜ: 描画ロジックから設定状態を切り離し、検証と合計値キャッシュを 1 箇所にまとめるため。
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

import numpy as np

from ringchart.core.color import ColorARGB, coerce_argb

DEFAULT_START_ANGLE = 0.0
DEFAULT_END_ANGLE = 360.0
DEFAULT_MIN_VALUE = 0
DEFAULT_MAX_VALUE = 100


@dataclass(frozen=True, slots=True)
class Value:
    """リング上の 1 セグメント（非負整数の値と ARGB 色）。"""

    value: int
    color: ColorARGB

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            raise ValueError(f"value は整数である必要がある: got={self.value!r}")
        try:
            v = int(self.value)
        except Exception as exc:
            raise ValueError(f"value は整数である必要がある: got={self.value!r}") from exc
        if v != self.value:
            raise ValueError(f"value は整数である必要がある: got={self.value!r}")
        if v < 0:
            raise ValueError(f"value は 0 以上である必要がある: got={self.value!r}")
        object.__setattr__(self, "value", v)
        object.__setattr__(self, "color", coerce_argb(self.color))


def _as_value(item: object) -> Value:
    if isinstance(item, Value):
        return item
    try:
        value, color = item  # type: ignore[misc]
    except Exception as exc:
        raise ValueError(f"values の要素は Value か (value, color) である必要がある: got={item!r}") from exc
    return Value(value=value, color=color)


class ValueModel:
    """リングチャートの設定状態。

    Notes
    -----
    values は代入時にコピーして保持する。呼び出し側が元のシーケンスを後から
    変更しても描画結果は変わらない。
    合計値と累積和は values の再代入時にだけ再計算する。
    """

    def __init__(self, *, on_change: Callable[[], None] | None = None) -> None:
        self._start_angle = float(DEFAULT_START_ANGLE)
        self._end_angle = float(DEFAULT_END_ANGLE)
        self._min_value = int(DEFAULT_MIN_VALUE)
        self._max_value = int(DEFAULT_MAX_VALUE)
        self._values: tuple[Value, ...] = ()
        self._values_set = False
        self._cumulative = _readonly(np.zeros((0,), dtype=np.int64))
        self._total_value = 0
        self._on_change = on_change

    def set_listener(self, on_change: Callable[[], None] | None) -> None:
        """変更通知先を差し替える。"""

        self._on_change = on_change

    @property
    def start_angle(self) -> float:
        return self._start_angle

    @property
    def end_angle(self) -> float:
        return self._end_angle

    @property
    def sweep(self) -> float:
        """描画可能な角度幅 `end_angle - start_angle`。"""

        return self._end_angle - self._start_angle

    @property
    def min_value(self) -> int:
        return self._min_value

    @property
    def max_value(self) -> int:
        return self._max_value

    @property
    def value_span(self) -> int:
        """値の正規化幅 `max_value - min_value`。"""

        return self._max_value - self._min_value

    @property
    def values(self) -> tuple[Value, ...]:
        return self._values

    @property
    def values_set(self) -> bool:
        """set_values が一度でも呼ばれたか。"""

        return self._values_set

    @property
    def total_value(self) -> int:
        return self._total_value

    @property
    def cumulative(self) -> np.ndarray:
        """入力順の累積和（int64、書き込み不可）。"""

        return self._cumulative

    def sweep_for(self, partial_total: float) -> float:
        """部分合計 t に対応する角度幅 `sweep * t / value_span` を返す。

        t が value_span を超えてもクランプしない。
        """

        return self.sweep * float(partial_total) / float(self.value_span)

    def set_angle_range(self, start_angle: float, end_angle: float) -> ValueModel:
        """角度範囲を置き換える。

        Raises
        ------
        ValueError
            end_angle < start_angle の場合。モデルは変更しない。
        """

        start = float(start_angle)
        end = float(end_angle)
        if end < start:
            raise ValueError(
                f"end_angle は start_angle 以上である必要がある: start={start_angle!r}, end={end_angle!r}"
            )
        self._start_angle = start
        self._end_angle = end
        self._notify()
        return self

    def set_value_range(self, min_value: int, max_value: int) -> ValueModel:
        """値範囲を置き換える。

        Raises
        ------
        ValueError
            max_value <= min_value の場合。モデルは変更しない。
        """

        lo = int(min_value)
        hi = int(max_value)
        if hi <= lo:
            raise ValueError(
                f"max_value は min_value より大きい必要がある: min={min_value!r}, max={max_value!r}"
            )
        self._min_value = lo
        self._max_value = hi
        self._notify()
        return self

    def set_values(self, values: Iterable[Value | tuple[int, int]]) -> ValueModel:
        """値列をコピーして保持し、合計値と累積和を再計算する。"""

        copied = tuple(_as_value(item) for item in values)
        cumulative = np.cumsum(
            np.fromiter((v.value for v in copied), dtype=np.int64, count=len(copied))
        )
        self._values = copied
        self._values_set = True
        self._cumulative = _readonly(cumulative)
        self._total_value = int(cumulative[-1]) if cumulative.size else 0
        self._notify()
        return self

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


__all__ = [
    "DEFAULT_END_ANGLE",
    "DEFAULT_MAX_VALUE",
    "DEFAULT_MIN_VALUE",
    "DEFAULT_START_ANGLE",
    "Value",
    "ValueModel",
]
