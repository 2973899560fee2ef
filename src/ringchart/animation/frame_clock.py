# どこで: `src/ringchart/animation/frame_clock.py`。
# 何を: ホストのフレームコールバックへ渡すフレーム時刻（ms）の生成規則を提供する。
# なぜ: 「通常は実時間」「書き出し時は固定 fps のタイムライン」を分離して見通しを良くするため。

from __future__ import annotations

import time


class RealTimeClock:
    """実時間ベースのフレーム時計。

    Notes
    -----
    時刻は `perf_counter()` の差分（ms）。
    """

    def __init__(self, *, start_time: float | None = None) -> None:
        self._start_time = float(time.perf_counter() if start_time is None else start_time)

    def now_ms(self) -> float:
        """現在のフレーム時刻（ms）を返す。"""

        return float(time.perf_counter() - self._start_time) * 1000.0

    def tick(self) -> None:
        """フレームを進める（実時間では no-op）。"""

        return


class RecordingClock:
    """固定 fps タイムラインのフレーム時計。

    Notes
    -----
    時刻は `t0_ms + frame_index * 1000 / fps`。
    実時間と切り離し、書き出すフレーム列を決定的にするために使う。
    """

    def __init__(self, *, fps: float, t0_ms: float = 0.0) -> None:
        _fps = float(fps)
        if _fps <= 0:
            raise ValueError("fps は正の値である必要がある")
        self._t0_ms = float(t0_ms)
        self._fps = _fps
        self._frame_index = 0

    @property
    def fps(self) -> float:
        return float(self._fps)

    @property
    def frame_index(self) -> int:
        """現在のフレーム番号（0-based）を返す。"""

        return int(self._frame_index)

    def now_ms(self) -> float:
        return float(self._t0_ms + float(self._frame_index) * 1000.0 / float(self._fps))

    def tick(self) -> None:
        """フレームを 1 つ進める。"""

        self._frame_index += 1


__all__ = ["RealTimeClock", "RecordingClock"]
