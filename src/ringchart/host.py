"""
どこで: `src/ringchart/host.py`。
何を: チャートが消費するホスト/レンダラのインタフェースと、headless 実装を定義する。
なぜ: UI ツールキットに依存せず、フレーム駆動と描画をテスト・export から再現できるようにするため。
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from ringchart.core.arc import ArcDescriptor

FrameCallback = Callable[[float], None]


class ArcRenderer(Protocol):
    """弧を 1 本ずつ受け取り、受け取った順に重ね描きするレンダラ。"""

    def draw_arc(self, arc: ArcDescriptor) -> None: ...


class FrameTimeSource(Protocol):
    def now_ms(self) -> float: ...

    def tick(self) -> None: ...


class ChartHost(Protocol):
    """チャートを載せるホスト（密度・フレームスケジューラ・再描画要求）。"""

    @property
    def density(self) -> float: ...

    @property
    def supports_animation(self) -> bool: ...

    def post_frame_callback(self, callback: FrameCallback) -> None:
        """次フレームで `callback(frame_time_ms)` を 1 回呼ぶよう登録する。"""
        ...

    def invalidate(self) -> None:
        """再描画を要求する。"""
        ...


class HeadlessHost:
    """画面を持たないホスト。

    フレームコールバックは `pump()` を呼んだときにだけ実行する。
    """

    def __init__(self, *, density: float = 1.0, supports_animation: bool = True) -> None:
        d = float(density)
        if d <= 0.0:
            raise ValueError(f"density は正の値である必要がある: got={density!r}")
        self._density = d
        self._supports_animation = bool(supports_animation)
        self._pending: list[FrameCallback] = []
        self._invalidation_count = 0

    @property
    def density(self) -> float:
        return self._density

    @property
    def supports_animation(self) -> bool:
        return self._supports_animation

    @property
    def invalidation_count(self) -> int:
        return self._invalidation_count

    @property
    def has_pending_frames(self) -> bool:
        return bool(self._pending)

    def post_frame_callback(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def invalidate(self) -> None:
        self._invalidation_count += 1

    def pump(self, frame_time_ms: float) -> int:
        """登録済みコールバックを 1 フレーム分実行し、実行数を返す。

        実行中に登録されたコールバックは次の pump まで待つ。
        """

        callbacks = self._pending
        self._pending = []
        for callback in callbacks:
            callback(float(frame_time_ms))
        return len(callbacks)

    def run_frames(
        self,
        clock: FrameTimeSource,
        *,
        max_frames: int = 10_000,
        on_frame: Callable[[int], None] | None = None,
    ) -> int:
        """コールバックが尽きるまで clock の時刻で pump し、フレーム数を返す。

        Parameters
        ----------
        clock : FrameTimeSource
            `now_ms()` と `tick()` を持つ時計。
        max_frames : int, optional
            打ち切りフレーム数。
        on_frame : Callable[[int], None] or None, optional
            各 pump の直後に 0-based フレーム番号で呼ぶ。
        """

        frames = 0
        while self._pending and frames < int(max_frames):
            self.pump(clock.now_ms())
            if on_frame is not None:
                on_frame(frames)
            clock.tick()
            frames += 1
        return frames


class RecordingRenderer:
    """受け取った弧を順に保持するレンダラ。"""

    def __init__(self) -> None:
        self.arcs: list[ArcDescriptor] = []

    def draw_arc(self, arc: ArcDescriptor) -> None:
        self.arcs.append(arc)

    def clear(self) -> None:
        self.arcs.clear()


__all__ = [
    "ArcRenderer",
    "ChartHost",
    "FrameCallback",
    "FrameTimeSource",
    "HeadlessHost",
    "RecordingRenderer",
]
