"""
どこで: `src/ringchart/animation/driver.py`。
何を: 経過時間から easing 済みの進捗 f を作り、フレームコールバックへ渡すドライバを定義する。
なぜ: 時計（ホスト）と決定的なレイアウト計算を分離し、`tick(elapsed_ms)` だけで駆動できるようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ringchart.animation.easing import Easing, decelerate

_logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 1000.0


class AnimationDriver:
    """0 → 1 の進捗を一定時間かけて配るドライバ。

    Notes
    -----
    スレッドは作らない。ホストがフレームごとに `tick()` を呼ぶ。
    実行中に `start()` すると前のアニメーションを置き換え、前の残り tick と
    完了通知は配送しない。
    同じアニメーション内で渡す進捗は単調非減少。
    """

    def __init__(
        self,
        *,
        duration_ms: float = DEFAULT_DURATION_MS,
        easing: Easing = decelerate,
    ) -> None:
        duration = float(duration_ms)
        if duration <= 0.0:
            raise ValueError(f"duration_ms は正の値である必要がある: got={duration_ms!r}")
        self._duration_ms = duration
        self._easing = easing
        self._generation = 0
        self._running = False
        self._fraction = 0.0
        self._on_frame: Callable[[float], None] | None = None
        self._on_end: Callable[[], None] | None = None

    @property
    def duration_ms(self) -> float:
        return self._duration_ms

    @property
    def generation(self) -> int:
        """最後に start したアニメーションの世代番号。"""

        return self._generation

    @property
    def running(self) -> bool:
        return self._running

    @property
    def fraction(self) -> float:
        """最後に配送した進捗。"""

        return self._fraction

    def start(
        self,
        on_frame: Callable[[float], None],
        on_end: Callable[[], None] | None = None,
    ) -> int:
        """アニメーションを開始し、世代番号を返す。"""

        if self._running:
            _logger.debug("animation superseded: generation=%d", self._generation)
        self._generation += 1
        self._running = True
        self._fraction = 0.0
        self._on_frame = on_frame
        self._on_end = on_end
        return self._generation

    def cancel(self) -> None:
        """完了通知なしで停止する。"""

        self._running = False
        self._on_frame = None
        self._on_end = None

    def tick(self, elapsed_ms: float) -> bool:
        """開始からの経過時間で 1 フレーム進め、まだ実行中かを返す。"""

        if not self._running or self._on_frame is None:
            return False

        x = float(elapsed_ms) / self._duration_ms
        x = 0.0 if x < 0.0 else 1.0 if x > 1.0 else x
        f = float(self._easing(x))
        if f < self._fraction:
            f = self._fraction
        if x >= 1.0:
            f = 1.0
        self._fraction = f

        on_frame = self._on_frame
        on_end = self._on_end
        generation = self._generation
        on_frame(f)
        if generation != self._generation:
            # on_frame の中で別のアニメーションが始まった。
            return self._running

        if x >= 1.0:
            self._running = False
            self._on_frame = None
            self._on_end = None
            if on_end is not None:
                on_end()
            return False
        return True


__all__ = ["DEFAULT_DURATION_MS", "AnimationDriver"]
