"""
どこで: `src/ringchart/chart.py`。
何を: リングチャートの公開ファサード（流れるような設定 API と再描画/アニメーション制御）を定義する。
なぜ: ValueModel・レイアウト・ドライバ・ホストの配線を 1 箇所に閉じ込め、利用側は `with_*` だけ触れば済むようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ringchart.animation.driver import AnimationDriver
from ringchart.animation.easing import decelerate_with
from ringchart.core.arc import ArcDescriptor
from ringchart.core.color import ColorARGB, coerce_argb
from ringchart.core.geometry import Padding, solve_arc_rect
from ringchart.core.layout import (
    DEFAULT_BACKGROUND_COLOR,
    AnimationType,
    RingStyle,
    layout_arcs,
)
from ringchart.core.runtime_config import runtime_config
from ringchart.core.value_model import (
    DEFAULT_END_ANGLE,
    DEFAULT_MAX_VALUE,
    DEFAULT_MIN_VALUE,
    DEFAULT_START_ANGLE,
    Value,
    ValueModel,
)
from ringchart.host import ArcRenderer, ChartHost, HeadlessHost

_logger = logging.getLogger(__name__)

DEFAULT_STROKE_WIDTH_DP = 16.0


@dataclass(frozen=True, slots=True)
class ChartConfig:
    """RingChart の初期設定。

    Notes
    -----
    線幅は論理単位（dp）。実際の線幅はホストの density を掛けて決める。
    `background_stroke_width_dp` が None なら前景と同じ線幅。
    """

    start_angle: float = DEFAULT_START_ANGLE
    end_angle: float = DEFAULT_END_ANGLE
    min_value: int = DEFAULT_MIN_VALUE
    max_value: int = DEFAULT_MAX_VALUE
    stroke_width_dp: float = DEFAULT_STROKE_WIDTH_DP
    background_stroke_width_dp: float | None = None
    background_color: ColorARGB = DEFAULT_BACKGROUND_COLOR
    animation_type: AnimationType = AnimationType.SEQUENTIAL
    animation_duration_ms: float = 1000.0
    decelerate_factor: float = 1.0

    @classmethod
    def from_runtime_config(cls) -> ChartConfig:
        """config.yaml の chart/animation セクションから作る。"""

        cfg = runtime_config()
        return cls(
            start_angle=cfg.start_angle,
            end_angle=cfg.end_angle,
            min_value=cfg.min_value,
            max_value=cfg.max_value,
            stroke_width_dp=cfg.stroke_width_dp,
            background_stroke_width_dp=cfg.background_stroke_width_dp,
            background_color=cfg.background_color,
            animation_type=AnimationType.coerce(cfg.animation_type),
            animation_duration_ms=cfg.animation_duration_ms,
            decelerate_factor=cfg.decelerate_factor,
        )


def _stroke_px(width_dp: float, density: float, *, key: str) -> float:
    w = float(width_dp)
    if w <= 0.0:
        raise ValueError(f"{key} は正の値である必要がある: got={width_dp!r}")
    return w * float(density)


class RingChart:
    """色付きセグメントを円弧上に並べるリングチャート。

    Notes
    -----
    すべてのメソッドはホストの描画スレッドから呼ぶ。内部でロックは取らない。
    `with_*` は自分自身を返すのでチェーンできる。
    """

    def __init__(self, host: ChartHost | None = None, config: ChartConfig | None = None) -> None:
        self._host: ChartHost = host if host is not None else HeadlessHost()
        cfg = config if config is not None else ChartConfig.from_runtime_config()
        density = float(self._host.density)

        self._model = ValueModel()
        self._model.set_angle_range(cfg.start_angle, cfg.end_angle)
        self._model.set_value_range(cfg.min_value, cfg.max_value)

        self._stroke_width = _stroke_px(cfg.stroke_width_dp, density, key="stroke_width_dp")
        self._background_follows_stroke = cfg.background_stroke_width_dp is None
        if self._background_follows_stroke:
            self._background_stroke_width = self._stroke_width
        else:
            self._background_stroke_width = _stroke_px(
                cfg.background_stroke_width_dp, density, key="background_stroke_width_dp"
            )
        self._background_color = coerce_argb(cfg.background_color)

        self._animation_type = AnimationType.coerce(cfg.animation_type)
        self._animation_fraction = 1.0
        self._driver = AnimationDriver(
            duration_ms=cfg.animation_duration_ms,
            easing=decelerate_with(cfg.decelerate_factor),
        )

        self._model.set_listener(self.invalidate)

    @property
    def host(self) -> ChartHost:
        return self._host

    @property
    def model(self) -> ValueModel:
        return self._model

    @property
    def animation_type(self) -> AnimationType:
        return self._animation_type

    @property
    def animation_fraction(self) -> float:
        return self._animation_fraction

    @property
    def animating(self) -> bool:
        return self._driver.running

    @property
    def stroke_width(self) -> float:
        """前景の線幅（デバイス px）。"""

        return self._stroke_width

    @property
    def background_stroke_width(self) -> float:
        return self._background_stroke_width

    @property
    def background_color(self) -> ColorARGB:
        return self._background_color

    # --- 再描画 ---

    def invalidate(self) -> None:
        """再描画を要求する。

        アニメーションなし（NONE かホスト非対応）なら f = 1 で即時に再描画する。
        それ以外は f = 0 からアニメーションを開始し、実行中のものは置き換える。
        """

        if self._animation_type is AnimationType.NONE or not self._host.supports_animation:
            self._driver.cancel()
            self._animation_fraction = 1.0
            self._host.invalidate()
            return
        self._animate_values()

    def _animate_values(self) -> None:
        self._animation_fraction = 0.0
        generation = self._driver.start(self._on_animation_frame)
        origin_ms: float | None = None

        def _on_host_frame(frame_time_ms: float) -> None:
            nonlocal origin_ms
            if generation != self._driver.generation or not self._driver.running:
                return
            if origin_ms is None:
                origin_ms = float(frame_time_ms)
            if self._driver.tick(float(frame_time_ms) - origin_ms):
                if generation == self._driver.generation:
                    self._host.post_frame_callback(_on_host_frame)

        self._host.post_frame_callback(_on_host_frame)

    def _on_animation_frame(self, fraction: float) -> None:
        self._animation_fraction = float(fraction)
        self._host.invalidate()

    # --- 描画 ---

    def style(self) -> RingStyle:
        return RingStyle(
            stroke_width=self._stroke_width,
            background_stroke_width=self._background_stroke_width,
            background_color=self._background_color,
        )

    def arcs(self, width: float, height: float, padding: Padding | None = None) -> list[ArcDescriptor]:
        """現在の状態で描くべき弧を描画順に返す。"""

        rect = solve_arc_rect(
            width,
            height,
            padding if padding is not None else Padding(),
            self._stroke_width,
            self._background_stroke_width,
        )
        if rect is None:
            _logger.debug("描画領域が小さすぎるため何も描かない: width=%s, height=%s", width, height)
        return layout_arcs(
            self._model,
            rect,
            animation_type=self._animation_type,
            fraction=self._animation_fraction,
            style=self.style(),
        )

    def draw(
        self,
        renderer: ArcRenderer,
        width: float,
        height: float,
        padding: Padding | None = None,
    ) -> int:
        """弧を描画順に renderer へ渡し、本数を返す。"""

        arcs = self.arcs(width, height, padding)
        for arc in arcs:
            renderer.draw_arc(arc)
        return len(arcs)

    # --- 流れるような設定 API ---

    def with_animation_type(self, animation_type: AnimationType | str) -> RingChart:
        """アニメーション種別を設定する（再描画はしない）。"""

        self._animation_type = AnimationType.coerce(animation_type)
        return self

    def with_start_angle(self, start_angle: float) -> RingChart:
        return self.with_angle_range(start_angle, self._model.end_angle)

    def with_end_angle(self, end_angle: float) -> RingChart:
        return self.with_angle_range(self._model.start_angle, end_angle)

    def with_angle_range(self, start_angle: float, end_angle: float) -> RingChart:
        self._model.set_angle_range(start_angle, end_angle)
        return self

    def with_min_value(self, min_value: int) -> RingChart:
        return self.with_value_range(min_value, self._model.max_value)

    def with_max_value(self, max_value: int) -> RingChart:
        return self.with_value_range(self._model.min_value, max_value)

    def with_value_range(self, min_value: int, max_value: int) -> RingChart:
        self._model.set_value_range(min_value, max_value)
        return self

    def with_values(self, values: Iterable[Value | tuple[int, int]]) -> RingChart:
        self._model.set_values(values)
        return self

    def with_stroke_width(self, stroke_width_dp: float) -> RingChart:
        """前景の線幅（dp）を設定する。背景線幅を個別に設定していなければ背景も追従する。"""

        px = _stroke_px(stroke_width_dp, self._host.density, key="stroke_width_dp")
        if self._background_follows_stroke:
            self._background_stroke_width = px
        self._stroke_width = px
        self.invalidate()
        return self

    def with_background(
        self,
        color: ColorARGB | str | None = None,
        stroke_width_dp: float | None = None,
    ) -> RingChart:
        """背景リングの色と線幅（dp）を設定する。None の引数は変更しない。"""

        new_color = self._background_color if color is None else coerce_argb(color)
        new_width = (
            self._background_stroke_width
            if stroke_width_dp is None
            else _stroke_px(stroke_width_dp, self._host.density, key="stroke_width_dp")
        )
        self._background_color = new_color
        self._background_stroke_width = new_width
        if stroke_width_dp is not None:
            self._background_follows_stroke = False
        self.invalidate()
        return self


__all__ = ["DEFAULT_STROKE_WIDTH_DP", "ChartConfig", "RingChart"]
