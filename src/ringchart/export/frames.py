# どこで: `src/ringchart/export/frames.py`。
# 何を: チャートのアニメーションを固定 fps のタイムラインで進め、フレームごとに SVG を書き出す。
# なぜ: 実時間に依存せず、同じ入力から同じフレーム列を再現できるようにするため。

from __future__ import annotations

import logging
from pathlib import Path

from ringchart.animation.frame_clock import RecordingClock
from ringchart.chart import RingChart
from ringchart.core.geometry import Padding
from ringchart.core.runtime_config import runtime_config
from ringchart.export.svg import export_svg
from ringchart.host import HeadlessHost

_logger = logging.getLogger(__name__)


def export_animation_frames(
    chart: RingChart,
    out_dir: str | Path,
    *,
    canvas_size: tuple[int, int],
    fps: float | None = None,
    padding: Padding | None = None,
    max_frames: int = 10_000,
) -> list[Path]:
    """チャートを再描画し、アニメーション完了までのフレームを SVG 列として保存する。

    Parameters
    ----------
    chart : RingChart
        HeadlessHost に載ったチャート。
    out_dir : str or Path
        出力ディレクトリ。`frame_0000.svg` から連番で書く。
    canvas_size : tuple[int, int]
        キャンバス寸法 (width, height)。
    fps : float or None, optional
        タイムラインの fps。None なら config の `animation.fps`。
    padding : Padding or None, optional
        キャンバス内側の余白。
    max_frames : int, optional
        打ち切りフレーム数。

    Returns
    -------
    list[Path]
        書き出した SVG パス（フレーム順）。アニメーションなしなら 1 枚。
    """

    host = chart.host
    if not isinstance(host, HeadlessHost):
        raise ValueError("export_animation_frames は HeadlessHost 上のチャートにだけ使える")

    canvas_w, canvas_h = canvas_size
    if int(canvas_w) <= 0 or int(canvas_h) <= 0:
        raise ValueError("canvas_size は正の (width, height) である必要がある")

    _out_dir = Path(out_dir)
    _fps = float(runtime_config().fps if fps is None else fps)
    written: list[Path] = []

    def _write(frame_index: int) -> None:
        path = _out_dir / f"frame_{frame_index:04d}.svg"
        arcs = chart.arcs(canvas_w, canvas_h, padding)
        try:
            written.append(export_svg(arcs, path, canvas_size=(int(canvas_w), int(canvas_h))))
        except Exception:
            _logger.exception("Failed to write frame: %s", path)
            raise

    chart.invalidate()
    if not chart.animating:
        _write(0)
        return written

    clock = RecordingClock(fps=_fps)
    frames = host.run_frames(clock, max_frames=max_frames, on_frame=_write)
    if chart.animating:
        _logger.debug("max_frames に達したため打ち切り: frames=%d", frames)
    return written


__all__ = ["export_animation_frames"]
