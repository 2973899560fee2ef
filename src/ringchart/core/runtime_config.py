# どこで: `src/ringchart/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: チャート既定値・アニメーション時間・出力先をコード変更なしに差し替えられるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from ringchart.core.color import ColorARGB, coerce_argb


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """ringchart の実行時設定。"""

    config_path: Path | None
    output_dir: Path
    start_angle: float
    end_angle: float
    min_value: int
    max_value: int
    stroke_width_dp: float
    background_stroke_width_dp: float | None
    background_color: ColorARGB
    animation_type: str
    animation_duration_ms: float
    decelerate_factor: float
    fps: float
    png_scale: float


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".ringchart" / "config.yaml",
        home / ".config" / "ringchart" / "config.yaml",
    )


def _expand_path_text(text: str) -> str:
    return os.path.expandvars(os.path.expanduser(str(text)))


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(_expand_path_text(s))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_float(value: Any, *, key: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int(value: Any, *, key: str) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _require(value: Any, *, key: str) -> Any:
    if value is None:
        raise RuntimeError(
            f"{key} が未設定です（同梱 default_config.yaml を確認してください）"
        )
    return value


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """section 単位で浅くマージする（後勝ち）。"""

    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            merged = dict(out[key])
            merged.update(value)
            out[key] = merged
        else:
            out[key] = value
    return out


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    try:
        import yaml  # type: ignore[import-untyped]
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(f"PyYAML を import できません: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("ringchart")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="ringchart/resource/default_config.yaml")


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。"""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge(payload, _load_yaml_config(explicit_path))

    version = _require(payload.get("version"), key="version")
    version_i = _as_int(version, key="version")
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _require(_as_optional_path(paths.get("output_dir")), key="paths.output_dir")

    chart = _as_mapping(payload.get("chart"), key="chart")
    start_angle = _require(_as_float(chart.get("start_angle"), key="chart.start_angle"), key="chart.start_angle")
    end_angle = _require(_as_float(chart.get("end_angle"), key="chart.end_angle"), key="chart.end_angle")
    if end_angle < start_angle:
        raise ValueError(
            f"chart.end_angle は chart.start_angle 以上である必要がある: start={start_angle}, end={end_angle}"
        )
    min_value = _require(_as_int(chart.get("min_value"), key="chart.min_value"), key="chart.min_value")
    max_value = _require(_as_int(chart.get("max_value"), key="chart.max_value"), key="chart.max_value")
    if max_value <= min_value:
        raise ValueError(
            f"chart.max_value は chart.min_value より大きい必要がある: min={min_value}, max={max_value}"
        )

    stroke_width_dp = _require(
        _as_float(chart.get("stroke_width_dp"), key="chart.stroke_width_dp"),
        key="chart.stroke_width_dp",
    )
    if stroke_width_dp <= 0:
        raise ValueError(f"chart.stroke_width_dp は正の値である必要がある: got={stroke_width_dp}")
    background_stroke_width_dp = _as_float(
        chart.get("background_stroke_width_dp"), key="chart.background_stroke_width_dp"
    )
    if background_stroke_width_dp is not None and background_stroke_width_dp <= 0:
        raise ValueError(
            "chart.background_stroke_width_dp は正の値である必要がある: "
            f"got={background_stroke_width_dp}"
        )

    background_color_raw = _require(chart.get("background_color"), key="chart.background_color")
    try:
        background_color = coerce_argb(background_color_raw)
    except ValueError as exc:
        raise RuntimeError(
            f"chart.background_color を解釈できません: got={background_color_raw!r}"
        ) from exc

    animation_type = str(_require(chart.get("animation_type"), key="chart.animation_type")).strip().lower()

    animation = _as_mapping(payload.get("animation"), key="animation")
    duration_ms = _require(
        _as_float(animation.get("duration_ms"), key="animation.duration_ms"),
        key="animation.duration_ms",
    )
    if duration_ms <= 0:
        raise ValueError(f"animation.duration_ms は正の値である必要がある: got={duration_ms}")
    decelerate_factor = _require(
        _as_float(animation.get("decelerate_factor"), key="animation.decelerate_factor"),
        key="animation.decelerate_factor",
    )
    if decelerate_factor <= 0:
        raise ValueError(
            f"animation.decelerate_factor は正の値である必要がある: got={decelerate_factor}"
        )
    fps = _require(_as_float(animation.get("fps"), key="animation.fps"), key="animation.fps")
    if fps <= 0:
        raise ValueError(f"animation.fps は正の値である必要がある: got={fps}")

    export = _as_mapping(payload.get("export"), key="export")
    png = _as_mapping(export.get("png"), key="export.png")
    png_scale = _require(_as_float(png.get("scale"), key="export.png.scale"), key="export.png.scale")
    if png_scale <= 0:
        raise ValueError(f"export.png.scale は正の値である必要がある: got={png_scale}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=output_dir,
        start_angle=float(start_angle),
        end_angle=float(end_angle),
        min_value=int(min_value),
        max_value=int(max_value),
        stroke_width_dp=float(stroke_width_dp),
        background_stroke_width_dp=(
            None if background_stroke_width_dp is None else float(background_stroke_width_dp)
        ),
        background_color=background_color,
        animation_type=animation_type,
        animation_duration_ms=float(duration_ms),
        decelerate_factor=float(decelerate_factor),
        fps=float(fps),
        png_scale=float(png_scale),
    )
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.ringchart/config.yaml` / `~/.config/ringchart/config.yaml`
    3) `set_config_path(...)` で指定したパス
    """

    cfg = runtime_config()
    return Path(cfg.output_dir)


__all__ = ["RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
