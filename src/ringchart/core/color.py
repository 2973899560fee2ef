"""
どこで: `src/ringchart/core/color.py`。
何を: 0xAARRGGBB 整数色の検証と変換ユーティリティを定義する。
なぜ: Value・背景色・SVG 出力で同じ色表現を共有するため。
"""

from __future__ import annotations

ColorARGB = int

_ARGB_MAX = 0xFFFFFFFF


def coerce_argb(value: object) -> ColorARGB:
    """値を 0..0xFFFFFFFF の ARGB 整数に正規化して返す。

    Parameters
    ----------
    value : object
        整数、または `"0xFFCCCCCC"` / `"#CCCCCC"` / `"#FFCCCCCC"` 形式の文字列。

    Returns
    -------
    int
        ARGB 整数。`#RRGGBB` はアルファ 0xFF を補う。

    Raises
    ------
    ValueError
        解釈できない、または範囲外の場合。
    """

    if isinstance(value, bool):
        raise ValueError(f"color は ARGB 整数である必要がある: got={value!r}")
    if isinstance(value, str):
        return parse_argb(value)
    try:
        argb = int(value)  # type: ignore[call-overload]
    except Exception as exc:
        raise ValueError(f"color は ARGB 整数である必要がある: got={value!r}") from exc
    if argb < 0 or argb > _ARGB_MAX:
        raise ValueError(f"color は 0..0xFFFFFFFF の範囲である必要がある: got={value!r}")
    return argb


def parse_argb(text: str) -> ColorARGB:
    """`0xAARRGGBB` / `#RRGGBB` / `#AARRGGBB` 形式の文字列を ARGB 整数にする。"""

    s = str(text).strip()
    if s.startswith("#"):
        digits = s[1:]
        if len(digits) not in (6, 8):
            raise ValueError(f"色文字列は #RRGGBB か #AARRGGBB である必要がある: got={text!r}")
        try:
            argb = int(digits, 16)
        except ValueError as exc:
            raise ValueError(f"色文字列を解釈できない: got={text!r}") from exc
        if len(digits) == 6:
            argb |= 0xFF000000
        return argb

    try:
        argb = int(s, 0)
    except ValueError as exc:
        raise ValueError(f"色文字列を解釈できない: got={text!r}") from exc
    return coerce_argb(argb)


def argb_alpha01(argb: ColorARGB) -> float:
    """ARGB のアルファを 0..1 float で返す。"""

    return float((int(argb) >> 24) & 0xFF) / 255.0


def argb_to_rgb255(argb: ColorARGB) -> tuple[int, int, int]:
    """ARGB を 0..255 int の RGB に変換して返す。"""

    v = int(argb)
    return (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF


def argb_to_rgb01(argb: ColorARGB) -> tuple[float, float, float]:
    """ARGB を 0..1 float の RGB に変換して返す。"""

    r, g, b = argb_to_rgb255(argb)
    return float(r) / 255.0, float(g) / 255.0, float(b) / 255.0


def argb_to_hex(argb: ColorARGB) -> str:
    """ARGB を `#RRGGBB` に変換して返す（アルファは捨てる）。"""

    r, g, b = argb_to_rgb255(argb)
    return f"#{r:02X}{g:02X}{b:02X}"


__all__ = [
    "ColorARGB",
    "argb_alpha01",
    "argb_to_hex",
    "argb_to_rgb01",
    "argb_to_rgb255",
    "coerce_argb",
    "parse_argb",
]
