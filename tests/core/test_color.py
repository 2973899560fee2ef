import pytest

from ringchart.core.color import (
    argb_alpha01,
    argb_to_hex,
    argb_to_rgb01,
    argb_to_rgb255,
    coerce_argb,
    parse_argb,
)


def test_parse_argb_accepts_hex_literal_and_css_forms():
    assert parse_argb("0xFFCCCCCC") == 0xFFCCCCCC
    assert parse_argb("#CCCCCC") == 0xFFCCCCCC
    assert parse_argb("#80FF0000") == 0x80FF0000


@pytest.mark.parametrize("text", ["#FFF", "#GGGGGG", "red", "0x1FFFFFFFF"])
def test_parse_argb_rejects_malformed_text(text):
    with pytest.raises(ValueError):
        parse_argb(text)


def test_coerce_argb_validates_range():
    assert coerce_argb(0) == 0
    assert coerce_argb(0xFFFFFFFF) == 0xFFFFFFFF
    assert coerce_argb("0xFF888888") == 0xFF888888
    with pytest.raises(ValueError):
        coerce_argb(-1)
    with pytest.raises(ValueError):
        coerce_argb(0x100000000)
    with pytest.raises(ValueError):
        coerce_argb(True)
    with pytest.raises(ValueError):
        coerce_argb(None)


def test_argb_conversions():
    assert argb_to_rgb255(0xFF336699) == (0x33, 0x66, 0x99)
    assert argb_to_hex(0xFFCCCCCC) == "#CCCCCC"
    assert argb_to_rgb01(0xFFFF0000) == (1.0, 0.0, 0.0)
    assert argb_alpha01(0xFF000000) == 1.0
    assert argb_alpha01(0x80000000) == pytest.approx(128.0 / 255.0)
