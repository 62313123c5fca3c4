import struct

import pytest

from matemonitor.colors import (
    RGBA,
    decode_drag_data,
    drag_icon_pixel,
    encode_drag_data,
    highlight,
)


def test_opaque_colour_string():
    assert RGBA(1.0, 0.0, 0.0).to_string() == "rgb(255,0,0)"


def test_translucent_colour_string():
    assert RGBA(0.0, 0.0, 0.0, 0.5).to_string() == "rgba(0,0,0,0.5)"


@pytest.mark.parametrize("channels", [(0, 0, 0), (255, 255, 255), (18, 52, 86), (200, 100, 7)])
def test_string_round_trip(channels):
    color = RGBA(*(c / 255 for c in channels))
    parsed = RGBA.parse(color.to_string())
    assert parsed.to_string() == color.to_string()
    assert parsed.red == pytest.approx(color.red)
    assert parsed.green == pytest.approx(color.green)
    assert parsed.blue == pytest.approx(color.blue)


def test_hex_forms_agree():
    assert RGBA.parse("#f00") == RGBA.parse("#ff0000")
    assert RGBA.parse("#ff0000") == RGBA.parse("#ffff00000000")
    assert RGBA.parse("#FF0000") == RGBA.parse("rgb(255,0,0)")


def test_percentages_agree_with_integers():
    assert RGBA.parse("rgb(100%, 0%, 0%)") == RGBA.parse("rgb(255,0,0)")


def test_rgba_keeps_alpha():
    assert RGBA.parse("rgba(0,0,255,0.25)").alpha == pytest.approx(0.25)


def test_transparent():
    assert RGBA.parse("transparent").alpha == 0.0


@pytest.mark.parametrize("text", ["", "red-ish", "#12", "#gggggg", "rgb(1,2)", "rgba(1,2,3)", "rgb(a,b,c)"])
def test_invalid_colours_raise(text):
    with pytest.raises(ValueError):
        RGBA.parse(text)


def test_highlight_zero_is_identity():
    color = RGBA(0.2, 0.4, 0.6, 0.7)
    assert highlight(color, 0) == color


def test_highlight_adds_eighth_and_keeps_alpha():
    color = RGBA(0.25, 0.5, 0.0, 0.3)
    lit = highlight(color, 1.0)
    assert lit.red - color.red == pytest.approx(0.125)
    assert lit.green - color.green == pytest.approx(0.125)
    assert lit.blue - color.blue == pytest.approx(0.125)
    assert lit.alpha == color.alpha


def test_highlight_clamps_at_one():
    lit = highlight(RGBA(0.95, 1.0, 0.99), 1.0)
    assert (lit.red, lit.green, lit.blue) == (1.0, 1.0, 1.0)


def test_drag_data_layout():
    data = encode_drag_data(RGBA(0.1, 0.2, 0.3, 0.0))
    assert len(data) == 8
    assert struct.unpack("=4H", data)[3] == 65535


@pytest.mark.parametrize("color", [RGBA(0, 0, 0), RGBA(1, 1, 1), RGBA(0.3, 0.6, 0.9)])
def test_drag_data_round_trip(color):
    red, green, blue = decode_drag_data(encode_drag_data(color))
    tolerance = 1 / 65535
    assert red == pytest.approx(color.red, abs=tolerance)
    assert green == pytest.approx(color.green, abs=tolerance)
    assert blue == pytest.approx(color.blue, abs=tolerance)


@pytest.mark.parametrize("data", [b"", b"\x00" * 6, b"\x00" * 9])
def test_drag_data_wrong_length_raises(data):
    with pytest.raises(ValueError):
        decode_drag_data(data)


def test_drag_icon_pixel_extremes():
    assert drag_icon_pixel(RGBA(0, 0, 0)) == 0
    assert drag_icon_pixel(RGBA(1, 1, 1)) == 0xFFFFFF00


def test_drag_icon_pixel_low_byte_empty():
    assert drag_icon_pixel(RGBA(0.3, 0.7, 0.9)) & 0xFF == 0