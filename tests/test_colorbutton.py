import pytest

from matemonitor.colorbutton import ColorButton
from matemonitor.colors import RGBA, PickerType, decode_drag_data


def _clicked(button):
    button.enter()
    button.press(1)
    return button.release()


def test_defaults():
    button = ColorButton()
    assert button.title == "Pick a Color"
    assert button.fraction == 0.5
    assert button.cbtype is PickerType.CPU
    assert button.color == RGBA(0.0, 0.0, 0.0, 1.0)


def test_preferred_size_is_minimum():
    assert ColorButton().preferred_size() == (15, 15)


def test_type_and_title_given():
    button = ColorButton(RGBA(1.0, 0.0, 0.0), PickerType.PIE, "Memory")
    assert button.cbtype is PickerType.PIE
    assert button.title == "Memory"


def test_invalid_type_rejected():
    with pytest.raises(ValueError):
        ColorButton(RGBA(), 9)


def test_set_fraction_and_color_do_not_signal():
    calls = []
    button = ColorButton()
    button.connect(calls.append)
    button.set_fraction(0.25)
    button.set_color(RGBA(0.2, 0.4, 0.6))
    assert button.fraction == 0.25
    assert button.color == RGBA(0.2, 0.4, 0.6)
    assert calls == []


def test_highlight_only_while_hovered():
    color = RGBA(0.5, 0.5, 0.5)
    button = ColorButton(color)
    assert button.highlighted_color() == color
    button.enter()
    lit = button.highlighted_color()
    assert lit.red > color.red and lit.green > color.green and lit.blue > color.blue
    button.leave()
    assert button.highlighted_color() == color


def test_highlight_saturates():
    button = ColorButton(RGBA(1.0, 1.0, 1.0))
    button.enter()
    lit = button.highlighted_color()
    assert (lit.red, lit.green, lit.blue) == (1.0, 1.0, 1.0)


def test_drag_round_trip_between_buttons():
    source = ColorButton(RGBA(1.0, 0.0, 1.0, 0.5))
    target = ColorButton(RGBA(0.0, 0.0, 0.0, 0.25))
    received = []
    target.connect(received.append)
    target.receive_drag_data(source.drag_data())
    assert (target.color.red, target.color.green, target.color.blue) == (1.0, 0.0, 1.0)
    assert target.color.alpha == 0.25
    assert received == [target]


def test_drag_data_alpha_is_opaque():
    data = ColorButton(RGBA(0.0, 0.0, 0.0, 0.0)).drag_data()
    assert len(data) == 8
    assert decode_drag_data(data) == (0.0, 0.0, 0.0)


def test_receive_invalid_drag_data():
    button = ColorButton(RGBA(0.1, 0.2, 0.3))
    calls = []
    button.connect(calls.append)
    with pytest.raises(ValueError):
        button.receive_drag_data(b"\x00\x01\x02")
    assert button.color == RGBA(0.1, 0.2, 0.3)
    assert calls == []


def test_drag_icon_pixel():
    assert ColorButton(RGBA(1.0, 0.0, 0.0)).drag_icon_pixel() == 0xFF000000
    assert ColorButton(RGBA(0.0, 0.0, 0.0)).drag_icon_pixel() == 0


def test_click_opens_chooser():
    button = ColorButton()
    assert _clicked(button) is True
    assert button.dialog_open is True
    assert button.button_down is False


def test_release_outside_does_not_click():
    button = ColorButton()
    button.enter()
    button.press(1)
    button.leave()
    assert button.release() is False
    assert button.dialog_open is False


def test_other_mouse_button_does_not_click():
    button = ColorButton()
    button.enter()
    button.press(3)
    assert button.release() is False


def test_choose_sets_color_and_signals():
    button = ColorButton()
    calls = []
    button.connect(calls.append)
    _clicked(button)
    new = RGBA(0.3, 0.6, 0.9)
    button.choose(new)
    assert button.color == new
    assert button.dialog_open is False
    assert calls == [button]


def test_choose_cancel_keeps_color():
    original = RGBA(0.7, 0.7, 0.7)
    button = ColorButton(original)
    calls = []
    button.connect(calls.append)
    _clicked(button)
    button.choose(None)
    assert button.color == original
    assert button.dialog_open is False
    assert calls == []


def test_choose_without_chooser_raises():
    with pytest.raises(RuntimeError):
        ColorButton().choose(RGBA())