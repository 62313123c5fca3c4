"""State of a graph colour picker: colour, pie fraction, hover and clicks."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional, Union

from matemonitor.colors import (
    RGBA,
    PickerType,
    decode_drag_data,
    encode_drag_data,
    drag_icon_pixel as _pixel_for,
    highlight,
)

MIN_WIDTH = 15
MIN_HEIGHT = 15
DEFAULT_TITLE = "Pick a Color"
TOOLTIP = "Click to set graph colors"

ColorSetCallback = Callable[["ColorButton"], None]


class ColorButton:
    """A button showing a colour sample that opens a chooser when clicked.

    Handlers registered with :meth:`connect` are called whenever the user
    sets a new colour, either through the chooser or by dropping one.
    """

    def __init__(
        self,
        color: Optional[RGBA] = None,
        cbtype: Union[PickerType, int] = PickerType.CPU,
        title: str = DEFAULT_TITLE,
    ) -> None:
        self.color = color if color is not None else RGBA(0.0, 0.0, 0.0, 1.0)
        self.cbtype = PickerType(cbtype)
        self.title = title
        self.fraction = 0.5
        self.highlight = 0.0
        self.in_button = False
        self.button_down = False
        self.dialog_open = False
        self.tooltip = TOOLTIP
        self._handlers: list[ColorSetCallback] = []

    def connect(self, callback: ColorSetCallback) -> None:
        """Call *callback* with this button each time the user sets a colour."""
        self._handlers.append(callback)

    def _emit_color_set(self) -> None:
        for handler in list(self._handlers):
            handler(self)

    def set_color(self, color: RGBA) -> None:
        """Replace the colour without telling the color-set handlers."""
        self.color = color

    def set_fraction(self, fraction: float) -> None:
        """Set how full a pie picker is drawn, from 0 to 1."""
        self.fraction = float(fraction)

    def highlighted_color(self) -> RGBA:
        """Return the colour as drawn, lightened while the pointer hovers."""
        return highlight(self.color, self.highlight)

    def drag_data(self) -> bytes:
        """Return the application/x-color data offered when dragging."""
        return encode_drag_data(self.color)

    def receive_drag_data(self, data: bytes) -> None:
        """Take the colour from dropped application/x-color data.

        Alpha is kept.  Raises ValueError for data of the wrong length.
        """
        red, green, blue = decode_drag_data(data)
        self.color = replace(self.color, red=red, green=green, blue=blue)
        self._emit_color_set()

    def drag_icon_pixel(self) -> int:
        """Return the pixel value that fills the drag icon."""
        return _pixel_for(self.color)

    def enter(self) -> None:
        """The pointer moved over the button."""
        self.highlight = 1.0
        self.in_button = True

    def leave(self) -> None:
        """The pointer left the button."""
        self.highlight = 0.0
        self.in_button = False

    def press(self, button: int) -> None:
        """A mouse button went down; only the first button arms a click."""
        if button == 1:
            self.button_down = True

    def release(self) -> bool:
        """A mouse button went up; return True if this opened the chooser."""
        clicked = self.button_down and self.in_button
        self.button_down = False
        if clicked:
            self.dialog_open = True
        return clicked

    def choose(self, color: Optional[RGBA]) -> None:
        """Close the chooser, accepting *color* or cancelling with None.

        Raises RuntimeError when the chooser is not open.
        """
        if not self.dialog_open:
            raise RuntimeError("colour chooser is not open")
        self.dialog_open = False
        if color is None:
            return
        self.color = color
        self._emit_color_set()

    def preferred_size(self) -> tuple[int, int]:
        """Return the minimum and natural size as (width, height)."""
        return MIN_WIDTH, MIN_HEIGHT