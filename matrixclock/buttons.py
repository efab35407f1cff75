"""Five-key keypad: level reading, click detection and long-press detection."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from .timer import SoftTimer, TickCounter

LONG_PRESS_TIMEOUT = 2000


class Button(IntEnum):
    NONE = 0
    ENTER = 1
    UP = 2
    DOWN = 3
    LEFT = 4
    RIGHT = 5


_SCAN_ORDER = (Button.ENTER, Button.UP, Button.DOWN, Button.LEFT, Button.RIGHT)


class Buttons:
    """Polls the keypad and tracks clicks and long presses.

    ``pin_reader`` is called with a Button and returns True while that
    key is held down.
    """

    def __init__(self, pin_reader: Callable[[Button], bool], counter: TickCounter) -> None:
        self._read_pin = pin_reader
        self._timer = SoftTimer(counter)
        self._long_press = Button.NONE
        self._click = Button.NONE
        self._previous = Button.NONE
        self._hold_timing = False
        self._down = False

    def is_pressed(self, button: Button) -> bool:
        """True while the given key is held."""
        if button == Button.NONE:
            return False
        return bool(self._read_pin(Button(button)))

    def pressed_button(self) -> Button:
        """The first held key in scan order, or Button.NONE."""
        for button in _SCAN_ORDER:
            if self._read_pin(button):
                return button
        return Button.NONE

    def process(self) -> None:
        """Sample the keypad once; call periodically."""
        current = self.pressed_button()
        if current == self._previous and current != Button.NONE:
            if not self._hold_timing:
                self._timer.start(LONG_PRESS_TIMEOUT)
                self._hold_timing = True
            if self._timer.check():
                self._timer.stop()
                self._long_press = current
        else:
            self._hold_timing = False

        if current != Button.NONE and not self._down:
            self._down = True
        if current == Button.NONE and self._down:
            self._down = False
            self._click = self._previous
        self._previous = current

    def take_long_press(self) -> Button:
        """Return the pending long-pressed key and clear it."""
        result = self._long_press
        self._long_press = Button.NONE
        return result

    def clear_long_press(self) -> None:
        self._long_press = Button.NONE

    def click_button(self) -> Button:
        """The last clicked key; it stays until clear_click is called."""
        return self._click

    def clear_click(self) -> None:
        self._click = Button.NONE