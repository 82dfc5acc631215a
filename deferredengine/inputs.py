"""Keyboard and mouse input state with per-frame transitions."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import IntEnum

GLFW_RELEASE = 0
GLFW_PRESS = 1
GLFW_MOUSE_BUTTON_LEFT = 0
GLFW_MOUSE_BUTTON_RIGHT = 1
GLFW_KEY_SPACE = 32
GLFW_KEY_ESCAPE = 256
GLFW_KEY_ENTER = 257


class MouseButton(IntEnum):
    LEFT = 0
    RIGHT = 1


class Key(IntEnum):
    SPACE = 0
    NUM_0 = 1
    NUM_1 = 2
    NUM_2 = 3
    NUM_3 = 4
    NUM_4 = 5
    NUM_5 = 6
    NUM_6 = 7
    NUM_7 = 8
    NUM_8 = 9
    NUM_9 = 10
    A = 11
    B = 12
    C = 13
    D = 14
    E = 15
    F = 16
    G = 17
    H = 18
    I = 19  # noqa: E741
    J = 20
    K = 21
    L = 22
    M = 23
    N = 24
    O = 25  # noqa: E741
    P = 26
    Q = 27
    R = 28
    S = 29
    T = 30
    U = 31
    V = 32
    W = 33
    X = 34
    Y = 35
    Z = 36
    ENTER = 37
    ESCAPE = 38


class ButtonState(IntEnum):
    IDLE = 0
    PRESS = 1
    PRESSED = 2
    RELEASE = 3


KEY_COUNT = len(Key)
MOUSE_BUTTON_COUNT = len(MouseButton)

_GLFW_TO_KEY: dict[int, Key] = {
    GLFW_KEY_SPACE: Key.SPACE,
    GLFW_KEY_ESCAPE: Key.ESCAPE,
    GLFW_KEY_ENTER: Key.ENTER,
    **{ord(digit): Key[f"NUM_{digit}"] for digit in string.digits},
    **{ord(letter): Key[letter] for letter in string.ascii_uppercase},
}

_GLFW_TO_MOUSE_BUTTON: dict[int, MouseButton] = {
    GLFW_MOUSE_BUTTON_LEFT: MouseButton.LEFT,
    GLFW_MOUSE_BUTTON_RIGHT: MouseButton.RIGHT,
}

_ACTION_TO_STATE: dict[int, ButtonState] = {
    GLFW_PRESS: ButtonState.PRESS,
    GLFW_RELEASE: ButtonState.RELEASE,
}


def remap_glfw_key(key: int) -> Key | None:
    """Map a GLFW key code to a Key, or None if the engine does not track it."""
    return _GLFW_TO_KEY.get(key)


def _advance(states: list[ButtonState]) -> None:
    for index, state in enumerate(states):
        if state is ButtonState.PRESS:
            states[index] = ButtonState.PRESSED
        elif state is ButtonState.RELEASE:
            states[index] = ButtonState.IDLE


@dataclass
class Input:
    """Current mouse and keyboard state."""

    mouse_pos: tuple[float, float] = (0.0, 0.0)
    mouse_delta: tuple[float, float] = (0.0, 0.0)
    mouse_buttons: list[ButtonState] = field(
        default_factory=lambda: [ButtonState.IDLE] * MOUSE_BUTTON_COUNT
    )
    keys: list[ButtonState] = field(default_factory=lambda: [ButtonState.IDLE] * KEY_COUNT)

    def key_active(self, key: Key) -> bool:
        """True while the key is in any state other than idle."""
        return self.keys[key] is not ButtonState.IDLE

    def button_active(self, button: MouseButton) -> bool:
        """True while the mouse button is in any state other than idle."""
        return self.mouse_buttons[button] is not ButtonState.IDLE

    def on_key(self, key: int, action: int) -> None:
        """Record a GLFW key event; untracked keys and other actions are ignored."""
        mapped = remap_glfw_key(key)
        state = _ACTION_TO_STATE.get(action)
        if mapped is not None and state is not None:
            self.keys[mapped] = state

    def on_mouse_button(self, button: int, action: int) -> None:
        """Record a GLFW mouse button event."""
        mapped = _GLFW_TO_MOUSE_BUTTON.get(button)
        state = _ACTION_TO_STATE.get(action)
        if mapped is not None and state is not None:
            self.mouse_buttons[mapped] = state

    def on_mouse_move(self, x: float, y: float) -> None:
        """Update the cursor position and the delta from the previous one."""
        old_x, old_y = self.mouse_pos
        self.mouse_delta = (x - old_x, y - old_y)
        self.mouse_pos = (float(x), float(y))

    def clear(self, keyboard_captured: bool, mouse_captured: bool) -> None:
        """Reset devices whose input is captured by the user interface."""
        if keyboard_captured:
            self.keys = [ButtonState.IDLE] * KEY_COUNT
        if mouse_captured:
            self.mouse_buttons = [ButtonState.IDLE] * MOUSE_BUTTON_COUNT

    def end_frame(self, keyboard_captured: bool, mouse_captured: bool) -> None:
        """Move press/release states on by one frame and reset the mouse delta."""
        if not keyboard_captured:
            _advance(self.keys)
        if not mouse_captured:
            _advance(self.mouse_buttons)
        self.mouse_delta = (0.0, 0.0)