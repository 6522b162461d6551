"""Logical input names and report bit layout for the Xbox 360 style controller."""

from __future__ import annotations

from enum import StrEnum


class InputName(StrEnum):
    """All logical inputs the controller can produce."""

    # Left stick
    LSTICK_LEFT = "lstick_left"
    LSTICK_RIGHT = "lstick_right"
    LSTICK_UP = "lstick_up"
    LSTICK_DOWN = "lstick_down"

    # Right stick
    RSTICK_LEFT = "rstick_left"
    RSTICK_RIGHT = "rstick_right"
    RSTICK_UP = "rstick_up"
    RSTICK_DOWN = "rstick_down"

    DPAD_UP = "dpad_up"
    DPAD_DOWN = "dpad_down"
    DPAD_LEFT = "dpad_left"
    DPAD_RIGHT = "dpad_right"

    A = "a"
    B = "b"
    X = "x"
    Y = "y"

    LEFT_SHOULDER = "lbutton"
    RIGHT_SHOULDER = "rbutton"
    LEFT_TRIGGER = "ltrigger"
    RIGHT_TRIGGER = "rtrigger"

    SELECT = "select"
    START = "start"
    LEFT_STICK_CLICK = "lstick_click"  # L3
    RIGHT_STICK_CLICK = "rstick_click"  # R3


class StickSide(StrEnum):
    """Analog sticks."""

    LEFT = "left"
    RIGHT = "right"


# Report bit position -> InputName. Bits 14 and 15 are reserved.
# TODO: the bit layout is unverified on real hardware; confirm it on a wired (0x028E) pad.
BUTTON_BITS: dict[int, InputName] = {
    0: InputName.DPAD_UP,
    1: InputName.DPAD_DOWN,
    2: InputName.DPAD_LEFT,
    3: InputName.DPAD_RIGHT,
    4: InputName.A,
    5: InputName.B,
    6: InputName.X,
    7: InputName.Y,
    8: InputName.LEFT_SHOULDER,
    9: InputName.RIGHT_SHOULDER,
    10: InputName.SELECT,
    11: InputName.START,
    12: InputName.LEFT_STICK_CLICK,
    13: InputName.RIGHT_STICK_CLICK,
}

# StickSide -> (left, right, up, down)
STICK_INPUTS: dict[StickSide, tuple[InputName, InputName, InputName, InputName]] = {
    StickSide.LEFT: (
        InputName.LSTICK_LEFT,
        InputName.LSTICK_RIGHT,
        InputName.LSTICK_UP,
        InputName.LSTICK_DOWN,
    ),
    StickSide.RIGHT: (
        InputName.RSTICK_LEFT,
        InputName.RSTICK_RIGHT,
        InputName.RSTICK_UP,
        InputName.RSTICK_DOWN,
    ),
}
