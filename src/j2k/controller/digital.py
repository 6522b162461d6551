"""Button bitmask and trigger mapping."""

from __future__ import annotations

from j2k.controller.buttons import BUTTON_BITS, InputName

TRIGGER_SCALE = 255.0
DEFAULT_TRIGGER_THRESHOLD = 0.5


def map_buttons(buttons: int) -> dict[InputName, bool]:
    """Return the pressed state of every mapped button bit."""
    return {name: bool(buttons & (1 << bit)) for bit, name in BUTTON_BITS.items()}


def map_triggers(
    left: int,
    right: int,
    threshold: float = DEFAULT_TRIGGER_THRESHOLD,
) -> dict[InputName, bool]:
    """Treat each analog trigger as pressed once it is past ``threshold``."""
    return {
        InputName.LEFT_TRIGGER: left / TRIGGER_SCALE > threshold,
        InputName.RIGHT_TRIGGER: right / TRIGGER_SCALE > threshold,
    }
