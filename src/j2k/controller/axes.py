"""Analog stick processing: deadzone, normalization and direction thresholds."""

from __future__ import annotations

import math
from dataclasses import dataclass

from j2k.controller.buttons import STICK_INPUTS, InputName, StickSide

AXIS_SCALE = 32768.0
DEFAULT_DEADZONE = 0.2
DEFAULT_THRESHOLD = 0.5


@dataclass(frozen=True)
class StickDirections:
    """Directional intents derived from one stick."""

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False


def normalize_axis(value: int) -> float:
    """Map a signed 16-bit axis value onto [-1.0, 1.0)."""
    return value / AXIS_SCALE


def stick_directions(
    x: float,
    y: float,
    deadzone: float = DEFAULT_DEADZONE,
    threshold: float = DEFAULT_THRESHOLD,
) -> StickDirections:
    """Turn a normalized (x, y) stick position into four directions.

    Positions with a magnitude below ``deadzone`` are treated as centered.
    Anything else is reduced to a unit vector, so only the direction of the
    stick matters. Y grows downward.
    """
    magnitude = math.hypot(x, y)
    if magnitude < deadzone or magnitude == 0.0:
        return StickDirections()

    x /= magnitude
    y /= magnitude
    return StickDirections(
        left=x < -threshold,
        right=x > threshold,
        up=y < -threshold,
        down=y > threshold,
    )


def process_stick(
    side: StickSide,
    raw_x: int,
    raw_y: int,
    deadzone: float = DEFAULT_DEADZONE,
    threshold: float = DEFAULT_THRESHOLD,
) -> dict[InputName, bool]:
    """Return the named directional intents for one stick from raw axis values."""
    directions = stick_directions(
        normalize_axis(raw_x),
        normalize_axis(raw_y),
        deadzone=deadzone,
        threshold=threshold,
    )
    left, right, up, down = STICK_INPUTS[side]
    return {
        left: directions.left,
        right: directions.right,
        up: directions.up,
        down: directions.down,
    }
