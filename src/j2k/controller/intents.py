"""Build the full set of desired input states from a report."""

from __future__ import annotations

from typing import TYPE_CHECKING

from j2k.controller.axes import process_stick
from j2k.controller.buttons import StickSide
from j2k.controller.digital import map_buttons, map_triggers
from j2k.controller.report import ControllerReport

if TYPE_CHECKING:
    from j2k.config import EngineConfig


def desired_intents(report: ControllerReport, config: EngineConfig) -> dict[str, bool]:
    """Return logical input name -> desired pressed state for every input."""
    intents: dict[str, bool] = {}
    intents.update(
        process_stick(
            StickSide.LEFT,
            report.left_x,
            report.left_y,
            deadzone=config.deadzone,
            threshold=config.axis_threshold,
        )
    )
    intents.update(
        process_stick(
            StickSide.RIGHT,
            report.right_x,
            report.right_y,
            deadzone=config.deadzone,
            threshold=config.axis_threshold,
        )
    )
    intents.update(map_buttons(report.buttons))
    intents.update(
        map_triggers(report.trig_left, report.trig_right, threshold=config.trigger_threshold)
    )
    return intents
