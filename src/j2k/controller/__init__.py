"""j2k controller subsystem."""

from j2k.controller.axes import StickDirections, normalize_axis, process_stick, stick_directions
from j2k.controller.buttons import BUTTON_BITS, InputName, StickSide
from j2k.controller.device import DeviceUnavailableError, HidDevice, TransientReadError
from j2k.controller.digital import map_buttons, map_triggers
from j2k.controller.intents import desired_intents
from j2k.controller.report import REPORT_SIZE, ControllerReport, ShortReadError, decode_report

__all__ = [
    "InputName",
    "StickSide",
    "BUTTON_BITS",
    "ControllerReport",
    "REPORT_SIZE",
    "ShortReadError",
    "decode_report",
    "StickDirections",
    "normalize_axis",
    "stick_directions",
    "process_stick",
    "map_buttons",
    "map_triggers",
    "desired_intents",
    "HidDevice",
    "DeviceUnavailableError",
    "TransientReadError",
]
