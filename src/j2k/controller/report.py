"""Fixed-layout binary controller report decoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from j2k.errors import J2KError

REPORT_SIZE = 14
"""Minimum number of bytes in a controller report."""

# buttons, leftX, leftY, rightX, rightY, trigLeft, trigRight
_REPORT_STRUCT = struct.Struct("<HhhhhBB")


class ShortReadError(J2KError):
    """Raised when a read returned fewer bytes than a full report."""

    def __init__(self, received: int, required: int = REPORT_SIZE) -> None:
        super().__init__(f"short controller read: {received} < {required} bytes")
        self.received = received
        self.required = required


@dataclass(frozen=True)
class ControllerReport:
    """Snapshot of the controller state from a single report."""

    buttons: int
    """16-bit button flag set."""
    left_x: int
    left_y: int
    right_x: int
    right_y: int
    trig_left: int
    trig_right: int


def decode_report(data: bytes | bytearray | memoryview, offset: int = 0) -> ControllerReport:
    """Decode a raw report starting at ``offset``.

    Raises ShortReadError if fewer than ``offset + REPORT_SIZE`` bytes are given.
    Field values are not validated; any bit pattern is a legal report.
    """
    required = offset + REPORT_SIZE
    if len(data) < required:
        raise ShortReadError(len(data), required)

    buttons, left_x, left_y, right_x, right_y, trig_left, trig_right = (
        _REPORT_STRUCT.unpack_from(data, offset)
    )
    return ControllerReport(
        buttons=buttons,
        left_x=left_x,
        left_y=left_y,
        right_x=right_x,
        right_y=right_y,
        trig_left=trig_left,
        trig_right=trig_right,
    )
