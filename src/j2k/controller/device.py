"""HID device source for raw controller reports."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from j2k.errors import J2KError

if TYPE_CHECKING:
    from j2k.config import DeviceConfig

logger = logging.getLogger(__name__)


class DeviceUnavailableError(J2KError):
    """Raised when no controller is found or it cannot be opened."""


class TransientReadError(J2KError):
    """Raised when a single read from an open controller fails."""


class DeviceSource(Protocol):
    """Anything that yields raw controller reports."""

    def read(self) -> bytes: ...


@dataclass(frozen=True)
class HidDeviceInfo:
    """A HID device as reported by enumeration."""

    path: str
    vendor_id: int
    product_id: int
    product: str = ""
    manufacturer: str = ""

    def describe(self) -> str:
        name = " ".join(part for part in (self.manufacturer, self.product) if part) or "unknown"
        return f"{self.vendor_id:04x}:{self.product_id:04x} {name} ({self.path})"


def list_devices(vendor_id: int = 0, product_id: int = 0) -> list[HidDeviceInfo]:
    """Enumerate HID devices. Zero ids match any device."""
    import hid

    return [_device_info(entry) for entry in hid.enumerate(vendor_id, product_id)]


class HidDevice:
    """Blocking reader over a single HID controller.

    Usage::

        with HidDevice(config) as device:
            data = device.read()
    """

    def __init__(self, config: DeviceConfig) -> None:
        self._config = config
        self._device: Any = None

    @property
    def is_open(self) -> bool:
        return self._device is not None

    def open(self) -> None:
        """Open the configured device, or the first matching vendor/product."""
        import hid

        path = self._config.path or self._find_device()
        if not path:
            raise DeviceUnavailableError(
                f"No compatible controller found "
                f"({self._config.vendor_id:04x}:{self._config.product_id:04x})."
            )

        try:
            self._device = hid.Device(path=path.encode())
        except (hid.HIDException, OSError) as e:
            raise DeviceUnavailableError(f"Failed to open controller {path}: {e}") from e
        logger.info("Opened controller: %s (%s)", getattr(self._device, "product", ""), path)

    def close(self) -> None:
        if self._device is not None:
            self._device.close()
            self._device = None
            logger.info("Controller closed.")

    def read(self) -> bytes:
        """Read one report, waiting at most ``read_timeout_ms``.

        Returns an empty byte string if the timeout expires first.
        """
        import hid

        if self._device is None:
            raise DeviceUnavailableError("Controller is not open.")
        try:
            return bytes(self._device.read(self._config.read_size, self._config.read_timeout_ms))
        except (hid.HIDException, OSError) as e:
            raise TransientReadError(f"Error reading from controller: {e}") from e

    def __enter__(self) -> HidDevice:
        self.open()
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    # --- Internal ---

    def _find_device(self) -> str | None:
        matches = list_devices(self._config.vendor_id, self._config.product_id)
        if not matches:
            return None
        if len(matches) > 1:
            logger.info("Found %d matching controllers, using the first.", len(matches))
        return matches[0].path


def _device_info(entry: dict[str, Any]) -> HidDeviceInfo:
    path = entry.get("path", b"")
    if isinstance(path, bytes):
        path = path.decode(errors="replace")
    return HidDeviceInfo(
        path=path,
        vendor_id=entry.get("vendor_id", 0),
        product_id=entry.get("product_id", 0),
        product=entry.get("product_string") or "",
        manufacturer=entry.get("manufacturer_string") or "",
    )
