"""Synthetic keyboard output via a uinput virtual device."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

import evdev
from evdev import ecodes

from j2k.errors import J2KError

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_NAME = "j2k virtual keyboard"

# KEY_* constants that are not emittable keys
_NOT_KEYS = frozenset({"KEY_RESERVED", "KEY_MAX", "KEY_CNT"})


class InitializationError(J2KError):
    """Raised when the virtual keyboard cannot be created."""


class KeySink(Protocol):
    """Receives key press/release commands."""

    def press(self, key_code: int) -> None: ...

    def release(self, key_code: int) -> None: ...


def resolve_key(name: str) -> int:
    """Resolve an evdev key name ("KEY_SPACE" or "space") to its code."""
    key = name.strip().upper()
    if not key.startswith("KEY_"):
        key = f"KEY_{key}"
    code = None if key in _NOT_KEYS else ecodes.ecodes.get(key)
    if code is None:
        raise ValueError(f"Unknown key name: {name!r}")
    return code


def key_label(code: int) -> str:
    """Return a readable name for a key code."""
    name = ecodes.KEY.get(code)
    if isinstance(name, list):
        name = name[0]
    return name or str(code)


class UInputKeyboard:
    """Virtual keyboard that can emit the given key codes.

    Usage::

        with UInputKeyboard(codes) as keyboard:
            keyboard.press(ecodes.KEY_A)
            keyboard.release(ecodes.KEY_A)
    """

    def __init__(self, key_codes: Iterable[int], name: str = DEFAULT_DEVICE_NAME) -> None:
        self._key_codes = sorted(set(key_codes))
        self._name = name
        self._ui: evdev.UInput | None = None

    def open(self) -> None:
        """Create the uinput device."""
        try:
            self._ui = evdev.UInput({ecodes.EV_KEY: self._key_codes}, name=self._name)
        except (evdev.UInputError, OSError) as e:
            raise InitializationError(
                f"Failed to initialize keyboard: {e}. Is /dev/uinput writable?"
            ) from e
        logger.info("Virtual keyboard ready: %s (%d keys)", self._name, len(self._key_codes))

    def close(self) -> None:
        if self._ui is not None:
            self._ui.close()
            self._ui = None
            logger.info("Virtual keyboard closed.")

    def press(self, key_code: int) -> None:
        self._emit(key_code, 1)

    def release(self, key_code: int) -> None:
        self._emit(key_code, 0)

    def __enter__(self) -> UInputKeyboard:
        self.open()
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def _emit(self, key_code: int, value: int) -> None:
        if self._ui is None:
            raise InitializationError("Virtual keyboard is not open.")
        self._ui.write(ecodes.EV_KEY, key_code, value)
        self._ui.syn()
