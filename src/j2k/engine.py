"""Edge-triggered key state machine."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from j2k.keyboard import KeySink, key_label

logger = logging.getLogger(__name__)


class KeyStateMachine:
    """Tracks which mapped keys are held and emits only press/release edges.

    Every key code referenced by ``mapping`` starts released. Inputs that share
    a key code share its state. All state changes happen under one lock, so the
    polling loop and a shutdown path may call in from different threads.

    Usage::

        with KeyStateMachine(mapping, keyboard) as keys:
            keys.apply_intent("a", True)
        # every held key is released here
    """

    def __init__(self, mapping: Mapping[str, int], sink: KeySink) -> None:
        self._mapping: Mapping[str, int] = MappingProxyType(dict(mapping))
        self._sink = sink
        self._state: dict[int, bool] = {code: False for code in self._mapping.values()}
        self._lock = threading.Lock()

    @property
    def mapping(self) -> Mapping[str, int]:
        return self._mapping

    @property
    def pressed_keys(self) -> frozenset[int]:
        with self._lock:
            return frozenset(code for code, pressed in self._state.items() if pressed)

    def is_pressed(self, key_code: int) -> bool:
        with self._lock:
            return self._state.get(key_code, False)

    def apply_intent(self, name: str, pressed: bool) -> None:
        """Move the key mapped to ``name`` towards ``pressed``.

        Unmapped names are ignored. Nothing is emitted if the key is already in
        the requested state. If the sink raises, the state is left unchanged.
        """
        key_code = self._mapping.get(name)
        if key_code is None:
            return

        with self._lock:
            self._set_key(key_code, pressed, name)

    def apply(self, intents: Mapping[str, bool]) -> None:
        """Apply a full set of desired input states.

        A key shared by several inputs is held while any of them is pressed.
        """
        desired: dict[int, tuple[bool, str]] = {}
        for name, pressed in intents.items():
            key_code = self._mapping.get(name)
            if key_code is None:
                continue
            current = desired.get(key_code)
            if current is None or (pressed and not current[0]):
                desired[key_code] = (pressed, name)

        with self._lock:
            for key_code, (pressed, name) in desired.items():
                self._set_key(key_code, pressed, name)

    def release_all(self) -> int:
        """Release every held key. Returns the number of keys released.

        A key whose release fails is logged and stays marked as held; the
        remaining keys are still released.
        """
        released = 0
        with self._lock:
            for key_code, held in self._state.items():
                if not held:
                    continue
                try:
                    self._sink.release(key_code)
                except Exception:
                    logger.exception("Failed to release key: %s", key_label(key_code))
                    continue
                self._state[key_code] = False
                released += 1
        if released:
            logger.info("Released %d held key(s).", released)
        return released

    def _set_key(self, key_code: int, pressed: bool, name: str) -> None:
        # Caller holds the lock.
        held = self._state[key_code]
        if pressed and not held:
            logger.debug("Pressing key: %s (%s)", name, key_label(key_code))
            self._sink.press(key_code)
            self._state[key_code] = True
        elif not pressed and held:
            logger.debug("Releasing key: %s (%s)", name, key_label(key_code))
            self._sink.release(key_code)
            self._state[key_code] = False

    def __enter__(self) -> KeyStateMachine:
        return self

    def __exit__(self, *_: object) -> None:
        self.release_all()
