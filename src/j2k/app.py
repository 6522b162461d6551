"""j2k emulator - polls the controller and drives the virtual keyboard."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from j2k.config import AppConfig
from j2k.controller.device import DeviceSource, TransientReadError
from j2k.controller.intents import desired_intents
from j2k.controller.report import ShortReadError, decode_report
from j2k.engine import KeyStateMachine
from j2k.keyboard import KeySink, key_label

logger = logging.getLogger(__name__)

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class Emulator:
    """Main j2k polling loop.

    The device and sink are opened by the caller. ``run()`` returns once
    ``stop()`` is called, and always leaves every key released.
    """

    def __init__(self, config: AppConfig, device: DeviceSource, sink: KeySink) -> None:
        self._config = config
        self._device = device
        self._keys = KeyStateMachine(config.key_mapping(), sink)
        self._stopped = asyncio.Event()

    @property
    def keys(self) -> KeyStateMachine:
        return self._keys

    @property
    def running(self) -> bool:
        return not self._stopped.is_set()

    def stop(self) -> None:
        """Ask the polling loop to exit after the current cycle."""
        if not self._stopped.is_set():
            logger.info("Stopping emulator...")
        self._stopped.set()

    def install_signal_handlers(self) -> None:
        """Stop on SIGINT/SIGTERM. Must be called from the running loop."""
        loop = asyncio.get_running_loop()
        for sig in STOP_SIGNALS:
            loop.add_signal_handler(sig, self.stop)

    async def run(self) -> None:
        """Poll until stopped, then release every held key."""
        self._log_mappings()
        logger.info("Starting keyboard emulation.")
        with self._keys:
            while self.running:
                await self.poll_once()
                await self._sleep()
        logger.info("Emulator stopped.")

    async def poll_once(self) -> bool:
        """Run one read/decode/apply cycle. Returns True if a report was applied."""
        try:
            data = await asyncio.to_thread(self._device.read)
        except TransientReadError as e:
            logger.warning("%s", e)
            return False

        try:
            report = decode_report(data, offset=self._config.device.report_offset)
        except ShortReadError as e:
            if e.received:
                logger.warning("Skipping report: %s", e)
            else:
                logger.debug("No report before read timeout.")
            return False

        self._keys.apply(desired_intents(report, self._config.engine))
        return True

    # --- Helpers ---

    async def _sleep(self) -> None:
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(
                self._stopped.wait(), timeout=self._config.engine.poll_interval
            )

    def _log_mappings(self) -> None:
        logger.info("Current mappings:")
        for name, code in self._keys.mapping.items():
            logger.info("  %-13s -> %s", name, key_label(code))
