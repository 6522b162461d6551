"""j2k configuration - Pydantic v2 based."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from j2k.controller.buttons import InputName
from j2k.controller.report import REPORT_SIZE
from j2k.keyboard import DEFAULT_DEVICE_NAME, resolve_key

XBOX360_VENDOR_ID = 0x045E
XBOX360_PRODUCT_ID = 0x028E

DEFAULT_BINDINGS: dict[str, str] = {
    # Left stick
    "lstick_left": "KEY_A",
    "lstick_right": "KEY_D",
    "lstick_up": "KEY_W",
    "lstick_down": "KEY_S",
    # Right stick
    "rstick_left": "KEY_J",
    "rstick_right": "KEY_L",
    "rstick_up": "KEY_I",
    "rstick_down": "KEY_K",
    # D-pad
    "dpad_up": "KEY_UP",
    "dpad_down": "KEY_DOWN",
    "dpad_left": "KEY_LEFT",
    "dpad_right": "KEY_RIGHT",
    # Face buttons
    "a": "KEY_SPACE",
    "b": "KEY_E",
    "x": "KEY_F",
    "y": "KEY_Q",
    # Shoulders and triggers
    "rbutton": "KEY_R",
    "lbutton": "KEY_T",
    "rtrigger": "KEY_Y",
    "ltrigger": "KEY_U",
    "select": "KEY_TAB",
    "start": "KEY_ENTER",
    # L3/R3
    "lstick_click": "KEY_LEFTSHIFT",
    "rstick_click": "KEY_LEFTCTRL",
}


class DeviceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    vendor_id: Annotated[int, Field(ge=0, le=0xFFFF)] = XBOX360_VENDOR_ID
    product_id: Annotated[int, Field(ge=0, le=0xFFFF)] = XBOX360_PRODUCT_ID
    path: str = ""
    """hidraw path of the controller. Empty string = find by vendor/product id."""
    read_size: Annotated[int, Field(ge=14, le=1024)] = 64
    read_timeout_ms: Annotated[int, Field(ge=0, le=10_000)] = 100
    report_offset: Annotated[int, Field(ge=0, le=1010)] = 0
    """Bytes to skip before the report starts (header on some firmwares)."""

    @model_validator(mode="after")
    def report_fits_read(self) -> DeviceConfig:
        if self.report_offset + REPORT_SIZE > self.read_size:
            raise ValueError(
                f"report_offset ({self.report_offset}) + {REPORT_SIZE} exceeds "
                f"read_size ({self.read_size})."
            )
        return self


class EngineConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    deadzone: Annotated[float, Field(ge=0.0, le=1.0)] = 0.2
    axis_threshold: Annotated[float, Field(gt=0.0, lt=1.0)] = 0.5
    trigger_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = 0.5
    poll_interval: Annotated[float, Field(gt=0.0, le=1.0)] = 0.016
    """Seconds between polls (~60Hz)."""


class KeyboardConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = DEFAULT_DEVICE_NAME
    """Name of the virtual keyboard device."""


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    device: DeviceConfig = Field(default_factory=DeviceConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    keyboard: KeyboardConfig = Field(default_factory=KeyboardConfig)
    bindings: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_BINDINGS))
    """Input binding map: {'dpad_up': 'KEY_UP', ...}"""

    @field_validator("bindings")
    @classmethod
    def bindings_are_known(cls, v: dict[str, str]) -> dict[str, str]:
        for name, key in v.items():
            try:
                InputName(name)
            except ValueError:
                raise ValueError(f"Unknown input name in bindings: {name!r}") from None
            resolve_key(key)
        return v

    def key_mapping(self) -> Mapping[str, int]:
        """Return the read-only input name -> key code table."""
        return MappingProxyType({name: resolve_key(key) for name, key in self.bindings.items()})

    @classmethod
    def load(cls, path: Path | None = None) -> AppConfig:
        """Load config from TOML file. Uses defaults if file not found."""
        from j2k.paths import default_config_path

        config_path = path or default_config_path()
        if not config_path.exists():
            return cls()

        with config_path.open("rb") as f:
            data = tomllib.load(f)

        return cls.model_validate(data)

    @classmethod
    def load_with_override(
        cls,
        base: Path | None = None,
        override: Path | None = None,
    ) -> AppConfig:
        """Load base config, then merge override TOML on top."""
        from j2k.paths import default_config_path

        base_path = base or default_config_path()
        base_data: dict[str, object] = {}
        if base_path.exists():
            with base_path.open("rb") as f:
                base_data = tomllib.load(f)

        if override and override.exists():
            with override.open("rb") as f:
                override_data = tomllib.load(f)
            base_data = _deep_merge(base_data, override_data)

        return cls.model_validate(base_data)


def _deep_merge(base: dict[str, object], override: dict[str, object]) -> dict[str, object]:
    """Recursively merge override into base."""
    result: dict[str, object] = dict(base)
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = _deep_merge(base_value, value)
        else:
            result[key] = value
    return result
