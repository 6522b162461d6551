"""XDG-compliant config paths."""

from __future__ import annotations

import os
from pathlib import Path


def config_dir() -> Path:
    """Return ~/.config/j2k, creating it if needed."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    p = Path(xdg) / "j2k" if xdg else Path.home() / ".config" / "j2k"
    p.mkdir(parents=True, exist_ok=True)
    return p


def default_config_path() -> Path:
    """Return the default config file path."""
    return config_dir() / "config.toml"


def uinput_path() -> Path:
    """Return the uinput device node used for the virtual keyboard."""
    return Path(os.environ.get("J2K_UINPUT", "/dev/uinput"))
