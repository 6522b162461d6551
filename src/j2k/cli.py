"""j2k CLI — typer-based entry point."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Annotated

import typer

app = typer.Typer(
    name="j2k",
    help="Use a game controller as a keyboard.",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Configuration commands.")
app.add_typer(config_app, name="config")

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to config file."),
]


# --- Run ---


@app.command()
def run(
    config: ConfigOption = None,
    override: Annotated[
        Path | None,
        typer.Option("--override", "-o", help="Override TOML to merge on top of config."),
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Enable debug logging.")] = False,
) -> None:
    """Start the joystick to keyboard emulator."""
    _setup_logging(debug)
    from j2k.app import Emulator
    from j2k.config import AppConfig
    from j2k.controller.device import DeviceUnavailableError, HidDevice
    from j2k.keyboard import InitializationError, UInputKeyboard

    cfg = AppConfig.load_with_override(base=config, override=override)
    mapping = cfg.key_mapping()

    async def _main() -> None:
        with (
            UInputKeyboard(mapping.values(), name=cfg.keyboard.name) as keyboard,
            HidDevice(cfg.device) as device,
        ):
            emulator = Emulator(cfg, device, keyboard)
            emulator.install_signal_handlers()
            await emulator.run()

    try:
        with contextlib.suppress(KeyboardInterrupt):
            asyncio.run(_main())
    except (InitializationError, DeviceUnavailableError) as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(code=1) from e


# --- Doctor ---


@app.command()
def doctor(
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
) -> None:
    """Check system requirements and configuration."""
    results: list[dict[str, str]] = []

    def check(name: str, fn: object) -> bool:
        try:
            fn()  # type: ignore[operator]
            results.append({"name": name, "status": "ok"})
            return True
        except Exception as e:
            results.append({"name": name, "status": "fail", "message": str(e)})
            return False

    def _check_hidapi() -> None:
        import hid  # noqa: F401

    def _check_controller() -> None:
        from j2k.config import AppConfig
        from j2k.controller.device import list_devices

        cfg = AppConfig.load()
        if cfg.device.path:
            if not Path(cfg.device.path).exists():
                raise RuntimeError(f"Configured device does not exist: {cfg.device.path}")
            return
        if not list_devices(cfg.device.vendor_id, cfg.device.product_id):
            raise RuntimeError("No compatible controller found. Is it connected?")

    def _check_uinput() -> None:
        from j2k.paths import uinput_path

        path = uinput_path()
        if not path.exists():
            raise RuntimeError(f"{path} not found. Is the uinput module loaded?")
        if not os.access(path, os.W_OK):
            raise RuntimeError(f"{path} is not writable by this user.")

    def _check_config() -> None:
        from j2k.config import AppConfig
        from j2k.paths import default_config_path

        path = default_config_path()
        if path.exists():
            AppConfig.load(path)
        # No config file is fine — defaults are used

    check("hidapi", _check_hidapi)
    check("controller", _check_controller)
    check("uinput", _check_uinput)
    check("config", _check_config)

    if json_output:
        typer.echo(json.dumps(results, indent=2))
    else:
        all_ok = True
        for result in results:
            status = result["status"]
            message = result.get("message", "")
            icon = "✓" if status == "ok" else "✗"
            line = f"  {icon} {result['name']}"
            if message:
                line += f": {message}"
            typer.echo(line)
            if status != "ok":
                all_ok = False
        if not all_ok:
            raise typer.Exit(code=1)


# --- Devices ---


@app.command()
def devices(
    config: ConfigOption = None,
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="List every HID device, not only matches.")
    ] = False,
) -> None:
    """List HID devices matching the configured controller."""
    from j2k.config import AppConfig
    from j2k.controller.device import list_devices

    cfg = AppConfig.load(config)
    found = (
        list_devices()
        if show_all
        else list_devices(cfg.device.vendor_id, cfg.device.product_id)
    )
    if not found:
        typer.echo("✗ No matching HID devices found.", err=True)
        raise typer.Exit(code=1)
    for info in found:
        typer.echo(f"  {info.describe()}")


# --- Keys ---


@app.command()
def keys(config: ConfigOption = None) -> None:
    """Show which key each controller input is mapped to."""
    from j2k.config import AppConfig
    from j2k.controller.buttons import InputName
    from j2k.keyboard import key_label

    cfg = AppConfig.load(config)
    mapping = cfg.key_mapping()
    for name in InputName:
        code = mapping.get(name)
        target = key_label(code) if code is not None else "-"
        typer.echo(f"  {name:<13} -> {target}")


# --- Config subcommands ---


@config_app.command("show")
def config_show(config: ConfigOption = None) -> None:
    """Show effective configuration as TOML."""
    import tomli_w

    from j2k.config import AppConfig

    cfg = AppConfig.load(config)
    typer.echo(tomli_w.dumps(cfg.model_dump()))


@config_app.command("validate")
def config_validate(config: ConfigOption = None) -> None:
    """Validate configuration file and report errors."""
    from pydantic import ValidationError

    from j2k.config import AppConfig
    from j2k.paths import default_config_path

    path = config or default_config_path()
    if not path.exists():
        typer.echo(f"Config file not found: {path}")
        typer.echo("Using defaults — no validation errors.")
        return

    try:
        cfg = AppConfig.load(path)
        typer.echo(f"✓ Config valid: {path}")
        typer.echo(f"  device   = {cfg.device.vendor_id:04x}:{cfg.device.product_id:04x}")
        typer.echo(f"  deadzone = {cfg.engine.deadzone}")
        typer.echo(f"  bindings = {len(cfg.bindings)} entries")
    except ValidationError as e:
        typer.echo(f"✗ Config validation failed: {path}", err=True)
        for error in e.errors():
            loc = " -> ".join(str(item) for item in error["loc"])
            typer.echo(f"  [{loc}] {error['msg']}", err=True)
        raise typer.Exit(code=1) from e


# --- Helpers ---


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
