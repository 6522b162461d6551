"""Tests for the j2k CLI."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from j2k.cli import app
from j2k.controller.device import DeviceUnavailableError, HidDeviceInfo
from j2k.keyboard import InitializationError

runner = CliRunner()

PAD = HidDeviceInfo(
    path="/dev/hidraw3",
    vendor_id=0x045E,
    product_id=0x028E,
    product="Controller",
    manufacturer="Microsoft",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "game controller as a keyboard" in result.stdout


def test_cli_config_show(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text("[device]\npath = '/dev/hidraw7'")

    result = runner.invoke(app, ["config", "show", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "[device]" in result.stdout
    assert "/dev/hidraw7" in result.stdout
    assert "[bindings]" in result.stdout


def test_cli_config_validate_valid(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text("[engine]\ndeadzone = 0.3")

    result = runner.invoke(app, ["config", "validate", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "Config valid" in result.stdout
    assert "deadzone = 0.3" in result.stdout


def test_cli_config_validate_invalid(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text("[bindings]\nrsdown = 'KEY_K'")

    result = runner.invoke(app, ["config", "validate", "--config", str(config_path)])
    assert result.exit_code == 1
    assert "Config validation failed" in result.stderr
    assert "rsdown" in result.stderr


def test_cli_config_validate_missing(tmp_path):
    result = runner.invoke(
        app, ["config", "validate", "--config", str(tmp_path / "missing.toml")]
    )
    assert result.exit_code == 0
    assert "Using defaults" in result.stdout


def test_cli_keys(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text("[bindings]\na = 'KEY_SPACE'")

    result = runner.invoke(app, ["keys", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "a             -> KEY_SPACE" in result.stdout
    assert "dpad_up       -> -" in result.stdout


def test_cli_devices():
    with patch("j2k.controller.device.list_devices", return_value=[PAD]) as mock_list:
        result = runner.invoke(app, ["devices"])

    assert result.exit_code == 0
    assert "045e:028e Microsoft Controller (/dev/hidraw3)" in result.stdout
    mock_list.assert_called_once_with(0x045E, 0x028E)


def test_cli_devices_all_none_found():
    with patch("j2k.controller.device.list_devices", return_value=[]) as mock_list:
        result = runner.invoke(app, ["devices", "--all"])

    assert result.exit_code == 1
    mock_list.assert_called_once_with()


def test_cli_doctor_ok(tmp_path):
    uinput = tmp_path / "uinput"
    uinput.touch()
    with (
        patch.dict("sys.modules", {"hid": MagicMock()}),
        patch("j2k.controller.device.list_devices", return_value=[PAD]),
        patch("j2k.paths.uinput_path", return_value=uinput),
    ):
        result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 0
    assert "✓ hidapi" in result.stdout
    assert "✓ controller" in result.stdout
    assert "✓ uinput" in result.stdout
    assert "✓ config" in result.stdout


def test_cli_doctor_fail(tmp_path):
    with (
        patch.dict("sys.modules", {"hid": MagicMock()}),
        patch("j2k.controller.device.list_devices", return_value=[]),
        patch("j2k.paths.uinput_path", return_value=tmp_path / "missing"),
    ):
        result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 1
    assert "✗ controller" in result.stdout
    assert "✗ uinput" in result.stdout


def test_cli_doctor_json(tmp_path):
    uinput = tmp_path / "uinput"
    uinput.touch()
    with (
        patch.dict("sys.modules", {"hid": MagicMock()}),
        patch("j2k.controller.device.list_devices", return_value=[PAD]),
        patch("j2k.paths.uinput_path", return_value=uinput),
    ):
        result = runner.invoke(app, ["doctor", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert any(d["name"] == "controller" and d["status"] == "ok" for d in data)


def test_cli_run_keyboard_init_failure():
    with (
        patch("j2k.cli.logging.basicConfig"),
        patch(
            "j2k.keyboard.UInputKeyboard.open",
            side_effect=InitializationError("Failed to initialize keyboard"),
        ),
    ):
        result = runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert "Failed to initialize keyboard" in result.stderr


def test_cli_run_no_device():
    with (
        patch("j2k.cli.logging.basicConfig"),
        patch("j2k.keyboard.UInputKeyboard.open"),
        patch("j2k.keyboard.UInputKeyboard.close") as mock_close,
        patch(
            "j2k.controller.device.HidDevice.open",
            side_effect=DeviceUnavailableError("No compatible controller found"),
        ),
    ):
        result = runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert "No compatible controller found" in result.stderr
    mock_close.assert_called_once()


def test_cli_run_until_stopped():
    async def fake_run(self):
        self.stop()

    with (
        patch("j2k.cli.logging.basicConfig"),
        patch("j2k.keyboard.UInputKeyboard.open"),
        patch("j2k.keyboard.UInputKeyboard.close"),
        patch("j2k.controller.device.HidDevice.open"),
        patch("j2k.controller.device.HidDevice.close") as mock_close,
        patch("j2k.app.Emulator.install_signal_handlers") as mock_signals,
        patch("j2k.app.Emulator.run", fake_run),
    ):
        result = runner.invoke(app, ["run", "--debug"])

    assert result.exit_code == 0
    mock_signals.assert_called_once()
    mock_close.assert_called_once()
