from pathlib import Path

from j2k.paths import config_dir, default_config_path, uinput_path


def test_config_dir_xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    p = config_dir()
    assert p == tmp_path / "j2k"
    assert p.is_dir()
    assert default_config_path() == tmp_path / "j2k" / "config.toml"


def test_config_dir_home(tmp_path, monkeypatch):
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config_dir() == tmp_path / ".config" / "j2k"


def test_uinput_path(monkeypatch):
    monkeypatch.delenv("J2K_UINPUT", raising=False)
    assert uinput_path() == Path("/dev/uinput")
    monkeypatch.setenv("J2K_UINPUT", "/tmp/uinput")
    assert uinput_path() == Path("/tmp/uinput")
