from __future__ import annotations

import sys

import pytest

from rtd import config
from rtd.config import load_settings, read_config_yaml, resolve_db_path


def test_default_path_is_in_user_data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config.sys, "platform", "linux")
    path = resolve_db_path()
    assert path == str(tmp_path / "xdg-data" / "rtd" / "db.sqlite3")


def test_override_beats_env_and_config(monkeypatch):
    monkeypatch.setenv("RTD_DB_PATH", "/from/env.sqlite3")
    assert resolve_db_path("/from/flag.sqlite3", {"db_path": "/from/cfg.sqlite3"}) == "/from/flag.sqlite3"


def test_env_beats_config(monkeypatch):
    monkeypatch.setenv("RTD_DB_PATH", "/from/env.sqlite3")
    assert resolve_db_path(None, {"db_path": "/from/cfg.sqlite3"}) == "/from/env.sqlite3"


def test_config_beats_default():
    assert resolve_db_path(None, {"db_path": "/from/cfg.sqlite3"}) == "/from/cfg.sqlite3"


def test_no_home_falls_back_to_memory(monkeypatch):
    monkeypatch.setattr(config, "user_data_dir", lambda: None)
    assert resolve_db_path() == ":memory:"


def test_macos_and_windows_dirs(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "_home", lambda: tmp_path)
    monkeypatch.setattr(config.sys, "platform", "darwin")
    assert config.user_data_dir() == tmp_path / "Library" / "Application Support" / "com.arknet.rtd"

    monkeypatch.setattr(config.sys, "platform", "win32")
    monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
    assert config.user_data_dir() == tmp_path / "Roaming" / "arknet" / "rtd" / "data"


def test_relative_xdg_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setattr(config.sys, "platform", "linux")
    monkeypatch.setattr(config, "_home", lambda: tmp_path)
    monkeypatch.setenv("XDG_DATA_HOME", "relative/dir")
    assert config.user_data_dir() == tmp_path / ".local" / "share" / "rtd"


def test_read_config_yaml(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("db_path: ' /tmp/x.sqlite3 '\nlog_level: info\nunknown: 1\n", encoding="utf-8")
    assert read_config_yaml(str(cfg)) == {"db_path": "/tmp/x.sqlite3", "log_level": "info"}


def test_read_config_yaml_missing_or_broken(tmp_path):
    assert read_config_yaml(str(tmp_path / "nope.yaml")) == {}
    assert read_config_yaml(None) == {}
    bad = tmp_path / "bad.yaml"
    bad.write_text("db_path: [unclosed\n", encoding="utf-8")
    assert read_config_yaml(str(bad)) == {}
    not_a_map = tmp_path / "list.yaml"
    not_a_map.write_text("- a\n- b\n", encoding="utf-8")
    assert read_config_yaml(str(not_a_map)) == {}


def test_load_settings_uses_rtd_config_env(tmp_path, monkeypatch):
    cfg = tmp_path / "conf.yaml"
    cfg.write_text(f"db_path: {tmp_path / 'cfg.sqlite3'}\nlog_level: debug\n", encoding="utf-8")
    monkeypatch.setenv("RTD_CONFIG", str(cfg))
    s = load_settings()
    assert s.db_path == str(tmp_path / "cfg.sqlite3")
    assert s.log_level == "DEBUG"


@pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="XDG layout")
def test_default_config_path_under_xdg_config(tmp_path):
    assert config.default_config_path() == str(tmp_path / "xdg-config" / "rtd" / "config.yaml")
