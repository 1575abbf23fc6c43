from __future__ import annotations

# rtd/config.py
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

APP_NAME = "rtd"
DB_FILENAME = "db.sqlite3"
MEMORY_LOCATION = ":memory:"
DEFAULT_LOG_LEVEL = "WARNING"

ENV_DB_PATH = "RTD_DB_PATH"
ENV_CONFIG = "RTD_CONFIG"


@dataclass(frozen=True)
class Settings:
    db_path: str
    log_level: str = DEFAULT_LOG_LEVEL


def _home() -> Path | None:
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def user_data_dir() -> Path | None:
    """
    Per-user data directory, following each platform's convention:
      Linux   $XDG_DATA_HOME/rtd (default ~/.local/share/rtd)
      macOS   ~/Library/Application Support/com.arknet.rtd
      Windows %APPDATA%\\arknet\\rtd\\data
    None when no home directory can be determined.
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "arknet" / APP_NAME / "data"
        home = _home()
        return home / "AppData" / "Roaming" / "arknet" / APP_NAME / "data" if home else None
    if sys.platform == "darwin":
        home = _home()
        return home / "Library" / "Application Support" / f"com.arknet.{APP_NAME}" if home else None
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg) / APP_NAME
    home = _home()
    return home / ".local" / "share" / APP_NAME if home else None


def user_config_dir() -> Path | None:
    if sys.platform in ("win32", "darwin"):
        return user_data_dir()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg) / APP_NAME
    home = _home()
    return home / ".config" / APP_NAME if home else None


def default_config_path() -> str | None:
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        return env_path
    cfg_dir = user_config_dir()
    return str(cfg_dir / "config.yaml") if cfg_dir else None


def read_config_yaml(path: str | None) -> dict:
    """Read the recognised keys from a YAML config file; missing/broken file -> {}."""
    if not path or not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"ignoring unreadable config {path}: {e}")
        return {}
    if not isinstance(cfg, dict):
        logger.warning(f"ignoring config {path}: top level is not a mapping")
        return {}
    out = {}
    for k in ("db_path", "log_level"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def resolve_db_path(db_override: str | None = None, cfg: dict | None = None) -> str:
    # DB path resolution order:
    # 1) --db
    # 2) RTD_DB_PATH
    # 3) config.yaml db_path
    # 4) <user data dir>/db.sqlite3
    # 5) :memory: when there is no home directory to put the file in
    if db_override:
        return db_override
    env_path = os.environ.get(ENV_DB_PATH)
    if env_path:
        return env_path
    cfg_db = (cfg or {}).get("db_path")
    if cfg_db:
        return os.path.expanduser(cfg_db)
    data_dir = user_data_dir()
    if data_dir is None:
        logger.warning("could not resolve a user data directory, using an in-memory database")
        return MEMORY_LOCATION
    return str(data_dir / DB_FILENAME)


def load_settings(db_override: str | None = None, config_path: str | None = None) -> Settings:
    cfg = read_config_yaml(config_path or default_config_path())
    return Settings(
        db_path=resolve_db_path(db_override, cfg),
        log_level=cfg.get("log_level", DEFAULT_LOG_LEVEL).upper(),
    )
