from __future__ import annotations

import os
from pathlib import Path

APP_DIR_NAME = "sweem-tui"
WINDOWS_APP_DIR_NAME = "SweemTui"


def config_directory() -> Path:
    override = os.environ.get("SWEEM_TUI_HOME")
    if override:
        return Path(override)
    if os.name == "nt":
        local_appdata = os.environ.get("LOCALAPPDATA")
        base = Path(local_appdata) if local_appdata else Path.home() / "AppData" / "Local"
        return base / WINDOWS_APP_DIR_NAME
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / APP_DIR_NAME


def config_path() -> Path:
    return config_directory() / "config.json"


def default_log_path() -> Path:
    return config_directory() / "sweem-tui.log"
