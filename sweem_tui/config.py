"""
Configuration management for the timeline dashboard
Settings live in a JSON file; environment and CLI flags override them
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .paths import config_path

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5094"
API_URL_ENV = "SWEEM_API_URL"


def default_config() -> dict[str, Any]:
    return {
        "api_url": DEFAULT_API_URL,
        "page_size": 100,
        "request_timeout": 30.0,
        "viewport_width_fallback": 100,
        "auto_center": "project",  # 'project' or 'start'
        "refresh_interval": 0,  # seconds, 0 disables
        "health_interval": 15,  # seconds, 0 checks only at startup
        "log_level": "INFO",
        "log_file": "",
    }


class Config:
    """Manage application configuration"""

    def __init__(self, path: Path | None = None):
        self.config_file = Path(path) if path is not None else config_path()
        self._config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        config = default_config()
        if self.config_file.exists():
            try:
                stored = json.loads(self.config_file.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                logger.warning("Ignoring unreadable config %s: %s", self.config_file, exc)
                stored = {}
            if isinstance(stored, dict):
                config.update(stored)
            else:
                logger.warning("Ignoring config %s: expected a JSON object", self.config_file)
        env_url = os.environ.get(API_URL_ENV, "").strip()
        if env_url:
            config["api_url"] = env_url
        return config

    def save(self) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(json.dumps(self._config, indent=2), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value and save"""
        self._config[key] = value
        self.save()

    def get_int(self, key: str, default: int) -> int:
        try:
            return int(self._config.get(key, default))
        except (TypeError, ValueError):
            return default

    def get_float(self, key: str, default: float) -> float:
        try:
            return float(self._config.get(key, default))
        except (TypeError, ValueError):
            return default
