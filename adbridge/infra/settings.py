from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "default.yml"


class Settings:
    """YAML defaults + .env + environment overrides, read once per process."""

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        if cls._instance is None:
            cls._instance = super(Settings, cls).__new__(cls)
            cls._instance._load()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def _load(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        load_dotenv()
        with open(path, "r", encoding="utf-8") as f:
            self._config: Dict[str, Any] = yaml.safe_load(f) or {}
        self._override_with_env()

    def _override_with_env(self) -> None:
        if os.getenv("ADBRIDGE_ENVIRONMENT"):
            self._config["environment"] = os.getenv("ADBRIDGE_ENVIRONMENT")

        # Logging
        logging_cfg = self._config.setdefault("logging", {})
        if os.getenv("ADBRIDGE_LOG_LEVEL"):
            logging_cfg["level"] = os.getenv("ADBRIDGE_LOG_LEVEL")
        if os.getenv("ADBRIDGE_LOG_FORMAT"):
            logging_cfg["format"] = os.getenv("ADBRIDGE_LOG_FORMAT")

        # HTTP
        http_cfg = self._config.setdefault("http", {})
        if os.getenv("ADBRIDGE_HTTP_TIMEOUT_S"):
            http_cfg["timeout_s"] = float(os.getenv("ADBRIDGE_HTTP_TIMEOUT_S"))
        if os.getenv("ADBRIDGE_HTTP_UPLOAD_TIMEOUT_S"):
            http_cfg["upload_timeout_s"] = float(os.getenv("ADBRIDGE_HTTP_UPLOAD_TIMEOUT_S"))
        if os.getenv("ADBRIDGE_USER_AGENT"):
            http_cfg["user_agent"] = os.getenv("ADBRIDGE_USER_AGENT")

        # Distribution
        if os.getenv("ADBRIDGE_MAX_PARALLEL_PLATFORMS"):
            self._config.setdefault("distribution", {})["max_parallel_platforms"] = int(
                os.getenv("ADBRIDGE_MAX_PARALLEL_PLATFORMS")
            )

    def get(self, key: str, default: Any = None) -> Any:
        keys = key.split(".")
        value: Any = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    @property
    def config(self) -> Dict[str, Any]:
        return self._config


def get_settings() -> Settings:
    return Settings()
