"""Configuration loading from YAML + environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatchConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MSGDISPATCH_")

    # Open API endpoints
    base_url: str = "https://api.sgroup.qq.com"
    sandbox_base_url: str = "https://sandbox.api.sgroup.qq.com"
    sandbox: bool = False

    # Bot credentials (from env)
    app_id: str = ""
    token: str = ""

    # HTTP
    timeout: float = 15.0

    log_level: str = "INFO"

    @property
    def api_url(self) -> str:
        return self.sandbox_base_url if self.sandbox else self.base_url

    @classmethod
    def from_yaml(cls, path: str | Path = "msgdispatch.yaml") -> DispatchConfig:
        """Load config from YAML file, with env vars taking precedence."""
        yaml_path = Path(path)
        yaml_data: dict[str, Any] = {}

        if yaml_path.exists():
            with yaml_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            yaml_data = _flatten_yaml(raw.get("msgdispatch", {}))

        # Init kwargs outrank env vars in pydantic-settings, so drop keys the env sets
        env_set = {key for key in cls.model_fields if _env_name(key) in _environ()}
        return cls(**{k: v for k, v in yaml_data.items() if k not in env_set})


def _environ() -> dict[str, str]:
    return {k.upper(): v for k, v in os.environ.items()}


def _env_name(field_name: str) -> str:
    return f"MSGDISPATCH_{field_name}".upper()


def _flatten_yaml(data: dict, prefix: str = "") -> dict:
    """Flatten nested YAML into flat key-value pairs for Pydantic."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full_key = key if not prefix else f"{prefix}_{key}"
        if isinstance(value, dict):
            flat.update(_flatten_yaml(value, full_key))
        else:
            flat[full_key] = value
    return flat
