"""Application configuration loading."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

import yaml

DEFAULT_API_BASE_URL = "https://api.contabo.com"
DEFAULT_REGION = "EU"
CAPABILITY_ENABLE_MAX_ATTEMPTS = 11
CAPABILITY_ENABLE_INTERVAL_SECONDS = 1.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class AppSettings:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: str = ""
    api_timeout_seconds: float = 10.0
    default_region: str = DEFAULT_REGION
    capability_enable_max_attempts: int = CAPABILITY_ENABLE_MAX_ATTEMPTS
    capability_enable_interval_seconds: float = CAPABILITY_ENABLE_INTERVAL_SECONDS
    log_level: str = "INFO"
    runtime_config_path: str = "runtime-config.yaml"

    @classmethod
    def from_yaml(cls, runtime_config_path: str = "runtime-config.yaml") -> AppSettings:
        normalized_path = runtime_config_path.strip() or "runtime-config.yaml"
        config = _load_runtime_config(normalized_path)

        api_cfg = cast(dict[str, Any], config.get("api", {}))
        networks_cfg = cast(dict[str, Any], config.get("private_networks", {}))
        capability_cfg = cast(
            dict[str, Any], networks_cfg.get("capability_enable", {})
        )
        logging_cfg = cast(dict[str, Any], config.get("logging", {}))

        api_token = os.environ.get("PRIVNET_API_TOKEN") or str(api_cfg.get("token", ""))
        log_level = os.environ.get("PRIVNET_LOG_LEVEL") or str(
            logging_cfg.get("level", "INFO")
        )

        return cls(
            api_base_url=str(api_cfg.get("base_url", DEFAULT_API_BASE_URL)),
            api_token=api_token,
            api_timeout_seconds=max(
                1.0,
                float(api_cfg.get("timeout_seconds", 10.0)),
            ),
            default_region=_normalize_region(
                str(networks_cfg.get("default_region", DEFAULT_REGION))
            ),
            capability_enable_max_attempts=max(
                1,
                int(
                    capability_cfg.get(
                        "max_attempts", CAPABILITY_ENABLE_MAX_ATTEMPTS
                    )
                ),
            ),
            capability_enable_interval_seconds=max(
                0.0,
                float(
                    capability_cfg.get(
                        "interval_seconds", CAPABILITY_ENABLE_INTERVAL_SECONDS
                    )
                ),
            ),
            log_level=_resolve_log_level(log_level),
            runtime_config_path=normalized_path,
        )


def _load_runtime_config(runtime_config_path: str) -> dict[str, Any]:
    path = Path(runtime_config_path)
    if not path.exists() or not path.is_file():
        return {}

    parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    if isinstance(parsed, dict):
        return parsed
    return {}


def _normalize_region(region: str) -> str:
    normalized = region.strip().upper()
    return normalized or DEFAULT_REGION


def _resolve_log_level(level: str) -> str:
    normalized_level = level.strip().upper()
    if normalized_level in LOG_LEVELS:
        return normalized_level

    raise ValueError(
        "unsupported logging.level in runtime config: "
        f"{normalized_level!r}; expected one of {', '.join(LOG_LEVELS)}"
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings.from_yaml()
