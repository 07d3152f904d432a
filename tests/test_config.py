from __future__ import annotations

from pathlib import Path

import pytest

from privnet.config import AppSettings, get_settings


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PRIVNET_API_TOKEN", raising=False)
    monkeypatch.delenv("PRIVNET_LOG_LEVEL", raising=False)


def _write_runtime_config(tmp_path: Path, content: str) -> Path:
    runtime_config = tmp_path / "runtime-config.yaml"
    runtime_config.write_text(content, encoding="utf-8")
    return runtime_config


def test_from_yaml_defaults_when_file_is_missing(tmp_path: Path) -> None:
    settings = AppSettings.from_yaml(str(tmp_path / "missing.yaml"))

    assert settings.api_base_url == "https://api.contabo.com"
    assert settings.api_token == ""
    assert settings.default_region == "EU"
    assert settings.capability_enable_max_attempts == 11
    assert settings.capability_enable_interval_seconds == 1.0
    assert settings.log_level == "INFO"


def test_from_yaml_reads_all_sections(tmp_path: Path) -> None:
    runtime_config = _write_runtime_config(
        tmp_path,
        """
api:
  base_url: https://api.example.test
  token: secret-token
  timeout_seconds: 30
private_networks:
  default_region: us-central
  capability_enable:
    max_attempts: 4
    interval_seconds: 2.5
logging:
  level: debug
""",
    )

    settings = AppSettings.from_yaml(str(runtime_config))

    assert settings.api_base_url == "https://api.example.test"
    assert settings.api_token == "secret-token"
    assert settings.api_timeout_seconds == 30.0
    assert settings.default_region == "US-CENTRAL"
    assert settings.capability_enable_max_attempts == 4
    assert settings.capability_enable_interval_seconds == 2.5
    assert settings.log_level == "DEBUG"
    assert settings.runtime_config_path == str(runtime_config)


def test_from_yaml_clamps_bounds(tmp_path: Path) -> None:
    runtime_config = _write_runtime_config(
        tmp_path,
        """
api:
  timeout_seconds: 0
private_networks:
  default_region: "  "
  capability_enable:
    max_attempts: 0
    interval_seconds: -3
""",
    )

    settings = AppSettings.from_yaml(str(runtime_config))

    assert settings.api_timeout_seconds == 1.0
    assert settings.default_region == "EU"
    assert settings.capability_enable_max_attempts == 1
    assert settings.capability_enable_interval_seconds == 0.0


def test_environment_overrides_token_and_log_level(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    runtime_config = _write_runtime_config(
        tmp_path,
        """
api:
  token: from-file
logging:
  level: error
""",
    )
    monkeypatch.setenv("PRIVNET_API_TOKEN", "from-env")
    monkeypatch.setenv("PRIVNET_LOG_LEVEL", "warning")

    settings = AppSettings.from_yaml(str(runtime_config))

    assert settings.api_token == "from-env"
    assert settings.log_level == "WARNING"


def test_from_yaml_rejects_unknown_log_level(tmp_path: Path) -> None:
    runtime_config = _write_runtime_config(
        tmp_path,
        """
logging:
  level: verbose
""",
    )

    with pytest.raises(ValueError, match="unsupported logging.level"):
        AppSettings.from_yaml(str(runtime_config))


def test_non_mapping_yaml_falls_back_to_defaults(tmp_path: Path) -> None:
    runtime_config = _write_runtime_config(tmp_path, "- just\n- a list\n")

    settings = AppSettings.from_yaml(str(runtime_config))

    assert settings.default_region == "EU"


def test_get_settings_is_cached(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    clear_settings_cache: None,
) -> None:
    monkeypatch.chdir(tmp_path)
    _write_runtime_config(
        tmp_path,
        """
private_networks:
  default_region: asia
""",
    )

    first = get_settings()

    assert first.default_region == "ASIA"
    assert get_settings() is first
