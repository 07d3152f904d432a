from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from stub_client import StubNetworkClient, network_record

from privnet.cli import networks as networks_cli
from privnet.clients.base import ClientAuthError, ClientRequestError, PrivateNetworkClient
from privnet.config import AppSettings


@pytest.fixture(autouse=True)
def runtime_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    clear_settings_cache: None,
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PRIVNET_LOG_LEVEL", raising=False)
    (tmp_path / "runtime-config.yaml").write_text(
        """
private_networks:
  capability_enable:
    interval_seconds: 0
""",
        encoding="utf-8",
    )


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None]:
    logger = logging.getLogger("privnet")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_show_prints_state_json(
    stub_client: StubNetworkClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    stub_client.networks[42] = network_record(42, name="frontend", instance_ids=(3,))

    exit_code = networks_cli.main(["show", "42"], client_factory=_factory(stub_client))

    assert exit_code == 0
    state = json.loads(capsys.readouterr().out)
    assert state["id"] == "42"
    assert state["name"] == "frontend"
    assert state["instance_ids"] == [3]
    assert state["instances"][0]["private_ip_config"][0]["v4"][0]["ip"] == "10.0.0.3"


def test_apply_without_id_creates(
    tmp_path: Path,
    stub_client: StubNetworkClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    desired = _desired(
        tmp_path,
        "name: backend\ndescription: db tier\ninstance_ids: [5, 7]\n",
    )

    exit_code = networks_cli.main(
        ["apply", "--config", str(desired)],
        client_factory=_factory(stub_client),
    )

    assert exit_code == 0
    state = json.loads(capsys.readouterr().out)
    assert state["id"] == "100"
    assert sorted(state["instance_ids"]) == [5, 7]
    assert stub_client.calls[0] == ("create", "backend", "db tier", "EU")


def test_apply_with_id_updates_membership(
    tmp_path: Path,
    stub_client: StubNetworkClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    stub_client.networks[100] = network_record(100, name="backend", instance_ids=(5, 7))
    desired = _desired(tmp_path, "name: backend\ninstance_ids: [7, 9]\n")

    exit_code = networks_cli.main(
        ["apply", "--config", str(desired), "--id", "100"],
        client_factory=_factory(stub_client),
    )

    assert exit_code == 0
    state = json.loads(capsys.readouterr().out)
    assert sorted(state["instance_ids"]) == [7, 9]
    assert stub_client.calls_named("unassign", "enable", "assign") == [
        ("unassign", 100, 5),
        ("enable", 9),
        ("assign", 100, 9),
    ]


def test_apply_rejects_unknown_keys(
    tmp_path: Path,
    stub_client: StubNetworkClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    desired = _desired(tmp_path, "name: backend\ncidr: 10.0.0.0/8\n")

    exit_code = networks_cli.main(
        ["apply", "--config", str(desired)],
        client_factory=_factory(stub_client),
    )

    assert exit_code == 2
    assert "unsupported keys in desired state file: cidr" in capsys.readouterr().err
    assert stub_client.calls == []


def test_apply_reports_missing_desired_state_file(
    tmp_path: Path,
    stub_client: StubNetworkClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = networks_cli.main(
        ["apply", "--config", str(tmp_path / "nope.yaml")],
        client_factory=_factory(stub_client),
    )

    assert exit_code == 2
    assert "desired state file does not exist" in capsys.readouterr().err


def test_apply_reports_malformed_desired_state_file(
    tmp_path: Path,
    stub_client: StubNetworkClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    desired = _desired(tmp_path, "name: backend\ninstance_ids: [5, 7\n")

    exit_code = networks_cli.main(
        ["apply", "--config", str(desired)],
        client_factory=_factory(stub_client),
    )

    assert exit_code == 2
    assert "desired state file is not valid YAML" in capsys.readouterr().err
    assert stub_client.calls == []


def test_apply_rejects_boolean_instance_ids(
    tmp_path: Path,
    stub_client: StubNetworkClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    desired = _desired(tmp_path, "name: backend\ninstance_ids: [true]\n")

    exit_code = networks_cli.main(
        ["apply", "--config", str(desired)],
        client_factory=_factory(stub_client),
    )

    assert exit_code == 2
    assert "not booleans" in capsys.readouterr().err
    assert stub_client.calls == []


def test_destroy_reports_drain_failures(
    stub_client: StubNetworkClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    stub_client.retrieve_records = [network_record(100, instance_ids=(5, 7))]
    stub_client.networks[100] = network_record(100)
    stub_client.unassign_errors[7] = ClientRequestError("busy; status=500", status_code=500)

    exit_code = networks_cli.main(["destroy", "100"], client_factory=_factory(stub_client))

    assert exit_code == 0
    captured = capsys.readouterr()
    assert "private network deleted id=100 drained=1/2" in captured.out
    assert "unassign instance_id=7 status=500" in captured.err


def test_remote_failures_exit_with_error(
    capsys: pytest.CaptureFixture[str],
) -> None:
    def failing_factory(_: AppSettings) -> PrivateNetworkClient:
        raise ClientAuthError("contabo authentication failed with status=401", status_code=401)

    exit_code = networks_cli.main(["show", "1"], client_factory=failing_factory)

    assert exit_code == 2
    assert "authentication failed" in capsys.readouterr().err


def test_internal_consistency_errors_exit_with_error(
    stub_client: StubNetworkClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    stub_client.retrieve_records = []

    exit_code = networks_cli.main(["show", "1"], client_factory=_factory(stub_client))

    assert exit_code == 2
    assert "should have returned only one object" in capsys.readouterr().err


def _desired(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "desired.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def _factory(client: StubNetworkClient) -> Callable[[AppSettings], PrivateNetworkClient]:
    def factory(_: AppSettings) -> PrivateNetworkClient:
        return client

    return factory
