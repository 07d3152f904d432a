"""Command line interface for private network lifecycle operations."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, TypeAlias, cast

import yaml

from privnet.clients import NetworkClientError, PrivateNetworkClient, create_network_client
from privnet.config import AppSettings, get_settings
from privnet.logging_config import setup_logging
from privnet.resources import (
    DrainReport,
    InternalConsistencyError,
    PrivateNetworkResource,
    ResourceData,
)

ClientFactory: TypeAlias = Callable[[AppSettings], PrivateNetworkClient]

DESIRED_STATE_KEYS = ("name", "description", "region", "instance_ids")


class CliValidationError(ValueError):
    """Raised when CLI input or the desired-state file is invalid."""


def main(
    argv: Sequence[str] | None = None,
    *,
    client_factory: ClientFactory | None = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    build_client = client_factory or create_network_client

    try:
        settings = get_settings()
        setup_logging(settings.log_level)
        resource = PrivateNetworkResource.from_settings(
            settings,
            client=build_client(settings),
        )

        if args.command == "show":
            data = ResourceData(resource_id=args.network_id)
            resource.read(data)
            _print_state(data)
            return 0

        if args.command == "apply":
            desired = _load_desired_state(args.config)
            if args.network_id is None:
                data = ResourceData(config=desired)
                resource.create(data)
            else:
                current = ResourceData(resource_id=args.network_id)
                resource.import_state(current)
                data = ResourceData(
                    resource_id=current.id,
                    state=current.to_state(),
                    config=desired,
                )
                resource.update(data)
            _print_state(data)
            return 0

        if args.command == "destroy":
            data = ResourceData(resource_id=args.network_id)
            report = resource.delete(data)
            _print_drain_report(report)
            return 0

        raise CliValidationError(f"unsupported command: {args.command}")
    except (NetworkClientError, InternalConsistencyError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m privnet.cli.networks")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser("show", help="read a private network and print its state")
    show_parser.add_argument("network_id")

    apply_parser = subparsers.add_parser(
        "apply",
        help="create a private network, or update one when --id is given",
    )
    apply_parser.add_argument("--config", required=True, help="desired state YAML file")
    apply_parser.add_argument("--id", dest="network_id")

    destroy_parser = subparsers.add_parser(
        "destroy",
        help="unassign all instances and delete a private network",
    )
    destroy_parser.add_argument("network_id")

    return parser


def _load_desired_state(config_path: str) -> dict[str, Any]:
    path = Path(config_path)
    if not path.is_file():
        raise CliValidationError(f"desired state file does not exist: {config_path}")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise CliValidationError(f"desired state file is not valid YAML: {exc}") from exc
    if not isinstance(parsed, dict):
        raise CliValidationError("desired state file must contain a mapping")

    unknown = sorted(set(parsed) - set(DESIRED_STATE_KEYS))
    if unknown:
        raise CliValidationError(
            f"unsupported keys in desired state file: {', '.join(unknown)}"
        )

    desired = {key: parsed[key] for key in DESIRED_STATE_KEYS if key in parsed}
    instance_ids = desired.get("instance_ids")
    if instance_ids is not None and not isinstance(instance_ids, list):
        raise CliValidationError("instance_ids must be a list of integers")
    return cast(dict[str, Any], desired)


def _print_state(data: ResourceData) -> None:
    state = data.to_state()
    state["instance_ids"] = list(state["instance_ids"])
    print(json.dumps(state, indent=2, sort_keys=True))


def _print_drain_report(report: DrainReport) -> None:
    for failure in report.failures:
        print(
            f"warning: unassign instance_id={failure.instance_id} "
            f"status={failure.status_code} detail={failure.detail}",
            file=sys.stderr,
        )
    print(
        f"private network deleted id={report.network_id} "
        f"drained={len(report.attempted_instance_ids) - len(report.failures)}/"
        f"{len(report.attempted_instance_ids)}"
    )


if __name__ == "__main__":
    raise SystemExit(main())
