"""Create, read, update, and delete for private networks and their instance membership."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from privnet.clients.base import (
    NetworkClientError,
    PrivateNetworkClient,
    PrivateNetworkRecord,
)
from privnet.config import (
    CAPABILITY_ENABLE_INTERVAL_SECONDS,
    CAPABILITY_ENABLE_MAX_ATTEMPTS,
    DEFAULT_REGION,
    AppSettings,
)
from privnet.reconcile.membership import MembershipPlan, plan_membership_changes
from privnet.reconcile.retry import Sleeper, call_with_retry
from privnet.resources.data import ResourceData
from privnet.resources.errors import InternalConsistencyError, InvalidResourceIdError
from privnet.resources.mapper import network_to_state

Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class DrainFailure:
    instance_id: int
    status_code: int | None
    detail: str


@dataclass(frozen=True, slots=True)
class DrainReport:
    network_id: int
    attempted_instance_ids: tuple[int, ...]
    failures: tuple[DrainFailure, ...]

    @property
    def complete(self) -> bool:
        return not self.failures


class PrivateNetworkResource:
    """Reconciles a private network's fields and member instances against the API."""

    def __init__(
        self,
        *,
        client: PrivateNetworkClient,
        default_region: str = DEFAULT_REGION,
        capability_enable_max_attempts: int = CAPABILITY_ENABLE_MAX_ATTEMPTS,
        capability_enable_interval_seconds: float = CAPABILITY_ENABLE_INTERVAL_SECONDS,
        sleep: Sleeper = time.sleep,
        clock: Clock = _utc_now,
    ) -> None:
        self._client = client
        self._default_region = default_region
        self._capability_enable_max_attempts = capability_enable_max_attempts
        self._capability_enable_interval_seconds = capability_enable_interval_seconds
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        client: PrivateNetworkClient,
    ) -> PrivateNetworkResource:
        return cls(
            client=client,
            default_region=settings.default_region,
            capability_enable_max_attempts=settings.capability_enable_max_attempts,
            capability_enable_interval_seconds=settings.capability_enable_interval_seconds,
        )

    def create(self, d: ResourceData) -> MembershipPlan:
        region = d.get("region") or self._default_region
        name = d.get("name")
        records = self._client.create_network(
            name=name,
            description=d.get("description"),
            region=region,
        )
        record = _require_single_record(records, operation="create private network")
        network_id = record.private_network_id
        logger.info(
            "created private network id=%s name=%r region=%s", network_id, name, region
        )

        plan = plan_membership_changes((), d.get("instance_ids"))
        self._apply_membership(network_id, plan)

        d.set_id(str(network_id))
        self.read(d)
        return plan

    def read(self, d: ResourceData) -> None:
        network_id = _network_id(d)
        record = self._retrieve_single(network_id)
        d.set_id(str(record.private_network_id))
        for key, value in network_to_state(record).items():
            d.set(key, value)

    def import_state(self, d: ResourceData) -> None:
        self.read(d)

    def update(self, d: ResourceData) -> MembershipPlan:
        network_id = _network_id(d)
        patch_name: str | None = None
        patch_description: str | None = None

        if d.has_change("name"):
            patch_name = d.get("name")
        if d.has_change("description"):
            patch_description = d.get("description")
        if d.has_change("region"):
            old_region, new_region = d.get_change("region")
            if old_region:
                logger.warning(
                    "ignoring region change for private network id=%s (%s -> %s); "
                    "region is fixed at creation",
                    network_id,
                    old_region,
                    new_region,
                )

        plan = MembershipPlan(to_remove=(), to_add=())
        if d.has_change("instance_ids"):
            old_ids, new_ids = d.get_change("instance_ids")
            plan = plan_membership_changes(old_ids, new_ids)
            self._apply_membership(network_id, plan)

        fields_changed = patch_name is not None or patch_description is not None
        if not fields_changed and plan.is_empty:
            return plan

        if fields_changed:
            self._client.patch_network(
                network_id,
                name=patch_name,
                description=patch_description,
            )
            logger.info("patched private network id=%s", network_id)

        d.set("updated_at", self._clock().isoformat())
        self.read(d)
        return plan

    def delete(self, d: ResourceData) -> DrainReport:
        network_id = _network_id(d)
        record = self._retrieve_single(network_id)

        attempted: list[int] = []
        failures: list[DrainFailure] = []
        for instance in record.instances:
            attempted.append(instance.instance_id)
            try:
                self._client.unassign_instance(network_id, instance.instance_id)
            except NetworkClientError as exc:
                # Drain is best effort; delete_network below reports leftover members.
                logger.warning(
                    "failed to unassign instance %s while draining private network id=%s: %s",
                    instance.instance_id,
                    network_id,
                    exc,
                )
                failures.append(
                    DrainFailure(
                        instance_id=instance.instance_id,
                        status_code=exc.status_code,
                        detail=str(exc),
                    )
                )

        self._client.delete_network(network_id)
        logger.info("deleted private network id=%s", network_id)
        d.set_id("")
        return DrainReport(
            network_id=network_id,
            attempted_instance_ids=tuple(attempted),
            failures=tuple(failures),
        )

    def _apply_membership(self, network_id: int, plan: MembershipPlan) -> None:
        # Removals go first so an instance never sits in two memberships at once.
        for instance_id in plan.to_remove:
            self._client.unassign_instance(network_id, instance_id)
            logger.info(
                "unassigned instance %s from private network id=%s", instance_id, network_id
            )

        for instance_id in plan.to_add:
            self._enable_private_networking(instance_id)
            self._client.assign_instance(network_id, instance_id)
            logger.info(
                "assigned instance %s to private network id=%s", instance_id, network_id
            )

    def _enable_private_networking(self, instance_id: int) -> None:
        try:
            call_with_retry(
                lambda: self._client.enable_private_networking(instance_id),
                max_attempts=self._capability_enable_max_attempts,
                interval_seconds=self._capability_enable_interval_seconds,
                sleep=self._sleep,
                description=f"enable private networking on instance {instance_id}",
            )
        except NetworkClientError as exc:
            if not exc.is_conflict:
                raise
            logger.debug("private networking already enabled on instance %s", instance_id)

    def _retrieve_single(self, network_id: int) -> PrivateNetworkRecord:
        records = self._client.retrieve_network(network_id)
        return _require_single_record(records, operation="retrieve private network")


def _require_single_record(
    records: list[PrivateNetworkRecord],
    *,
    operation: str,
) -> PrivateNetworkRecord:
    if len(records) != 1:
        raise InternalConsistencyError(operation=operation, record_count=len(records))
    return records[0]


def _network_id(d: ResourceData) -> int:
    try:
        return int(d.id)
    except ValueError:
        raise InvalidResourceIdError(d.id) from None
