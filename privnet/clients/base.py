"""Remote private network client interface, records, and error classification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Protocol


class ErrorKind(StrEnum):
    CONFLICT = "conflict"
    TRANSIENT = "transient"
    FATAL = "fatal"


class InstanceStatus(StrEnum):
    OK = "ok"
    RESTART = "restart"
    REINSTALL = "reinstall"
    REINSTALL_FAILED = "reinstallation failed"
    INSTALLING = "installing"


@dataclass(frozen=True, slots=True)
class PrivateIpV4Config:
    ip: str
    netmask_cidr: int
    gateway: str


@dataclass(frozen=True, slots=True)
class InstanceRecord:
    instance_id: int
    display_name: str
    name: str
    private_ipv4: tuple[PrivateIpV4Config, ...]
    status: InstanceStatus | str
    error_message: str | None = None


@dataclass(frozen=True, slots=True)
class PrivateNetworkRecord:
    private_network_id: int
    name: str
    description: str
    region: str
    region_name: str
    data_center: str
    available_ips: int
    cidr: str
    created_date: datetime | None
    instances: tuple[InstanceRecord, ...] = ()


class PrivateNetworkClient(Protocol):
    client_name: str

    def create_network(
        self,
        *,
        name: str,
        description: str,
        region: str,
    ) -> list[PrivateNetworkRecord]:
        """Create a private network and return the records the API reported."""

    def retrieve_network(self, network_id: int) -> list[PrivateNetworkRecord]:
        """Return the records the API reported for a single network id."""

    def patch_network(
        self,
        network_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> None:
        """Apply a partial update; fields left as None are not sent."""

    def delete_network(self, network_id: int) -> None:
        """Delete a private network."""

    def assign_instance(self, network_id: int, instance_id: int) -> None:
        """Add an instance to a private network."""

    def unassign_instance(self, network_id: int, instance_id: int) -> None:
        """Remove an instance from a private network."""

    def enable_private_networking(self, instance_id: int) -> None:
        """Upgrade an instance with the private networking add-on."""


class NetworkClientError(Exception):
    """Base client exception carrying the classification decided at the HTTP boundary."""

    error_code = "network_client_error"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        kind: ErrorKind = ErrorKind.FATAL,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.kind = kind

    @property
    def is_conflict(self) -> bool:
        return self.kind is ErrorKind.CONFLICT


class ClientAuthError(NetworkClientError):
    error_code = "client_auth_error"


class ClientNotFoundError(NetworkClientError):
    error_code = "client_not_found"


class ClientConflictError(NetworkClientError):
    error_code = "client_conflict"

    def __init__(self, message: str, *, status_code: int | None = 409) -> None:
        super().__init__(message, status_code=status_code, kind=ErrorKind.CONFLICT)


class ClientRequestError(NetworkClientError):
    error_code = "client_request_error"


class ClientResponseError(NetworkClientError):
    error_code = "client_response_error"
