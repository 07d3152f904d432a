"""Contabo REST API adapter for private networks."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx

from privnet.clients.base import (
    ClientAuthError,
    ClientConflictError,
    ClientNotFoundError,
    ClientRequestError,
    ClientResponseError,
    ErrorKind,
    InstanceRecord,
    InstanceStatus,
    PrivateIpV4Config,
    PrivateNetworkRecord,
)

HTTPClientFactory = Callable[..., httpx.Client]


class ContaboPrivateNetworkClient:
    client_name = "contabo"

    def __init__(
        self,
        *,
        base_url: str,
        api_token: str,
        timeout_seconds: float = 10.0,
        http_client_factory: HTTPClientFactory = httpx.Client,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_token = api_token
        self._timeout_seconds = timeout_seconds
        self._http_client_factory = http_client_factory

    def create_network(
        self,
        *,
        name: str,
        description: str,
        region: str,
    ) -> list[PrivateNetworkRecord]:
        response = self._request(
            "POST",
            "/v1/private-networks",
            json_body={"name": name, "description": description, "region": region},
        )
        self._raise_for_status(
            response,
            default_message=f"failed to create private network name={name!r}",
        )
        return _parse_network_records(response)

    def retrieve_network(self, network_id: int) -> list[PrivateNetworkRecord]:
        response = self._request("GET", f"/v1/private-networks/{network_id}")
        self._raise_for_status(
            response,
            default_message=f"failed to retrieve private network {network_id}",
        )
        return _parse_network_records(response)

    def patch_network(
        self,
        network_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> None:
        payload: dict[str, Any] = {}
        if name is not None:
            payload["name"] = name
        if description is not None:
            payload["description"] = description

        response = self._request(
            "PATCH",
            f"/v1/private-networks/{network_id}",
            json_body=payload,
        )
        self._raise_for_status(
            response,
            default_message=f"failed to patch private network {network_id}",
        )

    def delete_network(self, network_id: int) -> None:
        response = self._request("DELETE", f"/v1/private-networks/{network_id}")
        self._raise_for_status(
            response,
            default_message=f"failed to delete private network {network_id}",
        )

    def assign_instance(self, network_id: int, instance_id: int) -> None:
        response = self._request(
            "POST",
            f"/v1/private-networks/{network_id}/instances/{instance_id}",
        )
        self._raise_for_status(
            response,
            default_message=(
                f"failed to assign instance {instance_id} to private network {network_id}"
            ),
        )

    def unassign_instance(self, network_id: int, instance_id: int) -> None:
        response = self._request(
            "DELETE",
            f"/v1/private-networks/{network_id}/instances/{instance_id}",
        )
        self._raise_for_status(
            response,
            default_message=(
                f"failed to unassign instance {instance_id} from private network {network_id}"
            ),
        )

    def enable_private_networking(self, instance_id: int) -> None:
        # The upgrade endpoint takes an empty object for the add-on.
        response = self._request(
            "POST",
            f"/v1/compute/instances/{instance_id}/upgrade",
            json_body={"privateNetworking": {}},
        )
        self._raise_for_status(
            response,
            default_message=(
                f"failed to enable private networking on instance {instance_id}"
            ),
        )

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        with self._http_client_factory(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {self._api_token}",
                "x-request-id": str(uuid.uuid4()),
            },
            timeout=self._timeout_seconds,
        ) as client:
            try:
                return client.request(method, path, json=json_body)
            except httpx.HTTPError as exc:
                raise ClientRequestError(
                    f"contabo request failed: {exc}",
                    kind=ErrorKind.TRANSIENT,
                ) from exc

    def _raise_for_status(self, response: httpx.Response, *, default_message: str) -> None:
        if response.status_code < 400:
            return

        status_code = response.status_code
        if status_code in {401, 403}:
            raise ClientAuthError(
                f"contabo authentication failed with status={status_code}",
                status_code=status_code,
            )

        response_text = response.text.strip()
        detail = f"{default_message}; status={status_code}"
        if response_text:
            detail = f"{detail}; body={response_text[:240]}"

        if status_code == 409:
            raise ClientConflictError(detail, status_code=status_code)
        if status_code == 404:
            raise ClientNotFoundError(detail, status_code=status_code)
        kind = (
            ErrorKind.TRANSIENT
            if status_code == 429 or status_code >= 500
            else ErrorKind.FATAL
        )
        raise ClientRequestError(detail, status_code=status_code, kind=kind)


def _parse_json_object(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise ClientResponseError(
            f"contabo response was not valid JSON (status={response.status_code})",
            status_code=response.status_code,
        ) from exc

    if not isinstance(data, dict):
        raise ClientResponseError(
            f"contabo response payload must be an object (status={response.status_code})",
            status_code=response.status_code,
        )
    return data


def _parse_network_records(response: httpx.Response) -> list[PrivateNetworkRecord]:
    body = _parse_json_object(response)
    data = body.get("data")
    if not isinstance(data, list):
        raise ClientResponseError(
            f"contabo response is missing a data array (status={response.status_code})",
            status_code=response.status_code,
        )

    records: list[PrivateNetworkRecord] = []
    for item in data:
        if not isinstance(item, dict):
            raise ClientResponseError(
                "contabo private network entry must be an object",
                status_code=response.status_code,
            )
        records.append(_build_network_record(item, status_code=response.status_code))
    return records


def _build_network_record(payload: dict[str, Any], *, status_code: int) -> PrivateNetworkRecord:
    network_id = payload.get("privateNetworkId")
    if not isinstance(network_id, int) or isinstance(network_id, bool):
        raise ClientResponseError(
            "contabo private network entry is missing privateNetworkId",
            status_code=status_code,
        )

    instances = payload.get("instances") or []
    if not isinstance(instances, list) or not all(
        isinstance(instance, dict) for instance in instances
    ):
        raise ClientResponseError(
            f"contabo private network {network_id} instances must be a list of objects",
            status_code=status_code,
        )

    return PrivateNetworkRecord(
        private_network_id=network_id,
        name=_extract_str(payload, "name"),
        description=_extract_str(payload, "description"),
        region=_extract_str(payload, "region"),
        region_name=_extract_str(payload, "regionName"),
        data_center=_extract_str(payload, "dataCenter"),
        available_ips=_extract_int(payload, "availableIps"),
        cidr=_extract_str(payload, "cidr"),
        created_date=_extract_datetime(payload, "createdDate"),
        instances=tuple(
            _build_instance_record(instance, status_code=status_code)
            for instance in instances
        ),
    )


def _build_instance_record(payload: dict[str, Any], *, status_code: int) -> InstanceRecord:
    instance_id = payload.get("instanceId")
    if not isinstance(instance_id, int) or isinstance(instance_id, bool):
        raise ClientResponseError(
            "contabo instance entry is missing instanceId",
            status_code=status_code,
        )

    raw_status = _extract_str(payload, "status")
    status: InstanceStatus | str
    try:
        status = InstanceStatus(raw_status)
    except ValueError:
        # Statuses added by the API later are passed through unchanged.
        status = raw_status

    ip_config = payload.get("privateIpConfig")
    v4_entries: Any = ip_config.get("v4") if isinstance(ip_config, dict) else None
    private_ipv4 = tuple(
        PrivateIpV4Config(
            ip=_extract_str(entry, "ip"),
            netmask_cidr=_extract_int(entry, "netmaskCidr"),
            gateway=_extract_str(entry, "gateway"),
        )
        for entry in (v4_entries if isinstance(v4_entries, list) else [])
        if isinstance(entry, dict)
    )

    error_message = payload.get("errorMessage")
    return InstanceRecord(
        instance_id=instance_id,
        display_name=_extract_str(payload, "displayName"),
        name=_extract_str(payload, "name"),
        private_ipv4=private_ipv4,
        status=status,
        error_message=error_message if isinstance(error_message, str) else None,
    )


def _extract_str(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if isinstance(value, str):
        return value
    return ""


def _extract_int(payload: dict[str, Any], key: str) -> int:
    value = payload.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def _extract_datetime(payload: dict[str, Any], key: str) -> datetime | None:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
