"""Projection of remote private network records onto resource fields."""

from __future__ import annotations

from typing import Any

from privnet.clients.base import InstanceRecord, PrivateNetworkRecord


def network_to_state(record: PrivateNetworkRecord) -> dict[str, Any]:
    created_date = record.created_date.isoformat() if record.created_date else ""
    return {
        "name": record.name,
        "description": record.description,
        "region": record.region,
        "region_name": record.region_name,
        "data_center": record.data_center,
        "available_ips": record.available_ips,
        "cidr": record.cidr,
        "created_date": created_date,
        "instance_ids": [instance.instance_id for instance in record.instances],
        "instances": [instance_to_state(instance) for instance in record.instances],
    }


def instance_to_state(instance: InstanceRecord) -> dict[str, Any]:
    v4 = [
        {
            "ip": config.ip,
            "netmask_cidr": config.netmask_cidr,
            "gateway": config.gateway,
        }
        for config in instance.private_ipv4
    ]
    return {
        "instance_id": instance.instance_id,
        "display_name": instance.display_name,
        "name": instance.name,
        "status": str(instance.status),
        "error_message": instance.error_message or "",
        # Schema shape is a list of blocks; the API only ever returns one.
        "private_ip_config": [{"v4": v4}],
    }
