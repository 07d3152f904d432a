"""Field declarations for the private network resource."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

FieldKind = Literal["string", "int", "int_set", "list"]


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    kind: FieldKind
    description: str
    optional: bool = False
    computed: bool = False

    @property
    def read_only(self) -> bool:
        return self.computed and not self.optional

    def empty_value(self) -> Any:
        if self.kind == "string":
            return ""
        if self.kind == "int":
            return 0
        if self.kind == "int_set":
            return ()
        return []

    def normalize(self, value: Any) -> Any:
        if value is None:
            return self.empty_value()
        if self.kind == "string":
            return str(value)
        if self.kind == "int":
            return int(value)
        if self.kind == "int_set":
            # Keeps first-seen order so state written from a response stays deterministic.
            seen: dict[int, None] = {}
            for item in value:
                if isinstance(item, bool):
                    raise ValueError(f"{self.name} must contain integers, not booleans")
                seen.setdefault(int(item), None)
            return tuple(seen)
        return list(value)


PRIVATE_NETWORK_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec(
        "name",
        "string",
        "The name of the private network; letters, numbers, colons, dashes and "
        "underscores, at most 255 characters.",
        optional=True,
    ),
    FieldSpec(
        "description",
        "string",
        "The description of the private network, at most 255 characters.",
        optional=True,
    ),
    FieldSpec(
        "instance_ids",
        "int_set",
        "Instance ids that should be members of the private network.",
        optional=True,
    ),
    FieldSpec(
        "region",
        "string",
        "Region of the private network; only honoured at creation.",
        optional=True,
    ),
    FieldSpec(
        "region_name",
        "string",
        "Display name of the region.",
        optional=True,
        computed=True,
    ),
    FieldSpec(
        "data_center",
        "string",
        "Data center that hosts the private network.",
        computed=True,
    ),
    FieldSpec(
        "available_ips",
        "int",
        "Number of IP addresses still available in the private network.",
        computed=True,
    ),
    FieldSpec("cidr", "string", "CIDR range of the private network.", computed=True),
    FieldSpec(
        "created_date",
        "string",
        "Creation time of the private network.",
        optional=True,
        computed=True,
    ),
    FieldSpec(
        "updated_at",
        "string",
        "Time of the last update applied through this resource.",
        optional=True,
        computed=True,
    ),
    FieldSpec(
        "instances",
        "list",
        "Member instances with status and private IPv4 configuration.",
        computed=True,
    ),
)
