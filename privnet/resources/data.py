"""Per-resource record of recorded state and desired configuration."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from privnet.resources.schema import PRIVATE_NETWORK_SCHEMA, FieldSpec


class ResourceData:
    """Recorded state, desired configuration, and values written during one operation.

    ``get`` and ``to_state`` prefer values written during the current operation, then the
    desired configuration, then the recorded state.
    """

    def __init__(
        self,
        *,
        resource_id: str = "",
        state: Mapping[str, Any] | None = None,
        config: Mapping[str, Any] | None = None,
        schema: Sequence[FieldSpec] = PRIVATE_NETWORK_SCHEMA,
    ) -> None:
        self._fields = {spec.name: spec for spec in schema}
        self._id = resource_id
        self._state = self._normalize_mapping(state or {}, source="state")
        self._config = self._normalize_mapping(config or {}, source="config")
        read_only = sorted(
            key for key in self._config if self._fields[key].read_only
        )
        if read_only:
            raise ValueError(f"read-only fields cannot be configured: {', '.join(read_only)}")
        self._written: dict[str, Any] = {}

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, resource_id: str) -> None:
        self._id = resource_id

    def get(self, key: str) -> Any:
        spec = self._field(key)
        for source in (self._written, self._config, self._state):
            if key in source:
                return source[key]
        return spec.empty_value()

    def get_change(self, key: str) -> tuple[Any, Any]:
        spec = self._field(key)
        return self._state.get(key, spec.empty_value()), self.get(key)

    def has_change(self, key: str) -> bool:
        spec = self._field(key)
        old, new = self.get_change(key)
        if spec.kind == "int_set":
            return frozenset(old) != frozenset(new)
        return old != new

    def set(self, key: str, value: Any) -> None:
        spec = self._field(key)
        self._written[key] = spec.normalize(value)

    def to_state(self) -> dict[str, Any]:
        state: dict[str, Any] = {"id": self._id}
        for key in self._fields:
            state[key] = self.get(key)
        return state

    def _field(self, key: str) -> FieldSpec:
        try:
            return self._fields[key]
        except KeyError:
            raise KeyError(f"unknown resource field: {key!r}") from None

    def _normalize_mapping(self, values: Mapping[str, Any], *, source: str) -> dict[str, Any]:
        normalized: dict[str, Any] = {}
        for key, value in values.items():
            if key == "id":
                continue
            if key not in self._fields:
                raise KeyError(f"unknown resource field in {source}: {key!r}")
            normalized[key] = self._fields[key].normalize(value)
        return normalized
