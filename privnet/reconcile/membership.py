"""Instance membership diffing for private networks."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MembershipPlan:
    to_remove: tuple[int, ...]
    to_add: tuple[int, ...]

    @property
    def is_empty(self) -> bool:
        return not self.to_remove and not self.to_add


def plan_membership_changes(old: Iterable[int], new: Iterable[int]) -> MembershipPlan:
    """Return the unassign and assign sets that move ``old`` membership to ``new``.

    Both tuples are sorted so repeated plans are stable; the remote operations
    commute, so callers must not depend on the order.
    """
    old_ids = frozenset(old)
    new_ids = frozenset(new)
    return MembershipPlan(
        to_remove=tuple(sorted(old_ids - new_ids)),
        to_add=tuple(sorted(new_ids - old_ids)),
    )
