"""Membership reconciliation primitives."""

from privnet.reconcile.membership import MembershipPlan, plan_membership_changes
from privnet.reconcile.retry import call_with_retry

__all__ = [
    "MembershipPlan",
    "call_with_retry",
    "plan_membership_changes",
]
