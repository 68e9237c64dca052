"""Reconciliation of check results into persisted entry flags.

Re-exports the public functions so consumers can import directly:
    from Friend_Links.analysis import reconcile, decide_persistence
"""

from Friend_Links.analysis.reconciliation import (
    PersistencePlan,
    decide_persistence,
    ensure_unique_names,
    failure_reason,
    reconcile,
)

__all__ = [
    "PersistencePlan",
    "decide_persistence",
    "ensure_unique_names",
    "failure_reason",
    "reconcile",
]
