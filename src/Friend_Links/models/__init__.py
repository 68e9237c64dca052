"""Pydantic v2 models and enums.

Re-exports all public models so consumers can import directly:
    from Friend_Links.models import FriendLink, CheckResult, StatusKind
"""

from Friend_Links.models.check import (
    CheckResult,
    FailureRecord,
    ProbeOutcome,
    ReconciliationReport,
    ResourceStatus,
    RunResult,
)
from Friend_Links.models.entry import FriendLink
from Friend_Links.models.enums import ProbeFailure, ResourceKind, StatusKind

__all__ = [
    # Enums
    "ProbeFailure",
    "ResourceKind",
    "StatusKind",
    # Entries
    "FriendLink",
    # Checks
    "CheckResult",
    "FailureRecord",
    "ProbeOutcome",
    "ResourceStatus",
    # Reports
    "ReconciliationReport",
    "RunResult",
]
