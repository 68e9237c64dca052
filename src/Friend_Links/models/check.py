"""Check models: probe outcomes, resource statuses, per-entry results and reports.

Everything is frozen. Checkers and the reconciler build new values instead of
mutating shared state, so a run can be replayed from its inputs.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from Friend_Links.models.entry import FriendLink
from Friend_Links.models.enums import ProbeFailure, StatusKind


class ProbeOutcome(BaseModel):
    """Result of one HTTP reachability attempt.

    ``error_message`` and ``failure`` are present iff ``reachable`` is False.
    """

    model_config = ConfigDict(frozen=True)

    reachable: bool
    http_status: int | None = None
    latency_ms: int = Field(default=0, ge=0)
    error_message: str | None = None
    failure: ProbeFailure | None = None

    @model_validator(mode="after")
    def _check_failure_fields(self) -> "ProbeOutcome":
        if self.reachable and (self.error_message is not None or self.failure is not None):
            raise ValueError("reachable outcome cannot carry an error")
        if not self.reachable and (self.error_message is None or self.failure is None):
            raise ValueError("unreachable outcome needs error_message and failure")
        return self

    @property
    def timed_out(self) -> bool:
        return self.failure == ProbeFailure.TIMEOUT


class ResourceStatus(BaseModel):
    """Terminal classification of one resource (URL or avatar) after retries.

    ``latency_ms`` belongs to the attempt that produced an OK. It is 0 when every
    attempt failed or when the check was skipped.
    """

    model_config = ConfigDict(frozen=True)

    kind: StatusKind
    http_status: int | None = None
    latency_ms: int = Field(default=0, ge=0)
    error_message: str | None = None
    attempts: int = Field(default=0, ge=0)

    @classmethod
    def skipped(cls) -> "ResourceStatus":
        """Synthetic OK for an entry that is already flagged disconnected."""
        return cls(kind=StatusKind.OK, latency_ms=0, attempts=0)

    @property
    def ok(self) -> bool:
        return self.kind == StatusKind.OK

    def describe(self) -> str:
        """Status kind followed by the error text, e.g. ``timeout (timeout after 15000ms)``."""
        if self.error_message:
            return f"{self.kind} ({self.error_message})"
        return str(self.kind)


class CheckResult(BaseModel):
    """Outcome of checking one entry: its URL status and its avatar status."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    avatar: str
    url_status: ResourceStatus
    avatar_status: ResourceStatus
    skipped: bool = False

    @classmethod
    def skipped_for(cls, entry: FriendLink) -> "CheckResult":
        """OK/OK result for an already-disconnected entry; nothing is probed."""
        return cls(
            name=entry.name,
            url=entry.url,
            avatar=entry.avatar,
            url_status=ResourceStatus.skipped(),
            avatar_status=ResourceStatus.skipped(),
            skipped=True,
        )

    @property
    def failed(self) -> bool:
        """True iff either resource did not end OK."""
        return not (self.url_status.ok and self.avatar_status.ok)


class FailureRecord(BaseModel):
    """One element of the failure report artifact."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    reason: str


class ReconciliationReport(BaseModel):
    """Flag changes and failures computed from a set of check results.

    ``updated_entries`` has the same order and length as the input entries.
    """

    model_config = ConfigDict(frozen=True)

    changed: bool
    newly_failing: list[FailureRecord] = Field(default_factory=list)
    updated_entries: list[FriendLink] = Field(default_factory=list)
    flagged: list[str] = Field(default_factory=list)
    recovered: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_failures(self) -> bool:
        return bool(self.newly_failing)


class RunResult(BaseModel):
    """Top-level result of one checking pass; the CLI maps ``ok`` to an exit code."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    report: ReconciliationReport
    results: list[CheckResult] = Field(default_factory=list)
