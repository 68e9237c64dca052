"""Tests for check models: ProbeOutcome, ResourceStatus, CheckResult, reports."""

from __future__ import annotations

import pydantic
import pytest

from Friend_Links.models import (
    CheckResult,
    FailureRecord,
    ProbeFailure,
    ProbeOutcome,
    ReconciliationReport,
    ResourceStatus,
    StatusKind,
)


class TestProbeOutcome:
    """Error fields are present iff the probe failed."""

    def test_reachable(self) -> None:
        outcome = ProbeOutcome(reachable=True, http_status=200, latency_ms=12)
        assert outcome.timed_out is False

    def test_reachable_with_error_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ProbeOutcome(reachable=True, error_message="boom", failure=ProbeFailure.HTTP)

    def test_unreachable_without_error_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ProbeOutcome(reachable=False)

    def test_negative_latency_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ProbeOutcome(reachable=True, latency_ms=-1)

    def test_timed_out(self) -> None:
        outcome = ProbeOutcome(
            reachable=False, error_message="timeout after 5ms", failure=ProbeFailure.TIMEOUT
        )
        assert outcome.timed_out is True


class TestResourceStatus:
    def test_skipped_is_ok_with_zero_latency(self) -> None:
        status = ResourceStatus.skipped()
        assert status.ok is True
        assert status.latency_ms == 0
        assert status.attempts == 0

    def test_describe_with_error(self) -> None:
        status = ResourceStatus(kind=StatusKind.ERROR, error_message="HTTP 404", attempts=3)
        assert status.describe() == "error (HTTP 404)"

    def test_describe_without_error(self) -> None:
        assert ResourceStatus(kind=StatusKind.TIMEOUT).describe() == "timeout"

    def test_ok_property(self, ok_status: ResourceStatus) -> None:
        assert ok_status.ok is True
        assert ResourceStatus(kind=StatusKind.ERROR).ok is False


class TestCheckResult:
    def test_failed_if_either_side_fails(self, make_result, good_entry) -> None:
        assert make_result(good_entry).failed is False
        assert make_result(good_entry, url=StatusKind.TIMEOUT).failed is True
        assert make_result(good_entry, avatar=StatusKind.ERROR).failed is True

    def test_skipped_for(self, disconnected_entry) -> None:
        result = CheckResult.skipped_for(disconnected_entry)
        assert result.skipped is True
        assert result.failed is False
        assert result.name == "Z"
        assert result.avatar == disconnected_entry.avatar


class TestReconciliationReport:
    def test_has_failures_is_serialised(self) -> None:
        report = ReconciliationReport(
            changed=True,
            newly_failing=[FailureRecord(name="Y", url="https://y", reason="Avatar: error")],
        )
        assert report.has_failures is True
        assert report.model_dump()["has_failures"] is True

    def test_frozen(self) -> None:
        report = ReconciliationReport(changed=False)
        with pytest.raises(pydantic.ValidationError):
            report.changed = True  # type: ignore[misc]
