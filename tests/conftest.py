"""Shared test fixtures for the friend-links test suite.

Provides sample entries, probe outcomes and a scripted prober so tests don't
need to inline construction blocks or touch the network.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from types import SimpleNamespace

import pytest

from Friend_Links.config import CheckerConfig
from Friend_Links.models import (
    CheckResult,
    FriendLink,
    ProbeFailure,
    ProbeOutcome,
    ResourceStatus,
    StatusKind,
)

# ---------------------------------------------------------------------------
# Outcome builders
# ---------------------------------------------------------------------------


def ok_outcome(status: int = 200, latency_ms: int = 120) -> ProbeOutcome:
    return ProbeOutcome(reachable=True, http_status=status, latency_ms=latency_ms)


def timeout_outcome(timeout_ms: int = 15000) -> ProbeOutcome:
    return ProbeOutcome(
        reachable=False,
        latency_ms=timeout_ms,
        error_message=f"timeout after {timeout_ms}ms",
        failure=ProbeFailure.TIMEOUT,
    )


def http_outcome(status: int = 404, latency_ms: int = 80) -> ProbeOutcome:
    return ProbeOutcome(
        reachable=False,
        http_status=status,
        latency_ms=latency_ms,
        error_message=f"HTTP {status}",
        failure=ProbeFailure.HTTP,
    )


def transport_outcome(message: str = "connection refused") -> ProbeOutcome:
    return ProbeOutcome(
        reachable=False,
        latency_ms=5,
        error_message=message,
        failure=ProbeFailure.TRANSPORT,
    )


class ScriptedProber:
    """Prober stand-in returning scripted outcomes per URL.

    Each URL's script is consumed in order; the last outcome repeats once the
    script runs out. Every probed URL is recorded in ``calls``.
    """

    def __init__(self, scripts: dict[str, Sequence[ProbeOutcome]]) -> None:
        self._scripts = {url: list(outcomes) for url, outcomes in scripts.items()}
        self.calls: list[str] = []

    async def probe(self, target: str) -> ProbeOutcome:
        self.calls.append(target)
        script = self._scripts[target]
        if len(script) > 1:
            return script.pop(0)
        return script[0]


class SleepRecorder:
    """Async sleep replacement that records requested delays (seconds)."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


_DEFAULT_ERRORS: dict[StatusKind, str] = {
    StatusKind.TIMEOUT: "timeout after 15000ms",
    StatusKind.ERROR: "HTTP 500",
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def checker_config() -> CheckerConfig:
    """Default timeouts and backoff (sleep is always faked in tests)."""
    return CheckerConfig()


@pytest.fixture()
def outcomes() -> SimpleNamespace:
    """Builders for each kind of ProbeOutcome."""
    return SimpleNamespace(
        ok=ok_outcome,
        timeout=timeout_outcome,
        http=http_outcome,
        transport=transport_outcome,
    )


@pytest.fixture()
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture()
def scripted_prober() -> Callable[[dict[str, Sequence[ProbeOutcome]]], ScriptedProber]:
    """Factory for a ScriptedProber."""
    return ScriptedProber


@pytest.fixture()
def good_entry() -> FriendLink:
    """A reachable entry with both optional metadata fields."""
    return FriendLink(
        name="X",
        description="A good site",
        url="https://good.example",
        avatar="https://good.example/a.png",
        add_date="2025-09-03",
        recommended=True,
    )


@pytest.fixture()
def dead_entry() -> FriendLink:
    """An entry whose URL never answers."""
    return FriendLink(
        name="Y",
        description="A dead site",
        url="https://dead.example",
        avatar="https://dead.example/a.png",
    )


@pytest.fixture()
def disconnected_entry() -> FriendLink:
    """An entry flagged by a previous run."""
    return FriendLink(
        name="Z",
        description="Previously unreachable",
        url="https://flaky.example",
        avatar="https://flaky.example/a.png",
        disconnected=True,
    )


@pytest.fixture()
def ok_status() -> ResourceStatus:
    return ResourceStatus(kind=StatusKind.OK, http_status=200, latency_ms=120, attempts=1)


@pytest.fixture()
def make_result() -> Callable[..., CheckResult]:
    """Factory building a CheckResult for an entry from two status kinds."""

    def _make(
        entry: FriendLink,
        url: StatusKind = StatusKind.OK,
        avatar: StatusKind = StatusKind.OK,
        url_error: str | None = None,
    ) -> CheckResult:
        def _status(kind: StatusKind, error: str | None) -> ResourceStatus:
            if kind == StatusKind.OK:
                return ResourceStatus(kind=kind, http_status=200, latency_ms=50, attempts=1)
            return ResourceStatus(
                kind=kind,
                latency_ms=0,
                error_message=error or _DEFAULT_ERRORS[kind],
                attempts=3,
            )

        return CheckResult(
            name=entry.name,
            url=entry.url,
            avatar=entry.avatar,
            url_status=_status(url, url_error),
            avatar_status=_status(avatar, None),
        )

    return _make
