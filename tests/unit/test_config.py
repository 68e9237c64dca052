"""Tests for CheckerConfig and path resolution."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from Friend_Links.config import (
    DEFAULT_DATA_PATH,
    DEFAULT_REPORT_PATH,
    CheckerConfig,
    resolve_data_path,
    resolve_report_path,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for suffix in (
        "TIMEOUT_MS",
        "MAX_ATTEMPTS",
        "BASE_DELAY_MS",
        "JITTER_MS",
        "USER_AGENT",
        "DATA_PATH",
        "REPORT_PATH",
    ):
        monkeypatch.delenv(f"FRIEND_LINKS_{suffix}", raising=False)


class TestCheckerConfig:
    def test_defaults(self) -> None:
        config = CheckerConfig()
        assert config.timeout_ms == 15000
        assert config.timeout_seconds == 15.0
        assert config.max_attempts == 3
        assert config.base_delay_ms == 1000
        assert config.jitter_ms == 100
        assert config.user_agent == "Mozilla/5.0 FriendLinkChecker/1.0"

    @pytest.mark.parametrize(
        "overrides",
        [{"timeout_ms": 0}, {"max_attempts": 0}, {"base_delay_ms": -1}, {"user_agent": ""}],
    )
    def test_rejects_out_of_range(self, overrides: dict[str, object]) -> None:
        with pytest.raises(pydantic.ValidationError):
            CheckerConfig.model_validate(overrides)

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRIEND_LINKS_TIMEOUT_MS", " 2500 ")
        monkeypatch.setenv("FRIEND_LINKS_MAX_ATTEMPTS", "5")
        config = CheckerConfig.from_env()
        assert config.timeout_ms == 2500
        assert config.max_attempts == 5

    def test_overrides_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRIEND_LINKS_MAX_ATTEMPTS", "5")
        assert CheckerConfig.from_env(max_attempts=2).max_attempts == 2

    def test_none_override_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRIEND_LINKS_MAX_ATTEMPTS", "5")
        assert CheckerConfig.from_env(max_attempts=None).max_attempts == 5

    def test_blank_env_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRIEND_LINKS_JITTER_MS", "  ")
        assert CheckerConfig.from_env().jitter_ms == 100

    def test_invalid_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRIEND_LINKS_TIMEOUT_MS", "soon")
        with pytest.raises(pydantic.ValidationError):
            CheckerConfig.from_env()


class TestResolvePaths:
    def test_defaults(self) -> None:
        assert resolve_data_path() == Path(DEFAULT_DATA_PATH)
        assert resolve_report_path() == Path(DEFAULT_REPORT_PATH)

    def test_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRIEND_LINKS_DATA_PATH", "links.jsonl")
        monkeypatch.setenv("FRIEND_LINKS_REPORT_PATH", "out/report.json")
        assert resolve_data_path() == Path("links.jsonl")
        assert resolve_report_path() == Path("out/report.json")

    def test_explicit_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRIEND_LINKS_DATA_PATH", "links.jsonl")
        assert resolve_data_path("other.ts") == Path("other.ts")
