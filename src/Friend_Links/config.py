"""Checker configuration and file-path defaults.

``CheckerConfig`` is passed explicitly into the prober and checkers. Defaults
can be overridden per process through ``FRIEND_LINKS_*`` environment variables.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_TIMEOUT_MS: Final[int] = 15_000
DEFAULT_MAX_ATTEMPTS: Final[int] = 3
DEFAULT_BASE_DELAY_MS: Final[int] = 1_000
DEFAULT_JITTER_MS: Final[int] = 100
DEFAULT_USER_AGENT: Final[str] = "Mozilla/5.0 FriendLinkChecker/1.0"

DEFAULT_DATA_PATH: Final[str] = "data/friends.ts"
DEFAULT_REPORT_PATH: Final[str] = "disconnected.json"

ENV_PREFIX: Final[str] = "FRIEND_LINKS_"

_ENV_FIELDS: Final[dict[str, str]] = {
    "timeout_ms": "TIMEOUT_MS",
    "max_attempts": "MAX_ATTEMPTS",
    "base_delay_ms": "BASE_DELAY_MS",
    "jitter_ms": "JITTER_MS",
    "user_agent": "USER_AGENT",
}


class CheckerConfig(BaseModel):
    """Timeout, retry and backoff settings for one checking pass.

    Usage::

        config = CheckerConfig.from_env()
        async with Prober(config) as prober:
            checker = ResourceChecker(prober, config)
    """

    model_config = ConfigDict(frozen=True)

    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    base_delay_ms: int = Field(default=DEFAULT_BASE_DELAY_MS, ge=0)
    jitter_ms: int = Field(default=DEFAULT_JITTER_MS, ge=0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_env(cls, **overrides: object) -> CheckerConfig:
        """Build a config from ``FRIEND_LINKS_*`` env vars, then explicit overrides.

        Overrides whose value is None are ignored so CLI options can be passed
        through unconditionally.

        Raises:
            pydantic.ValidationError: If a value is not a valid integer or is
                out of range.
        """
        values: dict[str, object] = {}
        for field_name, suffix in _ENV_FIELDS.items():
            raw = os.environ.get(f"{ENV_PREFIX}{suffix}")
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        values.update({k: v for k, v in overrides.items() if v is not None})
        config = cls.model_validate(values)
        logger.debug(
            "CheckerConfig: timeout=%dms attempts=%d base_delay=%dms jitter=%dms",
            config.timeout_ms,
            config.max_attempts,
            config.base_delay_ms,
            config.jitter_ms,
        )
        return config


def resolve_data_path(path: str | Path | None = None) -> Path:
    """Return the entry file path: *path* > ``FRIEND_LINKS_DATA_PATH`` > default."""
    return Path(path or os.environ.get(f"{ENV_PREFIX}DATA_PATH", DEFAULT_DATA_PATH))


def resolve_report_path(path: str | Path | None = None) -> Path:
    """Return the failure report path: *path* > ``FRIEND_LINKS_REPORT_PATH`` > default."""
    return Path(path or os.environ.get(f"{ENV_PREFIX}REPORT_PATH", DEFAULT_REPORT_PATH))
