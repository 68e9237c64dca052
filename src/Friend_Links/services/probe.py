"""Single-attempt HTTP reachability probe.

Sends one ``HEAD`` request per call through a shared ``httpx.AsyncClient`` with
a hard deadline. Every failure mode is folded into a ``ProbeOutcome``; nothing
raises out of ``Prober.probe``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from types import TracebackType
from typing import Final

import httpx

from Friend_Links.config import CheckerConfig
from Friend_Links.models.check import ProbeOutcome
from Friend_Links.models.enums import ProbeFailure
from Friend_Links.utils.exceptions import (
    HttpFailureError,
    ProbeError,
    ProbeTimeoutError,
    TransportError,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

NO_CACHE_HEADERS: Final[dict[str, str]] = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

_FAILURE_BY_ERROR: Final[dict[type[ProbeError], ProbeFailure]] = {
    ProbeTimeoutError: ProbeFailure.TIMEOUT,
    TransportError: ProbeFailure.TRANSPORT,
    HttpFailureError: ProbeFailure.HTTP,
}


def _elapsed_ms(started: float) -> int:
    return max(0, round((time.monotonic() - started) * 1000))


class Prober:
    """Issue bounded-timeout ``HEAD`` requests and classify the result.

    Redirects are followed; a final 2xx response counts as reachable. The
    deadline is enforced twice: as the httpx timeout and by ``asyncio.wait_for``
    around the whole request, so slow redirect chains cannot exceed it.

    Usage::

        async with Prober(CheckerConfig()) as prober:
            outcome = await prober.probe("https://example.com")
            if not outcome.reachable:
                logger.warning("unreachable: %s", outcome.error_message)
    """

    def __init__(
        self,
        config: CheckerConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config if config is not None else CheckerConfig()
        self._client = httpx.AsyncClient(
            follow_redirects=True,
            timeout=httpx.Timeout(self._config.timeout_seconds),
            headers={"User-Agent": self._config.user_agent, **NO_CACHE_HEADERS},
            transport=transport,
        )

        logger.debug(
            "Prober initialized: timeout=%dms user_agent=%s",
            self._config.timeout_ms,
            self._config.user_agent,
        )

    @property
    def config(self) -> CheckerConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the shared httpx client."""
        await self._client.aclose()

    async def __aenter__(self) -> Prober:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def probe(self, target: str) -> ProbeOutcome:
        """Probe *target* once.

        Returns:
            ProbeOutcome with ``reachable=True`` and the final status on a 2xx,
            otherwise ``reachable=False`` with ``failure`` and ``error_message``
            set. Latency covers request start to headers (or to the failure).
        """
        started = time.monotonic()
        try:
            response = await self._head(target)
        except ProbeError as exc:
            latency_ms = _elapsed_ms(started)
            failure = _FAILURE_BY_ERROR.get(type(exc), ProbeFailure.TRANSPORT)
            logger.debug("Probe %s failed after %dms: %s (%s)", target, latency_ms, exc, failure)
            return ProbeOutcome(
                reachable=False,
                http_status=exc.http_status,
                latency_ms=latency_ms,
                error_message=str(exc),
                failure=failure,
            )

        latency_ms = _elapsed_ms(started)
        logger.debug("Probe %s -> HTTP %d in %dms", target, response.status_code, latency_ms)
        return ProbeOutcome(
            reachable=True,
            http_status=response.status_code,
            latency_ms=latency_ms,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _head(self, target: str) -> httpx.Response:
        """Send the request, raising the matching ProbeError subclass on failure."""
        try:
            response = await asyncio.wait_for(
                self._client.head(target),
                timeout=self._config.timeout_seconds,
            )
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise ProbeTimeoutError(
                f"timeout after {self._config.timeout_ms}ms",
                url=target,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            raise TransportError(str(exc) or type(exc).__name__, url=target) from exc

        if not response.is_success:
            raise HttpFailureError(
                f"HTTP {response.status_code}",
                url=target,
                http_status=response.status_code,
            )
        return response
