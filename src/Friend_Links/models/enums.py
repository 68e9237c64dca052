"""StrEnum types for link checking.

Values are lowercase strings; they appear verbatim in failure reasons
(``"URL: timeout"``) and in the failure report artifact.
"""

from enum import StrEnum


class StatusKind(StrEnum):
    """Terminal classification of a resource after all retries."""

    OK = "ok"
    TIMEOUT = "timeout"
    ERROR = "error"


class ProbeFailure(StrEnum):
    """Why a single probe attempt failed.

    Finer than StatusKind: both TRANSPORT and HTTP collapse into
    ``StatusKind.ERROR`` once retries are exhausted.
    """

    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    HTTP = "http"


class ResourceKind(StrEnum):
    """Which side of an entry a check refers to."""

    URL = "URL"
    AVATAR = "Avatar"
