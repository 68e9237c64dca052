"""Custom exception hierarchy for the friend-links checker.

Two families live here:

* ``ProbeError`` and its subclasses describe why a single HTTP reachability
  attempt failed. They are raised inside the prober and always converted into a
  ``ProbeOutcome`` before leaving it, so a dead link never aborts a run.
* ``EntrySourceError`` covers the entry file itself (unreadable, malformed,
  ambiguous). These are fatal for the run.
"""


class ProbeError(Exception):
    """Base exception for a failed reachability attempt.

    Attributes:
        url: The URL that was probed.
        http_status: The final HTTP status code, if a response was received.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str,
        http_status: int | None = None,
    ) -> None:
        self.url = url
        self.http_status = http_status
        super().__init__(message)


class ProbeTimeoutError(ProbeError):
    """Raised when the probe deadline elapsed before response headers arrived."""


class TransportError(ProbeError):
    """Raised on DNS, connection, TLS or protocol failures."""


class HttpFailureError(ProbeError):
    """Raised when a response arrived but its final status is not a success."""


class EntrySourceError(Exception):
    """Raised when the entry source cannot be read, parsed or written.

    Attributes:
        path: The file involved, if known.
        line: 1-based line number of the offending token, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        line: int | None = None,
    ) -> None:
        self.path = path
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        location = ""
        if self.path is not None:
            location = self.path
        if self.line is not None:
            location = f"{location}:{self.line}" if location else f"line {self.line}"
        return f"{location}: {message}" if location else message


class DuplicateEntryError(EntrySourceError):
    """Raised when two entries (or two check results) share the same name.

    Results are matched to entries by name, so duplicates would make the
    reconciliation ambiguous.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str,
        path: str | None = None,
        line: int | None = None,
    ) -> None:
        self.name = name
        super().__init__(message, path=path, line=line)
