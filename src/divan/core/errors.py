"""
Error taxonomy for divan.

Every failure surfaced by the library is a DivanError. Network failures are
split into ConnectionError (nothing answered) and ProtocolError (something
answered, but not with a success status).
"""

import builtins

LOWERCASE_HINT = "database and document names must be lower-case"


class DivanError(Exception):
    pass


class ValidationError(DivanError, ValueError):
    """Input rejected before any network I/O."""


class ConnectionError(DivanError, builtins.ConnectionError):
    """The target host/port could not be reached, or stopped responding."""

    def __init__(self, method: str, url: str, host: str, port: int, detail: str = "", connected: bool = False):
        self.method = method
        self.url = url
        self.host = host
        self.port = port
        self.detail = detail
        # True when the failure came after the connection was established
        self.connected = connected
        super().__init__(str(self))

    def __str__(self) -> str:
        prefix = "no response from" if self.connected else "could not connect to"
        msg = f"{prefix} {self.host}:{self.port} ({self.method} {self.url})"
        if self.detail:
            msg += f": {self.detail}"
        return msg


class ProtocolError(DivanError):
    """The server responded, but not with a usable success response."""

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int | None,
        reason: str = "",
        body: str = "",
    ):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(str(self))

    def __str__(self) -> str:
        status = "malformed response" if self.status_code is None else f"{self.status_code} {self.reason}".rstrip()
        msg = f"{status}: {self.method} {self.url}"
        if self.body:
            msg += f": {self.body.strip()}"
        return f"{msg} (hint: {LOWERCASE_HINT})"
