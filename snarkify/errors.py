"""
Snarkify client error taxonomy.

Transport-level faults (TransportError, RequestTimeoutError) are retried
by the retry policy before they surface. Everything else surfaces on the
first occurrence.
"""


class SnarkifyClientError(Exception):
    """Base class for every failure raised by the Snarkify client."""
    pass


class UrlError(SnarkifyClientError):
    """Base URL + path did not form a valid absolute http(s) URL."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to parse URL '{url}': {reason}")


class TransportError(SnarkifyClientError):
    """Network-level failure: DNS, connection refused/reset, protocol error."""
    pass


class RequestTimeoutError(TransportError, TimeoutError):
    """No response within the configured per-request timeout."""
    pass


class StatusError(SnarkifyClientError):
    """Remote answered with a status outside [200, 202]."""

    def __init__(self, path: str, status_code: int):
        self.path = path
        self.status_code = status_code
        super().__init__(f"[Snarkify Client], {path}, status not ok: {status_code}")


class DecodeError(SnarkifyClientError):
    """Response body did not match the expected JSON shape."""
    pass


class TaskInputDecodeError(DecodeError):
    """The JSON-encoded `input` field of a task could not be decoded."""
    pass
