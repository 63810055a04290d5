"""Exception hierarchy raised by the WEX client.

Every failure is surfaced to the caller; the client never retries. Messages
carry a fixed prefix so callers (and logs) can tell the failing stage apart.
"""

from __future__ import annotations


class WexError(Exception):
    """Base class for all client errors."""


class RequestBuildError(WexError):
    """The outgoing request could not be constructed."""

    def __init__(self, reason: object) -> None:
        super().__init__(f"request build: {reason}")


class TransportError(WexError):
    """Connection, TLS, timeout or body read failure."""

    def __init__(self, reason: object) -> None:
        super().__init__(f"do request: {reason}")


class StatusCodeError(WexError):
    """Server answered with a non-200 status. The body is discarded."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"server respond with status code {status_code}")
        self.status_code = status_code


class ServerError(WexError):
    """Envelope reported ``success`` falsy together with an error message."""

    def __init__(self, message: str) -> None:
        super().__init__(f"server respond with error: {message}")
        self.message = message


class DecodeError(WexError):
    phase = ""


class EnvelopeDecodeError(DecodeError):
    phase = "envelope"

    def __init__(self, reason: object) -> None:
        super().__init__(f"unmarshal to base response: {reason}")


class ResultDecodeError(DecodeError):
    phase = "result"

    def __init__(self, reason: object) -> None:
        super().__init__(f"unmarshal to result: {reason}")


class NonceExhaustedError(WexError):
    """Nonce reached the exchange limit for this key; a new key is required."""

    def __init__(self, limit: int | None = None) -> None:
        super().__init__("max value reached: create new key")
        self.limit = limit


class WireFormatError(ValueError):
    """A wire token did not match the accepted encoding for its field."""
