"""
Discovery Errors

Error taxonomy surfaced by the discovery pipeline:

- TransportError: network/HTTP failure on either fetch, never retried
- CapabilityGateError: capability document failed validation (no second fetch)
- MalformedInputError: a URL could not be used before any fetch happened

Every error exposes ``kind`` (discriminator), ``message`` and ``body``
(raw document at the point of failure, or None when nothing was retrieved).
"""

from typing import Any, Literal

ErrorKind = Literal["transport", "capability_gate", "malformed_input"]
GateFailureReason = Literal["missing_issuer", "not_capable"]


class DiscoveryError(Exception):
    """Base exception for discovery failures."""

    kind: ErrorKind

    def __init__(self, message: str, body: Any = None):
        self.message = message
        self.body = body
        super().__init__(message)


class TransportError(DiscoveryError):
    """
    Raised when a metadata document could not be retrieved.

    status_code is None for network-level failures (DNS, TLS, timeouts)
    and for responses whose body could not be decoded.
    """

    kind: ErrorKind = "transport"

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
        body: Any = None,
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message, body)

    def __repr__(self) -> str:
        return f"TransportError(url={self.url}, status_code={self.status_code}, message={self.message!r})"


class CapabilityGateError(DiscoveryError):
    """Raised when the capability document does not pass the capability gate."""

    kind: ErrorKind = "capability_gate"

    def __init__(self, message: str, reason: GateFailureReason, body: Any = None):
        self.reason = reason
        super().__init__(message, body)

    @classmethod
    def missing_issuer(cls, capability_name: str, body: Any) -> "CapabilityGateError":
        return cls(
            f"{capability_name} server did not present an issuer url",
            reason="missing_issuer",
            body=body,
        )

    @classmethod
    def not_capable(
        cls, capability_name: str, required_capability: str, body: Any
    ) -> "CapabilityGateError":
        return cls(
            f"{capability_name} server doesn't claim to be {required_capability} capable",
            reason="not_capable",
            body=body,
        )

    def __repr__(self) -> str:
        return f"CapabilityGateError(reason={self.reason}, message={self.message!r})"


class MalformedInputError(DiscoveryError, ValueError):
    """Raised when a URL is not an absolute http(s) URL."""

    kind: ErrorKind = "malformed_input"

    def __init__(self, message: str, url: Any = None):
        self.url = url
        super().__init__(message)
