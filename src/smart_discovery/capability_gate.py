"""
Capability Gate

Validates a capability document (e.g. /.well-known/smart-configuration)
before any further network I/O is allowed.

Gate 1: the document presents an issuer url
Gate 2: "capabilities" is an array containing the required capability

The outcome is returned as a value (GatePassed or GateRejected) rather than
raised, so the discoverer can decide to stop before the second fetch.
"""

import logging
from dataclasses import dataclass
from typing import Any

from smart_discovery.errors import CapabilityGateError
from smart_discovery.url_resolver import strip_trailing_slash

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatePassed:
    """Both gates passed. issuer has its trailing slash removed."""

    issuer: str
    capabilities: list[Any]


@dataclass(frozen=True)
class GateRejected:
    """A gate failed; error carries the raw document."""

    error: CapabilityGateError


GateResult = GatePassed | GateRejected


def evaluate_capability_gate(
    document: Any,
    capability_name: str,
    required_capability: str,
) -> GateResult:
    """
    Run both capability gates against a capability document.

    An absent, empty or non-string issuer fails gate 1. A missing
    "capabilities" member, a value that is not an array, and an array
    without required_capability all fail gate 2 the same way.

    Args:
        document: Decoded capability document (normally a dict)
        capability_name: Server kind used in error messages (e.g. "Fhir")
        required_capability: Sentinel capability (e.g. "sso-openid-connect")

    Returns:
        GateResult: GatePassed with the normalized issuer, or GateRejected
    """
    fields = document if isinstance(document, dict) else {}

    issuer = fields.get("issuer")
    if not issuer or not isinstance(issuer, str):
        logger.warning(f"{capability_name} capability document has no issuer")
        return GateRejected(CapabilityGateError.missing_issuer(capability_name, document))

    capabilities = fields.get("capabilities")
    if not isinstance(capabilities, list) or required_capability not in capabilities:
        logger.warning(
            f"{capability_name} server {issuer} does not advertise {required_capability}: "
            f"capabilities={capabilities!r}"
        )
        return GateRejected(
            CapabilityGateError.not_capable(capability_name, required_capability, document)
        )

    return GatePassed(issuer=strip_trailing_slash(issuer), capabilities=list(capabilities))
