"""
SMART Capability Discovery

Capability-gated issuer discovery for FHIR servers: the capability document
(/.well-known/smart-configuration) must advertise an issuer and the
sso-openid-connect capability before OpenID Connect discovery is performed.

Components:
- url_resolver: well-known URL resolution and trailing-slash normalization
- capability_gate: issuer and capability validation of the capability document
- transport: injectable JSON fetcher (httpx by default)
- discovery: CapabilityDiscoverer and OpenIDDiscoverer
- models: metadata documents and the merged issuer record
- errors: TransportError, CapabilityGateError, MalformedInputError
"""

__all__ = [
    "CapabilityDiscoverer",
    "OpenIDDiscoverer",
    "discover",
    "NormalizedIssuerMetadata",
    "StandardMetadataDocument",
    "DiscoverySettings",
    "DiscoveryError",
    "TransportError",
    "CapabilityGateError",
    "MalformedInputError",
    "HttpxJsonFetcher",
    "JsonFetcher",
]


# Lazy imports so importing the package does not pull in httpx
def __getattr__(name: str):
    if name in ("CapabilityDiscoverer", "OpenIDDiscoverer", "discover"):
        from smart_discovery import discovery
        return getattr(discovery, name)
    elif name in ("NormalizedIssuerMetadata", "StandardMetadataDocument"):
        from smart_discovery import models
        return getattr(models, name)
    elif name == "DiscoverySettings":
        from smart_discovery.configs import DiscoverySettings
        return DiscoverySettings
    elif name in ("DiscoveryError", "TransportError", "CapabilityGateError", "MalformedInputError"):
        from smart_discovery import errors
        return getattr(errors, name)
    elif name in ("HttpxJsonFetcher", "JsonFetcher"):
        from smart_discovery import transport
        return getattr(transport, name)

    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
