"""
Discovery Models

- JsonResponse: what an injected JSON fetcher hands back
- StandardMetadataDocument: OpenID Connect discovery document (RFC 8414 / OIDC Discovery 1.0)
- NormalizedIssuerMetadata: merged record returned to callers

The capability document itself stays a raw dict: it only lives for the
duration of one discovery call and is reported verbatim in gate errors.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Namespaced key for capability-sourced data, distinct from OIDC field names
CAPABILITIES_EXTENSION_KEY = "fhirCapabilities"


class JsonResponse(BaseModel):
    """Status code and decoded JSON body of one fetch."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class StandardMetadataDocument(BaseModel):
    """
    OpenID Connect Provider Metadata

    Discovered from {issuer}/.well-known/openid-configuration.
    Only issuer takes part in discovery and is typed strictly; the other
    declared members are for attribute access and pass through as sent.
    Unknown members are kept as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    issuer: str | None = None
    authorization_endpoint: Any = None
    token_endpoint: Any = None
    jwks_uri: Any = None
    userinfo_endpoint: Any = None
    registration_endpoint: Any = None
    end_session_endpoint: Any = None
    introspection_endpoint: Any = None
    revocation_endpoint: Any = None
    scopes_supported: Any = None
    response_types_supported: Any = None
    grant_types_supported: Any = None
    code_challenge_methods_supported: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the members the document actually carried, nulls included."""
        data = self.model_dump(by_alias=True, exclude_unset=True)
        data.update(self.model_extra or {})
        return data


class NormalizedIssuerMetadata(StandardMetadataDocument):
    """
    Issuer metadata assembled from a gated SMART discovery.

    Standard fields come from the OpenID Connect discovery document; the
    capability list advertised by the capability document is carried under
    CAPABILITIES_EXTENSION_KEY. issuer and iss are always the validated issuer
    with no trailing slash.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    issuer: str
    iss: str | None = None
    fhir_capabilities: list[Any] = Field(alias=CAPABILITIES_EXTENSION_KEY)
