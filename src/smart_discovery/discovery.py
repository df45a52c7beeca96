"""
SMART Capability Discovery

Two-phase issuer discovery for FHIR servers:

1. Fetch the capability document ({seed}/.well-known/smart-configuration)
2. Gate on it: an issuer must be present and "capabilities" must contain
   the required capability (sso-openid-connect by default)
3. Only then fetch {issuer}/.well-known/openid-configuration
4. Merge the standard metadata with the capability list

Gate failures stop the pipeline before the second request is sent. Nothing is
cached or retried; every call is independent.

References:
- SMART App Launch: Conformance
- OpenID Connect Discovery 1.0
- RFC 8414: OAuth 2.0 Authorization Server Metadata
"""

import logging
from http import HTTPStatus
from typing import Any

from pydantic import ValidationError

from smart_discovery.capability_gate import GatePassed, GateRejected, evaluate_capability_gate
from smart_discovery.configs import DiscoverySettings, get_settings
from smart_discovery.errors import TransportError
from smart_discovery.models import (
    CAPABILITIES_EXTENSION_KEY,
    JsonResponse,
    NormalizedIssuerMetadata,
    StandardMetadataDocument,
)
from smart_discovery.transport import HttpxJsonFetcher, JsonFetcher
from smart_discovery.url_resolver import (
    issuers_match,
    openid_configuration_url,
    resolve_document_url,
)

logger = logging.getLogger(__name__)


def _status_error_message(response: JsonResponse) -> str:
    """Describe a non-2xx response, preferring an OAuth error body when present."""
    body = response.body
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        description = body.get("error_description")
        return f"{body['error']} ({description})" if description else body["error"]

    try:
        reason = HTTPStatus(response.status_code).phrase
    except ValueError:
        reason = "Unknown Status"
    return f"expected 200 OK, got: {response.status_code} {reason}"


async def fetch_document(fetcher: JsonFetcher, url: str) -> Any:
    """
    Fetch a JSON document and require a 2xx status.

    Args:
        fetcher: Transport used for the request
        url: Document URL

    Returns:
        Any: Decoded JSON body

    Raises:
        TransportError: On network failure or a non-2xx status
    """
    response = await fetcher.fetch_json(url)
    if not response.ok:
        message = _status_error_message(response)
        logger.warning(f"Discovery request to {url} failed: {message}")
        raise TransportError(
            message, url=url, status_code=response.status_code, body=response.body
        )
    return response.body


def merge_metadata(
    standard: StandardMetadataDocument, gate: GatePassed
) -> NormalizedIssuerMetadata:
    """
    Merge standard discovery metadata with capability-sourced data.

    Every member the standard document carried is kept as sent, nulls
    included. On top of that, issuer and iss are set to the validated
    capability issuer (no trailing slash) and the capability list goes under
    CAPABILITIES_EXTENSION_KEY.
    """
    fields = standard.to_dict()

    discovered_issuer = fields.get("issuer")
    if discovered_issuer and not issuers_match(discovered_issuer, gate.issuer):
        logger.warning(
            f"Discovered issuer {discovered_issuer} differs from capability issuer "
            f"{gate.issuer}; using the capability issuer"
        )

    fields["issuer"] = gate.issuer
    fields["iss"] = gate.issuer
    fields[CAPABILITIES_EXTENSION_KEY] = list(gate.capabilities)
    return NormalizedIssuerMetadata.model_validate(fields)


class OpenIDDiscoverer:
    """Plain OpenID Connect discovery (/.well-known/openid-configuration)."""

    def __init__(
        self,
        fetcher: JsonFetcher | None = None,
        settings: DiscoverySettings | None = None,
    ):
        self.settings = settings or get_settings()
        self.fetcher = fetcher or HttpxJsonFetcher(settings=self.settings)

    async def discover(self, issuer_or_url: str) -> StandardMetadataDocument:
        """
        Discover provider metadata for an issuer.

        Args:
            issuer_or_url: Issuer identifier, or a full well-known document URL

        Returns:
            StandardMetadataDocument: Parsed provider metadata

        Raises:
            MalformedInputError: If issuer_or_url is not a valid http(s) URL
            TransportError: If the document cannot be retrieved or is not a JSON object
        """
        url = resolve_document_url(issuer_or_url, self.settings.openid_document)
        return await self.fetch_metadata(url)

    async def fetch_metadata(self, url: str) -> StandardMetadataDocument:
        """Fetch and parse the discovery document at an exact URL."""
        body = await fetch_document(self.fetcher, url)

        if not isinstance(body, dict):
            logger.error(f"Discovery document at {url} is not a JSON object")
            raise TransportError(
                f"{self.settings.openid_document} response was not a JSON object",
                url=url,
                body=body,
            )

        try:
            return StandardMetadataDocument.model_validate(body)
        except ValidationError as e:
            logger.error(f"Discovery document at {url} is invalid: {e}")
            raise TransportError(
                f"{self.settings.openid_document} response is invalid: {e.error_count()} error(s)",
                url=url,
                body=body,
            ) from e


class CapabilityDiscoverer:
    """
    Capability-gated issuer discovery.

    Example:
        discoverer = CapabilityDiscoverer()
        metadata = await discoverer.discover("https://fhir.example.com")
        metadata.token_endpoint
        metadata.fhir_capabilities
    """

    def __init__(
        self,
        fetcher: JsonFetcher | None = None,
        settings: DiscoverySettings | None = None,
    ):
        self.settings = settings or get_settings()
        self.fetcher = fetcher or HttpxJsonFetcher(settings=self.settings)
        self.openid = OpenIDDiscoverer(fetcher=self.fetcher, settings=self.settings)

    def capability_url(self, seed_url: str) -> str:
        """URL of the capability document for a seed URL."""
        return resolve_document_url(seed_url, self.settings.capability_document)

    async def discover(self, seed_url: str) -> NormalizedIssuerMetadata:
        """
        Run capability-gated discovery for a seed URL.

        Args:
            seed_url: Bare issuer/origin URL or a full capability document URL

        Returns:
            NormalizedIssuerMetadata: Standard metadata plus the capability list

        Raises:
            MalformedInputError: If seed_url is not a valid http(s) URL
            TransportError: If either document cannot be retrieved
            CapabilityGateError: If the capability document fails a gate
        """
        capability_url = self.capability_url(seed_url)
        document = await fetch_document(self.fetcher, capability_url)

        result = evaluate_capability_gate(
            document,
            capability_name=self.settings.capability_name,
            required_capability=self.settings.required_capability,
        )
        if isinstance(result, GateRejected):
            raise result.error

        discovery_url = openid_configuration_url(result.issuer, self.settings.openid_document)
        logger.debug(f"Capability gate passed for {result.issuer}, fetching {discovery_url}")
        standard = await self.openid.fetch_metadata(discovery_url)

        metadata = merge_metadata(standard, result)
        logger.info(f"Discovered {self.settings.capability_name} issuer {metadata.issuer}")
        return metadata


async def discover(
    seed_url: str,
    fetcher: JsonFetcher | None = None,
    settings: DiscoverySettings | None = None,
) -> NormalizedIssuerMetadata:
    """Shortcut for CapabilityDiscoverer(fetcher, settings).discover(seed_url)."""
    return await CapabilityDiscoverer(fetcher=fetcher, settings=settings).discover(seed_url)
