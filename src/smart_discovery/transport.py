"""
JSON Transport

The discovery pipeline only needs one network primitive: fetch a URL and
return its status code and decoded JSON body. JsonFetcher describes that
primitive so callers can inject their own; HttpxJsonFetcher is the default
implementation on top of httpx.

Status codes are not interpreted here. The discoverer decides what a non-2xx
response means so injected fetchers behave the same as the default one.
"""

import json
import logging
from typing import Protocol, runtime_checkable

import httpx

from smart_discovery.configs import DiscoverySettings, get_settings
from smart_discovery.errors import TransportError
from smart_discovery.models import JsonResponse

logger = logging.getLogger(__name__)


@runtime_checkable
class JsonFetcher(Protocol):
    """Fetch a URL and return its decoded JSON body."""

    async def fetch_json(self, url: str) -> JsonResponse:
        """
        Args:
            url: Absolute URL to GET

        Returns:
            JsonResponse: status code and decoded body (None when empty)

        Raises:
            TransportError: On network failure or an undecodable body
        """
        ...


class HttpxJsonFetcher:
    """
    JsonFetcher backed by httpx.AsyncClient.

    When a client is passed in, it is reused for every request and left open
    (the caller owns it). Otherwise a short-lived client is opened per request.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: DiscoverySettings | None = None,
    ):
        self.settings = settings or get_settings()
        self._client = client
        self.headers = {
            "Accept": "application/json",
            "User-Agent": self.settings.user_agent,
        }

    async def fetch_json(self, url: str) -> JsonResponse:
        logger.debug(f"GET {url}")
        try:
            if self._client is not None:
                response = await self._client.get(url, headers=self.headers)
            else:
                async with httpx.AsyncClient(
                    timeout=self.settings.http_timeout,
                    verify=self.settings.verify_ssl,
                ) as client:
                    response = await client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            logger.error(f"Request to {url} failed: {e.__class__.__name__}: {e}")
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        return JsonResponse(status_code=response.status_code, body=self._decode(url, response))

    @staticmethod
    def _decode(url: str, response: httpx.Response) -> object:
        """Decode the response body as JSON; an empty body decodes to None."""
        if not response.content.strip():
            return None

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(
                f"Response from {url} is not valid JSON: status={response.status_code}"
            )
            raise TransportError(
                f"Response from {url} is not valid JSON",
                url=url,
                status_code=response.status_code,
                body=response.text,
            ) from e
