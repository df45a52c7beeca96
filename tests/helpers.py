"""Shared test doubles and constants."""

from typing import Any

from smart_discovery.models import JsonResponse

SMART_CONFIGURATION_URL = "https://op.example.com/.well-known/smart-configuration"
OPENID_CONFIGURATION_URL = "https://op.example.com/.well-known/openid-configuration"


class RecordingFetcher:
    """
    In-memory JsonFetcher.

    Routes map a URL to a JsonResponse (or an exception to raise). Unrouted
    URLs answer 404. Every requested URL is appended to calls.
    """

    def __init__(self, routes: dict[str, Any] | None = None):
        self.routes = dict(routes or {})
        self.calls: list[str] = []

    def reply(self, url: str, body: Any, status_code: int = 200) -> "RecordingFetcher":
        self.routes[url] = JsonResponse(status_code=status_code, body=body)
        return self

    async def fetch_json(self, url: str) -> JsonResponse:
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            return JsonResponse(status_code=404, body=None)
        if isinstance(route, Exception):
            raise route
        return route
