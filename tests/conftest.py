"""
Pytest fixtures for discovery testing.

Provides sample capability/OpenID documents, isolated settings and a
recording fetcher that counts outbound requests.
"""

import pytest

from smart_discovery.configs import DiscoverySettings
from tests.helpers import OPENID_CONFIGURATION_URL, SMART_CONFIGURATION_URL, RecordingFetcher


@pytest.fixture
def settings():
    """Default settings, isolated from .env files."""
    return DiscoverySettings(_env_file=None)


@pytest.fixture
def capability_success():
    return {
        "issuer": "https://op.example.com",
        "authorization_endpoint": "https://op.example.com/o/oauth2/v2/auth",
        "token_endpoint": "https://op.example.com/oauth2/v4/token",
        "capabilities": ["sso-openid-connect"],
        "code_challenge_methods_supported": ["S256"],
    }


@pytest.fixture
def issuer_success():
    return {
        "authorization_endpoint": "https://op.example.com/o/oauth2/v2/auth",
        "issuer": "https://op.example.com",
        "jwks_uri": "https://op.example.com/oauth2/v3/certs",
        "token_endpoint": "https://op.example.com/oauth2/v4/token",
        "userinfo_endpoint": "https://op.example.com/oauth2/v3/userinfo",
    }


@pytest.fixture
def fetcher():
    return RecordingFetcher()


@pytest.fixture
def successful_fetcher(fetcher, capability_success, issuer_success):
    """Fetcher serving a capable SMART configuration and its OpenID configuration."""
    fetcher.reply(SMART_CONFIGURATION_URL, capability_success)
    fetcher.reply(OPENID_CONFIGURATION_URL, issuer_success)
    return fetcher
