"""
Discovery Configuration

Environment-driven settings for SMART capability discovery.
Every value can be overridden with a ``SMART_DISCOVERY_``-prefixed
environment variable (e.g. ``SMART_DISCOVERY_HTTP_TIMEOUT=10``).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiscoverySettings(BaseSettings):
    """Settings consumed by the capability and OpenID discoverers."""

    model_config = SettingsConfigDict(
        env_prefix="SMART_DISCOVERY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Capability gate
    capability_name: str = Field(
        default="Fhir", description="Server kind named in capability gate errors"
    )
    required_capability: str = Field(
        default="sso-openid-connect",
        description="Capability the server must advertise before OIDC discovery runs",
    )

    # Well-known document names
    capability_document: str = Field(
        default="smart-configuration",
        description="Capability document appended to bare issuer URLs",
    )
    openid_document: str = Field(
        default="openid-configuration",
        description="Standard OpenID Connect discovery document",
    )

    # Default transport
    http_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    verify_ssl: bool = True
    user_agent: str = "smart-discovery"


@lru_cache(maxsize=1)
def get_settings() -> DiscoverySettings:
    """Return the process-wide settings, read once from the environment."""
    return DiscoverySettings()
