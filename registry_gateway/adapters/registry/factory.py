"""Factory for creating registry client instances."""

from registry_gateway.adapters.registry.base import AbstractRegistryClient
from registry_gateway.adapters.registry.http_client import HttpRegistryClient
from registry_gateway.core.config import settings
from registry_gateway.core.errors import ValidationAppError


def create_registry_client() -> AbstractRegistryClient:
    """Instantiate the registry client from settings.

    Reads configuration from registry_gateway.core.config.settings.

    Returns:
        AbstractRegistryClient: Configured client instance.

    Raises:
        ValidationAppError: If the configured URL is not an http(s) URL.
    """
    url = settings.registry.url.strip()

    if not url.startswith(("http://", "https://")):
        raise ValidationAppError(
            code="registry_invalid_url",
            message=f"REGISTRY_URL must be an http(s) URL, got '{url}'",
        )

    return HttpRegistryClient(
        url=url,
        timeout_seconds=settings.registry.timeout_seconds,
    )
