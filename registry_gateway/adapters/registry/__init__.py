"""Registry adapter layer - abstracts over how signed documents are delivered."""

from registry_gateway.adapters.registry.base import AbstractRegistryClient
from registry_gateway.adapters.registry.factory import create_registry_client
from registry_gateway.adapters.registry.http_client import HttpRegistryClient

__all__ = [
    "AbstractRegistryClient",
    "HttpRegistryClient",
    "create_registry_client",
]
