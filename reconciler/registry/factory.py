from reconciler.config.settings import Settings
from reconciler.registry.base import BaseRegistryClient
from reconciler.registry.http_adapter import HttpRegistryClient


class RegistryClientFactory:
    """Creates the registry client from settings."""

    @classmethod
    def create(cls, settings: Settings) -> BaseRegistryClient:
        base_url = settings.registry_base_url.strip()
        if not base_url:
            raise ValueError("registry_base_url is required for registry verification")
        return HttpRegistryClient(
            base_url=base_url,
            api_token=settings.registry_api_token,
            timeout_seconds=settings.registry_timeout_seconds,
        )
