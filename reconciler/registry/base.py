from abc import ABC, abstractmethod

from reconciler.registry.models import RegistryStatus


class BaseRegistryClient(ABC):
    """Contract for the authoritative device registry."""

    @abstractmethod
    async def lookup_imei(self, imei: str) -> RegistryStatus:
        """Fetch the registry record for an IMEI.

        Raises:
            RegistryError: on any failure.
        """

    @abstractmethod
    async def lookup_serial(self, serial_number: str) -> RegistryStatus:
        """Fetch the registry record for a serial number.

        Raises:
            RegistryError: on any failure.
        """

    async def aclose(self) -> None:
        """Release network resources held by the client."""
