class RegistryError(Exception):
    """Raised when the device registry lookup fails."""


class RegistryNetworkError(RegistryError):
    """Raised when the registry cannot be reached."""


class RegistryResponseError(RegistryError):
    """Raised when the registry answers with an error status or malformed body."""
