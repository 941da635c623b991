from typing import Any

import httpx

from reconciler.registry.base import BaseRegistryClient
from reconciler.registry.exceptions import (
    RegistryError,
    RegistryNetworkError,
    RegistryResponseError,
)
from reconciler.registry.models import RegistryStatus


class HttpRegistryClient(BaseRegistryClient):
    """Registry client for the phone registry REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_token: str = "",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def lookup_imei(self, imei: str) -> RegistryStatus:
        return await self._lookup(f"/phones/verify/{imei}", imei)

    async def lookup_serial(self, serial_number: str) -> RegistryStatus:
        return await self._lookup(f"/phones/verify-serial/{serial_number}", serial_number)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _lookup(self, path: str, identifier: str) -> RegistryStatus:
        try:
            response = await self._client.get(path)
        except httpx.TimeoutException as exc:
            raise RegistryNetworkError(f"Registry lookup timed out for {identifier}") from exc
        except httpx.HTTPError as exc:
            raise RegistryNetworkError(f"Registry unreachable: {exc}") from exc

        if response.status_code == 404:
            return RegistryStatus(identifier=identifier, found=False)
        if response.status_code == 401:
            raise RegistryResponseError("Registry authentication failed. Please sign in again.")
        if response.status_code == 403:
            raise RegistryResponseError("Registry access denied. Check your permissions.")
        if response.status_code == 429:
            raise RegistryResponseError("Too many registry requests. Please try again later.")
        if response.is_error:
            raise RegistryResponseError(
                f"Registry error ({response.status_code}) for {identifier}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise RegistryResponseError(f"Registry returned invalid JSON: {exc}") from exc
        return self._parse(payload, identifier)

    @staticmethod
    def _parse(payload: Any, identifier: str) -> RegistryStatus:
        if not isinstance(payload, dict):
            raise RegistryError("Registry response must be an object")
        # Either {"found": ..., "phone": {...}} or a flat record.
        record = payload.get("phone") if "phone" in payload else payload
        found = bool(payload.get("found", record is not None))
        if not isinstance(record, dict):
            return RegistryStatus(identifier=identifier, found=False)
        return RegistryStatus(
            identifier=identifier,
            found=found,
            status=str(record.get("status") or "unknown"),
            brand=record.get("brand"),
            model=record.get("model"),
            serial_number=record.get("serial_number"),
        )
