import asyncio
from collections.abc import Awaitable, Callable

from reconciler.logging.logger import Log
from reconciler.normalization.models import IdentifierSet
from reconciler.registry.base import BaseRegistryClient
from reconciler.registry.exceptions import RegistryError
from reconciler.registry.models import RegistryCheck, RegistryStatus, VerificationReport


class RegistryVerifier:
    """Looks up extracted identifiers in the registry, one request per identifier."""

    def __init__(self, client: BaseRegistryClient) -> None:
        self._client = client

    async def verify_extracted(self, identifiers: IdentifierSet) -> VerificationReport:
        """Check every present identifier concurrently.

        A failed lookup is recorded on its own check and does not prevent the
        other identifiers from being verified.
        """
        lookups = []
        for field in ("imei1", "imei2"):
            imei = getattr(identifiers, field)
            if imei:
                lookups.append(self._check(field, imei, self._client.lookup_imei))
        if identifiers.serial_number:
            lookups.append(
                self._check("serial_number", identifiers.serial_number, self._client.lookup_serial)
            )
        checks = await asyncio.gather(*lookups)
        report = VerificationReport(checks=tuple(checks))
        Log.info(
            f"Registry verification complete: {len(report.checks)} checked, "
            f"{len(report.failures)} failed, {len(report.flagged)} flagged"
        )
        return report

    @staticmethod
    async def _check(
        field: str,
        identifier: str,
        lookup: Callable[[str], Awaitable[RegistryStatus]],
    ) -> RegistryCheck:
        try:
            status = await lookup(identifier)
        except RegistryError as exc:
            Log.warning(f"Registry lookup failed: {exc}", field=field)
            return RegistryCheck(field=field, identifier=identifier, error=str(exc))
        return RegistryCheck(field=field, identifier=identifier, status=status)
