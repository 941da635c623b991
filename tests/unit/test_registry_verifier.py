import asyncio
from unittest.mock import AsyncMock, MagicMock

from reconciler.normalization.models import IdentifierSet
from reconciler.registry.base import BaseRegistryClient
from reconciler.registry.exceptions import RegistryNetworkError
from reconciler.registry.models import RegistryStatus
from reconciler.registry.verifier import RegistryVerifier

IMEI1 = "356938035643809"
IMEI2 = "356938035643817"
SERIAL = "R58N12ABCDE"


def _client() -> MagicMock:
    client = MagicMock(spec=BaseRegistryClient)
    client.lookup_imei = AsyncMock(
        side_effect=lambda imei: RegistryStatus(identifier=imei, found=True, status="normal")
    )
    client.lookup_serial = AsyncMock(
        side_effect=lambda serial: RegistryStatus(identifier=serial, found=True, status="stolen")
    )
    return client


class TestRegistryVerifier:
    def test_checks_every_present_identifier(self) -> None:
        client = _client()
        report = asyncio.run(
            RegistryVerifier(client).verify_extracted(IdentifierSet(IMEI1, IMEI2, SERIAL))
        )
        assert [check.field for check in report.checks] == ["imei1", "imei2", "serial_number"]
        assert report.failures == ()
        assert [check.field for check in report.flagged] == ["serial_number"]
        assert client.lookup_imei.await_count == 2
        client.lookup_serial.assert_awaited_once_with(SERIAL)

    def test_skips_absent_identifiers(self) -> None:
        client = _client()
        report = asyncio.run(RegistryVerifier(client).verify_extracted(IdentifierSet(imei1=IMEI1)))
        assert [check.identifier for check in report.checks] == [IMEI1]
        client.lookup_serial.assert_not_awaited()

    def test_one_failure_does_not_hide_other_checks(self) -> None:
        client = _client()

        async def lookup_imei(imei: str) -> RegistryStatus:
            if imei == IMEI2:
                raise RegistryNetworkError("Registry unreachable")
            return RegistryStatus(identifier=imei, found=True, status="normal")

        client.lookup_imei = AsyncMock(side_effect=lookup_imei)
        report = asyncio.run(
            RegistryVerifier(client).verify_extracted(IdentifierSet(IMEI1, IMEI2, SERIAL))
        )
        assert len(report.checks) == 3
        assert [check.field for check in report.failures] == ["imei2"]
        assert report.failures[0].error == "Registry unreachable"
        assert report.checks[0].ok is True
        assert report.checks[2].status is not None

    def test_empty_identifiers(self) -> None:
        report = asyncio.run(RegistryVerifier(_client()).verify_extracted(IdentifierSet()))
        assert report.checks == ()
