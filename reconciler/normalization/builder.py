from dataclasses import dataclass

from reconciler.normalization.identifiers import (
    IMEI_MAX_LENGTH,
    REGISTRATION_IMEI_MAX_LENGTH,
    SERIAL_MAX_LENGTH,
    normalize_imei,
    normalize_serial,
    normalize_spec_value,
)
from reconciler.normalization.models import DeviceSpecs, IdentifierSet, UserInput


@dataclass(frozen=True)
class NormalizationLimits:
    """Length caps applied when normalizing identifiers.

    Registration forms accept IMEIs up to 20 digits while the reconciliation
    path caps them at 15; both contexts are kept as explicit presets.
    """

    imei_max_length: int = IMEI_MAX_LENGTH
    serial_max_length: int = SERIAL_MAX_LENGTH


RECONCILIATION_LIMITS = NormalizationLimits()
REGISTRATION_LIMITS = NormalizationLimits(imei_max_length=REGISTRATION_IMEI_MAX_LENGTH)


def build_identifier_set(
    imei1: str | None = None,
    imei2: str | None = None,
    serial_number: str | None = None,
    limits: NormalizationLimits = RECONCILIATION_LIMITS,
) -> IdentifierSet:
    return IdentifierSet(
        imei1=normalize_imei(imei1, limits.imei_max_length) or None,
        imei2=normalize_imei(imei2, limits.imei_max_length) or None,
        serial_number=normalize_serial(serial_number, limits.serial_max_length) or None,
    )


def build_device_specs(ram: str | None = None, storage: str | None = None) -> DeviceSpecs:
    return DeviceSpecs(
        ram=normalize_spec_value(ram) or None,
        storage=normalize_spec_value(storage) or None,
    )


def user_input_to_identifiers(
    user_input: UserInput,
    limits: NormalizationLimits = RECONCILIATION_LIMITS,
) -> IdentifierSet:
    """Normalize the identifiers currently typed into the form."""
    return build_identifier_set(
        user_input.imei1,
        user_input.imei2,
        user_input.serial_number,
        limits=limits,
    )


def user_input_to_specs(user_input: UserInput) -> DeviceSpecs:
    return build_device_specs(user_input.ram, user_input.storage)
