from reconciler.normalization.builder import (
    RECONCILIATION_LIMITS,
    REGISTRATION_LIMITS,
    NormalizationLimits,
    build_device_specs,
    build_identifier_set,
    user_input_to_identifiers,
    user_input_to_specs,
)
from reconciler.normalization.identifiers import (
    normalize_imei,
    normalize_serial,
    normalize_spec_value,
)
from reconciler.normalization.models import DeviceSpecs, IdentifierSet, UserInput

__all__ = [
    "RECONCILIATION_LIMITS",
    "REGISTRATION_LIMITS",
    "DeviceSpecs",
    "IdentifierSet",
    "NormalizationLimits",
    "UserInput",
    "build_device_specs",
    "build_identifier_set",
    "normalize_imei",
    "normalize_serial",
    "normalize_spec_value",
    "user_input_to_identifiers",
    "user_input_to_specs",
]
