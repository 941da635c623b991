"""Builds an ExtractionResult from the provider's parsed JSON object.

Problems with individual fields are not fatal: the field is dropped or kept
as-is and a note is recorded in ``ExtractionResult.raw_errors``.
"""

from typing import Any

from reconciler.extraction.models import ExtractionKind, ExtractionResult
from reconciler.normalization.builder import (
    RECONCILIATION_LIMITS,
    NormalizationLimits,
    build_device_specs,
)
from reconciler.normalization.identifiers import IMEI_MAX_LENGTH, normalize_imei, normalize_serial
from reconciler.normalization.models import IdentifierSet

_SERIAL_KEYS = ("serialNumber", "serial_number")


def validate_and_build(
    data: dict[str, Any],
    kind: ExtractionKind,
    limits: NormalizationLimits = RECONCILIATION_LIMITS,
) -> ExtractionResult:
    """Normalize the raw fields relevant to ``kind`` into an ExtractionResult."""
    raw_errors: list[str] = []

    if kind == "specs":
        specs = build_device_specs(
            _read_text(data, ("ram",), raw_errors),
            _read_text(data, ("storage",), raw_errors),
        )
        return ExtractionResult(
            kind=kind,
            identifiers=IdentifierSet(),
            imei_count=0,
            raw_errors=tuple(raw_errors),
            specs=specs,
        )

    imei1 = imei2 = None
    if kind == "imei":
        imei1 = _read_imei(data, "imei1", limits, raw_errors)
        imei2 = _read_imei(data, "imei2", limits, raw_errors)
        if imei1 and imei1 == imei2:
            raw_errors.append(f"IMEI2 duplicates IMEI1 ({imei1}); ignoring IMEI2")
            imei2 = None

    serial = normalize_serial(
        _read_text(data, _SERIAL_KEYS, raw_errors), limits.serial_max_length
    )
    identifiers = IdentifierSet(imei1=imei1, imei2=imei2, serial_number=serial or None)
    return ExtractionResult(
        kind=kind,
        identifiers=identifiers,
        imei_count=identifiers.imei_count,
        raw_errors=tuple(raw_errors),
    )


def _read_text(data: dict[str, Any], keys: tuple[str, ...], raw_errors: list[str]) -> str | None:
    for key in keys:
        if key not in data:
            continue
        value = data[key]
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raw_errors.append(f"'{key}' must be a string or null, got {type(value).__name__}")
            return None
        return str(value)
    return None


def _read_imei(
    data: dict[str, Any],
    key: str,
    limits: NormalizationLimits,
    raw_errors: list[str],
) -> str | None:
    raw = _read_text(data, (key,), raw_errors)
    imei = normalize_imei(raw, limits.imei_max_length)
    if not imei:
        if raw and raw.strip():
            raw_errors.append(f"'{key}' contains no digits: {raw!r}")
        return None
    if len(imei) != IMEI_MAX_LENGTH:
        raw_errors.append(f"'{key}' has {len(imei)} digits, expected {IMEI_MAX_LENGTH}")
    return imei
