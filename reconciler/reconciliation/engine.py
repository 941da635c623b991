"""Reconciles machine-extracted identifiers with operator-entered ones.

Both sides are expected to be normalized already. Nothing in this module
raises: degenerate input still produces a ComparisonResult.
"""

from dataclasses import dataclass, field

from reconciler.extraction.models import ExtractionResult
from reconciler.normalization.builder import (
    RECONCILIATION_LIMITS,
    NormalizationLimits,
    user_input_to_identifiers,
    user_input_to_specs,
)
from reconciler.normalization.models import DeviceSpecs, IdentifierSet, UserInput
from reconciler.reconciliation.models import (
    ComparisonResult,
    ImeiReconciliation,
    ReconciliationConfig,
)

NO_IDENTIFIER_SUPPLIED = "At least one identifier must be supplied."
NO_IMEI_EXTRACTED = (
    "No IMEI could be extracted from the image. Make sure the screenshot is sharp "
    "and shows the IMEI information."
)
IMEIS_SWAPPED = (
    "The IMEIs appear swapped: the entered IMEI1 matches the extracted IMEI2 and vice versa."
)
VERIFY_IMEI_ORDER = "Verify the order of the IMEIs on the device."

_DEFAULT_CONFIG = ReconciliationConfig()


@dataclass
class _Findings:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    imei1_match: bool = False
    imei2_match: bool = False
    missing_fields: list[str] = field(default_factory=list)

    def to_result(self, details: ImeiReconciliation | None = None) -> ComparisonResult:
        return ComparisonResult(
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
            suggestions=tuple(self.suggestions),
            imei_details=details,
        )


def compare(
    extracted: IdentifierSet,
    user: IdentifierSet,
    config: ReconciliationConfig | None = None,
) -> ComparisonResult:
    """Compare the IMEIs and serial number of an IMEI screenshot."""
    config = config or _DEFAULT_CONFIG
    findings = _Findings()
    _compare_imeis(extracted, user, config, findings)
    _compare_serial_numbers(extracted.serial_number, user.serial_number, findings)
    details = ImeiReconciliation(
        imei1_match=findings.imei1_match,
        imei2_match=findings.imei2_match,
        extracted_count=extracted.imei_count,
        user_count=user.imei_count,
        missing_fields=tuple(findings.missing_fields),
    )
    return findings.to_result(details)


def compare_serial(extracted: IdentifierSet, user: IdentifierSet) -> ComparisonResult:
    """Compare the serial number of a serial-number screenshot."""
    findings = _Findings()
    _compare_serial_numbers(extracted.serial_number, user.serial_number, findings)
    return findings.to_result()


def compare_specs(extracted: DeviceSpecs, user: DeviceSpecs) -> ComparisonResult:
    """Compare RAM and storage figures of a specs screenshot."""
    findings = _Findings()
    if extracted.ram and user.ram and extracted.ram != user.ram:
        findings.errors.append(
            f"The extracted RAM ({extracted.ram}) does not match the entered RAM ({user.ram})."
        )
    if extracted.storage and user.storage and extracted.storage != user.storage:
        findings.errors.append(
            f"The extracted storage ({extracted.storage}) does not match "
            f"the entered storage ({user.storage})."
        )
    return findings.to_result()


def reconcile(
    extraction: ExtractionResult,
    user_input: UserInput,
    limits: NormalizationLimits = RECONCILIATION_LIMITS,
    config: ReconciliationConfig | None = None,
) -> ComparisonResult:
    """Normalize the live form values and compare them according to the screenshot kind."""
    if extraction.kind == "specs":
        return compare_specs(extraction.specs or DeviceSpecs(), user_input_to_specs(user_input))
    user = user_input_to_identifiers(user_input, limits)
    if extraction.kind == "serial":
        return compare_serial(extraction.identifiers, user)
    return compare(extraction.identifiers, user, config)


def _compare_imeis(
    extracted: IdentifierSet,
    user: IdentifierSet,
    config: ReconciliationConfig,
    findings: _Findings,
) -> None:
    user_count = user.imei_count
    extracted_count = extracted.imei_count

    if user_count == 0:
        findings.errors.append(NO_IDENTIFIER_SUPPLIED)
        return
    if extracted_count == 0:
        if config.require_extracted_imei:
            findings.errors.append(NO_IMEI_EXTRACTED)
        return

    if user_count == 1 and extracted_count > 1:
        _single_against_dual(extracted, user.imeis[0], findings)
    elif user_count > 1 and extracted_count > 1:
        _dual_against_dual(extracted, user, config, findings)
    elif user_count > 1:
        _dual_against_single(extracted.imeis[0], user, findings)
    else:
        _single_against_single(extracted.imeis[0], user, findings)


def _single_against_dual(extracted: IdentifierSet, imei: str, findings: _Findings) -> None:
    # Operators often type only one of the two SIM IMEIs.
    if imei == extracted.imei1:
        findings.imei1_match = True
        findings.warnings.append(f"The entered IMEI {imei} matched as IMEI1.")
        findings.suggestions.append(
            f"A second IMEI was detected (IMEI2: {extracted.imei2}). Enter it as IMEI2 "
            "to fully validate this dual-SIM device."
        )
        findings.missing_fields.append("imei2")
    elif imei == extracted.imei2:
        findings.imei2_match = True
        findings.warnings.append(f"The entered IMEI {imei} matched as IMEI2.")
        findings.suggestions.append(
            f"A first IMEI was detected (IMEI1: {extracted.imei1}). Enter it as IMEI1 "
            "to fully validate this dual-SIM device."
        )
        findings.missing_fields.append("imei1")
    else:
        findings.errors.append(
            f"The entered IMEI ({imei}) matches neither extracted value "
            f"(IMEI1: {extracted.imei1}, IMEI2: {extracted.imei2})."
        )


def _dual_against_dual(
    extracted: IdentifierSet,
    user: IdentifierSet,
    config: ReconciliationConfig,
    findings: _Findings,
) -> None:
    findings.imei1_match = user.imei1 == extracted.imei1
    findings.imei2_match = user.imei2 == extracted.imei2

    positional_errors = []
    if not findings.imei1_match:
        positional_errors.append(
            f"The entered IMEI1 ({user.imei1}) does not match the extracted IMEI1 "
            f"({extracted.imei1})."
        )
    if not findings.imei2_match:
        positional_errors.append(
            f"The entered IMEI2 ({user.imei2}) does not match the extracted IMEI2 "
            f"({extracted.imei2})."
        )

    swapped = (
        not findings.imei1_match
        and not findings.imei2_match
        and user.imei1 == extracted.imei2
        and user.imei2 == extracted.imei1
    )
    if swapped:
        findings.warnings.append(IMEIS_SWAPPED)
        findings.suggestions.append(VERIFY_IMEI_ORDER)

    if not (swapped and config.suppress_mismatch_on_swap):
        findings.errors.extend(positional_errors)


def _dual_against_single(extracted_imei: str, user: IdentifierSet, findings: _Findings) -> None:
    if user.imei1 == extracted_imei:
        findings.imei1_match = True
        findings.warnings.append(
            f"Only one IMEI could be read from the image; it matches IMEI1 ({extracted_imei})."
        )
    elif user.imei2 == extracted_imei:
        findings.imei2_match = True
        findings.warnings.append(
            f"Only one IMEI could be read from the image; it matches IMEI2 ({extracted_imei})."
        )
    else:
        findings.errors.append(
            f"The extracted IMEI ({extracted_imei}) matches neither entered IMEI."
        )


def _single_against_single(extracted_imei: str, user: IdentifierSet, findings: _Findings) -> None:
    imei = user.imeis[0]
    if imei != extracted_imei:
        findings.errors.append(
            f"The entered IMEI ({imei}) does not match the extracted IMEI ({extracted_imei})."
        )
    elif user.imei1:
        findings.imei1_match = True
    else:
        findings.imei2_match = True


def _compare_serial_numbers(
    extracted: str | None,
    entered: str | None,
    findings: _Findings,
) -> None:
    if extracted and entered and extracted != entered:
        findings.errors.append(
            f"The extracted serial number ({extracted}) does not match "
            f"the entered serial number ({entered})."
        )
