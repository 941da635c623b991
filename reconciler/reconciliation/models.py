from dataclasses import dataclass


@dataclass(frozen=True)
class ImeiReconciliation:
    """Per-slot detail of an IMEI comparison."""

    imei1_match: bool = False
    imei2_match: bool = False
    extracted_count: int = 0
    user_count: int = 0
    missing_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ComparisonResult:
    """Verdict of reconciling extracted identifiers against operator input.

    Only ``errors`` block; warnings and suggestions are informational.
    """

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    imei_details: ImeiReconciliation | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ReconciliationConfig:
    """Switches for the comparison rules that differ between call sites.

    ``suppress_mismatch_on_swap`` drops the positional mismatch errors when the
    two IMEIs are only reordered; by default both the errors and the swap
    warning are reported.
    """

    suppress_mismatch_on_swap: bool = False
    require_extracted_imei: bool = True
