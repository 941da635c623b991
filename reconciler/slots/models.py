from dataclasses import dataclass
from enum import Enum

from reconciler.extraction.models import ExtractionKind, ExtractionResult, ImagePayload
from reconciler.reconciliation.models import ComparisonResult


class ValidationState(str, Enum):
    """Analysis lifecycle of an upload slot.

    SUCCESS means the analysis completed; whether the identifiers matched is
    carried by ``last_result.is_valid``.
    """

    IDLE = "idle"
    ANALYZING = "analyzing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class UploadSlot:
    """One upload field: its file and validation lifecycle.

    ``generation`` changes whenever the file is replaced or removed; analysis
    results issued under an older generation are discarded.
    """

    id: str
    kind: ExtractionKind = "imei"
    file_ref: ImagePayload | None = None
    validation_state: ValidationState = ValidationState.IDLE
    last_result: ComparisonResult | None = None
    generation: int = 0
    error_message: str | None = None
    last_extraction: ExtractionResult | None = None

    @property
    def has_file(self) -> bool:
        return self.file_ref is not None


@dataclass(frozen=True)
class SlotStatus:
    """Read-only snapshot of a slot for indicators and the aggregator."""

    slot_id: str
    validation_state: ValidationState
    last_result: ComparisonResult | None
    generation: int
    has_file: bool
    error_message: str | None = None

    @property
    def can_retry(self) -> bool:
        if self.validation_state is ValidationState.ERROR:
            return True
        return (
            self.validation_state is ValidationState.SUCCESS
            and self.last_result is not None
            and not self.last_result.is_valid
        )
