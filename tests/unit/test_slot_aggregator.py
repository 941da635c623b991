from reconciler.extraction.models import ImagePayload
from reconciler.reconciliation.models import ComparisonResult
from reconciler.slots.aggregator import can_proceed, evaluate_slots
from reconciler.slots.models import UploadSlot, ValidationState


PASSING = ComparisonResult()
FAILING = ComparisonResult(errors=("The entered IMEI does not match.",))


def _slot(slot_id: str, *, has_file: bool = True, result: ComparisonResult | None = PASSING) -> UploadSlot:
    return UploadSlot(
        id=slot_id,
        file_ref=ImagePayload(data_url="data:image/png;base64,AA==", mime="image/png") if has_file else None,
        validation_state=ValidationState.SUCCESS if result is not None else ValidationState.ANALYZING,
        last_result=result,
    )


class TestEvaluateSlots:
    def test_all_required_slots_passing(self) -> None:
        decision = evaluate_slots([_slot("imei_proof"), _slot("serial_proof")], ["imei_proof", "serial_proof"])
        assert decision.can_proceed is True
        assert decision.blockers == ()

    def test_failing_result_blocks(self) -> None:
        decision = evaluate_slots(
            [_slot("imei_proof"), _slot("serial_proof", result=FAILING)],
            ["imei_proof", "serial_proof"],
        )
        assert decision.can_proceed is False
        assert decision.blockers == ("serial_proof: identifiers do not match",)

    def test_missing_file_blocks(self) -> None:
        decision = evaluate_slots([_slot("imei_proof", has_file=False, result=None)], ["imei_proof"])
        assert decision.blockers == ("imei_proof: no file uploaded",)

    def test_unknown_required_slot_blocks(self) -> None:
        decision = evaluate_slots([_slot("imei_proof")], ["imei_proof", "box_photo"])
        assert decision.blockers == ("box_photo: unknown slot",)

    def test_optional_slots_are_ignored(self) -> None:
        decision = evaluate_slots(
            [_slot("imei_proof"), _slot("specs_proof", result=FAILING)], ["imei_proof"]
        )
        assert decision.can_proceed is True

    def test_pending_slot_allowed_by_default(self) -> None:
        decision = evaluate_slots([_slot("imei_proof", result=None)], ["imei_proof"])
        assert decision.can_proceed is True

    def test_pending_slot_blocks_when_disallowed(self) -> None:
        decision = evaluate_slots(
            [_slot("imei_proof", result=None)], ["imei_proof"], allow_pending_validation=False
        )
        assert decision.can_proceed is False
        assert decision.blockers == ("imei_proof: validation not completed",)

    def test_errored_slot_counts_as_pending(self) -> None:
        slot = _slot("imei_proof", result=None)
        slot.validation_state = ValidationState.ERROR
        slot.error_message = "provider unreachable"
        assert can_proceed([slot], ["imei_proof"]) is True
        assert can_proceed([slot], ["imei_proof"], allow_pending_validation=False) is False

    def test_no_required_slots(self) -> None:
        assert can_proceed([], []) is True
