"""Decides whether a multi-slot step may proceed."""

from collections.abc import Iterable
from dataclasses import dataclass

from reconciler.slots.models import UploadSlot


@dataclass(frozen=True)
class ProceedDecision:
    """Outcome of evaluating the required slots of a step."""

    can_proceed: bool
    blockers: tuple[str, ...] = ()


def evaluate_slots(
    slots: Iterable[UploadSlot],
    required_ids: Iterable[str],
    *,
    allow_pending_validation: bool = True,
) -> ProceedDecision:
    """Check every required slot and explain which ones block.

    A required slot blocks when it is missing, has no file, or carries a
    failing result. A slot without a result (analysis pending or the
    collaborator failed) blocks only when ``allow_pending_validation`` is False.
    """
    by_id = {slot.id: slot for slot in slots}
    blockers: list[str] = []
    for slot_id in required_ids:
        slot = by_id.get(slot_id)
        if slot is None:
            blockers.append(f"{slot_id}: unknown slot")
        elif not slot.has_file:
            blockers.append(f"{slot_id}: no file uploaded")
        elif slot.last_result is None:
            if not allow_pending_validation:
                blockers.append(f"{slot_id}: validation not completed")
        elif not slot.last_result.is_valid:
            blockers.append(f"{slot_id}: identifiers do not match")
    return ProceedDecision(can_proceed=not blockers, blockers=tuple(blockers))


def can_proceed(
    slots: Iterable[UploadSlot],
    required_ids: Iterable[str],
    *,
    allow_pending_validation: bool = True,
) -> bool:
    return evaluate_slots(
        slots, required_ids, allow_pending_validation=allow_pending_validation
    ).can_proceed
