"""Upload forms: the per-form slot map and the live operator input."""

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass

from reconciler.config.settings import Settings
from reconciler.extraction.base import BaseIdentifierExtractor
from reconciler.extraction.models import ExtractionKind, ImagePayload
from reconciler.normalization.builder import (
    RECONCILIATION_LIMITS,
    REGISTRATION_LIMITS,
    NormalizationLimits,
)
from reconciler.normalization.models import UserInput
from reconciler.reconciliation.models import ReconciliationConfig
from reconciler.slots.aggregator import ProceedDecision, evaluate_slots
from reconciler.slots.exceptions import UnknownSlotError
from reconciler.slots.models import SlotStatus, UploadSlot
from reconciler.slots.state_machine import DEFAULT_DEBOUNCE_SECONDS, UploadSlotMachine

_USER_INPUT_FIELDS = frozenset(f.name for f in dataclasses.fields(UserInput))


@dataclass(frozen=True)
class SlotDefinition:
    id: str
    kind: ExtractionKind
    required: bool = True


@dataclass(frozen=True)
class FlowProfile:
    """Slots and normalization context of one upload flow."""

    name: str
    slots: tuple[SlotDefinition, ...]
    context: str = "reconciliation"

    @property
    def required_ids(self) -> tuple[str, ...]:
        return tuple(slot.id for slot in self.slots if slot.required)


REGISTRATION_FLOW = FlowProfile(
    name="registration",
    slots=(
        SlotDefinition("imei_proof", "imei"),
        SlotDefinition("serial_proof", "serial"),
        SlotDefinition("specs_proof", "specs", required=False),
    ),
    context="registration",
)

OWNERSHIP_VERIFICATION_FLOW = FlowProfile(
    name="ownership_verification",
    slots=(SlotDefinition("screenshot", "imei"),),
    context="reconciliation",
)


def limits_for(context: str, settings: Settings | None = None) -> NormalizationLimits:
    """IMEI/serial length caps for a flow context, optionally taken from settings."""
    if settings is None:
        return REGISTRATION_LIMITS if context == "registration" else RECONCILIATION_LIMITS
    if context == "registration":
        imei_cap = settings.registration_imei_max_length
    else:
        imei_cap = settings.reconciliation_imei_max_length
    return NormalizationLimits(
        imei_max_length=imei_cap, serial_max_length=settings.serial_max_length
    )


class UploadForm:
    """Owns the slots of one flow and the operator input they are checked against."""

    def __init__(
        self,
        profile: FlowProfile,
        *,
        extractor: BaseIdentifierExtractor,
        limits: NormalizationLimits | None = None,
        config: ReconciliationConfig | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        allow_pending_validation: bool = True,
        send_hint: bool = False,
    ) -> None:
        self._profile = profile
        self._user_input = UserInput()
        self._allow_pending_validation = allow_pending_validation
        limits = limits or limits_for(profile.context)
        self._machines: dict[str, UploadSlotMachine] = {
            definition.id: UploadSlotMachine(
                UploadSlot(id=definition.id, kind=definition.kind),
                extractor=extractor,
                user_input=lambda: self._user_input,
                limits=limits,
                config=config,
                debounce_seconds=debounce_seconds,
                send_hint=send_hint,
            )
            for definition in profile.slots
        }

    @classmethod
    def from_settings(
        cls,
        profile: FlowProfile,
        extractor: BaseIdentifierExtractor,
        settings: Settings,
    ) -> "UploadForm":
        return cls(
            profile,
            extractor=extractor,
            limits=limits_for(profile.context, settings),
            config=ReconciliationConfig(
                suppress_mismatch_on_swap=settings.suppress_mismatch_on_swap,
                require_extracted_imei=settings.require_extracted_imei,
            ),
            debounce_seconds=settings.analysis_debounce_seconds,
            allow_pending_validation=settings.allow_pending_validation,
            send_hint=settings.send_operator_hint,
        )

    @property
    def profile(self) -> FlowProfile:
        return self._profile

    @property
    def user_input(self) -> UserInput:
        return self._user_input

    def update_field(self, name: str, value: str) -> None:
        """Record what the operator typed; slots read it when their analysis completes."""
        if name not in _USER_INPUT_FIELDS:
            raise ValueError(f"Unknown form field '{name}'. Choose from: {sorted(_USER_INPUT_FIELDS)}")
        setattr(self._user_input, name, value)

    def machine(self, slot_id: str) -> UploadSlotMachine:
        machine = self._machines.get(slot_id)
        if machine is None:
            raise UnknownSlotError(f"Form '{self._profile.name}' has no slot '{slot_id}'")
        return machine

    def assign_file(self, slot_id: str, image: ImagePayload) -> None:
        self.machine(slot_id).assign_file(image)

    def remove_file(self, slot_id: str) -> None:
        self.machine(slot_id).remove_file()

    def retry(self, slot_id: str) -> None:
        self.machine(slot_id).retry()

    def recompare(self, slot_id: str) -> None:
        self.machine(slot_id).recompare()

    def statuses(self) -> dict[str, SlotStatus]:
        return {slot_id: machine.status() for slot_id, machine in self._machines.items()}

    def evaluate(self, required_ids: Iterable[str] | None = None) -> ProceedDecision:
        return evaluate_slots(
            (machine.slot for machine in self._machines.values()),
            self._profile.required_ids if required_ids is None else required_ids,
            allow_pending_validation=self._allow_pending_validation,
        )

    def can_proceed(self, required_ids: Iterable[str] | None = None) -> bool:
        return self.evaluate(required_ids).can_proceed

    async def settle(self) -> None:
        for machine in self._machines.values():
            await machine.settle()
