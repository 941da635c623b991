"""Per-slot analysis lifecycle.

Every event that mutates a slot (file assigned, retry, file removed, analysis
completed) goes through UploadSlotMachine. Stale completions are rejected by
comparing the generation captured when the analysis was issued with the
slot's current generation; in-flight extraction calls are never aborted.
"""

import asyncio
from collections.abc import Callable

from reconciler.extraction.base import BaseIdentifierExtractor
from reconciler.extraction.exceptions import ExtractionError
from reconciler.extraction.models import ImagePayload
from reconciler.logging.logger import Log
from reconciler.normalization.builder import (
    RECONCILIATION_LIMITS,
    NormalizationLimits,
    user_input_to_identifiers,
)
from reconciler.normalization.models import UserInput
from reconciler.reconciliation.engine import reconcile
from reconciler.reconciliation.models import ReconciliationConfig
from reconciler.slots.exceptions import SlotTransitionError
from reconciler.slots.models import SlotStatus, UploadSlot, ValidationState

UserInputProvider = Callable[[], UserInput]
SlotListener = Callable[[SlotStatus], None]

DEFAULT_DEBOUNCE_SECONDS = 1.0


class UploadSlotMachine:
    """Owns one UploadSlot and drives it through Idle/Analyzing/Success/Error."""

    def __init__(
        self,
        slot: UploadSlot,
        *,
        extractor: BaseIdentifierExtractor,
        user_input: UserInputProvider,
        limits: NormalizationLimits = RECONCILIATION_LIMITS,
        config: ReconciliationConfig | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        send_hint: bool = False,
    ) -> None:
        self._slot = slot
        self._extractor = extractor
        self._user_input = user_input
        self._limits = limits
        self._config = config
        self._debounce_seconds = debounce_seconds
        self._send_hint = send_hint
        self._debounce_task: asyncio.Task[None] | None = None
        self._analysis_tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[SlotListener] = []

    @property
    def slot(self) -> UploadSlot:
        return self._slot

    def status(self) -> SlotStatus:
        slot = self._slot
        return SlotStatus(
            slot_id=slot.id,
            validation_state=slot.validation_state,
            last_result=slot.last_result,
            generation=slot.generation,
            has_file=slot.has_file,
            error_message=slot.error_message,
        )

    def subscribe(self, listener: SlotListener) -> Callable[[], None]:
        """Call ``listener`` with a fresh status after every transition.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def assign_file(self, image: ImagePayload) -> None:
        """Attach a new file and schedule its analysis after the debounce delay.

        Must be called from a running event loop.
        """
        self._cancel_debounce()
        slot = self._slot
        slot.generation += 1
        slot.file_ref = image
        slot.validation_state = ValidationState.IDLE
        slot.last_result = None
        slot.last_extraction = None
        slot.error_message = None
        Log.info("File assigned", slot=slot.id, generation=slot.generation)
        self._debounce_task = asyncio.get_running_loop().create_task(
            self._debounced_analysis(slot.generation)
        )
        self._notify()

    def retry(self) -> None:
        """Re-run analysis for the current file without changing the generation.

        The slot enters ANALYZING immediately, so a repeated call raises until
        this attempt completes.

        Raises:
            SlotTransitionError: unless the slot is in ERROR, or in SUCCESS with
                a failing result.
        """
        slot = self._slot
        if not self.status().can_retry or slot.file_ref is None:
            raise SlotTransitionError(
                f"Slot '{slot.id}' cannot retry from state {slot.validation_state.value}"
            )
        Log.info("Manual retry", slot=slot.id, generation=slot.generation)
        self._mark_analyzing()
        self._start_analysis(slot.generation)

    def recompare(self) -> None:
        """Reconcile the last extraction against the current form values.

        No new extraction call is made, so the generation is unchanged.

        Raises:
            SlotTransitionError: unless the slot is in SUCCESS.
        """
        slot = self._slot
        if slot.validation_state is not ValidationState.SUCCESS or slot.last_extraction is None:
            raise SlotTransitionError(
                f"Slot '{slot.id}' has no completed analysis to compare against"
            )
        slot.last_result = reconcile(
            slot.last_extraction, self._user_input(), self._limits, self._config
        )
        Log.info("Recompared with current input", slot=slot.id, valid=slot.last_result.is_valid)
        self._notify()

    def remove_file(self) -> None:
        """Reset the slot to IDLE; any outstanding analysis becomes stale."""
        self._cancel_debounce()
        slot = self._slot
        slot.generation += 1
        slot.file_ref = None
        slot.validation_state = ValidationState.IDLE
        slot.last_result = None
        slot.last_extraction = None
        slot.error_message = None
        Log.info("File removed", slot=slot.id, generation=slot.generation)
        self._notify()

    async def settle(self) -> None:
        """Wait until no debounce or analysis task is outstanding."""
        while True:
            pending = [task for task in self._pending_tasks() if not task.done()]
            if not pending:
                return
            await asyncio.wait(pending)

    def _pending_tasks(self) -> list[asyncio.Task[None]]:
        tasks = list(self._analysis_tasks)
        if self._debounce_task is not None:
            tasks.append(self._debounce_task)
        return tasks

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
            Log.debug("Scheduled analysis cancelled", slot=self._slot.id)
        self._debounce_task = None

    async def _debounced_analysis(self, generation: int) -> None:
        await asyncio.sleep(self._debounce_seconds)
        if self._is_stale(generation):
            return
        self._start_analysis(generation)

    def _start_analysis(self, generation: int) -> None:
        task = asyncio.get_running_loop().create_task(self._analyze(generation))
        self._analysis_tasks.add(task)
        task.add_done_callback(self._analysis_tasks.discard)

    async def _analyze(self, generation: int) -> None:
        slot = self._slot
        image = slot.file_ref
        if image is None or self._is_stale(generation):
            return

        if slot.validation_state is not ValidationState.ANALYZING:
            self._mark_analyzing()
        Log.info("Analysis started", slot=slot.id, generation=generation, kind=slot.kind)

        hint = user_input_to_identifiers(self._user_input(), self._limits) if self._send_hint else None
        try:
            extraction = await self._extractor.extract(image, slot.kind, hint)
        except ExtractionError as exc:
            self._fail(generation, str(exc))
            return
        except Exception as exc:
            Log.error(f"Unexpected extraction failure: {exc!r}", slot=slot.id)
            self._fail(generation, "Unable to analyze the image right now. Please try again.")
            return

        if self._is_stale(generation):
            return

        result = reconcile(extraction, self._user_input(), self._limits, self._config)
        slot.last_extraction = extraction
        slot.last_result = result
        slot.validation_state = ValidationState.SUCCESS
        Log.info(
            "Analysis completed",
            slot=slot.id,
            generation=generation,
            valid=result.is_valid,
            errors=len(result.errors),
            warnings=len(result.warnings),
        )
        self._notify()

    def _mark_analyzing(self) -> None:
        self._slot.validation_state = ValidationState.ANALYZING
        self._slot.error_message = None
        self._notify()

    def _fail(self, generation: int, message: str) -> None:
        if self._is_stale(generation):
            return
        slot = self._slot
        slot.validation_state = ValidationState.ERROR
        slot.error_message = message
        Log.warning(f"Analysis failed: {message}", slot=slot.id, generation=generation)
        self._notify()

    def _is_stale(self, generation: int) -> bool:
        if generation == self._slot.generation:
            return False
        Log.debug(
            "Discarding stale analysis",
            slot=self._slot.id,
            issued=generation,
            current=self._slot.generation,
        )
        return True

    def _notify(self) -> None:
        status = self.status()
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception as exc:
                Log.error(f"Slot listener failed: {exc!r}", slot=status.slot_id)
