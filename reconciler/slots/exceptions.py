class SlotError(Exception):
    """Base exception for upload-slot errors."""


class SlotTransitionError(SlotError):
    """Raised when an event is not allowed in the slot's current state."""


class UnknownSlotError(SlotError):
    """Raised when a form is asked about a slot it does not own."""
