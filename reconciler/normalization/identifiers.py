"""Canonical forms for device identifiers.

Every function here is total and idempotent: any input (including ``None``)
yields a string, and normalizing an already-normalized value is a no-op.
"""

import re

IMEI_MAX_LENGTH = 15
REGISTRATION_IMEI_MAX_LENGTH = 20
SERIAL_MAX_LENGTH = 20

_NON_DIGIT = re.compile(r"[^0-9]")
_NON_ALPHANUMERIC = re.compile(r"[^0-9A-Za-z]")
_WHITESPACE = re.compile(r"\s+")


def normalize_imei(raw: str | None, max_length: int = IMEI_MAX_LENGTH) -> str:
    """Keep only ASCII digits and truncate to ``max_length``."""
    if not raw:
        return ""
    return _NON_DIGIT.sub("", str(raw))[: max(max_length, 0)]


def normalize_serial(raw: str | None, max_length: int = SERIAL_MAX_LENGTH) -> str:
    """Keep only ASCII letters and digits, upper-cased, truncated to ``max_length``."""
    if not raw:
        return ""
    return _NON_ALPHANUMERIC.sub("", str(raw)).upper()[: max(max_length, 0)]


def normalize_spec_value(raw: str | None) -> str:
    """Collapse a RAM/storage figure such as ``"8 gb"`` to ``"8GB"``."""
    if not raw:
        return ""
    return _WHITESPACE.sub("", str(raw)).upper()
