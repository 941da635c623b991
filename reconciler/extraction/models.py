from dataclasses import dataclass
from typing import Literal

from reconciler.normalization.models import DeviceSpecs, IdentifierSet

ExtractionKind = Literal["imei", "serial", "specs"]
EXTRACTION_KINDS: frozenset[str] = frozenset({"imei", "serial", "specs"})


@dataclass(frozen=True)
class ImagePayload:
    """Image ready to be sent to a vision provider."""

    data_url: str
    mime: str
    name: str = ""


@dataclass(frozen=True)
class ExtractionResult:
    """Output of one successful analysis call."""

    kind: ExtractionKind
    identifiers: IdentifierSet
    imei_count: int = 0
    raw_errors: tuple[str, ...] = ()
    specs: DeviceSpecs | None = None
