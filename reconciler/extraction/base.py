from abc import ABC, abstractmethod

from reconciler.extraction.models import ExtractionKind, ExtractionResult, ImagePayload
from reconciler.normalization.models import IdentifierSet


class BaseIdentifierExtractor(ABC):
    """Contract for the image-analysis collaborator."""

    @abstractmethod
    async def extract(
        self,
        image: ImagePayload,
        expected_kind: ExtractionKind,
        hint: IdentifierSet | None = None,
    ) -> ExtractionResult:
        """Read device identifiers out of a screenshot.

        Args:
            image: Screenshot to analyze.
            expected_kind: What the screenshot is expected to show.
            hint: Values already typed by the operator, if any.

        Returns:
            ExtractionResult with normalized identifiers.

        Raises:
            ExtractionError: on any failure, including timeouts. Implementations
                must not hang indefinitely.
        """
