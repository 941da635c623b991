from reconciler.extraction.base import BaseIdentifierExtractor
from reconciler.extraction.extractor import IdentifierExtractor
from reconciler.extraction.factory import ExtractorFactory
from reconciler.extraction.models import ExtractionResult, ImagePayload

__all__ = [
    "BaseIdentifierExtractor",
    "ExtractionResult",
    "ExtractorFactory",
    "IdentifierExtractor",
    "ImagePayload",
]
