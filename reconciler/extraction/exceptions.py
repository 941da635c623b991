class ExtractionError(Exception):
    """Raised when the image-analysis collaborator cannot produce a result."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the vision provider call fails due to network/infrastructure issues."""


class ExtractionTimeoutError(ExtractionError):
    """Raised when the vision provider does not answer within the configured timeout."""


class ExtractionResponseError(ExtractionError):
    """Raised when the provider answers with something that is not an extraction object."""
