"""Content domain specific exceptions."""


class ContentError(Exception):
    """Base class for content related domain errors."""


class ContentValidationError(ContentError):
    """Raised when a file or text share is rejected before reaching the store."""


class ContentTooLargeError(ContentValidationError):
    """Raised when an upload exceeds the configured maximum size."""


class ContentNotFoundError(ContentError):
    """Raised when the requested content does not exist."""


class ContentExpiredError(ContentNotFoundError):
    """Raised when the requested content existed but its lifetime has ended."""
