"""Custom exceptions for image scrapbook generation."""


class ScrapbookError(Exception):
    """Base exception for all scrapbook-related errors."""

    pass


class MalformedSpecError(ScrapbookError):
    """Raised when a value spec or label has invalid syntax."""

    pass


class ExecutionError(ScrapbookError):
    """Raised when the docker CLI cannot be run or exits with an error."""

    pass


class ParseError(ScrapbookError):
    """Raised when docker output cannot be parsed into image records."""

    pass


class ImageNotFoundError(ScrapbookError):
    """Raised when no local image matches a value spec."""

    pass


class UnknownHandlerError(ScrapbookError):
    """Raised when a handler name does not map to an image field."""

    pass


class KeyConflictError(ScrapbookError):
    """Raised when a dotted key would descend through an existing value."""

    pass


class OutputError(ScrapbookError):
    """Raised when the scrapbook cannot be written to its destination."""

    pass
