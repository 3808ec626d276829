"""Custom exceptions for eol-check.

The evaluation engine never raises; these are used by the collaborators
around it (data fetching, configuration, scanners, CLI).
"""


class EolCheckError(Exception):
    """Base exception for all eol-check operations."""


class ConfigurationError(EolCheckError):
    """Raised when configuration validation fails."""


class APIError(EolCheckError):
    """Raised when lifecycle data cannot be fetched from a remote source."""


class ProductNotFoundError(APIError):
    """Raised when a lifecycle source does not know the requested product."""

    def __init__(self, product: str, source: str = "endoflife.date") -> None:
        self.product = product
        self.source = source
        super().__init__(f'Product "{product}" not found on {source} (404)')


class FileProcessingError(EolCheckError):
    """Raised when file operations fail."""
