"""
Error types raised by the pipeline.

Transport failures are not wrapped: callers see the original
``requests.RequestException``.
"""


class EpidataError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(EpidataError, ValueError):
    """A required column or argument is missing or invalid."""


class ResponseFormatError(EpidataError, ValueError):
    """The API response (or a week code inside it) could not be parsed."""


class PersistenceConflict(EpidataError, FileExistsError):
    """The output file already exists and was left untouched."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Refusing to overwrite existing file: {path}")
