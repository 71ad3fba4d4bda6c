from __future__ import annotations


class ClassificationError(Exception):
    """Base class for every failure the classifier knows how to report."""


class InputError(ClassificationError):
    """Blank email text was submitted."""


class TransportError(ClassificationError):
    """The remote service could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(ClassificationError):
    """The remote reply did not contain the expected JSON verdict."""


class ConfigurationError(ClassificationError):
    """Remote mode requested without a usable API key, or bad settings."""
