"""
Exception hierarchy for the grant matcher.
"""

from typing import Dict


class GrantMatcherError(Exception):
    """Base class for all grant matcher errors."""


class ConfigurationError(GrantMatcherError):
    """Required configuration (e.g. an API key) is missing."""


class ExtractionError(GrantMatcherError):
    """A single grant document could not be turned into structured details."""

    def __init__(self, filename: str, message: str):
        super().__init__(f"{filename}: {message}")
        self.filename = filename


class MatchingError(GrantMatcherError):
    """The matching service failed; fatal to the current request."""


class ProfileValidationError(GrantMatcherError):
    """One or more profile fields are invalid."""

    def __init__(self, field_errors: Dict[str, str]):
        fields = ", ".join(sorted(field_errors))
        super().__init__(f"Invalid profile fields: {fields}")
        self.field_errors = dict(field_errors)


class InvalidTransitionError(GrantMatcherError):
    """A controller action was requested from a state that does not allow it."""
