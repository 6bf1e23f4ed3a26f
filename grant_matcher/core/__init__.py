"""
Core data models, schemas, configuration and errors.
"""

from .domain_models import (
    AnalyzedProgramSummary,
    ExtractedGrantDetails,
    GrantProgramDetails,
    MatchedGrantProgram,
    SMEProfile,
    profile_values_by_attribute,
    validate_profile,
)
from .errors import (
    ConfigurationError,
    ExtractionError,
    GrantMatcherError,
    InvalidTransitionError,
    MatchingError,
    ProfileValidationError,
)

__all__ = [
    "AnalyzedProgramSummary",
    "ExtractedGrantDetails",
    "GrantProgramDetails",
    "MatchedGrantProgram",
    "SMEProfile",
    "profile_values_by_attribute",
    "validate_profile",
    "ConfigurationError",
    "ExtractionError",
    "GrantMatcherError",
    "InvalidTransitionError",
    "MatchingError",
    "ProfileValidationError",
]
