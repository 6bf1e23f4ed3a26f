"""
Domain models for SME grant matching.

Python attributes are snake_case. The LLM contracts use camelCase keys, so
every model carries ``from_dict`` / ``to_dict`` helpers that translate between
the two.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import ProfileValidationError


FUNDING_STAGES = ["None", "Pre-Seed", "Seed", "Series A", "Series B+", "Growth"]

REFER_TO_DOCUMENT = "Please refer to the original document."

# Questionnaire defaults
DEFAULT_PROFILE_VALUES: Dict[str, Any] = {
    "business_type": "Technology",
    "industry": "Software",
    "location": "Kuala Lumpur",
    "revenue": 500000,
    "employee_count": 10,
    "business_age": 2,
    "funding_stage": "Seed",
    "previous_funding_amount": 0,
    "purpose_of_funding": "Product Development",
}

# (attribute, wire key, kind, message)
_PROFILE_FIELDS: List[Tuple[str, str, str, str]] = [
    ("business_type", "businessType", "text", "Business type is required."),
    ("industry", "industry", "text", "Industry is required."),
    ("location", "location", "text", "Location (e.g., state or city) is required."),
    ("revenue", "revenue", "amount", "Annual revenue must be a positive number."),
    ("employee_count", "employeeCount", "headcount", "Must have at least one employee."),
    ("business_age", "businessAge", "count", "Business age must be a positive number."),
    ("funding_stage", "fundingStage", "text", "Funding stage is required."),
    ("previous_funding_amount", "previousFundingAmount", "amount",
     "Previous funding amount must be a positive number."),
    ("purpose_of_funding", "purposeOfFunding", "text", "Please specify the purpose of funding."),
]


def _to_number(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip().replace(",", "")
    if not text:
        raise ValueError("empty")
    return float(text)


def _to_finite(value: Any) -> float:
    number = _to_number(value)
    if not math.isfinite(number):
        raise ValueError(f"not finite: {value!r}")
    return number


def _to_whole(value: Any) -> int:
    number = _to_finite(value)
    if isinstance(number, float):
        if not number.is_integer():
            raise ValueError(f"not an integer: {value!r}")
        return int(number)
    return number


def _lookup(values: Mapping[str, Any], attr: str, wire_key: str) -> Any:
    if attr in values:
        return values[attr]
    return values.get(wire_key)


def profile_values_by_attribute(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename camelCase profile keys to attribute names; other keys pass through."""
    attrs = {wire_key: attr for attr, wire_key, _, _ in _PROFILE_FIELDS}
    return {attrs.get(key, key): value for key, value in values.items()}


def clean_profile_values(values: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """
    Coerce raw form values and collect per-field validation messages.

    Accepts snake_case or camelCase keys. Numeric fields may arrive as
    strings (form input) and are coerced before range checks.

    Returns:
        (cleaned values keyed by attribute, {attribute: message})
    """
    cleaned: Dict[str, Any] = {}
    errors: Dict[str, str] = {}

    for attr, wire_key, kind, message in _PROFILE_FIELDS:
        raw = _lookup(values, attr, wire_key)
        try:
            if kind == "text":
                value = str(raw).strip() if raw is not None else ""
                if not value:
                    raise ValueError("required")
            elif kind == "amount":
                value = _to_finite(raw)
                if value < 0:
                    raise ValueError("negative")
            elif kind == "headcount":
                value = _to_whole(raw)
                if value < 1:
                    raise ValueError("below one")
            else:
                value = _to_whole(raw)
                if value < 0:
                    raise ValueError("negative")
        except (TypeError, ValueError):
            errors[attr] = message
            continue
        cleaned[attr] = value

    return cleaned, errors


def validate_profile(values: Mapping[str, Any]) -> Dict[str, str]:
    """Return {field: message} for every invalid profile field (empty if valid)."""
    _, errors = clean_profile_values(values)
    return errors


@dataclass(frozen=True)
class SMEProfile:
    """
    Business profile captured from the questionnaire.

    Immutable once submitted; one profile is matched per request.
    """
    business_type: str
    industry: str
    location: str
    revenue: float
    employee_count: int
    business_age: int
    funding_stage: str
    previous_funding_amount: float
    purpose_of_funding: str

    @classmethod
    def from_form(cls, values: Mapping[str, Any]) -> "SMEProfile":
        """
        Build a profile from raw form values.

        Raises:
            ProfileValidationError: if any field fails validation
        """
        cleaned, errors = clean_profile_values(values)
        if errors:
            raise ProfileValidationError(errors)
        return cls(**cleaned)

    @classmethod
    def defaults(cls) -> "SMEProfile":
        return cls(**DEFAULT_PROFILE_VALUES)

    @property
    def is_known_funding_stage(self) -> bool:
        return self.funding_stage in FUNDING_STAGES

    def to_dict(self) -> Dict[str, Any]:
        return {
            wire_key: getattr(self, attr)
            for attr, wire_key, _, _ in _PROFILE_FIELDS
        }


@dataclass
class ExtractedGrantDetails:
    """
    Raw grant details as returned by the extraction model.

    All fields are free text; currency and dates stay human-readable.
    """
    program_name: str
    eligibility_criteria: str
    funding_amount: str
    deadline: str
    description: str
    application_process: str
    contact_information: str

    _WIRE_KEYS = {
        "program_name": "programName",
        "eligibility_criteria": "eligibilityCriteria",
        "funding_amount": "fundingAmount",
        "deadline": "deadline",
        "description": "description",
        "application_process": "applicationProcess",
        "contact_information": "contactInformation",
    }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtractedGrantDetails":
        """
        Parse a model response.

        Raises:
            ValueError: if a field is missing or not a string
        """
        values = {}
        for attr, wire_key in cls._WIRE_KEYS.items():
            value = data.get(wire_key)
            if not isinstance(value, str):
                raise ValueError(f"Field '{wire_key}' missing or not a string")
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return {wire_key: getattr(self, attr) for attr, wire_key in self._WIRE_KEYS.items()}


@dataclass
class GrantProgramDetails:
    """Catalog record sent to the matching model."""
    program_name: str
    eligibility_criteria: str
    funding_amount: str
    application_deadline: str
    sectors: str
    location: str

    @classmethod
    def from_extracted(
        cls,
        details: ExtractedGrantDetails,
        sectors: str,
        location: str,
    ) -> "GrantProgramDetails":
        return cls(
            program_name=details.program_name,
            eligibility_criteria=details.eligibility_criteria,
            funding_amount=details.funding_amount,
            application_deadline=details.deadline,
            sectors=sectors,
            location=location,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "programName": self.program_name,
            "eligibilityCriteria": self.eligibility_criteria,
            "fundingAmount": self.funding_amount,
            "applicationDeadline": self.application_deadline,
            "sectors": self.sectors,
            "location": self.location,
        }


@dataclass
class MatchedGrantProgram:
    """A ranked match. match_score is meant to be 0-100 but is not clamped."""
    program_name: str
    match_score: float
    eligibility: str
    funding_amount: str
    application_deadline: str
    sectors: str
    location: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchedGrantProgram":
        """
        Raises:
            KeyError: if a field is missing
            ValueError: if matchScore is not numeric
        """
        score = data["matchScore"]
        if isinstance(score, bool):
            raise ValueError("matchScore must be a number")
        return cls(
            program_name=str(data["programName"]),
            match_score=float(score),
            eligibility=str(data["eligibility"]),
            funding_amount=str(data["fundingAmount"]),
            application_deadline=str(data["applicationDeadline"]),
            sectors=str(data["sectors"]),
            location=str(data["location"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "programName": self.program_name,
            "matchScore": self.match_score,
            "eligibility": self.eligibility,
            "fundingAmount": self.funding_amount,
            "applicationDeadline": self.application_deadline,
            "sectors": self.sectors,
            "location": self.location,
        }


@dataclass
class AnalyzedProgramSummary:
    """Detail view for one matched program, shown alongside the results."""
    program_name: str
    eligibility_criteria: str
    funding_amount: str
    deadline: str
    description: str = REFER_TO_DOCUMENT
    application_process: str = REFER_TO_DOCUMENT
    contact_information: str = REFER_TO_DOCUMENT

    @classmethod
    def from_match(
        cls,
        match: MatchedGrantProgram,
        extracted: Optional[ExtractedGrantDetails] = None,
    ) -> "AnalyzedProgramSummary":
        summary = cls(
            program_name=match.program_name,
            eligibility_criteria=match.eligibility,
            funding_amount=match.funding_amount,
            deadline=match.application_deadline,
        )
        if extracted is not None:
            summary.description = extracted.description or REFER_TO_DOCUMENT
            summary.application_process = extracted.application_process or REFER_TO_DOCUMENT
            summary.contact_information = extracted.contact_information or REFER_TO_DOCUMENT
        return summary
