"""Tests for profile validation and the model/wire conversions."""

import pytest

from grant_matcher.core.domain_models import (
    DEFAULT_PROFILE_VALUES,
    REFER_TO_DOCUMENT,
    AnalyzedProgramSummary,
    ExtractedGrantDetails,
    GrantProgramDetails,
    MatchedGrantProgram,
    SMEProfile,
    profile_values_by_attribute,
    validate_profile,
)
from grant_matcher.core.errors import ProfileValidationError

from conftest import make_details, make_match


class TestProfileValidation:
    def test_defaults_are_valid(self):
        assert validate_profile(DEFAULT_PROFILE_VALUES) == {}

    def test_form_strings_are_coerced(self):
        profile = SMEProfile.from_form({
            "businessType": "Retail",
            "industry": "Food",
            "location": "Penang",
            "revenue": "250,000",
            "employeeCount": "12",
            "businessAge": "3",
            "fundingStage": "None",
            "previousFundingAmount": "0",
            "purposeOfFunding": "Expansion",
        })

        assert profile.revenue == 250000.0
        assert profile.employee_count == 12
        assert profile.business_age == 3
        assert profile.is_known_funding_stage

    def test_free_text_funding_stage_is_accepted(self):
        values = dict(DEFAULT_PROFILE_VALUES, funding_stage="Angel round")
        profile = SMEProfile.from_form(values)
        assert profile.funding_stage == "Angel round"
        assert not profile.is_known_funding_stage

    def test_per_field_messages(self):
        values = dict(
            DEFAULT_PROFILE_VALUES,
            business_type="  ",
            revenue=-1,
            employee_count=0,
            business_age="two",
            previous_funding_amount=-5,
        )

        errors = validate_profile(values)

        assert errors == {
            "business_type": "Business type is required.",
            "revenue": "Annual revenue must be a positive number.",
            "employee_count": "Must have at least one employee.",
            "business_age": "Business age must be a positive number.",
            "previous_funding_amount": "Previous funding amount must be a positive number.",
        }

    def test_fractional_employee_count_rejected(self):
        errors = validate_profile(dict(DEFAULT_PROFILE_VALUES, employee_count=2.5))
        assert "employee_count" in errors

    @pytest.mark.parametrize("bad", ["nan", "inf", "-inf", float("nan"), float("inf")])
    def test_non_finite_numbers_rejected(self, bad):
        values = dict(DEFAULT_PROFILE_VALUES, revenue=bad, previous_funding_amount=bad, business_age=bad)

        errors = validate_profile(values)

        assert set(errors) == {"revenue", "previous_funding_amount", "business_age"}

    def test_camel_case_keys_renamed_to_attributes(self):
        renamed = profile_values_by_attribute({"employeeCount": 3, "industry": "Food", "extra": 1})
        assert renamed == {"employee_count": 3, "industry": "Food", "extra": 1}

    def test_missing_fields_reported(self):
        errors = validate_profile({})
        assert set(errors) == set(DEFAULT_PROFILE_VALUES)

    def test_from_form_raises_with_field_errors(self):
        with pytest.raises(ProfileValidationError) as exc_info:
            SMEProfile.from_form(dict(DEFAULT_PROFILE_VALUES, location=""))

        assert exc_info.value.field_errors == {
            "location": "Location (e.g., state or city) is required."
        }

    def test_profile_is_immutable(self, profile):
        with pytest.raises(Exception):
            profile.industry = "Other"

    def test_to_dict_uses_wire_keys(self, profile):
        data = profile.to_dict()
        assert data["businessType"] == "Technology"
        assert data["employeeCount"] == 10
        assert data["purposeOfFunding"] == "Product Development"
        assert len(data) == 9


class TestExtractedGrantDetails:
    def test_round_trip_keys(self):
        details = make_details()
        assert ExtractedGrantDetails.from_dict(details.to_dict()) == details

    def test_missing_field_raises(self):
        data = make_details().to_dict()
        del data["contactInformation"]
        with pytest.raises(ValueError, match="contactInformation"):
            ExtractedGrantDetails.from_dict(data)

    def test_non_string_field_raises(self):
        data = dict(make_details().to_dict(), fundingAmount=5000)
        with pytest.raises(ValueError, match="fundingAmount"):
            ExtractedGrantDetails.from_dict(data)

    def test_catalog_form_renames_deadline(self):
        record = GrantProgramDetails.from_extracted(
            make_details(deadline="31 March 2025"), sectors="Various", location="Nationwide"
        )
        assert record.application_deadline == "31 March 2025"
        assert record.to_dict()["applicationDeadline"] == "31 March 2025"


class TestMatchedGrantProgram:
    def test_from_dict(self):
        match = MatchedGrantProgram.from_dict({
            "programName": "TDF",
            "matchScore": 87,
            "eligibility": "Malaysian-owned",
            "fundingAmount": "Up to RM500,000",
            "applicationDeadline": "Open",
            "sectors": "Technology",
            "location": "Nationwide",
        })
        assert match.match_score == 87.0
        assert match.to_dict()["programName"] == "TDF"

    def test_score_not_clamped(self):
        data = dict(make_match("A", 0).to_dict(), matchScore=140)
        assert MatchedGrantProgram.from_dict(data).match_score == 140.0

    def test_missing_key_raises(self):
        data = make_match("A", 10).to_dict()
        del data["sectors"]
        with pytest.raises(KeyError):
            MatchedGrantProgram.from_dict(data)


class TestAnalyzedProgramSummary:
    def test_without_extraction_refers_to_document(self):
        summary = AnalyzedProgramSummary.from_match(make_match("A", 50))
        assert summary.description == REFER_TO_DOCUMENT
        assert summary.application_process == REFER_TO_DOCUMENT
        assert summary.contact_information == REFER_TO_DOCUMENT

    def test_with_extraction_uses_real_details(self):
        details = make_details("A", application_process="Email the form.")
        summary = AnalyzedProgramSummary.from_match(make_match("A", 50), details)
        assert summary.application_process == "Email the form."
        assert summary.eligibility_criteria == "Registered SMEs"
