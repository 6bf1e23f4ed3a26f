"""Tests for result rendering, export and the command-line entry point."""

import json

import pandas as pd
import pytest

import run_matcher
from grant_matcher.app.render import NO_MATCHES_MESSAGE, export_matches, format_results
from grant_matcher.core.domain_models import AnalyzedProgramSummary
from grant_matcher.pipeline.catalog_builder import GrantCatalogBuilder
from grant_matcher.pipeline.match_pipeline import MatchPipeline

from conftest import StubExtractor, StubMatcher, make_match, write_pdfs


class TestRender:
    def test_no_matches(self):
        assert format_results([]) == NO_MATCHES_MESSAGE

    def test_ranked_listing(self):
        matches = [make_match("Top Grant", 95), make_match("Other Grant", 40)]
        details = {"Top Grant": AnalyzedProgramSummary.from_match(matches[0])}

        text = format_results(matches, details)

        assert "1. Top Grant  (match score: 95)" in text
        assert "2. Other Grant  (match score: 40)" in text
        assert text.count("How to apply") == 1

    def test_export_csv(self, tmp_path):
        path = export_matches([make_match("A", 77)], str(tmp_path / "out.csv"))

        df = pd.read_csv(path)
        assert list(df["programName"]) == ["A"]
        assert list(df["matchScore"]) == [77.0]

    def test_export_empty_keeps_columns(self, tmp_path):
        path = export_matches([], str(tmp_path / "empty.csv"))
        assert "matchScore" in pd.read_csv(path).columns


@pytest.fixture
def stub_pipeline(monkeypatch, grants_dir, store):
    matcher = StubMatcher(scores=[30, 90])
    pipeline = MatchPipeline(
        builder=GrantCatalogBuilder(store=store, extractor=StubExtractor()),
        matcher=matcher,
    )
    monkeypatch.setattr(run_matcher, "build_pipeline", lambda args: pipeline)
    write_pdfs(grants_dir, ["a.pdf", "b.pdf"])
    return pipeline


class TestMain:
    def test_json_output_sorted(self, stub_pipeline, grants_dir, capsys):
        code = run_matcher.main(["--grants-dir", str(grants_dir), "--json"])

        assert code == 0
        matches = json.loads(capsys.readouterr().out)
        assert [m["programName"] for m in matches] == ["b", "a"]

    def test_catalog_only(self, stub_pipeline, grants_dir, capsys):
        code = run_matcher.main(["--grants-dir", str(grants_dir), "--catalog-only"])

        assert code == 0
        catalog = json.loads(capsys.readouterr().out)
        assert [g["programName"] for g in catalog] == ["a", "b"]
        assert catalog[0]["location"] == "Nationwide"

    def test_profile_file_overrides_defaults(self, stub_pipeline, grants_dir, tmp_path):
        profile_path = tmp_path / "profile.json"
        profile_path.write_text(json.dumps({"industry": "Food", "employeeCount": 3}))

        assert run_matcher.main(["--profile", str(profile_path), "--grants-dir", str(grants_dir)]) == 0

        sent_profile = stub_pipeline.matcher.calls[0][0]
        assert sent_profile.industry == "Food"
        assert sent_profile.employee_count == 3
        assert sent_profile.location == "Kuala Lumpur"

    def test_camel_case_profile_file_replaces_every_default(self, stub_pipeline, grants_dir, tmp_path):
        profile_path = tmp_path / "profile.json"
        profile_path.write_text(json.dumps({
            "businessType": "Retail",
            "employeeCount": 4,
            "businessAge": 7,
            "fundingStage": "Growth",
            "previousFundingAmount": 2500,
            "purposeOfFunding": "Export",
        }))

        assert run_matcher.main(["--profile", str(profile_path), "--grants-dir", str(grants_dir)]) == 0

        sent_profile = stub_pipeline.matcher.calls[0][0]
        assert sent_profile.business_type == "Retail"
        assert sent_profile.employee_count == 4
        assert sent_profile.business_age == 7
        assert sent_profile.funding_stage == "Growth"
        assert sent_profile.previous_funding_amount == 2500
        assert sent_profile.purpose_of_funding == "Export"

    def test_load_profile_values_normalizes_keys(self, tmp_path):
        profile_path = tmp_path / "profile.json"
        profile_path.write_text(json.dumps({"employeeCount": 3}))

        values = run_matcher.load_profile_values(str(profile_path))

        assert values["employee_count"] == 3
        assert "employeeCount" not in values

    def test_invalid_profile_exits_nonzero(self, stub_pipeline, grants_dir, tmp_path, capsys):
        profile_path = tmp_path / "profile.json"
        profile_path.write_text(json.dumps({"revenue": -10}))

        code = run_matcher.main(["--profile", str(profile_path), "--grants-dir", str(grants_dir)])

        assert code == 1
        assert "Annual revenue must be a positive number." in capsys.readouterr().out
        assert stub_pipeline.matcher.calls == []

    def test_matching_failure_exits_nonzero(self, stub_pipeline, grants_dir, matching_error, capsys):
        stub_pipeline.matcher.error = matching_error

        code = run_matcher.main(["--grants-dir", str(grants_dir)])

        assert code == 1
        assert "An error occurred while finding matches." in capsys.readouterr().out

    def test_export(self, stub_pipeline, grants_dir, tmp_path):
        out = tmp_path / "matches.csv"

        assert run_matcher.main(["--grants-dir", str(grants_dir), "--export", str(out)]) == 0
        assert out.exists()
