"""
Shared fixtures and stub collaborators.

The stubs stand in for the model-backed services so the pipeline and
controller can be exercised without network calls.
"""

import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from grant_matcher.core.domain_models import (
    ExtractedGrantDetails,
    GrantProgramDetails,
    MatchedGrantProgram,
    SMEProfile,
)
from grant_matcher.core.errors import ExtractionError, MatchingError
from grant_matcher.ingest.document_store import DocumentStore, GrantDocument


def make_details(program_name: str = "Test Grant", **overrides) -> ExtractedGrantDetails:
    values = {
        "program_name": program_name,
        "eligibility_criteria": "Registered SMEs with at least one employee.",
        "funding_amount": "Up to RM100,000",
        "deadline": "2025-06-30",
        "description": "Supports product development.",
        "application_process": "Apply online.",
        "contact_information": "grants@example.org",
    }
    values.update(overrides)
    return ExtractedGrantDetails(**values)


def make_match(program_name: str, score: float) -> MatchedGrantProgram:
    return MatchedGrantProgram(
        program_name=program_name,
        match_score=score,
        eligibility="Registered SMEs",
        funding_amount="Up to RM100,000",
        application_deadline="2025-06-30",
        sectors="Various",
        location="Nationwide",
    )


class StubExtractor:
    """Deterministic extractor keyed by file name."""

    def __init__(
        self,
        details_by_file: Optional[Dict[str, ExtractedGrantDetails]] = None,
        failing: Iterable[str] = (),
    ):
        self.details_by_file = details_by_file or {}
        self.failing = set(failing)
        self.calls: List[str] = []

    def extract(self, document: GrantDocument) -> ExtractedGrantDetails:
        self.calls.append(document.filename)
        if document.filename in self.failing:
            raise ExtractionError(document.filename, "model error")
        if document.filename in self.details_by_file:
            return self.details_by_file[document.filename]
        return make_details(program_name=Path(document.filename).stem)


class StubMatcher:
    """Returns fixed scores, one per catalog entry in order."""

    def __init__(self, scores: Optional[List[float]] = None, error: Optional[Exception] = None):
        self.scores = scores
        self.error = error
        self.calls: List = []

    def match(self, profile: SMEProfile, grants: List[GrantProgramDetails]) -> List[MatchedGrantProgram]:
        self.calls.append((profile, list(grants)))
        if self.error:
            raise self.error
        scores = self.scores if self.scores is not None else [50.0] * len(grants)
        return [make_match(g.program_name, s) for g, s in zip(grants, scores)]


def write_pdfs(directory: Path, names: Iterable[str]) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"%PDF-1.4 fake " + name.encode())


@pytest.fixture
def grants_dir(tmp_path) -> Path:
    path = tmp_path / "grants"
    path.mkdir()
    return path


@pytest.fixture
def store(grants_dir) -> DocumentStore:
    return DocumentStore(grants_dir)


@pytest.fixture
def profile() -> SMEProfile:
    return SMEProfile.defaults()


@pytest.fixture
def matching_error() -> MatchingError:
    return MatchingError("Grant matching failed: APIError: boom")
