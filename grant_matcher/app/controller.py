"""
Session state machine for one user's match flow.

    initial → profile-capture → matching → results
                    ↑               │
                    └── on failure ─┘

``reset()`` returns to initial from anywhere, discarding session state.
Nothing is retried automatically; after a failure the user resubmits.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from grant_matcher.core import config
from grant_matcher.core.domain_models import (
    AnalyzedProgramSummary,
    ExtractedGrantDetails,
    MatchedGrantProgram,
    SMEProfile,
    validate_profile,
)
from grant_matcher.core.errors import InvalidTransitionError, ProfileValidationError
from grant_matcher.pipeline.match_pipeline import MatchPipeline


logger = logging.getLogger(__name__)


class SessionState(Enum):
    INITIAL = "initial"
    PROFILE_CAPTURE = "profile-capture"
    MATCHING = "matching"
    RESULTS = "results"


MATCH_FAILED_MESSAGE = (
    "An error occurred while finding matches. Please check the grant documents "
    "in the `{grants_dir}` folder and try again."
)


def rank_matches(matches: List[MatchedGrantProgram]) -> List[MatchedGrantProgram]:
    """Sort by score, highest first. Ties keep the model's order."""
    return sorted(matches, key=lambda m: m.match_score, reverse=True)


def build_analyzed_details(
    matches: List[MatchedGrantProgram],
    extracted: List[ExtractedGrantDetails],
) -> Dict[str, AnalyzedProgramSummary]:
    """Detail records keyed by program name, enriched from extraction where names line up."""
    by_name = {details.program_name: details for details in extracted}
    return {
        match.program_name: AnalyzedProgramSummary.from_match(match, by_name.get(match.program_name))
        for match in matches
    }


class MatchController:
    """
    Owns profile, results and error state for one session.

    Usage:
        controller = MatchController(MatchPipeline(...))
        controller.start()
        controller.submit_profile(form_values)
        if controller.state is SessionState.RESULTS:
            show(controller.matches)
    """

    def __init__(
        self,
        pipeline: MatchPipeline,
        grants_dir: Optional[str] = None,
        on_state_change: Optional[Callable[[SessionState, SessionState], None]] = None,
    ):
        self.pipeline = pipeline
        self.grants_dir = grants_dir or config.GRANTS_DIR
        self.on_state_change = on_state_change

        self.state = SessionState.INITIAL
        self.profile: Optional[SMEProfile] = None
        self.matches: Optional[List[MatchedGrantProgram]] = None
        self.analyzed_details: Dict[str, AnalyzedProgramSummary] = {}
        self.field_errors: Dict[str, str] = {}
        self.error: Optional[str] = None

    def _require(self, *allowed: SessionState) -> None:
        if self.state not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise InvalidTransitionError(
                f"Action not allowed in state '{self.state.value}' (expected: {names})"
            )

    def _transition(self, new_state: SessionState) -> None:
        old_state = self.state
        self.state = new_state
        logger.debug(f"Session state: {old_state.value} → {new_state.value}")
        if self.on_state_change:
            self.on_state_change(old_state, new_state)

    def start(self) -> None:
        self._require(SessionState.INITIAL)
        self._transition(SessionState.PROFILE_CAPTURE)

    def back(self) -> None:
        self._require(SessionState.PROFILE_CAPTURE)
        self._transition(SessionState.INITIAL)

    def submit_profile(self, profile: Union[SMEProfile, Mapping[str, Any]]) -> bool:
        """
        Submit a profile and run the match request.

        Form mappings and profile instances are validated first; invalid
        fields stay in profile-capture with per-field messages and never
        reach the pipeline.

        Returns:
            True if results are available, False on validation or match failure
        """
        self._require(SessionState.PROFILE_CAPTURE)

        try:
            if isinstance(profile, SMEProfile):
                errors = validate_profile(profile.to_dict())
                if errors:
                    raise ProfileValidationError(errors)
            else:
                profile = SMEProfile.from_form(profile)
        except ProfileValidationError as e:
            self.field_errors = e.field_errors
            logger.info(f"Profile rejected: {e}")
            return False

        self.field_errors = {}
        self.profile = profile
        self.error = None
        self._transition(SessionState.MATCHING)

        try:
            run = self.pipeline.run(profile)
        except Exception as e:
            logger.error(f"Matching failed: {e}")
            self.error = MATCH_FAILED_MESSAGE.format(grants_dir=self.grants_dir)
            self._transition(SessionState.PROFILE_CAPTURE)
            return False

        self.matches = rank_matches(run.matches)
        self.analyzed_details = build_analyzed_details(self.matches, run.extracted)
        self._transition(SessionState.RESULTS)
        return True

    def reset(self) -> None:
        """Discard the session and return to initial."""
        self.profile = None
        self.matches = None
        self.analyzed_details = {}
        self.field_errors = {}
        self.error = None
        if self.state is not SessionState.INITIAL:
            self._transition(SessionState.INITIAL)
