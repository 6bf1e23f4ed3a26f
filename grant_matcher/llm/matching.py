"""
SME ↔ grant matching via LLM.

The model scores and ranks the catalog against the profile. Ranking and
scoring are model-internal; the caller gets back whatever list the model
returns, which may omit clearly unsuitable grants.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from grant_matcher.core.domain_models import GrantProgramDetails, MatchedGrantProgram, SMEProfile
from grant_matcher.core.errors import MatchingError
from grant_matcher.core.schemas import GRANT_MATCH_SCHEMA
from grant_matcher.llm.client import LLMClient


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert in matching SMEs with suitable grant programs. Based on the SME's "
    "profile and the details of the grant programs, determine the best matches and rank "
    "them by relevance."
)

OUTPUT_INSTRUCTIONS = (
    "Return a JSON object whose \"matches\" array holds the matched grant programs, ranked "
    "by relevance (matchScore, 0-100), including program name, eligibility, funding amount, "
    "application deadline, sectors and location."
)


def format_grant_block(grant: GrantProgramDetails) -> str:
    return (
        f"  Program Name: {grant.program_name}\n"
        f"  Eligibility Criteria: {grant.eligibility_criteria}\n"
        f"  Funding Amount: {grant.funding_amount}\n"
        f"  Application Deadline: {grant.application_deadline}\n"
        f"  Sectors: {grant.sectors}\n"
        f"  Location: {grant.location}"
    )


def build_user_prompt(profile: SMEProfile, grants: Sequence[GrantProgramDetails]) -> str:
    grant_blocks = "\n\n".join(format_grant_block(g) for g in grants)
    return (
        f"SME Profile:\n{json.dumps(profile.to_dict(), indent=2)}\n\n"
        f"Grant Programs:\n{grant_blocks}\n\n"
        f"{OUTPUT_INSTRUCTIONS}"
    )


class GrantMatchingService:
    """Rank a grant catalog against an SME profile."""

    def __init__(self, llm: Optional[LLMClient] = None):
        self.llm = llm or LLMClient()

    def build_messages(
        self,
        profile: SMEProfile,
        grants: Sequence[GrantProgramDetails],
    ) -> List[Dict[str, Any]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_user_prompt(profile, grants)},
        ]

    def match(
        self,
        profile: SMEProfile,
        grants: Sequence[GrantProgramDetails],
    ) -> List[MatchedGrantProgram]:
        """
        Score grants against the profile.

        Args:
            profile: Submitted SME profile
            grants: Catalog to rank (may be empty)

        Returns:
            Matches in the model's order

        Raises:
            MatchingError: On any failure; no partial output
        """
        logger.info(f"Matching profile ({profile.industry}, {profile.location}) against {len(grants)} grants")

        try:
            data = self.llm.chat_json(
                self.build_messages(profile, grants),
                "grant_matches",
                GRANT_MATCH_SCHEMA,
            )
            matches = [MatchedGrantProgram.from_dict(item) for item in data["matches"]]
        except Exception as e:
            raise MatchingError(f"Grant matching failed: {type(e).__name__}: {e}") from e

        logger.info(f"Model returned {len(matches)} matches")
        return matches
