"""Text rendering and file export of match results."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from grant_matcher.core.domain_models import AnalyzedProgramSummary, MatchedGrantProgram


logger = logging.getLogger(__name__)

NO_MATCHES_MESSAGE = "We couldn't find any suitable grant programs based on your profile."

EXPORT_COLUMNS = [
    "programName",
    "matchScore",
    "eligibility",
    "fundingAmount",
    "applicationDeadline",
    "sectors",
    "location",
]


def format_results(
    matches: List[MatchedGrantProgram],
    details: Optional[Dict[str, AnalyzedProgramSummary]] = None,
) -> str:
    if not matches:
        return NO_MATCHES_MESSAGE

    details = details or {}
    lines = ["Here are the top grant programs matched for your business:", ""]

    for rank, match in enumerate(matches, 1):
        lines.append(f"{rank}. {match.program_name}  (match score: {match.match_score:.0f})")
        lines.append(f"   Funding:   {match.funding_amount}")
        lines.append(f"   Deadline:  {match.application_deadline}")
        lines.append(f"   Sectors:   {match.sectors}")
        lines.append(f"   Location:  {match.location}")
        lines.append(f"   Eligibility: {match.eligibility}")

        summary = details.get(match.program_name)
        if summary:
            lines.append(f"   About:     {summary.description}")
            lines.append(f"   How to apply: {summary.application_process}")
            lines.append(f"   Contact:   {summary.contact_information}")
        lines.append("")

    return "\n".join(lines).rstrip()


def export_matches(matches: List[MatchedGrantProgram], output_path: str) -> Path:
    """
    Write matches to .xlsx (or .csv by extension).

    Returns:
        Path written
    """
    path = Path(output_path)
    df = pd.DataFrame([m.to_dict() for m in matches], columns=EXPORT_COLUMNS)

    if path.suffix.lower() == ".csv":
        df.to_csv(path, index=False)
    else:
        df.to_excel(path, index=False, sheet_name="Matches")

    logger.info(f"Exported {len(matches)} matches to {path}")
    return path
