"""
Ingest → normalize → rank, as one request.

The catalog is rebuilt on every run; nothing is cached between requests.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from grant_matcher.core.domain_models import (
    ExtractedGrantDetails,
    GrantProgramDetails,
    MatchedGrantProgram,
    SMEProfile,
)
from grant_matcher.llm.matching import GrantMatchingService
from grant_matcher.pipeline.catalog_builder import GrantCatalogBuilder


logger = logging.getLogger(__name__)


@dataclass
class MatchRun:
    """Everything produced by one pipeline run."""
    matches: List[MatchedGrantProgram]
    catalog: List[GrantProgramDetails]
    extracted: List[ExtractedGrantDetails] = field(default_factory=list)
    used_fallback: bool = False


class MatchPipeline:
    """Compose the catalog builder and the matching service."""

    def __init__(
        self,
        builder: Optional[GrantCatalogBuilder] = None,
        matcher: Optional[GrantMatchingService] = None,
        fallback_grants: Optional[Sequence[GrantProgramDetails]] = None,
    ):
        """
        Args:
            builder: Catalog builder stage
            matcher: Matching stage (anything with ``match(profile, grants)``)
            fallback_grants: Catalog used when the store yields nothing
        """
        self.builder = builder or GrantCatalogBuilder()
        self.matcher = matcher or GrantMatchingService()
        self.fallback_grants = list(fallback_grants) if fallback_grants else []

    def build_catalog(self) -> MatchRun:
        catalog, extracted = self.builder.build_with_details()

        if catalog:
            return MatchRun(matches=[], catalog=catalog, extracted=extracted)

        if self.fallback_grants:
            logger.warning(f"Catalog is empty, using {len(self.fallback_grants)} fallback grants")
            return MatchRun(matches=[], catalog=list(self.fallback_grants), used_fallback=True)

        logger.warning("Catalog is empty, matching against no grants")
        return MatchRun(matches=[], catalog=[])

    def run(self, profile: SMEProfile) -> MatchRun:
        """
        Build the catalog and match the profile against it.

        Raises:
            MatchingError: If the matching stage fails
        """
        run = self.build_catalog()
        run.matches = self.matcher.match(profile, run.catalog)
        return run
