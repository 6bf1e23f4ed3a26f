"""
Derive catalog ``sectors`` / ``location`` from an extracted description.

The default heuristic only detects whether a description *mentions* a
sector or a location; it does not extract the value. It sits behind
SectorLocationHeuristic so a real classifier can replace it without touching
the catalog builder.
"""

import re
from typing import Tuple

from grant_matcher.core.domain_models import ExtractedGrantDetails


EXTRACTED_FROM_DESCRIPTION = "Extracted from description"
DEFAULT_SECTORS = "Various"
DEFAULT_LOCATION = "Nationwide"


class SectorLocationHeuristic:
    """Interface: map extracted details to (sectors, location)."""

    def classify(self, details: ExtractedGrantDetails) -> Tuple[str, str]:
        raise NotImplementedError


class RegexSectorLocationHeuristic(SectorLocationHeuristic):
    """Presence check of sector/location words in the description."""

    SECTOR_PATTERN = re.compile(r"sector|industry", re.IGNORECASE)
    LOCATION_PATTERN = re.compile(r"location|state|city", re.IGNORECASE)

    def classify(self, details: ExtractedGrantDetails) -> Tuple[str, str]:
        description = details.description or ""

        if self.SECTOR_PATTERN.search(description):
            sectors = EXTRACTED_FROM_DESCRIPTION
        else:
            sectors = DEFAULT_SECTORS

        if self.LOCATION_PATTERN.search(description):
            location = EXTRACTED_FROM_DESCRIPTION
        else:
            location = DEFAULT_LOCATION

        return sectors, location
