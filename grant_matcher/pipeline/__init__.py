"""
Catalog building and the end-to-end match pipeline.
"""

from .catalog_builder import CatalogBuildReport, GrantCatalogBuilder
from .heuristics import RegexSectorLocationHeuristic, SectorLocationHeuristic
from .match_pipeline import MatchPipeline, MatchRun

__all__ = [
    'CatalogBuildReport',
    'GrantCatalogBuilder',
    'RegexSectorLocationHeuristic',
    'SectorLocationHeuristic',
    'MatchPipeline',
    'MatchRun',
]
