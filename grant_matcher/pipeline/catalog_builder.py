"""
Build the grant catalog from the document store.

Per request, every PDF in the store is extracted (sequentially, one model
round trip per document) and normalized to the catalog form. A document
that fails is logged and skipped; the build itself never fails because of
one bad document.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tqdm import tqdm

from grant_matcher.core.domain_models import ExtractedGrantDetails, GrantProgramDetails
from grant_matcher.ingest.document_store import DocumentStore
from grant_matcher.llm.extraction import GrantExtractor
from grant_matcher.pipeline.heuristics import RegexSectorLocationHeuristic, SectorLocationHeuristic


logger = logging.getLogger(__name__)


@dataclass
class CatalogBuildReport:
    """Outcome counts for one catalog build."""
    documents_seen: int = 0
    extracted: int = 0
    failed: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.extracted == 0


class GrantCatalogBuilder:
    """
    Document store → extraction → catalog records.

    Usage:
        builder = GrantCatalogBuilder(DocumentStore("grants"))
        catalog = builder.build()
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        extractor: Optional[GrantExtractor] = None,
        heuristic: Optional[SectorLocationHeuristic] = None,
        show_progress: bool = False,
    ):
        """
        Args:
            store: Document store (default: GRANTS_DIR)
            extractor: Anything with ``extract(document) -> ExtractedGrantDetails``
            heuristic: Sector/location classifier
            show_progress: Show a tqdm progress bar while extracting
        """
        self.store = store or DocumentStore()
        self.extractor = extractor or GrantExtractor()
        self.heuristic = heuristic or RegexSectorLocationHeuristic()
        self.show_progress = show_progress

        self.last_report = CatalogBuildReport()

    def normalize(self, details: ExtractedGrantDetails) -> GrantProgramDetails:
        sectors, location = self.heuristic.classify(details)
        return GrantProgramDetails.from_extracted(details, sectors=sectors, location=location)

    def build_with_details(self) -> Tuple[List[GrantProgramDetails], List[ExtractedGrantDetails]]:
        """
        Build the catalog and return it alongside the raw extractions.

        Returns:
            (catalog records, raw extracted details), both in store order
        """
        paths = self.store.list_documents()
        report = CatalogBuildReport(documents_seen=len(paths))

        catalog: List[GrantProgramDetails] = []
        extracted: List[ExtractedGrantDetails] = []

        iterator = tqdm(paths, desc="Extracting grants", unit="doc") if self.show_progress else paths

        for path in iterator:
            try:
                document = self.store.read(path)
                details = self.extractor.extract(document)
                record = self.normalize(details)
            except Exception as e:
                logger.error(f"Skipping file {path.name} due to analysis error: {e}")
                report.failed.append(path.name)
                continue

            catalog.append(record)
            extracted.append(details)
            report.extracted += 1

        self._log_report(report)

        self.last_report = report
        return catalog, extracted

    def build(self) -> List[GrantProgramDetails]:
        """Build the catalog for the current state of the document store."""
        catalog, _ = self.build_with_details()
        return catalog

    def _log_report(self, report: CatalogBuildReport) -> None:
        logger.info(
            f"Catalog build complete: {report.documents_seen} documents, "
            f"{report.extracted} extracted, {len(report.failed)} failed"
        )
        if report.failed:
            logger.info(f"Failed documents: {', '.join(report.failed)}")
        if report.is_empty:
            logger.warning("No grant documents found or analyzed.")
