#!/usr/bin/env python3
"""
SME Grant Matcher

Builds the grant catalog from the PDFs in the grants folder, then ranks the
grants against an SME profile.

Usage:
    # Match the default questionnaire profile against ./grants
    python run_matcher.py

    # Match a profile from JSON, export results
    python run_matcher.py --profile profile.json --export matches.xlsx

    # Only build and print the catalog
    python run_matcher.py --catalog-only

    # Send extracted text instead of the PDF (models without PDF input)
    python run_matcher.py --mode text
"""

import sys
import json
import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from grant_matcher.core import config
from grant_matcher.core.domain_models import DEFAULT_PROFILE_VALUES, profile_values_by_attribute
from grant_matcher.core.errors import GrantMatcherError
from grant_matcher.core.sample_grants import SAMPLE_GRANTS
from grant_matcher.app.controller import MatchController, SessionState
from grant_matcher.app.render import export_matches, format_results
from grant_matcher.ingest.document_store import DocumentStore
from grant_matcher.llm.client import LLMClient
from grant_matcher.llm.extraction import EXTRACTION_MODES, GrantExtractor
from grant_matcher.llm.matching import GrantMatchingService
from grant_matcher.pipeline.catalog_builder import GrantCatalogBuilder
from grant_matcher.pipeline.match_pipeline import MatchPipeline


logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def load_profile_values(filepath: Optional[str]) -> Dict[str, Any]:
    """Questionnaire defaults, overlaid with values from a JSON file if given."""
    values: Dict[str, Any] = dict(DEFAULT_PROFILE_VALUES)

    if not filepath:
        return values

    with Path(filepath).open() as f:
        loaded = json.load(f)

    if not isinstance(loaded, dict):
        raise ValueError(f"Profile file must contain a JSON object: {filepath}")

    values.update(profile_values_by_attribute(loaded))
    logger.info(f"Loaded profile from {filepath}")
    return values


def build_pipeline(args: argparse.Namespace) -> MatchPipeline:
    llm = LLMClient(model=args.model)

    builder = GrantCatalogBuilder(
        store=DocumentStore(args.grants_dir),
        extractor=GrantExtractor(llm=llm, mode=args.mode),
        show_progress=args.progress,
    )

    return MatchPipeline(
        builder=builder,
        matcher=GrantMatchingService(llm=llm),
        fallback_grants=SAMPLE_GRANTS if args.use_sample_fallback else None,
    )


def print_field_errors(field_errors: Dict[str, str]) -> None:
    print("Profile is invalid:")
    for field_name, message in field_errors.items():
        print(f"  - {field_name}: {message}")


def run(args: argparse.Namespace) -> int:
    pipeline = build_pipeline(args)

    if args.catalog_only:
        catalog = pipeline.builder.build()
        print(json.dumps([grant.to_dict() for grant in catalog], indent=2))
        return 0

    profile_values = load_profile_values(args.profile)

    controller = MatchController(pipeline, grants_dir=args.grants_dir)
    controller.start()
    controller.submit_profile(profile_values)

    if controller.field_errors:
        print_field_errors(controller.field_errors)
        return 1

    if controller.state is not SessionState.RESULTS:
        print(controller.error)
        return 1

    matches = controller.matches or []

    if args.json:
        print(json.dumps([m.to_dict() for m in matches], indent=2))
    else:
        print(format_results(matches, controller.analyzed_details))

    if args.export:
        export_matches(matches, args.export)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description='SME Grant Matcher')
    parser.add_argument(
        '--profile', '-p',
        type=str,
        default=None,
        help='JSON file with the SME profile (missing fields use questionnaire defaults)'
    )
    parser.add_argument(
        '--grants-dir', '-g',
        type=str,
        default=config.GRANTS_DIR,
        help='Folder containing grant-program PDFs'
    )
    parser.add_argument(
        '--mode', '-m',
        choices=EXTRACTION_MODES,
        default=config.EXTRACTION_MODE,
        help='Send the PDF itself (file) or locally extracted text (text)'
    )
    parser.add_argument(
        '--model',
        type=str,
        default=config.MODEL,
        help='OpenAI model name'
    )
    parser.add_argument(
        '--use-sample-fallback',
        action='store_true',
        help='Match against built-in sample grants if no documents could be analyzed'
    )
    parser.add_argument(
        '--catalog-only',
        action='store_true',
        help='Build the grant catalog, print it as JSON and exit'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print matches as JSON'
    )
    parser.add_argument(
        '--export', '-e',
        type=str,
        default=None,
        help='Export matches to .xlsx or .csv'
    )
    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar while extracting documents'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Debug logging'
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return run(args)
    except (GrantMatcherError, OSError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
