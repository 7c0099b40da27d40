"""
CLI command entry points for company_match.

These functions are registered as console scripts in pyproject.toml.
"""

import argparse
import json
import sys

from company_match.cli.args import add_execute_argument, add_query_arguments, add_verbose_argument
from company_match.cli.logging import print_dry_run_header, print_execute_header, setup_logging
from company_match.config import get_evaluation_sample_path, get_settings
from company_match.errors import CompanyMatchError
from company_match.ingest import bootstrap, run_ingestion
from company_match.matching import Matcher, evaluate_sample
from company_match.models import Query
from company_match.store import RecordStore


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _bootstrapped_matcher() -> Matcher:
    settings = get_settings()
    store = RecordStore()
    bootstrap(store)
    return Matcher(store, default_limit=settings.default_search_limit)


def run_ingest():
    """Entry point for company-match-ingest command."""
    parser = argparse.ArgumentParser(
        description="Merge the name registry with contact data and write the corpus artifacts"
    )
    add_execute_argument(parser)
    add_verbose_argument(parser)
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    args = parser.parse_args()

    settings = get_settings()
    logger = setup_logging(
        "ingest", execute=args.execute, log_dir=settings.log_dir, verbose=args.verbose
    )

    try:
        if not args.execute:
            print_dry_run_header("Company Ingestion", logger)
            run_ingestion(
                write_artifacts=False, show_progress=not args.no_progress, log=logger
            )
            logger.info("Dry run: no artifacts written. Use --execute to write them.")
        else:
            print_execute_header("Company Ingestion", logger)
            result = run_ingestion(show_progress=not args.no_progress, log=logger)
            for kind, path in result.artifacts.items():
                logger.info(f"  {kind}: {path}")
    except CompanyMatchError as e:
        logger.error(f"✗ {e}")
        sys.exit(1)


def run_query():
    """Entry point for company-match-query command."""
    parser = argparse.ArgumentParser(description="Match or search companies by identity signals")
    parser.add_argument("command", choices=["match", "search"])
    add_query_arguments(parser)
    parser.add_argument("--limit", type=int, default=None, help="Result limit for search")
    add_verbose_argument(parser)
    args = parser.parse_args()

    logger = setup_logging("query", verbose=args.verbose)
    query = Query(name=args.name, website=args.website, phone=args.phone, facebook=args.facebook)

    try:
        matcher = _bootstrapped_matcher()
        if args.command == "match":
            _print_json(matcher.match(query).to_dict())
        else:
            results = matcher.search(query, limit=args.limit)
            _print_json(
                {"success": True, "count": len(results), "results": [r.to_dict() for r in results]}
            )
    except CompanyMatchError as e:
        logger.error(f"✗ {e}")
        sys.exit(1)


def run_evaluate():
    """Entry point for company-match-evaluate command."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Evaluate matching against a labeled query sample")
    parser.add_argument("--sample", default=None, help="Sample CSV (default: from settings)")
    parser.add_argument(
        "--workers", type=int, default=settings.match_workers, help="Parallel workers"
    )
    parser.add_argument("--summary", action="store_true", help="Print only the aggregate numbers")
    add_verbose_argument(parser)
    args = parser.parse_args()

    logger = setup_logging("evaluate", verbose=args.verbose)

    try:
        matcher = _bootstrapped_matcher()
        report = evaluate_sample(
            matcher,
            args.sample or get_evaluation_sample_path(),
            max_workers=args.workers,
            show_progress=True,
        )
    except CompanyMatchError as e:
        logger.error(f"✗ {e}")
        sys.exit(1)

    data = report.to_dict()
    if args.summary:
        data.pop("results")
    _print_json(data)


def run_stats():
    """Entry point for company-match-stats command."""
    parser = argparse.ArgumentParser(description="Show corpus statistics and fill rates")
    add_verbose_argument(parser)
    args = parser.parse_args()

    logger = setup_logging("stats", verbose=args.verbose)

    try:
        store = RecordStore()
        bootstrap(store)
        _print_json({"success": True, "stats": store.corpus_stats()})
    except CompanyMatchError as e:
        logger.error(f"✗ {e}")
        sys.exit(1)
