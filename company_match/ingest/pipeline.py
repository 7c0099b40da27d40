"""
Ingestion pipeline orchestration.

Reads both datasets, merges them into a corpus, writes the inspection
artifacts and publishes the corpus to the record store as a new generation.
Every step that can fail runs before the swap, so a failed run leaves the
previously published generation in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from company_match.config import (
    get_company_names_path,
    get_contact_data_path,
    get_snapshot_csv_path,
    get_snapshot_json_path,
)
from company_match.ingest.artifacts import load_snapshot, write_csv_view, write_json_snapshot
from company_match.ingest.merge import merge_records
from company_match.ingest.readers import read_contact_data, read_name_registry
from company_match.models import CompanyRecord, IngestionReport
from company_match.store import Generation, RecordStore, compute_corpus_stats

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    """Outcome of one ingestion run."""

    records: list[CompanyRecord]
    report: IngestionReport
    generation: Generation | None = None
    artifacts: dict[str, Path] = field(default_factory=dict)


def log_report(
    report: IngestionReport,
    records: list[CompanyRecord],
    log: logging.Logger | None = None,
):
    """Log the ingestion counters and corpus fill rates."""
    _logger = log or logger
    stats = compute_corpus_stats(records)

    _logger.info(f"Created {report.records_built} merged records")
    _logger.info(f"  Joined with contact data: {report.joined}")
    if report.orphan_contacts:
        _logger.info(f"  Contact rows without a registry entry (dropped): {report.orphan_contacts}")
    if report.duplicate_domains:
        _logger.info(f"  Duplicate registry domains (dropped): {report.duplicate_domains}")
    if report.skipped_rows:
        _logger.info(f"  Registry rows without a domain (dropped): {report.skipped_rows}")
    if report.invalid_domains:
        _logger.info(f"  Domains without a public suffix: {len(report.invalid_domains)}")

    _logger.info("--- Corpus Fill Rates ---")
    _logger.info(f"Total companies: {stats['total_companies']}")
    rates = stats["fill_rates"]
    for label, count_key, rate_key in (
        ("phone numbers", "companies_with_phone", "phone"),
        ("social media", "companies_with_social", "social"),
        ("addresses", "companies_with_address", "address"),
        ("emails", "companies_with_email", "email"),
    ):
        _logger.info(f"Companies with {label}: {stats[count_key]} ({rates[rate_key]})")


def run_ingestion(
    store: RecordStore | None = None,
    names_path: Path | None = None,
    contact_path: Path | None = None,
    snapshot_json_path: Path | None = None,
    snapshot_csv_path: Path | None = None,
    write_artifacts: bool = True,
    show_progress: bool = False,
    log: logging.Logger | None = None,
) -> IngestionResult:
    """
    Run the full ingestion pipeline.

    Args:
        store: Record store to publish into (None = build only, don't publish)
        names_path: Name registry CSV (default: from settings)
        contact_path: Contact-extraction CSV (default: from settings)
        snapshot_json_path: JSON snapshot output (default: from settings)
        snapshot_csv_path: CSV view output (default: from settings)
        write_artifacts: Whether to write the JSON and CSV artifacts
        show_progress: Whether to show a progress bar while merging
        log: Optional logger instance (uses module logger if not provided)

    Returns:
        IngestionResult with records, report, artifacts and published generation

    Raises:
        IngestionSourceMissing: If the name registry is absent
    """
    _logger = log or logger
    names_path = names_path or get_company_names_path()
    contact_path = contact_path or get_contact_data_path()

    _logger.info("Starting data merge process...")
    name_rows = read_name_registry(names_path)
    contact_rows = read_contact_data(contact_path)

    records, report = merge_records(name_rows, contact_rows, show_progress=show_progress)
    result = IngestionResult(records=records, report=report)

    if write_artifacts:
        result.artifacts["json"] = write_json_snapshot(
            records, snapshot_json_path or get_snapshot_json_path()
        )
        result.artifacts["csv"] = write_csv_view(
            records, snapshot_csv_path or get_snapshot_csv_path()
        )

    if store is not None:
        result.generation = store.replace_all(records)

    log_report(report, records, _logger)
    return result


def bootstrap(
    store: RecordStore,
    snapshot_json_path: Path | None = None,
    **ingestion_kwargs,
) -> Generation:
    """
    Publish a generation from the JSON snapshot, or ingest when there is none.

    Args:
        store: Record store to publish into
        snapshot_json_path: Snapshot to reuse (default: from settings)
        **ingestion_kwargs: Passed to run_ingestion when the snapshot is absent

    Returns:
        The published generation
    """
    snapshot_json_path = Path(snapshot_json_path or get_snapshot_json_path())
    if snapshot_json_path.exists():
        logger.info(f"Using existing company profiles from {snapshot_json_path}")
        return store.replace_all(load_snapshot(snapshot_json_path))

    logger.info("No company snapshot found. Running data processing...")
    result = run_ingestion(store, snapshot_json_path=snapshot_json_path, **ingestion_kwargs)
    return result.generation
