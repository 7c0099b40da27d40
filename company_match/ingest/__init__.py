"""
Ingestion pipeline: read datasets, merge on domain, publish a generation.
"""

from company_match.ingest.artifacts import load_snapshot, write_csv_view, write_json_snapshot
from company_match.ingest.merge import merge_records, parse_success_flag, split_multi_value
from company_match.ingest.pipeline import IngestionResult, bootstrap, run_ingestion
from company_match.ingest.readers import read_contact_data, read_name_registry

__all__ = [
    "IngestionResult",
    "bootstrap",
    "load_snapshot",
    "merge_records",
    "parse_success_flag",
    "read_contact_data",
    "read_name_registry",
    "run_ingestion",
    "split_multi_value",
    "write_csv_view",
    "write_json_snapshot",
]
