"""
Durable ingestion artifacts.

Ingestion writes two views of the corpus for inspection: a full-fidelity
JSON snapshot and a flattened CSV with multi-valued fields re-joined. The
JSON snapshot can also be read back to publish a generation without
re-running the merge.
"""

import csv
import json
import logging
from pathlib import Path

from company_match.constants import MULTI_VALUE_DELIMITER
from company_match.errors import IngestionSourceMissing
from company_match.models import CompanyRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "domain",
    "company_commercial_name",
    "company_legal_name",
    "company_all_available_names",
    "phoneNumbers",
    "socialMediaLinks",
    "addresses",
    "emails",
    "success",
]


def dump_snapshot(records: list[CompanyRecord]) -> str:
    """Serialize records to the snapshot JSON text (deterministic)."""
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False) + "\n"


def write_json_snapshot(records: list[CompanyRecord], path: Path) -> Path:
    """Write the full JSON snapshot."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_snapshot(records), encoding="utf-8")
    logger.info(f"Saved merged data to {path}")
    return path


def write_csv_view(records: list[CompanyRecord], path: Path) -> Path:
    """Write the flattened CSV view."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for record in records:
            row = record.to_dict()
            for key in ("phoneNumbers", "socialMediaLinks", "addresses", "emails"):
                row[key] = MULTI_VALUE_DELIMITER.join(row[key])
            row["success"] = "true" if record.has_contact_data else "false"
            del row["searchTokens"]
            writer.writerow(row)
    logger.info(f"Saved merged data to {path}")
    return path


def load_snapshot(path: Path) -> list[CompanyRecord]:
    """
    Read records back from a JSON snapshot.

    Search tokens are re-derived from the fields rather than trusted from
    the file.

    Raises:
        IngestionSourceMissing: If the snapshot does not exist
        ValueError: If the file is not a list of records
    """
    path = Path(path)
    if not path.exists():
        raise IngestionSourceMissing(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of company profiles")
    records = [CompanyRecord.from_dict(item) for item in data]
    logger.info(f"Loaded {len(records)} company profiles from {path}")
    return records
