"""
CSV readers for the ingestion datasets.

This module reads the name registry and the contact-extraction dataset and
returns plain row dictionaries for the merge step.
"""

import csv
import logging
from pathlib import Path

from company_match.errors import IngestionSourceMissing

logger = logging.getLogger(__name__)

NAME_REGISTRY_COLUMNS = (
    "domain",
    "company_commercial_name",
    "company_legal_name",
    "company_all_available_names",
)
CONTACT_COLUMNS = (
    "domain",
    "phoneNumbers",
    "socialMediaLinks",
    "addresses",
    "emails",
    "success",
)


def _read_rows(path: Path, expected_columns: tuple[str, ...]) -> list[dict]:
    # utf-8-sig tolerates a byte order mark from spreadsheet exports
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        header = reader.fieldnames or []
        missing = [column for column in expected_columns if column not in header]
        if "domain" in missing:
            raise ValueError(f"{path} has no 'domain' column (header: {header})")
        if missing:
            logger.warning(f"⚠ {path.name} is missing columns {missing}; treating them as empty")
        return [{key: (value or "") for key, value in row.items() if key} for row in reader]


def read_name_registry(path: Path) -> list[dict]:
    """
    Read the name registry CSV.

    Args:
        path: Path to the registry file

    Returns:
        List of row dictionaries keyed by column name

    Raises:
        IngestionSourceMissing: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise IngestionSourceMissing(path)
    rows = _read_rows(path, NAME_REGISTRY_COLUMNS)
    logger.info(f"Loaded {len(rows)} company names from {path}")
    return rows


def read_contact_data(path: Path | None) -> list[dict] | None:
    """
    Read the contact-extraction CSV.

    The dataset is optional: when it is absent a warning is logged and None
    is returned, and every company ends up without contact data.

    Args:
        path: Path to the contact-extraction file

    Returns:
        List of row dictionaries, or None if the file does not exist
    """
    if path is None:
        return None
    path = Path(path)
    if not path.exists():
        logger.warning(f"⚠ Contact data not found at {path}; continuing without contact data")
        return None
    rows = _read_rows(path, CONTACT_COLUMNS)
    logger.info(f"Loaded {len(rows)} contact-extraction rows from {path}")
    return rows
