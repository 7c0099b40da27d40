"""
Company Match - resolve partial identity signals to canonical company records.

This package provides:
- Normalization and tokenization of names, websites, phones and social links
- Ingestion that merges a name registry with contact-extraction data
- A record store publishing immutable corpus generations with their index
- A matcher that scores and ranks candidates with a calibrated confidence
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from company_match.errors import (
    CompanyMatchError,
    CorpusUnavailable,
    IngestionSourceMissing,
    InvalidQuery,
    UnresolvableNormalization,
)
from company_match.ingest import bootstrap, run_ingestion
from company_match.matching import Matcher, MatchOutcome, MatchResult
from company_match.models import CompanyRecord, Query
from company_match.normalization import extract_facebook_handle, normalize_phone, normalize_website
from company_match.store import Generation, RecordStore
from company_match.tokenizer import tokenize

__all__ = [
    "__version__",
    # Errors
    "CompanyMatchError",
    "CorpusUnavailable",
    "IngestionSourceMissing",
    "InvalidQuery",
    "UnresolvableNormalization",
    # Models
    "CompanyRecord",
    "Query",
    # Normalization
    "extract_facebook_handle",
    "normalize_phone",
    "normalize_website",
    "tokenize",
    # Store and ingestion
    "Generation",
    "RecordStore",
    "bootstrap",
    "run_ingestion",
    # Matching
    "Matcher",
    "MatchOutcome",
    "MatchResult",
]
