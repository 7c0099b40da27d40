"""
Constants for company_match.

Scoring weights, thresholds and dataset conventions shared by ingestion and
matching.
"""

# =============================================================================
# Scoring Weights
# =============================================================================

# Website signal
WEIGHT_WEBSITE_EXACT = 10
WEIGHT_WEBSITE_SUBSTRING = 5
WEIGHT_WEBSITE_PREFIX = 3

# Phone signal
WEIGHT_PHONE_DIGITS = 8
WEIGHT_PHONE_RAW = 7
WEIGHT_PHONE_SUFFIX = 4

# Facebook signal
WEIGHT_FACEBOOK_HANDLE = 6
WEIGHT_FACEBOOK_ANY = 3

# Name signal
WEIGHT_NAME_EXACT_COMMERCIAL = 5
WEIGHT_NAME_EXACT_LEGAL = 4
WEIGHT_NAME_TOKEN_COMMERCIAL = 3
WEIGHT_NAME_TOKEN_LEGAL = 2
WEIGHT_NAME_TOKEN_ALIASES = 1

# =============================================================================
# Thresholds
# =============================================================================

CONFIDENT_SCORE_THRESHOLD = 3  # Top score must be strictly greater
MAX_CONFIDENCE = 100
CONFIDENCE_SCALE = 10

MIN_PHONE_DIGITS = 7
PHONE_SUFFIX_LENGTH = 7
MIN_WEBSITE_PREFIX_LENGTH = 4  # Prefix before the first dot must be longer than 3

MAX_ALTERNATIVES = 2
MAX_POTENTIAL_MATCHES = 3
DEFAULT_SEARCH_LIMIT = 5

# =============================================================================
# Dataset Conventions
# =============================================================================

MULTI_VALUE_DELIMITER = ", "
FACEBOOK_HOST = "facebook.com"
MIN_TOKEN_LENGTH = 2

DEFAULT_MATCH_WORKERS = 8
