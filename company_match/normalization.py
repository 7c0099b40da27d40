"""
Identity signal normalization.

Pure functions that turn raw website, phone and social values into the
canonical forms shared by ingestion and matching. The same functions run on
both sides, so a value normalizes identically whether it came from a dataset
row or from a query.

Domain validity checks use tldextract with the bundled Public Suffix List
snapshot (no network fetch).
"""

import re
from functools import lru_cache
from urllib.parse import urlsplit

import tldextract

from company_match.constants import FACEBOOK_HOST, MIN_PHONE_DIGITS
from company_match.errors import UnresolvableNormalization

# A run of scheme prefixes, including typos such as "https//" or "http:/"
_SCHEME_RUN = re.compile(r"^(?:https?:?/+)+")
_SCHEME_NAME = re.compile(r"https?")
_NON_DIGIT = re.compile(r"\D")
_HOST_END = re.compile(r"[/?#\s]")
_PORT = re.compile(r":\d*$")
_QUERY_OR_FRAGMENT = re.compile(r"[?#]")
_HOSTNAME = re.compile(
    r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?(?:\.[a-z0-9](?:[a-z0-9-]*[a-z0-9])?)+$"
)


def normalize_phone(phone: str | None) -> str:
    """
    Strip every non-digit character.

    Examples:
        "(212) 555-0199" -> "2125550199"
        "" -> ""
    """
    if not phone:
        return ""
    return _NON_DIGIT.sub("", phone)


def _repair_scheme(url: str) -> str:
    """Collapse duplicated or malformed scheme prefixes to a single one."""
    match = _SCHEME_RUN.match(url)
    if not match:
        return url
    scheme = _SCHEME_NAME.findall(match.group(0))[-1]
    return f"{scheme}://{url[match.end():]}"


def _bare_host(value: str) -> str:
    """Treat a value without a parseable scheme as a domain-like token."""
    if "://" in value:
        value = value.split("://", 1)[1]
    value = value.lstrip("/")
    host = _HOST_END.split(value, 1)[0]
    if "@" in host:
        host = host.rsplit("@", 1)[1]
    return _PORT.sub("", host)


def normalize_website(website: str | None) -> str:
    """
    Normalize a website value to a canonical domain.

    Lowercases, repairs broken scheme prefixes, extracts the host, strips a
    leading "www." and appends ".com" when no dot remains. A "www." label is
    kept when stripping it would leave a bare public suffix, so "www" and
    "www.com" both settle on "www.com". Idempotent for every input.

    Examples:
        "HTTPS://WWW.Example.com" -> "example.com"
        "https://https://example.com/about" -> "example.com"
        "https://http//example.com" -> "example.com"
        "example" -> "example.com"
        "www" -> "www.com"

    Returns:
        Canonical domain, or "" for empty input
    """
    if not website:
        return ""

    url = _repair_scheme(website.strip().lower())

    host = ""
    if "://" in url:
        try:
            host = urlsplit(url).hostname or ""
        except ValueError:
            # Malformed netloc (e.g. unbalanced IPv6 brackets)
            host = ""
    if not host:
        host = _bare_host(url)

    # Hostnames carry no whitespace; keep the first token
    tokens = host.split()
    host = tokens[0].rstrip(".") if tokens else ""
    while host.startswith("www.") and not _is_bare_suffix(host[4:]):
        host = host[4:]
    if host and "." not in host:
        host += ".com"
    return host


def extract_facebook_handle(value: str | None) -> str:
    """
    Return the last path segment of a facebook value.

    Trailing slashes, query strings and fragments are ignored.

    Examples:
        "https://www.facebook.com/acmeinc" -> "acmeinc"
        "facebook.com/acmeinc/" -> "acmeinc"
        "acmeinc" -> "acmeinc"
    """
    if not value:
        return ""
    value = _QUERY_OR_FRAGMENT.split(value.strip(), maxsplit=1)[0]
    return value.rstrip("/").split("/")[-1]


def is_facebook_url(link: str) -> bool:
    """Check whether a social link is facebook-hosted."""
    return FACEBOOK_HOST in link.lower()


def canonical_website(website: str | None) -> str:
    """
    Normalize a website and require a non-empty domain.

    Accepts exactly what ingestion stores, so every corpus domain can be
    queried by its own value.

    Raises:
        UnresolvableNormalization: If the value yields no domain
    """
    domain = normalize_website(website)
    if not domain:
        raise UnresolvableNormalization("website", website or "", "empty value")
    return domain


def canonical_phone(phone: str | None) -> str:
    """
    Normalize a phone number and require enough digits to match on.

    Raises:
        UnresolvableNormalization: If fewer than MIN_PHONE_DIGITS digits remain
    """
    digits = normalize_phone(phone)
    if len(digits) < MIN_PHONE_DIGITS:
        raise UnresolvableNormalization(
            "phone", phone or "", f"{len(digits)} digits (need {MIN_PHONE_DIGITS})"
        )
    return digits


@lru_cache(maxsize=1)
def _extractor() -> tldextract.TLDExtract:
    # Bundled suffix list only; never reach out to the network
    return tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)


def _is_bare_suffix(host: str) -> bool:
    """Check whether a host is a public suffix with no registrable label (e.g. "com")."""
    ext = _extractor()(host)
    return bool(ext.suffix) and not ext.domain and not ext.subdomain


def is_valid_domain(domain: str) -> bool:
    """
    Validate a canonical domain against the Public Suffix List.

    Requirements:
    - Looks like a hostname
    - Has a registrable part and a public suffix

    Args:
        domain: Canonical domain (output of normalize_website)

    Returns:
        True if domain is valid, False otherwise
    """
    if not domain or len(domain) > 255 or not _HOSTNAME.match(domain):
        return False
    ext = _extractor()(domain)
    return bool(ext.domain and ext.suffix)
