"""
Data models for company records and queries.

CompanyRecord is the unit of the corpus: one immutable record per canonical
domain. Query is the ephemeral, sparse input to the matcher.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from company_match.errors import InvalidQuery
from company_match.tokenizer import ordered_tokens

QUERY_FIELDS = ("name", "website", "phone", "facebook")


@dataclass(frozen=True)
class CompanyRecord:
    """Canonical company record keyed by domain."""

    domain: str
    commercial_name: str = ""
    legal_name: str = ""
    all_available_names: str = ""
    phone_numbers: tuple[str, ...] = ()
    social_media_links: tuple[str, ...] = ()
    addresses: tuple[str, ...] = ()
    emails: tuple[str, ...] = ()
    search_tokens: tuple[str, ...] = ()
    has_contact_data: bool = False

    def __post_init__(self):
        if not self.domain:
            raise ValueError("CompanyRecord.domain must not be empty")

    @staticmethod
    def derive_search_tokens(
        domain: str,
        commercial_name: str,
        legal_name: str,
        all_available_names: str,
        phone_numbers: tuple[str, ...],
        social_media_links: tuple[str, ...],
        addresses: tuple[str, ...],
        emails: tuple[str, ...],
    ) -> tuple[str, ...]:
        """Tokens of every text-bearing field, in first-seen order."""
        return ordered_tokens(
            commercial_name,
            legal_name,
            all_available_names,
            domain,
            phone_numbers,
            social_media_links,
            addresses,
            emails,
        )

    @classmethod
    def build(
        cls,
        domain: str,
        commercial_name: str = "",
        legal_name: str = "",
        all_available_names: str = "",
        phone_numbers: tuple[str, ...] = (),
        social_media_links: tuple[str, ...] = (),
        addresses: tuple[str, ...] = (),
        emails: tuple[str, ...] = (),
        has_contact_data: bool = False,
    ) -> CompanyRecord:
        """Assemble a record, deriving search_tokens from its fields."""
        phone_numbers = tuple(phone_numbers)
        social_media_links = tuple(social_media_links)
        addresses = tuple(addresses)
        emails = tuple(emails)
        return cls(
            domain=domain,
            commercial_name=commercial_name,
            legal_name=legal_name,
            all_available_names=all_available_names,
            phone_numbers=phone_numbers,
            social_media_links=social_media_links,
            addresses=addresses,
            emails=emails,
            search_tokens=cls.derive_search_tokens(
                domain,
                commercial_name,
                legal_name,
                all_available_names,
                phone_numbers,
                social_media_links,
                addresses,
                emails,
            ),
            has_contact_data=has_contact_data,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the external (snapshot) column layout."""
        return {
            "domain": self.domain,
            "company_commercial_name": self.commercial_name,
            "company_legal_name": self.legal_name,
            "company_all_available_names": self.all_available_names,
            "phoneNumbers": list(self.phone_numbers),
            "socialMediaLinks": list(self.social_media_links),
            "addresses": list(self.addresses),
            "emails": list(self.emails),
            "success": self.has_contact_data,
            "searchTokens": list(self.search_tokens),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompanyRecord:
        """Rebuild a record from the snapshot layout."""
        return cls.build(
            domain=data["domain"],
            commercial_name=data.get("company_commercial_name") or "",
            legal_name=data.get("company_legal_name") or "",
            all_available_names=data.get("company_all_available_names") or "",
            phone_numbers=tuple(data.get("phoneNumbers") or ()),
            social_media_links=tuple(data.get("socialMediaLinks") or ()),
            addresses=tuple(data.get("addresses") or ()),
            emails=tuple(data.get("emails") or ()),
            has_contact_data=bool(data.get("success", False)),
        )


@dataclass(frozen=True)
class Query:
    """
    A sparse identity query.

    Blank values are treated as absent. At least one field must be present.
    """

    name: str | None = None
    website: str | None = None
    phone: str | None = None
    facebook: str | None = None

    def __post_init__(self):
        for name in QUERY_FIELDS:
            value = getattr(self, name)
            if value is not None and not str(value).strip():
                object.__setattr__(self, name, None)
            elif value is not None:
                object.__setattr__(self, name, str(value).strip())

    @property
    def present_fields(self) -> list[str]:
        """Names of the fields carrying a value."""
        return [name for name in QUERY_FIELDS if getattr(self, name) is not None]

    def validate(self) -> Query:
        """
        Check the query contract.

        Raises:
            InvalidQuery: If no field is present
        """
        if not self.present_fields:
            raise InvalidQuery(
                "At least one search parameter (name, website, phone, facebook) is required"
            )
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Query:
        """Build a query from a mapping, ignoring unknown keys."""
        return cls(**{name: data.get(name) for name in QUERY_FIELDS})

    def to_dict(self) -> dict[str, str | None]:
        return {name: getattr(self, name) for name in QUERY_FIELDS}


@dataclass
class IngestionReport:
    """Counters and data-quality notes from one ingestion run."""

    names_loaded: int = 0
    contacts_loaded: int = 0
    records_built: int = 0
    joined: int = 0
    orphan_contacts: int = 0
    duplicate_domains: int = 0
    skipped_rows: int = 0
    invalid_domains: list[str] = field(default_factory=list)
    contact_source_present: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "names_loaded": self.names_loaded,
            "contacts_loaded": self.contacts_loaded,
            "records_built": self.records_built,
            "joined": self.joined,
            "orphan_contacts": self.orphan_contacts,
            "duplicate_domains": self.duplicate_domains,
            "skipped_rows": self.skipped_rows,
            "invalid_domains": list(self.invalid_domains),
            "contact_source_present": self.contact_source_present,
        }
