"""
Match explanation.

Re-checks each provided query field against a matched record, independently
of the scoring weights, and reports which fields semantically agree.
"""

from company_match.models import CompanyRecord, Query
from company_match.normalization import is_facebook_url, normalize_phone, normalize_website


def explain_match(query: Query, record: CompanyRecord) -> list[str]:
    """
    List the query fields that concur with a record.

    - "name": the query name is contained in the commercial or legal name
    - "domain": the normalized website equals the record domain
    - "phone": some record phone equals the query phone after normalization
    - "facebook": some facebook link contains, or is contained in, the query value

    Args:
        query: The query as given by the caller
        record: Candidate record

    Returns:
        Matching field names in the fixed order name, domain, phone, facebook
    """
    fields: list[str] = []

    if query.name:
        name = query.name.lower()
        if name in record.commercial_name.lower() or (
            record.legal_name and name in record.legal_name.lower()
        ):
            fields.append("name")

    if query.website and normalize_website(query.website) == record.domain:
        fields.append("domain")

    if query.phone:
        digits = normalize_phone(query.phone)
        if digits and any(normalize_phone(p) == digits for p in record.phone_numbers):
            fields.append("phone")

    if query.facebook:
        facebook = query.facebook
        if any(
            is_facebook_url(link) and (facebook in link or link in facebook)
            for link in record.social_media_links
        ):
            fields.append("facebook")

    return fields
