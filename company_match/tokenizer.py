"""
Free-text tokenizer for the inverted index.

Both ingestion (building search_tokens) and matching (looking up name
tokens) go through these functions, so a token produced on one side is
always findable from the other.
"""

import re
from collections.abc import Iterable, Iterator

from company_match.constants import MIN_TOKEN_LENGTH

_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9\s]")


def iter_tokens(text: str | None) -> Iterator[str]:
    """Yield tokens of text in order of appearance (duplicates included)."""
    if not text:
        return
    cleaned = _NON_TOKEN_CHARS.sub(" ", text.lower())
    for token in cleaned.split():
        if len(token) >= MIN_TOKEN_LENGTH:
            yield token


def tokenize(text: str | None) -> set[str]:
    """
    Split text into a set of lowercase alphanumeric tokens.

    Every character outside [a-z0-9] and whitespace becomes a separator, and
    tokens shorter than two characters are dropped.

    Examples:
        "Acme Inc." -> {"acme", "inc"}
        "(212) 555-0199" -> {"212", "555", "0199"}
    """
    return set(iter_tokens(text))


def ordered_tokens(*texts: str | Iterable[str] | None) -> tuple[str, ...]:
    """
    Flat-union the tokens of several fields in first-seen order.

    Each argument is either a single text or a collection of texts; the
    latter is tokenized element by element.
    """
    seen: dict[str, None] = {}
    for field in texts:
        if field is None:
            continue
        values = [field] if isinstance(field, str) else field
        for value in values:
            for token in iter_tokens(value):
                seen.setdefault(token, None)
    return tuple(seen)
