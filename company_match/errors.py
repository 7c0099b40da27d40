"""
Error taxonomy for company_match.

Every error raised by the engine derives from CompanyMatchError so callers
can catch the whole family. Each subclass also derives from the closest
built-in exception so generic handlers keep working.
"""


class CompanyMatchError(Exception):
    """Base class for all company_match errors."""


class InvalidQuery(CompanyMatchError, ValueError):
    """The query carries no usable field (or an invalid search limit)."""


class UnresolvableNormalization(CompanyMatchError, ValueError):
    """
    A website or phone value cannot be turned into a usable canonical form.

    The matcher drops the affected signal and carries on with the others.
    """

    def __init__(self, signal: str, value: str, reason: str):
        self.signal = signal
        self.value = value
        self.reason = reason
        super().__init__(f"cannot normalize {signal} {value!r}: {reason}")


class CorpusUnavailable(CompanyMatchError, RuntimeError):
    """No corpus generation has been published yet."""


class IngestionSourceMissing(CompanyMatchError, FileNotFoundError):
    """A required ingestion dataset is absent."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"required ingestion source not found: {path}")
