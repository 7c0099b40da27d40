"""
Configuration management for company_match.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from company_match.constants import DEFAULT_MATCH_WORKERS, DEFAULT_SEARCH_LIMIT


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    File names are resolved against data_dir unless given as absolute paths.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Data locations
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding ingestion inputs and artifacts",
    )
    company_names_file: str = Field(
        default="sample-websites-company-names.csv",
        description="Name registry CSV (required for ingestion)",
    )
    contact_data_file: str = Field(
        default="crawling_results.csv",
        description="Contact-extraction CSV (optional for ingestion)",
    )
    snapshot_json_file: str = Field(
        default="company_profiles.json",
        description="Full-fidelity JSON snapshot written by ingestion",
    )
    snapshot_csv_file: str = Field(
        default="company_profiles.csv",
        description="Flattened CSV view written by ingestion",
    )
    evaluation_sample_file: str = Field(
        default="API-input-sample.csv",
        description="Labeled query sample used by batch evaluation",
    )

    # Matching
    default_search_limit: int = Field(
        default=DEFAULT_SEARCH_LIMIT,
        description="Number of results returned by search() when no limit is given",
    )
    match_workers: int = Field(
        default=DEFAULT_MATCH_WORKERS,
        description="Thread pool size for batch matching",
    )

    # Logging
    log_dir: Path = Field(
        default=Path("logs"),
        description="Directory for log files in execute mode",
    )

    @field_validator(
        "company_names_file",
        "contact_data_file",
        "snapshot_json_file",
        "snapshot_csv_file",
        "evaluation_sample_file",
        mode="before",
    )
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string values."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("default_search_limit", "match_workers")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        """Reject zero or negative limits."""
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    def resolve(self, file_name: str) -> Path:
        """Resolve a configured file name against data_dir."""
        path = Path(file_name)
        if path.is_absolute():
            return path
        return self.data_dir / path


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def get_company_names_path() -> Path:
    """Get path to the name registry CSV."""
    settings = get_settings()
    return settings.resolve(settings.company_names_file)


def get_contact_data_path() -> Path:
    """Get path to the contact-extraction CSV."""
    settings = get_settings()
    return settings.resolve(settings.contact_data_file)


def get_snapshot_json_path() -> Path:
    """Get path to the JSON corpus snapshot."""
    settings = get_settings()
    return settings.resolve(settings.snapshot_json_file)


def get_snapshot_csv_path() -> Path:
    """Get path to the flattened CSV corpus view."""
    settings = get_settings()
    return settings.resolve(settings.snapshot_csv_file)


def get_evaluation_sample_path() -> Path:
    """Get path to the labeled evaluation sample."""
    settings = get_settings()
    return settings.resolve(settings.evaluation_sample_file)
