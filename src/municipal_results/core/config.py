"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables (or a local ``.env``).
"""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class ConfigurationError(Exception):
    """Raised when settings or command-line flags are missing or invalid."""


class Settings(BaseSettings):
    """Scraper settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Results API
    results_host: str = Field(
        default="resultados.tse.jus.br",
        description="Host serving the official results JSON resources",
    )
    election_year: int = Field(
        default=2024,
        description="Election cycle year used in the resource path",
        ge=1990,
    )
    election_id: int = Field(
        default=619,
        description="Election identifier for the first round of the municipal election",
        gt=0,
    )
    fetch_timeout: float | None = Field(
        default=None,
        description="Per-request timeout in seconds (unset means wait indefinitely)",
        gt=0,
    )

    @field_validator("results_host")
    @classmethod
    def validate_results_host(cls, v: str) -> str:
        host = v.strip().lower()
        if not host or "/" in host or ":" in host:
            msg = "results_host must be a bare hostname (no scheme, port or path)"
            raise ValueError(msg)
        return host

    # Municipality catalog
    catalog_path: str = Field(
        default="./data/municipios_brasileiros_tse.json",
        description="Path to the municipality reference catalog (JSON array)",
    )

    # Export
    export_dir: str = Field(
        default="./exports",
        description="Directory for export output files",
    )

    # Failure policy
    strict_mode: bool = Field(
        default=True,
        description="Abort the whole run on the first fetch or parse failure",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _VALID_LOG_LEVELS:
            msg = f"Invalid log_level '{v}'. Expected one of: {sorted(_VALID_LOG_LEVELS)}"
            raise ValueError(msg)
        return level


def get_settings() -> Settings:
    """Create and return application settings.

    Raises:
        ConfigurationError: If any setting fails validation.
    """
    try:
        return Settings()
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise ConfigurationError(msg) from exc
