"""locale-sync – Application Configuration.

Pydantic Settings, loaded from .env file or environment variables.
One instance is created per run and handed to the orchestrator and gateway.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TARGET_LOCALES: dict[str, str] = {
    "it": "it/it.json",
    "es": "es/es.json",
    "pt": "pt/pt.json",
    "fr": "fr/fr.json",
}


class Settings(BaseSettings):
    """Central application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Logging ---
    log_level: str = "info"
    log_format: str = "console"  # 'console' for humans, 'json' for CI log collectors

    # --- Locale files ---
    locales_dir: str = "."
    reference_file: str = "en/en.json"
    source_lang: str = ""  # Empty → derived from the reference path (en/en.json → en)
    target_locales: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_TARGET_LOCALES)
    )

    # --- Sync policy ---
    skip_invalid_targets: bool = False
    repair_type_mismatches: bool = False
    translate_max_workers: int = 4

    # --- AWS Translate ---
    aws_region: str = ""
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_session_token: str = ""

    @property
    def has_aws_credentials(self) -> bool:
        return bool(self.aws_access_key_id and self.aws_secret_access_key)


def get_settings() -> Settings:
    """Factory function for settings."""
    return Settings()
