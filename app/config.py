"""DocCenter — Central Configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Client Folders ──
    client_base_path: str = "Z:\\PASTAS DE CLIENTES"
    filename_strategy: str = "fields"  # fields | url

    # ── Webhook ──
    webhook_token: str = ""
    webhook_enforce_auth: bool = True
    webhook_report_failures: bool = True
    webhook_log_channel: str = "webhook"
    webhook_log_file: str = ""

    # ── Download ──
    # Turning TLS verification off is only meant for sources with broken
    # certificate chains; it is logged loudly when disabled.
    download_verify_tls: bool = True
    download_timeout: float = 30.0
    download_chunk_size: int = 1024

    # ── Database ──
    database_url: str = ""

    # ── App ──
    log_level: str = "INFO"

    @property
    def effective_database_url(self) -> str:
        """Return the configured URL if set, otherwise fall back to SQLite."""
        if self.database_url:
            return self.database_url
        return "sqlite:///./doccenter.db"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


def get_settings() -> Settings:
    """Dependency — returns the process-wide settings."""
    return settings
