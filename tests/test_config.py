# tests/test_config.py
"""Tests for configuration module."""

from app.config import Settings


class TestSettings:
    """Test configuration defaults and environment overrides."""

    def test_secure_defaults(self):
        """Test auth is enforced and TLS verified out of the box."""
        config = Settings(_env_file=None)
        assert config.webhook_enforce_auth is True
        assert config.download_verify_tls is True
        assert config.webhook_report_failures is True

    def test_download_defaults(self):
        config = Settings(_env_file=None)
        assert config.download_timeout == 30.0
        assert config.download_chunk_size == 1024

    def test_webhook_channel_default(self):
        assert Settings(_env_file=None).webhook_log_channel == "webhook"

    def test_filename_strategy_default(self):
        assert Settings(_env_file=None).filename_strategy == "fields"

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CLIENT_BASE_PATH", str(tmp_path))
        monkeypatch.setenv("WEBHOOK_TOKEN", "abc")
        monkeypatch.setenv("DOWNLOAD_VERIFY_TLS", "false")

        config = Settings(_env_file=None)

        assert config.client_base_path == str(tmp_path)
        assert config.webhook_token == "abc"
        assert config.download_verify_tls is False

    def test_sqlite_fallback(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        config = Settings(_env_file=None)
        assert config.effective_database_url == "sqlite:///./doccenter.db"

    def test_database_url_used_when_set(self):
        config = Settings(_env_file=None, database_url="postgresql://u:p@db/doc")
        assert config.effective_database_url == "postgresql://u:p@db/doc"
