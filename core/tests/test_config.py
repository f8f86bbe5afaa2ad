"""Tests for environment-driven configuration."""

from core.config import (
    check_required_env_vars,
    get_allowed_origins,
    get_default_calendar_id,
    get_prod_host,
)


class TestProdHost:
    def test_returns_none_when_unset(self, monkeypatch):
        monkeypatch.delenv("PROD_HOST", raising=False)
        assert get_prod_host() is None

    def test_blank_value_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("PROD_HOST", "  ")
        assert get_prod_host() is None


class TestCalendarId:
    def test_defaults_to_primary(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_CALENDAR_ID", raising=False)
        assert get_default_calendar_id() == "primary"

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CALENDAR_ID", "team@example.com")
        assert get_default_calendar_id() == "team@example.com"


class TestAllowedOrigins:
    def test_includes_prod_host_over_https(self, monkeypatch):
        monkeypatch.setenv("PROD_HOST", "events.example.com")
        origins = get_allowed_origins()
        assert "https://events.example.com" in origins
        assert "http://localhost:3000" in origins


class TestCheckRequiredEnvVars:
    def test_missing_database_url_fails_outside_dev(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("DEV_MODE", raising=False)

        ok, messages = check_required_env_vars()

        assert ok is False
        assert any("DATABASE_URL" in m for m in messages)

    def test_missing_optional_vars_only_warn(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/events")
        monkeypatch.delenv("PROD_HOST", raising=False)

        ok, warnings = check_required_env_vars()

        assert ok is True
        assert any("PROD_HOST" in w for w in warnings)
