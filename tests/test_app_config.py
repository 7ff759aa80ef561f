"""
Unit tests for settings in selfie.records.app.config

Tests cover defaults, environment loading and validation of the nameserver
and default record settings.
"""

import pytest
from pydantic import ValidationError

from selfie.records.app.config import Settings, create_resolver
from selfie.records.resolve.batch import DEFAULT_NAMESERVER, DEFAULT_RECORDS


class TestSettings:
    """Test suite for the Settings model."""

    def test_defaults(self, monkeypatch):
        """Test defaults match the resolver defaults."""
        for name in ["NAMESERVER", "DEFAULT_RECORDS", "LOOKUP_TIMEOUT", "PORT"]:
            monkeypatch.delenv(name, raising=False)

        settings = Settings()
        assert settings.nameserver == DEFAULT_NAMESERVER
        assert settings.default_records == DEFAULT_RECORDS
        assert settings.lookup_timeout == 5.0
        assert settings.batch_timeout is None
        assert settings.http_port == 5100

    def test_from_environment(self, monkeypatch):
        """Test settings are loaded from environment variables."""
        monkeypatch.setenv("NAMESERVER", "1.1.1.1")
        monkeypatch.setenv("DEFAULT_RECORDS", "pgp, nostr,,")
        monkeypatch.setenv("BATCH_TIMEOUT", "2.5")
        monkeypatch.setenv("MAX_CONCURRENCY", "3")
        monkeypatch.setenv("PORT", "8080")

        settings = Settings()
        assert settings.nameserver == "1.1.1.1"
        assert settings.default_records == ["pgp", "nostr"]
        assert settings.batch_timeout == 2.5
        assert settings.max_concurrency == 3
        assert settings.http_port == 8080

    def test_invalid_nameserver(self):
        """Test a nameserver that is not IPv4 is rejected."""
        with pytest.raises(ValidationError):
            Settings(nameserver="dns.google")

    def test_invalid_concurrency(self):
        """Test max_concurrency must be positive."""
        with pytest.raises(ValidationError):
            Settings(max_concurrency=0)

    def test_default_records_list(self):
        """Test default_records accepts a list."""
        settings = Settings(default_records=["pgp"])
        assert settings.default_records == ["pgp"]


class TestCreateResolver:
    """Test suite for create_resolver function."""

    def test_create_resolver(self):
        """Test the resolver is configured from settings."""
        settings = Settings(nameserver="9.9.9.9", max_concurrency=2, lookup_timeout=1.5)
        resolver = create_resolver(settings)

        assert resolver.nameserver == "9.9.9.9"
        assert resolver.max_concurrency == 2
        assert resolver.client.timeout == 1.5
