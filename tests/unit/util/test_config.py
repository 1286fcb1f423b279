"""Unit tests for settings and startup checks."""

import pytest

from vibe.config import AuthSettings, EngagementSettings, Settings
from vibe.util.error import ConfigurationError, check_settings


class TestCheckSettings:
    """Tests for check_settings."""

    def test_production_requires_secret(self):
        """Production must not run with the default JWT secret."""
        settings = Settings(environment="production")
        with pytest.raises(ConfigurationError):
            check_settings(settings)

    def test_production_with_secret_passes(self):
        """A configured secret should satisfy the check."""
        settings = Settings(
            environment="production", auth=AuthSettings(jwt_secret="s3cret")
        )
        check_settings(settings)

    def test_development_allows_default_secret(self):
        """Local development may use the default secret."""
        check_settings(Settings(environment="development"))


class TestEngagementSettings:
    """Tests for EngagementSettings validation."""

    def test_inverted_rating_range_is_invalid(self):
        """rating_min above rating_max should be rejected."""
        with pytest.raises(ValueError):
            EngagementSettings(rating_min=5, rating_max=1)

    def test_env_overrides_nested_values(self, monkeypatch):
        """Nested settings should be read from ``__`` environment keys."""
        monkeypatch.setenv("ENGAGEMENT__COMMENT_MIN_LENGTH", "3")
        monkeypatch.setenv("NOTIFICATIONS__LONG_POLL_TIMEOUT_SECONDS", "0.5")

        settings = Settings()

        assert settings.engagement.comment_min_length == 3
        assert settings.notifications.long_poll_timeout_seconds == 0.5
