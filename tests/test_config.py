"""Tests for settings and error serialization."""

import pytest
from pydantic import ValidationError

from training_analytics.config import AnalyticsSettings, get_settings
from training_analytics.exceptions import (
    ConfigurationError,
    ErrorCode,
    InvalidParameterError,
    TrainingAnalyticsError,
)


@pytest.fixture
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for AnalyticsSettings."""

    def test_defaults(self, settings):
        """Defaults match the documented heuristics."""
        assert settings.default_max_hr == 190
        assert settings.default_resting_hr == 60
        assert settings.hr_gap_threshold_seconds == 60.0
        assert settings.grade_smoothing_radius == 5
        assert settings.segment_duration_seconds == 300.0
        assert settings.atl_days == 7
        assert settings.ctl_days == 42
        assert settings.max_chart_points == 500
        assert settings.timezone is None

    def test_env_override(self, monkeypatch, clear_settings_cache):
        """TRAINING_ANALYTICS_* variables override defaults."""
        monkeypatch.setenv("TRAINING_ANALYTICS_DEFAULT_MAX_HR", "180")
        monkeypatch.setenv("TRAINING_ANALYTICS_TIMEZONE", "Europe/Madrid")
        settings = get_settings()
        assert settings.default_max_hr == 180
        assert settings.timezone == "Europe/Madrid"

    def test_get_settings_is_cached(self, clear_settings_cache):
        """The same instance is returned until the cache is cleared."""
        assert get_settings() is get_settings()

    def test_chart_budget_validated(self):
        """A chart budget below two points is rejected."""
        with pytest.raises(ValidationError):
            AnalyticsSettings(_env_file=None, max_chart_points=1)

    def test_window_lengths_validated(self):
        """Load windows must be positive."""
        with pytest.raises(ValidationError):
            AnalyticsSettings(_env_file=None, atl_days=0)


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_invalid_parameter_details(self):
        """The offending parameter is reported."""
        error = InvalidParameterError("bad", parameter="target_distance_m")
        assert error.to_dict() == {
            "error": {
                "code": "INVALID_PARAMETER",
                "message": "bad",
                "details": {"parameter": "target_distance_m"},
            }
        }

    def test_no_details_omitted(self):
        """Empty details are left out."""
        error = ConfigurationError("broken")
        assert "details" not in error.to_dict()["error"]
        assert error.code == ErrorCode.CONFIGURATION_ERROR

    def test_hierarchy(self):
        """Every error derives from the package base."""
        assert issubclass(InvalidParameterError, TrainingAnalyticsError)
        assert issubclass(ConfigurationError, TrainingAnalyticsError)
        assert "INVALID_PARAMETER" in repr(InvalidParameterError("x"))
