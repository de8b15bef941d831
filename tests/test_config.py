"""Tests for environment-driven settings."""

from datetime import timedelta

import pytest

from linewait.config import Settings
from linewait.core.estimator import EstimatorConfig


class TestSettings:
    def test_defaults_match_canonical_config(self) -> None:
        assert Settings().estimator_config() == EstimatorConfig()

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINEWAIT_MAX_REPORT_AGE_MINUTES", "240")
        monkeypatch.setenv("LINEWAIT_DECAY_BASE", "0.6")
        config = Settings().estimator_config()
        assert config.max_report_age == timedelta(hours=4)
        assert config.decay_base == 0.6

    def test_invalid_decay_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINEWAIT_DECAY_BASE", "1.2")
        with pytest.raises(ValueError):
            Settings().estimator_config()
