"""Application configuration loaded from environment variables."""

from __future__ import annotations

from datetime import timedelta

from pydantic_settings import BaseSettings

from linewait.core.estimator import EstimatorConfig


class Settings(BaseSettings):
    app_name: str = "linewait"
    debug: bool = False
    log_level: str = "INFO"

    # Estimator constants (defaults are the canonical values)
    max_report_age_minutes: int = 120
    decay_base: float = 0.8
    vote_impact_factor: float = 0.2
    max_report_minutes: int = 999
    confidence_saturation_reports: int = 5

    model_config = {"env_prefix": "LINEWAIT_"}

    def estimator_config(self) -> EstimatorConfig:
        """Build the estimator's config; raises ValueError on nonsensical values."""
        return EstimatorConfig(
            max_report_age=timedelta(minutes=self.max_report_age_minutes),
            decay_base=self.decay_base,
            vote_impact_factor=self.vote_impact_factor,
            max_report_minutes=self.max_report_minutes,
            confidence_saturation_reports=self.confidence_saturation_reports,
        )


settings = Settings()
