"""Engine configuration from environment variables."""

import math
import os
from functools import lru_cache

from energy_analytics.config import constants
from energy_analytics.exceptions.errors import InvalidInputError


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return float(default)
    try:
        value = float(raw)
    except ValueError as e:
        raise InvalidInputError(f"{name} must be a number, got {raw!r}") from e
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite number, got {raw!r}")
    return value


class Settings:
    """Engine configuration settings loaded from environment variables."""

    def __init__(self) -> None:
        """Read every setting from the current environment."""
        # Tariff brackets
        self.TARIFF_LOW_LIMIT: float = _env_float(
            "ENERGY_TARIFF_LOW_LIMIT", constants.TARIFF_LOW_LIMIT
        )
        self.TARIFF_MID_LIMIT: float = _env_float(
            "ENERGY_TARIFF_MID_LIMIT", constants.TARIFF_MID_LIMIT
        )
        self.TARIFF_RATE_LOW: float = _env_float(
            "ENERGY_TARIFF_RATE_LOW", constants.TARIFF_RATE_LOW
        )
        self.TARIFF_RATE_MID: float = _env_float(
            "ENERGY_TARIFF_RATE_MID", constants.TARIFF_RATE_MID
        )
        self.TARIFF_RATE_HIGH: float = _env_float(
            "ENERGY_TARIFF_RATE_HIGH", constants.TARIFF_RATE_HIGH
        )

        # Segmentation
        self.SEGMENT_LOW_LIMIT: float = _env_float(
            "ENERGY_SEGMENT_LOW_LIMIT", constants.SEGMENT_LOW_LIMIT
        )
        self.SEGMENT_HIGH_LIMIT: float = _env_float(
            "ENERGY_SEGMENT_HIGH_LIMIT", constants.SEGMENT_HIGH_LIMIT
        )
        self.SEGMENT_METHOD: str = os.getenv("ENERGY_SEGMENT_METHOD", "threshold").lower()

        # Anomaly detection and recommendations
        self.ANOMALY_STD_MULTIPLIER: float = _env_float(
            "ENERGY_ANOMALY_STD_MULTIPLIER", constants.ANOMALY_STD_MULTIPLIER
        )
        self.HIGH_CONSUMPTION_KWH: float = _env_float(
            "ENERGY_HIGH_CONSUMPTION_KWH", constants.HIGH_CONSUMPTION_KWH
        )

        # Prediction service
        self.PREDICTION_URL: str | None = os.getenv("ENERGY_PREDICTION_URL") or None
        self.PREDICTION_TIMEOUT: float = _env_float("ENERGY_PREDICTION_TIMEOUT", 10)
        self.HEALTH_CACHE_TTL: float = _env_float("ENERGY_HEALTH_CACHE_TTL", 30)

        self.LOG_LEVEL: str = os.getenv("ENERGY_LOG_LEVEL", "WARNING").upper()

        self._validate()

    def _validate(self) -> None:
        if not 0 <= self.TARIFF_LOW_LIMIT < self.TARIFF_MID_LIMIT:
            raise InvalidInputError(
                "Tariff limits must satisfy 0 <= ENERGY_TARIFF_LOW_LIMIT < ENERGY_TARIFF_MID_LIMIT"
            )
        if min(self.TARIFF_RATE_LOW, self.TARIFF_RATE_MID, self.TARIFF_RATE_HIGH) < 0:
            raise InvalidInputError("Tariff rates must not be negative")
        if not 0 <= self.SEGMENT_LOW_LIMIT <= self.SEGMENT_HIGH_LIMIT:
            raise InvalidInputError(
                "Segment limits must satisfy "
                "0 <= ENERGY_SEGMENT_LOW_LIMIT <= ENERGY_SEGMENT_HIGH_LIMIT"
            )
        if self.SEGMENT_METHOD not in constants.SEGMENT_METHODS:
            raise InvalidInputError(
                f"ENERGY_SEGMENT_METHOD must be one of {constants.SEGMENT_METHODS}, "
                f"got {self.SEGMENT_METHOD!r}"
            )
        if self.ANOMALY_STD_MULTIPLIER < 0:
            raise InvalidInputError("ENERGY_ANOMALY_STD_MULTIPLIER must not be negative")
        if self.PREDICTION_TIMEOUT <= 0:
            raise InvalidInputError("ENERGY_PREDICTION_TIMEOUT must be positive")

    def __repr__(self) -> str:
        """Return string representation of settings."""
        return (
            f"Settings(TARIFF_LIMITS=({self.TARIFF_LOW_LIMIT}, {self.TARIFF_MID_LIMIT}), "
            f"TARIFF_RATES=({self.TARIFF_RATE_LOW}, {self.TARIFF_RATE_MID}, "
            f"{self.TARIFF_RATE_HIGH}), SEGMENT_METHOD={self.SEGMENT_METHOD!r}, "
            f"PREDICTION_URL={self.PREDICTION_URL!r})"
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns
    -------
    Settings
        Engine settings loaded from environment variables.

    Notes
    -----
    This function uses @lru_cache so the environment is read once per
    process. Call ``get_settings.cache_clear()`` after changing it.
    """
    return Settings()
