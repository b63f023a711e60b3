"""Household energy consumption, billing and report analytics engine."""

__all__ = [
    "ApplianceEntry",
    "EnergyEstimate",
    "EstimationService",
    "HouseholdProfile",
    "InsufficientData",
    "InvalidInputError",
    "ReportLog",
    "ServiceUnavailableError",
    "Tariff",
    "detect_anomalies",
    "estimate_locally",
    "init_console_logging",
    "segment_reports",
]

from energy_analytics.exceptions.errors import InvalidInputError, ServiceUnavailableError
from energy_analytics.models import (
    ApplianceEntry,
    EnergyEstimate,
    HouseholdProfile,
    InsufficientData,
    Tariff,
)
from energy_analytics.services import (
    EstimationService,
    ReportLog,
    detect_anomalies,
    estimate_locally,
    segment_reports,
)
from energy_analytics.utils.logging_config import init_console_logging
