"""Engine services: estimation, budget analysis and report analytics."""

__all__ = [
    "EstimationService",
    "PredictionAttempt",
    "PredictionClient",
    "ReportLog",
    "analyze_budget",
    "appliance_usage_frequency",
    "consumption_trend",
    "detect_anomalies",
    "estimate_locally",
    "income_average_consumption",
    "monthly_consumption",
    "recommend",
    "region_distribution",
    "segment_reports",
    "summarize_reports",
    "tariff_distribution",
]

from energy_analytics.services.aggregator import (
    appliance_usage_frequency,
    consumption_trend,
    income_average_consumption,
    region_distribution,
    summarize_reports,
    tariff_distribution,
)
from energy_analytics.services.anomaly import detect_anomalies
from energy_analytics.services.budget import analyze_budget
from energy_analytics.services.calculator import estimate_locally, monthly_consumption
from energy_analytics.services.estimator import EstimationService
from energy_analytics.services.prediction_client import PredictionAttempt, PredictionClient
from energy_analytics.services.recommendations import recommend
from energy_analytics.services.reports import ReportLog
from energy_analytics.services.segmentation import segment_reports
