"""Pydantic models for engine inputs, reports and analytics results."""

__all__ = [
    "AnomalyFlag",
    "AnomalyReport",
    "ApplianceBreakdownItem",
    "ApplianceEntry",
    "ApplianceUsage",
    "BudgetAnalysis",
    "BudgetStatus",
    "EnergyEstimate",
    "EstimateSource",
    "HouseholdProfile",
    "IncomeLevel",
    "InsufficientData",
    "Recommendation",
    "Region",
    "ReportSummary",
    "Segment",
    "SegmentationResult",
    "Tariff",
    "TariffBracket",
    "TrendPoint",
    "parse_appliance",
    "parse_household",
    "parse_inventory",
]

from energy_analytics.models.analytics import (
    AnomalyFlag,
    AnomalyReport,
    ApplianceUsage,
    InsufficientData,
    Recommendation,
    ReportSummary,
    Segment,
    SegmentationResult,
    TrendPoint,
)
from energy_analytics.models.appliance import ApplianceEntry, parse_appliance, parse_inventory
from energy_analytics.models.estimate import (
    ApplianceBreakdownItem,
    BudgetAnalysis,
    BudgetStatus,
    EnergyEstimate,
    EstimateSource,
)
from energy_analytics.models.household import (
    HouseholdProfile,
    IncomeLevel,
    Region,
    parse_household,
)
from energy_analytics.models.tariff import Tariff, TariffBracket
