"""Read-only aggregations over a report collection for dashboards.

Every function accepts any sequence of reports, including an empty one, and
never mutates it. Categories keep first-seen order.
"""

from collections import Counter
from collections.abc import Sequence

from energy_analytics.config.constants import UNKNOWN_CATEGORY
from energy_analytics.models.analytics import ApplianceUsage, ReportSummary, TrendPoint
from energy_analytics.models.estimate import EnergyEstimate


def _region_of(report: EnergyEstimate) -> str:
    if report.household is None:
        return UNKNOWN_CATEGORY
    return report.household.region.value


def _income_of(report: EnergyEstimate) -> str:
    if report.household is None:
        return UNKNOWN_CATEGORY
    return report.household.income_level.value


def _most_common(counts: dict[str, int]) -> str | None:
    if not counts:
        return None
    # max() keeps the first of equal counts, i.e. the first seen
    return max(counts.items(), key=lambda item: item[1])[0]


def region_distribution(reports: Sequence[EnergyEstimate]) -> dict[str, int]:
    """Count reports per household region ("Unknown" when missing)."""
    return dict(Counter(_region_of(r) for r in reports))


def tariff_distribution(reports: Sequence[EnergyEstimate]) -> dict[str, int]:
    """Count reports per tariff bracket."""
    return dict(Counter(r.tariff_bracket or UNKNOWN_CATEGORY for r in reports))


def income_average_consumption(reports: Sequence[EnergyEstimate]) -> dict[str, float]:
    """Average consumption per income level."""
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    for report in reports:
        income = _income_of(report)
        totals[income] = totals.get(income, 0.0) + report.total_consumption_kwh
        counts[income] = counts.get(income, 0) + 1
    return {income: totals[income] / counts[income] for income in totals}


def appliance_usage_frequency(reports: Sequence[EnergyEstimate]) -> list[ApplianceUsage]:
    """Share of reports listing each appliance.

    An appliance counts once per report no matter how many lines carry its
    name. Results are sorted by count, descending; equal counts keep the
    order in which the names were first seen.

    Parameters
    ----------
    reports : Sequence[EnergyEstimate]
        Snapshot of the report collection

    Returns
    -------
    list[ApplianceUsage]
        One entry per distinct appliance name
    """
    counts: dict[str, int] = {}
    for report in reports:
        for name in dict.fromkeys(report.appliance_names):
            counts[name] = counts.get(name, 0) + 1

    total = len(reports)
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [
        ApplianceUsage(name=name, count=count, percentage=count / total * 100)
        for name, count in ranked
    ]


def consumption_trend(reports: Sequence[EnergyEstimate]) -> list[TrendPoint]:
    """Consumption and bill series in insertion order, indexed from 1."""
    return [
        TrendPoint(index=i, consumption_kwh=r.total_consumption_kwh, bill=r.estimated_bill)
        for i, r in enumerate(reports, start=1)
    ]


def summarize_reports(reports: Sequence[EnergyEstimate]) -> ReportSummary:
    """Headline statistics for the analysis dashboard.

    Parameters
    ----------
    reports : Sequence[EnergyEstimate]
        Snapshot of the report collection

    Returns
    -------
    ReportSummary
        All-zero summary with no most-common categories for an empty input

    Notes
    -----
    Household size is averaged over reports that carry a household profile.
    """
    if not reports:
        return ReportSummary()

    count = len(reports)
    consumptions = [r.total_consumption_kwh for r in reports]
    bills = [r.estimated_bill for r in reports]
    sizes = [r.household.household_size for r in reports if r.household is not None]
    total_consumption = sum(consumptions)

    return ReportSummary(
        report_count=count,
        total_consumption_kwh=total_consumption,
        average_consumption_kwh=total_consumption / count,
        average_bill=sum(bills) / count,
        max_consumption_kwh=max(consumptions),
        min_consumption_kwh=min(consumptions),
        max_bill=max(bills),
        min_bill=min(bills),
        most_common_region=_most_common(region_distribution(reports)),
        most_common_tariff=_most_common(tariff_distribution(reports)),
        average_household_size=sum(sizes) / len(sizes) if sizes else 0.0,
    )
