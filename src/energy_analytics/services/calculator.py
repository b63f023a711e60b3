"""Local, deterministic consumption and billing calculator."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from energy_analytics.exceptions.errors import InvalidInputError
from energy_analytics.models.appliance import ApplianceEntry, parse_appliance, parse_inventory
from energy_analytics.models.estimate import (
    ApplianceBreakdownItem,
    EnergyEstimate,
    EstimateSource,
)
from energy_analytics.models.household import HouseholdProfile, parse_household
from energy_analytics.models.tariff import Tariff
from energy_analytics.services.budget import analyze_budget

logger = logging.getLogger(__name__)


def daily_consumption(appliance: ApplianceEntry | Mapping[str, Any]) -> float:
    """Daily energy use of one appliance line in kWh."""
    entry = parse_appliance(appliance)
    return entry.power_watts * entry.hours_per_day * entry.quantity / 1000


def monthly_consumption(appliance: ApplianceEntry | Mapping[str, Any]) -> float:
    """Monthly energy use of one appliance line in kWh.

    Equal to ``daily_consumption * usage_days_per_month``, computed with a
    single division so whole-watt inputs give exact results.

    Raises
    ------
    InvalidInputError
        If ``appliance`` is a mapping with missing or out-of-range fields
    """
    entry = parse_appliance(appliance)
    return (
        entry.power_watts * entry.hours_per_day * entry.quantity * entry.usage_days_per_month / 1000
    )


def build_breakdown(
    appliances: Iterable[ApplianceEntry], rate_per_kwh: float
) -> tuple[tuple[ApplianceBreakdownItem, ...], float]:
    """Compute per-appliance lines and their total.

    Returns
    -------
    tuple[tuple[ApplianceBreakdownItem, ...], float]
        Breakdown in inventory order and the total consumption in kWh
    """
    consumptions = [(entry.name, monthly_consumption(entry)) for entry in appliances]
    total = sum(kwh for _, kwh in consumptions)
    breakdown = tuple(
        ApplianceBreakdownItem(
            name=name,
            consumption_kwh=kwh,
            bill_share=kwh * rate_per_kwh,
            percentage_of_total=kwh / total * 100 if total > 0 else 0.0,
        )
        for name, kwh in consumptions
    )
    return breakdown, total


def estimate_locally(
    appliances: Iterable[ApplianceEntry | Mapping[str, Any]],
    household: HouseholdProfile | Mapping[str, Any],
    tariff: Tariff | None = None,
    message: str | None = None,
) -> EnergyEstimate:
    """Estimate monthly consumption and bill without any remote service.

    Parameters
    ----------
    appliances : Iterable[ApplianceEntry | Mapping]
        Appliance inventory; raw mappings are validated first
    household : HouseholdProfile | Mapping
        Household profile; a raw mapping is validated first
    tariff : Tariff | None, optional
        Tariff to bill with, by default built from settings
    message : str | None, optional
        Informational message stored on the estimate

    Returns
    -------
    EnergyEstimate
        Estimate with a fresh id and UTC timestamp

    Raises
    ------
    InvalidInputError
        If the inventory is empty or any input is invalid
    """
    inventory = parse_inventory(appliances)
    if not inventory:
        raise InvalidInputError("At least one appliance is required to estimate consumption")
    profile = parse_household(household)
    tariff = tariff or Tariff.from_settings()

    # Rate depends on the total, so classify before building the billed lines
    total = sum(monthly_consumption(entry) for entry in inventory)
    bracket = tariff.classify(total)
    breakdown, total = build_breakdown(inventory, bracket.rate)

    bill = total * bracket.rate
    budget = analyze_budget(bill, profile.monthly_budget)

    estimate = EnergyEstimate(
        total_consumption_kwh=total,
        estimated_bill=bill,
        tariff_bracket=bracket.label,
        rate_per_kwh=bracket.rate,
        budget_status=budget.status,
        budget_delta=budget.delta,
        breakdown=breakdown,
        household=profile,
        source=EstimateSource.LOCAL,
        message=message,
    )
    logger.debug(
        f"Local estimate {estimate.id}: {total:.2f} kWh, bracket {bracket.label}, "
        f"bill {bill:.2f}, {budget.status.value}"
    )
    return estimate
