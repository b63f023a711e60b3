"""Shared pytest fixtures for energy analytics tests."""

import pytest

from energy_analytics.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings around every test.

    Yields
    ------
    None
        Control during the test
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# Input Fixtures
@pytest.fixture
def fridge():
    """Appliance from the 150 W / 8 h / 30 day worked example.

    Returns
    -------
    dict
        Raw appliance fields
    """
    return {
        "name": "Refrigerator",
        "power_watts": 150,
        "hours_per_day": 8,
        "quantity": 1,
        "usage_days_per_month": 30,
    }


@pytest.fixture
def household():
    """Household profile for Kigali with a 50 000 budget.

    Returns
    -------
    HouseholdProfile
        Validated household profile
    """
    from energy_analytics.models import HouseholdProfile

    return HouseholdProfile(
        region="Kigali",
        income_level="Medium",
        household_size=4,
        monthly_budget=50000,
    )


@pytest.fixture
def tariff():
    """Default three-bracket tariff.

    Returns
    -------
    Tariff
        Tariff built from default settings
    """
    from energy_analytics.models import Tariff

    return Tariff.from_settings()


# Report Fixtures
@pytest.fixture
def make_report(tariff):
    """Factory for consistent reports with a chosen consumption.

    Parameters
    ----------
    tariff : Tariff
        Tariff used to bill the report

    Returns
    -------
    callable
        ``make_report(consumption, region=..., income_level=..., appliances=...)``
    """
    from energy_analytics.models import ApplianceBreakdownItem, EnergyEstimate, HouseholdProfile
    from energy_analytics.services.budget import analyze_budget

    def _make(
        consumption,
        region="Kigali",
        income_level="Medium",
        appliances=("Refrigerator",),
        household_size=4,
        budget=50000,
        with_household=True,
    ):
        bracket = tariff.classify(consumption)
        bill = consumption * bracket.rate
        share = consumption / len(appliances)
        breakdown = tuple(
            ApplianceBreakdownItem(
                name=name,
                consumption_kwh=share,
                bill_share=share * bracket.rate,
                percentage_of_total=100 / len(appliances) if consumption else 0.0,
            )
            for name in appliances
        )
        status = analyze_budget(bill, budget)
        profile = (
            HouseholdProfile(
                region=region,
                income_level=income_level,
                household_size=household_size,
                monthly_budget=budget,
            )
            if with_household
            else None
        )
        return EnergyEstimate(
            total_consumption_kwh=consumption,
            estimated_bill=bill,
            tariff_bracket=bracket.label,
            rate_per_kwh=bracket.rate,
            budget_status=status.status,
            budget_delta=status.delta,
            breakdown=breakdown,
            household=profile,
        )

    return _make


@pytest.fixture
def three_reports(make_report):
    """Reports consuming 10, 40 and 200 kWh.

    Returns
    -------
    list[EnergyEstimate]
        Reports in insertion order
    """
    return [
        make_report(10, region="Eastern", income_level="Low"),
        make_report(40, region="Kigali", income_level="Medium"),
        make_report(200, region="Kigali", income_level="High"),
    ]
