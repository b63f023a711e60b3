"""Household profile supplied with every estimate request."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import AliasChoices, Field

from energy_analytics.models.base import FrozenModel


class Region(str, Enum):
    """Known service regions."""

    KIGALI = "Kigali"
    EASTERN = "Eastern"
    WESTERN = "Western"
    NORTHERN = "Northern"
    SOUTHERN = "Southern"


class IncomeLevel(str, Enum):
    """Declared household income band."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class HouseholdProfile(FrozenModel):
    """Household details captured alongside the appliance inventory.

    Attributes
    ----------
    region : Region
        Service region
    income_level : IncomeLevel
        Income band
    household_size : int
        Number of occupants
    monthly_budget : float
        Monthly electricity budget in local currency
    declared_appliance_count : int | None
        Appliance count as declared by the user, if given
    """

    region: Region
    income_level: IncomeLevel = Field(
        ..., validation_alias=AliasChoices("income_level", "incomeLevel")
    )
    household_size: int = Field(
        ..., ge=1, validation_alias=AliasChoices("household_size", "householdSize")
    )
    monthly_budget: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("monthly_budget", "monthlyBudget", "budget"),
    )
    declared_appliance_count: int | None = Field(
        None,
        ge=0,
        validation_alias=AliasChoices(
            "declared_appliance_count", "declaredApplianceCount", "appliances_count"
        ),
    )


def parse_household(raw: Mapping[str, Any] | HouseholdProfile) -> HouseholdProfile:
    """Validate a household profile from raw input.

    Raises
    ------
    InvalidInputError
        If a field is missing or out of range
    """
    return HouseholdProfile.parse(raw)
