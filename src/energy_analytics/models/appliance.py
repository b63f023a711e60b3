"""Appliance inventory records."""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import AliasChoices, Field

from energy_analytics.exceptions.errors import InvalidInputError
from energy_analytics.models.base import FrozenModel


class ApplianceEntry(FrozenModel):
    """One appliance line of a household inventory.

    Attributes
    ----------
    name : str
        Appliance name, e.g. "Refrigerator"
    power_watts : float
        Rated power in watts
    hours_per_day : float
        Average daily usage in hours
    quantity : int
        Number of identical units
    usage_days_per_month : int
        Days per month the appliance is used
    """

    name: str = Field(..., min_length=1, description="Appliance name")
    power_watts: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("power_watts", "power", "powerWatts"),
        description="Rated power in watts",
    )
    hours_per_day: float = Field(
        ...,
        ge=0,
        le=24,
        allow_inf_nan=False,
        validation_alias=AliasChoices("hours_per_day", "hours", "hoursPerDay"),
        description="Usage hours per day",
    )
    quantity: int = Field(1, ge=1, description="Number of units")
    usage_days_per_month: int = Field(
        30,
        ge=1,
        le=31,
        validation_alias=AliasChoices(
            "usage_days_per_month", "usage_days", "usageDays", "usageDaysPerMonth"
        ),
        description="Usage days per month",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Refrigerator",
                "power_watts": 150,
                "hours_per_day": 8,
                "quantity": 1,
                "usage_days_per_month": 30,
            }
        }
    }


def parse_appliance(raw: Mapping[str, Any] | ApplianceEntry) -> ApplianceEntry:
    """Validate one appliance from raw input.

    Raises
    ------
    InvalidInputError
        If any field is missing or out of range
    """
    return ApplianceEntry.parse(raw)


def parse_inventory(
    raw_items: Iterable[Mapping[str, Any] | ApplianceEntry],
) -> tuple[ApplianceEntry, ...]:
    """Validate a whole inventory, rejecting it on the first invalid entry."""
    inventory = []
    for position, raw in enumerate(raw_items, start=1):
        try:
            inventory.append(parse_appliance(raw))
        except InvalidInputError as e:
            raise InvalidInputError(f"Appliance #{position}: {e}") from e
    return tuple(inventory)
