"""Tiered residential electricity tariff."""

import math

from pydantic import Field, model_validator

from energy_analytics.config import Settings, get_settings
from energy_analytics.exceptions.errors import InvalidInputError
from energy_analytics.models.base import FrozenModel


class TariffBracket(FrozenModel):
    """A consumption range billed at a single rate.

    Attributes
    ----------
    label : str
        Bracket name, e.g. "21-50 kWh"
    lower_bound : float
        Exclusive lower bound in kWh (0 is inclusive for the first bracket)
    upper_bound : float | None
        Inclusive upper bound in kWh, None for the open-ended top bracket
    rate : float
        Price per kWh in local currency
    """

    label: str = Field(..., min_length=1)
    lower_bound: float = Field(..., ge=0)
    upper_bound: float | None = None
    rate: float = Field(..., ge=0)

    def contains(self, total_kwh: float) -> bool:
        """Return True if ``total_kwh`` falls inside this bracket."""
        if self.lower_bound == 0:
            above = total_kwh >= 0
        else:
            above = total_kwh > self.lower_bound
        below = self.upper_bound is None or total_kwh <= self.upper_bound
        return above and below


class Tariff(FrozenModel):
    """Ordered, contiguous set of tariff brackets covering [0, +inf)."""

    brackets: tuple[TariffBracket, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_contiguous(self) -> "Tariff":
        if self.brackets[0].lower_bound != 0:
            raise ValueError("first bracket must start at 0 kWh")
        for previous, current in zip(self.brackets, self.brackets[1:]):
            if previous.upper_bound is None:
                raise ValueError(f"bracket {previous.label!r} is open-ended but not last")
            if current.lower_bound != previous.upper_bound:
                raise ValueError(
                    f"bracket {current.label!r} does not start where {previous.label!r} ends"
                )
        if self.brackets[-1].upper_bound is not None:
            raise ValueError("last bracket must be open-ended")
        return self

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Tariff":
        """Build the three-bracket residential tariff from configuration.

        Parameters
        ----------
        settings : Settings | None, optional
            Settings to read, by default the cached process settings

        Returns
        -------
        Tariff
            Tariff with low, middle and open-ended high brackets
        """
        settings = settings or get_settings()
        low, mid = settings.TARIFF_LOW_LIMIT, settings.TARIFF_MID_LIMIT
        return cls(
            brackets=(
                TariffBracket(
                    label=f"0-{low:g} kWh",
                    lower_bound=0,
                    upper_bound=low,
                    rate=settings.TARIFF_RATE_LOW,
                ),
                TariffBracket(
                    label=f"{low + 1:g}-{mid:g} kWh",
                    lower_bound=low,
                    upper_bound=mid,
                    rate=settings.TARIFF_RATE_MID,
                ),
                TariffBracket(
                    label=f"{mid:g}+ kWh",
                    lower_bound=mid,
                    upper_bound=None,
                    rate=settings.TARIFF_RATE_HIGH,
                ),
            )
        )

    def classify(self, total_kwh: float) -> TariffBracket:
        """Map a monthly consumption total to its bracket.

        Parameters
        ----------
        total_kwh : float
            Total monthly consumption in kWh

        Returns
        -------
        TariffBracket
            The single bracket containing ``total_kwh``

        Raises
        ------
        InvalidInputError
            If ``total_kwh`` is negative or not a finite number
        """
        if not math.isfinite(total_kwh) or total_kwh < 0:
            raise InvalidInputError(f"Consumption must be a finite value >= 0, got {total_kwh}")
        for bracket in self.brackets:
            if bracket.contains(total_kwh):
                return bracket
        # unreachable for a validated tariff
        raise InvalidInputError(f"No tariff bracket covers {total_kwh} kWh")

    def rate_for(self, label: str) -> float | None:
        """Return the rate of the bracket named ``label``, or None if unknown."""
        for bracket in self.brackets:
            if bracket.label == label:
                return bracket.rate
        return None
