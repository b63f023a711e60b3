"""Energy estimate (report) records."""

import math
import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import Field, model_validator

from energy_analytics.models.base import FrozenModel
from energy_analytics.models.household import HouseholdProfile

# Allowed drift between a report's total and the sum of its breakdown (kWh)
BREAKDOWN_TOLERANCE_KWH = 0.01


class BudgetStatus(str, Enum):
    """Whether the estimated bill fits the declared budget."""

    WITHIN_BUDGET = "within_budget"
    OVER_BUDGET = "over_budget"


class EstimateSource(str, Enum):
    """Which estimation path produced a report."""

    LOCAL = "local"
    REMOTE = "remote"


class BudgetAnalysis(FrozenModel):
    """Bill compared against a budget.

    Attributes
    ----------
    status : BudgetStatus
        ``over_budget`` iff ``delta < 0``
    delta : float
        Budget minus estimated bill (negative when over budget)
    utilization_percent : float
        Share of the budget consumed by the bill, capped at 100
    """

    status: BudgetStatus
    delta: float
    utilization_percent: float = Field(..., ge=0, le=100)


class ApplianceBreakdownItem(FrozenModel):
    """Per-appliance share of a household estimate.

    Attributes
    ----------
    name : str
        Appliance name
    consumption_kwh : float
        Monthly consumption of this appliance line
    bill_share : float
        Part of the estimated bill attributed to this line
    percentage_of_total : float
        Share of the household total, 0 to 100
    """

    name: str = Field(..., min_length=1)
    consumption_kwh: float = Field(..., ge=0, allow_inf_nan=False)
    bill_share: float = Field(..., ge=0, allow_inf_nan=False)
    percentage_of_total: float = Field(..., ge=0, le=100)


class EnergyEstimate(FrozenModel):
    """Immutable result of one consumption and billing calculation.

    Attributes
    ----------
    id : str
        Unique report identifier
    timestamp : datetime
        Creation time (UTC)
    total_consumption_kwh : float
        Monthly consumption, equal to the sum of the breakdown
    estimated_bill : float
        Estimated monthly bill in local currency
    tariff_bracket : str
        Tariff bracket label
    rate_per_kwh : float
        Rate applied to the total
    budget_status : BudgetStatus
        Budget verdict
    budget_delta : float
        Budget minus bill
    breakdown : tuple[ApplianceBreakdownItem, ...]
        Per-appliance lines in inventory order
    household : HouseholdProfile | None
        Snapshot of the household profile the estimate was made for
    source : EstimateSource
        Local calculation or remote prediction service
    message : str | None
        Informational message, e.g. a fallback notice
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total_consumption_kwh: float = Field(..., ge=0, allow_inf_nan=False)
    estimated_bill: float = Field(..., ge=0, allow_inf_nan=False)
    tariff_bracket: str
    rate_per_kwh: float = Field(..., ge=0)
    budget_status: BudgetStatus
    budget_delta: float
    breakdown: tuple[ApplianceBreakdownItem, ...] = ()
    household: HouseholdProfile | None = None
    source: EstimateSource = EstimateSource.LOCAL
    message: str | None = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "EnergyEstimate":
        breakdown_total = sum(item.consumption_kwh for item in self.breakdown)
        if not math.isclose(
            self.total_consumption_kwh, breakdown_total, abs_tol=BREAKDOWN_TOLERANCE_KWH
        ):
            raise ValueError(
                f"total_consumption_kwh {self.total_consumption_kwh} does not match "
                f"breakdown sum {breakdown_total}"
            )
        over = self.budget_delta < 0
        if over != (self.budget_status is BudgetStatus.OVER_BUDGET):
            raise ValueError(
                f"budget_status {self.budget_status.value} contradicts budget_delta "
                f"{self.budget_delta}"
            )
        return self

    @property
    def consumption(self) -> float:
        """Shorthand for ``total_consumption_kwh``."""
        return self.total_consumption_kwh

    @property
    def appliance_names(self) -> list[str]:
        """Appliance names in breakdown order, duplicates included."""
        return [item.name for item in self.breakdown]
