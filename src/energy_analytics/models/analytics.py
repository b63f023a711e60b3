"""Derived records produced by the cross-report analytics."""

from typing import Literal

from pydantic import Field

from energy_analytics.models.base import FrozenModel
from energy_analytics.models.estimate import EnergyEstimate


class InsufficientData(FrozenModel):
    """Typed "not computed" result for analyses that need more reports.

    This is a normal return value, not an error: callers distinguish it from
    a computed result that happens to contain nothing.
    """

    required: int
    available: int

    @property
    def message(self) -> str:
        return f"Need at least {self.required} reports, have {self.available}"


class Segment(FrozenModel):
    """One consumption tier and the reports that fall in it.

    Attributes
    ----------
    label : str
        Tier name (Low, Medium or High)
    lower_bound_kwh : float
        Lower tier bound
    upper_bound_kwh : float | None
        Upper tier bound, None for the open-ended top tier
    lower_inclusive : bool
        Whether a consumption equal to the lower bound belongs to this tier
    upper_inclusive : bool
        Whether a consumption equal to the upper bound belongs to this tier
    members : tuple[EnergyEstimate, ...]
        Reports in this tier, in collection order
    average_consumption_kwh : float
        Mean consumption of the members, 0 for an empty tier
    """

    label: str
    lower_bound_kwh: float
    upper_bound_kwh: float | None
    lower_inclusive: bool
    upper_inclusive: bool
    members: tuple[EnergyEstimate, ...] = ()
    average_consumption_kwh: float = 0.0

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def description(self) -> str:
        """Human-readable bound description, e.g. "30-80 kWh"."""
        if self.upper_bound_kwh is None:
            return f"> {self.lower_bound_kwh:g} kWh"
        if self.lower_bound_kwh == 0 and not self.upper_inclusive:
            return f"< {self.upper_bound_kwh:g} kWh"
        return f"{self.lower_bound_kwh:g}-{self.upper_bound_kwh:g} kWh"


class SegmentationResult(FrozenModel):
    """Output of one segmentation run: always Low, Medium, High."""

    method: Literal["threshold", "kmeans"]
    segments: tuple[Segment, Segment, Segment]
    report_count: int

    def by_label(self, label: str) -> Segment:
        for segment in self.segments:
            if segment.label == label:
                return segment
        raise KeyError(label)


class AnomalyFlag(FrozenModel):
    """A report whose consumption exceeds the anomaly threshold.

    Attributes
    ----------
    report : EnergyEstimate
        The flagged report
    deviation_from_mean : float
        Consumption minus the collection mean
    threshold_kwh : float
        Threshold that was exceeded
    ratio_to_mean : float
        Consumption divided by the mean, 0 when the mean is 0
    """

    report: EnergyEstimate
    deviation_from_mean: float
    threshold_kwh: float
    ratio_to_mean: float = 0.0


class AnomalyReport(FrozenModel):
    """Statistics and flags from one anomaly detection run."""

    mean_kwh: float
    std_dev_kwh: float = Field(..., ge=0)
    std_multiplier: float = Field(..., ge=0)
    threshold_kwh: float
    flags: tuple[AnomalyFlag, ...] = ()

    @property
    def has_anomalies(self) -> bool:
        return bool(self.flags)


class ApplianceUsage(FrozenModel):
    """How many reports list a given appliance."""

    name: str
    count: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100)


class TrendPoint(FrozenModel):
    """One point of the consumption/bill series, 1-based."""

    index: int = Field(..., ge=1)
    consumption_kwh: float
    bill: float


class ReportSummary(FrozenModel):
    """Headline statistics over a report collection."""

    report_count: int = 0
    total_consumption_kwh: float = 0.0
    average_consumption_kwh: float = 0.0
    average_bill: float = 0.0
    max_consumption_kwh: float = 0.0
    min_consumption_kwh: float = 0.0
    max_bill: float = 0.0
    min_bill: float = 0.0
    most_common_region: str | None = None
    most_common_tariff: str | None = None
    average_household_size: float = 0.0


class Recommendation(FrozenModel):
    """Energy-saving advice for one estimate."""

    text: str
    kind: Literal["warning", "success"]
