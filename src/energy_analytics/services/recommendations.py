"""Energy-saving recommendations for a single estimate."""

from energy_analytics.config import get_settings
from energy_analytics.models.analytics import Recommendation
from energy_analytics.models.estimate import BudgetStatus, EnergyEstimate

HIGH_CONSUMPTION_TIP = (
    "High consumption detected! Consider reducing AC usage by 2 hours daily to save ~15 kWh"
)
LED_TIP = "Switch to LED bulbs to reduce lighting costs by up to 75%"
OVER_BUDGET_TIP = "Budget exceeded! Reduce high-power appliance usage during peak hours"


def recommend(
    estimate: EnergyEstimate, high_consumption_kwh: float | None = None
) -> list[Recommendation]:
    """Build the ordered list of tips for an estimate.

    Parameters
    ----------
    estimate : EnergyEstimate
        Estimate to advise on
    high_consumption_kwh : float | None, optional
        Consumption above which the high-usage warning is shown, by default
        from settings (100 kWh)

    Returns
    -------
    list[Recommendation]
        Warnings and tips; the LED tip is always present
    """
    if high_consumption_kwh is None:
        high_consumption_kwh = get_settings().HIGH_CONSUMPTION_KWH

    tips = []
    if estimate.total_consumption_kwh > high_consumption_kwh:
        tips.append(Recommendation(text=HIGH_CONSUMPTION_TIP, kind="warning"))
    tips.append(Recommendation(text=LED_TIP, kind="success"))
    if estimate.budget_status is BudgetStatus.OVER_BUDGET:
        tips.append(Recommendation(text=OVER_BUDGET_TIP, kind="warning"))
    return tips
