"""Budget variance analysis."""

import math

from energy_analytics.exceptions.errors import InvalidInputError
from energy_analytics.models.estimate import BudgetAnalysis, BudgetStatus


def analyze_budget(estimated_bill: float, monthly_budget: float) -> BudgetAnalysis:
    """Compare an estimated bill with the household's monthly budget.

    Parameters
    ----------
    estimated_bill : float
        Estimated monthly bill
    monthly_budget : float
        Declared monthly budget

    Returns
    -------
    BudgetAnalysis
        ``delta = budget - bill``; status is over_budget iff delta < 0

    Raises
    ------
    InvalidInputError
        If either amount is negative or not finite
    """
    if not math.isfinite(monthly_budget) or monthly_budget < 0:
        raise InvalidInputError(f"Monthly budget must be >= 0, got {monthly_budget}")
    if not math.isfinite(estimated_bill) or estimated_bill < 0:
        raise InvalidInputError(f"Estimated bill must be >= 0, got {estimated_bill}")

    delta = monthly_budget - estimated_bill
    status = BudgetStatus.OVER_BUDGET if delta < 0 else BudgetStatus.WITHIN_BUDGET

    if monthly_budget > 0:
        utilization = min(estimated_bill / monthly_budget * 100, 100.0)
    else:
        utilization = 100.0 if estimated_bill > 0 else 0.0

    return BudgetAnalysis(status=status, delta=delta, utilization_percent=utilization)
