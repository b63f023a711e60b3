"""Unit tests for the appliance calculator and local estimator."""

import pytest

from energy_analytics.exceptions.errors import InvalidInputError
from energy_analytics.models import BudgetStatus, EstimateSource
from energy_analytics.services.calculator import (
    daily_consumption,
    estimate_locally,
    monthly_consumption,
)


class TestApplianceConsumption:
    """Tests for per-appliance consumption."""

    def test_daily_consumption(self, fridge):
        """Test 150 W for 8 h is 1.2 kWh per day."""
        assert daily_consumption(fridge) == pytest.approx(1.2)

    def test_monthly_consumption(self, fridge):
        """Test 150 W for 8 h over 30 days is 36 kWh."""
        assert monthly_consumption(fridge) == 36

    def test_quantity_multiplies(self, fridge):
        """Test that quantity scales consumption linearly."""
        fridge["quantity"] = 3
        assert monthly_consumption(fridge) == pytest.approx(108)

    def test_usage_days_scale(self, fridge):
        """Test that fewer usage days lower consumption."""
        fridge["usage_days_per_month"] = 15
        assert monthly_consumption(fridge) == pytest.approx(18)

    def test_text_values_are_parsed(self):
        """Test that numeric form strings are accepted once at the boundary."""
        raw = {"name": "TV", "power": "100", "hours": "4", "usageDays": "30"}
        assert monthly_consumption(raw) == pytest.approx(12)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("name", ""),
            ("name", "   "),
            ("power_watts", 0),
            ("power_watts", -5),
            ("hours_per_day", -1),
            ("hours_per_day", 24.5),
            ("quantity", 0),
            ("usage_days_per_month", 0),
            ("usage_days_per_month", 32),
        ],
    )
    def test_out_of_range_fields_rejected(self, fridge, field, value):
        """Test that every range violation raises InvalidInputError."""
        fridge[field] = value
        with pytest.raises(InvalidInputError):
            monthly_consumption(fridge)

    def test_missing_field_rejected(self, fridge):
        """Test that a missing power rating is rejected."""
        del fridge["power_watts"]
        with pytest.raises(InvalidInputError, match="power_watts"):
            monthly_consumption(fridge)


class TestLocalEstimate:
    """Tests for the household estimator."""

    def test_single_appliance_scenario(self, fridge, household):
        """Test 36 kWh lands in 21-50 kWh at 141 for a 5076 bill."""
        estimate = estimate_locally([fridge], household)

        assert estimate.total_consumption_kwh == 36
        assert estimate.tariff_bracket == "21-50 kWh"
        assert estimate.rate_per_kwh == 141
        assert estimate.estimated_bill == pytest.approx(5076)
        assert estimate.budget_status is BudgetStatus.WITHIN_BUDGET
        assert estimate.budget_delta == pytest.approx(50000 - 5076)
        assert estimate.source is EstimateSource.LOCAL
        assert estimate.household == household

    def test_total_equals_sum_of_appliances(self, fridge, household):
        """Test that the total is the sum of independently computed lines."""
        appliances = [
            fridge,
            {"name": "TV", "power_watts": 100, "hours_per_day": 4},
            {
                "name": "Fan",
                "power_watts": 45.5,
                "hours_per_day": 6.5,
                "quantity": 2,
                "usage_days_per_month": 22,
            },
        ]
        estimate = estimate_locally(appliances, household)

        expected = sum(monthly_consumption(a) for a in appliances)
        assert estimate.total_consumption_kwh == pytest.approx(expected)
        assert estimate.total_consumption_kwh == pytest.approx(
            sum(item.consumption_kwh for item in estimate.breakdown)
        )

    def test_breakdown_shares(self, fridge, household):
        """Test percentages and bill shares of a two-appliance inventory."""
        tv = {"name": "TV", "power_watts": 100, "hours_per_day": 4}
        estimate = estimate_locally([fridge, tv], household)

        assert estimate.total_consumption_kwh == pytest.approx(48)
        assert [item.name for item in estimate.breakdown] == ["Refrigerator", "TV"]
        assert estimate.breakdown[0].percentage_of_total == pytest.approx(75)
        assert estimate.breakdown[1].percentage_of_total == pytest.approx(25)
        assert estimate.breakdown[0].bill_share == pytest.approx(36 * 141)
        assert estimate.estimated_bill == pytest.approx(48 * 141)

    def test_zero_total_has_zero_percentages(self, household):
        """Test that a zero-hour inventory yields 0 percentages, not NaN."""
        idle = {"name": "Heater", "power_watts": 2000, "hours_per_day": 0}
        estimate = estimate_locally([idle], household)

        assert estimate.total_consumption_kwh == 0
        assert estimate.estimated_bill == 0
        assert estimate.tariff_bracket == "0-20 kWh"
        assert estimate.breakdown[0].percentage_of_total == 0

    def test_high_bracket(self, household):
        """Test that consumption above 50 kWh is billed at 171."""
        ac = {"name": "Air Conditioner", "power_watts": 1500, "hours_per_day": 2}
        estimate = estimate_locally([ac], household)

        assert estimate.total_consumption_kwh == pytest.approx(90)
        assert estimate.tariff_bracket == "50+ kWh"
        assert estimate.estimated_bill == pytest.approx(90 * 171)

    def test_over_budget(self, household):
        """Test that a bill above the budget is flagged over_budget."""
        profile = household.model_copy(update={"monthly_budget": 1000})
        ac = {"name": "Air Conditioner", "power_watts": 1500, "hours_per_day": 2}
        estimate = estimate_locally([ac], profile)

        assert estimate.budget_status is BudgetStatus.OVER_BUDGET
        assert estimate.budget_delta == pytest.approx(1000 - 90 * 171)

    def test_empty_inventory_rejected(self, household):
        """Test that an estimate needs at least one appliance."""
        with pytest.raises(InvalidInputError):
            estimate_locally([], household)

    def test_invalid_appliance_position_reported(self, fridge, household):
        """Test that the failing inventory position is named."""
        bad = {"name": "Broken", "power_watts": -1, "hours_per_day": 1}
        with pytest.raises(InvalidInputError, match="Appliance #2"):
            estimate_locally([fridge, bad], household)

    def test_fresh_ids(self, fridge, household):
        """Test that every estimate gets its own id."""
        first = estimate_locally([fridge], household)
        second = estimate_locally([fridge], household)
        assert first.id != second.id
        assert first.timestamp.tzinfo is not None

    def test_message_is_kept(self, fridge, household):
        """Test that an informational message is stored on the estimate."""
        estimate = estimate_locally([fridge], household, message="offline")
        assert estimate.message == "offline"
