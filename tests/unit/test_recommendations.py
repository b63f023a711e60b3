"""Unit tests for energy-saving recommendations."""

from energy_analytics.config import get_settings
from energy_analytics.services.recommendations import (
    HIGH_CONSUMPTION_TIP,
    LED_TIP,
    OVER_BUDGET_TIP,
    recommend,
)


class TestRecommend:
    """Tests for recommend."""

    def test_modest_household_gets_led_tip_only(self, make_report):
        """Test that the LED tip is always present."""
        tips = recommend(make_report(36))
        assert [t.text for t in tips] == [LED_TIP]
        assert tips[0].kind == "success"

    def test_high_consumption_warning_first(self, make_report):
        """Test the high-usage warning above 100 kWh."""
        tips = recommend(make_report(150, budget=1_000_000))
        assert [t.text for t in tips] == [HIGH_CONSUMPTION_TIP, LED_TIP]
        assert tips[0].kind == "warning"

    def test_threshold_is_exclusive(self, make_report):
        """Test that exactly 100 kWh does not trigger the warning."""
        tips = recommend(make_report(100, budget=1_000_000))
        assert HIGH_CONSUMPTION_TIP not in [t.text for t in tips]

    def test_over_budget_warning_last(self, make_report):
        """Test the budget warning for an over-budget estimate."""
        tips = recommend(make_report(150, budget=100))
        assert [t.text for t in tips] == [HIGH_CONSUMPTION_TIP, LED_TIP, OVER_BUDGET_TIP]

    def test_custom_threshold(self, make_report):
        """Test overriding the high-consumption threshold."""
        tips = recommend(make_report(36), high_consumption_kwh=30)
        assert tips[0].text == HIGH_CONSUMPTION_TIP

    def test_threshold_from_environment(self, monkeypatch, make_report):
        """Test reading the threshold from configuration."""
        monkeypatch.setenv("ENERGY_HIGH_CONSUMPTION_KWH", "20")
        get_settings.cache_clear()
        tips = recommend(make_report(36))
        assert tips[0].text == HIGH_CONSUMPTION_TIP
