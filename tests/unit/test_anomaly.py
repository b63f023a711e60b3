"""Unit tests for statistical anomaly detection."""

import pytest

from energy_analytics.config import get_settings
from energy_analytics.exceptions.errors import InvalidInputError
from energy_analytics.models import AnomalyReport, InsufficientData
from energy_analytics.services.anomaly import detect_anomalies


class TestDetectAnomalies:
    """Tests for detect_anomalies."""

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_fewer_than_three_reports(self, make_report, count):
        """Test that small collections return InsufficientData."""
        result = detect_anomalies([make_report(100) for _ in range(count)])
        assert isinstance(result, InsufficientData)
        assert result.available == count

    def test_visual_outlier_below_threshold(self, three_reports):
        """Test 10/40/200 kWh: 200 stays under mean + 2 std."""
        result = detect_anomalies(three_reports)

        assert isinstance(result, AnomalyReport)
        assert result.mean_kwh == pytest.approx(83.333, abs=0.001)
        assert result.std_dev_kwh == pytest.approx(83.400, abs=0.001)
        assert result.threshold_kwh == pytest.approx(250.133, abs=0.001)
        assert result.flags == ()
        assert not result.has_anomalies

    def test_outlier_flagged(self, make_report):
        """Test a single spike among steady households."""
        reports = [make_report(10) for _ in range(9)] + [make_report(100)]
        result = detect_anomalies(reports)

        assert result.mean_kwh == pytest.approx(19)
        assert result.std_dev_kwh == pytest.approx(27)
        assert result.threshold_kwh == pytest.approx(73)
        assert len(result.flags) == 1
        flag = result.flags[0]
        assert flag.report is reports[-1]
        assert flag.deviation_from_mean == pytest.approx(81)
        assert flag.threshold_kwh == pytest.approx(73)
        assert flag.ratio_to_mean == pytest.approx(100 / 19)

    def test_equal_consumptions_never_flagged(self, make_report):
        """Test that zero variance flags nothing, even with k = 0."""
        reports = [make_report(42) for _ in range(5)]

        assert detect_anomalies(reports).flags == ()
        assert detect_anomalies(reports, std_multiplier=0).flags == ()
        assert detect_anomalies(reports).std_dev_kwh == 0

    def test_flags_keep_collection_order(self, make_report):
        """Test that k = 0 flags everything above the mean, in order."""
        reports = [make_report(c) for c in (30, 10, 20, 25)]
        result = detect_anomalies(reports, std_multiplier=0)

        assert [f.report.total_consumption_kwh for f in result.flags] == [30, 25]

    def test_multiplier_from_environment(self, monkeypatch, three_reports):
        """Test that k is read from configuration."""
        monkeypatch.setenv("ENERGY_ANOMALY_STD_MULTIPLIER", "1")
        get_settings.cache_clear()
        result = detect_anomalies(three_reports)

        assert result.std_multiplier == 1
        assert [f.report.total_consumption_kwh for f in result.flags] == [200]

    def test_negative_multiplier_rejected(self, three_reports):
        """Test that k < 0 raises InvalidInputError."""
        with pytest.raises(InvalidInputError):
            detect_anomalies(three_reports, std_multiplier=-1)
