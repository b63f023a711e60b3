"""Statistical anomaly detection over a report collection."""

import logging
import math
import statistics
from collections.abc import Sequence

from energy_analytics.config import constants, get_settings
from energy_analytics.exceptions.errors import InvalidInputError
from energy_analytics.models.analytics import AnomalyFlag, AnomalyReport, InsufficientData
from energy_analytics.models.estimate import EnergyEstimate

logger = logging.getLogger(__name__)


def detect_anomalies(
    reports: Sequence[EnergyEstimate], std_multiplier: float | None = None
) -> AnomalyReport | InsufficientData:
    """Flag reports whose consumption exceeds ``mean + k * std``.

    Mean and standard deviation are population statistics over the whole
    collection. When every report has the same consumption the standard
    deviation is zero and nothing is flagged, whatever ``k`` is.

    Parameters
    ----------
    reports : Sequence[EnergyEstimate]
        Snapshot of the report collection
    std_multiplier : float | None, optional
        ``k``, the number of standard deviations above the mean; by default
        from settings (2.0)

    Returns
    -------
    AnomalyReport | InsufficientData
        Statistics and flags in collection order, or InsufficientData when
        fewer than three reports are supplied

    Raises
    ------
    InvalidInputError
        If ``std_multiplier`` is negative or not finite
    """
    if std_multiplier is None:
        std_multiplier = get_settings().ANOMALY_STD_MULTIPLIER
    if not math.isfinite(std_multiplier) or std_multiplier < 0:
        raise InvalidInputError(f"std_multiplier must be >= 0, got {std_multiplier}")

    reports = tuple(reports)
    if len(reports) < constants.MIN_REPORTS_FOR_ANALYSIS:
        logger.debug(f"Anomaly detection skipped: only {len(reports)} reports")
        return InsufficientData(
            required=constants.MIN_REPORTS_FOR_ANALYSIS, available=len(reports)
        )

    values = [r.total_consumption_kwh for r in reports]
    mean = statistics.fmean(values)
    std_dev = statistics.pstdev(values)
    threshold = mean + std_multiplier * std_dev

    flags: list[AnomalyFlag] = []
    if std_dev > 0:
        for report, value in zip(reports, values):
            if value > threshold:
                flags.append(
                    AnomalyFlag(
                        report=report,
                        deviation_from_mean=value - mean,
                        threshold_kwh=threshold,
                        ratio_to_mean=value / mean if mean > 0 else 0.0,
                    )
                )

    if flags:
        logger.info(
            f"Flagged {len(flags)} of {len(reports)} reports above {threshold:.2f} kWh "
            f"(mean {mean:.2f}, std {std_dev:.2f}, k={std_multiplier})"
        )
    return AnomalyReport(
        mean_kwh=mean,
        std_dev_kwh=std_dev,
        std_multiplier=std_multiplier,
        threshold_kwh=threshold,
        flags=tuple(flags),
    )
