"""Household segmentation into Low, Medium and High consumption tiers."""

import logging
import statistics
from collections.abc import Sequence
from typing import Literal

from energy_analytics.config import constants, get_settings
from energy_analytics.exceptions.errors import InvalidInputError
from energy_analytics.models.analytics import InsufficientData, Segment, SegmentationResult
from energy_analytics.models.estimate import EnergyEstimate

logger = logging.getLogger(__name__)

KMEANS_MAX_ITERATIONS = 100


def _tier_index(consumption: float, low_limit: float, high_limit: float) -> int:
    # Low is [0, low), Medium is [low, high], High is (high, inf)
    if consumption < low_limit:
        return 0
    if consumption <= high_limit:
        return 1
    return 2


def partition(
    reports: Sequence[EnergyEstimate], low_limit: float, high_limit: float
) -> tuple[Segment, Segment, Segment]:
    """Split reports into the three fixed tiers.

    Parameters
    ----------
    reports : Sequence[EnergyEstimate]
        Reports to partition, in collection order
    low_limit : float
        Lowest consumption that is no longer Low
    high_limit : float
        Highest consumption that is still Medium

    Returns
    -------
    tuple[Segment, Segment, Segment]
        Low, Medium and High segments; empty tiers have an average of 0
    """
    if not 0 <= low_limit <= high_limit:
        raise InvalidInputError(
            f"Segment limits must satisfy 0 <= low <= high, got {low_limit}, {high_limit}"
        )

    buckets: list[list[EnergyEstimate]] = [[], [], []]
    for report in reports:
        buckets[_tier_index(report.total_consumption_kwh, low_limit, high_limit)].append(report)

    bounds = (
        (0.0, low_limit, True, False),
        (low_limit, high_limit, True, True),
        (high_limit, None, False, False),
    )
    segments = []
    for label, members, (lower, upper, lower_inc, upper_inc) in zip(
        constants.SEGMENT_LABELS, buckets, bounds
    ):
        total = sum(r.total_consumption_kwh for r in members)
        segments.append(
            Segment(
                label=label,
                lower_bound_kwh=lower,
                upper_bound_kwh=upper,
                lower_inclusive=lower_inc,
                upper_inclusive=upper_inc,
                members=tuple(members),
                average_consumption_kwh=total / max(len(members), 1),
            )
        )
    return tuple(segments)


def kmeans_limits(values: Sequence[float]) -> tuple[float, float]:
    """Derive tier limits from a one-dimensional k-means with k=3.

    Centroids start at the minimum, median and maximum and are refined with
    Lloyd iterations until assignments stop changing. The limits are the
    midpoints between neighbouring centroids.

    Parameters
    ----------
    values : Sequence[float]
        Consumption values, at least one

    Returns
    -------
    tuple[float, float]
        Low/Medium and Medium/High limits
    """
    ordered = sorted(values)
    centroids = [ordered[0], statistics.median(ordered), ordered[-1]]
    assignment: list[int] | None = None

    for _ in range(KMEANS_MAX_ITERATIONS):
        new_assignment = [
            min(range(3), key=lambda k, v=value: (abs(v - centroids[k]), k)) for value in ordered
        ]
        if new_assignment == assignment:
            break
        assignment = new_assignment
        for k in range(3):
            members = [v for v, a in zip(ordered, assignment) if a == k]
            # An emptied cluster keeps its previous centroid
            if members:
                centroids[k] = statistics.fmean(members)

    centroids.sort()
    return (centroids[0] + centroids[1]) / 2, (centroids[1] + centroids[2]) / 2


def segment_reports(
    reports: Sequence[EnergyEstimate],
    low_limit: float | None = None,
    high_limit: float | None = None,
    method: Literal["threshold", "kmeans"] | None = None,
) -> SegmentationResult | InsufficientData:
    """Group reports into Low, Medium and High consumption segments.

    Parameters
    ----------
    reports : Sequence[EnergyEstimate]
        Snapshot of the report collection
    low_limit : float | None, optional
        Low/Medium boundary, by default from settings
    high_limit : float | None, optional
        Medium/High boundary, by default from settings
    method : {"threshold", "kmeans"} | None, optional
        ``threshold`` uses the configured limits; ``kmeans`` derives them
        from the data. By default from settings.

    Returns
    -------
    SegmentationResult | InsufficientData
        Three segments in Low, Medium, High order, or InsufficientData when
        fewer than three reports are supplied
    """
    reports = tuple(reports)
    if len(reports) < constants.MIN_REPORTS_FOR_ANALYSIS:
        logger.debug(f"Segmentation skipped: only {len(reports)} reports")
        return InsufficientData(
            required=constants.MIN_REPORTS_FOR_ANALYSIS, available=len(reports)
        )

    settings = get_settings()
    method = method or settings.SEGMENT_METHOD
    if method == "kmeans":
        low_limit, high_limit = kmeans_limits([r.total_consumption_kwh for r in reports])
    elif method == "threshold":
        low_limit = settings.SEGMENT_LOW_LIMIT if low_limit is None else low_limit
        high_limit = settings.SEGMENT_HIGH_LIMIT if high_limit is None else high_limit
    else:
        raise InvalidInputError(f"Unknown segmentation method: {method!r}")

    segments = partition(reports, low_limit, high_limit)
    logger.debug(
        f"Segmented {len(reports)} reports ({method}, limits {low_limit:.2f}/{high_limit:.2f}): "
        + ", ".join(f"{s.label}={s.count}" for s in segments)
    )
    return SegmentationResult(method=method, segments=segments, report_count=len(reports))
