"""Session-scoped, append-only report log."""

import logging
from collections.abc import Iterator

from pydantic import TypeAdapter, ValidationError

from energy_analytics.exceptions.errors import InvalidInputError
from energy_analytics.models.base import describe_validation_error
from energy_analytics.models.estimate import EnergyEstimate

logger = logging.getLogger(__name__)

_reports_adapter = TypeAdapter(list[EnergyEstimate])


class ReportLog:
    """Insertion-ordered collection of estimates owned by one session.

    Reports can only be appended. Analytics take a ``snapshot()`` so later
    appends never affect a running computation.
    """

    def __init__(self) -> None:
        self._reports: list[EnergyEstimate] = []

    def append(self, report: EnergyEstimate) -> EnergyEstimate:
        """Add a report to the end of the log.

        Raises
        ------
        InvalidInputError
            If ``report`` is not an EnergyEstimate
        """
        if not isinstance(report, EnergyEstimate):
            raise InvalidInputError(
                f"ReportLog only accepts EnergyEstimate, got {type(report).__name__}"
            )
        self._reports.append(report)
        logger.debug(f"Report {report.id} appended ({len(self._reports)} total)")
        return report

    def snapshot(self) -> tuple[EnergyEstimate, ...]:
        """Immutable view of the reports as of now."""
        return tuple(self._reports)

    def __len__(self) -> int:
        return len(self._reports)

    def __iter__(self) -> Iterator[EnergyEstimate]:
        return iter(self.snapshot())

    def export_json(self, indent: int | None = 2) -> str:
        """Serialize every report, oldest first, as a JSON array."""
        return _reports_adapter.dump_json(self._reports, indent=indent).decode()

    @classmethod
    def from_json(cls, data: str | bytes) -> "ReportLog":
        """Rebuild a log from ``export_json`` output.

        Raises
        ------
        InvalidInputError
            If the payload is not a valid list of reports
        """
        try:
            reports = _reports_adapter.validate_json(data)
        except ValidationError as e:
            raise InvalidInputError(
                f"Invalid report export: {describe_validation_error(e)}"
            ) from e

        log = cls()
        for report in reports:
            log.append(report)
        logger.info(f"Loaded {len(log)} reports from export")
        return log
