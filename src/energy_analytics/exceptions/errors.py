"""Error taxonomy for the energy analytics engine."""


class EnergyAnalyticsError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(EnergyAnalyticsError, ValueError):
    """Raised when an input field is missing or outside its allowed range."""


class ServiceUnavailableError(EnergyAnalyticsError):
    """Raised when the remote prediction service cannot produce an estimate.

    Callers never see this propagate out of ``EstimationService``; it is
    carried inside a ``PredictionAttempt`` and answered with a local estimate.
    """
