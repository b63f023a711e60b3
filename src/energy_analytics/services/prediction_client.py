"""HTTP client for the remote prediction service."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx
from cachetools import TTLCache
from pydantic import ValidationError

from energy_analytics.config import get_settings
from energy_analytics.exceptions.errors import InvalidInputError, ServiceUnavailableError
from energy_analytics.models.appliance import ApplianceEntry, parse_inventory
from energy_analytics.models.base import describe_validation_error
from energy_analytics.models.estimate import (
    ApplianceBreakdownItem,
    EnergyEstimate,
    EstimateSource,
)
from energy_analytics.models.household import HouseholdProfile, parse_household
from energy_analytics.models.prediction import (
    HealthResponse,
    HouseholdInfo,
    PredictionAppliance,
    PredictionRequest,
    PredictionResponse,
)
from energy_analytics.models.tariff import Tariff
from energy_analytics.services.budget import analyze_budget

logger = logging.getLogger(__name__)

_HEALTH_KEY = "health"

# The service rounds the total and every breakdown line to 2 decimals separately
RESPONSE_ROUNDING_KWH = 0.01


@dataclass(frozen=True)
class PredictionAttempt:
    """Outcome of one remote prediction: an estimate or the reason it failed.

    Attributes
    ----------
    estimate : EnergyEstimate | None
        Mapped estimate when the call succeeded
    error : ServiceUnavailableError | None
        Failure reason otherwise
    """

    estimate: EnergyEstimate | None = None
    error: ServiceUnavailableError | None = None

    @property
    def ok(self) -> bool:
        return self.estimate is not None


def build_prediction_request(
    appliances: Iterable[ApplianceEntry], household: HouseholdProfile
) -> PredictionRequest:
    """Translate validated inputs into the ``POST /predict`` body."""
    appliances = list(appliances)
    count = household.declared_appliance_count
    return PredictionRequest(
        appliances=[
            PredictionAppliance(
                appliance=entry.name,
                power=entry.power_watts,
                power_unit="W",
                hours=entry.hours_per_day,
                quantity=entry.quantity,
                usage_days_monthly=entry.usage_days_per_month,
            )
            for entry in appliances
        ],
        household_info=HouseholdInfo(
            region=household.region.value,
            income_level=household.income_level.value,
            appliances_count=count if count is not None else len(appliances),
            household_size=household.household_size,
            budget=household.monthly_budget,
        ),
    )


def reconcile_total_kwh(response: PredictionResponse) -> float:
    """Total consumption consistent with the breakdown of a rounded response.

    Each rounded value may be off by half a rounding step, so a gap of up to
    ``RESPONSE_ROUNDING_KWH / 2 * (len(breakdown) + 1)`` is rounding drift and
    the breakdown sum is used. Larger gaps return ``total_kwh`` unchanged and
    are rejected when the estimate is built.
    """
    breakdown_total = sum(item.estimated_kwh for item in response.breakdown)
    allowed = RESPONSE_ROUNDING_KWH / 2 * (len(response.breakdown) + 1)
    gap = abs(response.total_kwh - breakdown_total)
    if gap == 0 or gap > allowed + 1e-9:
        return response.total_kwh
    logger.debug(
        f"Reconciled remote total {response.total_kwh} kWh to breakdown sum "
        f"{breakdown_total:.4f} kWh"
    )
    return breakdown_total


def estimate_from_response(
    response: PredictionResponse, household: HouseholdProfile, tariff: Tariff
) -> EnergyEstimate:
    """Map a prediction response onto the local EnergyEstimate shape.

    Budget status and delta are recomputed from ``total_bill`` so they always
    agree with the household budget.

    Raises
    ------
    ServiceUnavailableError
        If the response cannot form a consistent estimate
    """
    rate = tariff.rate_for(response.tariff_bracket)
    if rate is None:
        rate = response.total_bill / response.total_kwh if response.total_kwh > 0 else 0.0

    try:
        budget = analyze_budget(response.total_bill, household.monthly_budget)
        breakdown = tuple(
            ApplianceBreakdownItem(
                name=item.appliance,
                consumption_kwh=item.estimated_kwh,
                bill_share=item.estimated_bill,
                percentage_of_total=min(item.percentage, 100.0),
            )
            for item in response.breakdown
        )
        estimate = EnergyEstimate(
            total_consumption_kwh=reconcile_total_kwh(response),
            estimated_bill=response.total_bill,
            tariff_bracket=response.tariff_bracket,
            rate_per_kwh=rate,
            budget_status=budget.status,
            budget_delta=budget.delta,
            breakdown=breakdown,
            household=household,
            source=EstimateSource.REMOTE,
            message=response.message or None,
        )
    except ValidationError as e:
        detail = describe_validation_error(e)
        logger.warning(f"Discarding inconsistent prediction response: {detail}")
        raise ServiceUnavailableError(f"Malformed prediction response: {detail}") from e
    except InvalidInputError as e:
        logger.warning(f"Discarding inconsistent prediction response: {e}")
        raise ServiceUnavailableError(f"Malformed prediction response: {e}") from e

    if budget.status.value != response.budget_status:
        logger.warning(
            f"Prediction service reported {response.budget_status} but bill "
            f"{response.total_bill:.2f} vs budget {household.monthly_budget:.2f} "
            f"is {budget.status.value}"
        )
    return estimate


class PredictionClient:
    """Synchronous client for the prediction service.

    Every request is bounded by a timeout. Health probes are cached for a
    short time so a dead service is not probed before every estimate.

    Attributes
    ----------
    http : httpx.Client
        Underlying HTTP client
    tariff : Tariff
        Tariff used to resolve the rate of a returned bracket
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        health_ttl: float | None = None,
        tariff: Tariff | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Parameters
        ----------
        base_url : str
            Service root, e.g. "http://localhost:5000"
        timeout : float | None, optional
            Per-request timeout in seconds, by default from settings
        health_ttl : float | None, optional
            Seconds a health probe result is reused, by default from settings
        tariff : Tariff | None, optional
            Tariff for rate lookup, by default built from settings
        transport : httpx.BaseTransport | None, optional
            Custom transport, mainly for tests
        """
        settings = get_settings()
        self.timeout = timeout if timeout is not None else settings.PREDICTION_TIMEOUT
        ttl = health_ttl if health_ttl is not None else settings.HEALTH_CACHE_TTL
        self.tariff = tariff or Tariff.from_settings(settings)
        self.http = httpx.Client(base_url=base_url, timeout=self.timeout, transport=transport)
        self._health_cache: TTLCache = TTLCache(maxsize=1, ttl=max(ttl, 0.001))
        logger.info(f"PredictionClient initialized: {base_url} (timeout={self.timeout}s)")

    @classmethod
    def from_settings(cls) -> "PredictionClient | None":
        """Client for ``ENERGY_PREDICTION_URL``, or None when it is unset."""
        settings = get_settings()
        if not settings.PREDICTION_URL:
            return None
        return cls(settings.PREDICTION_URL)

    def health(self) -> HealthResponse:
        """Probe ``GET /health`` without caching.

        Raises
        ------
        ServiceUnavailableError
            If the service cannot be reached or answers unexpectedly
        """
        try:
            response = self.http.get("/health")
            response.raise_for_status()
            return HealthResponse.model_validate(response.json())
        except httpx.HTTPError as e:
            raise ServiceUnavailableError(f"Health check failed: {e}") from e
        except ValueError as e:
            # covers JSON decoding and pydantic validation
            raise ServiceUnavailableError(f"Unexpected health response: {e}") from e

    def is_available(self) -> bool:
        """Whether the remote path should be attempted, using the cached probe."""
        cached = self._health_cache.get(_HEALTH_KEY)
        if cached is None:
            try:
                cached = self.health()
            except ServiceUnavailableError as e:
                logger.info(f"Prediction service unreachable: {e}")
                cached = HealthResponse(status="offline", model_loaded=False)
            self._health_cache[_HEALTH_KEY] = cached
            logger.debug(
                f"Prediction service health: {cached.status} (model={cached.model_loaded})"
            )
        return cached.available

    def predict(
        self,
        appliances: Iterable[ApplianceEntry | Mapping[str, Any]],
        household: HouseholdProfile | Mapping[str, Any],
    ) -> PredictionAttempt:
        """Ask the service for an estimate.

        Service failures are returned, not raised, so the caller can fall
        back to the local estimator.

        Returns
        -------
        PredictionAttempt
            Estimate on success, ServiceUnavailableError otherwise

        Raises
        ------
        InvalidInputError
            If the inputs themselves are invalid
        """
        inventory = parse_inventory(appliances)
        if not inventory:
            raise InvalidInputError("At least one appliance is required to estimate consumption")
        profile = parse_household(household)

        try:
            return PredictionAttempt(estimate=self._predict(inventory, profile))
        except ServiceUnavailableError as e:
            return PredictionAttempt(error=e)

    def _predict(
        self, inventory: tuple[ApplianceEntry, ...], household: HouseholdProfile
    ) -> EnergyEstimate:
        if not self.is_available():
            raise ServiceUnavailableError("Prediction service is offline or has no model loaded")

        body = build_prediction_request(inventory, household)
        try:
            response = self.http.post("/predict", json=body.model_dump(mode="json"))
            response.raise_for_status()
            parsed = PredictionResponse.model_validate(response.json())
        except httpx.TimeoutException as e:
            raise ServiceUnavailableError(f"Prediction timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise ServiceUnavailableError(f"Prediction request failed: {e}") from e
        except ValueError as e:
            logger.warning(f"Discarding unexpected prediction response: {e}")
            raise ServiceUnavailableError(f"Unexpected prediction response: {e}") from e

        estimate = estimate_from_response(parsed, household, self.tariff)
        logger.debug(f"Remote estimate {estimate.id}: {estimate.total_consumption_kwh:.2f} kWh")
        return estimate

    def close(self) -> None:
        """Close the underlying HTTP connections."""
        self.http.close()

    def __enter__(self) -> "PredictionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
