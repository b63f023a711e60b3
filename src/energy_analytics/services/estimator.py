"""Household estimator: remote prediction first, local calculation as fallback."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from energy_analytics.models.appliance import ApplianceEntry, parse_inventory
from energy_analytics.models.estimate import EnergyEstimate
from energy_analytics.models.household import HouseholdProfile, parse_household
from energy_analytics.models.tariff import Tariff
from energy_analytics.services.calculator import estimate_locally
from energy_analytics.services.prediction_client import PredictionClient

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Prediction service unavailable, estimate calculated locally"


class EstimationService:
    """Produce estimates through the prediction service when it is usable.

    Both paths return the same EnergyEstimate shape, so downstream analytics
    do not care which one ran.

    Attributes
    ----------
    client : PredictionClient | None
        Remote client, None for local-only estimation
    tariff : Tariff
        Tariff for the local path
    """

    def __init__(self, client: PredictionClient | None = None, tariff: Tariff | None = None):
        self.client = client
        self.tariff = tariff or (client.tariff if client else Tariff.from_settings())

    @classmethod
    def from_settings(cls) -> "EstimationService":
        """Service wired from environment configuration."""
        return cls(client=PredictionClient.from_settings())

    def estimate(
        self,
        appliances: Iterable[ApplianceEntry | Mapping[str, Any]],
        household: HouseholdProfile | Mapping[str, Any],
    ) -> EnergyEstimate:
        """Estimate one household's monthly consumption and bill.

        Parameters
        ----------
        appliances : Iterable[ApplianceEntry | Mapping]
            Appliance inventory
        household : HouseholdProfile | Mapping
            Household profile

        Returns
        -------
        EnergyEstimate
            Remote estimate, or a local one carrying a fallback message

        Raises
        ------
        InvalidInputError
            If the inputs are invalid; service failures never raise
        """
        inventory = parse_inventory(appliances)
        profile = parse_household(household)

        if self.client is None:
            return estimate_locally(inventory, profile, tariff=self.tariff)

        attempt = self.client.predict(inventory, profile)
        if attempt.ok:
            return attempt.estimate

        logger.info(f"Falling back to local estimate: {attempt.error}")
        return estimate_locally(inventory, profile, tariff=self.tariff, message=FALLBACK_MESSAGE)
