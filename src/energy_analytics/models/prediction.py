"""Pydantic models for the remote prediction service wire format."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response of ``GET /health``.

    Attributes
    ----------
    status : str
        healthy, degraded or offline
    model_loaded : bool
        Whether the service has a model ready to predict
    """

    status: Literal["healthy", "degraded", "offline"]
    model_loaded: bool = False

    @property
    def available(self) -> bool:
        """Whether a prediction is worth attempting."""
        return self.status != "offline" and self.model_loaded


class PredictionAppliance(BaseModel):
    """One appliance in a prediction request."""

    appliance: str = Field(..., description="Appliance name")
    power: float = Field(..., description="Rated power")
    power_unit: Literal["W"] = Field("W", description="Unit of ``power``")
    hours: float = Field(..., description="Usage hours per day")
    quantity: int = Field(..., description="Number of units")
    usage_days_monthly: int = Field(..., description="Usage days per month")


class HouseholdInfo(BaseModel):
    """Household section of a prediction request."""

    region: str
    income_level: str
    appliances_count: int
    household_size: int
    budget: float


class PredictionRequest(BaseModel):
    """Request body of ``POST /predict``."""

    appliances: list[PredictionAppliance] = Field(..., min_length=1)
    household_info: HouseholdInfo

    model_config = {
        "json_schema_extra": {
            "example": {
                "appliances": [
                    {
                        "appliance": "Refrigerator",
                        "power": 150,
                        "power_unit": "W",
                        "hours": 8,
                        "quantity": 1,
                        "usage_days_monthly": 30,
                    }
                ],
                "household_info": {
                    "region": "Kigali",
                    "income_level": "Medium",
                    "appliances_count": 1,
                    "household_size": 4,
                    "budget": 50000,
                },
            }
        }
    }


class PredictionBreakdownItem(BaseModel):
    """Per-appliance line of a prediction response."""

    appliance: str
    estimated_kwh: float = Field(..., ge=0)
    estimated_bill: float = Field(..., ge=0)
    percentage: float = Field(..., ge=0)
    power_watts: float | None = None


class PredictionResponse(BaseModel):
    """Response body of ``POST /predict``."""

    total_kwh: float = Field(..., ge=0, allow_inf_nan=False)
    total_bill: float = Field(..., ge=0, allow_inf_nan=False)
    tariff_bracket: str
    budget_status: Literal["within_budget", "over_budget"]
    budget_difference: float
    message: str = ""
    breakdown: list[PredictionBreakdownItem] = Field(default_factory=list)
