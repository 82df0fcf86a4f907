"""
API Response Models

Pydantic models for API responses.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from run_planner.plan_schemas import DistanceInfo, RaceDistance, TrainingPlan


class DistanceEntry(BaseModel):
    """One row of the race distance table."""

    key: RaceDistance = Field(..., description="Distance key")
    info: DistanceInfo = Field(..., description="Distance metadata")


class DistancesListResponse(BaseModel):
    """Response for GET /api/distances."""

    distances: List[DistanceEntry] = Field(..., description="Supported race distances")
    count: int = Field(..., description="Total number of distances")


class PlanGenerationResponse(BaseModel):
    """Response for POST /api/plans."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    plan: TrainingPlan = Field(..., description="Generated training plan")
    quality_fractions: List[float] = Field(
        ..., description="Quality share of weekly mileage, one entry per week"
    )
    warnings: List[str] = Field(default_factory=list, description="Warning messages")
