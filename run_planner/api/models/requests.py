"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field

from run_planner.config import MAX_TRAINING_DAYS, MIN_TRAINING_DAYS
from run_planner.plan_schemas import Pace, RaceDistance


class PaceInput(BaseModel):
    """
    Pace as submitted by a client.

    Unlike Pace, which carries overflowing seconds into minutes, request
    paces must already be in range.
    """

    minutes: int = Field(..., ge=0, le=59, description="Whole minutes per kilometer")
    seconds: int = Field(..., ge=0, le=59, description="Remaining seconds (0-59)")

    def to_pace(self) -> Pace:
        return Pace(minutes=self.minutes, seconds=self.seconds)


class PlanGenerationRequest(BaseModel):
    """Request model for training plan generation."""

    distance: RaceDistance = Field(..., description="Race distance (5k, 10k, half, full)")
    current_pace: PaceInput = Field(..., description="Current average pace per km")
    target_pace: PaceInput = Field(..., description="Target average pace per km")
    training_days: int = Field(
        5,
        ge=MIN_TRAINING_DAYS,
        le=MAX_TRAINING_DAYS,
        description="Training days per week",
    )
