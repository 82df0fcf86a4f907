"""
Training Plans API Routes

Endpoints for training plan generation.
"""

import logging

from fastapi import APIRouter

from run_planner.api.models.requests import PlanGenerationRequest
from run_planner.api.models.responses import PlanGenerationResponse
from run_planner.pace import pace_to_seconds
from run_planner.planner import generate_training_plan

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/plans", response_model=PlanGenerationResponse, response_model_by_alias=True)
async def generate_plan(request: PlanGenerationRequest) -> PlanGenerationResponse:
    """
    Generate a training plan.

    Request validation (distance key, pace ranges, 3-6 training days) happens
    before the planner runs; invalid bodies get a 422.

    Args:
        request: PlanGenerationRequest with distance, paces and training days

    Returns:
        PlanGenerationResponse with the plan and per-week quality shares
    """
    plan = generate_training_plan(
        request.distance,
        request.current_pace.to_pace(),
        request.target_pace.to_pace(),
        request.training_days,
    )

    warnings = []
    if pace_to_seconds(plan.target_pace) > pace_to_seconds(plan.current_pace):
        warnings.append(
            f"Target pace {plan.target_pace} is slower than current pace {plan.current_pace}"
        )
        logger.info("Plan requested with slower target pace: %s", warnings[-1])

    return PlanGenerationResponse(
        plan=plan,
        quality_fractions=[round(week.quality_fraction(), 3) for week in plan.weeks],
        warnings=warnings,
    )
