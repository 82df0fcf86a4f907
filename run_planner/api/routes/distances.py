"""
Race Distances API Routes

Endpoint listing the supported race distances.
"""

from fastapi import APIRouter

from run_planner.api.models.responses import DistanceEntry, DistancesListResponse
from run_planner.plan_schemas import DISTANCE_INFO

router = APIRouter()


@router.get("/distances", response_model=DistancesListResponse)
async def list_distances() -> DistancesListResponse:
    """
    List supported race distances with their plan lengths.

    Returns:
        DistancesListResponse with one entry per distance
    """
    entries = [DistanceEntry(key=key, info=info) for key, info in DISTANCE_INFO.items()]
    return DistancesListResponse(distances=entries, count=len(entries))
