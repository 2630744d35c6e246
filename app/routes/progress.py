# app/routes/progress.py
from fastapi import APIRouter, Depends, Query
from typing import Optional

from ..controllers import progress_controller
from ..models.milestone_model import AchievementTier
from ..schemas.tracker_schema import DaysCleanResponse, MilestoneTimelineResponse
from ..state import AppState, get_app_state

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get("/days", response_model=DaysCleanResponse, summary="Days clean for a quit date")
async def get_days(quit_date: str = Query(..., description="ISO-8601 quit date")):
    return progress_controller.get_days_clean(quit_date)


@router.get("/milestones", response_model=MilestoneTimelineResponse, summary="Milestone timeline for a day count")
async def get_milestone_timeline(
    days_clean: Optional[int] = Query(None, description="Omit when no quit date is set"),
    state: AppState = Depends(get_app_state),
):
    return progress_controller.get_timeline(state, days_clean)


@router.get("/tier", response_model=AchievementTier, summary="Achievement tier for a day count")
async def get_tier(days_clean: Optional[int] = Query(None)):
    return progress_controller.get_tier(days_clean)
