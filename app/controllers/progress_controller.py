# app/controllers/progress_controller.py
from datetime import datetime
from typing import Optional

from fastapi import HTTPException

from ..models.milestone_model import AchievementTier
from ..schemas.tracker_schema import DaysCleanResponse, MilestoneTimelineResponse
from ..services.progress_engine import (
    achievement_tier,
    progress_fraction,
    progress_to_next,
    resolve_milestones,
)
from ..state import AppState
from ..utils.datetime_utils import QuitDateParseError, days_clean, now_utc


# ✅ Days clean for an arbitrary quit date
def get_days_clean(quit_date: str, now: Optional[datetime] = None) -> DaysCleanResponse:
    try:
        days = days_clean(quit_date, now or now_utc())
    except QuitDateParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DaysCleanResponse(quit_date=quit_date, days_clean=days, started=days > 0)


# ✅ Milestone timeline for a days-clean value (None = no quit date)
def get_timeline(state: AppState, days: Optional[int]) -> MilestoneTimelineResponse:
    # non-positive counts render as "not started"
    if days is not None and days <= 0:
        days = None
    return MilestoneTimelineResponse(
        days_clean=days,
        timeline=list(resolve_milestones(days, state.catalog)),
        progress_fraction=progress_fraction(days, state.catalog),
        progress_to_next=progress_to_next(days, state.catalog),
    )


# ✅ Badge tier
def get_tier(days: Optional[int]) -> AchievementTier:
    return achievement_tier(days)
