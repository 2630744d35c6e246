# app/routes/milestone.py
from fastapi import APIRouter, Depends
from typing import List

from ..controllers.milestone_controller import list_milestones
from ..schemas.milestone_schema import MilestoneSchema
from ..state import AppState, get_app_state

router = APIRouter(prefix="/milestone", tags=["Milestone"])


@router.get("/", response_model=List[MilestoneSchema], summary="List milestones (sorted by day)")
async def get_milestones(state: AppState = Depends(get_app_state)):
    return list_milestones(state)
