# app/routes/trackers.py
from fastapi import APIRouter, Depends

from ..controllers import tracker_controller
from ..schemas.tracker_schema import (
    CustomTrackerCreateRequest,
    CustomTrackerRenameRequest,
    QuitDateRequest,
    TrackerDetail,
    TrackerListResponse,
)
from ..state import AppState, get_app_state

router = APIRouter(prefix="/trackers", tags=["Trackers"])


# 🔍 All trackers as cards (built-ins first, then custom)
@router.get("/", response_model=TrackerListResponse)
async def list_trackers(state: AppState = Depends(get_app_state)):
    return await tracker_controller.list_trackers(state)


# 🔔 Milestones reached today, for the notification scheduler
@router.get("/notifications/due")
async def due_notifications(state: AppState = Depends(get_app_state)):
    return await tracker_controller.due_notifications(state)


# ➕ Create a custom tracker
@router.post("/custom", response_model=TrackerDetail, status_code=201)
async def create_custom_tracker(body: CustomTrackerCreateRequest, state: AppState = Depends(get_app_state)):
    return await tracker_controller.create_custom_tracker(state, body.title, body.quit_date)


# ✏️ Rename a custom tracker
@router.patch("/custom/{tracker_id}", response_model=TrackerDetail)
async def rename_custom_tracker(
    tracker_id: str,
    body: CustomTrackerRenameRequest,
    state: AppState = Depends(get_app_state),
):
    return await tracker_controller.rename_custom_tracker(state, tracker_id, body.title)


# 🗑 Delete a custom tracker
@router.delete("/custom/{tracker_id}")
async def delete_custom_tracker(tracker_id: str, state: AppState = Depends(get_app_state)):
    return await tracker_controller.delete_custom_tracker(state, tracker_id)


# 🔍 One tracker with its milestone timeline
@router.get("/{tracker_id}", response_model=TrackerDetail)
async def get_tracker(tracker_id: str, state: AppState = Depends(get_app_state)):
    return await tracker_controller.get_tracker(state, tracker_id)


# 🚀 Set / replace the quit date
@router.put("/{tracker_id}/quit-date", response_model=TrackerDetail)
async def set_quit_date(tracker_id: str, body: QuitDateRequest, state: AppState = Depends(get_app_state)):
    return await tracker_controller.set_quit_date(state, tracker_id, body.quit_date)


# ⏹ Stop tracking
@router.delete("/{tracker_id}/quit-date", response_model=TrackerDetail)
async def clear_quit_date(tracker_id: str, state: AppState = Depends(get_app_state)):
    return await tracker_controller.clear_quit_date(state, tracker_id)


# 🔁 Relapse: restart the streak from now
@router.post("/{tracker_id}/reset", response_model=TrackerDetail)
async def reset_streak(tracker_id: str, state: AppState = Depends(get_app_state)):
    return await tracker_controller.reset_streak(state, tracker_id)
