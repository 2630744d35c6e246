# app/schemas/tracker_schema.py
from datetime import datetime, timedelta
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from typing_extensions import Annotated

from ._base_datetime import UtcIsoDatetimeModel
from ..models.milestone_model import AchievementTier, MilestoneStatus
from ..utils.datetime_utils import QuitDateParseError, format_quit_date, now_utc, parse_quit_date

# Quit dates later than this are rejected on write
MAX_FUTURE_SKEW = timedelta(days=1)


def _normalise_quit_date(v):
    try:
        parsed = parse_quit_date(v)
    except QuitDateParseError as e:
        raise ValueError(str(e))
    if parsed - now_utc() > MAX_FUTURE_SKEW:
        raise ValueError("quit_date cannot be in the future")
    return format_quit_date(parsed)


def _clean_title(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("title cannot be blank")
    return v


# ----- Requests -----
class QuitDateRequest(BaseModel):
    quit_date: str

    @field_validator("quit_date", mode="before")
    @classmethod
    def _check_quit_date(cls, v):
        return _normalise_quit_date(v)


class CustomTrackerCreateRequest(BaseModel):
    title: str = Field(max_length=80)
    quit_date: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, v):
        return _clean_title(v)

    @field_validator("quit_date", mode="before")
    @classmethod
    def _check_quit_date(cls, v):
        return None if v is None else _normalise_quit_date(v)


class CustomTrackerRenameRequest(BaseModel):
    title: str = Field(max_length=80)

    @field_validator("title")
    @classmethod
    def _check_title(cls, v):
        return _clean_title(v)


# ----- Card view models (tagged by `state`) -----
class NotStartedCard(BaseModel):
    state: Literal["not_started"] = "not_started"
    id: str
    title: str
    built_in: bool


class TrackingCard(UtcIsoDatetimeModel):
    state: Literal["tracking"] = "tracking"
    id: str
    title: str
    built_in: bool
    quit_date: datetime
    days_clean: int
    day_label: str                       # "1 day" / "12 days"
    tier: AchievementTier
    weekly_progress: float               # 0..1, fill of the card's ring
    next_milestone: Optional[MilestoneStatus] = None
    progress_to_next: Optional[float] = None  # 0..100


TrackerCard = Annotated[Union[NotStartedCard, TrackingCard], Field(discriminator="state")]


class TrackerDetail(BaseModel):
    card: TrackerCard
    timeline: List[MilestoneStatus]
    progress_fraction: float
    past_streaks: List[int] = Field(default_factory=list)


class TrackerListResponse(BaseModel):
    trackers: List[TrackerCard]


# ----- Progress queries -----
class DaysCleanResponse(BaseModel):
    quit_date: str
    days_clean: int
    started: bool


class MilestoneTimelineResponse(BaseModel):
    days_clean: Optional[int]
    timeline: List[MilestoneStatus]
    progress_fraction: float
    progress_to_next: Optional[float] = None
