# app/models/milestone_model.py

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class MilestoneDefinition(BaseModel):
    day: int = Field(ge=1)   # days clean required, e.g. 7
    title: str               # e.g. "One Week"
    description: str
    reference: str           # citation text shown under the description
    link: str                # citation URL

    model_config = {"frozen": True}


class MilestoneStatus(BaseModel):
    milestone: MilestoneDefinition
    completed: bool = False
    is_next: bool = False
    is_last: bool = False
    times_achieved: int = 0  # past streaks that reached this milestone

    model_config = {"frozen": True}


class TierKind(str, Enum):
    none = "none"
    week = "week"
    month = "month"
    quarter = "quarter"
    year = "year"


_TIER_RANK = {
    TierKind.none: 0,
    TierKind.week: 1,
    TierKind.month: 2,
    TierKind.quarter: 3,
    TierKind.year: 4,
}


class AchievementTier(BaseModel):
    kind: TierKind = TierKind.none
    count: int = 0

    model_config = {"frozen": True}

    @property
    def rank(self) -> int:
        return _TIER_RANK[self.kind]

    def sort_key(self):
        return (self.rank, self.count)

    def __lt__(self, other: "AchievementTier") -> bool:
        return self.sort_key() < other.sort_key()

    def __le__(self, other: "AchievementTier") -> bool:
        return self.sort_key() <= other.sort_key()

    @computed_field
    @property
    def label(self) -> str:
        """Badge tooltip text."""
        if self.kind == TierKind.year:
            return f"{self.count} Year{'s' if self.count > 1 else ''}!"
        if self.kind == TierKind.quarter:
            return "90 Days!"
        if self.kind == TierKind.month:
            return "30 Days!"
        if self.kind == TierKind.week:
            return "1 Week!"
        return ""
