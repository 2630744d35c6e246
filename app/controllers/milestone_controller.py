# app/controllers/milestone_controller.py
from typing import List

from ..schemas.milestone_schema import MilestoneSchema
from ..state import AppState


def list_milestones(state: AppState) -> List[MilestoneSchema]:
    return [
        MilestoneSchema(
            day=m.day,
            title=m.title,
            description=m.description,
            reference=m.reference,
            link=m.link,
            label=milestone_label(m.day),
        )
        for m in state.catalog
    ]


def milestone_label(day: int) -> str:
    """Timeline chip text: "Day 14", "1 Year", "2 Years"."""
    if day >= 365:
        years = round(day / 365)
        return f"{years} Year{'s' if day >= 730 else ''}"
    return f"Day {day}"
