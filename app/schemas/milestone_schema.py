# app/schemas/milestone_schema.py

from pydantic import BaseModel


class MilestoneSchema(BaseModel):
    day: int
    title: str
    description: str
    reference: str
    link: str
    label: str  # e.g. "Day 7", "1 Year"
