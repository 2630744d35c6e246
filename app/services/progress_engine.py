# app/services/progress_engine.py
"""
Pure progress queries over a days-clean count and a milestone catalog.

Nothing here touches storage or the clock; the tracker controller, the HTTP
routes and any notification scheduler call these on every read.
"""
from typing import Iterable, Optional, Sequence, Tuple

from ..models.milestone_model import (
    AchievementTier,
    MilestoneDefinition,
    MilestoneStatus,
    TierKind,
)

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
DAYS_PER_QUARTER = 90
DAYS_PER_YEAR = 365


def resolve_milestones(
    days_clean: Optional[int],
    catalog: Sequence[MilestoneDefinition],
    past_streaks: Iterable[int] = (),
) -> Tuple[MilestoneStatus, ...]:
    """
    Timeline state for every catalog entry.

    The first entry not yet reached is marked `is_next`. With no quit date
    (`days_clean is None`) nothing is completed and nothing is next.
    """
    streaks = list(past_streaks)
    last_index = len(catalog) - 1
    next_found = False
    out = []

    for i, m in enumerate(catalog):
        completed = days_clean is not None and days_clean >= m.day
        is_next = False
        if days_clean is not None and not completed and not next_found:
            is_next = True
            next_found = True
        out.append(
            MilestoneStatus(
                milestone=m,
                completed=completed,
                is_next=is_next,
                is_last=i == last_index,
                times_achieved=sum(1 for s in streaks if s >= m.day),
            )
        )
    return tuple(out)


def next_milestone(statuses: Iterable[MilestoneStatus]) -> Optional[MilestoneStatus]:
    for s in statuses:
        if s.is_next:
            return s
    return None


def progress_fraction(days_clean: Optional[int], catalog: Sequence[MilestoneDefinition]) -> float:
    """Share of the catalog completed, 0.0 .. 1.0."""
    if days_clean is None or not catalog:
        return 0.0
    done = sum(1 for m in catalog if days_clean >= m.day)
    return done / len(catalog)


def progress_to_next(days_clean: Optional[int], catalog: Sequence[MilestoneDefinition]) -> Optional[float]:
    """
    Percent of the way from the previous threshold (or day 0) to the next one.
    None when not started or when every milestone is done.
    """
    if days_clean is None:
        return None
    previous = 0
    for m in catalog:
        if days_clean < m.day:
            span = m.day - previous
            done = max(days_clean - previous, 0)
            return round((done / span) * 100, 2)
        previous = m.day
    return None


def weekly_progress(days_clean: Optional[int]) -> float:
    """Fill of the weekly progress ring on a tracker card."""
    if days_clean is None or days_clean <= 0:
        return 0.0
    return (days_clean % DAYS_PER_WEEK) / DAYS_PER_WEEK


def milestone_reached_on(
    days_clean: Optional[int],
    catalog: Sequence[MilestoneDefinition],
) -> Optional[MilestoneDefinition]:
    """The milestone whose threshold is exactly today, for "you made it" notifications."""
    if days_clean is None:
        return None
    for m in catalog:
        if m.day == days_clean:
            return m
    return None


def achievement_tier(days_clean: Optional[int]) -> AchievementTier:
    """Badge tier; boundaries are inclusive and years repeat."""
    if days_clean is None:
        return AchievementTier()
    if days_clean >= DAYS_PER_YEAR:
        return AchievementTier(kind=TierKind.year, count=days_clean // DAYS_PER_YEAR)
    if days_clean >= DAYS_PER_QUARTER:
        return AchievementTier(kind=TierKind.quarter, count=1)
    if days_clean >= DAYS_PER_MONTH:
        return AchievementTier(kind=TierKind.month, count=1)
    if days_clean >= DAYS_PER_WEEK:
        return AchievementTier(kind=TierKind.week, count=1)
    return AchievementTier()


def day_label(days_clean: int) -> str:
    return f"{days_clean} {'day' if days_clean == 1 else 'days'}"
