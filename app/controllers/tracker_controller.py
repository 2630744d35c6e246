# app/controllers/tracker_controller.py
import logging
from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from fastapi import HTTPException

from ..models.quit_record_model import (
    BUILT_IN_TRACKERS,
    CUSTOM_ENTRIES_KEY,
    QuitRecord,
    decode_custom_entries,
    decode_history,
    encode_custom_entries,
    encode_history,
    history_key,
    quit_date_key,
)
from ..schemas.tracker_schema import (
    NotStartedCard,
    TrackerDetail,
    TrackerListResponse,
    TrackingCard,
)
from ..services.progress_engine import (
    achievement_tier,
    day_label,
    milestone_reached_on,
    next_milestone,
    progress_fraction,
    progress_to_next,
    resolve_milestones,
    weekly_progress,
)
from ..state import AppState
from ..utils.datetime_utils import (
    QuitDateParseError,
    days_clean_or_none,
    format_quit_date,
    now_utc,
    parse_quit_date,
)

logger = logging.getLogger(__name__)


# ── helpers ─────────────────────────────────────────────────────────────────────

def _started_days(record: QuitRecord, now: datetime) -> Optional[int]:
    """Days clean, or None when the tracker should render as not started."""
    days = days_clean_or_none(record.quit_date, now)
    if days is None or days <= 0:
        return None
    return days


async def _built_in_record(state: AppState, tracker_id: str) -> QuitRecord:
    raw = await state.store.get(quit_date_key(tracker_id))
    if raw is not None:
        try:
            parse_quit_date(raw)
        except QuitDateParseError:
            logger.warning("Tracker %s has unparseable quit date %r; treating as unset", tracker_id, raw)
            raw = None
    return QuitRecord(id=tracker_id, title=BUILT_IN_TRACKERS[tracker_id], quit_date=raw, built_in=True)


async def _custom_records(state: AppState) -> List[QuitRecord]:
    return decode_custom_entries(await state.store.get(CUSTOM_ENTRIES_KEY))


async def _load_record(state: AppState, tracker_id: str) -> QuitRecord:
    if tracker_id in BUILT_IN_TRACKERS:
        return await _built_in_record(state, tracker_id)
    for r in await _custom_records(state):
        if r.id == tracker_id:
            return r
    raise HTTPException(status_code=404, detail="Tracker not found.")


async def _past_streaks(state: AppState, tracker_id: str) -> List[int]:
    return decode_history(await state.store.get(history_key(tracker_id)))


def _ensure_custom(tracker_id: str) -> None:
    if tracker_id in BUILT_IN_TRACKERS:
        raise HTTPException(status_code=400, detail="Built-in trackers cannot be renamed or deleted.")


def _update_custom(tracker_id: str, **changes):
    """Build an update fn for the custom entries key that patches one entry."""
    def apply(raw: Optional[str]) -> str:
        records = decode_custom_entries(raw)
        for i, r in enumerate(records):
            if r.id == tracker_id:
                records[i] = r.model_copy(update=changes)
                return encode_custom_entries(records)
        raise HTTPException(status_code=404, detail="Tracker not found.")
    return apply


def build_card(record: QuitRecord, state: AppState, now: datetime):
    days = _started_days(record, now)
    if days is None:
        return NotStartedCard(id=record.id, title=record.title, built_in=record.built_in)

    statuses = resolve_milestones(days, state.catalog)
    return TrackingCard(
        id=record.id,
        title=record.title,
        built_in=record.built_in,
        quit_date=parse_quit_date(record.quit_date),
        days_clean=days,
        day_label=day_label(days),
        tier=achievement_tier(days),
        weekly_progress=weekly_progress(days),
        next_milestone=next_milestone(statuses),
        progress_to_next=progress_to_next(days, state.catalog),
    )


async def _detail(state: AppState, record: QuitRecord, now: datetime) -> TrackerDetail:
    days = _started_days(record, now)
    streaks = await _past_streaks(state, record.id)
    return TrackerDetail(
        card=build_card(record, state, now),
        timeline=list(resolve_milestones(days, state.catalog, streaks)),
        progress_fraction=progress_fraction(days, state.catalog),
        past_streaks=streaks,
    )


# ── queries ─────────────────────────────────────────────────────────────────────

async def list_trackers(state: AppState, now: Optional[datetime] = None) -> TrackerListResponse:
    now = now or now_utc()
    records = [await _built_in_record(state, tid) for tid in BUILT_IN_TRACKERS]
    records.extend(await _custom_records(state))
    return TrackerListResponse(trackers=[build_card(r, state, now) for r in records])


async def get_tracker(state: AppState, tracker_id: str, now: Optional[datetime] = None) -> TrackerDetail:
    record = await _load_record(state, tracker_id)
    return await _detail(state, record, now or now_utc())


async def due_notifications(state: AppState, now: Optional[datetime] = None) -> List[dict]:
    """Trackers that hit a milestone today; polled by the notification scheduler."""
    now = now or now_utc()
    due = []
    records = [await _built_in_record(state, tid) for tid in BUILT_IN_TRACKERS]
    records.extend(await _custom_records(state))
    for r in records:
        days = _started_days(r, now)
        milestone = milestone_reached_on(days, state.catalog)
        if milestone is None:
            continue
        due.append({
            "tracker_id": r.id,
            "title": r.title,
            "days_clean": days,
            "milestone": milestone,
            "tier": achievement_tier(days),
        })
    return due


# ── mutations ───────────────────────────────────────────────────────────────────

async def set_quit_date(state: AppState, tracker_id: str, quit_date: str) -> TrackerDetail:
    if tracker_id in BUILT_IN_TRACKERS:
        await state.store.set(quit_date_key(tracker_id), quit_date)
    else:
        await state.store.update(CUSTOM_ENTRIES_KEY, _update_custom(tracker_id, quit_date=quit_date))
    return await get_tracker(state, tracker_id)


async def clear_quit_date(state: AppState, tracker_id: str) -> TrackerDetail:
    if tracker_id in BUILT_IN_TRACKERS:
        await state.store.delete(quit_date_key(tracker_id))
    else:
        await state.store.update(CUSTOM_ENTRIES_KEY, _update_custom(tracker_id, quit_date=None))
    await state.store.delete(history_key(tracker_id))
    return await get_tracker(state, tracker_id)


async def reset_streak(state: AppState, tracker_id: str, now: Optional[datetime] = None) -> TrackerDetail:
    """Relapse: remember the ended streak and restart from now."""
    now = now or now_utc()
    record = await _load_record(state, tracker_id)
    if record.quit_date is None:
        raise HTTPException(status_code=400, detail="Tracker has not been started.")

    ended = _started_days(record, now)
    if ended:
        await state.store.update(
            history_key(tracker_id),
            lambda raw: encode_history(decode_history(raw) + [ended]),
        )
    restarted = format_quit_date(now)
    if record.built_in:
        await state.store.set(quit_date_key(tracker_id), restarted)
    else:
        await state.store.update(CUSTOM_ENTRIES_KEY, _update_custom(tracker_id, quit_date=restarted))
    return await _detail(state, record.model_copy(update={"quit_date": restarted}), now)


async def create_custom_tracker(state: AppState, title: str, quit_date: Optional[str] = None) -> TrackerDetail:
    record = QuitRecord(id=str(ObjectId()), title=title, quit_date=quit_date, built_in=False)

    def append(raw: Optional[str]) -> str:
        return encode_custom_entries(decode_custom_entries(raw) + [record])

    await state.store.update(CUSTOM_ENTRIES_KEY, append)
    logger.info("Created custom tracker %s", record.id)
    return await get_tracker(state, record.id)


async def rename_custom_tracker(state: AppState, tracker_id: str, title: str) -> TrackerDetail:
    _ensure_custom(tracker_id)
    await state.store.update(CUSTOM_ENTRIES_KEY, _update_custom(tracker_id, title=title))
    return await get_tracker(state, tracker_id)


async def delete_custom_tracker(state: AppState, tracker_id: str) -> dict:
    _ensure_custom(tracker_id)

    def remove(raw: Optional[str]) -> str:
        records = decode_custom_entries(raw)
        kept = [r for r in records if r.id != tracker_id]
        if len(kept) == len(records):
            raise HTTPException(status_code=404, detail="Tracker not found.")
        return encode_custom_entries(kept)

    await state.store.update(CUSTOM_ENTRIES_KEY, remove)
    await state.store.delete(history_key(tracker_id))
    logger.info("Deleted custom tracker %s", tracker_id)
    return {"message": "Tracker deleted.", "id": tracker_id}
