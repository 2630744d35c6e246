# app/models/quit_record_model.py
import json
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..utils.datetime_utils import QuitDateParseError, parse_quit_date

logger = logging.getLogger(__name__)

RECORD_SCHEMA_VERSION = 1

# Storage keys
CUSTOM_ENTRIES_KEY = "custom_entries"


def quit_date_key(tracker_id: str) -> str:
    return f"quit_date:{tracker_id}"


def history_key(tracker_id: str) -> str:
    return f"history:{tracker_id}"


class QuitRecord(BaseModel):
    id: str
    title: str
    quit_date: Optional[str] = None   # raw ISO-8601 as stored; None = not started
    built_in: bool = False


# Built-in categories: fixed ids and titles
BUILT_IN_TRACKERS: Dict[str, str] = {
    "alcohol": "Alcohol",
    "smoking": "Smoking",
    "vaping": "Vaping",
    "nicotine": "Nicotine",
    "caffeine": "Caffeine",
    "sugar": "Sugar",
    "social_media": "Social Media",
    "gambling": "Gambling",
    "pornography": "Pornography",
}


class _StoredEntryV1(BaseModel):
    v: int = RECORD_SCHEMA_VERSION
    id: str = Field(min_length=1)
    title: str
    quitDate: Optional[str] = None


def _checked_quit_date(raw: Optional[str], tracker_id: str) -> Optional[str]:
    if raw is None:
        return None
    try:
        parse_quit_date(raw)
    except QuitDateParseError:
        logger.warning("Custom tracker %s has unparseable quitDate %r; treating as unset", tracker_id, raw)
        return None
    return raw


def encode_custom_entries(records: List[QuitRecord]) -> str:
    return json.dumps([
        {"v": RECORD_SCHEMA_VERSION, "id": r.id, "title": r.title, "quitDate": r.quit_date}
        for r in records
    ])


def decode_custom_entries(raw: Optional[str]) -> List[QuitRecord]:
    """
    Decode the stored custom tracker list. Anything that can't be read is
    dropped with a warning rather than failing the whole list.
    """
    if not raw:
        return []
    try:
        items = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Undecodable %s value; ignoring", CUSTOM_ENTRIES_KEY)
        return []
    if not isinstance(items, list):
        logger.warning("%s is not a JSON array; ignoring", CUSTOM_ENTRIES_KEY)
        return []

    records: List[QuitRecord] = []
    for item in items:
        if not isinstance(item, dict):
            logger.warning("Skipping malformed custom entry %r", item)
            continue
        version = item.get("v", RECORD_SCHEMA_VERSION)
        if version != RECORD_SCHEMA_VERSION:
            logger.warning("Skipping custom entry with unknown schema version %r", version)
            continue
        try:
            entry = _StoredEntryV1(**item)
        except ValidationError:
            logger.warning("Skipping malformed custom entry %r", item)
            continue
        records.append(QuitRecord(
            id=entry.id,
            title=entry.title,
            quit_date=_checked_quit_date(entry.quitDate, entry.id),
            built_in=False,
        ))
    return records


def encode_history(streaks: List[int]) -> str:
    return json.dumps([int(s) for s in streaks])


def decode_history(raw: Optional[str]) -> List[int]:
    if not raw:
        return []
    try:
        items = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Undecodable streak history; ignoring")
        return []
    if not isinstance(items, list):
        return []
    return [s for s in items if isinstance(s, int) and not isinstance(s, bool) and s > 0]
