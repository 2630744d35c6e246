# app/utils/datetime_utils.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


class QuitDateParseError(ValueError):
    """Raised when a stored or submitted quit date is not valid ISO-8601."""


def now_utc() -> datetime:
    return datetime.now(timezone.utc)

def to_utc_aware(dt):
    if dt is None:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def parse_quit_date(raw) -> datetime:
    """
    Parse an ISO-8601 date or date-time string into a tz-aware UTC datetime.
    Naive values are treated as UTC. Accepts a trailing 'Z'.
    """
    if isinstance(raw, datetime):
        return to_utc_aware(raw)
    if not isinstance(raw, str) or not raw.strip():
        raise QuitDateParseError(f"Invalid quit date: {raw!r}")

    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise QuitDateParseError(f"Invalid quit date: {raw!r}") from e
    try:
        return to_utc_aware(parsed).astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        # offset pushes the instant outside year 1..9999
        raise QuitDateParseError(f"Quit date out of range: {raw!r}") from e


def format_quit_date(dt: datetime) -> str:
    """Canonical storage form: UTC, seconds precision, 'Z' suffix."""
    return to_utc_aware(dt).astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def days_clean(quit_date: Union[str, datetime], now: Optional[datetime] = None) -> int:
    """
    Whole days since `quit_date`, counting the quit day itself as day 1.
    A quit date in the future yields 0 or less; callers decide how to show that.
    """
    start = parse_quit_date(quit_date)
    current = to_utc_aware(now) if now is not None else now_utc()
    # timedelta floor division rounds toward -inf, so 12h in the future is day 0
    return (current - start) // ONE_DAY + 1


def days_clean_or_none(quit_date: Optional[str], now: Optional[datetime] = None) -> Optional[int]:
    """Storage-read boundary: missing or unparseable dates mean "not started"."""
    if quit_date is None:
        return None
    try:
        return days_clean(quit_date, now)
    except QuitDateParseError:
        logger.warning("Ignoring unparseable quit date %r", quit_date)
        return None
