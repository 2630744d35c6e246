from datetime import datetime
from typing import Any

from pydantic import BaseModel, model_serializer

from ..utils.datetime_utils import format_quit_date


def _to_utc_iso(v: Any):
    if isinstance(v, datetime):
        # same shape as stored quit dates: 2025-09-19T19:17:43Z
        return format_quit_date(v)
    if isinstance(v, list):
        return [_to_utc_iso(x) for x in v]
    if isinstance(v, dict):
        return {k: _to_utc_iso(val) for k, val in v.items()}
    return v


class UtcIsoDatetimeModel(BaseModel):
    """Serialize datetime fields (including nested lists/dicts) as UTC 'YYYY-MM-DDTHH:MM:SSZ'."""
    @model_serializer(mode="wrap")
    def _serialize(self, handler):
        return _to_utc_iso(handler(self))
