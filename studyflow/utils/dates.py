# studyflow/utils/dates.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

# Accept ISO first, then a few common date-only layouts sent by form inputs
_DATE_FMTS: list[str] = [
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%Y/%m/%d",
]


def parse_due_date(value) -> Optional[datetime]:
    """Parse a due date string into a naive UTC datetime; blank means no due date.

    Raises ValueError for anything that is not a recognisable date.
    """
    if value is None or isinstance(value, datetime):
        return _to_naive_utc(value) if value is not None else None
    s = str(value).strip()
    if not s:
        return None
    try:
        return _to_naive_utc(datetime.fromisoformat(s))
    except ValueError:
        pass
    for fmt in _DATE_FMTS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    raise ValueError(f"invalid date: {s!r}")


def _to_naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)
