from datetime import date, datetime, time, timezone
from uuid import UUID

from foodtrack.errors import InvalidArgument


def parse_id(value, field: str = "id") -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise InvalidArgument(f"{field} is not a valid identifier: {value!r}")


def to_utc(value: date | datetime | None, end_of_day: bool = False) -> datetime | None:
    """Normalise a date or datetime to an aware UTC datetime.

    Plain dates become the first (or, with ``end_of_day``, the last)
    instant of that day. Naive datetimes are taken to be UTC.
    """
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.max if end_of_day else time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
