"""Date helpers."""

from datetime import date, datetime, timedelta, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def week_start_for(moment: datetime) -> date:
    """Monday (UTC) of the week containing ``moment``.

    Naive datetimes are taken to be UTC already.

    Args:
        moment: Any instant

    Returns:
        The calendar date of that week's Monday
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    day = moment.date()
    return day - timedelta(days=day.weekday())
