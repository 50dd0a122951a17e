"""Civil time helpers.

All times of day in this domain (arrival targets, departure patterns) are
Korean civil time. The offset is fixed so results never depend on the
server's timezone.
"""

from datetime import UTC, date, datetime, time, timedelta, timezone

MINUTES_PER_DAY = 24 * 60

CIVIL_TZ = timezone(timedelta(hours=9), name="KST")


def to_civil(moment: datetime) -> datetime:
    """Express an instant in civil time. Naive datetimes are taken as civil already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=CIVIL_TZ)
    return moment.astimezone(CIVIL_TZ)


def civil_date(moment: datetime) -> date:
    """Civil calendar date of an instant."""
    return to_civil(moment).date()


def parse_time_of_day(value: str) -> time:
    """Parse an "HH:MM" string, rejecting out-of-range values."""
    parts = value.split(":")
    if len(parts) != 2 or not all(len(p) == 2 and p.isdigit() for p in parts):
        raise ValueError(f"Invalid time of day: {value!r}. Must be HH:MM")
    hour, minute = int(parts[0]), int(parts[1])
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time of day: {value!r}. Must be HH:MM")
    return time(hour, minute)


def time_to_minutes(value: str) -> int:
    """Minutes since midnight for an "HH:MM" string."""
    parsed = parse_time_of_day(value)
    return parsed.hour * 60 + parsed.minute


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM", wrapping negatives and overflow."""
    normalized = minutes % MINUTES_PER_DAY
    return f"{normalized // 60:02d}:{normalized % 60:02d}"


def civil_instant(on_date: date, time_of_day: str) -> datetime:
    """The UTC instant of a civil time of day on a civil date."""
    local = datetime.combine(on_date, parse_time_of_day(time_of_day), tzinfo=CIVIL_TZ)
    return local.astimezone(UTC)
