"""Due-date input parsing."""

import re
from datetime import date, datetime, time, timedelta, timezone

from .tasks import ValidationError, utcnow

RELATIVE_DAYS = re.compile(r"^\+(\d{1,4})d$")


def end_of_day(day: date) -> datetime:
    """23:59:59 local time on `day`, as an aware UTC datetime."""
    try:
        local = datetime.combine(day, time(23, 59, 59)).astimezone()
        return local.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # Shifting to or from UTC can leave the datetime range at year 1 or 9999
        raise ValidationError(f"Date out of range: {day.isoformat()}")


def parse_due_date(text: str, now: datetime | None = None) -> datetime | None:
    """
    Parse due-date input.

    "" clears (returns None). "today" / "tomorrow" (any case) resolve to the
    end of that local day, so a task due today is not immediately overdue.
    "+Nd" is N days from today and "YYYY-MM-DD" a calendar date; both also
    resolve to end of day. Anything else raises ValidationError.
    """
    value = text.strip().lower()
    if not value:
        return None

    today = (now or utcnow()).astimezone().date()
    if value == "today":
        return end_of_day(today)
    if value == "tomorrow":
        return end_of_day(today + timedelta(days=1))

    relative = RELATIVE_DAYS.match(value)
    if relative:
        try:
            day = today + timedelta(days=int(relative.group(1)))
        except OverflowError:
            raise ValidationError(f"Date out of range: {text.strip()}")
        return end_of_day(day)

    try:
        day = date.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            f"Invalid date '{text.strip()}'. Use today, tomorrow, +Nd or YYYY-MM-DD"
        )
    return end_of_day(day)


def format_for_input(due: datetime | None) -> str:
    """Render an existing due date for pre-populating the edit buffer."""
    if due is None:
        return ""
    return due.astimezone().date().isoformat()
