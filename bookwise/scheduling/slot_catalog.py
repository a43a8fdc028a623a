"""
Fixed catalog of bookable times of day.

The catalog is the same for every day and is built once from business
hours. Slot labels are ``HH:MM`` strings; an appointment occupies the slot
whose label equals its own time of day.
"""

from datetime import date, datetime, time, timedelta

from bookwise.config import settings


def parse_slot_label(label: str) -> tuple[int, int]:
    """Split an ``HH:MM`` label into hour and minute."""
    hours, minutes = label.split(":")
    return int(hours), int(minutes)


def slot_datetime(day: date, label: str) -> datetime:
    """Combine a day and a slot label into a naive datetime."""
    hours, minutes = parse_slot_label(label)
    return datetime.combine(day, time(hour=hours, minute=minutes))


def slot_label_of(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def build_slot_catalog(
    open_time: str, close_time: str, interval_minutes: int
) -> tuple[str, ...]:
    """Build the ordered labels from open (inclusive) to close (exclusive)."""
    anchor = date(2000, 1, 1)
    current = slot_datetime(anchor, open_time)
    end = slot_datetime(anchor, close_time)
    step = timedelta(minutes=interval_minutes)

    labels: list[str] = []
    while current < end:
        labels.append(slot_label_of(current))
        current += step
    return tuple(labels)


SLOT_CATALOG: tuple[str, ...] = build_slot_catalog(
    settings.business.open_time,
    settings.business.close_time,
    settings.business.slot_interval_minutes,
)
