"""Weekly calendar grid model and week/month navigation."""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional

from bookwise.config import settings
from bookwise.scheduling.slot_catalog import slot_datetime
from bookwise.scheduling.slot_scheduler import SlotScheduler
from bookwise.schemas.appointment_schema import Appointment


class CellState(str, Enum):
    FREE = "free"
    BOOKED = "booked"
    BLOCKED = "blocked"


class DayAction(str, Enum):
    """Day-level affordance offered above each column."""
    BLOCK = "block"
    UNBLOCK = "unblock"


@dataclass(frozen=True)
class SlotCell:
    label: str
    start: datetime
    state: CellState
    appointment: Optional[Appointment] = None


@dataclass(frozen=True)
class DayColumn:
    day: date
    is_today: bool
    fully_blocked: bool
    cells: list[SlotCell]

    @property
    def action(self) -> DayAction:
        return DayAction.UNBLOCK if self.fully_blocked else DayAction.BLOCK


@dataclass(frozen=True)
class WeekGrid:
    anchor: date
    columns: list[DayColumn]

    @property
    def title(self) -> str:
        return self.anchor.strftime("%B %Y")


def week_days(anchor: date, week_starts_on: int = settings.business.week_starts_on) -> list[date]:
    """Return the seven days of the week containing ``anchor``."""
    offset = (anchor.weekday() - week_starts_on) % 7
    start = anchor - timedelta(days=offset)
    return [start + timedelta(days=i) for i in range(7)]


def shift_week(anchor: date, weeks: int) -> date:
    return anchor + timedelta(weeks=weeks)


def shift_month(anchor: date, months: int) -> date:
    """Move ``anchor`` by whole months, clamping to the last day if needed."""
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(anchor.day, last_day))


def build_week(
    anchor: date,
    appointments: Iterable[Appointment],
    now: Optional[datetime] = None,
    scheduler: Optional[SlotScheduler] = None,
) -> WeekGrid:
    """Lay out one week of slots with their occupants and day affordances."""
    now = now or datetime.now()
    scheduler = scheduler or SlotScheduler()
    records = list(appointments)

    columns: list[DayColumn] = []
    for day in week_days(anchor):
        cells: list[SlotCell] = []
        for label in scheduler.catalog:
            occupant = scheduler.slot_occupant(day, label, records)
            if occupant is None:
                state = CellState.FREE
            elif occupant.is_blocked:
                state = CellState.BLOCKED
            else:
                state = CellState.BOOKED
            start = slot_datetime(day, label)
            cells.append(SlotCell(label=label, start=start, state=state, appointment=occupant))

        columns.append(DayColumn(
            day=day,
            is_today=day == now.date(),
            fully_blocked=scheduler.is_day_fully_blocked(day, records),
            cells=cells,
        ))

    return WeekGrid(anchor=anchor, columns=columns)
