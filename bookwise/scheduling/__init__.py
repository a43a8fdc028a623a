from bookwise.scheduling.calendar_view import (
    CellState,
    DayAction,
    DayColumn,
    SlotCell,
    WeekGrid,
    build_week,
    shift_month,
    shift_week,
    week_days,
)
from bookwise.scheduling.slot_catalog import SLOT_CATALOG, build_slot_catalog, slot_datetime
from bookwise.scheduling.slot_scheduler import SlotScheduler

__all__ = [
    "SlotScheduler",
    "SLOT_CATALOG",
    "build_slot_catalog",
    "slot_datetime",
    "WeekGrid",
    "DayColumn",
    "SlotCell",
    "CellState",
    "DayAction",
    "build_week",
    "week_days",
    "shift_week",
    "shift_month",
]
