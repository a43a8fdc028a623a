"""
Block and unblock actions behind the calendar grid.

Day-level actions recompute their work list from the store at the moment
they commit, which makes them idempotent: blocking an already blocked day
creates nothing, unblocking an open day removes nothing.
"""

import logging
import uuid
from datetime import date, datetime
from typing import Optional, TypedDict

from bookwise.logging_context import get_op_logger
from bookwise.scheduling.slot_catalog import slot_label_of
from bookwise.scheduling.slot_scheduler import SlotScheduler
from bookwise.schemas.appointment_schema import BLOCKED_LABEL, Appointment, AppointmentKind
from bookwise.store import AppointmentStore, SlotUnavailableError

logger = get_op_logger(__name__)


class CalendarResult(TypedDict, total=False):
    success: bool
    message: str
    appointment_ids: list[str]


def _new_block(slot_start: datetime) -> Appointment:
    return Appointment(
        id=f"blk-{uuid.uuid4().hex[:8]}",
        kind=AppointmentKind.BLOCK,
        customer_name=BLOCKED_LABEL,
        date_time=slot_start,
    )


def block_slot(
    store: AppointmentStore,
    slot_start: datetime,
    scheduler: Optional[SlotScheduler] = None,
) -> CalendarResult:
    """Block a single free slot from the catalog."""
    scheduler = scheduler or SlotScheduler()
    label = slot_label_of(slot_start)
    if label not in scheduler.catalog:
        return {
            "success": False,
            "message": f"{label} is not a bookable time slot.",
            "appointment_ids": [],
        }
    try:
        block = store.add_appointment(_new_block(slot_start))
    except SlotUnavailableError as exc:
        return {"success": False, "message": str(exc), "appointment_ids": []}
    return {
        "success": True,
        "message": f"The time slot at {slot_start:%H:%M} has been blocked.",
        "appointment_ids": [block.id],
    }


def block_day(
    store: AppointmentStore, day: date, scheduler: Optional[SlotScheduler] = None
) -> CalendarResult:
    """Block every slot on ``day`` that nothing occupies."""
    scheduler = scheduler or SlotScheduler()
    created: list[str] = []
    for slot_start in scheduler.block_day(day, store.appointments(day)):
        created.append(store.add_appointment(_new_block(slot_start)).id)
    logger.info("Blocked %d slots on %s", len(created), day.isoformat())
    return {
        "success": True,
        "message": f"{day:%B %d, %Y} has been blocked off.",
        "appointment_ids": created,
    }


def unblock_day(
    store: AppointmentStore, day: date, scheduler: Optional[SlotScheduler] = None
) -> CalendarResult:
    """Remove every manual block on ``day``. Real bookings stay put."""
    scheduler = scheduler or SlotScheduler()
    removed = [
        appointment_id
        for appointment_id in scheduler.unblock_day(day, store.appointments(day))
        if store.remove_appointment(appointment_id) is not None
    ]
    logger.info("Unblocked %d slots on %s", len(removed), day.isoformat())
    return {
        "success": True,
        "message": f"The free slots on {day:%B %d, %Y} are now available.",
        "appointment_ids": removed,
    }


def unblock_slot(store: AppointmentStore, appointment_id: str) -> CalendarResult:
    """Remove a single manual block. Refuses to touch real bookings."""
    record = store.get_appointment(appointment_id)
    if record is None or not record.is_blocked:
        return {
            "success": False,
            "message": f"No blocked slot with id {appointment_id}.",
            "appointment_ids": [],
        }
    store.remove_appointment(appointment_id)
    return {
        "success": True,
        "message": f"The slot at {record.date_time:%H:%M} is available again.",
        "appointment_ids": [appointment_id],
    }
