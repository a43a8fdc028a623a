"""
Slot availability and calendar consistency.

Pure computations over the fixed slot catalog and a snapshot of
appointment records. Nothing here reads or writes the store; callers
pass records in and persist whatever comes back.

Usage:
    scheduler = SlotScheduler()
    labels = scheduler.available_slots(day, store.appointments(), now=now)
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta
from typing import Optional

from bookwise.config import settings
from bookwise.scheduling.slot_catalog import SLOT_CATALOG, slot_datetime
from bookwise.schemas.appointment_schema import Appointment

logger = logging.getLogger(__name__)


class SlotScheduler:
    """
    Stateless slot calculator.

    Holds only the catalog and the cutoff window. Every method is a total
    function of its arguments and never mutates the records it is given.
    """

    def __init__(
        self,
        catalog: Sequence[str] = SLOT_CATALOG,
        lead_time: timedelta = timedelta(minutes=settings.business.booking_lead_minutes),
    ) -> None:
        self._catalog = tuple(catalog)
        self._lead_time = lead_time

    @property
    def catalog(self) -> tuple[str, ...]:
        return self._catalog

    @property
    def lead_time(self) -> timedelta:
        return self._lead_time

    def available_slots(
        self,
        day: date,
        appointments: Iterable[Appointment],
        exclude_appointment_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[str]:
        """
        Return the catalog labels on ``day`` that a booking may take.

        Args:
            day: Calendar day to inspect.
            appointments: All records, any day. Filtered to ``day`` here.
            exclude_appointment_id: Record being edited. Its own slot stays
                selectable; an unknown id has no effect.
            now: Current time for the cutoff window on today.

        Returns:
            Labels in catalog order.
        """
        now = now or datetime.now()
        on_day = [a for a in appointments if a.day == day]

        occupied = {a.slot_label for a in on_day if a.id != exclude_appointment_id}
        original_slot = next(
            (a.slot_label for a in on_day if a.id == exclude_appointment_id),
            None,
        ) if exclude_appointment_id is not None else None

        cutoff = now + self._lead_time
        is_today = day == now.date()

        available: list[str] = []
        for label in self._catalog:
            if label == original_slot:
                available.append(label)
            elif label in occupied:
                continue
            elif is_today and slot_datetime(day, label) < cutoff:
                continue
            else:
                available.append(label)

        logger.debug(
            "%d of %d slots available on %s", len(available), len(self._catalog), day
        )
        return available

    def is_day_fully_blocked(self, day: date, appointments: Iterable[Appointment]) -> bool:
        """
        True when every slot not taken by a real booking holds a manual block.

        A day packed with real bookings and no blocks is not "blocked": there
        is nothing to unblock, so this returns False.
        """
        on_day = [a for a in appointments if a.day == day]
        booked = {a.slot_label for a in on_day if not a.is_blocked}
        remaining = [label for label in self._catalog if label not in booked]
        if not remaining:
            return False

        blocked = {a.slot_label for a in on_day if a.is_blocked}
        return all(label in blocked for label in remaining)

    def block_day(self, day: date, appointments: Iterable[Appointment]) -> list[datetime]:
        """Return slot start times on ``day`` that nothing occupies yet."""
        occupied = {a.slot_label for a in appointments if a.day == day}
        return [
            slot_datetime(day, label) for label in self._catalog if label not in occupied
        ]

    def unblock_day(self, day: date, appointments: Iterable[Appointment]) -> list[str]:
        """Return ids of the manual blocks on ``day``. Bookings are never listed."""
        blocks = sorted(
            (a for a in appointments if a.day == day and a.is_blocked),
            key=lambda a: a.date_time,
        )
        return [a.id for a in blocks]

    def slot_occupant(
        self, day: date, label: str, appointments: Iterable[Appointment]
    ) -> Optional[Appointment]:
        """Return the record sitting in a slot, or None when it is free."""
        return next(
            (a for a in appointments if a.day == day and a.slot_label == label),
            None,
        )
