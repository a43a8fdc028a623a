"""
JSON persistence for the state store.

Layout on disk::

    {
      "appointments":    {"<id>": {...}, ...},
      "customers":       {"<id>": {...}, ...},
      "update_requests": {"<id>": {...}, ...}
    }

Datetimes are written as ISO-8601 strings and parsed back into datetime
values on load. A missing file starts the app from the demo seed data; an
unreadable file is logged and also falls back to the seed.
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from bookwise.scheduling.slot_catalog import SLOT_CATALOG, slot_datetime
from bookwise.schemas.appointment_schema import Appointment
from bookwise.schemas.customer_schema import Customer, CustomerUpdateRequest
from bookwise.store import AppointmentStore

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def dump_store(store: AppointmentStore) -> dict:
    """Convert the store into a JSON-compatible dict."""
    return {
        "appointments": {a.id: a.model_dump(mode="json") for a in store.appointments()},
        "customers": {c.id: c.model_dump(mode="json") for c in store.customers()},
        "update_requests": {
            r.id: r.model_dump(mode="json") for r in store.update_requests()
        },
    }


def parse_store(data: dict) -> AppointmentStore:
    """Rebuild a store from the dict produced by ``dump_store``."""
    return AppointmentStore(
        appointments=[
            Appointment.model_validate(v) for v in data.get("appointments", {}).values()
        ],
        customers=[Customer.model_validate(v) for v in data.get("customers", {}).values()],
        update_requests=[
            CustomerUpdateRequest.model_validate(v)
            for v in data.get("update_requests", {}).values()
        ],
    )


def save_store(store: AppointmentStore, path: PathLike) -> None:
    """Write the store to ``path`` atomically."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(dump_store(store), fh, indent=2)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Saved state to %s", target)


def load_store(path: PathLike, now: Optional[datetime] = None) -> AppointmentStore:
    """Load the store from ``path``, falling back to seed data."""
    target = Path(path)
    if not target.exists():
        logger.info("No saved state at %s, starting from demo data", target)
        return seed_store(now)
    try:
        with target.open(encoding="utf-8") as fh:
            data = json.load(fh)
        store = parse_store(data)
    except (OSError, ValueError, ValidationError, AttributeError) as exc:
        logger.error("Failed to load state from %s: %s", target, exc)
        return seed_store(now)
    logger.debug("Loaded %d appointments from %s", len(store.appointments()), target)
    return store


def seed_store(now: Optional[datetime] = None) -> AppointmentStore:
    """Demo customers and appointments relative to ``now``."""
    now = now or datetime.now()
    tomorrow = now.date() + timedelta(days=1)
    in_two_days = now.date() + timedelta(days=2)

    customers = [
        Customer(
            id="1",
            name="Alice Johnson",
            email="alice.j@example.com",
            phone="123-456-7890",
            past_booking_data=(
                "3 previous appointments, all on time. Prefers morning slots. "
                "Usually books a trim every 6-8 weeks."
            ),
            user_behavior_data=(
                "Responds to email reminders within an hour. Last booked via mobile."
            ),
        ),
        Customer(
            id="2",
            name="Bob Williams",
            email="bob.w@example.com",
            phone="234-567-8901",
            past_booking_data="1 previous appointment, rescheduled once. No-show risk is low.",
            user_behavior_data="Always confirms via SMS link.",
        ),
        Customer(
            id="3",
            name="Charlie Brown",
            email="charlie.b@example.com",
            phone="345-678-9012",
            past_booking_data="New customer.",
            user_behavior_data="Booked via desktop website.",
        ),
    ]

    def _slot(day, label, fallback=0):
        return slot_datetime(day, label if label in SLOT_CATALOG else SLOT_CATALOG[fallback])

    appointments = [
        Appointment(
            id="appt-1",
            customer_id="1",
            customer_name="Alice Johnson",
            email="alice.j@example.com",
            phone="123-456-7890",
            date_time=_slot(tomorrow, "10:00"),
            notes="Follow-up regarding the new design system.",
        ),
        Appointment(
            id="appt-2",
            customer_id="2",
            customer_name="Bob Williams",
            email="bob.w@example.com",
            phone="234-567-8901",
            date_time=_slot(tomorrow, "14:00", fallback=-1),
            notes="Discussing the Q3 marketing budget.",
        ),
        Appointment(
            id="appt-3",
            customer_id="3",
            customer_name="Charlie Brown",
            email="charlie.b@example.com",
            phone="345-678-9012",
            date_time=_slot(in_two_days, SLOT_CATALOG[0]),
            notes="Initial consultation for the new project.",
        ),
    ]
    return AppointmentStore(appointments=appointments, customers=customers)
