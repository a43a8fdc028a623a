"""Shared test fixtures and helpers."""

from datetime import datetime, timedelta
from typing import Optional

import pytest

from bookwise.scheduling.slot_catalog import build_slot_catalog
from bookwise.scheduling.slot_scheduler import SlotScheduler
from bookwise.schemas.appointment_schema import BLOCKED_LABEL, Appointment, AppointmentKind
from bookwise.schemas.booking_schema import BookingRequest
from bookwise.schemas.customer_schema import Customer
from bookwise.store import AppointmentStore

# Monday morning, a quarter past ten.
NOW = datetime(2026, 3, 16, 10, 15)
TODAY = NOW.date()
TOMORROW = TODAY + timedelta(days=1)

HALF_HOUR_CATALOG = build_slot_catalog("09:00", "17:00", 30)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def scheduler() -> SlotScheduler:
    return SlotScheduler(catalog=HALF_HOUR_CATALOG, lead_time=timedelta(hours=1))


@pytest.fixture
def two_slot_scheduler() -> SlotScheduler:
    return SlotScheduler(catalog=("09:00", "09:30"), lead_time=timedelta(hours=1))


@pytest.fixture
def alice() -> Customer:
    return Customer(
        id="1",
        name="Alice Johnson",
        email="alice.j@example.com",
        phone="123-456-7890",
        past_booking_data="Usually books a trim every 6-8 weeks.",
        user_behavior_data="Responds to email reminders within an hour.",
    )


@pytest.fixture
def store(alice) -> AppointmentStore:
    return AppointmentStore(
        appointments=[
            make_appointment("appt-1", datetime(2026, 3, 17, 10, 0)),
            make_appointment("appt-2", datetime(2026, 3, 17, 14, 0)),
        ],
        customers=[alice],
    )


def make_appointment(
    appointment_id: str,
    when: datetime,
    customer_id: Optional[str] = "1",
    customer_name: str = "Alice Johnson",
    email: str = "alice.j@example.com",
    phone: str = "123-456-7890",
) -> Appointment:
    """Helper to create a real customer booking."""
    return Appointment(
        id=appointment_id,
        kind=AppointmentKind.BOOKING,
        customer_id=customer_id,
        customer_name=customer_name,
        email=email,
        phone=phone,
        date_time=when,
    )


def make_block(appointment_id: str, when: datetime) -> Appointment:
    """Helper to create a manual block."""
    return Appointment(
        id=appointment_id,
        kind=AppointmentKind.BLOCK,
        customer_name=BLOCKED_LABEL,
        date_time=when,
    )


def make_request(
    time: str,
    day=TOMORROW,
    phone: str = "555-000-1111",
    name: str = "Dana Scully",
    email: str = "dana@example.com",
    **kwargs,
) -> BookingRequest:
    """Helper to create a BookingRequest with sensible defaults."""
    return BookingRequest(
        phone=phone, customer_name=name, email=email, date=day, time=time, **kwargs
    )
