"""
Booking creation, editing, and cancellation against the state store.

Every entry point re-runs slot availability against the store's current
records before writing, so a booking form rendered from an older
snapshot cannot take a slot that has since been filled.
"""

import logging
import uuid
from datetime import date, datetime, timedelta
from typing import Optional, TypedDict

from bookwise.config import settings
from bookwise.scheduling.slot_catalog import slot_datetime
from bookwise.scheduling.slot_scheduler import SlotScheduler
from bookwise.schemas.appointment_schema import Appointment, AppointmentKind
from bookwise.schemas.booking_schema import BookingRequest
from bookwise.schemas.customer_schema import (
    CustomerSnapshot,
    CustomerUpdateRequest,
    RequestedChanges,
)
from bookwise.store import AppointmentStore
from bookwise.tools.customer import create_customer, lookup_customer

logger = logging.getLogger(__name__)


class BookingResult(TypedDict, total=False):
    """Result from book_appointment, edit_appointment, or cancel_appointment."""

    success: bool
    message: str
    appointment_id: str
    customer_id: str
    update_request_id: str
    appointment: Appointment


def _check_bookable_day(day: date, now: datetime) -> Optional[str]:
    """Return an error message when ``day`` is outside the booking window."""
    today = now.date()
    if day < today:
        return f"Cannot book {day.isoformat()}: the date is in the past."
    if day > today + timedelta(days=settings.business.booking_horizon_days):
        return (
            f"Cannot book {day.isoformat()}: bookings open "
            f"{settings.business.booking_horizon_days} days ahead."
        )
    return None


def _requested_changes(
    request: BookingRequest, current: CustomerSnapshot
) -> Optional[RequestedChanges]:
    """Keep only the fields that actually differ from the stored profile."""
    if request.updates is None:
        return None
    changes = RequestedChanges(
        name=request.updates.name if request.updates.name not in (None, current.name) else None,
        email=request.updates.email if request.updates.email not in (None, current.email) else None,
    )
    return None if changes.is_empty() else changes


def book_appointment(
    store: AppointmentStore,
    request: BookingRequest,
    now: Optional[datetime] = None,
    scheduler: Optional[SlotScheduler] = None,
) -> BookingResult:
    """Create a new booking and attach it to a new or returning customer."""
    now = now or datetime.now()
    scheduler = scheduler or SlotScheduler()

    error = _check_bookable_day(request.date, now)
    if error:
        return {"success": False, "message": error}

    available = scheduler.available_slots(request.date, store.appointments(), now=now)
    if request.time not in available:
        return {
            "success": False,
            "message": f"{request.time} on {request.date.isoformat()} is not available.",
        }

    result: BookingResult = {"success": True}
    customer = lookup_customer(store, request.phone)
    if customer is not None:
        snapshot = CustomerSnapshot(name=customer.name, email=customer.email)
        changes = _requested_changes(request, snapshot)
        if changes is not None:
            update_request = store.add_update_request(CustomerUpdateRequest(
                id=f"req-{uuid.uuid4().hex[:8]}",
                customer_id=customer.id,
                current_data=snapshot,
                requested_data=changes,
            ))
            result["update_request_id"] = update_request.id
        name, email = customer.name, customer.email
    else:
        customer = create_customer(store, request.customer_name, request.email, request.phone)
        name, email = request.customer_name, request.email

    appointment = store.add_appointment(Appointment(
        id=f"appt-{uuid.uuid4().hex[:8]}",
        kind=AppointmentKind.BOOKING,
        customer_id=customer.id,
        customer_name=name,
        email=email,
        phone=request.phone,
        date_time=slot_datetime(request.date, request.time),
    ))
    logger.info(
        "Booking created: %s for %s on %s at %s",
        appointment.id, name, request.date.isoformat(), request.time,
    )

    result.update(
        appointment_id=appointment.id,
        customer_id=customer.id,
        appointment=appointment,
        message=(
            f"Appointment booked for {name} on {request.date.isoformat()} at {request.time}."
        ),
    )
    return result


def edit_appointment(
    store: AppointmentStore,
    appointment_id: str,
    request: BookingRequest,
    now: Optional[datetime] = None,
    scheduler: Optional[SlotScheduler] = None,
) -> BookingResult:
    """Move a booking and update its contact details. The phone stays fixed."""
    now = now or datetime.now()
    scheduler = scheduler or SlotScheduler()

    existing = store.get_appointment(appointment_id)
    if existing is None:
        return {"success": False, "message": f"Appointment {appointment_id} not found."}
    if existing.is_blocked:
        return {"success": False, "message": "Blocked slots cannot be edited."}

    if request.date != existing.day:
        error = _check_bookable_day(request.date, now)
        if error:
            return {"success": False, "message": error}

    target = slot_datetime(request.date, request.time)
    if target < now and target != existing.date_time:
        return {
            "success": False,
            "message": "Appointments cannot be moved to a time that has already passed.",
        }

    available = scheduler.available_slots(
        request.date, store.appointments(), exclude_appointment_id=appointment_id, now=now
    )
    if request.time not in available:
        return {
            "success": False,
            "message": f"{request.time} on {request.date.isoformat()} is not available.",
        }

    updated = store.replace_appointment(existing.model_copy(update={
        "date_time": target,
        "customer_name": request.customer_name,
        "email": request.email,
    }))
    logger.info(
        "Booking rescheduled: %s to %s %s", appointment_id, request.date.isoformat(), request.time
    )
    return {
        "success": True,
        "appointment_id": updated.id,
        "appointment": updated,
        "message": "The appointment has been successfully updated.",
    }


def cancel_appointment(store: AppointmentStore, appointment_id: str) -> BookingResult:
    """Cancel a booking or lift a single block."""
    removed = store.remove_appointment(appointment_id)
    if removed is None:
        return {"success": False, "message": f"Appointment {appointment_id} not found."}
    what = "Blocked slot" if removed.is_blocked else "Appointment"
    return {
        "success": True,
        "appointment_id": appointment_id,
        "message": f"{what} {appointment_id} has been removed.",
    }


def get_appointment(store: AppointmentStore, appointment_id: str) -> Optional[Appointment]:
    """Retrieve an appointment by id."""
    return store.get_appointment(appointment_id)


def list_appointments(
    store: AppointmentStore, day: Optional[date] = None, include_blocks: bool = True
) -> list[Appointment]:
    """List appointments in start-time order."""
    records = store.appointments(day)
    if not include_blocks:
        records = [a for a in records if not a.is_blocked]
    return records
