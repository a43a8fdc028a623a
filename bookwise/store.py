"""
In-memory application state owned by the shell.

Holds appointments, customers, and update requests keyed by id. The
scheduler only ever sees read-only copies handed out by ``appointments()``;
all writes go through this object, which re-checks slot occupancy at
commit time so a stale snapshot can never produce a double booking.
"""

import logging
from datetime import date
from typing import Optional

from bookwise.schemas.appointment_schema import Appointment
from bookwise.schemas.customer_schema import Customer, CustomerUpdateRequest

logger = logging.getLogger(__name__)


class SlotUnavailableError(Exception):
    """Raised when a commit would put two records in one slot."""


class AppointmentStore:
    """Single-writer state container for the scheduling app."""

    def __init__(
        self,
        appointments: Optional[list[Appointment]] = None,
        customers: Optional[list[Customer]] = None,
        update_requests: Optional[list[CustomerUpdateRequest]] = None,
    ) -> None:
        self._appointments: dict[str, Appointment] = {a.id: a for a in appointments or []}
        self._customers: dict[str, Customer] = {c.id: c for c in customers or []}
        self._update_requests: dict[str, CustomerUpdateRequest] = {
            r.id: r for r in update_requests or []
        }

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def appointments(self, day: Optional[date] = None) -> list[Appointment]:
        """Return appointments ordered by start time, optionally for one day."""
        records = sorted(self._appointments.values(), key=lambda a: a.date_time)
        if day is not None:
            records = [a for a in records if a.day == day]
        return records

    def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return self._appointments.get(appointment_id)

    def customers(self) -> list[Customer]:
        """Return customers in insertion order."""
        return list(self._customers.values())

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self._customers.get(customer_id)

    def update_requests(self) -> list[CustomerUpdateRequest]:
        return list(self._update_requests.values())

    def get_update_request(self, request_id: str) -> Optional[CustomerUpdateRequest]:
        return self._update_requests.get(request_id)

    # ------------------------------------------------------------------ #
    # Appointment writes
    # ------------------------------------------------------------------ #

    def _check_slot_free(self, appointment: Appointment) -> None:
        for other in self._appointments.values():
            if (
                other.id != appointment.id
                and other.day == appointment.day
                and other.slot_label == appointment.slot_label
            ):
                raise SlotUnavailableError(
                    f"Slot {appointment.day} {appointment.slot_label} "
                    f"is already taken by {other.id}"
                )

    def add_appointment(self, appointment: Appointment) -> Appointment:
        """Insert a new record after checking its slot is free."""
        if appointment.id in self._appointments:
            raise ValueError(f"Appointment {appointment.id} already exists")
        self._check_slot_free(appointment)
        self._appointments[appointment.id] = appointment
        logger.info(
            "Appointment added: %s (%s) at %s",
            appointment.id, appointment.kind.value, appointment.date_time.isoformat(),
        )
        return appointment

    def replace_appointment(self, appointment: Appointment) -> Appointment:
        """Overwrite an existing record, re-checking its slot."""
        if appointment.id not in self._appointments:
            raise KeyError(appointment.id)
        self._check_slot_free(appointment)
        self._appointments[appointment.id] = appointment
        logger.info(
            "Appointment updated: %s at %s", appointment.id, appointment.date_time.isoformat()
        )
        return appointment

    def remove_appointment(self, appointment_id: str) -> Optional[Appointment]:
        """Remove a record. Returns it, or None when the id is unknown."""
        removed = self._appointments.pop(appointment_id, None)
        if removed is not None:
            logger.info("Appointment removed: %s", appointment_id)
        return removed

    # ------------------------------------------------------------------ #
    # Customer and request writes
    # ------------------------------------------------------------------ #

    def add_customer(self, customer: Customer) -> Customer:
        if customer.id in self._customers:
            raise ValueError(f"Customer {customer.id} already exists")
        self._customers[customer.id] = customer
        logger.info("Customer added: %s (%s)", customer.id, customer.name)
        return customer

    def replace_customer(self, customer: Customer) -> Customer:
        if customer.id not in self._customers:
            raise KeyError(customer.id)
        self._customers[customer.id] = customer
        return customer

    def add_update_request(self, request: CustomerUpdateRequest) -> CustomerUpdateRequest:
        if request.id in self._update_requests:
            raise ValueError(f"Update request {request.id} already exists")
        self._update_requests[request.id] = request
        logger.info("Update request filed: %s for customer %s", request.id, request.customer_id)
        return request

    def replace_update_request(self, request: CustomerUpdateRequest) -> CustomerUpdateRequest:
        if request.id not in self._update_requests:
            raise KeyError(request.id)
        self._update_requests[request.id] = request
        return request
