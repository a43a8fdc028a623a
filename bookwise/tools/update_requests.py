"""
Review flow for customer-submitted profile changes.

A request starts pending and moves exactly once, to approved or rejected.
Approving copies the requested name/email onto the customer, records the
change in the customer's history, and rewrites the contact details on
that customer's upcoming appointments.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, TypedDict

from bookwise.schemas.customer_schema import CustomerUpdateRequest, RequestStatus
from bookwise.store import AppointmentStore

logger = logging.getLogger(__name__)


class InvalidTransitionError(Exception):
    """Raised when a request is moved out of a terminal status."""


@dataclass(frozen=True)
class Transition:
    from_status: RequestStatus
    to_status: RequestStatus


TRANSITIONS: list[Transition] = [
    Transition(RequestStatus.PENDING, RequestStatus.APPROVED),
    Transition(RequestStatus.PENDING, RequestStatus.REJECTED),
]


def _transition(
    request: CustomerUpdateRequest, to_status: RequestStatus
) -> CustomerUpdateRequest:
    if not any(
        t.from_status == request.status and t.to_status == to_status for t in TRANSITIONS
    ):
        raise InvalidTransitionError(
            f"Request {request.id} cannot move from '{request.status.value}' "
            f"to '{to_status.value}'"
        )
    logger.debug(
        "Request %s: %s -> %s", request.id, request.status.value, to_status.value
    )
    return request.model_copy(update={"status": to_status})


class ReviewResult(TypedDict, total=False):
    success: bool
    message: str
    request_id: str
    updated_appointments: int


def pending_requests(store: AppointmentStore) -> list[CustomerUpdateRequest]:
    return [r for r in store.update_requests() if r.status == RequestStatus.PENDING]


def approve_request(
    store: AppointmentStore, request_id: str, now: Optional[datetime] = None
) -> ReviewResult:
    """Apply a pending request to the customer and their future appointments."""
    now = now or datetime.now()
    request = store.get_update_request(request_id)
    if request is None:
        return {"success": False, "message": f"Update request {request_id} not found."}
    try:
        approved = _transition(request, RequestStatus.APPROVED)
    except InvalidTransitionError as exc:
        return {"success": False, "message": str(exc), "request_id": request_id}

    updated_count = 0
    customer = store.get_customer(request.customer_id)
    if customer is not None:
        changes = request.requested_data
        stamp = now.strftime("%m/%d/%Y")
        history = list(customer.history)
        update: dict = {}
        if changes.name and changes.name != customer.name:
            history.append(
                f'Name updated from "{customer.name}" to "{changes.name}" on {stamp}'
            )
            update["name"] = changes.name
        if changes.email and changes.email != customer.email:
            history.append(
                f'Email updated from "{customer.email}" to "{changes.email}" on {stamp}'
            )
            update["email"] = changes.email
        update["history"] = history
        store.replace_customer(customer.model_copy(update=update))

        appointment_update: dict = {}
        if changes.name:
            appointment_update["customer_name"] = changes.name
        if changes.email:
            appointment_update["email"] = changes.email
        if appointment_update:
            for appointment in store.appointments():
                if appointment.customer_id == customer.id and appointment.date_time > now:
                    store.replace_appointment(appointment.model_copy(update=appointment_update))
                    updated_count += 1
    else:
        logger.warning("Approved request %s references unknown customer %s",
                       request_id, request.customer_id)

    store.replace_update_request(approved)
    logger.info("Update request approved: %s (%d appointments updated)",
                request_id, updated_count)
    return {
        "success": True,
        "request_id": request_id,
        "updated_appointments": updated_count,
        "message": "Customer information has been updated.",
    }


def reject_request(store: AppointmentStore, request_id: str) -> ReviewResult:
    """Close a pending request without applying it."""
    request = store.get_update_request(request_id)
    if request is None:
        return {"success": False, "message": f"Update request {request_id} not found."}
    try:
        rejected = _transition(request, RequestStatus.REJECTED)
    except InvalidTransitionError as exc:
        return {"success": False, "message": str(exc), "request_id": request_id}
    store.replace_update_request(rejected)
    logger.info("Update request rejected: %s", request_id)
    return {
        "success": True,
        "request_id": request_id,
        "message": "The requested change has been rejected.",
    }
