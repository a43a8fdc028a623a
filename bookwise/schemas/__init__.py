from bookwise.schemas.appointment_schema import (
    BLOCKED_LABEL,
    Appointment,
    AppointmentKind,
    Attachment,
)
from bookwise.schemas.booking_schema import BookingRequest
from bookwise.schemas.customer_schema import (
    Customer,
    CustomerSnapshot,
    CustomerUpdateRequest,
    CustomReminder,
    FollowUpReminder,
    RequestedChanges,
    RequestStatus,
)

__all__ = [
    "BLOCKED_LABEL", "Appointment", "AppointmentKind", "Attachment",
    "BookingRequest",
    "Customer", "CustomerSnapshot", "CustomerUpdateRequest", "CustomReminder",
    "FollowUpReminder", "RequestedChanges", "RequestStatus",
]
