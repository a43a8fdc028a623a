"""Appointment data models."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

# Display name shown in place of a customer for manual blocks.
BLOCKED_LABEL = "Blocked Off"


class AppointmentKind(str, Enum):
    """Whether a record is a real customer booking or a manual block."""

    BOOKING = "booking"
    BLOCK = "block"


class Attachment(BaseModel):
    """File attached to an appointment."""
    name: str
    size: int
    url: str
    type: str


class Appointment(BaseModel):
    """A point-in-time reservation or a manual block of one slot."""

    id: str
    kind: AppointmentKind = AppointmentKind.BOOKING
    customer_id: Optional[str] = None
    customer_name: str = ""
    email: str = ""
    phone: str = ""
    date_time: datetime
    notes: str = ""
    attachments: list[Attachment] = Field(default_factory=list)

    @property
    def is_blocked(self) -> bool:
        return self.kind == AppointmentKind.BLOCK

    @property
    def day(self) -> date:
        return self.date_time.date()

    @property
    def slot_label(self) -> str:
        return self.date_time.strftime("%H:%M")

    @property
    def display_name(self) -> str:
        return BLOCKED_LABEL if self.is_blocked else self.customer_name
