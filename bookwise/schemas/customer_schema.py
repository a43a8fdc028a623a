"""Customer records, reminders attached to them, and update requests."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CustomReminder(BaseModel):
    """One-off reminder written by staff for a customer."""
    id: str
    title: str
    message: str
    send_at: datetime


class FollowUpReminder(BaseModel):
    """Re-engagement reminder sent some weeks after an appointment."""
    id: str
    appointment_id: str
    title: str
    message: str
    weeks_after: int


class Customer(BaseModel):
    """Customer profile."""
    id: str
    name: str
    email: str = ""
    phone: str = ""
    past_booking_data: str = ""
    user_behavior_data: str = ""
    profile_picture_url: Optional[str] = None
    birthday: Optional[str] = None
    custom_reminders: list[CustomReminder] = Field(default_factory=list)
    follow_up_reminders: list[FollowUpReminder] = Field(default_factory=list)
    history: list[str] = Field(default_factory=list)


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CustomerSnapshot(BaseModel):
    """Name and email as they were when a request was filed."""
    name: str
    email: str


class RequestedChanges(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None

    def is_empty(self) -> bool:
        return self.name is None and self.email is None


class CustomerUpdateRequest(BaseModel):
    """A customer's self-reported change awaiting staff review."""
    id: str
    customer_id: str
    current_data: CustomerSnapshot
    requested_data: RequestedChanges
    status: RequestStatus = RequestStatus.PENDING
