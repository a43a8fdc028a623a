"""Booking form input model."""

import re
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from bookwise.schemas.customer_schema import RequestedChanges
from bookwise.utils import normalize_phone

# Validation thresholds
MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 10

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class BookingRequest(BaseModel):
    """Validated booking or edit form data."""
    phone: str
    customer_name: str
    email: str
    date: date
    time: str
    updates: Optional[RequestedChanges] = None

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        if len(normalize_phone(value)) < MIN_PHONE_DIGITS:
            raise ValueError("Please enter a valid phone number.")
        return value.strip()

    @field_validator("customer_name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < MIN_NAME_LENGTH:
            raise ValueError(f"Name must be at least {MIN_NAME_LENGTH} characters.")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        value = value.strip()
        if not _EMAIL_PATTERN.match(value):
            raise ValueError("Please enter a valid email address.")
        return value

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        value = value.strip()
        try:
            datetime.strptime(value, "%H:%M")
        except ValueError:
            raise ValueError("Please select a time.") from None
        return value
