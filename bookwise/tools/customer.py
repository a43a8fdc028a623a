"""
Customer lookup and profile helpers.

Returning customers are recognised by phone number alone: both sides are
reduced to digits and the first stored customer whose digits match wins.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from bookwise.schemas.customer_schema import Customer, CustomReminder, FollowUpReminder
from bookwise.schemas.reminder_schema import FollowUpReminderOutput
from bookwise.store import AppointmentStore
from bookwise.utils import phones_match

logger = logging.getLogger(__name__)

NEW_CUSTOMER_BOOKING_DATA = "New customer."
NEW_CUSTOMER_BEHAVIOR_DATA = "Booked via application."


def lookup_customer(store: AppointmentStore, phone: str) -> Optional[Customer]:
    """Look up a customer by phone number. Returns None if not found."""
    result = next((c for c in store.customers() if phones_match(c.phone, phone)), None)
    if result:
        logger.debug("Returning customer found: %s", result.name)
    return result


def create_customer(
    store: AppointmentStore, name: str, email: str, phone: str
) -> Customer:
    """Create a new customer record."""
    customer = Customer(
        id=f"cust-{uuid.uuid4().hex[:8]}",
        name=name,
        email=email,
        phone=phone,
        past_booking_data=NEW_CUSTOMER_BOOKING_DATA,
        user_behavior_data=NEW_CUSTOMER_BEHAVIOR_DATA,
    )
    store.add_customer(customer)
    logger.info("New customer created: %s (%s)", name, customer.id)
    return customer


def add_follow_up_reminder(
    store: AppointmentStore,
    customer_id: str,
    appointment_id: str,
    draft: FollowUpReminderOutput,
) -> Optional[FollowUpReminder]:
    """Attach a drafted follow-up to a customer. None if the customer is unknown."""
    customer = store.get_customer(customer_id)
    if customer is None:
        return None
    reminder = FollowUpReminder(
        id=f"fup-{uuid.uuid4().hex[:8]}",
        appointment_id=appointment_id,
        title=draft.title,
        message=draft.message,
        weeks_after=draft.weeks_after,
    )
    store.replace_customer(customer.model_copy(
        update={"follow_up_reminders": [*customer.follow_up_reminders, reminder]}
    ))
    logger.info("Follow-up reminder %s added for %s", reminder.id, customer_id)
    return reminder


def add_custom_reminder(
    store: AppointmentStore,
    customer_id: str,
    title: str,
    message: str,
    send_at: datetime,
) -> Optional[CustomReminder]:
    customer = store.get_customer(customer_id)
    if customer is None:
        return None
    reminder = CustomReminder(
        id=f"rem-{uuid.uuid4().hex[:8]}", title=title, message=message, send_at=send_at
    )
    store.replace_customer(customer.model_copy(
        update={"custom_reminders": [*customer.custom_reminders, reminder]}
    ))
    logger.info("Custom reminder %s added for %s", reminder.id, customer_id)
    return reminder
