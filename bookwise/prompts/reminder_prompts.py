"""Prompt construction for the reminder drafting flows."""

from bookwise.schemas.reminder_schema import FollowUpReminderInput, SmartReminderInput

SMART_REMINDER_SYSTEM_PROMPT = """\
You are an AI assistant for a business, designed to generate smart appointment \
reminders for clients.

The reminder should be scheduled for 48 hours before the appointment.
Based on the customer's past booking data and user behavior data, determine the \
optimal format for the reminder. Consider factors such as the customer's \
preferred communication channel.

Respond with a JSON object with exactly these keys:
  "client_reminder_message": a friendly, professional message ready to be sent,
  "reminder_timing": "48 hours before the appointment",
  "reminder_format": the most appropriate channel, e.g. "SMS" or "email".
"""

FOLLOW_UP_SYSTEM_PROMPT = """\
You are an AI assistant for a service business (like a salon or clinic) that \
suggests proactive follow-up reminders to re-engage clients.

Based on the client's past booking data, suggest a relevant follow-up. For \
example, if they often get a 'trim', suggest it's 'Time for a trim!'. If no \
specific recurring service is mentioned, create a general 'we miss you' style \
follow-up.

Suggest an appropriate time interval in weeks. For a haircut trim, 6-8 weeks \
is typical. For a general check-in, maybe 12 weeks.

Respond with a JSON object with exactly these keys:
  "title": a short, catchy title,
  "message": a friendly, engaging message encouraging the client to book again,
  "weeks_after": a whole number of weeks.
"""


def build_smart_reminder_prompt(data: SmartReminderInput) -> str:
    """Build the user message for a reminder draft."""
    return "\n".join([
        f"Customer Name: {data.customer_name}",
        f"Appointment Date/Time: {data.appointment_date_time}",
        f"Past Booking Data: {data.past_booking_data}",
        f"User Behavior Data: {data.user_behavior_data}",
        "",
        "Generate a reminder message for the client.",
    ])


def build_follow_up_prompt(data: FollowUpReminderInput) -> str:
    """Build the user message for a follow-up suggestion."""
    return "\n".join([
        f"Client Name: {data.customer_name}",
        f"Past Booking Data: {data.past_booking_data}",
        "",
        "Generate a compelling title, a friendly message, and a recommended "
        "number of weeks for the follow-up.",
    ])
