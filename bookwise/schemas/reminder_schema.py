"""Input and output models for the reminder drafting flows."""

from pydantic import BaseModel, Field


class SmartReminderInput(BaseModel):
    customer_name: str = Field(description="The name of the customer.")
    appointment_date_time: str = Field(description="The date and time of the appointment.")
    past_booking_data: str = Field(description="Past booking data for the customer.")
    user_behavior_data: str = Field(
        description="User behavior data related to appointment scheduling."
    )


class SmartReminderOutput(BaseModel):
    client_reminder_message: str = Field(
        description="A friendly, professional reminder message ready to be sent."
    )
    reminder_timing: str = Field(
        description="When to send the reminder, e.g. 48 hours before the appointment."
    )
    reminder_format: str = Field(description="The channel to use, e.g. SMS or email.")


class FollowUpReminderInput(BaseModel):
    customer_name: str = Field(description="The name of the customer.")
    past_booking_data: str = Field(
        description="Past booking data, which might mention services like a trim or color."
    )


class FollowUpReminderOutput(BaseModel):
    title: str = Field(description="A short, catchy title such as 'Time for a trim!'.")
    message: str = Field(
        description="A friendly message encouraging the client to book again."
    )
    weeks_after: int = Field(
        ge=1, description="Weeks after the last appointment to send this reminder."
    )
