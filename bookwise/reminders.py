"""
Reminder and follow-up drafting through an OpenAI chat model.

The drafter is an opaque collaborator: structured input goes in, a
validated structured draft comes out. There is no retry or caching; a
model reply that is not the expected JSON raises ReminderGenerationError.

Usage:
    drafter = ReminderDrafter()
    draft = await drafter.generate_reminder(build_reminder_input(appt, customer))
"""

import logging
from typing import Any, Optional, TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from bookwise.config import settings
from bookwise.prompts.reminder_prompts import (
    FOLLOW_UP_SYSTEM_PROMPT,
    SMART_REMINDER_SYSTEM_PROMPT,
    build_follow_up_prompt,
    build_smart_reminder_prompt,
)
from bookwise.schemas.appointment_schema import Appointment
from bookwise.schemas.customer_schema import Customer
from bookwise.schemas.reminder_schema import (
    FollowUpReminderInput,
    FollowUpReminderOutput,
    SmartReminderInput,
    SmartReminderOutput,
)

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)


class ReminderGenerationError(Exception):
    """Raised when the model reply cannot be turned into a draft."""


def build_reminder_input(appointment: Appointment, customer: Customer) -> SmartReminderInput:
    """Map store records onto the reminder flow input."""
    return SmartReminderInput(
        customer_name=customer.name,
        appointment_date_time=appointment.date_time.strftime("%A, %B %d, %Y at %I:%M %p"),
        past_booking_data=customer.past_booking_data,
        user_behavior_data=customer.user_behavior_data,
    )


def build_follow_up_input(customer: Customer) -> FollowUpReminderInput:
    return FollowUpReminderInput(
        customer_name=customer.name,
        past_booking_data=customer.past_booking_data,
    )


class ReminderDrafter:
    """Drafts client reminders and follow-ups with a chat completion model."""

    def __init__(
        self,
        client: Optional[Any] = None,
        model: str = settings.model.llm_model,
        temperature: float = settings.model.llm_temperature,
    ) -> None:
        self._client = client or AsyncOpenAI(timeout=settings.model.llm_timeout_sec)
        self._model = model
        self._temperature = temperature

    async def _complete(
        self, system_prompt: str, user_prompt: str, output_model: type[OutputT]
    ) -> OutputT:
        response = await self._client.chat.completions.create(
            model=self._model,
            temperature=self._temperature,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        if not response.choices:
            raise ReminderGenerationError("Model returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise ReminderGenerationError("Model returned an empty reply")
        try:
            return output_model.model_validate_json(content)
        except ValidationError as exc:
            logger.warning("Unusable %s reply: %s", output_model.__name__, content[:200])
            raise ReminderGenerationError(
                f"Model reply did not match {output_model.__name__}"
            ) from exc

    async def generate_reminder(self, data: SmartReminderInput) -> SmartReminderOutput:
        """Draft a reminder message, its timing, and its delivery format."""
        draft = await self._complete(
            SMART_REMINDER_SYSTEM_PROMPT,
            build_smart_reminder_prompt(data),
            SmartReminderOutput,
        )
        logger.info("Reminder drafted for %s (%s)", data.customer_name, draft.reminder_format)
        return draft

    async def generate_follow_up_reminder(
        self, data: FollowUpReminderInput
    ) -> FollowUpReminderOutput:
        """Suggest a follow-up title, message, and interval in weeks."""
        draft = await self._complete(
            FOLLOW_UP_SYSTEM_PROMPT,
            build_follow_up_prompt(data),
            FollowUpReminderOutput,
        )
        logger.info("Follow-up drafted for %s (%d weeks)", data.customer_name, draft.weeks_after)
        return draft
