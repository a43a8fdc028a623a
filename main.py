"""
BookWise command-line shell.

Loads the state store from the configured JSON file, runs one command
against it, and saves it back when the command changed anything.

Usage:
    python main.py week --date 2026-10-19
    python main.py slots 2026-10-20
    python main.py book --phone 123-456-7890 --name "Alice Johnson" \
        --email alice.j@example.com --date 2026-10-20 --time 11:00
    python main.py block 2026-10-21
    python main.py remind appt-1
"""

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime
from typing import Optional

from pydantic import ValidationError

from bookwise.config import settings
from bookwise.console import (
    render_appointment,
    render_request,
    render_slots,
    render_week,
)
from bookwise.logging_context import OperationIdFilter, get_op_logger, new_op_id, set_op_id
from bookwise.persistence import load_store, save_store
from bookwise.scheduling.calendar_view import build_week
from bookwise.scheduling.slot_catalog import slot_datetime
from bookwise.scheduling.slot_scheduler import SlotScheduler
from bookwise.schemas.booking_schema import BookingRequest
from bookwise.schemas.customer_schema import RequestedChanges
from bookwise.store import AppointmentStore
from bookwise.tools import booking, calendar, customer, update_requests

logger = get_op_logger(__name__)

MUTATING_COMMANDS = {
    "book", "edit", "cancel", "block", "unblock", "unblock-slot",
    "approve", "reject", "follow-up",
}


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from None


def _slot_time(value: str) -> str:
    try:
        return datetime.strptime(value, "%H:%M").strftime("%H:%M")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected HH:MM, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bookwise", description=settings.business.name)
    parser.add_argument("--data-file", default=settings.storage.data_file)
    sub = parser.add_subparsers(dest="command", required=True)

    week = sub.add_parser("week", help="show the calendar week")
    week.add_argument("--date", type=_iso_date, default=None)
    week.add_argument("--no-color", action="store_true")

    slots = sub.add_parser("slots", help="list bookable slots for a day")
    slots.add_argument("date", type=_iso_date)
    slots.add_argument("--exclude", default=None, help="appointment being edited")

    listing = sub.add_parser("list", help="list appointments")
    listing.add_argument("--date", type=_iso_date, default=None)

    book = sub.add_parser("book", help="book a new appointment")
    book.add_argument("--phone", required=True)
    book.add_argument("--name", required=True)
    book.add_argument("--email", required=True)
    book.add_argument("--date", type=_iso_date, required=True)
    book.add_argument("--time", required=True)
    book.add_argument("--new-name", default=None, help="request a name change")
    book.add_argument("--new-email", default=None, help="request an email change")

    edit = sub.add_parser("edit", help="move or update an appointment")
    edit.add_argument("appointment_id")
    edit.add_argument("--date", type=_iso_date, default=None)
    edit.add_argument("--time", default=None)
    edit.add_argument("--name", default=None)
    edit.add_argument("--email", default=None)

    cancel = sub.add_parser("cancel", help="cancel an appointment or lift a block")
    cancel.add_argument("appointment_id")

    block = sub.add_parser("block", help="block a slot or a whole day")
    block.add_argument("date", type=_iso_date)
    block.add_argument("--time", type=_slot_time, default=None)

    unblock = sub.add_parser("unblock", help="lift every manual block on a day")
    unblock.add_argument("date", type=_iso_date)

    unblock_slot = sub.add_parser("unblock-slot", help="lift a single block")
    unblock_slot.add_argument("appointment_id")

    sub.add_parser("requests", help="list pending customer update requests")

    approve = sub.add_parser("approve", help="approve an update request")
    approve.add_argument("request_id")

    reject = sub.add_parser("reject", help="reject an update request")
    reject.add_argument("request_id")

    remind = sub.add_parser("remind", help="draft a reminder for an appointment")
    remind.add_argument("appointment_id")

    follow_up = sub.add_parser("follow-up", help="draft and save a follow-up reminder")
    follow_up.add_argument("appointment_id")

    return parser


def _report(result: dict) -> int:
    print(result["message"])
    return 0 if result["success"] else 1


def _booking_request(**fields) -> Optional[BookingRequest]:
    try:
        return BookingRequest(**fields)
    except ValidationError as exc:
        for error in exc.errors():
            print(f"{error['loc'][0]}: {error['msg']}")
        return None


def _customer_for(store: AppointmentStore, appointment_id: str):
    appointment = store.get_appointment(appointment_id)
    if appointment is None or appointment.customer_id is None:
        print(f"No customer appointment with id {appointment_id}.")
        return None, None
    record = store.get_customer(appointment.customer_id)
    if record is None:
        print(f"Customer {appointment.customer_id} not found.")
        return None, None
    return appointment, record


def run_command(args: argparse.Namespace, store: AppointmentStore, now: datetime) -> int:
    """Execute one parsed command against ``store``. Returns an exit code."""
    scheduler = SlotScheduler()

    if args.command == "week":
        grid = build_week(args.date or now.date(), store.appointments(), now, scheduler)
        print(render_week(grid, use_color=not args.no_color))
        return 0

    if args.command == "slots":
        print(render_slots(scheduler.available_slots(
            args.date, store.appointments(), exclude_appointment_id=args.exclude, now=now
        )))
        return 0

    if args.command == "list":
        for appointment in booking.list_appointments(store, args.date):
            print(render_appointment(appointment))
        return 0

    if args.command == "book":
        updates = None
        if args.new_name or args.new_email:
            updates = RequestedChanges(name=args.new_name, email=args.new_email)
        request = _booking_request(
            phone=args.phone, customer_name=args.name, email=args.email,
            date=args.date, time=args.time, updates=updates,
        )
        if request is None:
            return 2
        return _report(booking.book_appointment(store, request, now, scheduler))

    if args.command == "edit":
        existing = store.get_appointment(args.appointment_id)
        if existing is None:
            print(f"Appointment {args.appointment_id} not found.")
            return 1
        if existing.is_blocked:
            print("Blocked slots cannot be edited.")
            return 1
        request = _booking_request(
            phone=existing.phone,
            customer_name=args.name or existing.customer_name,
            email=args.email or existing.email,
            date=args.date or existing.day,
            time=args.time or existing.slot_label,
        )
        if request is None:
            return 2
        return _report(booking.edit_appointment(store, args.appointment_id, request, now, scheduler))

    if args.command == "cancel":
        return _report(booking.cancel_appointment(store, args.appointment_id))

    if args.command == "block":
        if args.time:
            return _report(
                calendar.block_slot(store, slot_datetime(args.date, args.time), scheduler)
            )
        return _report(calendar.block_day(store, args.date, scheduler))

    if args.command == "unblock":
        return _report(calendar.unblock_day(store, args.date, scheduler))

    if args.command == "unblock-slot":
        return _report(calendar.unblock_slot(store, args.appointment_id))

    if args.command == "requests":
        pending = update_requests.pending_requests(store)
        if not pending:
            print("No pending update requests.")
        for request in pending:
            print(render_request(request))
        return 0

    if args.command == "approve":
        return _report(update_requests.approve_request(store, args.request_id, now))

    if args.command == "reject":
        return _report(update_requests.reject_request(store, args.request_id))

    if args.command in ("remind", "follow-up"):
        from openai import OpenAIError

        from bookwise.reminders import (
            ReminderDrafter,
            ReminderGenerationError,
            build_follow_up_input,
            build_reminder_input,
        )

        appointment, record = _customer_for(store, args.appointment_id)
        if appointment is None:
            return 1
        try:
            drafter = ReminderDrafter()
            if args.command == "remind":
                draft = asyncio.run(
                    drafter.generate_reminder(build_reminder_input(appointment, record))
                )
            else:
                suggestion = asyncio.run(
                    drafter.generate_follow_up_reminder(build_follow_up_input(record))
                )
        except (ReminderGenerationError, OpenAIError) as exc:
            logger.error("Reminder drafting failed for %s: %s", appointment.id, exc)
            print(f"Could not draft a reminder: {exc}")
            return 1
        if args.command == "remind":
            print(f"[{draft.reminder_format} | {draft.reminder_timing}]")
            print(draft.client_reminder_message)
            return 0
        customer.add_follow_up_reminder(store, record.id, appointment.id, suggestion)
        print(f"{suggestion.title} (in {suggestion.weeks_after} weeks)")
        print(suggestion.message)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def _install_op_id_format() -> None:
    formatter = logging.Formatter(
        "%(asctime)s [%(name)s] [%(op_id)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(OperationIdFilter())
        handler.setFormatter(formatter)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _install_op_id_format()
    set_op_id(new_op_id())

    now = datetime.now()
    store = load_store(args.data_file, now)
    logger.debug("Running command '%s'", args.command)
    code = run_command(args, store, now)
    if args.command in MUTATING_COMMANDS and code == 0:
        save_store(store, args.data_file)
    return code


if __name__ == "__main__":
    sys.exit(main())
