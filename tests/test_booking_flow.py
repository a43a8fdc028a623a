"""Tests for the store and the booking tools working together."""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from bookwise.schemas.customer_schema import RequestedChanges, RequestStatus
from bookwise.store import SlotUnavailableError
from bookwise.tools.booking import (
    book_appointment,
    cancel_appointment,
    edit_appointment,
    get_appointment,
    list_appointments,
)
from bookwise.tools.calendar import block_slot
from bookwise.tools.customer import (
    NEW_CUSTOMER_BOOKING_DATA,
    add_custom_reminder,
    lookup_customer,
)
from tests.conftest import NOW, TODAY, TOMORROW, make_appointment, make_request


class TestStore:
    def test_appointments_are_sorted(self, store):
        store.add_appointment(make_appointment("early", datetime(2026, 3, 17, 9, 0)))
        assert [a.id for a in store.appointments()] == ["early", "appt-1", "appt-2"]

    def test_filter_by_day(self, store):
        assert store.appointments(TODAY) == []
        assert len(store.appointments(TOMORROW)) == 2

    def test_double_booking_rejected_at_commit(self, store):
        with pytest.raises(SlotUnavailableError):
            store.add_appointment(make_appointment("dup", datetime(2026, 3, 17, 10, 0)))

    def test_replace_into_taken_slot_rejected(self, store):
        moved = store.get_appointment("appt-1").model_copy(
            update={"date_time": datetime(2026, 3, 17, 14, 0)}
        )
        with pytest.raises(SlotUnavailableError):
            store.replace_appointment(moved)

    def test_duplicate_id_rejected(self, store):
        with pytest.raises(ValueError):
            store.add_appointment(make_appointment("appt-1", datetime(2026, 3, 18, 9, 0)))

    def test_remove_unknown_returns_none(self, store):
        assert store.remove_appointment("missing") is None


class TestBookingRequestValidation:
    def test_short_phone_rejected(self):
        with pytest.raises(ValidationError, match="valid phone"):
            make_request("10:00", phone="555-1234")

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError, match="at least 2"):
            make_request("10:00", name="J")

    def test_bad_email_rejected(self):
        with pytest.raises(ValidationError, match="valid email"):
            make_request("10:00", email="dana-at-example")

    def test_bad_time_rejected(self):
        with pytest.raises(ValidationError, match="select a time"):
            make_request("ten am")

    def test_values_are_stripped(self):
        request = make_request(" 10:00 ", name="  Dana Scully ")
        assert request.time == "10:00"
        assert request.customer_name == "Dana Scully"


class TestBookAppointment:
    def test_new_customer_is_created(self, store, scheduler):
        result = book_appointment(store, make_request("11:00"), NOW, scheduler)
        assert result["success"]
        customer = store.get_customer(result["customer_id"])
        assert customer.name == "Dana Scully"
        assert customer.past_booking_data == NEW_CUSTOMER_BOOKING_DATA
        appointment = store.get_appointment(result["appointment_id"])
        assert appointment.date_time == datetime(2026, 3, 17, 11, 0)
        assert appointment.customer_id == customer.id

    def test_returning_customer_matched_by_phone(self, store, scheduler):
        request = make_request("11:00", phone="(123) 456-7890",
                               name="Alice Johnson", email="alice.j@example.com")
        result = book_appointment(store, request, NOW, scheduler)
        assert result["success"]
        assert result["customer_id"] == "1"
        assert len(store.customers()) == 1
        assert "update_request_id" not in result

    def test_changed_details_file_an_update_request(self, store, scheduler):
        request = make_request(
            "11:00", phone="1234567890", name="Alice Johnson", email="alice.j@example.com",
            updates=RequestedChanges(name="Alice Cooper", email="alice.j@example.com"),
        )
        result = book_appointment(store, request, NOW, scheduler)
        pending = store.get_update_request(result["update_request_id"])
        assert pending.status == RequestStatus.PENDING
        assert pending.requested_data.name == "Alice Cooper"
        assert pending.requested_data.email is None
        assert pending.current_data.name == "Alice Johnson"
        # Profile stays untouched until staff approve.
        assert store.get_customer("1").name == "Alice Johnson"
        assert store.get_appointment(result["appointment_id"]).customer_name == "Alice Johnson"

    def test_unchanged_updates_file_nothing(self, store, scheduler):
        request = make_request(
            "11:00", phone="1234567890",
            updates=RequestedChanges(name="Alice Johnson"),
        )
        result = book_appointment(store, request, NOW, scheduler)
        assert "update_request_id" not in result
        assert store.update_requests() == []

    def test_taken_slot_rejected(self, store, scheduler):
        result = book_appointment(store, make_request("10:00"), NOW, scheduler)
        assert not result["success"]
        assert "not available" in result["message"]
        assert len(store.customers()) == 1

    def test_slot_inside_cutoff_rejected(self, store, scheduler):
        result = book_appointment(store, make_request("11:00", day=TODAY), NOW, scheduler)
        assert not result["success"]

    def test_slot_outside_catalog_rejected(self, store, scheduler):
        result = book_appointment(store, make_request("20:00"), NOW, scheduler)
        assert not result["success"]

    def test_past_day_rejected(self, store, scheduler):
        result = book_appointment(
            store, make_request("11:00", day=TODAY - timedelta(days=1)), NOW, scheduler
        )
        assert not result["success"]
        assert "past" in result["message"]

    def test_day_beyond_horizon_rejected(self, store, scheduler):
        result = book_appointment(
            store, make_request("11:00", day=TODAY + timedelta(days=400)), NOW, scheduler
        )
        assert not result["success"]

    def test_blocked_slot_rejected(self, store, scheduler):
        block_slot(store, datetime(2026, 3, 17, 11, 0))
        result = book_appointment(store, make_request("11:00"), NOW, scheduler)
        assert not result["success"]


class TestEditAppointment:
    def test_move_to_free_slot(self, store, scheduler):
        request = make_request("15:00", phone="123-456-7890",
                               name="Alice Johnson", email="alice.j@example.com")
        result = edit_appointment(store, "appt-1", request, NOW, scheduler)
        assert result["success"]
        assert store.get_appointment("appt-1").date_time == datetime(2026, 3, 17, 15, 0)

    def test_keep_original_slot_and_change_email(self, store, scheduler):
        request = make_request("10:00", name="Alice Johnson", email="new@example.com")
        result = edit_appointment(store, "appt-1", request, NOW, scheduler)
        assert result["success"]
        updated = store.get_appointment("appt-1")
        assert updated.email == "new@example.com"
        assert updated.phone == "123-456-7890"

    def test_move_onto_other_booking_rejected(self, store, scheduler):
        result = edit_appointment(store, "appt-1", make_request("14:00"), NOW, scheduler)
        assert not result["success"]
        assert store.get_appointment("appt-1").slot_label == "10:00"

    def test_unknown_appointment(self, store, scheduler):
        result = edit_appointment(store, "nope", make_request("15:00"), NOW, scheduler)
        assert not result["success"]

    def test_blocks_cannot_be_edited(self, store, scheduler):
        block_id = block_slot(store, datetime(2026, 3, 17, 16, 0))["appointment_ids"][0]
        result = edit_appointment(store, block_id, make_request("16:30"), NOW, scheduler)
        assert not result["success"]

    def test_past_day_booking_cannot_move_to_other_past_slot(self, store, scheduler):
        store.add_appointment(make_appointment("past", datetime(2026, 3, 10, 9, 0)))
        request = make_request("11:00", day=datetime(2026, 3, 10).date(), phone="123-456-7890",
                               name="Alice Johnson", email="alice.j@example.com")
        result = edit_appointment(store, "past", request, NOW, scheduler)
        assert not result["success"]
        assert "already passed" in result["message"]
        assert store.get_appointment("past").date_time == datetime(2026, 3, 10, 9, 0)

    def test_cannot_move_to_earlier_time_today(self, store, scheduler):
        store.add_appointment(make_appointment("today", datetime(2026, 3, 16, 12, 0)))
        request = make_request("09:00", day=TODAY, phone="123-456-7890",
                               name="Alice Johnson", email="alice.j@example.com")
        result = edit_appointment(store, "today", request, NOW, scheduler)
        assert not result["success"]
        assert "already passed" in result["message"]
        assert store.get_appointment("today").slot_label == "12:00"


class TestCancelAndList:
    def test_cancel_removes_record(self, store):
        result = cancel_appointment(store, "appt-2")
        assert result["success"]
        assert get_appointment(store, "appt-2") is None

    def test_cancel_frees_the_slot(self, store, scheduler):
        cancel_appointment(store, "appt-1")
        assert "10:00" in scheduler.available_slots(TOMORROW, store.appointments(), now=NOW)

    def test_cancel_unknown(self, store):
        assert not cancel_appointment(store, "missing")["success"]

    def test_list_without_blocks(self, store):
        block_slot(store, datetime(2026, 3, 17, 9, 0))
        assert len(list_appointments(store)) == 3
        assert len(list_appointments(store, include_blocks=False)) == 2


class TestCustomerTools:
    def test_lookup_first_match_wins(self, store):
        from bookwise.schemas.customer_schema import Customer

        store.add_customer(Customer(id="dup", name="Alice Twin", phone="1234567890"))
        assert lookup_customer(store, "123.456.7890").id == "1"

    def test_lookup_miss(self, store):
        assert lookup_customer(store, "999-999-9999") is None

    def test_add_custom_reminder(self, store):
        reminder = add_custom_reminder(
            store, "1", "Birthday", "Happy birthday!", datetime(2026, 4, 1, 9, 0)
        )
        assert store.get_customer("1").custom_reminders == [reminder]

    def test_add_custom_reminder_unknown_customer(self, store):
        assert add_custom_reminder(store, "x", "t", "m", NOW) is None
