"""Tests for block/unblock actions against the store."""

from datetime import datetime

from bookwise.schemas.appointment_schema import BLOCKED_LABEL
from bookwise.tools.calendar import block_day, block_slot, unblock_day, unblock_slot
from tests.conftest import HALF_HOUR_CATALOG, TOMORROW, make_block


class TestBlockSlot:
    def test_blocks_free_slot(self, store):
        result = block_slot(store, datetime(2026, 3, 17, 9, 0))
        assert result["success"]
        block = store.get_appointment(result["appointment_ids"][0])
        assert block.is_blocked
        assert block.customer_id is None
        assert block.display_name == BLOCKED_LABEL

    def test_taken_slot_is_refused(self, store):
        result = block_slot(store, datetime(2026, 3, 17, 10, 0))
        assert not result["success"]
        assert len(store.appointments(TOMORROW)) == 2

    def test_off_catalog_time_is_refused(self, store, scheduler):
        result = block_slot(store, datetime(2026, 3, 17, 10, 15), scheduler)
        assert not result["success"]
        assert "10:15" in result["message"]
        assert len(store.appointments(TOMORROW)) == 2


class TestBlockDay:
    def test_fills_every_free_slot(self, store, scheduler):
        result = block_day(store, TOMORROW, scheduler)
        assert len(result["appointment_ids"]) == len(HALF_HOUR_CATALOG) - 2
        assert len(store.appointments(TOMORROW)) == len(HALF_HOUR_CATALOG)
        assert scheduler.is_day_fully_blocked(TOMORROW, store.appointments())

    def test_second_block_creates_nothing(self, store, scheduler):
        block_day(store, TOMORROW, scheduler)
        again = block_day(store, TOMORROW, scheduler)
        assert again["appointment_ids"] == []
        assert len(store.appointments(TOMORROW)) == len(HALF_HOUR_CATALOG)


class TestUnblockDay:
    def test_removes_blocks_and_keeps_bookings(self, store, scheduler):
        block_day(store, TOMORROW, scheduler)
        result = unblock_day(store, TOMORROW, scheduler)
        assert len(result["appointment_ids"]) == len(HALF_HOUR_CATALOG) - 2
        assert [a.id for a in store.appointments(TOMORROW)] == ["appt-1", "appt-2"]
        assert not scheduler.is_day_fully_blocked(TOMORROW, store.appointments())

    def test_open_day_removes_nothing(self, store, scheduler):
        assert unblock_day(store, TOMORROW, scheduler)["appointment_ids"] == []


class TestUnblockSlot:
    def test_lifts_a_block(self, store):
        store.add_appointment(make_block("blk", datetime(2026, 3, 17, 9, 0)))
        assert unblock_slot(store, "blk")["success"]
        assert store.get_appointment("blk") is None

    def test_refuses_real_booking(self, store):
        assert not unblock_slot(store, "appt-1")["success"]
        assert store.get_appointment("appt-1") is not None
