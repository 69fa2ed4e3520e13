"""
Tests for the reservation admission check.

Covers the order of checks and the half-open overlap rule: a reservation
ending at 12:00 never conflicts with one starting at 12:00.
"""

from datetime import time
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from studiosync.core.exceptions import (
    EquipmentConflictException,
    ErrorCode,
    InvalidRangeException,
    NotFoundException,
    StudioConflictException,
    StudioUnavailableException,
)
from studiosync.models.equipment import EquipmentStatus
from studiosync.models.reservation import Reservation, ReservationStatus
from studiosync.schemas.reservation import EquipmentRequest, ReservationCreate
from studiosync.services.booking_service import BookingService
from studiosync.services.conflict_checker import ConflictChecker


@pytest.fixture
def checker(db: Session) -> ConflictChecker:
    return ConflictChecker(db)


@pytest.fixture
def book(db: Session, user):
    """Store an admitted reservation through the booking service."""

    def _book(studio, start, end, equipment=()):
        data = ReservationCreate(
            studio_id=studio.id,
            title="Session",
            start_time=start,
            end_time=end,
            equipment=[EquipmentRequest(equipment_id=item.id) for item in equipment],
        )
        return BookingService(db).create_reservation(user, data)

    return _book


class TestRange:
    def test_start_equal_end_is_invalid_range(self, checker, studio, slot):
        start, _ = slot(10, 12)
        with pytest.raises(InvalidRangeException) as exc_info:
            checker.check_reservation(studio.id, start, start)
        assert exc_info.value.code == ErrorCode.INVALID_RANGE

    def test_end_before_start_is_invalid_range(self, checker, studio, slot):
        start, end = slot(10, 12)
        with pytest.raises(InvalidRangeException):
            checker.check_reservation(studio.id, end, start)

    def test_range_checked_before_studio_lookup(self, checker, slot):
        start, _ = slot(10, 12)
        with pytest.raises(InvalidRangeException):
            checker.check_reservation("01HZZZZZZZZZZZZZZZZZZZZZZZ", start, start)


class TestExistence:
    def test_unknown_studio_is_not_found(self, checker, slot):
        start, end = slot(10, 12)
        with pytest.raises(NotFoundException):
            checker.check_reservation("01HZZZZZZZZZZZZZZZZZZZZZZZ", start, end)

    def test_inactive_studio_is_not_found(self, checker, make_studio, owner, slot):
        closed = make_studio(owner, is_active=False)
        start, end = slot(10, 12)
        with pytest.raises(NotFoundException):
            checker.check_reservation(closed.id, start, end)

    def test_equipment_from_another_studio_is_not_found(
        self, checker, studio, make_studio, make_equipment, owner, slot
    ):
        elsewhere = make_equipment(make_studio(owner, name="Other Room"))
        start, end = slot(10, 12)
        with pytest.raises(NotFoundException) as exc_info:
            checker.check_reservation(studio.id, start, end, equipment=[(elsewhere.id, 1)])
        assert exc_info.value.details["equipment_id"] == elsewhere.id


class TestOpeningHours:
    def test_inside_opening_hours_is_admitted(self, checker, studio, slot):
        start, end = slot(9, 22)
        result = checker.check_reservation(studio.id, start, end)
        assert result.studio.id == studio.id
        assert result.total_price == Decimal("650.00")

    def test_before_opening_is_unavailable(self, checker, studio, slot):
        start, end = slot(8, 10)
        with pytest.raises(StudioUnavailableException) as exc_info:
            checker.check_reservation(studio.id, start, end)
        assert exc_info.value.code == ErrorCode.STUDIO_UNAVAILABLE

    def test_after_closing_is_unavailable(self, checker, studio, slot):
        start, end = slot(21, 23)
        with pytest.raises(StudioUnavailableException):
            checker.check_reservation(studio.id, start, end)

    def test_day_without_availability_is_unavailable(
        self, checker, make_studio, owner, slot, booking_day
    ):
        weekday_index = (booking_day.weekday() + 1) % 7
        partial = make_studio(owner, days=[d for d in range(7) if d != weekday_index])
        start, end = slot(10, 12)
        with pytest.raises(StudioUnavailableException):
            checker.check_reservation(partial.id, start, end)

    def test_overnight_needs_both_days_open_until_and_from_midnight(
        self, checker, make_studio, owner, slot
    ):
        all_day = make_studio(owner, opening=time(0, 0), closing=time(0, 0))
        start, end = slot(22, 26)
        result = checker.check_reservation(all_day.id, start, end)
        assert result.total_price == Decimal("200.00")

    def test_overnight_rejected_when_studio_closes_in_evening(self, checker, studio, slot):
        start, end = slot(21, 25)
        with pytest.raises(StudioUnavailableException):
            checker.check_reservation(studio.id, start, end)


class TestStudioOverlap:
    def test_overlap_with_pending_reservation_conflicts(self, checker, studio, slot, book):
        existing = book(studio, *slot(10, 12))
        start, end = slot(11, 13)
        with pytest.raises(StudioConflictException) as exc_info:
            checker.check_reservation(studio.id, start, end)
        assert exc_info.value.code == ErrorCode.STUDIO_CONFLICT
        assert exc_info.value.details["conflicting_reservation_id"] == existing.id

    def test_containing_interval_conflicts(self, checker, studio, slot, book):
        book(studio, *slot(11, 12))
        with pytest.raises(StudioConflictException):
            checker.check_reservation(studio.id, *slot(10, 13))

    def test_abutting_reservations_are_admitted(self, checker, studio, slot, book):
        book(studio, *slot(10, 12))
        checker.check_reservation(studio.id, *slot(12, 14))
        checker.check_reservation(studio.id, *slot(9, 10))

    def test_cancelled_reservation_does_not_block(self, db, checker, studio, slot, book):
        existing = book(studio, *slot(10, 12))
        existing.status = ReservationStatus.CANCELLED
        db.commit()
        checker.check_reservation(studio.id, *slot(10, 12))

    def test_excluded_reservation_is_ignored(self, checker, studio, slot, book):
        existing = book(studio, *slot(10, 12))
        checker.check_reservation(
            studio.id, *slot(11, 13), exclude_reservation_id=existing.id
        )

    def test_other_studio_does_not_conflict(self, checker, studio, make_studio, owner, slot, book):
        book(studio, *slot(10, 12))
        other = make_studio(owner, name="Room B")
        checker.check_reservation(other.id, *slot(10, 12))


class TestEquipment:
    @pytest.mark.parametrize("status", [EquipmentStatus.MAINTENANCE, EquipmentStatus.OUT_OF_ORDER])
    def test_out_of_service_equipment_conflicts(self, checker, studio, make_equipment, slot, status):
        broken = make_equipment(studio, status=status)
        with pytest.raises(EquipmentConflictException) as exc_info:
            checker.check_reservation(studio.id, *slot(10, 12), equipment=[(broken.id, 1)])
        assert exc_info.value.code == ErrorCode.EQUIPMENT_CONFLICT

    def test_in_use_equipment_is_bookable(self, checker, studio, make_equipment, slot):
        busy = make_equipment(studio, status=EquipmentStatus.IN_USE)
        result = checker.check_reservation(studio.id, *slot(10, 12), equipment=[(busy.id, 1)])
        assert result.equipment[0][0].id == busy.id

    def test_overlapping_hold_conflicts(
        self, db, checker, studio, make_studio, owner, equipment, slot, book
    ):
        first = book(studio, *slot(10, 12), equipment=[equipment])
        # Move the studio reservation out of the way; the equipment hold stays
        first.studio_id = make_studio(owner, name="Room B").id
        db.commit()
        with pytest.raises(EquipmentConflictException) as exc_info:
            checker.check_reservation(studio.id, *slot(11, 13), equipment=[(equipment.id, 1)])
        assert exc_info.value.details["equipment_id"] == equipment.id

    def test_studio_conflict_reported_before_equipment(self, checker, studio, equipment, slot, book):
        book(studio, *slot(10, 12), equipment=[equipment])
        with pytest.raises(StudioConflictException):
            checker.check_reservation(studio.id, *slot(10, 12), equipment=[(equipment.id, 1)])

    def test_equipment_price_added(self, checker, studio, equipment, slot):
        result = checker.check_reservation(
            studio.id, *slot(10, 12), equipment=[(equipment.id, 1)]
        )
        assert result.total_price == Decimal("120.00")


def test_rejected_admission_stores_nothing(db, studio, equipment, slot, book, user):
    book(studio, *slot(10, 12), equipment=[equipment])
    before = db.query(Reservation).count()
    data = ReservationCreate(
        studio_id=studio.id,
        title="Clash",
        start_time=slot(11, 13)[0],
        end_time=slot(11, 13)[1],
        equipment=[EquipmentRequest(equipment_id=equipment.id)],
    )
    with pytest.raises(StudioConflictException):
        BookingService(db).create_reservation(user, data)
    assert db.query(Reservation).count() == before
