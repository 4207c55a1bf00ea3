"""Availability calculator: offered slots minus non-cancelled bookings."""

from datetime import date, datetime

import pytest

from mentormatch.exceptions import NotFoundError, ValidationError
from mentormatch.models.meeting import MeetingStatus
from mentormatch.services import availability_service
from mentormatch.utils.dates import to_calendar_day

from conftest import DAY, SLOTS


def test_booked_slot_is_removed(db_session, mentor, mentee, make_meeting):
    make_meeting(mentor, mentee, day=DAY, slot="09:00-10:00")

    available = availability_service.get_mentor_availability(db_session, mentor.id, "2024-06-01")

    assert available == ["10:00-11:00"]


def test_no_bookings_returns_configured_order(db_session, make_user):
    mentor = make_user(role="mentor", slots=["14:00-15:00", "09:00-10:00", "11:00-12:00"])

    available = availability_service.get_mentor_availability(db_session, mentor.id, DAY)

    assert available == ["14:00-15:00", "09:00-10:00", "11:00-12:00"]


@pytest.mark.parametrize("status", [MeetingStatus.PENDING, MeetingStatus.UPCOMING, MeetingStatus.COMPLETED])
def test_available_and_booked_partition_offered_slots(db_session, mentor, mentee, make_meeting, status):
    make_meeting(mentor, mentee, slot=SLOTS[1], status=status)

    available = availability_service.get_mentor_availability(db_session, mentor.id, DAY)
    booked = {SLOTS[1]}

    assert set(available).isdisjoint(booked)
    assert set(available) | booked == set(mentor.available_time_slots)


def test_cancelled_meeting_frees_its_slot(db_session, mentor, mentee, make_meeting):
    meeting = make_meeting(mentor, mentee, slot=SLOTS[0])
    assert availability_service.get_mentor_availability(db_session, mentor.id, DAY) == [SLOTS[1]]

    meeting.status = MeetingStatus.CANCELLED
    db_session.commit()

    assert availability_service.get_mentor_availability(db_session, mentor.id, DAY) == SLOTS


def test_other_days_are_not_affected(db_session, mentor, mentee, make_meeting):
    make_meeting(mentor, mentee, day=date(2024, 6, 2), slot=SLOTS[0])
    make_meeting(mentor, mentee, day=date(2024, 5, 31), slot=SLOTS[1])

    assert availability_service.get_mentor_availability(db_session, mentor.id, DAY) == SLOTS


def test_other_mentors_bookings_are_not_counted(db_session, mentor, mentee, make_user, make_meeting):
    other = make_user(name="Other Mentor", role="mentor", slots=SLOTS)
    make_meeting(other, mentee, slot=SLOTS[0])

    assert availability_service.get_mentor_availability(db_session, mentor.id, DAY) == SLOTS


def test_time_of_day_is_ignored(db_session, mentor, mentee, make_meeting):
    make_meeting(mentor, mentee, slot=SLOTS[0])

    assert availability_service.get_mentor_availability(
        db_session, mentor.id, "2024-06-01T18:30:00Z"
    ) == [SLOTS[1]]
    assert availability_service.get_mentor_availability(
        db_session, mentor.id, datetime(2024, 6, 1, 23, 59)
    ) == [SLOTS[1]]


def test_unknown_mentor_raises_not_found(db_session):
    with pytest.raises(NotFoundError, match="Mentor not found"):
        availability_service.get_mentor_availability(db_session, 999, DAY)


def test_mentee_is_not_a_mentor(db_session, mentee):
    with pytest.raises(NotFoundError):
        availability_service.get_mentor_availability(db_session, mentee.id, DAY)


def test_subtract_booked_slots_keeps_order():
    offered = ["a", "b", "c", "d"]
    assert availability_service.subtract_booked_slots(offered, ["c", "a", "x"]) == ["b", "d"]


# ======================
# DATE PARSING
# ======================

def test_to_calendar_day_accepts_common_forms():
    assert to_calendar_day("2024-06-01") == DAY
    assert to_calendar_day("2024-06-01T10:15:00") == DAY
    assert to_calendar_day("2024-06-01T10:15:00+02:00") == DAY
    assert to_calendar_day(datetime(2024, 6, 1, 8)) == DAY
    assert to_calendar_day(DAY) == DAY


@pytest.mark.parametrize("value", ["", "   ", "yesterday", "2024-13-01"])
def test_to_calendar_day_rejects_garbage(value):
    with pytest.raises(ValidationError):
        to_calendar_day(value)
