"""Mentor profile and offered-slot maintenance."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from mentormatch.crud import meeting as meeting_crud
from mentormatch.exceptions import ConflictError
from mentormatch.models.meeting import MeetingStatus
from mentormatch.schemas.user import BecomeMentorRequest, normalize_slot_labels
from mentormatch.services import availability_service, mentor_service
from mentormatch.services.mentor_service import SLOT_IN_USE

from conftest import DAY, SLOTS


def _assert_partition(db_session, mentor, day):
    db_session.refresh(mentor)
    available = availability_service.get_mentor_availability(db_session, mentor.id, day)
    booked = set(meeting_crud.get_booked_slots(db_session, mentor.id, day))
    assert set(available) | booked == set(mentor.available_time_slots)
    assert not set(available) & booked


# ======================
# SLOT REMOVAL
# ======================

def test_cannot_drop_slot_with_pending_meeting(db_session, mentor, mentee, make_meeting):
    make_meeting(mentor, mentee, day=DAY, slot="09:00-10:00")

    with pytest.raises(ConflictError, match=SLOT_IN_USE):
        mentor_service.update_available_slots(db_session, user=mentor, slots=["10:00-11:00"])

    assert mentor.available_time_slots == SLOTS
    _assert_partition(db_session, mentor, DAY)


def test_cannot_drop_slot_with_upcoming_meeting(db_session, mentor, mentee, make_meeting):
    make_meeting(mentor, mentee, slot="10:00-11:00", status=MeetingStatus.UPCOMING)

    with pytest.raises(ConflictError):
        mentor_service.update_available_slots(db_session, user=mentor, slots=["09:00-10:00"])


def test_slot_freed_by_cancellation_can_be_dropped(db_session, mentor, mentee, make_meeting):
    make_meeting(mentor, mentee, slot="09:00-10:00", status=MeetingStatus.CANCELLED)

    updated = mentor_service.update_available_slots(db_session, user=mentor, slots=["10:00-11:00"])

    assert updated.available_time_slots == ["10:00-11:00"]
    _assert_partition(db_session, mentor, DAY)


def test_adding_slots_next_to_a_booking_is_allowed(db_session, mentor, mentee, make_meeting):
    make_meeting(mentor, mentee, slot="09:00-10:00")

    updated = mentor_service.update_available_slots(
        db_session, user=mentor, slots=["09:00-10:00", "11:00-12:00"]
    )

    assert updated.available_time_slots == ["09:00-10:00", "11:00-12:00"]
    _assert_partition(db_session, mentor, DAY)


def test_become_mentor_again_cannot_drop_booked_slot(db_session, mentor, mentee, make_meeting):
    make_meeting(mentor, mentee, slot="09:00-10:00")
    request = BecomeMentorRequest(userId=mentor.id, availableTimeSlots=["10:00-11:00"])

    with pytest.raises(ConflictError, match=SLOT_IN_USE):
        mentor_service.become_mentor(db_session, request)

    db_session.refresh(mentor)
    assert mentor.available_time_slots == SLOTS


# ======================
# PROFILE UPDATES
# ======================

def test_become_mentor_again_keeps_fields_not_sent(db_session, mentee):
    mentor_service.become_mentor(
        db_session,
        BecomeMentorRequest(
            userId=mentee.id,
            fields=["Backend"],
            yearsOfExperience=4,
            skills=[{"name": "python", "level": 5}],
            availableTimeSlots=SLOTS,
        ),
    )

    user = mentor_service.become_mentor(
        db_session,
        BecomeMentorRequest(userId=mentee.id, currentCompany="Acme"),
    )

    assert user.skills == [{"name": "python", "level": 5}]
    assert user.available_time_slots == SLOTS
    assert user.mentor_details.fields == ["Backend"]
    assert user.mentor_details.years_of_experience == 4
    assert user.mentor_details.current_company == "Acme"


def test_become_mentor_can_clear_skills_explicitly(db_session, mentee):
    mentor_service.become_mentor(
        db_session,
        BecomeMentorRequest(userId=mentee.id, skills=[{"name": "go"}]),
    )

    user = mentor_service.become_mentor(
        db_session,
        BecomeMentorRequest(userId=mentee.id, skills=[]),
    )

    assert user.skills == []


# ======================
# SLOT LABELS
# ======================

def test_slot_may_end_at_midnight():
    assert normalize_slot_labels(["23:00-24:00"]) == ["23:00-24:00"]


@pytest.mark.parametrize("label", ["23:00-24:30", "23:00-24:01", "24:00-24:00", "09:00-25:00"])
def test_past_midnight_end_times_rejected(label):
    with pytest.raises(ValueError, match="Invalid time slot"):
        normalize_slot_labels([label])


def test_request_rejects_past_midnight_end_time(mentee):
    with pytest.raises(PydanticValidationError):
        BecomeMentorRequest(userId=mentee.id, availableTimeSlots=["23:30-24:30"])
