from __future__ import annotations

import time

import pytest

from mentormatch.models.meeting import MeetingStatus
from mentormatch.models.review import Review
from mentormatch.services import notification_service


def test_notification_service_crud_flow(db_session, mentee):
    notification_service.create_notification(
        db_session,
        recipient_id=mentee.id,
        sender_id=None,
        meeting_id=None,
        event_type="meeting_requested",
        message="Requested",
    )
    notification_service.create_notification(
        db_session,
        recipient_id=mentee.id,
        sender_id=None,
        meeting_id=None,
        event_type="meeting_accepted",
        message="Accepted",
    )
    db_session.commit()

    unread = notification_service.list_user_notifications(
        db_session,
        user_id=mentee.id,
        unread_only=True,
        limit=50,
    )
    assert len(unread) == 2
    assert notification_service.get_unread_count(db_session, user_id=mentee.id) == 2

    one = notification_service.mark_notification_read(
        db_session,
        user_id=mentee.id,
        notification_id=unread[0].id,
    )
    assert one is not None
    assert one.is_read is True
    assert notification_service.get_unread_count(db_session, user_id=mentee.id) == 1

    updated = notification_service.mark_all_notifications_read(db_session, user_id=mentee.id)
    assert updated == 1
    assert notification_service.get_unread_count(db_session, user_id=mentee.id) == 0


def test_mark_read_ignores_other_users_notifications(db_session, mentor, mentee):
    notification = notification_service.create_notification(
        db_session,
        recipient_id=mentor.id,
        sender_id=mentee.id,
        meeting_id=None,
        event_type="meeting_requested",
        message="Requested",
    )
    db_session.commit()

    assert notification_service.mark_notification_read(
        db_session,
        user_id=mentee.id,
        notification_id=notification.id,
    ) is None
    assert notification_service.get_unread_count(db_session, user_id=mentor.id) == 1


def test_dispatch_skipped_when_email_disabled(db_session, mentee, monkeypatch):
    notification = notification_service.create_notification(
        db_session,
        recipient_id=mentee.id,
        sender_id=None,
        meeting_id=None,
        event_type="meeting_cancelled",
        message="Cancelled",
    )
    db_session.commit()

    monkeypatch.setattr(notification_service, "is_email_enabled", lambda: False)

    assert notification_service.dispatch_email_for_notification(db_session, notification) is False


def test_dispatch_email_failure_is_non_blocking(db_session, mentee, monkeypatch):
    notification = notification_service.create_notification(
        db_session,
        recipient_id=mentee.id,
        sender_id=None,
        meeting_id=None,
        event_type="meeting_cancelled",
        message="Cancelled",
    )
    db_session.commit()

    monkeypatch.setattr(
        notification_service,
        "is_email_enabled",
        lambda: (_ for _ in ()).throw(RuntimeError("SMTP config unreadable")),
    )

    assert notification_service.dispatch_email_for_notification(db_session, notification) is False


def test_notify_meeting_requested_addresses_mentor(db_session, mentor, mentee, make_meeting):
    meeting = make_meeting(mentor, mentee, topic="System design")

    notification = notification_service.notify_meeting_requested(db_session, meeting)

    assert notification.event_type == notification_service.MEETING_REQUESTED
    assert notification.recipient_id == mentor.id
    assert notification.sender_id == mentee.id
    assert notification.meeting_id == meeting.id
    assert notification.message == (
        "You have a new meeting request for System design on 2024-06-01 during 09:00-10:00."
    )


@pytest.mark.parametrize(
    "status, event_type",
    [
        (MeetingStatus.UPCOMING, notification_service.MEETING_ACCEPTED),
        (MeetingStatus.COMPLETED, notification_service.MEETING_COMPLETED),
        (MeetingStatus.CANCELLED, notification_service.MEETING_CANCELLED),
    ],
)
def test_notify_status_change_goes_to_counterparty(db_session, mentor, mentee, make_meeting, status, event_type):
    meeting = make_meeting(mentor, mentee, status=status)

    from_mentor = notification_service.notify_status_change(db_session, meeting, mentor)
    from_mentee = notification_service.notify_status_change(db_session, meeting, mentee)

    assert from_mentor.event_type == from_mentee.event_type == event_type
    assert (from_mentor.recipient_id, from_mentor.sender_id) == (mentee.id, mentor.id)
    assert (from_mentee.recipient_id, from_mentee.sender_id) == (mentor.id, mentee.id)
    assert from_mentor.message.startswith("Test Mentor ")
    assert "2024-06-01 during 09:00-10:00" in from_mentor.message


def test_notify_review_addresses_mentor(db_session, mentor, mentee, make_meeting):
    meeting = make_meeting(mentor, mentee, status=MeetingStatus.COMPLETED)
    review = Review(mentor_id=mentor.id, reviewer_id=mentee.id, meeting_id=meeting.id, rating=4)
    db_session.add(review)
    db_session.flush()

    notification = notification_service.notify_review(db_session, review)

    assert notification.event_type == notification_service.REVIEW_RECEIVED
    assert notification.recipient_id == mentor.id
    assert notification.sender_id == mentee.id
    assert notification.message == "You received a 4-star review."


def test_every_event_has_subject_and_template():
    for event_type in notification_service.STATUS_EVENTS.values():
        assert event_type in notification_service.EVENTS
    for event in notification_service.EVENTS.values():
        assert event.subject.endswith("MentorMatch")
        assert event.template


def test_dispatch_starts_email_with_event_subject(db_session, mentor, mentee, make_meeting, monkeypatch):
    meeting = make_meeting(mentor, mentee, topic="System design")
    notification = notification_service.notify_meeting_requested(db_session, meeting)
    db_session.commit()

    sent = []
    monkeypatch.setattr(notification_service, "is_email_enabled", lambda: True)
    monkeypatch.setattr(
        notification_service,
        "_deliver",
        lambda to_email, subject, body, notification_id: sent.append((to_email, subject, body)),
    )

    assert notification_service.dispatch_email_for_notification(db_session, notification) is True
    for _ in range(50):
        if sent:
            break
        time.sleep(0.01)

    to_email, subject, body = sent[0]
    assert to_email == mentor.email
    assert subject == "New meeting request on MentorMatch"
    assert body.startswith("Hi Test Mentor,")
    assert f"Meeting ID: {meeting.id}" in body
