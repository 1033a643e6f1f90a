import json
from datetime import UTC
from datetime import datetime
from types import SimpleNamespace

import pytest

from sportmate.chat import protocol
from sportmate.chat.registry import Participant


def frame(**data):
    return json.dumps(data)


def test_parse_join_event():
    parsed = protocol.parse_frame(frame(type="join-event", eventId=3, userId=9))
    assert parsed == protocol.JoinEvent(event_id=3, user_id=9)


def test_parse_join_event_accepts_numeric_strings():
    parsed = protocol.parse_frame(frame(type="join-event", eventId="3", userId="9"))
    assert parsed == protocol.JoinEvent(event_id=3, user_id=9)


def test_parse_send_message_keeps_raw_text():
    parsed = protocol.parse_frame(
        frame(type="send-message", eventId=3, message="  hello  ")
    )
    assert parsed == protocol.SendMessage(event_id=3, message="  hello  ")


def test_parse_send_message_allows_blank_text():
    parsed = protocol.parse_frame(frame(type="send-message", eventId=3, message=""))
    assert parsed.message == ""


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "not json",
        "[1, 2]",
        '"join-event"',
        frame(type="shout", eventId=1),
        frame(eventId=1, userId=1),
    ],
)
def test_malformed_frames_are_invalid_format(raw):
    with pytest.raises(protocol.ProtocolError) as exc_info:
        protocol.parse_frame(raw)
    assert exc_info.value.message == protocol.INVALID_FORMAT


def test_bad_field_reports_field_name():
    with pytest.raises(protocol.ProtocolError) as exc_info:
        protocol.parse_frame(frame(type="join-event", eventId="abc", userId=1))
    assert exc_info.value.message.startswith("eventId:")


def test_missing_field_reports_field_name():
    with pytest.raises(protocol.ProtocolError) as exc_info:
        protocol.parse_frame(frame(type="send-message", eventId=1))
    assert exc_info.value.message.startswith("message:")


def test_outbound_control_frames():
    user = Participant(user_id=2, first_name="Sam", last_name="Lee")

    assert protocol.Joined(5).to_payload() == {"type": "joined", "eventId": 5}
    assert protocol.Error("nope").to_payload() == {"type": "error", "message": "nope"}
    assert protocol.UserJoined(user).to_payload() == {
        "type": "user-joined",
        "user": {"id": 2, "firstName": "Sam", "lastName": "Lee"},
    }
    assert protocol.UserLeft(user).to_payload()["type"] == "user-left"


def test_new_message_frame_carries_record_and_author():
    created = datetime(2025, 6, 1, 18, 30, tzinfo=UTC)
    record = SimpleNamespace(
        pk=11, event_id=5, user_id=2, message="on my way", created_at=created
    )
    author = Participant(
        user_id=2, first_name="Sam", last_name="Lee", profile_image_url="http://x/s.png"
    )

    payload = protocol.NewMessage(record, author).to_payload()

    assert payload == {
        "type": "new-message",
        "id": 11,
        "eventId": 5,
        "userId": 2,
        "message": "on my way",
        "createdAt": created.isoformat(),
        "user": {
            "id": 2,
            "firstName": "Sam",
            "lastName": "Lee",
            "profileImageUrl": "http://x/s.png",
        },
    }


def test_participant_from_user_defaults_blank_fields():
    user = SimpleNamespace(pk=4, first_name=None, last_name="L", profile_image_url="")
    assert Participant.from_user(user) == Participant(user_id=4, last_name="L")
