import pytest

from gallery_relay.booking import REQUIRED_FIELDS, BookingRequest, build_message, render_booking_email
from gallery_relay.errors import ValidationError

PAYLOAD = {
    "name": "Ada Lovelace",
    "email": "ada@example.org",
    "date": "2026-11-02",
    "shootType": "Portrait",
    "package": "Premium",
}


def test_from_payload_maps_fields():
    booking = BookingRequest.from_payload({**PAYLOAD, "timeSlot": "10:00", "message": "Hi"})

    assert booking.shoot_type == "Portrait"
    assert booking.time_slot == "10:00"
    assert booking.message == "Hi"
    assert booking.subject == "New Booking Request - Portrait on 2026-11-02"


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_missing_required_field_rejected(field):
    payload = {key: value for key, value in PAYLOAD.items() if key != field}

    with pytest.raises(ValidationError) as excinfo:
        BookingRequest.from_payload(payload)

    assert excinfo.value.missing == [field]
    assert excinfo.value.required == list(REQUIRED_FIELDS)


def test_empty_values_count_as_missing():
    with pytest.raises(ValidationError) as excinfo:
        BookingRequest.from_payload({**PAYLOAD, "email": "", "name": None})

    assert excinfo.value.missing == ["name", "email"]


def test_none_payload_rejected():
    with pytest.raises(ValidationError):
        BookingRequest.from_payload(None)


def test_render_includes_optional_sections_only_when_present(settings):
    plain = render_booking_email(BookingRequest.from_payload(PAYLOAD), settings)
    full = render_booking_email(
        BookingRequest.from_payload({**PAYLOAD, "timeSlot": "Morning", "message": "Beach"}),
        settings,
    )

    assert "Time Slot" not in plain
    assert "Additional Information" not in plain
    assert "Morning" in full
    assert "Beach" in full
    assert "Test Studio" in plain
    assert "mailto:ada@example.org" in plain
    assert "Reply directly to this email to contact Ada Lovelace." in plain


def test_render_escapes_user_values(settings):
    booking = BookingRequest.from_payload({**PAYLOAD, "message": "<script>alert(1)</script>"})

    html = render_booking_email(booking, settings)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_build_message_headers(settings):
    message = build_message(BookingRequest.from_payload(PAYLOAD), settings)

    assert message["From"] == "Test Studio <studio@example.com>"
    assert message["To"] == "bookings@example.com"
    assert message["Reply-To"] == "ada@example.org"
    assert message["Subject"] == "New Booking Request - Portrait on 2026-11-02"
    assert "Ada Lovelace" in message.get_body(preferencelist=("html",)).get_content()


@pytest.mark.parametrize("payload", [["name", "email"], "booking", 42])
def test_non_mapping_payload_treated_as_empty(payload):
    with pytest.raises(ValidationError) as excinfo:
        BookingRequest.from_payload(payload)

    assert excinfo.value.missing == list(REQUIRED_FIELDS)
