from __future__ import annotations

from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from html import escape
from pathlib import Path
from string import Template
from typing import Any, List, Mapping, Optional, Tuple

from .config import SETTINGS, RelaySettings
from .errors import ValidationError

REQUIRED_FIELDS: Tuple[str, ...] = ("name", "email", "date", "shootType", "package")

TEMPLATE_PATH = Path(__file__).parent / "templates" / "booking_email.html"


@dataclass(frozen=True)
class BookingRequest:
    name: str
    email: str
    date: str
    shoot_type: str
    package: str
    time_slot: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "BookingRequest":
        if not isinstance(payload, Mapping):
            payload = {}
        missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
        if missing:
            raise ValidationError(
                "Missing required fields", required=REQUIRED_FIELDS, missing=missing
            )

        def optional(name: str) -> Optional[str]:
            value = payload.get(name)
            return str(value) if value else None

        return cls(
            name=str(payload["name"]),
            email=str(payload["email"]),
            date=str(payload["date"]),
            shoot_type=str(payload["shootType"]),
            package=str(payload["package"]),
            time_slot=optional("timeSlot"),
            message=optional("message"),
        )

    @property
    def subject(self) -> str:
        return f"New Booking Request - {self.shoot_type} on {self.date}"


def _field(label: str, value_html: str) -> str:
    return (
        '<div class="field">'
        f'<div class="label">{escape(label)}</div>'
        f'<div class="value">{value_html}</div>'
        "</div>"
    )


def render_booking_email(booking: BookingRequest, settings: RelaySettings | None = None) -> str:
    settings = settings or SETTINGS
    email = escape(booking.email)

    rows: List[Tuple[str, str]] = [
        ("Customer Name", escape(booking.name)),
        ("Email Address", f'<a href="mailto:{email}" style="color: #14b8a6;">{email}</a>'),
        ("Preferred Date", escape(booking.date)),
    ]
    if booking.time_slot:
        rows.append(("Time Slot", escape(booking.time_slot)))
    rows.append(("Session Type", escape(booking.shoot_type)))
    rows.append(("Package Selected", escape(booking.package)))
    if booking.message:
        rows.append(("Additional Information", escape(booking.message)))

    with open(TEMPLATE_PATH, "r", encoding="utf-8") as f:
        tmpl_str = f.read()

    return Template(tmpl_str).substitute(
        sender_name=escape(settings.sender_name),
        fields_html="".join(_field(label, value) for label, value in rows),
        name=escape(booking.name),
    )


def build_message(booking: BookingRequest, settings: RelaySettings | None = None) -> EmailMessage:
    settings = settings or SETTINGS
    message = EmailMessage()
    message["From"] = formataddr((settings.sender_name, settings.gmail_user))
    message["To"] = settings.booking_recipient
    message["Reply-To"] = booking.email
    message["Subject"] = booking.subject
    message.set_content(
        f"New booking request from {booking.name} <{booking.email}> "
        f"for a {booking.shoot_type} session on {booking.date}."
    )
    message.add_alternative(render_booking_email(booking, settings), subtype="html")
    return message
