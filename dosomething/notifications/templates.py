from dataclasses import dataclass
from datetime import date, datetime

from dosomething.config.settings import settings


@dataclass(frozen=True)
class MessageTemplate:
    """A rendered message. SMS uses ``text_body`` only."""

    subject: str
    html_body: str
    text_body: str


def format_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def format_time(value: str) -> str:
    """Render ``19:30`` or an ISO timestamp as ``7:30 pm``; anything else is kept as is."""
    for parse in (lambda v: datetime.strptime(v, "%H:%M"), datetime.fromisoformat):
        try:
            parsed = parse(value)
        except ValueError:
            continue
        hour = parsed.hour % 12 or 12
        return f"{hour}:{parsed.minute:02d} {'am' if parsed.hour < 12 else 'pm'}"
    return value


def event_phrase(event_type: str) -> str:
    if event_type == "Party":
        return f"a {event_type}"
    if event_type == "Movies":
        return f"the {event_type}"
    return event_type


HTML_LAYOUT = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="text-align: center; margin-bottom: 30px;">
        <h1 style="color: {accent};">{heading}</h1>
    </div>
    {content}
    <hr style="border: none; border-top: 1px solid #ddd; margin: 30px 0;">
    <p style="font-size: 12px; color: #888; text-align: center;">
        <a href="{site_url}">{site_url}</a>
    </p>
</body>
</html>
"""

DEFAULT_ACCENT = "#d4a373"


class MessageTemplates:
    """Builds the messages sent over SMS and email."""

    @staticmethod
    def _html(heading: str, content: str, accent: str | None = None) -> str:
        return HTML_LAYOUT.format(
            accent=accent or DEFAULT_ACCENT,
            heading=heading,
            content=content,
            site_url=settings.frontend_url,
        )

    @classmethod
    def invitation(
        cls,
        event_type: str,
        event_date: date,
        event_time: str,
        host_name: str,
        label: str | None = None,
        notes: str | None = None,
    ) -> MessageTemplate:
        opener = (
            f"You've been invited to {event_phrase(event_type)} on {format_date(event_date)} "
            f"at {format_time(event_time)} by {host_name}."
        )
        notes_html = f"<p>{notes}</p>" if notes else ""
        content = f"""
    <h4>{opener}</h4>
    {notes_html}
    <div style="text-align: center; margin: 30px 0;">
        <a href="{settings.frontend_url}" style="background-color: {label or DEFAULT_ACCENT}; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
            RSVP Now
        </a>
    </div>
"""
        return MessageTemplate(
            subject=f"You've been invited to {event_phrase(event_type)}!",
            html_body=cls._html("You're Invited!", content, accent=label),
            text_body=f"{opener} Click here -> {settings.frontend_url} to RSVP!",
        )

    @classmethod
    def rsvp_confirmed(cls, event_type: str, event_date: date, headcount: int) -> MessageTemplate:
        party = "1 guest" if headcount == 1 else f"{headcount} guests"
        return MessageTemplate(
            subject="RSVP Accepted!",
            html_body=cls._html(
                "See you there!",
                f"<p>You have successfully RSVP'd for {event_type} on "
                f"{format_date(event_date)} ({party}).</p>",
            ),
            text_body=f"Your RSVP for {event_type} on {format_date(event_date)} has been received!",
        )

    @classmethod
    def rsvp_canceled(cls, event_type: str, event_date: date) -> MessageTemplate:
        return MessageTemplate(
            subject="RSVP Canceled!",
            html_body=cls._html(
                "Maybe next time!",
                f"<p>You have successfully canceled your RSVP for {event_type} on "
                f"{format_date(event_date)}.</p>",
            ),
            text_body=f"Your RSVP for {event_type} on {format_date(event_date)} has been canceled!",
        )

    @classmethod
    def host_notice(
        cls, guest_name: str, event_type: str, event_date: date, headcount: int
    ) -> MessageTemplate:
        text = (
            f"{guest_name} is coming to {event_type} on {format_date(event_date)} "
            f"(party of {headcount})."
        )
        return MessageTemplate(
            subject=f"New RSVP for {event_type}",
            html_body=cls._html("New RSVP", f"<p>{text}</p>"),
            text_body=text,
        )

    @classmethod
    def cancellation(
        cls, event_type: str, event_date: date, event_time: str, host_name: str | None = None
    ) -> MessageTemplate:
        by_host = f" by {host_name}" if host_name else ""
        text = (
            f"{event_type} on {format_date(event_date)} at {format_time(event_time)} "
            f"has been canceled{by_host}."
        )
        return MessageTemplate(
            subject=f"{event_type} has been canceled",
            html_body=cls._html("Event Canceled", f"<p>{text}</p>"),
            text_body=text,
        )

    @classmethod
    def reminder(cls, event_type: str, event_date: date, event_time: str) -> MessageTemplate:
        text = (
            f"Reminder: {event_type} is coming up on {format_date(event_date)} "
            f"at {format_time(event_time)}!"
        )
        return MessageTemplate(
            subject="Almost There...",
            html_body=cls._html("So close!", f"<p>{text}</p>"),
            text_body=text,
        )
