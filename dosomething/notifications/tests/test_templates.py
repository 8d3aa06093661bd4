from datetime import date

import pytest

from dosomething.notifications.templates import MessageTemplates, event_phrase, format_time


@pytest.mark.parametrize(
    "event_type, phrase",
    [("Party", "a Party"), ("Movies", "the Movies"), ("Dinner", "Dinner")],
)
def test_event_phrase(event_type, phrase):
    assert event_phrase(event_type) == phrase


@pytest.mark.parametrize(
    "value, expected",
    [("19:30", "7:30 pm"), ("09:05", "9:05 am"), ("00:15", "12:15 am"), ("2030-06-01T12:00:00", "12:00 pm"), ("soon", "soon")],
)
def test_format_time(value, expected):
    assert format_time(value) == expected


def test_invitation_subject_follows_event_type():
    party = MessageTemplates.invitation("Party", date(2030, 6, 1), "19:30", "Hana Host")
    movies = MessageTemplates.invitation("Movies", date(2030, 6, 1), "19:30", "Hana Host")
    dinner = MessageTemplates.invitation("Dinner", date(2030, 6, 1), "19:30", "Hana Host")

    assert party.subject == "You've been invited to a Party!"
    assert movies.subject == "You've been invited to the Movies!"
    assert dinner.subject == "You've been invited to Dinner!"


def test_invitation_text():
    template = MessageTemplates.invitation(
        "Party", date(2030, 6, 1), "19:30", "Hana Host", label="#ff0000", notes="Bring snacks"
    )

    assert template.text_body.startswith(
        "You've been invited to a Party on June 1, 2030 at 7:30 pm by Hana Host."
    )
    assert "Bring snacks" in template.html_body
    assert "#ff0000" in template.html_body


def test_rsvp_templates():
    confirmed = MessageTemplates.rsvp_confirmed("Party", date(2030, 6, 1), 3)
    canceled = MessageTemplates.rsvp_canceled("Party", date(2030, 6, 1))

    assert confirmed.subject == "RSVP Accepted!"
    assert "3 guests" in confirmed.html_body
    assert canceled.text_body == "Your RSVP for Party on June 1, 2030 has been canceled!"


def test_cancellation_mentions_host_when_known():
    with_host = MessageTemplates.cancellation("Party", date(2030, 6, 1), "19:30", "Hana Host")
    without_host = MessageTemplates.cancellation("Party", date(2030, 6, 1), "19:30")

    assert with_host.text_body.endswith("has been canceled by Hana Host.")
    assert without_host.text_body.endswith("has been canceled.")
