from datetime import date

import pytest

from dosomething.events.dtos import EventDataDTO
from dosomething.events.features.toggle_rsvp.router import TOGGLE_RSVP_URL
from dosomething.events.repository.write_models import SqlEventStore


@pytest.fixture
async def public_event(make_user):
    host = await make_user(first_name="Hana", last_name="Host", email="hana@example.com")
    event = await SqlEventStore().create_event(
        EventDataDTO(
            type="Party",
            date=date(2030, 7, 1),
            time="19:30",
            location="The Backyard",
            label="#d4a373",
            is_public=True,
        ),
        created_by=host.uuid,
    )
    return event


async def test_rsvp_with_numeric_string(client_factory, make_user, login, dispatcher_override, outbox, public_event):
    guest = await make_user(email="gus@example.com")

    async with client_factory({**login(guest), **dispatcher_override}) as client:
        response = await client.put(TOGGLE_RSVP_URL, json={"id": str(public_event.uuid), "headcount": "3"})

    assert response.status_code == 200
    data = response.json()
    assert data["attending"] is True
    assert data["success"] == {"message": "RSVP successful!"}
    assert data["updated"]["attendees"][0]["headcount"] == 3
    assert sorted(m["to"] for m in outbox.email.sent) == ["gus@example.com", "hana@example.com"]


async def test_rsvp_twice_cancels(client_factory, make_user, login, dispatcher_override, outbox, public_event):
    guest = await make_user(email="gus@example.com")

    async with client_factory({**login(guest), **dispatcher_override}) as client:
        await client.put(TOGGLE_RSVP_URL, json={"id": str(public_event.uuid), "headcount": 1})
        response = await client.put(TOGGLE_RSVP_URL, json={"id": str(public_event.uuid), "headcount": 1})

    assert response.status_code == 200
    assert response.json()["attending"] is False
    assert response.json()["updated"]["attendees"] == []
    assert outbox.email.sent[-1]["subject"] == "RSVP Canceled!"


@pytest.mark.parametrize(
    "headcount, errors",
    [("abc", {"headcount": "Numbers only!"}), ("", {"headcount": "Must not be empty!"})],
)
async def test_rsvp_with_bad_headcount(client_factory, make_user, login, public_event, headcount, errors):
    guest = await make_user()

    async with client_factory(login(guest)) as client:
        response = await client.put(
            TOGGLE_RSVP_URL, json={"id": str(public_event.uuid), "headcount": headcount}
        )

    assert response.status_code == 400
    assert response.json() == errors


async def test_rsvp_to_private_event_without_invite(client_factory, make_user, login):
    host = await make_user()
    guest = await make_user()
    event = await SqlEventStore().create_event(
        EventDataDTO(type="Dinner", date=date(2030, 7, 1), time="19:30", location="Home", label="#000"),
        created_by=host.uuid,
    )

    async with client_factory(login(guest)) as client:
        response = await client.put(TOGGLE_RSVP_URL, json={"id": str(event.uuid), "headcount": 1})

    assert response.status_code == 400
    assert response.json() == {"rsvp": "You are not invited to this event!"}
