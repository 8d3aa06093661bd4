from datetime import date
from unittest.mock import AsyncMock
from uuid import uuid4

from sqlalchemy.exc import OperationalError

from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.events.dtos import EventDataDTO
from dosomething.events.features.update_event.router import UPDATE_EVENT_URL
from dosomething.events.repository.write_models import SqlEventStore

CHANGES = {
    "type": "Movies",
    "date": "2030-08-01",
    "time": "21:00",
    "location": "Drive-in",
    "label": "#111",
    "description": None,
    "is_public": True,
}


async def test_update_event(client_factory, make_user, login):
    host = await make_user()
    event = await SqlEventStore().create_event(
        EventDataDTO(type="Party", date=date(2030, 7, 1), time="19:00", location="Home", label="#abc"),
        created_by=host.uuid,
    )

    async with client_factory(login(host)) as client:
        response = await client.put(UPDATE_EVENT_URL, json={"id": str(event.uuid), **CHANGES})

    assert response.status_code == 200
    updated = response.json()["updated"]
    assert updated["type"] == "Movies"
    assert updated["date"] == "2030-08-01"
    assert updated["is_public"] is True
    assert response.json()["success"] == {"message": "Event updated successfully!"}


async def test_update_missing_event(client_factory, make_user, login):
    host = await make_user()

    async with client_factory(login(host)) as client:
        response = await client.put(UPDATE_EVENT_URL, json={"id": str(uuid4()), **CHANGES})

    assert response.status_code == 404


async def test_update_with_bad_date(client_factory, make_user, login):
    host = await make_user()

    async with client_factory(login(host)) as client:
        response = await client.put(
            UPDATE_EVENT_URL, json={"id": str(uuid4()), **CHANGES, "date": "next tuesday"}
        )

    assert response.status_code == 400
    assert response.json() == {"date": "Must be a valid date!"}


async def test_store_failure_is_reported_without_internals(client_factory, make_user, login):
    host = await make_user()
    orchestrator = AsyncMock()
    orchestrator.update_event.side_effect = OperationalError("UPDATE events", {}, Exception("disk I/O error"))

    async with client_factory({**login(host), get_rsvp_orchestrator: lambda: orchestrator}) as client:
        response = await client.put(UPDATE_EVENT_URL, json={"id": str(uuid4()), **CHANGES})

    assert response.status_code == 400
    assert response.json() == {"event": "Error updating event!"}
