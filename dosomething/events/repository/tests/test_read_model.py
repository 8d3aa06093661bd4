from datetime import date
from uuid import uuid4

import pytest

from dosomething.events.dtos import EventDataDTO, GuestRecord
from dosomething.events.repository.read_models import SqlEventReadModel
from dosomething.events.repository.write_models import SqlEventStore
from dosomething.exceptions import NotFoundError
from dosomething.models.channels import Channel


def event_data(event_type: str, event_date: date, is_public: bool = False) -> EventDataDTO:
    return EventDataDTO(
        type=event_type,
        date=event_date,
        time="18:00",
        location="Downtown",
        label="#000000",
        is_public=is_public,
    )


async def test_list_visible_for(make_user):
    store = SqlEventStore()
    host = await make_user()
    viewer = await make_user(email="viewer@example.com", phone="5557654321")

    public = await store.create_event(event_data("Movies", date(2030, 3, 1), is_public=True), host.uuid)
    by_email = await store.create_event(event_data("Dinner", date(2030, 1, 1)), host.uuid)
    by_phone = await store.create_event(event_data("Party", date(2030, 2, 1)), host.uuid)
    own = await store.create_event(event_data("Brunch", date(2029, 12, 1)), viewer.uuid)
    hidden = await store.create_event(event_data("Secret", date(2030, 4, 1)), host.uuid)

    await store.add_invite(by_email.uuid, GuestRecord.placeholder("Viewer@Example.com", Channel.EMAIL))
    await store.add_invite(by_phone.uuid, GuestRecord.placeholder("555-765-4321", Channel.SMS))
    await store.add_invite(hidden.uuid, GuestRecord.placeholder("other@example.com", Channel.EMAIL))

    visible = await SqlEventReadModel().list_visible_for(viewer.uuid)

    assert [e.uuid for e in visible] == [own.uuid, by_email.uuid, by_phone.uuid, public.uuid]


async def test_list_all_sorted_by_date(make_user):
    store = SqlEventStore()
    host = await make_user()
    later = await store.create_event(event_data("Later", date(2031, 1, 1)), host.uuid)
    sooner = await store.create_event(event_data("Sooner", date(2030, 1, 1)), host.uuid)

    events = await SqlEventReadModel().list_all()

    assert [e.uuid for e in events] == [sooner.uuid, later.uuid]


async def test_list_and_get_memories(make_user):
    store = SqlEventStore()
    read_model = SqlEventReadModel()
    host = await make_user()
    event = await store.create_event(event_data("Hike", date(2030, 5, 1)), host.uuid)
    for location in ("Summit", "Trailhead"):
        event = await store.add_memory(
            event.uuid,
            image_url=f"http://localhost:8000/uploads/{location}.jpg",
            date="2030-05-01",
            location=location,
            uploaded_by=host.uuid,
            uploaded_by_name=host.full_name,
        )

    memories = await read_model.list_memories()

    assert sorted(m.location for m in memories) == ["Summit", "Trailhead"]
    assert {m.event_id for m in memories} == {event.uuid}
    fetched = await read_model.get_memory(memories[0].uuid)
    assert fetched == memories[0]


async def test_get_missing_memory():
    with pytest.raises(NotFoundError) as exc:
        await SqlEventReadModel().get_memory(uuid4())

    assert exc.value.errors == {"message": "Error, memory not found!"}
