from datetime import date
from uuid import uuid4

from dosomething.events.dtos import EventDataDTO
from dosomething.events.features.list_memories.router import LIST_MEMORIES_URL
from dosomething.events.repository.write_models import SqlEventStore


async def memory_of(host):
    store = SqlEventStore()
    event = await store.create_event(
        EventDataDTO(type="Picnic", date=date(2030, 5, 1), time="12:00", location="Park", label="#fff"),
        created_by=host.uuid,
    )
    event = await store.add_memory(
        event.uuid,
        image_url="http://localhost:8000/uploads/picnic.jpg",
        date="2030-05-01",
        location="Park",
        uploaded_by=host.uuid,
        uploaded_by_name=host.full_name,
    )
    return event.pics[0]


async def test_list_memories(client, make_user):
    host = await make_user()
    memory = await memory_of(host)

    response = await client.get(LIST_MEMORIES_URL)

    assert response.status_code == 200
    assert response.json() == [
        {
            "id": str(memory.uuid),
            "event_id": str(memory.event_id),
            "date": "2030-05-01",
            "location": "Park",
            "image": "http://localhost:8000/uploads/picnic.jpg",
            "uploaded_by": str(host.uuid),
            "uploaded_by_name": host.full_name,
        }
    ]


async def test_get_single_memory(client, make_user):
    memory = await memory_of(await make_user())

    response = await client.get(LIST_MEMORIES_URL, params={"id": str(memory.uuid)})

    assert response.status_code == 200
    assert response.json()["id"] == str(memory.uuid)


async def test_get_missing_memory(client):
    response = await client.get(LIST_MEMORIES_URL, params={"id": str(uuid4())})

    assert response.status_code == 404
    assert response.json() == {"message": "Error, memory not found!"}
