from datetime import date
from uuid import uuid4

from dosomething.events.dtos import EventDataDTO
from dosomething.events.features.update_memory.router import UPDATE_MEMORY_URL
from dosomething.events.repository.read_models import SqlEventReadModel
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


async def test_update_memory(client_factory, make_user, login):
    user = await make_user()
    memory = await memory_of(user)

    async with client_factory(login(user)) as client:
        response = await client.put(
            UPDATE_MEMORY_URL.format(memory_id=memory.uuid), json={"location": "Riverside"}
        )

    assert response.status_code == 200
    assert response.json() == {"message": "Memory updated successfully!"}
    updated = await SqlEventReadModel().get_memory(memory.uuid)
    assert updated.location == "Riverside"
    assert updated.date == "2030-05-01"


async def test_update_memory_rejects_blank_date(client_factory, make_user, login):
    user = await make_user()
    memory = await memory_of(user)

    async with client_factory(login(user)) as client:
        response = await client.put(UPDATE_MEMORY_URL.format(memory_id=memory.uuid), json={"date": ""})

    assert response.status_code == 400
    assert response.json() == {"date": "Must not be empty!"}


async def test_update_missing_memory(client_factory, make_user, login):
    user = await make_user()

    async with client_factory(login(user)) as client:
        response = await client.put(UPDATE_MEMORY_URL.format(memory_id=uuid4()), json={"location": "Anywhere"})

    assert response.status_code == 404
    assert response.json() == {"message": "Error, memory not found!"}


async def test_update_memory_requires_login(client, make_user):
    memory = await memory_of(await make_user())

    response = await client.put(UPDATE_MEMORY_URL.format(memory_id=memory.uuid), json={"location": "Anywhere"})

    assert response.status_code == 401
