from datetime import date

from dosomething.events.dtos import EventDataDTO, GuestRecord
from dosomething.events.features.send_reminders.router import SEND_REMINDERS_URL
from dosomething.events.repository.write_models import SqlEventStore
from dosomething.models.channels import Channel


async def test_reminders_reach_attendees_only(client_factory, make_user, login, dispatcher_override, outbox):
    host = await make_user()
    attendee = await make_user(phone="5552223333", notify=Channel.SMS)
    store = SqlEventStore()
    event = await store.create_event(
        EventDataDTO(type="Party", date=date(2030, 7, 1), time="19:00", location="Home", label="#abc", is_public=True),
        created_by=host.uuid,
    )
    await store.add_invite(event.uuid, GuestRecord.placeholder("lurker@example.com", Channel.EMAIL))
    await store.toggle_rsvp(event.uuid, attendee.uuid, 2)

    async with client_factory({**login(host), **dispatcher_override}) as client:
        response = await client.post(SEND_REMINDERS_URL, json={"id": str(event.uuid)})

    assert response.status_code == 200
    assert response.json() == {"success": {"message": "Reminders sent!"}}
    assert outbox.email.sent == []
    assert [m["to"] for m in outbox.sms.sent] == ["5552223333"]
    assert outbox.sms.sent[0]["body"].startswith("Reminder: Party is coming up on July 1, 2030")
