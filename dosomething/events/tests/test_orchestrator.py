import base64
from datetime import date
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from dosomething.events.guest_resolution import SqlGuestResolver
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.repository.read_models import SqlEventReadModel
from dosomething.events.repository.write_models import SqlEventStore
from dosomething.exceptions import NotFoundError, ValidationError
from dosomething.models.channels import Channel
from dosomething.notifications.dtos import NotificationKind
from dosomething.notifications.repository.read_models import SqlNotificationReadModel
from dosomething.notifications.repository.write_models import SqlNotificationWriteModel
from dosomething.storage import BlobStore

TODAY = date(2030, 6, 15)


class InMemoryBlobStore(BlobStore):
    def __init__(self):
        self.blobs: dict[str, bytes] = {}

    async def upload(self, data: bytes, suffix: str = ".jpg") -> str:
        url = f"http://test/uploads/{len(self.blobs)}{suffix}"
        self.blobs[url] = data
        return url


def event_fields(**overrides) -> dict:
    fields = {
        "type": "Party",
        "date": "2030-07-01",
        "time": "19:30",
        "location": "The Backyard",
        "label": "#d4a373",
        "description": "Bring snacks",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def orchestrator(blob_store):
    return RsvpOrchestrator(
        store=SqlEventStore(),
        resolver=SqlGuestResolver(),
        notifications=SqlNotificationWriteModel(),
        blob_store=blob_store,
        today=lambda: TODAY,
    )


async def test_create_event_invites_everyone_once(orchestrator, make_user):
    host = await make_user(first_name="Hana", last_name="Host")
    friend = await make_user(email="friend@example.com")

    outcome = await orchestrator.create_event(
        host,
        event_fields(),
        ["stranger@example.com", "friend@example.com", str(friend.uuid), "555-222-3333"],
    )

    guest_ids = [g.guest_id for g in outcome.event.invited_guests]
    assert guest_ids == ["stranger@example.com", str(friend.uuid), "555-222-3333"]
    assert [d.message_type for d in outcome.deliveries] == ["invitation"] * 3
    assert "by Hana Host" in outcome.deliveries[0].template.text_body

    feed = await SqlNotificationReadModel().list_for(friend.uuid)
    assert [(n.notification_type, n.user_from.uuid) for n in feed] == [
        (NotificationKind.INVITE, host.uuid)
    ]


async def test_create_event_with_bad_guest_stores_nothing(orchestrator, make_user):
    host = await make_user()

    with pytest.raises(ValidationError):
        await orchestrator.create_event(host, event_fields(), ["not-a-contact"])

    assert await SqlEventReadModel().list_all() == []


async def test_create_event_validates_fields(orchestrator, make_user):
    host = await make_user()

    with pytest.raises(ValidationError) as exc_info:
        await orchestrator.create_event(host, event_fields(type="", location=" "), [])

    assert exc_info.value.errors == {"type": "Must not be empty!", "location": "Must not be empty!"}


async def test_find_and_invite_checks_event_first(orchestrator, make_user):
    host = await make_user()

    with pytest.raises(NotFoundError):
        await orchestrator.find_and_invite(host, uuid4(), "not-a-contact")


async def test_find_and_invite_toggles(orchestrator, make_user):
    host = await make_user()
    friend = await make_user(email="friend@example.com")
    event = (await orchestrator.create_event(host, event_fields(), [])).event

    pushed = await orchestrator.find_and_invite(host, event.uuid, "FRIEND@example.com")
    pulled = await orchestrator.find_and_invite(host, event.uuid, "friend@example.com")

    assert pushed.invited is True
    assert [d.guest.user_id for d in pushed.deliveries] == [friend.uuid]
    assert pulled.invited is False
    assert pulled.deliveries == []
    assert pulled.event.invited_guests == []


async def test_find_and_invite_placeholder_gets_no_notification(orchestrator, make_user):
    host = await make_user()
    event = (await orchestrator.create_event(host, event_fields(), [])).event

    outcome = await orchestrator.find_and_invite(host, event.uuid, "555-222-3333")

    assert outcome.invited is True
    assert outcome.deliveries[0].guest.notify == Channel.SMS
    assert await SqlNotificationReadModel().latest_for(host.uuid) is None


async def test_set_guest_add_and_remove(orchestrator, make_user):
    host = await make_user()
    event = (await orchestrator.create_event(host, event_fields(), [])).event

    added = await orchestrator.set_guest(host, event.uuid, "a@example.com", "add")
    again = await orchestrator.set_guest(host, event.uuid, "a@example.com", "add")
    removed = await orchestrator.set_guest(host, event.uuid, "a@example.com", "remove")

    assert len(added.deliveries) == 1
    assert again.deliveries == []
    assert len(again.event.invited_guests) == 1
    assert removed.event.invited_guests == []


async def test_set_guest_rejects_unknown_action(orchestrator, make_user):
    host = await make_user()

    with pytest.raises(ValidationError) as exc_info:
        await orchestrator.set_guest(host, uuid4(), "a@example.com", "promote")
    assert "action" in exc_info.value.errors


@pytest.mark.parametrize(
    "headcount, message",
    [(None, "Must not be empty!"), ("", "Must not be empty!"), ("abc", "Numbers only!"), (0, "Must be at least 1!")],
)
async def test_toggle_rsvp_validates_headcount(orchestrator, make_user, headcount, message):
    host = await make_user()
    event = (await orchestrator.create_event(host, event_fields(is_public=True), [])).event

    with pytest.raises(ValidationError) as exc_info:
        await orchestrator.toggle_rsvp(host, event.uuid, headcount)

    assert exc_info.value.errors == {"headcount": message}


async def test_toggle_rsvp_push_notifies_guest_and_host(orchestrator, make_user):
    host = await make_user(first_name="Hana", last_name="Host", email="hana@example.com")
    guest = await make_user(first_name="Gus", last_name="Guest", phone="5553334444", notify=Channel.SMS)
    event = (await orchestrator.create_event(host, event_fields(), [str(guest.uuid)])).event

    outcome = await orchestrator.toggle_rsvp(guest, event.uuid, "3")

    assert outcome.attending is True
    assert outcome.event.attendees[0].headcount == 3
    confirmed, host_notice = outcome.deliveries
    assert confirmed.message_type == "rsvp_confirmed"
    assert confirmed.guest.phone == "5553334444"
    assert host_notice.message_type == "host_notice"
    assert host_notice.guest.email == "hana@example.com"
    assert "Gus Guest" in host_notice.template.text_body

    latest = await SqlNotificationReadModel().latest_for(host.uuid)
    assert latest.notification_type == NotificationKind.RSVP
    assert latest.user_from.uuid == guest.uuid


async def test_toggle_rsvp_pull_sends_cancellation_to_guest_only(orchestrator, make_user):
    host = await make_user()
    guest = await make_user()
    event = (await orchestrator.create_event(host, event_fields(is_public=True), [])).event
    await orchestrator.toggle_rsvp(guest, event.uuid, 1)

    outcome = await orchestrator.toggle_rsvp(guest, event.uuid, 1)

    assert outcome.attending is False
    assert outcome.event.attendees == []
    assert [d.message_type for d in outcome.deliveries] == ["rsvp_canceled"]


async def test_toggle_rsvp_without_host_notice(orchestrator, make_user):
    orchestrator.notify_host_on_rsvp = False
    host = await make_user()
    guest = await make_user()
    event = (await orchestrator.create_event(host, event_fields(is_public=True), [])).event

    outcome = await orchestrator.toggle_rsvp(guest, event.uuid, 1)

    assert [d.message_type for d in outcome.deliveries] == ["rsvp_confirmed"]


async def test_delete_upcoming_event_cancels_for_every_guest(orchestrator, make_user):
    host = await make_user()
    friend = await make_user(notify=Channel.SMS)
    event = (
        await orchestrator.create_event(host, event_fields(date="2030-06-15"), ["a@example.com", str(friend.uuid)])
    ).event

    outcome = await orchestrator.delete_event(event.uuid)

    assert [d.message_type for d in outcome.deliveries] == ["cancellation", "cancellation"]
    assert [d.guest.notify for d in outcome.deliveries] == [Channel.EMAIL, Channel.SMS]
    feed = await SqlNotificationReadModel().list_for(friend.uuid)
    assert [n.notification_type for n in feed] == [NotificationKind.INVITE, NotificationKind.CANCELLATION]
    with pytest.raises(NotFoundError):
        await orchestrator.store.get_event(event.uuid)


async def test_delete_past_event_is_silent(orchestrator, make_user):
    host = await make_user()
    event = (
        await orchestrator.create_event(host, event_fields(date="2030-06-14"), ["a@example.com"])
    ).event

    outcome = await orchestrator.delete_event(event.uuid)

    assert outcome.deliveries == []


async def test_delete_missing_event(orchestrator):
    with pytest.raises(NotFoundError):
        await orchestrator.delete_event(uuid4())


async def test_send_reminders_goes_to_attendees(orchestrator, make_user):
    host = await make_user()
    guest = await make_user()
    event = (
        await orchestrator.create_event(host, event_fields(is_public=True), ["a@example.com"])
    ).event
    await orchestrator.toggle_rsvp(guest, event.uuid, 2)

    outcome = await orchestrator.send_reminders(event.uuid)

    assert [d.guest.user_id for d in outcome.deliveries] == [guest.uuid]
    assert outcome.deliveries[0].template.subject == "Almost There..."


async def test_add_memory_uploads_image(orchestrator, blob_store, make_user):
    host = await make_user()
    event = (await orchestrator.create_event(host, event_fields(), [])).event
    image = "data:image/png;base64," + base64.b64encode(b"fake-png").decode()

    updated = await orchestrator.add_memory(host, event.uuid, image, "2030-07-01", "The Backyard")

    assert list(blob_store.blobs.values()) == [b"fake-png"]
    assert updated.pics[0].image_url in blob_store.blobs
    assert updated.pics[0].uploaded_by_name == host.full_name


async def test_add_memory_rejects_bad_image(orchestrator, make_user):
    host = await make_user()
    event = (await orchestrator.create_event(host, event_fields(), [])).event

    with pytest.raises(ValidationError) as exc_info:
        await orchestrator.add_memory(host, event.uuid, "%%%not-base64", "2030-07-01", "Home")

    assert exc_info.value.errors == {"image": "Invalid image data!"}


async def test_add_memory_without_blob_store_fails_before_any_work(make_user):
    store = AsyncMock(spec=SqlEventStore)
    orchestrator = RsvpOrchestrator(
        store=store, resolver=SqlGuestResolver(), notifications=SqlNotificationWriteModel()
    )
    host = await make_user()

    with pytest.raises(RuntimeError):
        await orchestrator.add_memory(host, uuid4(), "", "2030-07-01", "Home")

    store.get_event.assert_not_awaited()


async def test_reinviting_placeholder_who_registered_uninvites(orchestrator, make_user):
    host = await make_user()
    event = (await orchestrator.create_event(host, event_fields(), ["guest@example.com"])).event
    await make_user(email="guest@example.com", notify=Channel.SMS)

    outcome = await orchestrator.find_and_invite(host, event.uuid, "guest@example.com")

    assert outcome.invited is False
    assert outcome.event.invited_guests == []
    assert outcome.deliveries == []


async def test_placeholder_who_registered_is_not_invited_twice(orchestrator, make_user):
    host = await make_user()
    event = (
        await orchestrator.create_event(host, event_fields(date="2030-06-15"), ["guest@example.com"])
    ).event
    guest = await make_user(email="guest@example.com", notify=Channel.SMS)

    outcome = await orchestrator.set_guest(host, event.uuid, str(guest.uuid), "add")

    assert outcome.deliveries == []
    assert [g.guest_id for g in outcome.event.invited_guests] == ["guest@example.com"]

    canceled = await orchestrator.delete_event(event.uuid)
    assert [d.message_type for d in canceled.deliveries] == ["cancellation"]


async def test_removing_registered_user_drops_their_placeholder_invite(orchestrator, make_user):
    host = await make_user()
    event = (await orchestrator.create_event(host, event_fields(), ["555-777-8888"])).event
    guest = await make_user(phone="5557778888", notify=Channel.EMAIL)

    outcome = await orchestrator.set_guest(host, event.uuid, str(guest.uuid), "remove")

    assert outcome.event.invited_guests == []
