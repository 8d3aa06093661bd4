"""RSVP and invitation lifecycle.

Every operation commits its change first and then returns the messages it
owes as ``Delivery`` items. Sending them is left to the caller (usually a
background task), so a slow SMS or email provider never holds up the
response and a failed send never undoes the change.
"""

import logging
from collections.abc import Callable
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from dosomething.auth import AuthenticatedUser
from dosomething.events.dtos import (
    Delivery,
    EventDataDTO,
    EventDTO,
    EventOutcome,
    GuestRecord,
)
from dosomething.events.guest_resolution import GuestResolver
from dosomething.events.repository.write_models import EventStore
from dosomething.exceptions import ValidationError
from dosomething.notifications.dtos import NotificationKind
from dosomething.notifications.repository.write_models import NotificationWriteModel
from dosomething.notifications.templates import MessageTemplates
from dosomething.storage import BlobStore, decode_image
from dosomething.validators import validate_event, validate_headcount

logger = logging.getLogger(__name__)

GUEST_ACTIONS = ("add", "remove")


def parse_event_data(data: dict[str, Any]) -> EventDataDTO:
    validate_event(data)
    raw_date = data["date"]
    if isinstance(raw_date, date):
        event_date = raw_date
    else:
        try:
            # accepts both 2024-05-01 and 2024-05-01T00:00:00.000Z
            event_date = date.fromisoformat(str(raw_date).strip()[:10])
        except ValueError:
            raise ValidationError({"date": "Must be a valid date!"})
    return EventDataDTO(
        type=data["type"].strip(),
        date=event_date,
        time=data["time"].strip(),
        location=data["location"].strip(),
        label=data["label"].strip(),
        description=data.get("description"),
        is_public=bool(data.get("is_public", False)),
        rsvp_open=bool(data.get("rsvp_open", True)),
    )


def guest_for_user(user: AuthenticatedUser) -> GuestRecord:
    return GuestRecord(
        guest_id=str(user.uuid),
        notify=user.notify,
        user_id=user.uuid,
        name=user.full_name,
        email=user.email,
        phone=user.phone,
        avatar=user.profile_pic,
    )


class RsvpOrchestrator:
    def __init__(
        self,
        store: EventStore,
        resolver: GuestResolver,
        notifications: NotificationWriteModel,
        blob_store: BlobStore | None = None,
        today: Callable[[], date] = date.today,
        notify_host_on_rsvp: bool = True,
    ) -> None:
        self.store = store
        self.resolver = resolver
        self.notifications = notifications
        self.blob_store = blob_store
        self.today = today
        self.notify_host_on_rsvp = notify_host_on_rsvp

    async def create_event(
        self, host: AuthenticatedUser, data: dict[str, Any], guest_identifiers: list[str]
    ) -> EventOutcome:
        event_data = parse_event_data(data)

        # resolve everyone before writing so a bad identifier stores nothing
        guests: dict[str, GuestRecord] = {}
        for identifier in guest_identifiers:
            guest = await self.resolver.resolve(identifier)
            guests.setdefault(guest.guest_id, guest)

        event = await self.store.create_event(event_data, created_by=host.uuid)
        for guest in guests.values():
            event = await self.store.add_invite(event.uuid, guest)

        deliveries = []
        for guest in guests.values():
            deliveries.append(self._invitation(event, host, guest))
            await self._notify(guest.user_id, host.uuid, event, NotificationKind.INVITE)
        return EventOutcome(event=event, deliveries=deliveries)

    async def update_event(self, event_id: UUID, data: dict[str, Any]) -> EventDTO:
        return await self.store.update_event(event_id, parse_event_data(data))

    async def find_and_invite(
        self, host: AuthenticatedUser, event_id: UUID, identifier: str
    ) -> EventOutcome:
        await self.store.get_event(event_id)
        guest = await self.resolver.resolve(identifier)
        event, invited = await self.store.toggle_invite(event_id, guest)
        if not invited:
            return EventOutcome(event=event, invited=False)

        await self._notify(guest.user_id, host.uuid, event, NotificationKind.INVITE)
        return EventOutcome(
            event=event, deliveries=[self._invitation(event, host, guest)], invited=True
        )

    async def set_guest(
        self, host: AuthenticatedUser, event_id: UUID, identifier: str, action: str
    ) -> EventOutcome:
        if action not in GUEST_ACTIONS:
            raise ValidationError({"action": "Must be add or remove!"})
        await self.store.get_event(event_id)
        guest = await self.resolver.resolve(identifier)

        if action == "remove":
            event = await self.store.remove_invite(event_id, guest)
            return EventOutcome(event=event, invited=False)

        if await self.store.is_invited(event_id, guest):
            return EventOutcome(event=await self.store.get_event(event_id), invited=True)
        event = await self.store.add_invite(event_id, guest)
        await self._notify(guest.user_id, host.uuid, event, NotificationKind.INVITE)
        return EventOutcome(
            event=event, deliveries=[self._invitation(event, host, guest)], invited=True
        )

    async def toggle_rsvp(
        self, user: AuthenticatedUser, event_id: UUID, headcount: Any
    ) -> EventOutcome:
        count = validate_headcount(headcount)
        result = await self.store.toggle_rsvp(event_id, user.uuid, count)
        event = result.event
        guest = guest_for_user(user)

        if not result.attending:
            template = MessageTemplates.rsvp_canceled(event.type, event.date)
            return EventOutcome(
                event=event,
                deliveries=[Delivery(guest, template, "rsvp_canceled")],
                attending=False,
            )

        confirmed = MessageTemplates.rsvp_confirmed(event.type, event.date, count)
        deliveries = [Delivery(guest, confirmed, "rsvp_confirmed")]
        if event.created_by != user.uuid:
            if self.notify_host_on_rsvp:
                host = await self._host(event)
                if host is not None:
                    template = MessageTemplates.host_notice(
                        user.full_name, event.type, event.date, count
                    )
                    deliveries.append(Delivery(host, template, "host_notice"))
            await self._notify(event.created_by, user.uuid, event, NotificationKind.RSVP)
        return EventOutcome(event=event, deliveries=deliveries, attending=True)

    async def delete_event(self, event_id: UUID) -> EventOutcome:
        event = await self.store.get_event(event_id)
        host = await self._host(event)
        event = await self.store.delete_event(event_id)
        if not event.is_current(self.today()):
            return EventOutcome(event=event)

        template = MessageTemplates.cancellation(
            event.type, event.date, event.time, host.name if host else None
        )
        deliveries = []
        for guest in event.invited_guests:
            deliveries.append(Delivery(guest, template, "cancellation"))
            await self._notify(guest.user_id, event.created_by, event, NotificationKind.CANCELLATION)
        return EventOutcome(event=event, deliveries=deliveries)

    async def send_reminders(self, event_id: UUID) -> EventOutcome:
        event = await self.store.get_event(event_id)
        template = MessageTemplates.reminder(event.type, event.date, event.time)
        deliveries = []
        for attendee in event.attendees:
            deliveries.append(Delivery(attendee.as_guest(), template, "reminder"))
            await self._notify(attendee.user_id, event.created_by, event, NotificationKind.REMINDER)
        return EventOutcome(event=event, deliveries=deliveries)

    async def add_memory(
        self,
        user: AuthenticatedUser,
        event_id: UUID,
        image_b64: str,
        memory_date: str,
        location: str,
    ) -> EventDTO:
        if self.blob_store is None:
            raise RuntimeError("No blob store configured for uploads")
        await self.store.get_event(event_id)
        data = decode_image(image_b64)
        image_url = await self.blob_store.upload(data)
        return await self.store.add_memory(
            event_id,
            image_url=image_url,
            date=memory_date,
            location=location,
            uploaded_by=user.uuid,
            uploaded_by_name=user.full_name,
        )

    def _invitation(self, event: EventDTO, host: AuthenticatedUser, guest: GuestRecord) -> Delivery:
        template = MessageTemplates.invitation(
            event.type,
            event.date,
            event.time,
            host.full_name,
            label=event.label,
            notes=event.description,
        )
        return Delivery(guest, template, "invitation")

    async def _host(self, event: EventDTO) -> GuestRecord | None:
        try:
            return await self.resolver.resolve(str(event.created_by))
        except ValidationError:
            logger.warning("Creator %s of event %s no longer exists", event.created_by, event.uuid)
            return None

    async def _notify(
        self, to: UUID | None, from_: UUID, event: EventDTO, kind: NotificationKind
    ) -> None:
        """Record an in-app notification for platform users; placeholders have no feed."""
        if to is None or to == from_:
            return
        try:
            await self.notifications.insert_notification(
                to=to,
                from_=from_,
                subject_type=event.type,
                subject_label=event.label,
                kind=kind,
                event_id=event.uuid,
            )
        except SQLAlchemyError:
            logger.exception("Failed to record %s notification for %s", kind.value, to)
