"""Event aggregate - write side.

An event owns its invited guests, attendees and memories. Every method
runs in one session and returns a fresh EventDTO snapshot.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict
from functools import partial
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dosomething.config.database import async_session_manager
from dosomething.events.dtos import (
    AttendeeRecord,
    EventDataDTO,
    EventDTO,
    GuestRecord,
    MemoryRecord,
    RsvpToggleResult,
)
from dosomething.events.guest_resolution import find_user_by_contact
from dosomething.events.repository.orm_models import Attendee, Event, InvitedGuest, Memory
from dosomething.exceptions import NotFoundError, ValidationError
from dosomething.models.channels import Channel
from dosomething.models.user import User
from dosomething.validators import is_empty, normalize_phone


def invite_matches(row: InvitedGuest, guest: GuestRecord) -> bool:
    """Same person by identifier, user id, email or phone."""
    if row.guest_key == guest.guest_id:
        return True
    if guest.user_id is not None and row.user_id == guest.user_id:
        return True
    if guest.email and row.email and row.email.strip().lower() == guest.email.strip().lower():
        return True
    if guest.phone and row.phone and normalize_phone(row.phone) == normalize_phone(guest.phone):
        return True
    return False


def _with_all_contacts(user: User) -> GuestRecord:
    """Guest record carrying every contact of ``user`` for invitation checks."""
    return GuestRecord(
        guest_id=str(user.uuid),
        notify=Channel(user.notify),
        user_id=user.uuid,
        email=user.email,
        phone=user.phone,
    )


class EventStore(ABC):
    @abstractmethod
    async def create_event(self, data: EventDataDTO, created_by: UUID) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def get_event(self, event_id: UUID) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_event(self, event_id: UUID, data: EventDataDTO) -> EventDTO:
        """Replace every editable field. Guest, attendee and memory lists are untouched."""
        raise NotImplementedError

    @abstractmethod
    async def delete_event(self, event_id: UUID) -> EventDTO:
        """Delete the event and its children, returning what it looked like."""
        raise NotImplementedError

    @abstractmethod
    async def is_invited(self, event_id: UUID, guest: GuestRecord) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def add_invite(self, event_id: UUID, guest: GuestRecord) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def remove_invite(self, event_id: UUID, guest: GuestRecord) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def toggle_invite(self, event_id: UUID, guest: GuestRecord) -> tuple[EventDTO, bool]:
        """Invite the guest if absent, uninvite if present. Returns (event, invited)."""
        raise NotImplementedError

    @abstractmethod
    async def add_attendee(
        self, event_id: UUID, attendee: AttendeeRecord
    ) -> tuple[EventDTO, bool]:
        """Returns (event, added); ``added`` is False when the user already attends."""
        raise NotImplementedError

    @abstractmethod
    async def remove_attendee(self, event_id: UUID, user_id: UUID) -> tuple[EventDTO, bool]:
        raise NotImplementedError

    @abstractmethod
    async def toggle_rsvp(self, event_id: UUID, user_id: UUID, headcount: int) -> RsvpToggleResult:
        raise NotImplementedError

    @abstractmethod
    async def add_memory(
        self,
        event_id: UUID,
        image_url: str,
        date: str,
        location: str,
        uploaded_by: UUID,
        uploaded_by_name: str,
    ) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_memory(
        self, memory_id: UUID, date: str | None = None, location: str | None = None
    ) -> MemoryRecord:
        """Change the date or location of a memory. ``None`` leaves a field as is."""
        raise NotImplementedError

    @abstractmethod
    async def delete_memory(self, memory_id: UUID) -> MemoryRecord:
        """Forget a memory, returning what it looked like."""
        raise NotImplementedError

    @abstractmethod
    async def reconcile_guest_identities(self, event_id: UUID) -> EventDTO:
        """Upgrade placeholder guests whose contact now belongs to a registered user."""
        raise NotImplementedError


class SqlEventStore(EventStore):
    """SQL implementation of the event aggregate."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def _load(self, session: AsyncSession, event_id: UUID) -> Event:
        result = await session.execute(
            select(Event).where(Event.uuid == event_id).execution_options(populate_existing=True)
        )
        event = result.scalar_one_or_none()
        if event is None:
            raise NotFoundError("event", "Event not found!")
        return event

    async def _snapshot(self, session: AsyncSession, event_id: UUID) -> EventDTO:
        await session.flush()
        return EventDTO.from_orm(await self._load(session, event_id))

    async def create_event(self, data: EventDataDTO, created_by: UUID) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = Event(**asdict(data), created_by=created_by)
            session.add(event)
            await session.flush()
            return await self._snapshot(session, event.uuid)

    async def get_event(self, event_id: UUID) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            return EventDTO.from_orm(await self._load(session, event_id))

    async def update_event(self, event_id: UUID, data: EventDataDTO) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._load(session, event_id)
            for key, value in asdict(data).items():
                setattr(event, key, value)
            return await self._snapshot(session, event_id)

    async def delete_event(self, event_id: UUID) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._load(session, event_id)
            snapshot = EventDTO.from_orm(event)
            await session.delete(event)
            await session.flush()
            return snapshot

    async def is_invited(self, event_id: UUID, guest: GuestRecord) -> bool:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._load(session, event_id)
            match = await self._matchable(session, guest)
            return any(invite_matches(row, match) for row in event.invited_guests)

    async def add_invite(self, event_id: UUID, guest: GuestRecord) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._load(session, event_id)
            match = await self._matchable(session, guest)
            if not any(invite_matches(row, match) for row in event.invited_guests):
                await self._insert_invite(session, event_id, guest)
            return await self._snapshot(session, event_id)

    async def remove_invite(self, event_id: UUID, guest: GuestRecord) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._load(session, event_id)
            await self._delete_invites(session, event, await self._matchable(session, guest))
            return await self._snapshot(session, event_id)

    async def toggle_invite(self, event_id: UUID, guest: GuestRecord) -> tuple[EventDTO, bool]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._load(session, event_id)
            match = await self._matchable(session, guest)
            if any(invite_matches(row, match) for row in event.invited_guests):
                await self._delete_invites(session, event, match)
                invited = False
            else:
                await self._insert_invite(session, event_id, guest)
                invited = True
            return await self._snapshot(session, event_id), invited

    async def add_attendee(
        self, event_id: UUID, attendee: AttendeeRecord
    ) -> tuple[EventDTO, bool]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._load(session, event_id)
            added = False
            if not any(a.user_id == attendee.user_id for a in event.attendees):
                added = await self._insert_attendee(session, event_id, attendee)
            return await self._snapshot(session, event_id), added

    async def remove_attendee(self, event_id: UUID, user_id: UUID) -> tuple[EventDTO, bool]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            await self._load(session, event_id)
            removed = await self._delete_attendee(session, event_id, user_id)
            return await self._snapshot(session, event_id), removed

    async def toggle_rsvp(self, event_id: UUID, user_id: UUID, headcount: int) -> RsvpToggleResult:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await session.get(User, user_id)
            if user is None:
                raise NotFoundError("user", "User not found!")
            event = await self._load(session, event_id)

            if any(a.user_id == user_id for a in event.attendees):
                await self._delete_attendee(session, event_id, user_id)
                return RsvpToggleResult(event=await self._snapshot(session, event_id), attending=False)

            match = _with_all_contacts(user)
            invited = event.created_by == user_id or any(
                invite_matches(row, match) for row in event.invited_guests
            )
            if not event.is_public and not invited:
                raise ValidationError({"rsvp": "You are not invited to this event!"})
            if not event.rsvp_open:
                raise ValidationError({"rsvp": "RSVPs are closed for this event!"})

            await self._insert_attendee(session, event_id, AttendeeRecord.from_user(user, headcount))
            return RsvpToggleResult(event=await self._snapshot(session, event_id), attending=True)

    async def add_memory(
        self,
        event_id: UUID,
        image_url: str,
        date: str,
        location: str,
        uploaded_by: UUID,
        uploaded_by_name: str,
    ) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            await self._load(session, event_id)
            session.add(
                Memory(
                    event_id=event_id,
                    image_url=image_url,
                    date=date,
                    location=location,
                    uploaded_by=uploaded_by,
                    uploaded_by_name=uploaded_by_name,
                )
            )
            return await self._snapshot(session, event_id)

    async def update_memory(
        self, memory_id: UUID, date: str | None = None, location: str | None = None
    ) -> MemoryRecord:
        errors = {
            field: "Must not be empty!"
            for field, value in (("date", date), ("location", location))
            if value is not None and is_empty(value)
        }
        if errors:
            raise ValidationError(errors)
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            memory = await self._load_memory(session, memory_id)
            if date is not None:
                memory.date = date.strip()
            if location is not None:
                memory.location = location.strip()
            await session.flush()
            return MemoryRecord.from_orm(memory)

    async def delete_memory(self, memory_id: UUID) -> MemoryRecord:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            memory = await self._load_memory(session, memory_id)
            snapshot = MemoryRecord.from_orm(memory)
            await session.delete(memory)
            await session.flush()
            return snapshot

    async def reconcile_guest_identities(self, event_id: UUID) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._load(session, event_id)
            for row in list(event.invited_guests):
                if row.user_id is not None:
                    continue
                user = await find_user_by_contact(session, row.email or row.phone or row.guest_key)
                if user is None:
                    continue

                registered = GuestRecord.from_user(user)
                if any(other.guest_key == registered.guest_id for other in event.invited_guests):
                    # already invited under the user id as well
                    await session.delete(row)
                else:
                    row.guest_key = registered.guest_id
                    row.user_id = registered.user_id
                    row.name = registered.name
                    row.avatar = registered.avatar
                    row.notify = registered.notify
                    row.email = registered.email
                    row.phone = registered.phone
                await session.flush()
            return await self._snapshot(session, event_id)

    async def _load_memory(self, session: AsyncSession, memory_id: UUID) -> Memory:
        memory = await session.get(Memory, memory_id)
        if memory is None:
            raise NotFoundError("message", "Error, memory not found!")
        return memory

    async def _matchable(self, session: AsyncSession, guest: GuestRecord) -> GuestRecord:
        """Registered guests are matched by every contact on their profile."""
        if guest.user_id is None:
            return guest
        user = await session.get(User, guest.user_id)
        return _with_all_contacts(user) if user is not None else guest

    async def _insert_invite(self, session: AsyncSession, event_id: UUID, guest: GuestRecord) -> bool:
        try:
            async with session.begin_nested():
                session.add(
                    InvitedGuest(
                        event_id=event_id,
                        guest_key=guest.guest_id,
                        user_id=guest.user_id,
                        name=guest.name,
                        notify=guest.notify,
                        email=guest.email.strip() if guest.email else None,
                        phone=normalize_phone(guest.phone) if guest.phone else None,
                        avatar=guest.avatar,
                    )
                )
        except IntegrityError:
            # invited concurrently by another request
            return False
        return True

    async def _delete_invites(self, session: AsyncSession, event: Event, guest: GuestRecord) -> None:
        rows = [row for row in event.invited_guests if invite_matches(row, guest)]
        user_ids = {row.user_id for row in rows if row.user_id is not None}
        if guest.user_id is not None:
            user_ids.add(guest.user_id)
        for row in rows:
            await session.delete(row)
        if not event.is_public:
            # attendees of a private event must stay invited
            for attendee in event.attendees:
                if attendee.user_id in user_ids:
                    await session.delete(attendee)

    async def _delete_attendee(self, session: AsyncSession, event_id: UUID, user_id: UUID) -> bool:
        # a bulk delete tolerates a concurrent request removing the row first
        result = await session.execute(
            delete(Attendee).where(Attendee.event_id == event_id, Attendee.user_id == user_id)
        )
        return result.rowcount > 0

    async def _insert_attendee(
        self, session: AsyncSession, event_id: UUID, attendee: AttendeeRecord
    ) -> bool:
        try:
            async with session.begin_nested():
                session.add(
                    Attendee(
                        event_id=event_id,
                        user_id=attendee.user_id,
                        name=attendee.name,
                        notify=attendee.notify,
                        email=attendee.email,
                        phone=attendee.phone,
                        headcount=attendee.headcount,
                    )
                )
        except IntegrityError:
            # the same user RSVP'd concurrently
            return False
        return True
