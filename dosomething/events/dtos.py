from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING
from uuid import UUID

from dosomething.models.channels import Channel

if TYPE_CHECKING:
    from dosomething.events.repository.orm_models import Attendee, Event, InvitedGuest, Memory
    from dosomething.models.user import User
    from dosomething.notifications.templates import MessageTemplate


@dataclass(frozen=True)
class KnownGuest:
    """A guest who is a registered platform user."""

    user_id: UUID


@dataclass(frozen=True)
class UnregisteredGuest:
    """A guest known only by an email address or phone number."""

    contact: str
    channel: Channel


GuestRef = KnownGuest | UnregisteredGuest


@dataclass(frozen=True)
class GuestRecord:
    """One invitee of an event.

    ``guest_id`` is the platform user id for registered users and the raw
    email or phone number for placeholder guests.
    """

    guest_id: str
    notify: Channel
    user_id: UUID | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    avatar: str | None = None

    @property
    def ref(self) -> GuestRef:
        if self.user_id is not None:
            return KnownGuest(user_id=self.user_id)
        return UnregisteredGuest(contact=self.guest_id, channel=self.notify)

    @property
    def is_placeholder(self) -> bool:
        return self.user_id is None

    @classmethod
    def from_user(cls, user: "User") -> "GuestRecord":
        notify = Channel(user.notify)
        return cls(
            guest_id=str(user.uuid),
            notify=notify,
            user_id=user.uuid,
            name=user.full_name,
            email=user.email if notify == Channel.EMAIL else None,
            phone=user.phone if notify == Channel.SMS else None,
            avatar=user.profile_pic,
        )

    @classmethod
    def placeholder(cls, contact: str, channel: Channel) -> "GuestRecord":
        return cls(
            guest_id=contact,
            notify=channel,
            email=contact if channel == Channel.EMAIL else None,
            phone=contact if channel == Channel.SMS else None,
        )

    @classmethod
    def from_orm(cls, guest: "InvitedGuest") -> "GuestRecord":
        return cls(
            guest_id=guest.guest_key,
            notify=Channel(guest.notify),
            user_id=guest.user_id,
            name=guest.name,
            email=guest.email,
            phone=guest.phone,
            avatar=guest.avatar,
        )


@dataclass(frozen=True)
class AttendeeRecord:
    """A guest who confirmed attendance, with the contact snapshot taken at RSVP time."""

    user_id: UUID
    name: str
    notify: Channel
    headcount: int = 1
    email: str | None = None
    phone: str | None = None

    @classmethod
    def from_user(cls, user: "User", headcount: int) -> "AttendeeRecord":
        notify = Channel(user.notify)
        return cls(
            user_id=user.uuid,
            name=user.full_name,
            notify=notify,
            headcount=headcount,
            email=user.email if notify == Channel.EMAIL else None,
            phone=user.phone if notify == Channel.SMS else None,
        )

    @classmethod
    def from_orm(cls, attendee: "Attendee") -> "AttendeeRecord":
        return cls(
            user_id=attendee.user_id,
            name=attendee.name,
            notify=Channel(attendee.notify),
            headcount=attendee.headcount,
            email=attendee.email,
            phone=attendee.phone,
        )

    def as_guest(self) -> GuestRecord:
        return GuestRecord(
            guest_id=str(self.user_id),
            notify=self.notify,
            user_id=self.user_id,
            name=self.name,
            email=self.email,
            phone=self.phone,
        )


@dataclass(frozen=True)
class MemoryRecord:
    """A photo attached to an event."""

    uuid: UUID
    date: str
    location: str
    image_url: str
    uploaded_by: UUID
    uploaded_by_name: str
    event_id: UUID | None = None

    @classmethod
    def from_orm(cls, memory: "Memory") -> "MemoryRecord":
        return cls(
            uuid=memory.uuid,
            date=memory.date,
            location=memory.location,
            image_url=memory.image_url,
            uploaded_by=memory.uploaded_by,
            uploaded_by_name=memory.uploaded_by_name,
            event_id=memory.event_id,
        )


@dataclass(frozen=True)
class EventDataDTO:
    """Editable fields of an event."""

    type: str
    date: date
    time: str
    location: str
    label: str
    description: str | None = None
    is_public: bool = False
    rsvp_open: bool = True


@dataclass(frozen=True)
class EventDTO:
    uuid: UUID
    type: str
    date: date
    time: str
    location: str
    label: str
    created_by: UUID
    description: str | None = None
    is_public: bool = False
    rsvp_open: bool = True
    invited_guests: list[GuestRecord] = field(default_factory=list)
    attendees: list[AttendeeRecord] = field(default_factory=list)
    pics: list[MemoryRecord] = field(default_factory=list)
    created_at: datetime | None = None

    @classmethod
    def from_orm(cls, event: "Event") -> "EventDTO":
        return cls(
            uuid=event.uuid,
            type=event.type,
            date=event.date,
            time=event.time,
            location=event.location,
            label=event.label,
            created_by=event.created_by,
            description=event.description,
            is_public=event.is_public,
            rsvp_open=event.rsvp_open,
            invited_guests=[GuestRecord.from_orm(g) for g in event.invited_guests],
            attendees=[AttendeeRecord.from_orm(a) for a in event.attendees],
            pics=[MemoryRecord.from_orm(m) for m in event.memories],
            created_at=event.created_at,
        )

    def is_attending(self, user_id: UUID) -> bool:
        return any(a.user_id == user_id for a in self.attendees)

    def is_current(self, today: date) -> bool:
        return self.date >= today


@dataclass(frozen=True)
class RsvpToggleResult:
    event: EventDTO
    attending: bool


@dataclass(frozen=True)
class Delivery:
    """One outbound message waiting to be handed to the channel adapter."""

    guest: GuestRecord
    template: "MessageTemplate"
    message_type: str


@dataclass(frozen=True)
class EventOutcome:
    """Committed result of an orchestrator operation plus the messages it owes."""

    event: EventDTO
    deliveries: list[Delivery] = field(default_factory=list)
    attending: bool | None = None
    invited: bool | None = None


def current_events(events: list[EventDTO], today: date) -> list[EventDTO]:
    """Events happening today or later, regardless of year."""
    return [event for event in events if event.is_current(today)]


def events_with_memories(events: list[EventDTO]) -> list[EventDTO]:
    return [event for event in events if event.pics]
