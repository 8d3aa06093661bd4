"""JSON shapes of events as the web client expects them."""

import datetime as dt

from pydantic import BaseModel

from dosomething.events.dtos import AttendeeRecord, EventDTO, GuestRecord, MemoryRecord


class GuestResponse(BaseModel):
    id: str
    notify: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    avatar: str | None = None
    registered: bool

    @classmethod
    def from_dto(cls, guest: GuestRecord) -> "GuestResponse":
        return cls(
            id=guest.guest_id,
            notify=guest.notify.value,
            name=guest.name,
            email=guest.email,
            phone=guest.phone,
            avatar=guest.avatar,
            registered=not guest.is_placeholder,
        )


class AttendeeResponse(BaseModel):
    id: str
    name: str
    notify: str
    headcount: int
    email: str | None = None
    phone: str | None = None

    @classmethod
    def from_dto(cls, attendee: AttendeeRecord) -> "AttendeeResponse":
        return cls(
            id=str(attendee.user_id),
            name=attendee.name,
            notify=attendee.notify.value,
            headcount=attendee.headcount,
            email=attendee.email,
            phone=attendee.phone,
        )


class MemoryResponse(BaseModel):
    id: str
    event_id: str | None = None
    date: str
    location: str
    image: str
    uploaded_by: str
    uploaded_by_name: str

    @classmethod
    def from_dto(cls, memory: MemoryRecord) -> "MemoryResponse":
        return cls(
            id=str(memory.uuid),
            event_id=str(memory.event_id) if memory.event_id else None,
            date=memory.date,
            location=memory.location,
            image=memory.image_url,
            uploaded_by=str(memory.uploaded_by),
            uploaded_by_name=memory.uploaded_by_name,
        )


class EventResponse(BaseModel):
    id: str
    type: str
    date: dt.date
    time: str
    location: str
    label: str
    description: str | None = None
    is_public: bool
    rsvp_open: bool
    created_by: str
    created_at: dt.datetime | None = None
    invited_guests: list[GuestResponse]
    attendees: list[AttendeeResponse]
    pics: list[MemoryResponse]

    @classmethod
    def from_dto(cls, event: EventDTO) -> "EventResponse":
        return cls(
            id=str(event.uuid),
            type=event.type,
            date=event.date,
            time=event.time,
            location=event.location,
            label=event.label,
            description=event.description,
            is_public=event.is_public,
            rsvp_open=event.rsvp_open,
            created_by=str(event.created_by),
            created_at=event.created_at,
            invited_guests=[GuestResponse.from_dto(g) for g in event.invited_guests],
            attendees=[AttendeeResponse.from_dto(a) for a in event.attendees],
            pics=[MemoryResponse.from_dto(m) for m in event.pics],
        )


class SuccessMessage(BaseModel):
    message: str


class EventFields(BaseModel):
    """Editable event fields as sent by the client, validated by the orchestrator."""

    type: str = ""
    date: str = ""
    time: str = ""
    location: str = ""
    label: str = ""
    description: str | None = None
    is_public: bool = False
    rsvp_open: bool = True
