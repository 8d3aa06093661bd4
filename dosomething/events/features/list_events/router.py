from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dosomething.events.dependencies import get_event_read_model, get_event_store
from dosomething.events.dtos import current_events, events_with_memories
from dosomething.events.repository.read_models import EventReadModel
from dosomething.events.repository.write_models import EventStore
from dosomething.events.schemas import EventResponse

router = APIRouter()

LIST_EVENTS_URL = "/events"


class EventListResponse(BaseModel):
    events: list[EventResponse]
    current: list[EventResponse]
    memories: list[EventResponse]


@router.get(LIST_EVENTS_URL, response_model=EventListResponse | EventResponse)
async def list_events(
    user: UUID | None = None,
    id: UUID | None = None,
    read_model: EventReadModel = Depends(get_event_read_model),
    store: EventStore = Depends(get_event_store),
):
    """
    Without parameters: every event. With ``user``: the events that user may see.
    With ``id``: that single event, after upgrading guests who have since registered.
    """
    if id is not None:
        event = await store.reconcile_guest_identities(id)
        return EventResponse.from_dto(event)

    if user is not None:
        events = await read_model.list_visible_for(user)
    else:
        events = await read_model.list_all()

    today = date.today()
    return EventListResponse(
        events=[EventResponse.from_dto(e) for e in events],
        current=[EventResponse.from_dto(e) for e in current_events(events, today)],
        memories=[EventResponse.from_dto(e) for e in events_with_memories(events)],
    )
