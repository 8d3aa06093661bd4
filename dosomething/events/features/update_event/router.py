from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.schemas import EventFields, EventResponse, SuccessMessage
from dosomething.exceptions import ValidationError

router = APIRouter()

UPDATE_EVENT_URL = "/events/update"


class UpdateEventRequest(EventFields):
    id: UUID


class UpdateEventResponse(BaseModel):
    updated: EventResponse
    success: SuccessMessage


@router.put(UPDATE_EVENT_URL, response_model=UpdateEventResponse)
async def update_event(
    request: UpdateEventRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: RsvpOrchestrator = Depends(get_rsvp_orchestrator),
) -> UpdateEventResponse:
    try:
        updated = await orchestrator.update_event(
            request.id, request.model_dump(exclude={"id"})
        )
    except SQLAlchemyError:
        raise ValidationError({"event": "Error updating event!"})
    return UpdateEventResponse(
        updated=EventResponse.from_dto(updated),
        success=SuccessMessage(message="Event updated successfully!"),
    )
