from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.schemas import EventResponse, SuccessMessage
from dosomething.notifications.channels import NotificationDispatcher, get_notification_dispatcher

router = APIRouter()

TOGGLE_RSVP_URL = "/events/rsvp"


class ToggleRsvpRequest(BaseModel):
    id: UUID
    # validated by the orchestrator so "abc" gets a readable message
    headcount: int | str | None = None


class ToggleRsvpResponse(BaseModel):
    updated: EventResponse
    attending: bool
    success: SuccessMessage


@router.put(TOGGLE_RSVP_URL, response_model=ToggleRsvpResponse)
async def toggle_rsvp(
    request: ToggleRsvpRequest,
    background_tasks: BackgroundTasks,
    user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: RsvpOrchestrator = Depends(get_rsvp_orchestrator),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> ToggleRsvpResponse:
    """RSVP to an event, or cancel the RSVP when already attending."""
    outcome = await orchestrator.toggle_rsvp(user, request.id, request.headcount)
    if outcome.deliveries:
        background_tasks.add_task(dispatcher.deliver_all, outcome.deliveries)
    message = "RSVP successful!" if outcome.attending else "RSVP canceled!"
    return ToggleRsvpResponse(
        updated=EventResponse.from_dto(outcome.event),
        attending=bool(outcome.attending),
        success=SuccessMessage(message=message),
    )
