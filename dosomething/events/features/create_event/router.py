from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.schemas import EventFields, EventResponse, SuccessMessage
from dosomething.notifications.channels import NotificationDispatcher, get_notification_dispatcher

router = APIRouter()

CREATE_EVENT_URL = "/events"


class CreateEventRequest(EventFields):
    invited_guests: list[str] = []


class CreateEventResponse(BaseModel):
    event: EventResponse
    success: SuccessMessage


@router.post(CREATE_EVENT_URL, response_model=CreateEventResponse)
async def create_event(
    request: CreateEventRequest,
    background_tasks: BackgroundTasks,
    user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: RsvpOrchestrator = Depends(get_rsvp_orchestrator),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> CreateEventResponse:
    """
    Create an event and invite the initial guests.

    Guests may be given as user ids, email addresses or phone numbers.
    Invitations are sent after the response.
    """
    outcome = await orchestrator.create_event(
        host=user,
        data=request.model_dump(exclude={"invited_guests"}),
        guest_identifiers=request.invited_guests,
    )
    if outcome.deliveries:
        background_tasks.add_task(dispatcher.deliver_all, outcome.deliveries)
    return CreateEventResponse(
        event=EventResponse.from_dto(outcome.event),
        success=SuccessMessage(message="Event created successfully!"),
    )
