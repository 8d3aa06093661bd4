from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.schemas import SuccessMessage
from dosomething.notifications.channels import NotificationDispatcher, get_notification_dispatcher

router = APIRouter()

DELETE_EVENT_URL = "/events/{event_id}"


class DeleteEventResponse(BaseModel):
    success: SuccessMessage


@router.delete(DELETE_EVENT_URL, response_model=DeleteEventResponse)
async def delete_event(
    event_id: UUID,
    background_tasks: BackgroundTasks,
    user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: RsvpOrchestrator = Depends(get_rsvp_orchestrator),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> DeleteEventResponse:
    """Delete an event. Guests of an upcoming event are told it was canceled."""
    outcome = await orchestrator.delete_event(event_id)
    if outcome.deliveries:
        background_tasks.add_task(dispatcher.deliver_all, outcome.deliveries)
    return DeleteEventResponse(success=SuccessMessage(message="Event deleted successfully!"))
