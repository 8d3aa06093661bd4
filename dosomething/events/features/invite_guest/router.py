from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.schemas import EventResponse, SuccessMessage
from dosomething.notifications.channels import NotificationDispatcher, get_notification_dispatcher

router = APIRouter()

INVITE_URL = "/events/invite"
FIND_AND_INVITE_URL = "/events/find-and-invite"


class InviteRequest(BaseModel):
    id: UUID
    guest: str = ""


class InviteResponse(BaseModel):
    updatedEvent: EventResponse
    invited: bool
    success: SuccessMessage


@router.post(INVITE_URL, response_model=InviteResponse)
@router.post(FIND_AND_INVITE_URL, response_model=InviteResponse)
async def find_and_invite(
    request: InviteRequest,
    background_tasks: BackgroundTasks,
    user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: RsvpOrchestrator = Depends(get_rsvp_orchestrator),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> InviteResponse:
    """
    Invite a guest by user id, email or phone number, or uninvite them
    when they are already on the list.
    """
    outcome = await orchestrator.find_and_invite(user, request.id, request.guest)
    if outcome.deliveries:
        background_tasks.add_task(dispatcher.deliver_all, outcome.deliveries)
    message = "Invite sent successfully!" if outcome.invited else "Guest uninvited!"
    return InviteResponse(
        updatedEvent=EventResponse.from_dto(outcome.event),
        invited=bool(outcome.invited),
        success=SuccessMessage(message=message),
    )
