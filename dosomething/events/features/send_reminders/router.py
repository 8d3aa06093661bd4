from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.schemas import SuccessMessage
from dosomething.notifications.channels import NotificationDispatcher, get_notification_dispatcher

router = APIRouter()

SEND_REMINDERS_URL = "/events/reminders"


class SendRemindersRequest(BaseModel):
    id: UUID


class SendRemindersResponse(BaseModel):
    success: SuccessMessage


@router.post(SEND_REMINDERS_URL, response_model=SendRemindersResponse)
async def send_reminders(
    request: SendRemindersRequest,
    background_tasks: BackgroundTasks,
    user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: RsvpOrchestrator = Depends(get_rsvp_orchestrator),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> SendRemindersResponse:
    outcome = await orchestrator.send_reminders(request.id)
    if outcome.deliveries:
        background_tasks.add_task(dispatcher.deliver_all, outcome.deliveries)
    return SendRemindersResponse(success=SuccessMessage(message="Reminders sent!"))
