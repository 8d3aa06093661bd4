from typing import Literal
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.schemas import EventResponse, SuccessMessage
from dosomething.notifications.channels import NotificationDispatcher, get_notification_dispatcher

router = APIRouter()

SET_GUEST_URL = "/events/guests"


class SetGuestRequest(BaseModel):
    id: UUID
    guest: str = ""
    action: Literal["add", "remove"]


class SetGuestResponse(BaseModel):
    updated: EventResponse
    success: SuccessMessage


@router.put(SET_GUEST_URL, response_model=SetGuestResponse)
async def set_guest(
    request: SetGuestRequest,
    background_tasks: BackgroundTasks,
    user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: RsvpOrchestrator = Depends(get_rsvp_orchestrator),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> SetGuestResponse:
    outcome = await orchestrator.set_guest(user, request.id, request.guest, request.action)
    if outcome.deliveries:
        background_tasks.add_task(dispatcher.deliver_all, outcome.deliveries)
    message = "Guest added!" if request.action == "add" else "Guest removed!"
    return SetGuestResponse(
        updated=EventResponse.from_dto(outcome.event),
        success=SuccessMessage(message=message),
    )
