from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.exceptions import NotFoundError
from dosomething.notifications.dependencies import get_notification_read_model
from dosomething.notifications.repository.read_models import NotificationReadModel
from dosomething.notifications.schemas import NotificationResponse, SuccessMessage

router = APIRouter()

LATEST_NOTIFICATION_URL = "/notifications/latest"


class LatestNotificationResponse(BaseModel):
    latest: NotificationResponse
    success: SuccessMessage


@router.get(LATEST_NOTIFICATION_URL, response_model=LatestNotificationResponse)
async def latest_notification(
    user: AuthenticatedUser = Depends(get_current_user),
    read_model: NotificationReadModel = Depends(get_notification_read_model),
) -> LatestNotificationResponse:
    latest = await read_model.latest_for(user.uuid)
    if latest is None:
        raise NotFoundError("message", "Error, notification not found!")
    return LatestNotificationResponse(
        latest=NotificationResponse.from_dto(latest),
        success=SuccessMessage(message="Retrieved latest notification successfully!"),
    )
