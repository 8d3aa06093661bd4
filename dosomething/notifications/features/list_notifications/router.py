from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.notifications.dependencies import get_notification_read_model
from dosomething.notifications.repository.read_models import NotificationReadModel
from dosomething.notifications.schemas import NotificationResponse, SuccessMessage

router = APIRouter()

LIST_NOTIFICATIONS_URL = "/notifications"


class NotificationListResponse(BaseModel):
    myNotifications: list[NotificationResponse]
    success: SuccessMessage


@router.get(LIST_NOTIFICATIONS_URL, response_model=NotificationListResponse)
async def list_notifications(
    unopened: bool = False,
    user: AuthenticatedUser = Depends(get_current_user),
    read_model: NotificationReadModel = Depends(get_notification_read_model),
) -> NotificationListResponse:
    notifications = await read_model.list_for(user.uuid, unopened_only=unopened)
    return NotificationListResponse(
        myNotifications=[NotificationResponse.from_dto(n) for n in notifications],
        success=SuccessMessage(message="Notifications retrieved successfully!"),
    )
