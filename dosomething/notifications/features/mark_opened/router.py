from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.notifications.dependencies import get_notification_write_model
from dosomething.notifications.repository.write_models import NotificationWriteModel
from dosomething.notifications.schemas import NotificationResponse, SuccessMessage

router = APIRouter()

MARK_OPENED_URL = "/notifications/{notification_id}/opened"


class MarkOpenedResponse(BaseModel):
    notification: NotificationResponse
    success: SuccessMessage


@router.put(MARK_OPENED_URL, response_model=MarkOpenedResponse)
async def mark_opened(
    notification_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    write_model: NotificationWriteModel = Depends(get_notification_write_model),
) -> MarkOpenedResponse:
    notification = await write_model.mark_opened(notification_id, user.uuid)
    return MarkOpenedResponse(
        notification=NotificationResponse.from_dto(notification),
        success=SuccessMessage(message="Notification opened!"),
    )
