from datetime import datetime

from pydantic import BaseModel

from dosomething.notifications.dtos import NotificationDTO


class ActorResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    profile_pic: str | None = None


class NotificationResponse(BaseModel):
    id: str
    user_to: str
    user_from: ActorResponse
    event_id: str | None = None
    event_type: str
    label: str
    notification_type: str
    opened: bool
    created_at: datetime

    @classmethod
    def from_dto(cls, notification: NotificationDTO) -> "NotificationResponse":
        sender = notification.user_from
        return cls(
            id=str(notification.uuid),
            user_to=str(notification.user_to),
            user_from=ActorResponse(
                id=str(sender.uuid),
                first_name=sender.first_name,
                last_name=sender.last_name,
                profile_pic=sender.profile_pic,
            ),
            event_id=str(notification.event_id) if notification.event_id else None,
            event_type=notification.event_type,
            label=notification.label,
            notification_type=notification.notification_type.value,
            opened=notification.opened,
            created_at=notification.created_at,
        )


class SuccessMessage(BaseModel):
    message: str
