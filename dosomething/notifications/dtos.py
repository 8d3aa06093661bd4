from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from dosomething.models.user import User
    from dosomething.notifications.repository.orm_models import Notification


class NotificationKind(str, Enum):
    INVITE = "invite"
    RSVP = "rsvp"
    NEW_MESSAGE = "newMessage"
    REMINDER = "reminder"
    CANCELLATION = "cancellation"


@dataclass(frozen=True)
class ActorDTO:
    """Public subset of a user shown next to a notification."""

    uuid: UUID
    first_name: str
    last_name: str
    profile_pic: str | None = None

    @classmethod
    def from_user(cls, user: "User") -> "ActorDTO":
        return cls(
            uuid=user.uuid,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_pic=user.profile_pic,
        )


@dataclass(frozen=True)
class NotificationDTO:
    uuid: UUID
    user_to: UUID
    user_from: ActorDTO
    event_type: str
    label: str
    notification_type: NotificationKind
    opened: bool
    created_at: datetime
    event_id: UUID | None = None

    @classmethod
    def from_orm(cls, notification: "Notification", sender: "User") -> "NotificationDTO":
        return cls(
            uuid=notification.uuid,
            user_to=notification.user_to,
            user_from=ActorDTO.from_user(sender),
            event_type=notification.event_type,
            label=notification.label,
            notification_type=NotificationKind(notification.notification_type),
            opened=notification.opened,
            created_at=notification.created_at,
            event_id=notification.event_id,
        )
