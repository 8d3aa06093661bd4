"""Import every ORM module so ``BaseModel.metadata`` knows all tables."""

from dosomething.events.repository.orm_models import Attendee, Event, InvitedGuest, Memory
from dosomething.models.base import BaseModel
from dosomething.models.user import User
from dosomething.notifications.repository.orm_models import DeliveryLog, Notification

metadata = BaseModel.metadata

__all__ = [
    "metadata",
    "Attendee",
    "DeliveryLog",
    "Event",
    "InvitedGuest",
    "Memory",
    "Notification",
    "User",
]
