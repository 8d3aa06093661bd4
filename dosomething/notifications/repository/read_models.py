import abc
from uuid import UUID

from sqlalchemy import select

from dosomething.config.database import async_session_manager
from dosomething.models.user import User
from dosomething.notifications.dtos import NotificationDTO, NotificationKind
from dosomething.notifications.repository.orm_models import Notification


class NotificationReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_for(self, user_id: UUID, unopened_only: bool = False) -> list[NotificationDTO]:
        """
        Notification feed for a user, oldest first.
        ``newMessage`` entries are delivered over the realtime channel and
        never appear in the feed.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def latest_for(self, user_id: UUID) -> NotificationDTO | None:
        raise NotImplementedError


class SqlNotificationReadModel(NotificationReadModel):
    """SQL implementation of the notification feed."""

    def __init__(self, session_overwrite=None) -> None:
        self._session_overwrite = session_overwrite

    async def list_for(self, user_id: UUID, unopened_only: bool = False) -> list[NotificationDTO]:
        stmt = (
            select(Notification, User)
            .join(User, User.uuid == Notification.user_from)
            .where(
                Notification.user_to == user_id,
                Notification.notification_type != NotificationKind.NEW_MESSAGE,
            )
            .order_by(Notification.created_at)
        )
        if unopened_only:
            stmt = stmt.where(Notification.opened.is_(False))

        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            result = await session.execute(stmt)
            return [NotificationDTO.from_orm(n, sender) for n, sender in result.all()]

    async def latest_for(self, user_id: UUID) -> NotificationDTO | None:
        stmt = (
            select(Notification, User)
            .join(User, User.uuid == Notification.user_from)
            .where(Notification.user_to == user_id)
            .order_by(Notification.created_at.desc())
            .limit(1)
        )
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            result = await session.execute(stmt)
            row = result.first()
            if row is None:
                return None
            notification, sender = row
            return NotificationDTO.from_orm(notification, sender)
