"""Notification log - write side. Returns DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from dosomething.config.database import async_session_manager
from dosomething.exceptions import NotFoundError
from dosomething.models.base import utcnow
from dosomething.models.user import User
from dosomething.notifications.dtos import NotificationDTO, NotificationKind
from dosomething.notifications.repository.orm_models import Notification
from dosomething.realtime import RealtimeBus, get_realtime_bus

logger = logging.getLogger(__name__)


def subject_key(subject_type: str, subject_label: str, event_id: UUID | None) -> str:
    """Key identifying what a notification is about."""
    if event_id is not None:
        return str(event_id)
    return f"{subject_type}:{subject_label}"


class NotificationWriteModel(ABC):
    @abstractmethod
    async def insert_notification(
        self,
        to: UUID,
        from_: UUID,
        subject_type: str,
        subject_label: str,
        kind: NotificationKind,
        event_id: UUID | None = None,
    ) -> NotificationDTO:
        """
        Record that ``from_`` did ``kind`` to ``to`` about a subject.
        Re-inserting the same (to, from, kind, subject) replaces the previous
        entry and refreshes its timestamp.
        """
        raise NotImplementedError

    @abstractmethod
    async def mark_opened(self, notification_id: UUID, user_id: UUID) -> NotificationDTO:
        raise NotImplementedError


class SqlNotificationWriteModel(NotificationWriteModel):
    """SQL implementation of the notification log."""

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        realtime_bus: RealtimeBus | None = None,
    ) -> None:
        self._session_overwrite = session_overwrite
        self._realtime_bus = realtime_bus or get_realtime_bus()

    @staticmethod
    def _insert_for(session: AsyncSession):
        dialect = session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert
        if dialect == "sqlite":
            return sqlite.insert
        raise RuntimeError(f"Notification upsert is not supported on {dialect}")

    async def insert_notification(
        self,
        to: UUID,
        from_: UUID,
        subject_type: str,
        subject_label: str,
        kind: NotificationKind,
        event_id: UUID | None = None,
    ) -> NotificationDTO:
        key = subject_key(subject_type, subject_label, event_id)
        now = utcnow()

        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            insert = self._insert_for(session)
            stmt = insert(Notification).values(
                uuid=uuid4(),
                user_to=to,
                user_from=from_,
                event_type=subject_type,
                label=subject_label,
                event_id=event_id,
                subject_key=key,
                notification_type=kind,
                opened=False,
                created_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_to", "user_from", "notification_type", "subject_key"],
                set_={
                    "event_type": subject_type,
                    "label": subject_label,
                    "event_id": event_id,
                    "opened": False,
                    "created_at": now,
                },
            )
            await session.execute(stmt)

            result = await session.execute(
                select(Notification, User)
                .join(User, User.uuid == Notification.user_from)
                .where(
                    Notification.user_to == to,
                    Notification.user_from == from_,
                    Notification.notification_type == kind,
                    Notification.subject_key == key,
                )
                .execution_options(populate_existing=True)
            )
            notification, sender = result.one()
            dto = NotificationDTO.from_orm(notification, sender)

        await self._publish(dto)
        return dto

    async def mark_opened(self, notification_id: UUID, user_id: UUID) -> NotificationDTO:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            result = await session.execute(
                select(Notification, User)
                .join(User, User.uuid == Notification.user_from)
                .where(Notification.uuid == notification_id, Notification.user_to == user_id)
            )
            row = result.one_or_none()
            if row is None:
                raise NotFoundError("message", "Error, notification not found!")
            notification, sender = row
            notification.opened = True
            await session.flush()
            return NotificationDTO.from_orm(notification, sender)

    async def _publish(self, notification: NotificationDTO) -> None:
        try:
            await self._realtime_bus.emit(
                str(notification.user_to),
                "notification",
                {
                    "id": str(notification.uuid),
                    "type": notification.notification_type.value,
                    "from": str(notification.user_from.uuid),
                },
            )
        except Exception:
            logger.exception("Failed to publish notification %s", notification.uuid)
