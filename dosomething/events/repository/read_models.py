import abc
from functools import partial
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dosomething.config.database import async_session_manager
from dosomething.events.dtos import EventDTO, MemoryRecord
from dosomething.events.repository.orm_models import Event, InvitedGuest, Memory
from dosomething.exceptions import NotFoundError
from dosomething.models.user import User


class EventReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_visible_for(self, user_id: UUID) -> list[EventDTO]:
        """
        Events the user may see, soonest first: public events, events the
        user created and events inviting the user by id, email or phone.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def list_all(self) -> list[EventDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_memories(self) -> list[MemoryRecord]:
        """Every memory of every event, oldest upload first."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_memory(self, memory_id: UUID) -> MemoryRecord:
        raise NotImplementedError


class SqlEventReadModel(EventReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def list_visible_for(self, user_id: UUID) -> list[EventDTO]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await session.get(User, user_id)
            if user is None:
                raise NotFoundError("user", "User not found!")

            invited = select(InvitedGuest.event_id).where(
                or_(
                    InvitedGuest.user_id == user.uuid,
                    func.lower(InvitedGuest.email) == user.email.lower(),
                    InvitedGuest.phone == user.phone,
                )
            )
            result = await session.execute(
                select(Event)
                .where(
                    or_(
                        Event.is_public.is_(True),
                        Event.created_by == user.uuid,
                        Event.uuid.in_(invited),
                    )
                )
                .order_by(Event.date, Event.time)
            )
            return [EventDTO.from_orm(event) for event in result.scalars().all()]

    async def list_all(self) -> list[EventDTO]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(Event).order_by(Event.date, Event.time))
            return [EventDTO.from_orm(event) for event in result.scalars().all()]

    async def list_memories(self) -> list[MemoryRecord]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(Memory).order_by(Memory.created_at))
            return [MemoryRecord.from_orm(memory) for memory in result.scalars().all()]

    async def get_memory(self, memory_id: UUID) -> MemoryRecord:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            memory = await session.get(Memory, memory_id)
            if memory is None:
                raise NotFoundError("message", "Error, memory not found!")
            return MemoryRecord.from_orm(memory)
