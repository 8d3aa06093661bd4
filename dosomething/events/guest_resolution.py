"""Turns whatever a host typed into the invite box into a guest record."""

from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dosomething.config.database import async_session_manager
from dosomething.events.dtos import GuestRecord, GuestRef, KnownGuest, UnregisteredGuest
from dosomething.exceptions import ValidationError
from dosomething.models.channels import Channel
from dosomething.models.user import User
from dosomething.validators import is_email, is_empty, is_phone, normalize_phone


def classify_identifier(identifier: str) -> GuestRef:
    if is_empty(identifier):
        raise ValidationError({"guest": "Must not be empty!"})
    identifier = identifier.strip()
    if is_email(identifier):
        return UnregisteredGuest(contact=identifier, channel=Channel.EMAIL)
    try:
        return KnownGuest(user_id=UUID(identifier))
    except ValueError:
        pass
    if is_phone(identifier):
        return UnregisteredGuest(contact=identifier, channel=Channel.SMS)
    raise ValidationError({"guest": "Must be a valid email, phone number or user id!"})


class GuestResolver(ABC):
    @abstractmethod
    async def resolve(self, identifier: str) -> GuestRecord:
        """
        Build the guest record for an email, phone number or user id.

        Contacts that belong to a registered user are upgraded to that
        user's profile; unknown contacts become placeholder records.
        Raises ValidationError for a malformed identifier or an unknown user id.
        """
        raise NotImplementedError

    @abstractmethod
    async def match_user(self, contact: str) -> GuestRecord | None:
        """Registered user owning ``contact``, if any."""
        raise NotImplementedError


class SqlGuestResolver(GuestResolver):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def resolve(self, identifier: str) -> GuestRecord:
        ref = classify_identifier(identifier)
        if isinstance(ref, KnownGuest):
            async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
                user = await session.get(User, ref.user_id)
                if user is None:
                    raise ValidationError({"guest": "User not found!"})
                return GuestRecord.from_user(user)

        match = await self.match_user(ref.contact)
        if match is not None:
            return match
        return GuestRecord.placeholder(ref.contact, ref.channel)

    async def match_user(self, contact: str) -> GuestRecord | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await find_user_by_contact(session, contact)
            return GuestRecord.from_user(user) if user else None


async def find_user_by_contact(session: AsyncSession, contact: str | None) -> User | None:
    """Registered user whose email (any case) or phone (any punctuation) is ``contact``."""
    if not contact:
        return None
    if is_email(contact):
        condition = func.lower(User.email) == contact.strip().lower()
    elif is_phone(contact):
        condition = User.phone == normalize_phone(contact)
    else:
        return None
    result = await session.execute(select(User).where(condition))
    return result.scalar_one_or_none()
