"""Write model for user registration.

Registering is what turns a placeholder guest (known only by email or
phone) into a platform user; the next read of an event upgrades them.
"""

from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dosomething.auth import create_access_token
from dosomething.config.database import async_session_manager
from dosomething.exceptions import ConflictError
from dosomething.models.channels import Channel
from dosomething.models.user import DEFAULT_PROFILE_PIC, User
from dosomething.users.dtos import RegisteredUserDTO, UserDTO
from dosomething.validators import normalize_phone, validate_registration


class RegisterUserWriteModel(ABC):
    @abstractmethod
    async def register_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        notify: str,
        profile_pic: str | None = None,
    ) -> RegisteredUserDTO:
        """Create a user and issue an access token.

        Raises:
            ValidationError: a field is missing or malformed
            ConflictError: the email or phone number is already registered
        """
        raise NotImplementedError


class SqlRegisterUserWriteModel(RegisterUserWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def register_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        notify: str,
        profile_pic: str | None = None,
    ) -> RegisteredUserDTO:
        validate_registration(
            {
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "phone": phone,
                "notify": notify,
            }
        )
        email = email.strip().lower()
        phone = normalize_phone(phone)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            await self._check_available(session, email, phone)
            user = User(
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                email=email,
                phone=phone,
                notify=Channel(notify),
                profile_pic=profile_pic or DEFAULT_PROFILE_PIC,
                hashed_password=None,
            )
            try:
                async with session.begin_nested():
                    session.add(user)
            except IntegrityError:
                raise ConflictError({"email": "Email or phone number already in use!"})
            return RegisteredUserDTO(
                user=UserDTO.from_orm(user),
                token=create_access_token(user.uuid),
            )

    async def _check_available(self, session: AsyncSession, email: str, phone: str) -> None:
        errors = {}
        result = await session.execute(select(User.uuid).where(func.lower(User.email) == email))
        if result.first() is not None:
            errors["email"] = "Email already in use!"
        result = await session.execute(select(User.uuid).where(User.phone == phone))
        if result.first() is not None:
            errors["phone"] = "Phone number already in use!"
        if errors:
            raise ConflictError(errors)
