"""Bearer token authentication.

Routes only ever see an ``AuthenticatedUser``; how the token is checked
lives behind ``AuthResolver`` so tests can swap it out.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import partial
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from dosomething.config.database import async_session_manager
from dosomething.config.settings import settings
from dosomething.models.channels import Channel
from dosomething.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    uuid: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    notify: Channel
    profile_pic: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedUser":
        return cls(
            uuid=user.uuid,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            notify=Channel(user.notify),
            profile_pic=user.profile_pic,
        )


def create_access_token(user_id: UUID, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {"sub": str(user_id), "exp": expire},
        settings.secret_key,
        algorithm=settings.algorithm,
    )


class AuthResolver(ABC):
    @abstractmethod
    async def resolve(self, token: str) -> AuthenticatedUser | None:
        """The user the token belongs to, or None when it is not valid."""
        raise NotImplementedError


class JwtAuthResolver(AuthResolver):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def resolve(self, token: str) -> AuthenticatedUser | None:
        try:
            payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
            user_id = UUID(payload["sub"])
        except (JWTError, KeyError, ValueError):
            return None

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await session.get(User, user_id)
            if user is None or not user.is_active:
                return None
            return AuthenticatedUser.from_user(user)


def get_auth_resolver() -> AuthResolver:
    return JwtAuthResolver()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    resolver: AuthResolver = Depends(get_auth_resolver),
) -> AuthenticatedUser:
    user = await resolver.resolve(credentials.credentials) if credentials else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"auth": "Unauthorized"},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
