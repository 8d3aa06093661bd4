from dataclasses import dataclass
from uuid import UUID

from dosomething.models.channels import Channel
from dosomething.models.user import User


@dataclass(frozen=True)
class UserDTO:
    uuid: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    notify: Channel
    profile_pic: str | None = None

    @classmethod
    def from_orm(cls, user: User) -> "UserDTO":
        return cls(
            uuid=user.uuid,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            notify=Channel(user.notify),
            profile_pic=user.profile_pic,
        )


@dataclass(frozen=True)
class RegisteredUserDTO:
    user: UserDTO
    token: str
