from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from dosomething.config.table_names import TableNames
from dosomething.models.base import Base, TimeStamp
from dosomething.models.channels import channel_enum

DEFAULT_PROFILE_PIC = "https://letsdosomething.net/uploads/avatars/avatar_26.jpg"


class User(Base, TimeStamp):
    __tablename__ = TableNames.USERS.value

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    # digits only, see dosomething.validators.normalize_phone
    phone: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    notify: Mapped[str] = mapped_column(channel_enum, nullable=False)
    profile_pic: Mapped[str] = mapped_column(
        String(500), nullable=False, default=DEFAULT_PROFILE_PIC
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User {self.email}>"
