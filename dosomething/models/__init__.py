from .base import Base, BaseModel, TimeStamp
from .channels import Channel
from .user import User

__all__ = [
    "Base",
    "BaseModel",
    "TimeStamp",
    "Channel",
    "User",
]
