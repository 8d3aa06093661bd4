from enum import Enum

from sqlalchemy import Enum as SqlEnum


class Channel(str, Enum):
    SMS = "sms"
    EMAIL = "email"


channel_enum = SqlEnum(Channel, name="channel_enum", values_callable=lambda x: [e.value for e in x])
