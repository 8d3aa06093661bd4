from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dosomething.config.table_names import TableNames
from dosomething.models.base import Base, TimeStamp, utcnow
from dosomething.models.channels import channel_enum
from dosomething.notifications.dtos import NotificationKind


class Notification(Base):
    __tablename__ = TableNames.NOTIFICATIONS.value
    __table_args__ = (
        UniqueConstraint(
            "user_to",
            "user_from",
            "notification_type",
            "subject_key",
            name="uq_notification_subject",
        ),
    )

    user_to: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_from: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
    )
    # subject event's type and label, copied so the feed survives event deletion
    event_type: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    label: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    # weak reference, no foreign key
    event_id: Mapped[UUID | None] = mapped_column(nullable=True)
    subject_key: Mapped[str] = mapped_column(String(255), nullable=False)
    notification_type: Mapped[str] = mapped_column(
        Enum(
            NotificationKind,
            name="notification_kind_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    opened: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<Notification {self.notification_type} to={self.user_to} from={self.user_from}>"


class DeliveryLog(Base, TimeStamp):
    __tablename__ = TableNames.DELIVERY_LOGS.value

    uuid: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    provider_message_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)

    channel: Mapped[str] = mapped_column(channel_enum, nullable=False)
    to_address: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    subject: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    body: Mapped[str | None] = mapped_column(Text, nullable=True)

    message_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    status: Mapped[str] = mapped_column(
        Enum("pending", "sent", "failed", name="delivery_status_enum"),
        default="pending",
        nullable=False,
        index=True,
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<DeliveryLog {self.channel} to={self.to_address} type={self.message_type} status={self.status}>"
