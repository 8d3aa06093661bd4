import datetime as dt
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dosomething.config.table_names import TableNames
from dosomething.models.base import Base, TimeStamp
from dosomething.models.channels import channel_enum


class Event(Base, TimeStamp):
    __tablename__ = TableNames.EVENTS.value

    type: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=True)
    # UI accent colour / tag
    label: Mapped[str] = mapped_column(String(50), nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rsvp_open: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_by: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    invited_guests: Mapped[list["InvitedGuest"]] = relationship(
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="InvitedGuest.created_at",
        lazy="selectin",
    )
    attendees: Mapped[list["Attendee"]] = relationship(
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="Attendee.created_at",
        lazy="selectin",
    )
    memories: Mapped[list["Memory"]] = relationship(
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="Memory.created_at",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Event {self.type} on {self.date}>"


class InvitedGuest(Base, TimeStamp):
    __tablename__ = TableNames.EVENT_INVITED_GUESTS.value
    __table_args__ = (UniqueConstraint("event_id", "guest_key", name="uq_invited_guest"),)

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event: Mapped["Event"] = relationship(back_populates="invited_guests")

    # user id for registered users, raw email/phone for placeholder guests
    guest_key: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=True)
    notify: Mapped[str] = mapped_column(channel_enum, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=True, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=True, index=True)
    avatar: Mapped[str] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<InvitedGuest {self.guest_key} event={self.event_id}>"


class Attendee(Base, TimeStamp):
    __tablename__ = TableNames.EVENT_ATTENDEES.value
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_attendee"),
        CheckConstraint("headcount >= 1", name="ck_attendee_headcount_positive"),
    )

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event: Mapped["Event"] = relationship(back_populates="attendees")

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    notify: Mapped[str] = mapped_column(channel_enum, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=True)
    headcount: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<Attendee {self.user_id} x{self.headcount} event={self.event_id}>"


class Memory(Base, TimeStamp):
    __tablename__ = TableNames.EVENT_MEMORIES.value

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event: Mapped["Event"] = relationship(back_populates="memories")

    date: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    uploaded_by: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
    )
    uploaded_by_name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Memory {self.image_url}>"
