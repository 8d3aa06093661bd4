from abc import ABC, abstractmethod
from uuid import UUID, uuid4

from dosomething.config.database import async_session_manager
from dosomething.models.channels import Channel
from dosomething.notifications.repository.orm_models import DeliveryLog


class DeliveryLogger(ABC):
    """Abstract base class for logging outbound SMS and email attempts."""

    @abstractmethod
    async def log_attempt(
        self,
        channel: Channel,
        to_address: str,
        subject: str,
        body: str,
        message_type: str,
    ) -> UUID:
        """
        Log a delivery attempt before sending.

        Returns:
            UUID of the created log entry
        """

    @abstractmethod
    async def log_success(self, log_uuid: UUID, provider_message_id: str | None) -> None:
        """Mark the entry as sent and keep the provider's message id."""

    @abstractmethod
    async def log_failure(self, log_uuid: UUID, error_message: str) -> None:
        """Mark the entry as failed with the provider's error."""


class SQLDeliveryLogger(DeliveryLogger):
    """SQL database implementation of DeliveryLogger."""

    async def log_attempt(
        self,
        channel: Channel,
        to_address: str,
        subject: str,
        body: str,
        message_type: str,
    ) -> UUID:
        delivery_log = DeliveryLog(
            channel=channel,
            to_address=to_address,
            subject=subject,
            body=body,
            message_type=message_type,
            status="pending",
        )

        async with async_session_manager() as session:
            session.add(delivery_log)
            await session.flush()
            return delivery_log.uuid

    async def log_success(self, log_uuid: UUID, provider_message_id: str | None) -> None:
        async with async_session_manager() as session:
            delivery_log = await session.get(DeliveryLog, log_uuid)
            if delivery_log:
                delivery_log.provider_message_id = provider_message_id
                delivery_log.status = "sent"

    async def log_failure(self, log_uuid: UUID, error_message: str) -> None:
        async with async_session_manager() as session:
            delivery_log = await session.get(DeliveryLog, log_uuid)
            if delivery_log:
                delivery_log.status = "failed"
                delivery_log.error_message = error_message


class NoOpDeliveryLogger(DeliveryLogger):
    """No-op implementation for testing or when logging is disabled."""

    async def log_attempt(
        self,
        channel: Channel,
        to_address: str,
        subject: str,
        body: str,
        message_type: str,
    ) -> UUID:
        return uuid4()

    async def log_success(self, log_uuid: UUID, provider_message_id: str | None) -> None:
        pass

    async def log_failure(self, log_uuid: UUID, error_message: str) -> None:
        pass
