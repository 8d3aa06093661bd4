import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from dosomething.events.dtos import GuestRecord
from dosomething.exceptions import DeliveryError
from dosomething.models.channels import Channel
from dosomething.notifications.channels.base import EmailServiceBase, SmsServiceBase
from dosomething.notifications.channels.delivery_logger import (
    DeliveryLogger,
    NoOpDeliveryLogger,
)
from dosomething.notifications.templates import MessageTemplate
from dosomething.validators import is_email, is_phone

logger = logging.getLogger(__name__)


class NotificationChannelAdapter:
    """Sends one rendered message to one guest over the guest's preferred channel.

    A guest without a usable address for that channel is skipped. Each
    message is attempted once; provider failures surface as DeliveryError.
    """

    def __init__(
        self,
        email_service: EmailServiceBase,
        sms_service: SmsServiceBase,
        delivery_logger: DeliveryLogger | None = None,
    ) -> None:
        self.email_service = email_service
        self.sms_service = sms_service
        self.delivery_logger = delivery_logger or NoOpDeliveryLogger()

    async def send(
        self, guest: GuestRecord, template: MessageTemplate, message_type: str = "generic"
    ) -> bool:
        """Returns False when the guest was skipped."""
        if guest.notify == Channel.SMS:
            if not is_phone(guest.phone):
                logger.info("Skipping %s sms for %s: no valid phone", message_type, guest.guest_id)
                return False
            await self._deliver(
                Channel.SMS,
                guest.phone,
                template,
                message_type,
                lambda: self.sms_service.send_sms(guest.phone, template.text_body),
            )
            return True

        if not is_email(guest.email):
            logger.info("Skipping %s email for %s: no valid email", message_type, guest.guest_id)
            return False
        await self._deliver(
            Channel.EMAIL,
            guest.email.strip(),
            template,
            message_type,
            lambda: self.email_service.send_email(
                to_address=guest.email.strip(),
                subject=template.subject,
                html_body=template.html_body,
                text_body=template.text_body,
            ),
        )
        return True

    async def _deliver(self, channel, to_address, template, message_type, send) -> None:
        log_uuid = await self._log_attempt(channel, to_address, template, message_type)
        try:
            provider_message_id = await send()
        except DeliveryError as e:
            if log_uuid:
                await self._safe_log(self.delivery_logger.log_failure(log_uuid, str(e)))
            raise
        if log_uuid:
            await self._safe_log(self.delivery_logger.log_success(log_uuid, provider_message_id))

    async def _log_attempt(
        self, channel: Channel, to_address: str, template: MessageTemplate, message_type: str
    ) -> UUID | None:
        try:
            return await self.delivery_logger.log_attempt(
                channel=channel,
                to_address=to_address,
                subject=template.subject,
                body=template.text_body,
                message_type=message_type,
            )
        except SQLAlchemyError:
            logger.exception("Failed to log %s delivery to %s", channel.value, to_address)
            return None

    @staticmethod
    async def _safe_log(coro) -> None:
        try:
            await coro
        except SQLAlchemyError:
            logger.exception("Failed to update delivery log")
