import asyncio
import logging
from typing import Protocol

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from dosomething.exceptions import DeliveryError
from dosomething.models.channels import Channel
from dosomething.notifications.channels.base import SmsServiceBase
from dosomething.validators import normalize_phone

logger = logging.getLogger(__name__)


def to_e164(phone: str, default_country_code: str) -> str:
    """``555-123-4567`` -> ``+15551234567``; numbers written with ``+`` keep their country code."""
    digits = normalize_phone(phone)
    if phone.strip().startswith("+"):
        return f"+{digits}"
    if len(digits) == 10:
        return f"+{default_country_code}{digits}"
    return f"+{digits}"


class TwilioConfig(Protocol):
    twilio_account_sid: str
    twilio_auth_token: str
    twilio_phone_number: str
    sms_default_country_code: str


class TwilioSmsService(SmsServiceBase):
    def __init__(self, config: TwilioConfig, client: Client | None = None):
        self._config = config
        self._client = client or Client(config.twilio_account_sid, config.twilio_auth_token)

    def _send(self, to_number: str, body: str) -> str:
        message = self._client.messages.create(
            body=body,
            from_=self._config.twilio_phone_number,
            to=to_number,
        )
        return message.sid

    async def send_sms(self, to_number: str, body: str) -> str | None:
        to_number = to_e164(to_number, self._config.sms_default_country_code)
        try:
            # the twilio client is synchronous
            return await asyncio.to_thread(self._send, to_number, body)
        except (TwilioException, OSError) as e:
            raise DeliveryError(Channel.SMS.value, to_number, str(e)) from e


class LoggingSmsService(SmsServiceBase):
    """Development stand-in when no Twilio account is configured."""

    async def send_sms(self, to_number: str, body: str) -> str | None:
        logger.info("SMS to %s: %s", to_number, body)
        return None
