from abc import ABC, abstractmethod


class EmailServiceBase(ABC):
    @abstractmethod
    async def send_email(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> str | None:
        """Send one email. Returns the provider's message id when it gives one.

        Raises DeliveryError when the provider is unreachable or rejects the message.
        """


class SmsServiceBase(ABC):
    @abstractmethod
    async def send_sms(self, to_number: str, body: str) -> str | None:
        """Send one text message to an E.164 number.

        Raises DeliveryError when the provider is unreachable or rejects the message.
        """
