from dosomething.config.settings import settings
from dosomething.notifications.channels.adapter import NotificationChannelAdapter
from dosomething.notifications.channels.base import EmailServiceBase, SmsServiceBase
from dosomething.notifications.channels.delivery_logger import SQLDeliveryLogger
from dosomething.notifications.channels.dispatcher import DispatchReport, NotificationDispatcher
from dosomething.notifications.channels.resend_service import ResendEmailService
from dosomething.notifications.channels.sms_service import LoggingSmsService, TwilioSmsService
from dosomething.notifications.channels.smtp_service import SMTPEmailService


def get_email_service() -> EmailServiceBase:
    if settings.resend_api_key:
        return ResendEmailService(config=settings)
    return SMTPEmailService()


def get_sms_service() -> SmsServiceBase:
    if settings.twilio_account_sid:
        return TwilioSmsService(config=settings)
    return LoggingSmsService()


def get_notification_dispatcher() -> NotificationDispatcher:
    adapter = NotificationChannelAdapter(
        email_service=get_email_service(),
        sms_service=get_sms_service(),
        delivery_logger=SQLDeliveryLogger(),
    )
    return NotificationDispatcher(adapter, timeout=settings.delivery_timeout_seconds)


__all__ = [
    "DispatchReport",
    "EmailServiceBase",
    "NotificationChannelAdapter",
    "NotificationDispatcher",
    "SmsServiceBase",
    "get_email_service",
    "get_notification_dispatcher",
    "get_sms_service",
]
