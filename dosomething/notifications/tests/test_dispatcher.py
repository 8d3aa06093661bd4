from datetime import date

from dosomething.events.dtos import Delivery, GuestRecord
from dosomething.models.channels import Channel
from dosomething.notifications.channels.adapter import NotificationChannelAdapter
from dosomething.notifications.channels.dispatcher import DispatchReport, NotificationDispatcher
from dosomething.notifications.templates import MessageTemplates
from dosomething.tests.inmemory_services import RecordingEmailService, RecordingSmsService

TEMPLATE = MessageTemplates.cancellation("Party", date(2030, 6, 1), "19:30", "Hana Host")


def delivery(contact: str, channel: Channel) -> Delivery:
    return Delivery(GuestRecord.placeholder(contact, channel), TEMPLATE, "cancellation")


async def test_one_failure_does_not_stop_the_others():
    email_service = RecordingEmailService(fail_for={"b@example.com"})
    sms_service = RecordingSmsService()
    dispatcher = NotificationDispatcher(NotificationChannelAdapter(email_service, sms_service))

    report = await dispatcher.deliver_all(
        [
            delivery("a@example.com", Channel.EMAIL),
            delivery("b@example.com", Channel.EMAIL),
            delivery("5551234567", Channel.SMS),
            delivery("c@example.com", Channel.EMAIL),
        ]
    )

    assert report == DispatchReport(attempted=4, failed=1)
    assert [m["to"] for m in email_service.sent] == ["a@example.com", "c@example.com"]
    assert [m["to"] for m in sms_service.sent] == ["5551234567"]


async def test_slow_provider_times_out_without_blocking_email():
    email_service = RecordingEmailService()
    sms_service = RecordingSmsService(delay=5)
    dispatcher = NotificationDispatcher(
        NotificationChannelAdapter(email_service, sms_service), timeout=0.05
    )

    report = await dispatcher.deliver_all(
        [delivery("5551234567", Channel.SMS), delivery("a@example.com", Channel.EMAIL)]
    )

    assert report == DispatchReport(attempted=2, failed=1)
    assert sms_service.sent == []
    assert [m["to"] for m in email_service.sent] == ["a@example.com"]


async def test_unexpected_errors_are_contained():
    class ExplodingSmsService(RecordingSmsService):
        async def send_sms(self, to_number, body):
            raise RuntimeError("boom")

    dispatcher = NotificationDispatcher(
        NotificationChannelAdapter(RecordingEmailService(), ExplodingSmsService())
    )

    report = await dispatcher.deliver_all([delivery("5551234567", Channel.SMS)])

    assert report == DispatchReport(attempted=1, failed=1)


async def test_nothing_to_deliver():
    dispatcher = NotificationDispatcher(
        NotificationChannelAdapter(RecordingEmailService(), RecordingSmsService())
    )

    assert await dispatcher.deliver_all([]) == DispatchReport(attempted=0, failed=0)
