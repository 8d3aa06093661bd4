import json
import smtplib
from functools import partial
from types import SimpleNamespace
from unittest.mock import patch

import httpx
import pytest

from dosomething.exceptions import DeliveryError
from dosomething.notifications.channels.resend_service import RESEND_EMAILS_URL, ResendEmailService
from dosomething.notifications.channels.smtp_service import SMTPEmailService

CONFIG = SimpleNamespace(resend_api_key="re_test", emails_from="hello@example.com")


def resend_with(handler) -> ResendEmailService:
    client_class = partial(httpx.AsyncClient, transport=httpx.MockTransport(handler))
    return ResendEmailService(config=CONFIG, http_client_class=client_class)


async def test_resend_posts_message_and_returns_id():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"id": "email_123"})

    message_id = await resend_with(handler).send_email(
        to_address="jane@example.com", subject="Hi", html_body="<p>Hi</p>", text_body="Hi"
    )

    assert message_id == "email_123"
    assert str(requests[0].url) == RESEND_EMAILS_URL
    assert requests[0].headers["Authorization"] == "Bearer re_test"
    assert json.loads(requests[0].content) == {
        "from": "hello@example.com",
        "to": ["jane@example.com"],
        "subject": "Hi",
        "html": "<p>Hi</p>",
        "text": "Hi",
    }


async def test_resend_error_becomes_delivery_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "invalid to"})

    with pytest.raises(DeliveryError):
        await resend_with(handler).send_email(
            to_address="jane@example.com", subject="Hi", html_body="<p>Hi</p>", text_body="Hi"
        )


async def test_smtp_sends_multipart_message():
    service = SMTPEmailService()

    with patch("dosomething.notifications.channels.smtp_service.smtplib.SMTP") as smtp:
        await service.send_email(
            to_address="jane@example.com", subject="Hi", html_body="<p>Hi</p>", text_body="Hi"
        )

    message = smtp.return_value.__enter__.return_value.send_message.call_args.args[0]
    assert message["To"] == "jane@example.com"
    assert message["Subject"] == "Hi"
    assert message.is_multipart()


async def test_smtp_failure_becomes_delivery_error():
    service = SMTPEmailService()

    with patch(
        "dosomething.notifications.channels.smtp_service.smtplib.SMTP",
        side_effect=smtplib.SMTPConnectError(421, "busy"),
    ):
        with pytest.raises(DeliveryError):
            await service.send_email(
                to_address="jane@example.com", subject="Hi", html_body="<p>Hi</p>", text_body="Hi"
            )
