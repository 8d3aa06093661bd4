from uuid import uuid4

from dosomething.notifications.dtos import NotificationKind
from dosomething.notifications.features.mark_opened.router import MARK_OPENED_URL
from dosomething.notifications.repository.write_models import SqlNotificationWriteModel


async def test_mark_opened(client_factory, make_user, login):
    alice = await make_user()
    bob = await make_user()
    notification = await SqlNotificationWriteModel().insert_notification(
        to=alice.uuid, from_=bob.uuid, subject_type="Party", subject_label="#fff", kind=NotificationKind.INVITE
    )

    async with client_factory(login(alice)) as client:
        response = await client.put(MARK_OPENED_URL.format(notification_id=notification.uuid))

    assert response.status_code == 200
    assert response.json()["notification"]["opened"] is True


async def test_mark_opened_unknown(client_factory, make_user, login):
    alice = await make_user()

    async with client_factory(login(alice)) as client:
        response = await client.put(MARK_OPENED_URL.format(notification_id=uuid4()))

    assert response.status_code == 404
