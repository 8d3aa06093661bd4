from dosomething.notifications.repository.read_models import (
    NotificationReadModel,
    SqlNotificationReadModel,
)
from dosomething.notifications.repository.write_models import (
    NotificationWriteModel,
    SqlNotificationWriteModel,
)


def get_notification_read_model() -> NotificationReadModel:
    return SqlNotificationReadModel()


def get_notification_write_model() -> NotificationWriteModel:
    return SqlNotificationWriteModel()
