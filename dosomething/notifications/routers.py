from fastapi import APIRouter

from .features.latest_notification.router import router as latest_notification_router
from .features.list_notifications.router import router as list_notifications_router
from .features.mark_opened.router import router as mark_opened_router

router = APIRouter()

router.include_router(latest_notification_router)
router.include_router(list_notifications_router)
router.include_router(mark_opened_router)
