from fastapi import APIRouter

from .features.create_event.router import router as create_event_router
from .features.delete_event.router import router as delete_event_router
from .features.delete_memory.router import router as delete_memory_router
from .features.invite_guest.router import router as invite_guest_router
from .features.list_events.router import router as list_events_router
from .features.list_memories.router import router as list_memories_router
from .features.send_reminders.router import router as send_reminders_router
from .features.set_guest.router import router as set_guest_router
from .features.toggle_rsvp.router import router as toggle_rsvp_router
from .features.update_event.router import router as update_event_router
from .features.update_memory.router import router as update_memory_router
from .features.upload_photo.router import router as upload_photo_router

router = APIRouter()

router.include_router(list_events_router)
router.include_router(create_event_router)
router.include_router(update_event_router)
router.include_router(toggle_rsvp_router)
router.include_router(set_guest_router)
router.include_router(invite_guest_router)
router.include_router(send_reminders_router)
router.include_router(upload_photo_router)
router.include_router(delete_event_router)
router.include_router(list_memories_router)
router.include_router(update_memory_router)
router.include_router(delete_memory_router)
