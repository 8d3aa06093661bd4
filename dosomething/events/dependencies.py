from dosomething.config.settings import settings
from dosomething.events.guest_resolution import GuestResolver, SqlGuestResolver
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.repository.read_models import EventReadModel, SqlEventReadModel
from dosomething.events.repository.write_models import EventStore, SqlEventStore
from dosomething.notifications.repository.write_models import SqlNotificationWriteModel
from dosomething.storage import get_blob_store


def get_event_store() -> EventStore:
    return SqlEventStore()


def get_event_read_model() -> EventReadModel:
    return SqlEventReadModel()


def get_guest_resolver() -> GuestResolver:
    return SqlGuestResolver()


def get_rsvp_orchestrator() -> RsvpOrchestrator:
    """Dependency to get the orchestrator wired to the SQL stores."""
    return RsvpOrchestrator(
        store=get_event_store(),
        resolver=get_guest_resolver(),
        notifications=SqlNotificationWriteModel(),
        blob_store=get_blob_store(),
        notify_host_on_rsvp=settings.notify_host_on_rsvp,
    )
