from enum import Enum


class TableNames(str, Enum):
    USERS = "users"
    EVENTS = "events"
    EVENT_INVITED_GUESTS = "event_invited_guests"
    EVENT_ATTENDEES = "event_attendees"
    EVENT_MEMORIES = "event_memories"
    NOTIFICATIONS = "notifications"
    DELIVERY_LOGS = "delivery_logs"
