from datetime import date
from uuid import uuid4

from dosomething.events.dtos import EventDTO, current_events


def make_event(event_date: date) -> EventDTO:
    return EventDTO(
        uuid=uuid4(),
        type="Party",
        date=event_date,
        time="20:00",
        location="Somewhere",
        label="#fff",
        created_by=uuid4(),
    )


def test_current_events_include_today_and_later():
    today = date(2030, 6, 15)
    past = make_event(date(2030, 6, 14))
    same_day = make_event(today)
    next_year_earlier_month = make_event(date(2031, 1, 2))

    current = current_events([past, same_day, next_year_earlier_month], today)

    assert current == [same_day, next_year_earlier_month]
