"""Serialization of calendars to iCalendar text.

Only single all-day events are supported. Lines are neither escaped nor
folded, and calendars holding any other component type are rejected before
any text is produced.
"""
from processor.errors import SerializationNotImplemented
from processor.models import Calendar, CalendarEvent, Property

CRLF = '\r\n'
PRODID = 'event-extractor//hochreiner.net'
VERSION = '2.0'

_UNSUPPORTED_CALENDAR_COLLECTIONS = (
    'alarms',
    'free_busys',
    'journals',
    'timezones',
    'todos',
)


def build_calendar(event: CalendarEvent) -> Calendar:
    """Wrap a single event into a calendar with the fixed header properties."""
    return Calendar(
        properties=[
            Property(name='VERSION', value=VERSION),
            Property(name='PRODID', value=PRODID),
        ],
        events=[event]
    )


def _check_event(event: CalendarEvent) -> None:
    if event.alarms:
        raise SerializationNotImplemented('event.alarms')


def calendar_to_string(calendar: Calendar) -> str:
    """
    Render a calendar as iCalendar text.

    Args:
        calendar: Calendar holding only properties and events

    Returns:
        Text terminated by CRLF line endings

    Raises:
        SerializationNotImplemented: If the calendar or one of its events
            carries an unsupported component collection
    """
    for collection in _UNSUPPORTED_CALENDAR_COLLECTIONS:
        if getattr(calendar, collection):
            raise SerializationNotImplemented(f"calendar.{collection}")
    for event in calendar.events:
        _check_event(event)

    return ''.join([
        'BEGIN:VCALENDAR' + CRLF,
        ''.join(property_to_string(prop) for prop in calendar.properties),
        ''.join(event_to_string(event) for event in calendar.events),
        'END:VCALENDAR' + CRLF,
    ])


def event_to_string(event: CalendarEvent) -> str:
    """Render a single VEVENT block."""
    _check_event(event)
    return ''.join([
        'BEGIN:VEVENT' + CRLF,
        ''.join(property_to_string(prop) for prop in event.properties),
        'END:VEVENT' + CRLF,
    ])


def property_to_string(prop: Property) -> str:
    """Render ``NAME;PARAM=v1,v2:value`` followed by CRLF."""
    out = prop.name

    if prop.params is not None:
        for name, values in prop.params.items():
            out += f";{name}={','.join(values)}"

    if prop.value is not None:
        out += f":{prop.value}"

    return out + CRLF
