"""Data models for contact to calendar conversion."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Property:
    """Named, optionally parameterized, optionally valued content line."""
    name: str
    params: Optional[Dict[str, List[str]]] = None
    value: Optional[str] = None


@dataclass
class ExtractedDate:
    """Normalized date; year is None for recurring year-less dates."""
    year: Optional[int]
    month: int
    day: int


@dataclass
class Contact:
    """Parsed contact record."""
    properties: List[Property] = field(default_factory=list)

    def find(self, name: str) -> Optional[Property]:
        """Return the first property named exactly ``name``."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclass
class CalendarEvent:
    """VEVENT component."""
    properties: List[Property] = field(default_factory=list)
    alarms: list = field(default_factory=list)


@dataclass
class Calendar:
    """VCALENDAR component.

    Only properties and events are rendered; the remaining collections
    exist so that unsupported content can be rejected explicitly.
    """
    properties: List[Property] = field(default_factory=list)
    events: List[CalendarEvent] = field(default_factory=list)
    alarms: list = field(default_factory=list)
    free_busys: list = field(default_factory=list)
    journals: list = field(default_factory=list)
    timezones: list = field(default_factory=list)
    todos: list = field(default_factory=list)


@dataclass
class ProcessResult:
    """Result of processing one configuration entry."""
    files_removed: int = 0
    files_read: int = 0
    contacts_processed: int = 0
    events_written: int = 0
    errors: list[str] = field(default_factory=list)
