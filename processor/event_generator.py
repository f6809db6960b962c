"""Birthday event generation from contact records."""
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from processor.date_extractor import extract_date
from processor.errors import (
    PropertyNotFound,
    PropertyValueNotFound,
    UnexpectedDateFormat,
)
from processor.models import CalendarEvent, Contact, ExtractedDate, Property

logger = logging.getLogger(__name__)


def _format_date(value: datetime) -> str:
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def target_years(now: Optional[datetime] = None) -> List[int]:
    """
    Default year window: previous, current and the two following years.

    Args:
        now: Reference time (default: current UTC time)

    Returns:
        Ordered list of four years
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return [now.year + offset for offset in BirthdayEventGenerator.YEAR_OFFSETS]


class BirthdayEventGenerator:
    """Generator for yearly all-day birthday events."""

    YEAR_OFFSETS = (-1, 0, 1, 2)
    DATE_PROPERTY = 'BDAY'
    TIMESTAMP_FORMAT = '%Y%m%dT%H%M%SZ'

    def convert(
        self,
        contact: Contact,
        years: Sequence[int],
        timestamp: Optional[datetime] = None
    ) -> List[CalendarEvent]:
        """
        Convert one contact into one birthday event per year.

        The generation timestamp is captured once so that every event of
        the contact carries the same DTSTAMP.

        Args:
            contact: Parsed contact
            years: Target years, in output order
            timestamp: Generation time (default: current UTC time)

        Returns:
            List of events, empty if the contact has no BDAY property

        Raises:
            PropertyNotFound: If FN or UID is missing
            EventExtractorError: If the birthday cannot be extracted or
                does not exist in one of the years
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)

        fn_prop = contact.find('FN')
        uid_prop = contact.find('UID')
        bday_prop = contact.find(self.DATE_PROPERTY)

        if fn_prop is None:
            raise PropertyNotFound('FN')
        if uid_prop is None:
            raise PropertyNotFound('UID')
        if bday_prop is None:
            logger.debug(f"Contact {uid_prop.value} has no {self.DATE_PROPERTY}")
            return []

        return self.generate_events_for_years(
            fn_prop,
            uid_prop,
            extract_date(bday_prop),
            years,
            timestamp
        )

    def generate_events_for_years(
        self,
        fn_prop: Property,
        uid_prop: Property,
        date: ExtractedDate,
        years: Sequence[int],
        timestamp: datetime
    ) -> List[CalendarEvent]:
        """
        Generate one all-day event per target year.

        Args:
            fn_prop: Display name property; its parameters are carried
                over to SUMMARY
            uid_prop: Contact UID property
            date: Extracted birthday
            years: Target years, in output order
            timestamp: Generation time shared by all events; converted to
                UTC, naive values are taken as UTC

        Returns:
            List of events in the order of ``years``
        """
        if uid_prop.value is None:
            raise PropertyValueNotFound('UID')
        if fn_prop.value is None:
            raise PropertyValueNotFound('FN')

        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        stamp = timestamp.astimezone(timezone.utc).strftime(self.TIMESTAMP_FORMAT)

        return [
            self._build_event(fn_prop, uid_prop.value, date, year, stamp)
            for year in years
        ]

    def _build_event(
        self,
        fn_prop: Property,
        uid: str,
        date: ExtractedDate,
        year: int,
        stamp: str
    ) -> CalendarEvent:
        try:
            start = datetime(year, date.month, date.day, tzinfo=timezone.utc)
        except (ValueError, OverflowError) as e:
            logger.debug(
                f"No valid date for {uid} in {year} "
                f"({date.month:02d}-{date.day:02d}): {e}"
            )
            raise UnexpectedDateFormat() from e
        try:
            end = start + timedelta(days=1)
        except OverflowError as e:
            raise UnexpectedDateFormat() from e

        if date.year is None:
            summary = f"Birthday: {fn_prop.value}"
        else:
            summary = f"Birthday: {fn_prop.value} ({year - date.year})"

        return CalendarEvent(properties=[
            Property(name='UID', value=f"{uid}_bday_{year}"),
            Property(name='DTSTAMP', value=stamp),
            Property(name='STATUS', value='CONFIRMED'),
            Property(name='TRANSP', value='TRANSPARENT'),
            Property(
                name='DTSTART',
                params={'VALUE': ['DATE']},
                value=_format_date(start)
            ),
            Property(
                name='DTEND',
                params={'VALUE': ['DATE']},
                value=_format_date(end)
            ),
            Property(
                name='SUMMARY',
                params=_copy_params(fn_prop.params),
                value=summary
            ),
        ])


def _copy_params(params):
    if params is None:
        return None
    return {key: list(values) for key, values in params.items()}
