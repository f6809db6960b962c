"""Writer for per-event iCalendar files."""
import logging
from pathlib import Path

from processor.errors import PropertyNotFound, PropertyValueNotFound
from processor.models import CalendarEvent
from serializer.ical_serializer import build_calendar, calendar_to_string

logger = logging.getLogger(__name__)


class IcsWriter:
    """Writes one ``<UID>.ics`` file per event into an output directory."""

    EXTENSION = '.ics'

    def __init__(self, output_dir):
        """
        Initialize the writer.

        Args:
            output_dir: Target directory, must already exist
        """
        self.output_dir = Path(output_dir)

    def check_output_dir(self) -> None:
        """
        Verify that the output directory exists.

        Raises:
            FileNotFoundError: If the directory does not exist
            NotADirectoryError: If the path is not a directory
        """
        if not self.output_dir.exists():
            raise FileNotFoundError(f"output directory not found: {self.output_dir}")
        if not self.output_dir.is_dir():
            raise NotADirectoryError(f"output path is not a directory: {self.output_dir}")

    def remove_existing(self) -> int:
        """
        Delete regular ``.ics`` files from the output directory.

        Other files and subdirectories are left alone.

        Returns:
            Count of removed files
        """
        logger.info(f"Removing existing files from {self.output_dir}")
        removed = 0
        for path in self.output_dir.iterdir():
            if path.is_file() and path.suffix == self.EXTENSION:
                path.unlink()
                removed += 1
        logger.info(f"Removed {removed} files")
        return removed

    def write_event(self, event: CalendarEvent) -> Path:
        """
        Render an event as a one-event calendar and write it to disk.

        The whole calendar is rendered before the file is opened, so a
        rejected calendar never leaves a partial file behind.

        Args:
            event: Generated event carrying a UID property

        Returns:
            Path of the written file
        """
        path = self.output_dir / f"{self._event_uid(event)}{self.EXTENSION}"
        text = calendar_to_string(build_calendar(event))

        # newline='' keeps the CRLF line endings untouched
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)

        logger.debug(f"Wrote {path.name}")
        return path

    @staticmethod
    def _event_uid(event: CalendarEvent) -> str:
        for prop in event.properties:
            if prop.name == 'UID':
                if prop.value is None:
                    raise PropertyValueNotFound('UID')
                return prop.value
        raise PropertyNotFound('UID')
