"""Unit tests for IcsWriter."""
import pytest

from processor.errors import (
    PropertyNotFound,
    PropertyValueNotFound,
    SerializationNotImplemented,
)
from processor.models import CalendarEvent, Property
from storage.ics_writer import IcsWriter


@pytest.fixture
def sample_event():
    """Create an event with a UID."""
    return CalendarEvent(properties=[
        Property(name='UID', value='test_uid_bday_2024'),
        Property(name='SUMMARY', value='Birthday: Test Person'),
    ])


class TestIcsWriter:
    """Test cases for IcsWriter class."""

    def test_write_event(self, tmp_path, sample_event):
        """Test that the file is named after the UID and keeps CRLF."""
        path = IcsWriter(tmp_path).write_event(sample_event)

        assert path == tmp_path / 'test_uid_bday_2024.ics'
        assert path.read_bytes() == (
            b'BEGIN:VCALENDAR\r\n'
            b'VERSION:2.0\r\n'
            b'PRODID:event-extractor//hochreiner.net\r\n'
            b'BEGIN:VEVENT\r\n'
            b'UID:test_uid_bday_2024\r\n'
            b'SUMMARY:Birthday: Test Person\r\n'
            b'END:VEVENT\r\n'
            b'END:VCALENDAR\r\n'
        )

    def test_write_event_utf8(self, tmp_path):
        """Test that non-ASCII text is written as UTF-8."""
        event = CalendarEvent(properties=[
            Property(name='UID', value='u'),
            Property(name='SUMMARY', value='Birthday: Jürgen'),
        ])

        path = IcsWriter(tmp_path).write_event(event)

        assert 'Birthday: Jürgen' in path.read_text(encoding='utf-8')

    def test_write_event_overwrites(self, tmp_path, sample_event):
        """Test that an existing file for the same UID is replaced."""
        existing = tmp_path / 'test_uid_bday_2024.ics'
        existing.write_text('old', encoding='utf-8')

        IcsWriter(tmp_path).write_event(sample_event)

        assert existing.read_text(encoding='utf-8').startswith('BEGIN:VCALENDAR')

    def test_write_event_missing_uid(self, tmp_path):
        """Test that an event without UID is rejected."""
        event = CalendarEvent(properties=[Property(name='SUMMARY', value='x')])

        with pytest.raises(PropertyNotFound):
            IcsWriter(tmp_path).write_event(event)

        assert list(tmp_path.iterdir()) == []

    def test_write_event_uid_without_value(self, tmp_path):
        """Test that a UID without value is rejected."""
        event = CalendarEvent(properties=[Property(name='UID')])

        with pytest.raises(PropertyValueNotFound):
            IcsWriter(tmp_path).write_event(event)

    def test_rejected_event_leaves_no_file(self, tmp_path, sample_event):
        """Test that a calendar failing to render is never written."""
        sample_event.alarms.append(object())

        with pytest.raises(SerializationNotImplemented):
            IcsWriter(tmp_path).write_event(sample_event)

        assert list(tmp_path.iterdir()) == []

    def test_remove_existing(self, tmp_path):
        """Test that only regular .ics files are removed."""
        (tmp_path / 'a.ics').write_text('', encoding='utf-8')
        (tmp_path / 'b.ics').write_text('', encoding='utf-8')
        (tmp_path / 'keep.txt').write_text('', encoding='utf-8')
        (tmp_path / 'dir.ics').mkdir()

        removed = IcsWriter(tmp_path).remove_existing()

        assert removed == 2
        assert sorted(path.name for path in tmp_path.iterdir()) == ['dir.ics', 'keep.txt']

    def test_check_output_dir(self, tmp_path):
        """Test that an existing directory passes and other paths are rejected."""
        IcsWriter(tmp_path).check_output_dir()

        with pytest.raises(FileNotFoundError):
            IcsWriter(tmp_path / 'missing').check_output_dir()

        output_file = tmp_path / 'file.ics'
        output_file.write_text('', encoding='utf-8')
        with pytest.raises(NotADirectoryError):
            IcsWriter(output_file).check_output_dir()
