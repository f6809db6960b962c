"""Error taxonomy for contact to calendar conversion.

Every failure raised by the extractor derives from ``EventExtractorError`` so
that callers can decide per unit of work whether to abort or skip. A contact
without a ``BDAY`` property is not an error and never raises.
"""
from typing import Optional


class EventExtractorError(Exception):
    """Base class for all extractor failures."""


class PropertyNotFound(EventExtractorError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'property "{name}" was not found')


class PropertyValueNotFound(EventExtractorError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'value of property "{name}" not found')


class DateExtractionFailed(EventExtractorError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"date extraction failed: {reason}")


class ParseDateFailed(EventExtractorError):
    def __init__(self, field: str, raw_value: str):
        self.field = field
        self.raw_value = raw_value
        super().__init__(f'parsing the {field} value "{raw_value}" failed')


class UnexpectedDateFormat(EventExtractorError):
    def __init__(self, value: Optional[str] = None):
        self.value = value
        message = "unexpected date format"
        if value is not None:
            message = f'{message}: "{value}"'
        super().__init__(message)


class SerializationNotImplemented(EventExtractorError):
    def __init__(self, component: str):
        self.component = component
        super().__init__(f'serialization of property "{component}" not implemented')


class ConfigError(EventExtractorError):
    """Configuration file could not be read or has the wrong shape."""


class ContactParseError(EventExtractorError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f'could not parse "{path}": {reason}')
