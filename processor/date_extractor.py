"""Date extraction from DATE-typed contact properties."""
import logging
import re

from processor.errors import (
    DateExtractionFailed,
    ParseDateFailed,
    UnexpectedDateFormat,
)
from processor.models import ExtractedDate, Property

logger = logging.getLogger(__name__)

_SIGNED_NUMBER = re.compile(r'[+-]?[0-9]+')
_UNSIGNED_NUMBER = re.compile(r'\+?[0-9]+')

YEARLESS_PREFIX = '--'


def _parse_field(field: str, raw: str, signed: bool = False) -> int:
    """
    Parse a numeric date component.

    Args:
        field: Component name used in error messages (year, month, day)
        raw: Substring of the date value
        signed: Whether a leading minus sign is allowed

    Returns:
        Parsed integer

    Raises:
        ParseDateFailed: If the substring is not a plain number
    """
    pattern = _SIGNED_NUMBER if signed else _UNSIGNED_NUMBER
    if not pattern.fullmatch(raw):
        raise ParseDateFailed(field, raw)
    return int(raw)


def _check_value_type(prop: Property) -> None:
    if prop.params is None:
        raise DateExtractionFailed("no parameters found")

    value_types = prop.params.get('VALUE')
    if value_types is None:
        raise DateExtractionFailed("could not determine value type")

    if len(value_types) != 1:
        raise DateExtractionFailed("value type not unique")

    if value_types[0] != 'DATE':
        raise DateExtractionFailed(
            f'expected value type "DATE" found "{value_types[0]}"'
        )


def extract_date(prop: Property) -> ExtractedDate:
    """
    Extract a full (YYYYMMDD) or year-less (--MMDD) date from a property.

    The property must carry exactly one VALUE=DATE parameter.

    Args:
        prop: Date-bearing property, usually BDAY

    Returns:
        ExtractedDate with year set to None for year-less dates

    Raises:
        DateExtractionFailed: If the value type is missing or not DATE,
            or the property has no value
        ParseDateFailed: If a date component is not numeric
        UnexpectedDateFormat: If the value has neither supported shape
    """
    _check_value_type(prop)

    value = prop.value
    if value is None:
        raise DateExtractionFailed("no date value found")

    if len(value) == 8 and not value.startswith(YEARLESS_PREFIX):
        return ExtractedDate(
            year=_parse_field('year', value[0:4], signed=True),
            month=_parse_field('month', value[4:6]),
            day=_parse_field('day', value[6:8]),
        )

    if len(value) == 6 and value.startswith(YEARLESS_PREFIX):
        return ExtractedDate(
            year=None,
            month=_parse_field('month', value[2:4]),
            day=_parse_field('day', value[4:6]),
        )

    logger.debug(f"Unsupported date value for {prop.name}: {value!r}")
    raise UnexpectedDateFormat(value)
