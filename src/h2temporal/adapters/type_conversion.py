"""
Conversion of driver-native temporal values read from H2.

This module handles the Database → Python direction only. Values passed as
query parameters are forwarded to the driver untouched; H2 accepts the
standard library date/time types natively.

It provides:
1. Plain conversion functions, one per source shape
2. A TemporalConverter class grouping them for registry wiring
3. The offset-preserving rebuild of ``TIMESTAMP WITH TIME ZONE`` values

The offset of a ``TIMESTAMP WITH TIME ZONE`` value is taken verbatim from the
driver. It is never resolved against a time zone database, so daylight-saving
or historical rules cannot alter the stored offset.

Usage:
    # Direct conversion
    value = convert_timestamp_with_offset(2018, 5, 30, nanos, 120)

    # Through the class used by the registry
    TemporalConverter.convert_date(datetime.date(2018, 12, 30))
"""
import datetime
import logging
from typing import Any

from h2temporal.types import NANOS_PER_SECOND, CalendarDate, LocalDateTime
from h2temporal.types import OffsetDateTime, TimestampWithTimeZone, UtcOffset
from h2temporal.types import WallClockTime

logger = logging.getLogger(__name__)

__all__ = [
    'TemporalConverter',
    'convert_date',
    'convert_time',
    'convert_timestamp',
    'convert_timestamp_with_offset',
    'convert_timestamp_with_time_zone',
    'is_h2_timestamp_with_time_zone',
]

# accessor names exposed by org.h2.api.TimestampWithTimeZone through a Java bridge
_H2_ACCESSORS = ('getYear', 'getMonth', 'getDay', 'getNanosSinceMidnight')


def _nano_of_day(value: Any) -> int:
    """Nanoseconds since midnight of a time-bearing value.

    Uses ``nanosecond`` when the value carries one (pandas.Timestamp).

    >>> _nano_of_day(datetime.time(23, 50, 10))
    85810000000000
    >>> _nano_of_day(datetime.time(0, 0, 0, 1))
    1000
    """
    seconds = (value.hour * 60 + value.minute) * 60 + value.second
    return (seconds * NANOS_PER_SECOND
            + value.microsecond * 1000
            + getattr(value, 'nanosecond', 0))


def convert_date(native_date: datetime.date) -> CalendarDate:
    """Calendar fields of a driver date; any time of day is dropped.

    >>> convert_date(datetime.date(2018, 12, 30))
    CalendarDate('2018-12-30')
    """
    return CalendarDate(native_date.year, native_date.month, native_date.day)


def convert_time(native_time: datetime.time) -> WallClockTime:
    """Nanosecond-of-day of a driver time.

    Precision is taken as delivered. H2 ``TIME`` read over JDBC arrives with
    sub-second digits already zeroed and they are not recovered here.
    """
    return WallClockTime(_nano_of_day(native_time))


def convert_timestamp(native_timestamp: datetime.datetime) -> LocalDateTime:
    """Split a driver timestamp into date and time of day.
    """
    return LocalDateTime(convert_date(native_timestamp), convert_time(native_timestamp))


def convert_timestamp_with_offset(raw_year: int, raw_month: int, raw_day: int,
                                  nanos_since_midnight: int,
                                  offset_minutes: int) -> OffsetDateTime:
    """Rebuild an offset-aware timestamp from H2's decomposed fields.

    Raises InvalidDateError, InvalidTimeError or InvalidOffsetError when the
    corresponding part is out of range. The result is composed without any
    normalization: its offset is exactly ``offset_minutes * 60`` seconds.

    >>> convert_timestamp_with_offset(2018, 5, 30, 85_810_000_000_000, 120)
    OffsetDateTime('2018-05-30T23:50:10+02:00')
    """
    date = CalendarDate(raw_year, raw_month, raw_day)
    time = WallClockTime(nanos_since_midnight)
    offset = UtcOffset.of_minutes(offset_minutes)
    return OffsetDateTime(LocalDateTime(date, time), offset)


def is_h2_timestamp_with_time_zone(value: Any) -> bool:
    """Whether value has the shape of an H2 ``TIMESTAMP WITH TIME ZONE``.
    """
    if isinstance(value, TimestampWithTimeZone):
        return True
    return all(hasattr(value, name) for name in _H2_ACCESSORS) and (
        hasattr(value, 'getTimeZoneOffsetMins')
        or hasattr(value, 'getTimeZoneOffsetSeconds'))


def convert_timestamp_with_time_zone(value: Any) -> OffsetDateTime:
    """Convert an H2 ``TIMESTAMP WITH TIME ZONE`` value.

    Accepts the `TimestampWithTimeZone` dataclass or the driver's own object
    as exposed through a Java bridge. Drivers from H2 1.4.200 on report the
    offset in seconds instead of minutes; both are supported.
    """
    if isinstance(value, TimestampWithTimeZone):
        return convert_timestamp_with_offset(
            value.year, value.month, value.day,
            value.nanos_since_midnight, value.time_zone_offset_mins)

    year, month, day, nanos = (int(getattr(value, name)()) for name in _H2_ACCESSORS)
    if hasattr(value, 'getTimeZoneOffsetMins'):
        return convert_timestamp_with_offset(
            year, month, day, nanos, int(value.getTimeZoneOffsetMins()))

    seconds = int(value.getTimeZoneOffsetSeconds())
    logger.debug(f'Reading offset in seconds from {type(value).__name__}: {seconds}')
    return OffsetDateTime(
        LocalDateTime(CalendarDate(year, month, day), WallClockTime(nanos)),
        UtcOffset(seconds))


class TemporalConverter:
    """Read-path conversions for the four H2 temporal column types"""

    convert_date = staticmethod(convert_date)
    convert_time = staticmethod(convert_time)
    convert_timestamp = staticmethod(convert_timestamp)
    convert_timestamp_with_offset = staticmethod(convert_timestamp_with_offset)
    convert_timestamp_with_time_zone = staticmethod(convert_timestamp_with_time_zone)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
