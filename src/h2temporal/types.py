"""
Immutable temporal value objects returned on read.

The value types carry nanosecond precision, which the standard library
`datetime` types cannot. Conversions to pandas and NumPy keep every digit or raise
TypeConversionError when the value is outside the target range; conversion
to the standard library truncates to microseconds.

`TimestampWithTimeZone` is the decomposed shape in which the H2 driver hands
back a ``TIMESTAMP WITH TIME ZONE`` column. It is a raw driver value and is
not validated; validation happens when it is converted.

>>> OffsetDateTime.of(2018, 5, 30, 23, 50, 10, offset=UtcOffset.of_hours(2))
OffsetDateTime('2018-05-30T23:50:10+02:00')
>>> WallClockTime.of(23, 50, 10).nano_of_day
85810000000000
"""
import datetime
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Self

import numpy as np
import pandas as pd
from h2temporal.exceptions import InvalidDateError, InvalidOffsetError
from h2temporal.exceptions import InvalidTimeError, TypeConversionError

logger = logging.getLogger(__name__)

__all__ = [
    'NANOS_PER_SECOND',
    'NANOS_PER_DAY',
    'MAX_OFFSET_SECONDS',
    'CalendarDate',
    'WallClockTime',
    'LocalDateTime',
    'UtcOffset',
    'OffsetDateTime',
    'TimestampWithTimeZone',
]

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE
NANOS_PER_DAY = 24 * NANOS_PER_HOUR
MAX_OFFSET_SECONDS = 18 * 3600

_EPOCH_ORDINAL = datetime.date(1970, 1, 1).toordinal()
# int64 minimum is the NaT sentinel
_DATETIME64_NS_MIN = int(np.iinfo(np.int64).min) + 1
_DATETIME64_NS_MAX = int(np.iinfo(np.int64).max)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _format_fraction(nanos: int) -> str:
    """Render sub-second nanos as '.ddd' with trailing zeros trimmed.

    >>> _format_fraction(0)
    ''
    >>> _format_fraction(120_000_000)
    '.12'
    >>> _format_fraction(5)
    '.000000005'
    """
    if not nanos:
        return ''
    return '.' + f'{nanos:09d}'.rstrip('0')


def _to_pandas(value: Any) -> pd.Timestamp:
    """pandas Timestamp of a LocalDateTime or OffsetDateTime.

    Resolution stays at microseconds unless sub-microsecond digits are present;
    only those values are bound to the nanosecond range (1677..2262).
    """
    ts = pd.Timestamp(value.to_python())
    extra = value.time.nanosecond % 1000
    if not extra:
        return ts
    try:
        return ts + pd.Timedelta(extra, unit='ns')
    except (pd.errors.OutOfBoundsDatetime, OverflowError) as exc:
        raise TypeConversionError(
            f'{value.isoformat()} is outside the nanosecond pandas.Timestamp range') from exc


@dataclass(frozen=True, slots=True)
class CalendarDate:
    """A proleptic Gregorian calendar date."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not all(_is_int(v) for v in (self.year, self.month, self.day)):
            raise InvalidDateError(
                f'Date fields must be integers: {self.year!r}-{self.month!r}-{self.day!r}')
        try:
            datetime.date(self.year, self.month, self.day)
        except ValueError as exc:
            raise InvalidDateError(
                f'Invalid calendar date {self.year}-{self.month}-{self.day}: {exc}') from exc

    def isoformat(self) -> str:
        return f'{self.year:04d}-{self.month:02d}-{self.day:02d}'

    def to_python(self) -> datetime.date:
        return datetime.date(self.year, self.month, self.day)

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f'CalendarDate({self.isoformat()!r})'


@dataclass(frozen=True, slots=True)
class WallClockTime:
    """A time of day held as a single nanosecond-of-day count.

    >>> t = WallClockTime(85_810_000_000_123)
    >>> (t.hour, t.minute, t.second, t.nanosecond)
    (23, 50, 10, 123)
    >>> WallClockTime.of(t.hour, t.minute, t.second, t.nanosecond) == t
    True
    """

    nano_of_day: int

    def __post_init__(self) -> None:
        if not _is_int(self.nano_of_day):
            raise InvalidTimeError(f'Nano of day must be an integer: {self.nano_of_day!r}')
        if not 0 <= self.nano_of_day < NANOS_PER_DAY:
            raise InvalidTimeError(
                f'Nano of day {self.nano_of_day} outside [0, {NANOS_PER_DAY})')

    @classmethod
    def of(cls, hour: int, minute: int = 0, second: int = 0, nanosecond: int = 0) -> Self:
        """Build from discrete fields, each checked against its own range."""
        for name, value, limit in (('hour', hour, 24), ('minute', minute, 60),
                                   ('second', second, 60),
                                   ('nanosecond', nanosecond, NANOS_PER_SECOND)):
            if not _is_int(value) or not 0 <= value < limit:
                raise InvalidTimeError(f'{name} {value!r} outside [0, {limit})')
        return cls(hour * NANOS_PER_HOUR + minute * NANOS_PER_MINUTE
                   + second * NANOS_PER_SECOND + nanosecond)

    @property
    def hour(self) -> int:
        return self.nano_of_day // NANOS_PER_HOUR

    @property
    def minute(self) -> int:
        return self.nano_of_day // NANOS_PER_MINUTE % 60

    @property
    def second(self) -> int:
        return self.nano_of_day // NANOS_PER_SECOND % 60

    @property
    def nanosecond(self) -> int:
        return self.nano_of_day % NANOS_PER_SECOND

    def isoformat(self) -> str:
        return (f'{self.hour:02d}:{self.minute:02d}:{self.second:02d}'
                f'{_format_fraction(self.nanosecond)}')

    def to_python(self) -> datetime.time:
        """Standard library time; digits below the microsecond are dropped."""
        return datetime.time(self.hour, self.minute, self.second, self.nanosecond // 1000)

    def to_numpy(self) -> np.timedelta64:
        return np.timedelta64(self.nano_of_day, 'ns')

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f'WallClockTime({self.isoformat()!r})'


@dataclass(frozen=True, slots=True)
class LocalDateTime:
    """Date and time of day without any offset."""

    date: CalendarDate
    time: WallClockTime

    @classmethod
    def of(cls, year: int, month: int, day: int, hour: int = 0, minute: int = 0,
           second: int = 0, nanosecond: int = 0) -> Self:
        return cls(CalendarDate(year, month, day),
                   WallClockTime.of(hour, minute, second, nanosecond))

    def isoformat(self) -> str:
        return f'{self.date.isoformat()}T{self.time.isoformat()}'

    def to_python(self) -> datetime.datetime:
        """Naive standard library datetime; sub-microsecond digits are dropped."""
        return datetime.datetime.combine(self.date.to_python(), self.time.to_python())

    def to_pandas(self) -> pd.Timestamp:
        """Naive pandas Timestamp; every digit is kept."""
        return _to_pandas(self)

    def to_numpy(self) -> np.datetime64:
        """NumPy datetime64[ns]; raises TypeConversionError outside 1677..2262."""
        days = self.date.to_python().toordinal() - _EPOCH_ORDINAL
        nanos = days * NANOS_PER_DAY + self.time.nano_of_day
        if not _DATETIME64_NS_MIN <= nanos <= _DATETIME64_NS_MAX:
            raise TypeConversionError(
                f'{self.isoformat()} is outside the datetime64[ns] range')
        return np.datetime64(nanos, 'ns')

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f'LocalDateTime({self.isoformat()!r})'


@dataclass(frozen=True, slots=True)
class UtcOffset:
    """A fixed offset from UTC in seconds. Never a named zone.

    >>> UtcOffset.of_minutes(-330).isoformat()
    '-05:30'
    """

    total_seconds: int

    UTC: ClassVar['UtcOffset']

    def __post_init__(self) -> None:
        if not _is_int(self.total_seconds):
            raise InvalidOffsetError(f'Offset must be an integer: {self.total_seconds!r}')
        if not -MAX_OFFSET_SECONDS <= self.total_seconds <= MAX_OFFSET_SECONDS:
            raise InvalidOffsetError(
                f'Offset {self.total_seconds}s outside '
                f'[-{MAX_OFFSET_SECONDS}, {MAX_OFFSET_SECONDS}]')

    @classmethod
    def of_minutes(cls, minutes: int) -> Self:
        if not _is_int(minutes):
            raise InvalidOffsetError(f'Offset minutes must be an integer: {minutes!r}')
        return cls(minutes * 60)

    @classmethod
    def of_hours(cls, hours: int) -> Self:
        if not _is_int(hours):
            raise InvalidOffsetError(f'Offset hours must be an integer: {hours!r}')
        return cls(hours * 3600)

    def isoformat(self) -> str:
        sign = '-' if self.total_seconds < 0 else '+'
        hours, rest = divmod(abs(self.total_seconds), 3600)
        minutes, seconds = divmod(rest, 60)
        text = f'{sign}{hours:02d}:{minutes:02d}'
        if seconds:
            text += f':{seconds:02d}'
        return text

    def to_python(self) -> datetime.timezone:
        return datetime.timezone(datetime.timedelta(seconds=self.total_seconds))

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f'UtcOffset({self.isoformat()!r})'


UtcOffset.UTC = UtcOffset(0)


@dataclass(frozen=True, slots=True)
class OffsetDateTime:
    """Local date and time paired with the offset it was stored with."""

    local: LocalDateTime
    offset: UtcOffset

    @classmethod
    def of(cls, year: int, month: int, day: int, hour: int = 0, minute: int = 0,
           second: int = 0, nanosecond: int = 0, *, offset: UtcOffset) -> Self:
        return cls(LocalDateTime.of(year, month, day, hour, minute, second, nanosecond),
                   offset)

    @property
    def date(self) -> CalendarDate:
        return self.local.date

    @property
    def time(self) -> WallClockTime:
        return self.local.time

    def isoformat(self) -> str:
        return f'{self.local.isoformat()}{self.offset.isoformat()}'

    def to_python(self) -> datetime.datetime:
        """Aware datetime with a fixed `datetime.timezone`.

        Sub-microsecond digits are dropped.
        """
        return self.local.to_python().replace(tzinfo=self.offset.to_python())

    def to_pandas(self) -> pd.Timestamp:
        return _to_pandas(self)

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f'OffsetDateTime({self.isoformat()!r})'


@dataclass(frozen=True, slots=True)
class TimestampWithTimeZone:
    """H2's decomposed ``TIMESTAMP WITH TIME ZONE`` value as the driver returns it.

    Field names follow the driver accessors (``getYear``, ``getMonth``,
    ``getDay``, ``getNanosSinceMidnight``, ``getTimeZoneOffsetMins``).
    """

    year: int
    month: int
    day: int
    nanos_since_midnight: int
    time_zone_offset_mins: int


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
