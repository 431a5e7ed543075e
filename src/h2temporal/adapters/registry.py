"""
Read-path conversion registry.

Each value read from a result row is classified into one of four source tags
by `source_tag`. A `ReadConverterRegistry` maps tags to conversion functions;
values with no tag, or with a tag that has no registered function, are
returned unchanged.

The registry is a plain object handed to a connection when it is created.
Nothing is registered globally, so two connections in the same process can
read the same column with different registries.

Usage:
    registry = default_registry()
    cn = h2temporal.connect(dbapi_connection, registry=registry)

    # Or convert by hand
    registry.convert_row((1, datetime.date(2018, 12, 30)))
"""
import datetime
import enum
import logging
from collections.abc import Callable, Mapping
from typing import Any, Self

from h2temporal.adapters.type_conversion import TemporalConverter
from h2temporal.adapters.type_conversion import is_h2_timestamp_with_time_zone

logger = logging.getLogger(__name__)

__all__ = [
    'SourceTag',
    'source_tag',
    'ReadConverterRegistry',
    'default_registry',
    'passthrough_registry',
]


class SourceTag(enum.Enum):
    """Driver-native temporal shapes that have a read conversion."""

    DATE = 'date'
    TIME = 'time'
    TIMESTAMP = 'timestamp'
    TIMESTAMP_WITH_OFFSET = 'timestamp with time zone'


def source_tag(value: Any) -> SourceTag | None:
    """Classify a raw column value.

    `datetime.datetime` is checked before `datetime.date` because it is a
    subclass. Offset-aware datetimes and times are not H2 driver shapes and
    fall through to None.

    >>> source_tag(datetime.date(2018, 12, 30))
    <SourceTag.DATE: 'date'>
    >>> source_tag(datetime.datetime(2018, 5, 30, 23, 50, 10))
    <SourceTag.TIMESTAMP: 'timestamp'>
    >>> source_tag('2018-12-30') is None
    True
    """
    match value:
        case None:
            return None
        case datetime.datetime() if value.tzinfo is None:
            return SourceTag.TIMESTAMP
        case datetime.datetime():
            return None
        case datetime.date():
            return SourceTag.DATE
        case datetime.time() if value.tzinfo is None:
            return SourceTag.TIME
        case datetime.time():
            return None
        case _ if is_h2_timestamp_with_time_zone(value):
            return SourceTag.TIMESTAMP_WITH_OFFSET
        case _:
            return None


class ReadConverterRegistry:
    """Mapping of source tag to read conversion

    The registry only delegates; the conversions themselves live in
    `TemporalConverter`.
    """

    def __init__(self, converters: Mapping[SourceTag, Callable[[Any], Any]] | None = None) -> None:
        self._converters: dict[SourceTag, Callable[[Any], Any]] = {}
        for tag, func in (converters or {}).items():
            self.register(tag, func)

    def register(self, tag: SourceTag, func: Callable[[Any], Any]) -> None:
        """Register or replace the conversion for a source tag.
        """
        if not isinstance(tag, SourceTag):
            raise TypeError(f'tag must be a SourceTag, got {tag!r}')
        if not callable(func):
            raise TypeError(f'converter for {tag.name} must be callable')
        self._converters[tag] = func
        logger.debug(f'Registered read converter for {tag.name}: {getattr(func, "__name__", func)}')

    def unregister(self, tag: SourceTag) -> None:
        """Remove a conversion; values with that tag then pass through.
        """
        if self._converters.pop(tag, None) is not None:
            logger.debug(f'Unregistered read converter for {tag.name}')

    def converter_for(self, tag: SourceTag | None) -> Callable[[Any], Any] | None:
        if tag is None:
            return None
        return self._converters.get(tag)

    @property
    def tags(self) -> frozenset[SourceTag]:
        return frozenset(self._converters)

    def copy(self) -> Self:
        return type(self)(self._converters)

    def convert_value(self, value: Any) -> Any:
        """Convert a single column value, or return it unchanged.
        """
        func = self.converter_for(source_tag(value))
        if func is None:
            return value
        return func(value)

    def convert_row(self, row: Any) -> Any:
        """Convert every value of a row.

        Tuples, namedtuples and lists keep their type. Mappings and mapping-like rows
        (``sqlite3.Row``) come back as plain dicts.
        """
        if row is None:
            return None
        if isinstance(row, Mapping):
            return {k: self.convert_value(v) for k, v in row.items()}
        if hasattr(row, 'keys') and callable(row.keys):
            return {k: self.convert_value(row[k]) for k in row.keys()}  # noqa: SIM118
        if isinstance(row, tuple) and hasattr(row, '_make'):
            return row._make(self.convert_value(v) for v in row)
        if isinstance(row, list | tuple):
            return type(row)(self.convert_value(v) for v in row)
        return self.convert_value(row)

    def __contains__(self, tag: SourceTag) -> bool:
        return tag in self._converters

    def __len__(self) -> int:
        return len(self._converters)

    def __repr__(self) -> str:
        names = ', '.join(sorted(tag.name for tag in self._converters))
        return f'ReadConverterRegistry({names})'


def default_registry() -> ReadConverterRegistry:
    """New registry with the four H2 temporal conversions.

    >>> sorted(tag.name for tag in default_registry().tags)
    ['DATE', 'TIME', 'TIMESTAMP', 'TIMESTAMP_WITH_OFFSET']
    """
    return ReadConverterRegistry({
        SourceTag.DATE: TemporalConverter.convert_date,
        SourceTag.TIME: TemporalConverter.convert_time,
        SourceTag.TIMESTAMP: TemporalConverter.convert_timestamp,
        SourceTag.TIMESTAMP_WITH_OFFSET: TemporalConverter.convert_timestamp_with_time_zone,
        })


def passthrough_registry() -> ReadConverterRegistry:
    """New registry with nothing registered; every value passes through.
    """
    return ReadConverterRegistry()


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
