"""
Nanosecond-precise, offset-preserving temporal values for H2 over DB-API.

Values read back from H2 ``DATE``, ``TIME``, ``TIMESTAMP`` and
``TIMESTAMP WITH TIME ZONE`` columns are converted by the registry a
connection is created with. Everything else passes through as the driver
returned it. Query parameters are never converted.

All query operations can be called either as:
- Module functions: h2temporal.select(cn, sql, *args)
- ConnectionWrapper methods: cn.select(sql, *args)
"""
__version__ = '0.1.0'

from typing import Any

from h2temporal.adapters import Column, ReadConverterRegistry, SourceTag
from h2temporal.adapters import TemporalConverter, convert_date, convert_time
from h2temporal.adapters import convert_timestamp, convert_timestamp_with_offset
from h2temporal.adapters import convert_timestamp_with_time_zone
from h2temporal.adapters import default_registry, passthrough_registry
from h2temporal.adapters import source_tag
from h2temporal.connection import ConnectionWrapper, connect
from h2temporal.exceptions import DatabaseError, InvalidDateError
from h2temporal.exceptions import InvalidOffsetError, InvalidTimeError
from h2temporal.exceptions import TypeConversionError, ValidationError
from h2temporal.options import ConnectionOptions, iterdict_data_loader
from h2temporal.options import pandas_numpy_data_loader
from h2temporal.types import CalendarDate, LocalDateTime, OffsetDateTime
from h2temporal.types import TimestampWithTimeZone, UtcOffset, WallClockTime


def execute(cn: ConnectionWrapper, sql: str, *args: Any) -> int:
    """Execute a SQL statement and return affected row count.
    """
    return cn.execute(sql, *args)


delete = execute
insert = execute
update = execute


def select(cn: ConnectionWrapper, sql: str, *args: Any, **kwargs: Any) -> Any:
    """Execute a SELECT query.
    """
    return cn.select(sql, *args, **kwargs)


def select_column(cn: ConnectionWrapper, sql: str, *args: Any) -> list[Any]:
    """Execute a query and return a single column as a list.
    """
    return cn.select_column(sql, *args)


def select_row(cn: ConnectionWrapper, sql: str, *args: Any) -> Any:
    """Execute a query and return a single row.

    Raises ValidationError if the query returns zero or multiple rows.
    """
    return cn.select_row(sql, *args)


def select_row_or_none(cn: ConnectionWrapper, sql: str, *args: Any) -> Any | None:
    """Execute a query and return a single row or None if no rows found.
    """
    return cn.select_row_or_none(sql, *args)


def select_scalar(cn: ConnectionWrapper, sql: str, *args: Any) -> Any:
    """Execute a query and return a single scalar value.

    Raises ValidationError if the query returns zero or multiple rows.
    """
    return cn.select_scalar(sql, *args)


def select_scalar_or_none(cn: ConnectionWrapper, sql: str, *args: Any) -> Any | None:
    """Execute a query and return a single scalar value or None if no rows found.
    """
    return cn.select_scalar_or_none(sql, *args)


__all__ = [
    'connect',
    'ConnectionWrapper',
    'ConnectionOptions',
    'execute',
    'delete',
    'insert',
    'update',
    'select',
    'select_column',
    'select_row',
    'select_row_or_none',
    'select_scalar',
    'select_scalar_or_none',
    'iterdict_data_loader',
    'pandas_numpy_data_loader',
    'Column',
    'SourceTag',
    'source_tag',
    'ReadConverterRegistry',
    'default_registry',
    'passthrough_registry',
    'TemporalConverter',
    'convert_date',
    'convert_time',
    'convert_timestamp',
    'convert_timestamp_with_offset',
    'convert_timestamp_with_time_zone',
    'CalendarDate',
    'WallClockTime',
    'LocalDateTime',
    'UtcOffset',
    'OffsetDateTime',
    'TimestampWithTimeZone',
    'DatabaseError',
    'TypeConversionError',
    'InvalidDateError',
    'InvalidTimeError',
    'InvalidOffsetError',
    'ValidationError',
]
