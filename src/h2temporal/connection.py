"""
Connection wrapper composing a DB-API connection with a read registry.

This module provides:
1. The `connect()` function for wrapping an open driver connection
2. The `ConnectionWrapper` class with query helpers

The ConnectionWrapper provides methods like:
- execute(sql, *args) - Execute SQL and return affected row count
- select(sql, *args) - Execute SELECT and return converted rows
- select_row(sql, *args) - Execute SELECT expecting exactly 1 row
- select_scalar(sql, *args) - Execute SELECT expecting exactly 1 value

Temporal conversion is local to each wrapper: the registry in its options is
the only place read conversions come from.
"""
import logging
from typing import Any, Self

from h2temporal.cursor import Cursor, load_data
from h2temporal.exceptions import ValidationError
from h2temporal.options import ConnectionOptions, use_iterdict_data_loader

__all__ = [
    'ConnectionWrapper',
    'connect',
]

logger = logging.getLogger(__name__)


class ConnectionWrapper:
    """Wraps a DB-API connection and converts temporal values on read.
    """

    def __init__(self, connection: Any, options: ConnectionOptions) -> None:
        self.connection = connection
        self.options = options
        self.calls = 0

    @property
    def registry(self) -> Any:
        return self.options.registry

    def __getattr__(self, name: str) -> Any:
        """Delegate attribute access to the underlying connection."""
        return getattr(self.connection, name)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def cursor(self) -> Cursor:
        return Cursor(self.connection.cursor(), self)

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    def close(self) -> None:
        logger.debug(f'Closing connection after {self.calls} calls')
        self.connection.close()

    def execute(self, sql: str, *args: Any) -> int:
        """Execute a SQL statement and return affected row count.
        """
        cursor = self.cursor()
        try:
            rowcount = cursor.execute(sql, *args)
        finally:
            cursor.close()
        self.calls += 1
        return rowcount

    def select(self, sql: str, *args: Any, **kwargs: Any) -> Any:
        """Execute a SELECT query and return rows through the data loader.
        """
        cursor = self.cursor()
        try:
            cursor.execute(sql, *args)
            result = load_data(cursor, **kwargs)
        finally:
            cursor.close()
        self.calls += 1
        return result

    @use_iterdict_data_loader
    def select_column(self, sql: str, *args: Any) -> list[Any]:
        """Execute a query and return the first column as a list.
        """
        return [next(iter(row.values())) for row in self.select(sql, *args)]

    @use_iterdict_data_loader
    def select_row(self, sql: str, *args: Any) -> dict:
        """Execute a query and return a single row.

        Raises ValidationError if the query returns zero or multiple rows.
        """
        data = self.select(sql, *args)
        if len(data) != 1:
            raise ValidationError(f'Expected one row, returned {len(data)}')
        return data[0]

    @use_iterdict_data_loader
    def select_row_or_none(self, sql: str, *args: Any) -> dict | None:
        """Execute a query and return a single row or None if no rows found.
        """
        data = self.select(sql, *args)
        if len(data) > 1:
            raise ValidationError(f'Expected at most one row, returned {len(data)}')
        return data[0] if data else None

    def select_scalar(self, sql: str, *args: Any) -> Any:
        """Execute a query and return a single scalar value.

        Raises ValidationError if the query returns zero or multiple rows.
        """
        row = self.select_row(sql, *args)
        return next(iter(row.values()))

    def select_scalar_or_none(self, sql: str, *args: Any) -> Any | None:
        """Execute a query and return a single scalar value or None if no rows found.
        """
        row = self.select_row_or_none(sql, *args)
        if row is None:
            return None
        return next(iter(row.values()))


def connect(connection: Any, options: ConnectionOptions | dict | None = None,
            **kwargs: Any) -> ConnectionWrapper:
    """Wrap an open DB-API connection.

    Options may be given as a ConnectionOptions, a dict, keyword arguments,
    or a dict updated by keyword arguments.

    Example:
        cn = connect(jaydebeapi.connect('org.h2.Driver', url, [user, pw], jar))
        cn.select_scalar('SELECT ts FROM events')
    """
    if isinstance(options, ConnectionOptions):
        if kwargs:
            raise ValueError('Pass either ConnectionOptions or keyword options, not both')
    else:
        options = ConnectionOptions(**{**(options or {}), **kwargs})
    logger.debug(f'Wrapping {type(connection).__module__}.{type(connection).__name__} '
                 f'with {options.registry!r}')
    return ConnectionWrapper(connection, options)
