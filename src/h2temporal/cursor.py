"""
Cursor wrapper applying read conversions to fetched rows.

Implements the fetch side of Python DB-API 2.0 (PEP-249) over any driver
cursor. Parameters are forwarded to the driver as given.
"""
import logging
import time
from collections.abc import Iterator, Sequence
from functools import wraps
from typing import Any

from h2temporal.adapters.column_info import Column
from h2temporal.exceptions import TypeConversionError

logger = logging.getLogger(__name__)

__all__ = ['Cursor', 'IterChunk', 'extract_column_info', 'load_data']


def dumpsql(func):
    """Decorator for logging SQL queries and parameters."""
    @wraps(func)
    def wrapper(self, operation: str, *args: Any, **kwargs: Any):
        start = time.time()
        logger.debug(f'SQL:\n{operation}\nargs: {args}')
        try:
            return func(self, operation, *args, **kwargs)
        except Exception:
            logger.error(f'Error with query:\nSQL:\n{operation}\nargs: {args}')
            raise
        finally:
            elapsed = time.time() - start
            logger.debug(f'Query time: {elapsed:.4f}s')
    return wrapper


class Cursor:
    """DB-API cursor wrapper whose fetch methods return converted rows.

    Conversion errors raised while fetching are logged and propagate to the
    caller.
    """

    def __init__(self, cursor: Any, connection_wrapper: Any) -> None:
        """Initialize cursor wrapper.

        Args:
            cursor: The underlying database cursor
            connection_wrapper: The connection wrapper that created this cursor
        """
        self.dbapi_cursor = cursor
        self.connwrapper = connection_wrapper
        self._arraysize: int = connection_wrapper.options.arraysize

    @property
    def registry(self) -> Any:
        return self.connwrapper.registry

    def __getattr__(self, name: str) -> Any:
        """Delegate members to underlying cursor."""
        return getattr(self.dbapi_cursor, name)

    def __iter__(self) -> Iterator:
        """Return iterator over converted rows."""
        for row in IterChunk(self.dbapi_cursor):
            yield self._convert_row(row)

    def __enter__(self) -> 'Cursor':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    def description(self) -> Sequence | None:
        """Column descriptions for last query."""
        return self.dbapi_cursor.description

    @property
    def rowcount(self) -> int:
        """Number of rows produced/affected by last operation."""
        return self.dbapi_cursor.rowcount

    @property
    def arraysize(self) -> int:
        """Number of rows fetched by fetchmany()."""
        return self._arraysize

    @arraysize.setter
    def arraysize(self, value: int) -> None:
        self._arraysize = value

    def close(self) -> None:
        """Close cursor."""
        self.dbapi_cursor.close()

    def _convert_row(self, row: Any) -> Any:
        try:
            return self.registry.convert_row(row)
        except TypeConversionError as exc:
            logger.error(f'Error converting fetched row {row!r}: {exc}')
            raise

    def fetchone(self) -> Any:
        """Fetch next row."""
        return self._convert_row(self.dbapi_cursor.fetchone())

    def fetchmany(self, size: int | None = None) -> list:
        """Fetch next set of rows."""
        if size is None:
            size = self.arraysize
        return [self._convert_row(row) for row in self.dbapi_cursor.fetchmany(size)]

    def fetchall(self) -> list:
        """Fetch all remaining rows."""
        return [self._convert_row(row) for row in self.dbapi_cursor.fetchall()]

    def setinputsizes(self, sizes: Sequence) -> None:
        """Predefine memory areas for parameters."""

    def setoutputsize(self, size: int, column: int | None = None) -> None:
        """Set column buffer size for large columns."""

    @dumpsql
    def execute(self, operation: str, *args: Any) -> int:
        """Execute a database operation; parameters reach the driver unmodified."""
        if not args:
            self.dbapi_cursor.execute(operation)
        elif len(args) == 1 and isinstance(args[0], list | tuple | dict):
            self.dbapi_cursor.execute(operation, args[0])
        else:
            self.dbapi_cursor.execute(operation, args)
        return self.dbapi_cursor.rowcount

    @dumpsql
    def executemany(self, operation: str, seq_of_parameters: Sequence) -> int:
        """Execute against all parameter sequences."""
        if not seq_of_parameters:
            logger.warning('executemany called with no parameter sequences')
            return 0
        self.dbapi_cursor.executemany(operation, seq_of_parameters)
        return self.dbapi_cursor.rowcount


def IterChunk(cursor: Any, size: int = 5000) -> Iterator:
    """Iterate through cursor results in chunks."""
    while True:
        chunked = cursor.fetchmany(size)
        if not chunked:
            break
        yield from chunked


def extract_column_info(cursor: Cursor) -> list[Column]:
    """Column information for the last query of a wrapped cursor."""
    return Column.from_description(cursor.description, cursor.registry)


def _as_dict(row: Any, names: list[str]) -> dict:
    if isinstance(row, dict):
        return row
    return dict(zip(names, row))


def load_data(cursor: Cursor, columns: list[Column] | None = None, **kwargs: Any) -> Any:
    """Fetch remaining rows as dicts and hand them to the configured data loader."""
    if columns is None:
        columns = extract_column_info(cursor)
    names = Column.get_names(columns)
    data = [_as_dict(row, names) for row in cursor.fetchall()]
    data_loader = cursor.connwrapper.options.data_loader
    return data_loader(data, columns, **kwargs)
