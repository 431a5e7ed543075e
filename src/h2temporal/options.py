from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any

import pandas as pd
from h2temporal.adapters.column_info import Column
from h2temporal.adapters.registry import ReadConverterRegistry
from h2temporal.adapters.registry import default_registry, passthrough_registry

__all__ = [
    'ConnectionOptions',
    'pandas_numpy_data_loader',
    'iterdict_data_loader',
    'use_iterdict_data_loader',
]


def use_iterdict_data_loader(func):
    """Temporarily use default dict loader over user-specified loader"""

    @wraps(func)
    def inner(*args, **kwargs):
        cn = args[0]

        original_data_loader = cn.options.data_loader
        cn.options.data_loader = iterdict_data_loader

        try:
            return func(*args, **kwargs)
        finally:
            cn.options.data_loader = original_data_loader

    return inner


def iterdict_data_loader(data, columns, **kwargs) -> list[dict]:
    """Minimal data loader.

    Accepts additional keyword arguments for compatibility with other data
    loaders, but doesn't use them.
    """
    if not data:
        return []
    return list(data)


def _to_pandas_value(value: Any) -> Any:
    to_pandas = getattr(value, 'to_pandas', None)
    return to_pandas() if callable(to_pandas) else value


def pandas_numpy_data_loader(data, columns, **kwargs) -> pd.DataFrame:
    """Standard pandas DataFrame loader using NumPy.

    Always returns a DataFrame, with columns preserved for empty results.
    Timestamps are rendered as `pandas.Timestamp` values keeping every digit,
    offset-aware ones with their stored fixed offset. Type information is
    kept in the DataFrame.attrs attribute.
    """
    names = Column.get_names(columns)
    if not data:
        df = pd.DataFrame(columns=names)
    else:
        records = [{k: _to_pandas_value(v) for k, v in row.items()} for row in data]
        df = pd.DataFrame.from_records(records, columns=names)
    df.attrs['column_types'] = Column.get_column_types_dict(columns)
    return df


@dataclass
class ConnectionOptions:
    """Options

    - registry: read converters applied to fetched rows (default: the four
      H2 temporal conversions)
    - convert_temporal: set False to read driver values unconverted
    - data_loader: callable(rows, columns, **kwargs) shaping `select` results
    - arraysize: default batch size for `Cursor.fetchmany`
    """
    registry: ReadConverterRegistry | None = None
    convert_temporal: bool = True
    data_loader: Callable[..., Any] | None = None
    arraysize: int = 1

    def __post_init__(self):
        if not isinstance(self.convert_temporal, bool):
            raise ValueError('convert_temporal must be a bool')
        if self.registry is not None and not isinstance(self.registry, ReadConverterRegistry):
            raise ValueError('registry must be a ReadConverterRegistry')
        if self.data_loader is not None and not callable(self.data_loader):
            raise ValueError('data_loader must be callable')
        if not isinstance(self.arraysize, int) or self.arraysize < 1:
            raise ValueError('arraysize must be a positive integer')
        if self.registry is not None and not self.convert_temporal:
            raise ValueError('Pass either a registry or convert_temporal=False, not both')
        if not self.convert_temporal:
            self.registry = passthrough_registry()
        elif self.registry is None:
            self.registry = default_registry()
        if self.data_loader is None:
            self.data_loader = iterdict_data_loader
