"""
Column information from cursor descriptions.
"""
import logging
from typing import Any, Self

from h2temporal.adapters.registry import ReadConverterRegistry, SourceTag
from h2temporal.types import CalendarDate, LocalDateTime, OffsetDateTime
from h2temporal.types import WallClockTime

logger = logging.getLogger(__name__)

__all__ = ['Column', 'resolve_source_tag']

# java.sql.Types codes reported by the H2 JDBC driver
JDBC_TYPE_CODES: dict[int, SourceTag] = {
    91: SourceTag.DATE,
    92: SourceTag.TIME,
    93: SourceTag.TIMESTAMP,
    2014: SourceTag.TIMESTAMP_WITH_OFFSET,
    }

H2_TYPE_NAMES: dict[str, SourceTag] = {
    'date': SourceTag.DATE,
    'time': SourceTag.TIME,
    'timestamp': SourceTag.TIMESTAMP,
    'datetime': SourceTag.TIMESTAMP,
    'timestamp with time zone': SourceTag.TIMESTAMP_WITH_OFFSET,
    }

TARGET_TYPES: dict[SourceTag, type] = {
    SourceTag.DATE: CalendarDate,
    SourceTag.TIME: WallClockTime,
    SourceTag.TIMESTAMP: LocalDateTime,
    SourceTag.TIMESTAMP_WITH_OFFSET: OffsetDateTime,
    }


def resolve_source_tag(type_code: Any) -> SourceTag | None:
    """Source tag for a description type code, by JDBC code or H2 type name.

    >>> resolve_source_tag(2014)
    <SourceTag.TIMESTAMP_WITH_OFFSET: 'timestamp with time zone'>
    >>> resolve_source_tag('TIMESTAMP')
    <SourceTag.TIMESTAMP: 'timestamp'>
    >>> resolve_source_tag(4) is None
    True
    """
    if isinstance(type_code, bool):
        return None
    if isinstance(type_code, int):
        return JDBC_TYPE_CODES.get(type_code)
    if isinstance(type_code, str):
        return H2_TYPE_NAMES.get(' '.join(type_code.lower().split()))
    return None


class Column:
    """A result column with its type code and the Python type it reads as

    `python_type` is only set for temporal columns whose conversion is
    registered; other columns keep whatever type the driver produces and
    report None.
    """

    def __init__(self,
                 name: str,
                 type_code: Any,
                 python_type: type | None = None,
                 display_size: int | None = None,
                 internal_size: int | None = None,
                 precision: int | None = None,
                 scale: int | None = None,
                 nullable: bool | None = None):
        self.name = name
        self.type_code = type_code
        self.python_type = python_type
        self.display_size = display_size
        self.internal_size = internal_size
        self.precision = precision
        self.scale = scale
        self.nullable = nullable

    @classmethod
    def from_cursor_description(cls, description_item: Any,
                                registry: ReadConverterRegistry | None = None) -> Self:
        """Create a Column from one item of ``cursor.description``.
        """
        fields = list(description_item) + [None] * (7 - len(description_item))
        name, type_code, display_size, internal_size, precision, scale, nullable = fields[:7]
        python_type = None
        tag = resolve_source_tag(type_code)
        if tag is not None and registry is not None and tag in registry:
            python_type = TARGET_TYPES[tag]
        return cls(name=str(name), type_code=type_code, python_type=python_type,
                   display_size=display_size, internal_size=internal_size,
                   precision=precision, scale=scale, nullable=nullable)

    @staticmethod
    def from_description(description: Any,
                         registry: ReadConverterRegistry | None = None) -> list['Column']:
        if not description:
            return []
        return [Column.from_cursor_description(item, registry) for item in description]

    @staticmethod
    def get_names(columns: list['Column']) -> list[str]:
        return [c.name for c in columns]

    @staticmethod
    def get_column_types_dict(columns: list['Column']) -> dict[str, dict[str, Any]]:
        """Column types keyed by name, as attached to DataFrame attrs.
        """
        return {
            c.name: {'type_code': c.type_code, 'python_type': c.python_type}
            for c in columns
            }

    def __repr__(self) -> str:
        type_name = self.python_type.__name__ if self.python_type else None
        return f'Column(name={self.name!r}, type_code={self.type_code!r}, python_type={type_name})'


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
