"""
Package exception classes.
"""


class DatabaseError(Exception):
    """Base class for all h2temporal errors.
    """


class TypeConversionError(DatabaseError):
    """Error converting a value read from the database.
    """


class InvalidDateError(TypeConversionError):
    """Year, month and day do not form a valid calendar date.
    """


class InvalidTimeError(TypeConversionError):
    """Time of day outside [0, 86_400_000_000_000) nanoseconds.
    """


class InvalidOffsetError(TypeConversionError):
    """UTC offset outside -18:00..+18:00.
    """


class ValidationError(DatabaseError):
    """Error in input validation or result shape.
    """
