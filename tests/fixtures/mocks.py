"""
Fake H2 DB-API connection for tests.

The fake driver returns preconfigured result sets keyed by SQL text, with
values in the shapes the H2 JDBC driver produces: `datetime` objects for
DATE/TIME/TIMESTAMP and a decomposed TIMESTAMP WITH TIME ZONE value.

Usage:
    def test_read(fake_h2_connection):
        fake_h2_connection.add_result('SELECT d FROM t', [('d', 91)], [(date,)])
"""
import pytest


class JavaTimestampWithTimeZone:
    """Stand-in for org.h2.api.TimestampWithTimeZone seen through a Java bridge"""

    def __init__(self, year, month, day, nanos, offset_mins=None, offset_seconds=None):
        self._fields = (year, month, day, nanos)
        if offset_mins is not None:
            self.getTimeZoneOffsetMins = lambda: offset_mins
        if offset_seconds is not None:
            self.getTimeZoneOffsetSeconds = lambda: offset_seconds

    def getYear(self):
        return self._fields[0]

    def getMonth(self):
        return self._fields[1]

    def getDay(self):
        return self._fields[2]

    def getNanosSinceMidnight(self):
        return self._fields[3]


class FakeH2Cursor:

    def __init__(self, connection):
        self.connection = connection
        self.description = None
        self.rowcount = -1
        self.closed = False
        self._rows = []

    def execute(self, sql, params=None):
        self.connection.executed.append((sql, params))
        result = self.connection.results.get(sql)
        if result is None:
            self.description = None
            self._rows = []
            self.rowcount = 1
            return
        self.description, rows = result
        self._rows = list(rows)
        self.rowcount = len(self._rows)

    def executemany(self, sql, seq_of_parameters):
        for params in seq_of_parameters:
            self.connection.executed.append((sql, params))
        self.rowcount = len(seq_of_parameters)

    def fetchone(self):
        if not self._rows:
            return None
        return self._rows.pop(0)

    def fetchmany(self, size=1):
        chunk, self._rows = self._rows[:size], self._rows[size:]
        return chunk

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows

    def close(self):
        self.closed = True


class FakeH2Connection:

    def __init__(self):
        self.results = {}
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False
        self.cursors = []

    def add_result(self, sql, columns, rows):
        """Register a result set: columns are (name, type_code) pairs."""
        description = [(name, type_code, None, None, None, None, True)
                       for name, type_code in columns]
        self.results[sql] = (description, rows)

    def cursor(self):
        cursor = FakeH2Cursor(self)
        self.cursors.append(cursor)
        return cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


@pytest.fixture
def fake_h2_connection():
    """A fresh fake H2 DB-API connection."""
    return FakeH2Connection()


@pytest.fixture
def java_timestamp_with_time_zone():
    """Factory for bridge-style TIMESTAMP WITH TIME ZONE values."""
    return JavaTimestampWithTimeZone
