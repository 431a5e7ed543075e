"""
Tests for read-path conversion of H2 temporal values.
"""
import datetime
from concurrent.futures import ThreadPoolExecutor

import pandas as pd
import pytest
from h2temporal.adapters.type_conversion import TemporalConverter, convert_date
from h2temporal.adapters.type_conversion import convert_time, convert_timestamp
from h2temporal.adapters.type_conversion import convert_timestamp_with_offset
from h2temporal.adapters.type_conversion import convert_timestamp_with_time_zone
from h2temporal.adapters.type_conversion import is_h2_timestamp_with_time_zone
from h2temporal.exceptions import InvalidDateError, InvalidOffsetError
from h2temporal.exceptions import InvalidTimeError
from h2temporal.types import NANOS_PER_DAY, CalendarDate, LocalDateTime
from h2temporal.types import OffsetDateTime, TimestampWithTimeZone, UtcOffset
from h2temporal.types import WallClockTime

NANOS_235010 = (23 * 3600 + 50 * 60 + 10) * 1_000_000_000


class TestConvertDate:

    @pytest.mark.parametrize(('year', 'month', 'day'), [
        (1, 1, 1),
        (1970, 1, 1),
        (2018, 12, 30),
        (2020, 2, 29),
        (9999, 12, 31),
        ])
    def test_round_trips_fields(self, year, month, day):
        date = convert_date(datetime.date(year, month, day))
        assert (date.year, date.month, date.day) == (year, month, day)

    def test_drops_time_of_day(self):
        assert convert_date(datetime.datetime(2018, 12, 30, 23, 59, 59)) == CalendarDate(2018, 12, 30)


class TestConvertTime:

    def test_truncated_time_stays_truncated(self):
        assert convert_time(datetime.time(23, 50, 10, 0)) == WallClockTime(85_810_000_000_000)

    def test_keeps_microseconds(self):
        assert convert_time(datetime.time(0, 0, 0, 1)).nano_of_day == 1_000

    def test_keeps_pandas_nanoseconds(self):
        ts = pd.Timestamp('2018-05-30 23:50:10.123456789')
        assert convert_time(ts).nano_of_day == NANOS_235010 + 123_456_789

    def test_midnight_and_last_microsecond(self):
        assert convert_time(datetime.time(0, 0)).nano_of_day == 0
        last = convert_time(datetime.time(23, 59, 59, 999_999))
        assert last.nano_of_day == NANOS_PER_DAY - 1_000


class TestConvertTimestamp:

    def test_splits_date_and_time(self):
        value = convert_timestamp(datetime.datetime(2018, 5, 30, 23, 50, 10))
        assert value == LocalDateTime(CalendarDate(2018, 5, 30), WallClockTime(NANOS_235010))

    def test_pandas_timestamp_keeps_nanoseconds(self):
        value = convert_timestamp(pd.Timestamp('2018-05-30 23:50:10.000000001'))
        assert value.time.nanosecond == 1
        assert value.isoformat() == '2018-05-30T23:50:10.000000001'


class TestConvertTimestampWithOffset:

    def test_reference_value(self):
        value = convert_timestamp_with_offset(2018, 5, 30, NANOS_235010, 120)
        assert value == OffsetDateTime.of(2018, 5, 30, 23, 50, 10, offset=UtcOffset.of_hours(2))
        assert value.isoformat() == '2018-05-30T23:50:10+02:00'

    def test_offset_preserved_for_every_minute(self):
        for minutes in range(-1080, 1081):
            value = convert_timestamp_with_offset(2018, 3, 25, 2 * 3600 * 10**9, minutes)
            assert value.offset.total_seconds == minutes * 60

    def test_offset_not_adjusted_across_dst_change(self):
        # 2018-03-25 02:30 does not exist in Europe/Berlin; stored +01:00 stays +01:00
        value = convert_timestamp_with_offset(2018, 3, 25, (2 * 3600 + 30 * 60) * 10**9, 60)
        assert value.isoformat() == '2018-03-25T02:30:00+01:00'

    def test_local_fields_not_normalized_to_utc(self):
        value = convert_timestamp_with_offset(2018, 12, 31, NANOS_235010, -600)
        assert value.date == CalendarDate(2018, 12, 31)
        assert value.time.hour == 23

    def test_one_day_of_nanos_is_invalid(self):
        with pytest.raises(InvalidTimeError):
            convert_timestamp_with_offset(2018, 5, 30, NANOS_PER_DAY, 0)

    def test_negative_nanos_is_invalid(self):
        with pytest.raises(InvalidTimeError):
            convert_timestamp_with_offset(2018, 5, 30, -1, 0)

    def test_invalid_date(self):
        with pytest.raises(InvalidDateError):
            convert_timestamp_with_offset(2018, 2, 30, 0, 0)

    @pytest.mark.parametrize('minutes', [1500, 1081, -1081, -1500])
    def test_out_of_range_offset(self, minutes):
        with pytest.raises(InvalidOffsetError):
            convert_timestamp_with_offset(2018, 5, 30, NANOS_235010, minutes)

    def test_date_checked_before_time(self):
        with pytest.raises(InvalidDateError):
            convert_timestamp_with_offset(2018, 13, 1, NANOS_PER_DAY, 1500)

    def test_pure_across_threads(self):
        args = (2018, 5, 30, NANOS_235010 + 987_654_321, -330)
        expected = convert_timestamp_with_offset(*args)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: convert_timestamp_with_offset(*args), range(200)))
        assert all(r == expected for r in results)
        assert {r.isoformat() for r in results} == {'2018-05-30T23:50:10.987654321-05:30'}


class TestConvertTimestampWithTimeZone:

    def test_driver_dataclass(self):
        raw = TimestampWithTimeZone(2018, 5, 30, NANOS_235010, 120)
        assert convert_timestamp_with_time_zone(raw).isoformat() == '2018-05-30T23:50:10+02:00'

    def test_bridge_object_with_offset_minutes(self, java_timestamp_with_time_zone):
        raw = java_timestamp_with_time_zone(2018, 5, 30, NANOS_235010, offset_mins=-480)
        assert is_h2_timestamp_with_time_zone(raw)
        assert convert_timestamp_with_time_zone(raw).isoformat() == '2018-05-30T23:50:10-08:00'

    def test_bridge_object_with_offset_seconds(self, java_timestamp_with_time_zone):
        raw = java_timestamp_with_time_zone(2018, 5, 30, NANOS_235010, offset_seconds=19_800)
        assert convert_timestamp_with_time_zone(raw).offset == UtcOffset(19_800)

    def test_bridge_object_errors(self, java_timestamp_with_time_zone):
        raw = java_timestamp_with_time_zone(2018, 5, 30, NANOS_PER_DAY, offset_mins=0)
        with pytest.raises(InvalidTimeError):
            convert_timestamp_with_time_zone(raw)

    def test_shape_detection(self):
        assert not is_h2_timestamp_with_time_zone(datetime.datetime(2018, 5, 30))
        assert not is_h2_timestamp_with_time_zone('2018-05-30T23:50:10+02:00')


def test_temporal_converter_exposes_functions():
    assert TemporalConverter.convert_date(datetime.date(2018, 12, 30)) == CalendarDate(2018, 12, 30)
    assert TemporalConverter.convert_time(datetime.time(23, 50, 10)) == WallClockTime.of(23, 50, 10)
    assert TemporalConverter.convert_timestamp_with_offset(2018, 5, 30, 0, 0) == OffsetDateTime.of(
        2018, 5, 30, offset=UtcOffset.UTC)


if __name__ == '__main__':
    __import__('pytest').main([__file__])
