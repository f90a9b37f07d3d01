"""Tests for reminder wall-clock time helpers."""

from datetime import date, datetime, timezone

import pytz

from core.timezone import get_local_tz, local_datetime, utc_now


class TestLocalDatetime:
    def test_fixed_offset_defaults_to_utc_plus_two(self):
        result = local_datetime(date(2025, 6, 1), 10, 0)
        assert result == datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)

    def test_fixed_offset_ignores_daylight_saving(self):
        """Summer and winter dates both use +2 unless a zone is configured."""
        summer = local_datetime(date(2025, 7, 1), 18, 30)
        winter = local_datetime(date(2025, 1, 1), 18, 30)
        assert summer.hour == winter.hour == 16
        assert summer.minute == 30

    def test_result_is_utc(self):
        result = local_datetime(date(2025, 6, 1), 21, 0)
        assert result.utcoffset().total_seconds() == 0

    def test_custom_offset(self):
        result = local_datetime(date(2025, 6, 1), 10, 0, utc_offset_hours=-5)
        assert result == datetime(2025, 6, 1, 15, 0, tzinfo=timezone.utc)

    def test_named_zone_uses_summer_time(self):
        result = local_datetime(date(2025, 7, 1), 10, 0, tz_name="Asia/Jerusalem")
        assert result == datetime(2025, 7, 1, 7, 0, tzinfo=timezone.utc)

    def test_named_zone_uses_winter_time(self):
        result = local_datetime(date(2025, 1, 15), 10, 0, tz_name="Asia/Jerusalem")
        assert result == datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc)

    def test_evening_before_crosses_midnight_utc_correctly(self):
        """00:30 local on June 1st is still May 31st in UTC."""
        result = local_datetime(date(2025, 6, 1), 0, 30)
        assert result == datetime(2025, 5, 31, 22, 30, tzinfo=timezone.utc)


class TestGetLocalTz:
    def test_unknown_zone_falls_back_to_fixed_offset(self, caplog):
        tz = get_local_tz(2, "Invalid/Timezone")
        assert tz == pytz.FixedOffset(120)
        assert any("Invalid/Timezone" in r.message for r in caplog.records)

    def test_named_zone(self):
        assert get_local_tz(2, "Asia/Jerusalem").zone == "Asia/Jerusalem"


def test_utc_now_is_aware():
    assert utc_now().tzinfo is not None
