"""
Tests for the reference-zone time context.
"""

import pytest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from src.analytics.time_context import (
    FixedClock,
    SystemClock,
    Weekday,
    bucket_of,
    context_at,
    format_hour,
    format_slot,
    next_occurrence,
    now as current_time,
    slot_in_zone,
)

PT = ZoneInfo("America/Los_Angeles")


class TestClocks:

    def test_fixed_clock_returns_utc(self):
        instant = datetime(2025, 6, 10, 12, 0, tzinfo=PT)
        clock = FixedClock(instant)
        assert clock.now() == instant
        assert clock.now().tzinfo == timezone.utc

    def test_fixed_clock_rejects_naive(self):
        with pytest.raises(ValueError):
            FixedClock(datetime(2025, 6, 10, 12, 0))

    def test_fixed_clock_advance(self, now):
        clock = FixedClock(now).advance(hours=2)
        assert clock.now() == now + timedelta(hours=2)

    def test_system_clock_is_aware(self):
        assert SystemClock().now().tzinfo is not None


class TestNow:

    def test_reference_zone_hour_and_weekday(self, now):
        ctx = context_at(now)
        assert ctx.hour == 12
        assert ctx.weekday == Weekday.TUE
        assert ctx.hours_until_midnight == 12

    def test_now_uses_injected_clock(self, now):
        ctx = current_time(clock=FixedClock(now))
        assert ctx.instant == now
        assert ctx.epoch_millis == int(now.timestamp() * 1000)

    def test_local_zone_is_display_only(self, now):
        ctx = context_at(now, local_zone="Europe/Paris")
        assert ctx.hour == 12            # PDT
        assert ctx.local_hour == 21      # CEST
        assert ctx.local_weekday == Weekday.TUE

    def test_local_defaults_to_reference(self, now):
        ctx = context_at(now)
        assert ctx.local_hour == ctx.hour

    def test_naive_instant_rejected(self):
        with pytest.raises(ValueError):
            context_at(datetime(2025, 6, 10, 12))


class TestBuckets:

    def test_bucket_crosses_midnight(self):
        # 03:00 UTC Tuesday is 20:00 PDT Monday
        weekday, hour = bucket_of(datetime(2025, 6, 10, 3, 0, tzinfo=timezone.utc))
        assert weekday == Weekday.MON
        assert hour == 20

    def test_bucket_across_dst_switch(self):
        # DST starts 2025-03-09 at 02:00 PST (10:00 UTC)
        before = bucket_of(datetime(2025, 3, 9, 9, 30, tzinfo=timezone.utc))
        after = bucket_of(datetime(2025, 3, 9, 10, 30, tzinfo=timezone.utc))
        assert before == (Weekday.SUN, 1)
        assert after == (Weekday.SUN, 3)

    def test_weekday_of_sunday(self):
        assert Weekday.of(datetime(2025, 6, 8, 12, tzinfo=PT)) == Weekday.SUN

    def test_weekday_order_starts_sunday(self):
        assert list(Weekday)[0] == Weekday.SUN
        assert list(Weekday)[-1] == Weekday.SAT


class TestLabels:

    @pytest.mark.parametrize("hour,expected", [
        (0, "12 AM"),
        (9, "9 AM"),
        (12, "12 PM"),
        (23, "11 PM"),
    ])
    def test_format_hour(self, hour, expected):
        assert format_hour(hour) == expected

    def test_format_slot(self):
        assert format_slot(Weekday.TUE, 9) == "Tuesday at 9 AM PT"

    def test_format_slot_other_zone(self):
        assert format_slot(Weekday.FRI, 15, "America/New_York") == "Friday at 3 PM ET"


class TestSlotConversion:

    def test_next_occurrence_same_week(self, now):
        occurrence = next_occurrence(Weekday.THU, 9, PT, now)
        assert occurrence == datetime(2025, 6, 12, 9, tzinfo=PT)

    def test_next_occurrence_rolls_to_next_week(self, now):
        # Tuesday 9 AM already passed at Tuesday noon
        occurrence = next_occurrence(Weekday.TUE, 9, PT, now)
        assert occurrence == datetime(2025, 6, 17, 9, tzinfo=PT)

    def test_slot_in_zone_shifts_hour(self, now):
        assert slot_in_zone(Weekday.TUE, 9, PT, "America/New_York", now) == (Weekday.TUE, 12)

    def test_slot_in_zone_shifts_day(self, now):
        assert slot_in_zone(Weekday.MON, 23, PT, "America/New_York", now) == (Weekday.TUE, 2)
