"""
Time context for launch analytics.

Every "best day / best hour" computation is bucketed in a fixed reference
zone (the leaderboard's operating zone, Pacific Time), whatever the caller's
locale. Conversions go through zoneinfo on aware datetimes, never through
locale-formatted strings, so DST transitions stay exact.

The wall clock is injectable: pass a FixedClock to freeze "now".
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo

REFERENCE_TIMEZONE = "America/Los_Angeles"

ZoneLike = Union[str, ZoneInfo]


class Weekday(IntEnum):
    """Day of week, enumerated Sunday first (tie-break order)."""
    SUN = 0
    MON = 1
    TUE = 2
    WED = 3
    THU = 4
    FRI = 5
    SAT = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def full_name(self) -> str:
        return _FULL_NAMES[self]

    @classmethod
    def of(cls, moment: datetime) -> "Weekday":
        # datetime.weekday() is Monday = 0
        return cls((moment.weekday() + 1) % 7)


_FULL_NAMES = {
    Weekday.SUN: "Sunday",
    Weekday.MON: "Monday",
    Weekday.TUE: "Tuesday",
    Weekday.WED: "Wednesday",
    Weekday.THU: "Thursday",
    Weekday.FRI: "Friday",
    Weekday.SAT: "Saturday",
}

_ZONE_LABELS = {
    "America/Los_Angeles": "PT",
    "America/New_York": "ET",
    "America/Chicago": "CT",
    "America/Denver": "MT",
    "UTC": "UTC",
}


def resolve_zone(zone: ZoneLike) -> ZoneInfo:
    """Accept a zone name or a ZoneInfo."""
    if isinstance(zone, ZoneInfo):
        return zone
    return ZoneInfo(zone)


def zone_label(zone: ZoneLike) -> str:
    """Short label for a zone ("PT" for America/Los_Angeles)."""
    key = resolve_zone(zone).key
    return _ZONE_LABELS.get(key, key)


class Clock:
    """Source of the current instant (timezone-aware, UTC)."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    """Wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Frozen clock for tests and replays."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            raise ValueError("FixedClock requires a timezone-aware instant")
        self.instant = instant.astimezone(timezone.utc)

    def now(self) -> datetime:
        return self.instant

    def advance(self, **delta) -> "FixedClock":
        """Return a new clock moved by the given timedelta keywords."""
        return FixedClock(self.instant + timedelta(**delta))


@dataclass(frozen=True)
class TimeContext:
    """
    "Now" seen from the reference zone and from the caller's zone.

    `reference` drives every bucket; `local` is display only.
    """
    instant: datetime
    reference: datetime
    local: datetime

    @property
    def hour(self) -> int:
        return self.reference.hour

    @property
    def weekday(self) -> Weekday:
        return Weekday.of(self.reference)

    @property
    def epoch_millis(self) -> int:
        return int(self.instant.timestamp() * 1000)

    @property
    def local_hour(self) -> int:
        return self.local.hour

    @property
    def local_weekday(self) -> Weekday:
        return Weekday.of(self.local)

    @property
    def hours_until_midnight(self) -> int:
        return 24 - self.reference.hour

    @property
    def reference_zone(self) -> ZoneInfo:
        return self.reference.tzinfo


def now(
    reference_zone: ZoneLike = REFERENCE_TIMEZONE,
    clock: Optional[Clock] = None,
    local_zone: Optional[ZoneLike] = None,
) -> TimeContext:
    """
    Resolve the current instant in the reference zone (and the caller's zone).

    Args:
        reference_zone: Zone used for day/hour buckets.
        clock: Instant source. Defaults to the system clock.
        local_zone: Caller's zone. Defaults to the reference zone.

    Returns:
        TimeContext for the current instant.
    """
    instant = (clock or SystemClock()).now()
    return context_at(instant, reference_zone, local_zone)


def context_at(
    instant: datetime,
    reference_zone: ZoneLike = REFERENCE_TIMEZONE,
    local_zone: Optional[ZoneLike] = None,
) -> TimeContext:
    """Build a TimeContext for an explicit aware instant."""
    if instant.tzinfo is None:
        raise ValueError("instant must be timezone-aware")
    ref = resolve_zone(reference_zone)
    local = resolve_zone(local_zone) if local_zone is not None else ref
    return TimeContext(
        instant=instant.astimezone(timezone.utc),
        reference=instant.astimezone(ref),
        local=instant.astimezone(local),
    )


def bucket_of(moment: datetime, zone: ZoneLike = REFERENCE_TIMEZONE) -> Tuple[Weekday, int]:
    """(weekday, hour) of an aware instant, in the given zone."""
    converted = moment.astimezone(resolve_zone(zone))
    return Weekday.of(converted), converted.hour


def format_hour(hour: int) -> str:
    """0 -> "12 AM", 13 -> "1 PM"."""
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display} {suffix}"


def format_slot(weekday: Weekday, hour: int, zone: ZoneLike = REFERENCE_TIMEZONE) -> str:
    """Human label of a launch slot, e.g. "Tuesday at 9 AM PT"."""
    return f"{Weekday(weekday).full_name} at {format_hour(hour)} {zone_label(zone)}"


def next_occurrence(weekday: Weekday, hour: int, zone: ZoneLike, anchor: datetime) -> datetime:
    """
    First instant at or after `anchor` falling on (weekday, hour) in `zone`.

    Built from the zone's wall clock, so the slot keeps its local hour across
    DST changes.
    """
    tz = resolve_zone(zone)
    local_anchor = anchor.astimezone(tz)
    days_ahead = (int(weekday) - int(Weekday.of(local_anchor))) % 7
    day = (local_anchor + timedelta(days=days_ahead)).date()
    candidate = datetime(day.year, day.month, day.day, hour, tzinfo=tz)
    if candidate < local_anchor:
        day = day + timedelta(days=7)
        candidate = datetime(day.year, day.month, day.day, hour, tzinfo=tz)
    return candidate


def slot_in_zone(
    weekday: Weekday,
    hour: int,
    from_zone: ZoneLike,
    to_zone: ZoneLike,
    anchor: datetime,
) -> Tuple[Weekday, int]:
    """
    Convert a reference-zone launch slot to the caller's zone.

    Uses the next occurrence of the slot after `anchor`, since the offset
    between two zones depends on the date.
    """
    occurrence = next_occurrence(weekday, hour, from_zone, anchor)
    return bucket_of(occurrence, to_zone)
