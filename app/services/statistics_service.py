# app/services/statistics_service.py
"""
Occupancy statistics: slot counts per status, session history, and the
time-bucketed occupancy curve used by the dashboard traffic-flow chart.

All computations read each collection once (one snapshot per call) and never
mutate or emit anything.

Time buckets are *sampled*: a session counts toward a bucket when it was open
at any point of the bucket window, so a bucket reflects how many sessions
touched the window, not the peak concurrency inside it.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from app.config import settings
from app.exceptions import ValidationFailureError
from app.schemas.parking_slot import SlotStatus, SlotStatisticsOut, ZoneStatisticsOut
from app.schemas.parking_session import SessionStatus
from app.schemas.statistics import TimeBucketOut
from app.services.record_store import SLOTS, SESSIONS
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Sunday = 0 … Saturday = 6
WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
DAY_OF_WEEK = {name: index for index, name in enumerate(WEEKDAYS)}
DAY_MODE_ORDER = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

FILTER_TYPES = {"hour", "day"}
BUCKET_SPREAD = 3   # hour mode covers selected hour ± 3


def round_half_up(value: float) -> int:
    """Round .5 upwards (round() in Python rounds half to even)."""
    return int(math.floor(value + 0.5))


def day_index(moment: datetime) -> int:
    """Weekday number with Sunday = 0."""
    return (moment.weekday() + 1) % 7


def percentage(part: int, total: int) -> int:
    return round_half_up(part / total * 100) if total > 0 else 0


def hour_label(hour: int) -> str:
    """12-hour clock label: 0 → "12AM", 14 → "2PM"."""
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}{suffix}"


def parse_date_filter(value, field: str) -> Optional[datetime]:
    """Parse an ISO date / datetime filter into a naive UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            raise ValidationFailureError(f"Invalid {field}: {value!r}") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def resolve_day_of_week(day_of_week: Optional[str]) -> Optional[int]:
    if not day_of_week:
        return None
    index = DAY_OF_WEEK.get(day_of_week.strip().capitalize())
    if index is None:
        raise ValidationFailureError(f"Unknown dayOfWeek: {day_of_week!r}")
    return index


# ── Point-in-time ────────────────────────────────────────────────────────────
def count_slots(slots: list) -> SlotStatisticsOut:
    counts = {status.value: 0 for status in SlotStatus}
    for slot in slots:
        counts[slot.status] += 1
    used = counts["occupied"] + counts["reserved"]
    return SlotStatisticsOut(
        total=len(slots),
        used=used,
        occupancy_percentage=percentage(used, len(slots)),
        **counts,
    )


def zone_statistics(slots: list, zone_id: str) -> ZoneStatisticsOut:
    stats = count_slots([s for s in slots if s.zone_id == zone_id])
    return ZoneStatisticsOut(
        total_slots=stats.total,
        available_slots=stats.available,
        occupied_slots=stats.occupied,
        reserved_slots=stats.reserved,
        occupancy_percentage=stats.occupancy_percentage,
    )


# ── History ──────────────────────────────────────────────────────────────────
def filter_sessions(sessions: list, zone_id=None, user_id=None, status=None,
                    start_date=None, end_date=None) -> list:
    """Filter sessions (date range inclusive on entry_time), newest entry first."""
    if status is not None and status not in {s.value for s in SessionStatus}:
        raise ValidationFailureError(f"Unknown session status: {status!r}")
    start = parse_date_filter(start_date, "startDate")
    end = parse_date_filter(end_date, "endDate")

    result = sessions
    if zone_id:
        result = [s for s in result if s.zone_id == zone_id]
    if user_id:
        result = [s for s in result if s.user_id == user_id]
    if status:
        result = [s for s in result if s.status == status]
    if start:
        result = [s for s in result if s.entry_time >= start]
    if end:
        result = [s for s in result if s.entry_time <= end]
    return sorted(result, key=lambda s: s.entry_time, reverse=True)


# ── Time buckets ─────────────────────────────────────────────────────────────
def count_overlapping(sessions: list, window_start: datetime, window_end: datetime, now: datetime) -> int:
    """Sessions open at some point of [window_start, window_end). Active sessions run until now."""
    count = 0
    for s in sessions:
        exit_time = s.exit_time or now
        if s.entry_time < window_end and exit_time > window_start:
            count += 1
    return count


def _bucket(label: str, window_start: datetime, sessions: list, total_slots: int, now: datetime) -> TimeBucketOut:
    window_end = window_start + timedelta(hours=1)
    value = percentage(count_overlapping(sessions, window_start, window_end, now), total_slots)
    return TimeBucketOut(
        label=label,
        value=min(100, max(0, value)),
        timestamp=window_start.isoformat(),
    )


def hour_buckets(sessions: list, total_slots: int, selected_hour: int,
                 target_day: Optional[int], now: datetime) -> list[TimeBucketOut]:
    """
    Seven one-hour buckets for selected_hour-3 … selected_hour+3 (wrapping mod 24).
    With a target weekday, sessions are restricted to entries on that weekday and
    every bucket is anchored to the next (or current) occurrence of it.
    """
    reference = now
    if target_day is not None:
        sessions = [s for s in sessions if day_index(s.entry_time) == target_day]
        day_diff = target_day - day_index(now)
        if day_diff < 0:
            day_diff += 7
        reference = now + timedelta(days=day_diff)

    buckets = []
    for offset in range(-BUCKET_SPREAD, BUCKET_SPREAD + 1):
        hour = (selected_hour + offset) % 24
        window_start = reference.replace(hour=hour, minute=0, second=0, microsecond=0)
        buckets.append(_bucket(hour_label(hour), window_start, sessions, total_slots, now))
    return buckets


def day_buckets(sessions: list, total_slots: int, selected_hour: int, now: datetime) -> list[TimeBucketOut]:
    """
    Seven buckets Mon … Sun, each the [selected_hour, selected_hour+1) window on
    that weekday's most recent occurrence (today counts for today's weekday).
    """
    today = day_index(now)
    buckets = []
    for name in DAY_MODE_ORDER:
        day_diff = DAY_OF_WEEK[name] - today
        if day_diff > 0:
            day_diff -= 7
        window_start = (now + timedelta(days=day_diff)).replace(
            hour=selected_hour, minute=0, second=0, microsecond=0)
        buckets.append(_bucket(name[:3], window_start, sessions, total_slots, now))
    return buckets


class OccupancyStatistics:
    def __init__(self, store, clock: Callable[[], datetime] = datetime.utcnow):
        self.store = store
        self.clock = clock

    def _slots(self, zone_id: Optional[str] = None) -> list:
        slots = self.store.read_all(SLOTS)
        return [s for s in slots if s.zone_id == zone_id] if zone_id else slots

    def get_slot_statistics(self, zone_id: Optional[str] = None) -> SlotStatisticsOut:
        return count_slots(self._slots(zone_id))

    def get_zone_statistics(self, zone_id: str) -> ZoneStatisticsOut:
        return zone_statistics(self.store.read_all(SLOTS), zone_id)

    def get_session_history(self, zone_id=None, user_id=None, start_date=None,
                            end_date=None, status=None) -> list:
        return filter_sessions(self.store.read_all(SESSIONS), zone_id=zone_id, user_id=user_id,
                               status=status, start_date=start_date, end_date=end_date)

    def get_recent_activity(self, limit: Optional[int] = None, zone_id: Optional[str] = None) -> list:
        limit = settings.RECENT_ACTIVITY_LIMIT if limit is None else limit
        if limit < 1:
            raise ValidationFailureError(f"limit must be positive, got {limit}")
        return self.get_session_history(zone_id=zone_id)[:limit]

    def get_statistics_by_time_range(self, zone_id: Optional[str] = None, day_of_week: Optional[str] = None,
                                     hour: Optional[int] = None, filter_type: str = "hour") -> list[TimeBucketOut]:
        if filter_type not in FILTER_TYPES:
            raise ValidationFailureError(f"filterType must be 'hour' or 'day', got {filter_type!r}")
        selected_hour = settings.DEFAULT_STATS_HOUR if hour is None else hour
        if not 0 <= selected_hour <= 23:
            raise ValidationFailureError(f"hour must be between 0 and 23, got {selected_hour}")
        target_day = resolve_day_of_week(day_of_week)

        # One snapshot of each collection per computation
        sessions = self.store.read_all(SESSIONS)
        total_slots = len(self._slots(zone_id)) or 1
        now = self.clock()

        candidates = [s for s in sessions if s.status in (SessionStatus.ACTIVE, SessionStatus.COMPLETED)]
        if zone_id:
            candidates = [s for s in candidates if s.zone_id == zone_id]

        if filter_type == "hour":
            buckets = hour_buckets(candidates, total_slots, selected_hour, target_day, now)
        else:
            buckets = day_buckets(candidates, total_slots, selected_hour, now)
        logger.debug(f"[STATS] {filter_type} buckets zone={zone_id} hour={selected_hour}: "
                     f"{[b.value for b in buckets]}")
        return buckets
