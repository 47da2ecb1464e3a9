# tests/test_statistics_service.py
"""Unit tests for occupancy statistics, session history and time buckets."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime
from app.exceptions import ValidationFailureError
from app.schemas.parking_session import SessionRecord
from app.services.notification_service import capacity_alert_severity
from app.services.record_store import SESSIONS
from app.services.statistics_service import (
    OccupancyStatistics, day_index, hour_label, percentage, round_half_up,
)
from conftest import seed_zone


def make_session(sid, entry, exit=None, user_id="U1", zone_id="Z1", status=None):
    return SessionRecord(
        id=sid, user_id=user_id, zone_id=zone_id, entry_time=entry, exit_time=exit,
        status=status or ("completed" if exit else "active"), base_rate=1.0,
    )


@pytest.fixture
def stats(store, clock):
    return OccupancyStatistics(store, clock)


class TestHelpers:
    def test_round_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(37.5) == 38
        assert round_half_up(12.49) == 12
        assert percentage(1, 8) == 13
        assert percentage(3, 0) == 0

    def test_hour_labels(self):
        assert [hour_label(h) for h in (0, 1, 11, 12, 14, 23)] == ["12AM", "1AM", "11AM", "12PM", "2PM", "11PM"]

    def test_sunday_is_zero(self):
        assert day_index(datetime(2026, 10, 18)) == 0   # Sunday
        assert day_index(datetime(2026, 10, 19)) == 1   # Monday
        assert day_index(datetime(2026, 10, 24)) == 6   # Saturday


class TestSlotStatistics:
    def test_counts_and_occupancy(self, store, stats):
        seed_zone(store, statuses=("occupied",) * 8 + ("reserved", "available"))
        result = stats.get_slot_statistics("Z1")

        assert result.total == 10
        assert (result.occupied, result.reserved, result.available, result.maintenance) == (8, 1, 1, 0)
        assert result.used == 9
        assert result.occupancy_percentage == 90
        assert capacity_alert_severity(result.occupancy_percentage) == "high"

    def test_all_zones_and_empty_zone(self, store, stats):
        seed_zone(store, statuses=("occupied", "maintenance"), extra_zones=[("Z2", ("available", "available"))])
        overall = stats.get_slot_statistics()
        assert overall.total == 4
        assert overall.occupancy_percentage == 25
        assert stats.get_slot_statistics("nope").occupancy_percentage == 0

    def test_zone_statistics(self, store, stats):
        seed_zone(store, statuses=("occupied", "reserved", "available", "maintenance"))
        zone = stats.get_zone_statistics("Z1")
        assert (zone.total_slots, zone.occupied_slots, zone.reserved_slots, zone.available_slots) == (4, 1, 1, 1)
        assert zone.occupancy_percentage == 50


class TestSessionHistory:
    @pytest.fixture(autouse=True)
    def history(self, store):
        store.replace_all(SESSIONS, [
            make_session("A", datetime(2026, 10, 1, 9), datetime(2026, 10, 1, 10)),
            make_session("B", datetime(2026, 10, 10, 9), datetime(2026, 10, 10, 12), user_id="U2"),
            make_session("C", datetime(2026, 10, 21, 8), zone_id="Z2"),
            make_session("D", datetime(2026, 10, 5, 9), datetime(2026, 10, 5, 9, 30)),
        ])

    def test_sorted_newest_first(self, stats):
        assert [s.id for s in stats.get_session_history()] == ["C", "B", "D", "A"]

    def test_filters(self, stats):
        assert [s.id for s in stats.get_session_history(zone_id="Z2")] == ["C"]
        assert [s.id for s in stats.get_session_history(user_id="U2")] == ["B"]
        assert [s.id for s in stats.get_session_history(status="active")] == ["C"]
        assert [s.id for s in stats.get_session_history(zone_id="Z1", user_id="U1")] == ["D", "A"]

    def test_date_range_is_inclusive(self, stats):
        result = stats.get_session_history(start_date="2026-10-05T09:00:00", end_date="2026-10-10T09:00:00Z")
        assert [s.id for s in result] == ["B", "D"]

    def test_invalid_filters_rejected(self, stats):
        with pytest.raises(ValidationFailureError):
            stats.get_session_history(start_date="last tuesday")
        with pytest.raises(ValidationFailureError):
            stats.get_session_history(status="cancelled")

    def test_recent_activity(self, stats):
        assert [s.id for s in stats.get_recent_activity(2)] == ["C", "B"]
        assert len(stats.get_recent_activity()) == 4
        assert [s.id for s in stats.get_recent_activity(5, "Z2")] == ["C"]
        with pytest.raises(ValidationFailureError):
            stats.get_recent_activity(0)


class TestHourBuckets:
    def test_no_sessions_all_zero(self, store, stats):
        seed_zone(store)
        buckets = stats.get_statistics_by_time_range(hour=14, filter_type="hour")

        assert [b.label for b in buckets] == ["11AM", "12PM", "1PM", "2PM", "3PM", "4PM", "5PM"]
        assert [b.value for b in buckets] == [0] * 7
        assert buckets[3].timestamp == "2026-10-21T14:00:00"

    def test_overlap_counts_active_sessions_until_now(self, store, stats):
        seed_zone(store)
        store.replace_all(SESSIONS, [
            make_session("A", datetime(2026, 10, 21, 13, 10), datetime(2026, 10, 21, 14, 20)),
            make_session("B", datetime(2026, 10, 21, 15, 0)),
        ])
        buckets = stats.get_statistics_by_time_range(hour=14)
        assert [b.value for b in buckets] == [0, 0, 25, 25, 25, 0, 0]

    def test_default_hour_is_ten(self, store, stats):
        buckets = stats.get_statistics_by_time_range()
        assert buckets[3].label == "10AM"

    def test_hours_wrap_around_midnight(self, store, stats):
        buckets = stats.get_statistics_by_time_range(hour=1)
        assert [b.label for b in buckets] == ["10PM", "11PM", "12AM", "1AM", "2AM", "3AM", "4AM"]
        assert buckets[0].timestamp == "2026-10-21T22:00:00"
        assert buckets[2].timestamp == "2026-10-21T00:00:00"

    def test_values_clamped_to_100(self, store, stats):
        seed_zone(store, statuses=("available",))
        store.replace_all(SESSIONS, [
            make_session(f"S{i}", datetime(2026, 10, 21, 13, 0), datetime(2026, 10, 21, 15, 0)) for i in range(3)
        ])
        buckets = stats.get_statistics_by_time_range(hour=14)
        assert max(b.value for b in buckets) == 100
        assert all(0 <= b.value <= 100 for b in buckets)

    def test_zone_filter_uses_zone_slot_count(self, store, stats):
        seed_zone(store, statuses=("available",) * 2, extra_zones=[("Z2", ("available",) * 8)])
        store.replace_all(SESSIONS, [
            make_session("A", datetime(2026, 10, 21, 13, 0), datetime(2026, 10, 21, 15, 0)),
            make_session("B", datetime(2026, 10, 21, 13, 0), datetime(2026, 10, 21, 15, 0), zone_id="Z2"),
        ])
        assert stats.get_statistics_by_time_range(zone_id="Z1", hour=14)[3].value == 50
        assert stats.get_statistics_by_time_range(hour=14)[3].value == 20

    def test_day_of_week_restricts_entries_and_anchors_date(self, store, stats):
        seed_zone(store)
        store.replace_all(SESSIONS, [
            make_session("WED", datetime(2026, 10, 21, 13, 0)),
            make_session("TUE", datetime(2026, 10, 20, 9, 0)),
        ])
        wednesday = stats.get_statistics_by_time_range(hour=14, day_of_week="Wednesday")
        assert [b.value for b in wednesday] == [0, 0, 25, 25, 25, 0, 0]

        friday = stats.get_statistics_by_time_range(hour=14, day_of_week="Friday")
        assert friday[3].timestamp == "2026-10-23T14:00:00"
        assert [b.value for b in friday] == [0] * 7

    def test_invalid_inputs(self, stats):
        with pytest.raises(ValidationFailureError):
            stats.get_statistics_by_time_range(hour=24)
        with pytest.raises(ValidationFailureError):
            stats.get_statistics_by_time_range(day_of_week="Funday")
        with pytest.raises(ValidationFailureError):
            stats.get_statistics_by_time_range(filter_type="week")


class TestDayBuckets:
    def test_each_weekday_anchored_to_latest_occurrence(self, store, stats):
        seed_zone(store)
        store.replace_all(SESSIONS, [
            make_session("MON", datetime(2026, 10, 19, 13, 30), datetime(2026, 10, 19, 14, 10)),
            make_session("THU", datetime(2026, 10, 15, 14, 0), datetime(2026, 10, 15, 14, 30)),
            make_session("OLD", datetime(2026, 10, 12, 13, 30), datetime(2026, 10, 12, 14, 10)),
        ])
        buckets = stats.get_statistics_by_time_range(hour=14, filter_type="day")

        assert [b.label for b in buckets] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert [b.timestamp[:10] for b in buckets] == [
            "2026-10-19", "2026-10-20", "2026-10-21", "2026-10-15", "2026-10-16", "2026-10-17", "2026-10-18",
        ]
        assert [b.value for b in buckets] == [25, 0, 0, 25, 0, 0, 0]

    def test_day_mode_ignores_day_of_week(self, store, stats):
        buckets = stats.get_statistics_by_time_range(hour=9, filter_type="day", day_of_week="Friday")
        assert len(buckets) == 7
        assert all(b.timestamp.endswith("T09:00:00") for b in buckets)
