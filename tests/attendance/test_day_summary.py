from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import make_segment
from smarttrack.attendance.service import AttendanceService
from smarttrack.attendance.summary import DaySummaryService
from smarttrack.core.enums import DayStatus, SegmentProgress, SessionState
from smarttrack.core.exceptions import ValidationError

DAY = date(2026, 3, 10)


@pytest.fixture
def tracker(attendance_repo, offices_repo):
    return AttendanceService(attendance_repo, offices_repo)


@pytest.fixture
def summaries(attendance_repo, offices_repo):
    return DaySummaryService(attendance_repo, offices_repo)


def test_empty_day_is_absent(summaries, fixed_now):
    summary = summaries.summarize_day(1, DAY, now=fixed_now)

    assert summary.segments == []
    assert summary.summary_dict() == {
        "total_hours_sum": 0.0,
        "total_overtime_sum": 0.0,
        "date": "2026-03-10",
        "day_status": "Absent",
        "overall_status": "Absent",
    }


def test_single_full_day_segment(tracker, summaries, head_office, fixed_now):
    lat, lon = head_office.latitude, head_office.longitude
    tracker.check_in(1, lat, lon, now=fixed_now)
    out_at = fixed_now + timedelta(hours=8, minutes=30)
    tracker.check_out(1, lat, lon, now=out_at)

    summary = summaries.summarize_day(1, DAY, now=out_at + timedelta(hours=1))

    assert len(summary.segments) == 1
    assert summary.total_hours_sum == 8.5
    assert summary.total_overtime_sum == 0.5
    assert summary.day_status == DayStatus.FULL_DAY
    assert summary.overall_status == SessionState.CHECKED_OUT


def test_multi_segment_day_is_half_day(tracker, summaries, head_office, fixed_now):
    lat, lon = head_office.latitude, head_office.longitude
    tracker.check_in(1, lat, lon, now=fixed_now)
    tracker.check_out(1, lat, lon, now=fixed_now + timedelta(hours=2))
    tracker.check_in(1, lat, lon, now=fixed_now + timedelta(hours=3))
    tracker.check_out(1, lat, lon, now=fixed_now + timedelta(hours=6, minutes=30))

    summary = summaries.summarize_day(1, DAY, now=fixed_now + timedelta(hours=7))

    assert summary.total_hours_sum == 5.5
    assert summary.total_overtime_sum == 0.0
    assert summary.day_status == DayStatus.HALF_DAY


def test_open_segment_counts_elapsed_time(tracker, summaries, head_office, fixed_now):
    lat, lon = head_office.latitude, head_office.longitude
    tracker.check_in(1, lat, lon, now=fixed_now)
    tracker.check_out(1, lat, lon, now=fixed_now + timedelta(hours=1))
    tracker.check_in(1, lat, lon, now=fixed_now + timedelta(hours=2))

    summary = summaries.summarize_day(1, DAY, now=fixed_now + timedelta(hours=5, minutes=15))

    assert summary.total_hours_sum == 4.25
    assert summary.day_status == DayStatus.HALF_DAY
    assert summary.overall_status == SessionState.CHECKED_IN
    assert [s.status for s in summary.segments] == [SegmentProgress.COMPLETED, SegmentProgress.CHECKED_IN]


def test_segment_views_render_civil_times_and_office_names(tracker, summaries, head_office, tech_park, fixed_now):
    tracker.check_in(1, head_office.latitude, head_office.longitude, now=fixed_now)
    tracker.check_out(1, tech_park.latitude, tech_park.longitude, now=fixed_now + timedelta(hours=3))
    tracker.check_in(1, tech_park.latitude, tech_park.longitude, now=fixed_now + timedelta(hours=4))

    summary = summaries.summarize_day(1, DAY, now=fixed_now + timedelta(hours=5))
    closed, open_ = [s.to_dict() for s in summary.segments]

    assert closed["check_in_time_ist"] == "10:00:00 AM"
    assert closed["check_out_time_ist"] == "01:00:00 PM"
    assert closed["checkin_office_name"] == "Head Office"
    assert closed["checkout_office_name"] == "Tech Park"
    assert closed["status"] == "Completed"
    assert closed["total_hours"] == 3.0
    assert open_["check_out_time_ist"] is None
    assert open_["checkout_office_name"] == "In Session"
    assert open_["status"] == "Checked In"
    assert "work_date" not in open_


def test_unknown_office_name(attendance_repo, summaries, fixed_now):
    attendance_repo.add(
        make_segment(7, 1, fixed_now, fixed_now + timedelta(hours=1), total_hours=1.0, office_id=99)
    )

    view = summaries.summarize_day(1, DAY, now=fixed_now + timedelta(hours=2)).segments[0]

    assert view.checkin_office_name == "Unknown"
    assert view.checkout_office_name == "Unknown"


def test_summary_only_counts_segments_of_that_civil_day(attendance_repo, summaries, fixed_now):
    # 23:59:59.999 on 2026-03-10 at +05:30 belongs to the day, 00:00 the next day does not
    last_ms = datetime(2026, 3, 10, 18, 29, 59, 999000, tzinfo=timezone.utc)
    next_day = datetime(2026, 3, 10, 18, 30, tzinfo=timezone.utc)
    attendance_repo.add(make_segment(1, 1, last_ms, last_ms + timedelta(hours=1), total_hours=1.0))
    attendance_repo.add(make_segment(2, 1, next_day, next_day + timedelta(hours=2), total_hours=2.0))

    summary = summaries.summarize_day(1, DAY, now=next_day + timedelta(hours=3))

    assert [s.segment_id for s in summary.segments] == [1]
    assert summary.total_hours_sum == 1.0
    assert summary.day_status == DayStatus.LOP


def test_history_is_newest_first_and_dated(tracker, summaries, head_office, fixed_now):
    lat, lon = head_office.latitude, head_office.longitude
    for offset_days in (0, 1, 2):
        at = fixed_now + timedelta(days=offset_days)
        tracker.check_in(1, lat, lon, now=at)
        tracker.check_out(1, lat, lon, now=at + timedelta(hours=1))

    views = summaries.history(1, start=DAY, end=DAY + timedelta(days=1))

    assert [v.work_date for v in views] == ["2026-03-11", "2026-03-10"]


def test_history_rejects_inverted_range(summaries):
    with pytest.raises(ValidationError):
        summaries.history(1, start=DAY, end=DAY - timedelta(days=1))
