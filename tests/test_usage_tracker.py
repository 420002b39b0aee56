"""Tests for UsageTracker"""

import json
from datetime import datetime, timedelta

import pytest

from command_ai.infrastructure.usage import UsageLimitExceeded, UsageTracker

_OPEN = {
    "max_calls_per_minute": 999,
    "max_calls_per_hour": 999,
    "max_calls_per_day": 999,
    "min_call_interval_seconds": 0,
}


@pytest.fixture
def usage_file(tmp_path):
    return tmp_path / "usage.json"


class TestLimits:
    def test_blocks_when_daily_limit_reached(self, usage_file):
        tracker = UsageTracker(usage_file=str(usage_file), limits={**_OPEN, "max_calls_per_day": 3})
        for _ in range(3):
            tracker.record_call()
        with pytest.raises(UsageLimitExceeded, match="일일"):
            tracker.check_limits()

    def test_blocks_when_per_minute_limit_reached(self, usage_file):
        tracker = UsageTracker(usage_file=str(usage_file), limits={**_OPEN, "max_calls_per_minute": 2})
        tracker.record_call()
        tracker.record_call()
        with pytest.raises(UsageLimitExceeded, match="분당"):
            tracker.check_limits()

    def test_allows_under_limits(self, usage_file):
        tracker = UsageTracker(usage_file=str(usage_file), limits={**_OPEN, "max_calls_per_day": 5})
        for _ in range(4):
            tracker.record_call()
        tracker.check_limits()

    def test_paused(self):
        tracker = UsageTracker(usage_file=None, limits={"paused": True})
        with pytest.raises(UsageLimitExceeded, match="일시 중지"):
            tracker.check_limits()

    def test_min_interval(self):
        tracker = UsageTracker(usage_file=None, limits={**_OPEN, "min_call_interval_seconds": 60})
        tracker.record_call()
        with pytest.raises(UsageLimitExceeded, match="잠시 후"):
            tracker.check_limits()


class TestPersistence:
    def test_calls_saved_and_reloaded(self, usage_file):
        tracker = UsageTracker(usage_file=str(usage_file), limits=_OPEN)
        tracker.record_call()
        tracker.record_call()
        data = json.loads(usage_file.read_text(encoding="utf-8"))
        assert data["total_calls"] == 2

        reloaded = UsageTracker(usage_file=str(usage_file), limits=_OPEN)
        assert reloaded.get_status()["total_calls_all_time"] == 2

    def test_corrupt_file_starts_fresh(self, usage_file):
        usage_file.write_text("{broken", encoding="utf-8")
        tracker = UsageTracker(usage_file=str(usage_file), limits=_OPEN)
        assert tracker.get_status()["total_calls_all_time"] == 0

    def test_old_calls_cleaned_up(self, usage_file):
        old = (datetime.now() - timedelta(hours=30)).isoformat()
        usage_file.write_text(json.dumps({"calls": [old], "total_calls": 1}), encoding="utf-8")
        tracker = UsageTracker(usage_file=str(usage_file), limits=_OPEN)
        tracker.record_call()
        assert len(tracker._data["calls"]) == 1
        assert tracker.get_status()["calls_today"] == 1


class TestWarning:
    def test_warning_over_threshold(self):
        tracker = UsageTracker(usage_file=None, limits={**_OPEN, "max_calls_per_day": 10})
        for _ in range(8):
            tracker.record_call()
        assert "8/10" in tracker.get_warning()

    def test_no_warning_under_threshold(self):
        tracker = UsageTracker(usage_file=None, limits={**_OPEN, "max_calls_per_day": 10})
        tracker.record_call()
        assert tracker.get_warning() is None


class TestReservation:
    def test_acquire_counts_before_record(self):
        tracker = UsageTracker(usage_file=None, limits={**_OPEN, "max_calls_per_minute": 1})
        tracker.acquire()
        with pytest.raises(UsageLimitExceeded, match="분당"):
            tracker.acquire()

    def test_release_frees_slot(self):
        tracker = UsageTracker(usage_file=None, limits={**_OPEN, "max_calls_per_minute": 1})
        stamp = tracker.acquire()
        tracker.release(stamp)
        tracker.acquire()
        assert tracker.get_status()["total_calls_all_time"] == 0

    def test_record_reserved_call_once(self, usage_file):
        tracker = UsageTracker(usage_file=str(usage_file), limits=_OPEN)
        stamp = tracker.acquire()
        tracker.record_call(stamp)
        status = tracker.get_status()
        assert status["calls_this_minute"] == 1
        assert status["total_calls_all_time"] == 1
        assert json.loads(usage_file.read_text(encoding="utf-8"))["calls"] == [stamp]
