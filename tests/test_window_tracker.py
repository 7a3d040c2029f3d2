"""Unit tests for the admission timestamp tracker."""

from registry_gateway.adapters.rate_limit.window_tracker import WindowTracker


def test_records_admissions() -> None:
    tracker = WindowTracker()

    tracker.record_admission(1000.0)
    tracker.record_admission(1000.0)
    tracker.record_admission(1000.5)

    assert tracker.current_size() == 3
    assert len(tracker) == 3


def test_evicts_entries_at_least_one_window_old() -> None:
    tracker = WindowTracker()
    for ts in (1000.0, 1000.5, 1001.0, 1001.9):
        tracker.record_admission(ts)

    removed = tracker.evict_expired(now=1002.0, window_seconds=1.0)

    # 1000.0 and 1000.5 are older than the window; 1001.0 is exactly one window old.
    assert removed == 3
    assert tracker.current_size() == 1


def test_remaining_entries_are_inside_window_after_eviction() -> None:
    tracker = WindowTracker()
    timestamps = [1000.0 + i * 0.25 for i in range(20)]
    for ts in timestamps:
        tracker.record_admission(ts)

    now, window = 1003.1, 2.0
    tracker.evict_expired(now, window)

    expected = [ts for ts in timestamps if now - ts < window]
    assert tracker.current_size() == len(expected)
    assert sorted(tracker._timestamps) == expected


def test_eviction_is_idempotent() -> None:
    tracker = WindowTracker()
    tracker.record_admission(1000.0)
    tracker.record_admission(1005.0)

    assert tracker.evict_expired(1006.0, 2.0) == 1
    assert tracker.evict_expired(1006.0, 2.0) == 0
    assert tracker.current_size() == 1


def test_handles_unordered_timestamps() -> None:
    tracker = WindowTracker()
    for ts in (1005.0, 1000.0, 1004.0, 1001.0):
        tracker.record_admission(ts)

    assert tracker.evict_expired(1005.5, 2.0) == 2
    assert tracker.current_size() == 2


def test_empty_tracker_evicts_nothing() -> None:
    tracker = WindowTracker()

    assert tracker.evict_expired(1000.0, 1.0) == 0
    assert tracker.current_size() == 0
