import pytest

from watchread.input.debounce import DEBOUNCE_WINDOW, DebounceCache, DebounceEntry


def test_empty_cache_never_hits():
    cache = DebounceCache()
    assert cache.entry == DebounceEntry()
    assert cache.is_hit(0.0, None) is False
    assert cache.is_hit(0.0, (1, 1)) is False


def test_hit_within_window_and_same_mtime():
    cache = DebounceCache()
    cache.record(10.0, (100, 3), existed=True)
    assert cache.is_hit(10.0 + DEBOUNCE_WINDOW / 2, (100, 3)) is True


def test_miss_after_window():
    cache = DebounceCache()
    cache.record(10.0, (100, 3), existed=True)
    assert cache.is_hit(10.0 + DEBOUNCE_WINDOW, (100, 3)) is False


@pytest.mark.parametrize("start", [0.1, 10.0, 3.3, 12345.678])
def test_window_boundary_is_exclusive(start):
    cache = DebounceCache()
    cache.record(start, (100, 3), existed=True)
    assert cache.is_hit(start + DEBOUNCE_WINDOW - 0.0001, (100, 3)) is True
    assert cache.is_hit(start + DEBOUNCE_WINDOW, (100, 3)) is False


def test_miss_when_mtime_moved():
    cache = DebounceCache()
    cache.record(10.0, (100, 3), existed=True)
    assert cache.is_hit(10.001, (200, 3)) is False


def test_missing_file_never_hits():
    cache = DebounceCache()
    cache.record(10.0, None, existed=False)
    assert cache.is_hit(10.001, None) is False


def test_reset_clears_entry():
    cache = DebounceCache()
    cache.record(10.0, (100, 3), existed=True)
    cache.reset()
    assert cache.entry == DebounceEntry()
    assert cache.is_hit(10.001, (100, 3)) is False
