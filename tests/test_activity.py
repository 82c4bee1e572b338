from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from supermall.services.activity import as_utc, is_active, is_usage_exhausted

UTC = timezone.utc


def _banner(start: datetime, end: datetime, enabled: bool = True) -> SimpleNamespace:
    return SimpleNamespace(enabled=enabled, start_time=start, end_time=end)


def _offer(start: datetime, end: datetime, enabled: bool = True, max_usage=None, current_usage=0) -> SimpleNamespace:
    return SimpleNamespace(
        enabled=enabled,
        start_time=start,
        end_time=end,
        max_usage=max_usage,
        current_usage=current_usage,
    )


START = datetime(2024, 1, 1, tzinfo=UTC)
END = datetime(2024, 1, 10, tzinfo=UTC)


def test_banner_inactive_after_end_timestamp():
    # End is midnight of Jan 10: the rest of that day is outside the window.
    banner = _banner(START, END)
    assert is_active(banner, datetime(2024, 1, 10, 23, 59, 59, tzinfo=UTC)) is False


def test_window_bounds_are_inclusive():
    banner = _banner(START, END)
    assert is_active(banner, START) is True
    assert is_active(banner, END) is True
    assert is_active(banner, START - timedelta(microseconds=1)) is False
    assert is_active(banner, END + timedelta(microseconds=1)) is False


def test_disabled_is_never_active():
    now = datetime(2024, 1, 5, tzinfo=UTC)
    assert is_active(_banner(START, END, enabled=False), now) is False
    assert is_active(_offer(START, END, enabled=False), now) is False


def test_offer_at_cap_is_inactive():
    now = datetime(2024, 1, 5, tzinfo=UTC)
    assert is_active(_offer(START, END, max_usage=5, current_usage=5), now) is False


def test_offer_below_cap_is_active():
    now = datetime(2024, 1, 5, tzinfo=UTC)
    assert is_active(_offer(START, END, max_usage=5, current_usage=4), now) is True


def test_offer_without_cap_is_active():
    now = datetime(2024, 1, 5, tzinfo=UTC)
    assert is_active(_offer(START, END, max_usage=None, current_usage=10_000), now) is True


def test_naive_timestamps_are_treated_as_utc():
    banner = _banner(START.replace(tzinfo=None), END.replace(tzinfo=None))
    assert is_active(banner, datetime(2024, 1, 5, tzinfo=UTC)) is True
    assert is_active(banner, datetime(2024, 1, 5)) is True


def test_aware_timestamps_in_other_zones():
    plus_two = timezone(timedelta(hours=2))
    banner = _banner(START, END)
    # 01:00 at +02:00 on Jan 10 is 23:00 UTC on Jan 9
    assert is_active(banner, datetime(2024, 1, 10, 1, 0, tzinfo=plus_two)) is True


@pytest.mark.parametrize(
    "max_usage,current,expected",
    [(None, 0, False), (None, 99, False), (5, 4, False), (5, 5, True), (0, 0, True)],
)
def test_is_usage_exhausted(max_usage, current, expected):
    assert is_usage_exhausted(max_usage, current) is expected


def test_as_utc():
    assert as_utc(datetime(2024, 1, 1)).tzinfo is UTC
    assert as_utc(datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))) == START
