from datetime import datetime, time, timedelta

from src.fitness_club.fitness_club.common.venue_clock import DayWindow, VenueClock, hour_fraction


def test_now_local_is_utc_plus_offset():
    clock = VenueClock(6, now_fn=lambda: datetime(2026, 3, 10, 4, 15))

    assert clock.now_local() == datetime(2026, 3, 10, 10, 15)
    assert clock.offset == timedelta(hours=6)


def test_today_window_uses_venue_date_not_utc_date():
    # 19:30 UTC on Feb 1 is already 01:30 on Feb 2 at the venue.
    clock = VenueClock(6, now_fn=lambda: datetime(2026, 2, 1, 19, 30))

    window = clock.today()

    assert window.start == datetime(2026, 2, 2, 0, 0)
    assert window.end == datetime(2026, 2, 3, 0, 0)
    assert window.end - window.start == timedelta(hours=24)


def test_today_window_just_before_venue_midnight():
    clock = VenueClock(6, now_fn=lambda: datetime(2026, 2, 1, 17, 59))

    window = clock.today()

    assert window.start == datetime(2026, 2, 1, 0, 0)
    assert window.contains(clock.now_local())


def test_window_is_half_open():
    window = DayWindow(start=datetime(2026, 3, 10), end=datetime(2026, 3, 11))

    assert window.contains(datetime(2026, 3, 10, 0, 0))
    assert window.contains(datetime(2026, 3, 10, 23, 59, 59))
    assert not window.contains(datetime(2026, 3, 11, 0, 0))


def test_offset_is_configurable():
    clock = VenueClock(5.5, now_fn=lambda: datetime(2026, 3, 10, 20, 0))

    assert clock.now_local() == datetime(2026, 3, 11, 1, 30)
    assert clock.today().start == datetime(2026, 3, 11, 0, 0)


def test_local_hour_and_hour_fraction():
    clock = VenueClock(6, now_fn=lambda: datetime(2026, 3, 10, 2, 30, 45))

    assert clock.local_hour() == 8.5
    assert hour_fraction(time(13, 0)) == 13.0
    assert hour_fraction(time(7, 59)) < 8.0
