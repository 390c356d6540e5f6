from __future__ import annotations

from datetime import datetime

import pytest

from fakes import InMemorySubscriptions, InMemoryVisits, MutableNow, make_subscription, utc_for_local
from src.fitness_club.fitness_club.common.venue_clock import VenueClock
from src.fitness_club.fitness_club.core.enums import SubscriptionStatus
from src.fitness_club.fitness_club.visits.ledger import VisitLedger


def _ledger(now: datetime):
    subs = InMemorySubscriptions(make_subscription(freeze_used=0))
    visits = InMemoryVisits(subs)
    source = MutableNow(now)
    return VisitLedger(visits, VenueClock(6, now_fn=source)), visits, subs, source


def test_create_stamps_venue_local_time():
    ledger, _, _, _ = _ledger(utc_for_local(9, 15))

    visit = ledger.create_and_consume(1, 10, qr_code="555001")

    assert visit.visit_date == datetime(2026, 3, 10, 9, 15)
    assert visit.is_freeze_day is False
    assert ledger.find_today(1, 10) == visit


def test_late_evening_visit_belongs_to_its_own_local_day():
    # 23:59 local on the 10th is 17:59 UTC; one minute past local midnight is a new day.
    ledger, _, _, source = _ledger(utc_for_local(23, 59))
    ledger.create_and_consume(1, 10, qr_code="555001")

    source.advance(minutes=2)

    assert ledger.find_today(1, 10) is None
    assert ledger.create_and_consume(1, 10, qr_code="555001") is not None


def test_early_utc_morning_counts_as_same_local_day():
    # 19:30 UTC on the 9th is 01:30 local on the 10th.
    ledger, _, _, source = _ledger(datetime(2026, 3, 9, 19, 30))
    first = ledger.create_and_consume(1, 10, qr_code="555001")

    source.now = utc_for_local(12, 0)

    assert ledger.find_today(1, 10) == first


def test_second_regular_visit_same_day_is_refused():
    ledger, visits, subs, source = _ledger(utc_for_local(9, 0))
    ledger.create_and_consume(1, 10, qr_code="555001")
    source.advance(hours=2)

    assert ledger.create_and_consume(1, 10, qr_code="555001") is None
    assert len(visits.regular()) == 1
    assert subs.get_by_id(10).remaining_days == 11


def test_freeze_record_does_not_collide_with_regular_visit():
    ledger, _, _, _ = _ledger(utc_for_local(9, 0))
    regular = ledger.create_and_consume(1, 10, qr_code="555001")

    frozen = ledger.create_freeze_day(1, 10, qr_code="555001", freeze_used=1)

    assert frozen is not None and frozen.is_freeze_day
    assert ledger.find_today(1, 10) == regular
    assert ledger.find_today_freeze(1, 10) == frozen


def test_freeze_day_create_and_delete_move_freeze_used():
    ledger, _, subs, _ = _ledger(utc_for_local(9, 0))

    frozen = ledger.create_freeze_day(1, 10, qr_code="555001", freeze_used=1)
    assert subs.get_by_id(10).freeze_used == 1

    assert ledger.delete_freeze_day(frozen, freeze_used=0) is True
    assert subs.get_by_id(10).freeze_used == 0
    assert ledger.find_today_freeze(1, 10) is None


def test_delete_freeze_day_never_stores_negative_usage():
    ledger, _, subs, _ = _ledger(utc_for_local(9, 0))
    frozen = ledger.create_freeze_day(1, 10, qr_code="555001", freeze_used=1)

    ledger.delete_freeze_day(frozen, freeze_used=-1)

    assert subs.get_by_id(10).freeze_used == 0


def test_lookups_are_scoped_to_the_subscription():
    ledger, _, _, _ = _ledger(utc_for_local(9, 0))
    ledger.create_and_consume(1, 10, qr_code="555001")

    assert ledger.find_today(1, 11) is None
    assert ledger.find_today(2, 10) is None


def test_visit_and_decrement_are_stored_together():
    ledger, visits, subs, _ = _ledger(utc_for_local(9, 0))

    visit = ledger.create_and_consume(1, 10, qr_code="555001")

    assert visits.regular() == [visit]
    assert subs.get_by_id(10).remaining_days == 11


def test_failed_decrement_leaves_no_visit_behind():
    ledger, visits, subs, _ = _ledger(utc_for_local(9, 0))
    subs.fail_updates = True

    with pytest.raises(ConnectionError):
        ledger.create_and_consume(1, 10, qr_code="555001")

    assert visits.rows == {}
    assert subs.get_by_id(10).remaining_days == 12


def test_no_visit_is_recorded_without_balance():
    subs = InMemorySubscriptions(make_subscription(remaining_days=0))
    ledger = VisitLedger(InMemoryVisits(subs), VenueClock(6, now_fn=MutableNow(utc_for_local(9, 0))))

    assert ledger.create_and_consume(1, 10, qr_code="555001") is None
    assert ledger.find_today(1, 10) is None


def test_last_visit_completes_subscription_in_the_same_write():
    subs = InMemorySubscriptions(make_subscription(remaining_days=1))
    ledger = VisitLedger(InMemoryVisits(subs), VenueClock(6, now_fn=MutableNow(utc_for_local(9, 0))))

    ledger.create_and_consume(1, 10, qr_code="555001")

    assert subs.get_by_id(10).remaining_days == 0
    assert subs.get_by_id(10).status == SubscriptionStatus.COMPLETED
