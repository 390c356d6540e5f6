from __future__ import annotations

import pytest

from fakes import make_subscription, make_tariff, make_world, utc_for_local
from src.fitness_club.fitness_club.attendance.factory import DayActionFactory
from src.fitness_club.fitness_club.attendance.strategies.freeze_strategy import FreezeStrategy
from src.fitness_club.fitness_club.attendance.strategies.unfreeze_strategy import UnfreezeStrategy
from src.fitness_club.fitness_club.core.enums import AttendanceErrorType
from src.fitness_club.fitness_club.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "action, expected",
    [("freeze", FreezeStrategy), ("unfreeze", UnfreezeStrategy), (" FREEZE ", FreezeStrategy)],
)
def test_factory_picks_strategy(action, expected):
    assert isinstance(DayActionFactory().for_action(action), expected)


@pytest.mark.parametrize("action", ["", None, "pause", "extend"])
def test_factory_rejects_unknown_action(action):
    with pytest.raises(ValidationError):
        DayActionFactory().for_action(action)


def test_unknown_action_is_rejected_before_any_lookup():
    world = make_world()
    world.clients.fail = True

    with pytest.raises(ValidationError):
        world.service.freeze_day("555001", "sleep")


def test_freeze_then_unfreeze_round_trip():
    world = make_world()

    frozen = world.service.freeze_day("555001", "freeze")
    assert frozen.success is True
    assert frozen.is_frozen_today is True and frozen.can_unfreeze is True
    assert frozen.visit.is_freeze_day is True
    assert world.subscriptions.get_by_id(10).freeze_used == 1

    thawed = world.service.freeze_day("555001", "unfreeze", visit_id=frozen.visit.visit_id)
    assert thawed.success is True
    assert thawed.is_frozen_today is False
    assert thawed.can_freeze is True
    assert world.subscriptions.get_by_id(10).freeze_used == 0
    assert world.visits.frozen() == []


def test_freeze_twice_the_same_day():
    world = make_world(tariff=make_tariff(freeze_limit=3))
    world.service.freeze_day("555001", "freeze")

    again = world.service.freeze_day("555001", "freeze")

    assert again.error_type == AttendanceErrorType.ALREADY_FROZEN_TODAY
    assert world.subscriptions.get_by_id(10).freeze_used == 1


def test_freeze_quota_exhausted():
    world = make_world(subscriptions=(make_subscription(freeze_used=1),), tariff=make_tariff(freeze_limit=1))

    outcome = world.service.freeze_day("555001", "freeze")

    assert outcome.error_type == AttendanceErrorType.QUOTA_EXCEEDED
    assert world.visits.frozen() == []


def test_tariff_without_freezes_never_allows_one():
    world = make_world(tariff=make_tariff(freeze_limit=0))

    assert world.service.check("555001").can_freeze is False
    assert world.service.freeze_day("555001", "freeze").error_type == AttendanceErrorType.QUOTA_EXCEEDED


def test_unfreeze_without_freeze_today():
    world = make_world()

    outcome = world.service.freeze_day("555001", "unfreeze")

    assert outcome.error_type == AttendanceErrorType.NOT_FOUND


def test_unfreeze_with_a_foreign_visit_id():
    world = make_world()
    frozen = world.service.freeze_day("555001", "freeze")

    outcome = world.service.freeze_day("555001", "unfreeze", visit_id=frozen.visit.visit_id + 100)

    assert outcome.error_type == AttendanceErrorType.NOT_FOUND
    assert world.subscriptions.get_by_id(10).freeze_used == 1


def test_yesterdays_freeze_cannot_be_undone():
    world = make_world(tariff=make_tariff(freeze_limit=2))
    frozen = world.service.freeze_day("555001", "freeze")
    world.clock.advance(days=1)

    outcome = world.service.freeze_day("555001", "unfreeze", visit_id=frozen.visit.visit_id)

    assert outcome.error_type == AttendanceErrorType.NOT_FOUND
    assert len(world.visits.frozen()) == 1


def test_freeze_is_allowed_after_closing_hours():
    world = make_world(now=utc_for_local(20, 0))

    outcome = world.service.freeze_day("555001", "freeze")

    assert outcome.success is True


def test_can_unfreeze_only_until_tariff_end():
    world = make_world()
    world.service.freeze_day("555001", "freeze")

    open_check = world.service.check("555001")
    world.clock.now = utc_for_local(13, 0)
    last_minute = world.service.check("555001")

    assert open_check.can_unfreeze is True
    assert last_minute.can_unfreeze is False


def test_freeze_usage_tracks_live_freeze_records_across_days():
    world = make_world(tariff=make_tariff(freeze_limit=2))

    world.service.freeze_day("555001", "freeze")
    world.clock.advance(days=1)
    second = world.service.freeze_day("555001", "freeze")
    world.service.freeze_day("555001", "unfreeze", visit_id=second.visit.visit_id)
    world.clock.advance(days=1)
    world.service.freeze_day("555001", "freeze")
    world.clock.advance(days=1)
    denied = world.service.freeze_day("555001", "freeze")

    stored = world.subscriptions.get_by_id(10)
    assert stored.freeze_used == len(world.visits.frozen()) == 2
    assert denied.error_type == AttendanceErrorType.QUOTA_EXCEEDED


def test_freeze_after_visit_keeps_the_visit():
    world = make_world()
    world.service.commit("555001")

    outcome = world.service.freeze_day("555001", "freeze")

    assert outcome.success is True
    assert len(world.visits.regular()) == 1
    assert world.subscriptions.get_by_id(10).remaining_days == 11
