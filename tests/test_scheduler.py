import math

import pytest

from helpers import add_ship, make_world
from skirmish.sim.scheduler import TickScheduler


def test_tasks_fire_on_due_tick_in_order():
    sched = TickScheduler()
    fired = []
    sched.add(3, lambda: fired.append("b"))
    sched.add(1, lambda: fired.append("a"))
    sched.add(3, lambda: fired.append("c"))
    sched.advance()
    assert fired == ["a"]
    sched.advance()
    assert fired == ["a"]
    assert sched.advance() == 2
    assert fired == ["a", "b", "c"]
    assert sched.now == 3


def test_fractional_delay_rounds_up():
    sched = TickScheduler()
    task = sched.add(2.5, lambda: None)
    assert task.due_tick == 3


def test_non_finite_delay_is_rejected():
    sched = TickScheduler()
    with pytest.raises(ValueError):
        sched.add(math.inf, lambda: None)
    assert sched.pending() == []


def test_cancel_and_cancel_for_target():
    sched = TickScheduler()
    fired = []
    t1 = sched.add(1, lambda: fired.append(1), target_id=7)
    sched.add(2, lambda: fired.append(2), target_id=7)
    sched.add(2, lambda: fired.append(3), target_id=8)
    assert sched.cancel(t1.task_id)
    assert not sched.cancel(t1.task_id)
    assert sched.cancel_for(7) == 1
    assert sched.cancel_for(7) == 0
    for _ in range(3):
        sched.advance()
    assert fired == [3]


def test_action_can_reschedule_itself():
    sched = TickScheduler()
    fired = []

    def again():
        fired.append(sched.now)
        if len(fired) < 3:
            sched.add(2, again)

    sched.add(1, again)
    for _ in range(6):
        sched.advance()
    assert fired == [1, 3, 5]


def test_world_removal_listener_cancels_timers():
    world = make_world()
    sched = TickScheduler()
    world.on_remove(lambda obj: sched.cancel_for(obj.id))
    ship = add_ship(world, 1)
    sched.add(5, lambda: None, target_id=ship.id)
    assert len(sched.pending(ship.id)) == 1
    world.remove_object(ship.id)
    assert sched.pending(ship.id) == []
    # Second removal of the same id is a no-op
    assert world.remove_object(ship.id) is False
