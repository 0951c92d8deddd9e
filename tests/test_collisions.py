import math

import pytest

from helpers import add_projectile, add_ship, make_world
from skirmish.sim.collisions import CollisionResolver


@pytest.mark.parametrize("damage", [0.0, 1.0, 10.0, 1e9])
def test_own_projectile_never_damages(damage):
    world = make_world()
    ship = add_ship(world, 1)
    proj = add_projectile(world, 1, owner_id=999, damage=damage)
    report = CollisionResolver().resolve(world, [(ship, proj)])
    assert ship.health == 100.0
    assert proj.id in world
    assert report.self_hits == 1
    assert report.hits == 0


def test_enemy_projectile_damages_and_is_removed():
    world = make_world()
    ship = add_ship(world, 1)
    proj = add_projectile(world, 2, damage=25.0)
    report = CollisionResolver().resolve(world, [(proj, ship)])
    assert ship.health == 75.0
    assert proj.id not in world
    assert report.hits == 1


def test_health_clamps_at_zero():
    world = make_world()
    ship = add_ship(world, 1, health=5.0)
    proj = add_projectile(world, 2, damage=50.0)
    CollisionResolver().resolve(world, [(ship, proj)])
    assert ship.health == 0.0


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_corrupted_ship_position_skips_pair(bad):
    world = make_world()
    ship = add_ship(world, 1)
    ship.position.y = bad
    proj = add_projectile(world, 2)
    report = CollisionResolver().resolve(world, [(ship, proj)])
    assert ship.health == 100.0
    assert proj.id in world
    assert report.corrupted == 1


def test_projectile_reported_twice_in_one_tick_hits_once():
    world = make_world()
    a = add_ship(world, 1)
    b = add_ship(world, 3)
    proj = add_projectile(world, 2, damage=10.0)
    report = CollisionResolver().resolve(world, [(a, proj), (a, proj), (b, proj)])
    assert a.health == 90.0
    assert b.health == 100.0
    assert report.hits == 1
    assert report.stale == 2


def test_ship_contact_is_a_noop_by_default():
    world = make_world()
    a = add_ship(world, 1, vx=1.0)
    b = add_ship(world, 2, vx=-1.0)
    report = CollisionResolver().resolve(world, [(a, b)])
    assert (a.velocity.x, b.velocity.x) == (1.0, -1.0)
    assert (a.health, b.health) == (100.0, 100.0)
    assert report.ship_contacts == 1


def test_ship_contact_calls_supplied_knockback_policy():
    world = make_world()
    a = add_ship(world, 1)
    b = add_ship(world, 2)
    seen = []
    CollisionResolver(knockback=lambda s1, s2: seen.append((s1.id, s2.id))).resolve(world, [(a, b)])
    assert seen == [(a.id, b.id)]


def test_projectile_pairs_are_ignored_and_no_state_carries_over():
    world = make_world()
    p1 = add_projectile(world, 1)
    p2 = add_projectile(world, 2)
    resolver = CollisionResolver()
    report = resolver.resolve(world, [(p1, p2)])
    assert report.hits == 0
    assert p1.id in world and p2.id in world
    assert resolver.resolve(world, []).hits == 0


def test_ship_rejects_negative_health_and_fire_rate():
    from pydantic import ValidationError
    from skirmish.models import Ship

    with pytest.raises(ValidationError):
        Ship(player_id=1, health=-1.0)
    with pytest.raises(ValidationError):
        Ship(player_id=1, fire_rate=-0.5)
    assert Ship(player_id=1, health=0.0, fire_rate=0.0).health == 0.0
