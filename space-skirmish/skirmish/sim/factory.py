from __future__ import annotations
import random
from typing import Optional

from loguru import logger

from ..models import Projectile, Ship, Vec2
from .ecs import World
from .effects import Presentation, is_local
from .mathutils import vector_distance
from .physics import heading_vector
from .scheduler import TickScheduler


SPAWN_ATTEMPTS = 30
SPAWN_AREA = 0.90  # fraction of the world used for spawn sampling
SPAWN_SEPARATION = 80.0
SHIP_WIDTH = 5.0
SHIP_HEIGHT = 6.0
PROJECTILE_SPEED = 2.0
PROJECTILE_TTL_TICKS = 100


def find_spawn_position(world: World, rng=random) -> Vec2:
    ships = world.ships()
    spawn = Vec2()
    for _ in range(SPAWN_ATTEMPTS):
        spawn = Vec2(
            x=(rng.random() - 0.5) * world.width * SPAWN_AREA,
            y=(rng.random() - 0.5) * world.height * SPAWN_AREA,
        )
        if all(vector_distance(spawn, s.position) > SPAWN_SEPARATION for s in ships):
            return spawn
    # Crowded: settle for the last sample even if it overlaps someone
    logger.debug(f"no clear spawn after {SPAWN_ATTEMPTS} attempts, using ({spawn.x:.1f}, {spawn.y:.1f})")
    return spawn


def make_ship(world: World, player_id: int, username, rng=random) -> Ship:
    """Create a ship for ``player_id`` somewhere clear of other ships and add it to the world."""
    ship = Ship(
        player_id=player_id,
        username=str(username),
        position=find_spawn_position(world, rng),
        width=SHIP_WIDTH,
        height=SHIP_HEIGHT,
    )
    world.add_object(ship)
    logger.info(f"ship {ship.id} added for player {player_id} ({ship.username})")
    return ship


def make_projectile(
    world: World,
    scheduler: TickScheduler,
    ship: Ship,
    presentation: Optional[Presentation] = None,
) -> Projectile:
    proj = Projectile(
        player_id=ship.player_id,
        owner_id=ship.id,
        position=ship.position.model_copy(),
        velocity=ship.velocity.model_copy(),
        angle=ship.angle,
        spawn_tick=scheduler.now,
    )
    cx, cy = heading_vector(proj.angle)
    proj.velocity.x += cx * PROJECTILE_SPEED
    proj.velocity.y += cy * PROJECTILE_SPEED

    if is_local(presentation, ship.player_id):
        presentation.fire_shake(proj.damage)

    world.add_object(proj)
    proj_id = proj.id

    def _expire() -> None:
        # The projectile may already be gone (hit something); removal is then a no-op
        if proj_id in world:
            world.remove_object(proj_id)

    scheduler.add(PROJECTILE_TTL_TICKS, _expire, target_id=proj_id)
    logger.debug(f"projectile {proj_id} fired by ship {ship.id}")
    return proj
