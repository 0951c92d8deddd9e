from __future__ import annotations
from typing import List

from loguru import logger

from ..models import Ship
from .ecs import World


def take_damage(ship: Ship, amount: float) -> float:
    """Apply damage, never letting health go negative. Returns the new health."""
    ship.health = max(0.0, ship.health - amount)
    return ship.health


def reap_destroyed(world: World) -> List[Ship]:
    dead = [s for s in world.ships() if s.health <= 0.0]
    for ship in dead:
        world.remove_object(ship.id)
        logger.info(f"ship {ship.id} ({ship.username}) destroyed")
    return dead
