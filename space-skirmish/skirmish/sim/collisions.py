from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from loguru import logger

from ..models import Entity, Projectile, Ship
from .damage import take_damage
from .ecs import World


# Pluggable ship-vs-ship response; receives both ships and may adjust their velocities
KnockbackPolicy = Callable[[Ship, Ship], None]


@dataclass
class CollisionReport:
    hits: int = 0
    self_hits: int = 0
    corrupted: int = 0
    stale: int = 0
    ship_contacts: int = 0


class CollisionResolver:
    """Applies damage/removal rules to the pairs a detector reported for one tick."""

    def __init__(self, knockback: Optional[KnockbackPolicy] = None) -> None:
        # Ship-vs-ship push-apart is off unless a policy is supplied
        self.knockback = knockback

    def resolve(self, world: World, pairs: Iterable[Tuple[Entity, Entity]]) -> CollisionReport:
        report = CollisionReport()
        for pair in pairs:
            ships: List[Ship] = [e for e in pair if e.kind == "ship"]
            projectiles: List[Projectile] = [e for e in pair if e.kind == "projectile"]

            if any(not s.position.is_finite() for s in ships):
                report.corrupted += 1
                logger.debug(f"skipping collision with corrupted ship position: {[s.id for s in ships]}")
                continue

            if ships and projectiles:
                self._ship_hit(world, ships[0], projectiles[0], report)
            elif len(ships) == 2:
                report.ship_contacts += 1
                if self.knockback is not None:
                    self.knockback(ships[0], ships[1])
        return report

    def _ship_hit(self, world: World, ship: Ship, proj: Projectile, report: CollisionReport) -> None:
        # Same projectile reported twice in a tick: only the first contact counts
        if proj.id not in world or ship.id not in world:
            report.stale += 1
            return
        if proj.player_id == ship.player_id:
            report.self_hits += 1
            return
        health = take_damage(ship, proj.damage)
        world.remove_object(proj.id)
        report.hits += 1
        logger.info(f"ship {ship.id} hit by projectile {proj.id} from player {proj.player_id}, health {health:g}")
