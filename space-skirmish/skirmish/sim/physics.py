from __future__ import annotations
import math
from typing import FrozenSet, List, Set, Tuple

from ..models import Entity
from .ecs import World


DEG_TO_RAD = math.pi / 180.0


def heading_vector(angle_deg: float) -> Tuple[float, float]:
    rad = angle_deg * DEG_TO_RAD
    return math.cos(rad), math.sin(rad)


def accelerate(obj: Entity, amount: float) -> None:
    # Thrust is applied along the current facing; negative amounts brake/reverse
    cx, cy = heading_vector(obj.angle)
    obj.velocity.x += cx * amount
    obj.velocity.y += cy * amount


def turn(obj: Entity, delta_deg: float) -> None:
    obj.angle = (obj.angle + delta_deg) % 360.0


def step_movement(world: World) -> None:
    # Plain Euler step, one tick = one unit of time; no friction, no wrap
    for obj in world.objects.values():
        obj.position.x += obj.velocity.x
        obj.position.y += obj.velocity.y


def _overlaps(a: Entity, b: Entity) -> bool:
    # NaN coordinates make every comparison false, so corrupted boxes never overlap
    return (
        abs(a.position.x - b.position.x) * 2 < a.width + b.width
        and abs(a.position.y - b.position.y) * 2 < a.height + b.height
    )


class BruteForceDetector:
    """All-pairs AABB test reporting pairs that started touching this tick."""

    def __init__(self) -> None:
        self._touching: Set[FrozenSet[int]] = set()

    def detect(self, world: World) -> List[Tuple[Entity, Entity]]:
        objs = list(world.objects.values())
        now_touching: Set[FrozenSet[int]] = set()
        started: List[Tuple[Entity, Entity]] = []
        for i, a in enumerate(objs):
            for b in objs[i + 1:]:
                if not _overlaps(a, b):
                    continue
                key = frozenset((a.id, b.id))
                now_touching.add(key)
                if key not in self._touching:
                    started.append((a, b))
        self._touching = now_touching
        return started
