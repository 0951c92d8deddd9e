from __future__ import annotations
from typing import List, Optional

from .ecs import World
from .effects import Presentation, is_local


BOUNCE_BIAS = 0.4
BOUNCE_FACTOR = -1.2


def _bounce(v: float, bias: float) -> float:
    # Reverses and amplifies; the wall adds energy on purpose
    return (v + bias) * BOUNCE_FACTOR


def correct_boundaries(world: World, presentation: Optional[Presentation] = None) -> List[int]:
    """Clamp and bounce entities that left the world extents.

    Only the first overflowing axis is corrected per entity per call, checked
    in the order +x, -x, +y, -y. Returns the ids that were corrected.
    """
    w, h = world.width, world.height
    corrected: List[int] = []
    for obj in list(world.objects.values()):
        pos = getattr(obj, "position", None)
        vel = getattr(obj, "velocity", None)
        if pos is None or vel is None:
            continue
        if pos.x > w:
            pos.x = w
            vel.x = _bounce(vel.x, BOUNCE_BIAS)
        elif pos.x < -w:
            pos.x = -w
            vel.x = _bounce(vel.x, -BOUNCE_BIAS)
        elif pos.y > h:
            pos.y = h
            vel.y = _bounce(vel.y, BOUNCE_BIAS)
        elif pos.y < -h:
            pos.y = -h
            vel.y = _bounce(vel.y, -BOUNCE_BIAS)
        else:
            continue
        corrected.append(obj.id)
        if presentation is not None:
            presentation.wall_hit(obj.kind, obj.kind == "ship" and is_local(presentation, obj.player_id))
    return corrected
