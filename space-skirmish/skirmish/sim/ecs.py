from __future__ import annotations
import itertools
from typing import Callable, Dict, List, Optional

from ..models import Entity, Projectile, Ship


class World:
    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.objects: Dict[int, Entity] = {}
        self._ids = itertools.count(1)
        self._on_remove: List[Callable[[Entity], None]] = []

    def on_remove(self, listener: Callable[[Entity], None]) -> None:
        self._on_remove.append(listener)

    def add_object(self, obj: Entity) -> Entity:
        obj.id = next(self._ids)
        self.objects[obj.id] = obj
        return obj

    def remove_object(self, obj_id: int) -> bool:
        """Remove by id. Removing an id that is already gone is a no-op."""
        obj = self.objects.pop(obj_id, None)
        if obj is None:
            return False
        for listener in self._on_remove:
            listener(obj)
        return True

    def get(self, obj_id: int) -> Optional[Entity]:
        return self.objects.get(obj_id)

    def __contains__(self, obj_id: int) -> bool:
        return obj_id in self.objects

    def query(self, predicate: Callable[[Entity], bool]) -> List[Entity]:
        return [o for o in self.objects.values() if predicate(o)]

    def query_one(self, predicate: Callable[[Entity], bool]) -> Optional[Entity]:
        return next((o for o in self.objects.values() if predicate(o)), None)

    def ships(self) -> List[Ship]:
        return [o for o in self.objects.values() if o.kind == "ship"]

    def projectiles(self) -> List[Projectile]:
        return [o for o in self.objects.values() if o.kind == "projectile"]

    def ship_for_player(self, player_id: int) -> Optional[Ship]:
        # At most one ship per player is expected; first match wins otherwise
        return self.query_one(lambda o: o.kind == "ship" and o.player_id == player_id)
