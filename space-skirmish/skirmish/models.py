from __future__ import annotations
import math
from typing import Any, Dict, Literal, Optional, Union
from pydantic import BaseModel, Field

from .config import CONFIG


EntityKind = Literal["ship", "projectile"]
INPUT_COMMANDS = ("up", "down", "left", "right", "fire", "enter")


class Vec2(BaseModel):
    x: float = 0.0
    y: float = 0.0

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


class Cooldown(BaseModel):
    # Handle to the scheduler task that marks the end of the window
    task_id: Optional[int] = None
    start_tick: int
    duration: float  # ticks


class Ship(BaseModel):
    kind: Literal["ship"] = "ship"
    id: int = 0  # assigned by World.add_object
    player_id: int
    username: str = ""
    position: Vec2 = Field(default_factory=Vec2)
    velocity: Vec2 = Field(default_factory=Vec2)
    angle: float = 0.0  # degrees, 0 = +x
    health: float = Field(default_factory=lambda: CONFIG.ship_health, ge=0)
    width: float = 5.0
    height: float = 6.0
    fire_rate: float = Field(default_factory=lambda: CONFIG.ship_fire_rate, ge=0)
    cooldown: Optional[Cooldown] = None


class Projectile(BaseModel):
    kind: Literal["projectile"] = "projectile"
    id: int = 0
    player_id: int  # shooter's player, for same-player exclusion
    owner_id: int  # shooter's entity id
    position: Vec2 = Field(default_factory=Vec2)
    velocity: Vec2 = Field(default_factory=Vec2)
    angle: float = 0.0
    damage: float = Field(default_factory=lambda: CONFIG.projectile_damage)
    spawn_tick: int = 0
    width: float = 1.0
    height: float = 1.0


Entity = Union[Ship, Projectile]


class InputMessage(BaseModel):
    input: str


class ClientMessage(BaseModel):
    topic: str
    data: Dict[str, Any] = Field(default_factory=dict)
