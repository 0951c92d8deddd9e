from __future__ import annotations
import math
from typing import Optional

from loguru import logger

from ..models import INPUT_COMMANDS, Cooldown, Ship
from .ecs import World
from .effects import Presentation
from .factory import make_projectile
from .physics import accelerate, turn
from .scheduler import TickScheduler


THRUST_FORWARD = 0.03
THRUST_REVERSE = -0.02  # braking is deliberately weaker than forward thrust
TURN_STEP_DEG = 2.5
COOLDOWN_BASE_TICKS = 60.0


def cooldown_active(ship: Ship, now: int) -> bool:
    cd = ship.cooldown
    return cd is not None and now - cd.start_tick < cd.duration


def try_fire(world: World, scheduler: TickScheduler, ship: Ship, presentation: Optional[Presentation] = None) -> bool:
    if cooldown_active(ship, scheduler.now):
        return False
    make_projectile(world, scheduler, ship, presentation)
    if ship.cooldown is not None and ship.cooldown.task_id is not None:
        scheduler.cancel(ship.cooldown.task_id)
    if ship.fire_rate <= 0:
        # Zero rate: the window never ends, so this was the last shot
        ship.cooldown = Cooldown(start_tick=scheduler.now, duration=math.inf)
        return True
    duration = COOLDOWN_BASE_TICKS / ship.fire_rate
    ship_id = ship.id

    def _cooldown_done() -> None:
        owner = world.get(ship_id)
        if owner is not None and owner.cooldown is not None and owner.cooldown.task_id == task.task_id:
            owner.cooldown = None

    task = scheduler.add(duration, _cooldown_done, target_id=ship_id)
    ship.cooldown = Cooldown(task_id=task.task_id, start_tick=scheduler.now, duration=duration)
    return True


def process_input(
    world: World,
    scheduler: TickScheduler,
    command: str,
    player_id: int,
    presentation: Optional[Presentation] = None,
) -> bool:
    """Apply one player command for the current tick.

    Returns True when the command changed something (including cosmetic
    restart signals), False when it was dropped or ignored.
    """
    if command not in INPUT_COMMANDS:
        logger.debug(f"ignoring unknown input {command!r} from player {player_id}")
        return False

    ship = world.ship_for_player(player_id)
    if ship is None:
        if command == "enter":
            # Restart is negotiated by the connection layer; here only the cosmetic side reacts
            if presentation is not None:
                presentation.restart_requested()
                presentation.clear_announcement()
                return True
        return False

    if command == "up":
        accelerate(ship, THRUST_FORWARD)
    elif command == "down":
        accelerate(ship, THRUST_REVERSE)
    elif command == "left":
        turn(ship, -TURN_STEP_DEG)
    elif command == "right":
        turn(ship, TURN_STEP_DEG)
    elif command == "fire":
        return try_fire(world, scheduler, ship, presentation)
    else:
        return False
    return True
