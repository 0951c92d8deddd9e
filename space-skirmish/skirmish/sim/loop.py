from __future__ import annotations
import asyncio
import random
import time
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from ..bus import BUS
from ..config import CONFIG
from ..models import Entity, InputMessage, Ship
from .boundary import correct_boundaries
from .collisions import CollisionReport, CollisionResolver, KnockbackPolicy
from .damage import reap_destroyed
from .ecs import World
from .effects import Presentation
from .factory import make_ship
from .inputs import process_input
from .physics import BruteForceDetector, step_movement
from .scheduler import TickScheduler


class Simulation:
    def __init__(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
        presentation: Optional[Presentation] = None,
        knockback: Optional[KnockbackPolicy] = None,
        rng=None,
    ) -> None:
        self.dt = 1.0 / CONFIG.tick_hz
        self.world = World(
            width if width is not None else CONFIG.world_width,
            height if height is not None else CONFIG.world_height,
        )
        self.scheduler = TickScheduler()
        # Timers bound to an entity die with it
        self.world.on_remove(self._on_removed)
        self.detector = BruteForceDetector()
        self.resolver = CollisionResolver(knockback)
        self.presentation = presentation
        self.rng = rng if rng is not None else random
        self._pending_inputs: Dict[int, str] = {}
        self._usernames: Dict[int, str] = {}
        self._transient_events: List[Dict[str, Any]] = []  # cleared every tick
        # Lazily initialize asyncio.Event to avoid requiring an event loop during tests
        self._stop: Optional[asyncio.Event] = None

    @property
    def tick_count(self) -> int:
        return self.scheduler.now

    def _on_removed(self, obj: Entity) -> None:
        self.scheduler.cancel_for(obj.id)

    # -- players -------------------------------------------------------------

    def add_player(self, player_id: int, username: str) -> Ship:
        self._usernames[player_id] = str(username)
        return make_ship(self.world, player_id, username, self.rng)

    def remove_player(self, player_id: int) -> int:
        self._usernames.pop(player_id, None)
        self._pending_inputs.pop(player_id, None)
        owned = [s.id for s in self.world.ships() if s.player_id == player_id]
        for sid in owned:
            self.world.remove_object(sid)
        return len(owned)

    def request_restart(self, player_id: int) -> Optional[Ship]:
        if self.world.ship_for_player(player_id) is not None:
            return None
        username = self._usernames.get(player_id, f"player-{player_id}")
        logger.info(f"restart requested by player {player_id}")
        return self.add_player(player_id, username)

    def submit_input(self, player_id: int, command: str) -> None:
        # One command per player per tick; the latest one wins
        self._pending_inputs[player_id] = command

    # -- tick ----------------------------------------------------------------

    def tick(self) -> CollisionReport:
        self._transient_events = []
        self.scheduler.advance()

        inputs, self._pending_inputs = self._pending_inputs, {}
        for player_id, command in inputs.items():
            process_input(self.world, self.scheduler, command, player_id, self.presentation)

        step_movement(self.world)
        pairs = self.detector.detect(self.world)
        report = self.resolver.resolve(self.world, pairs)
        corrected = correct_boundaries(self.world, self.presentation)
        if corrected:
            self._transient_events.append({"type": "wall_hit", "ids": corrected})
        if report.hits:
            self._transient_events.append({"type": "hits", "count": report.hits})

        if CONFIG.reap_destroyed:
            for ship in reap_destroyed(self.world):
                self._transient_events.append({"type": "destroyed", "id": ship.id, "playerId": ship.player_id})
        return report

    def snapshot(self) -> Dict[str, Any]:
        return {
            "tick": self.tick_count,
            "world": {"width": self.world.width, "height": self.world.height},
            "ships": [s.model_dump(exclude={"cooldown"}) for s in self.world.ships()],
            "projectiles": [p.model_dump() for p in self.world.projectiles()],
            "events": list(self._transient_events),
        }

    # -- async host ----------------------------------------------------------

    def stop(self) -> None:
        if self._stop is None:
            self._stop = asyncio.Event()
        self._stop.set()

    async def run(self) -> None:
        # A stopped simulation can be run again (e.g. app restarted in-process)
        if self._stop is None or self._stop.is_set():
            self._stop = asyncio.Event()
        logger.info(f"game engine started at {CONFIG.tick_hz} Hz")
        last = time.perf_counter()
        while not self._stop.is_set():
            now = time.perf_counter()
            elapsed = now - last
            if elapsed < self.dt:
                await asyncio.sleep(self.dt - elapsed)
                continue
            last = now
            self.tick()
            dropped = await BUS.publish("tick:all", {"topic": "snapshot", "data": self.snapshot()})
            if dropped:
                logger.debug(f"tick {self.tick_count}: snapshot dropped for {dropped} slow client(s)")
        logger.info("game engine stopped")

    async def handle_command(self, player_id: int, topic: str, data: Dict) -> Optional[str]:
        if topic == "input":
            try:
                msg = InputMessage(**(data or {}))
            except (TypeError, ValidationError):
                return "invalid input payload"
            self.submit_input(player_id, msg.input)
            return None
        if topic == "requestRestart":
            self.request_restart(player_id)
            return None
        return f"unknown topic: {topic}"
