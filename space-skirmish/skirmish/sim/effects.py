from __future__ import annotations
from typing import Any, Dict, List, Optional, Protocol

from ..models import EntityKind


WALL_SHAKE = 4.0


class Presentation(Protocol):
    """Cosmetic sink for the rendering/audio side.

    Nothing the simulation decides may depend on whether one is attached.
    """

    local_player_id: Optional[int]

    def wall_hit(self, kind: EntityKind, is_local_ship: bool) -> None: ...

    def fire_shake(self, magnitude: float) -> None: ...

    def restart_requested(self) -> None: ...

    def clear_announcement(self) -> None: ...


def is_local(presentation: Optional[Presentation], player_id: int) -> bool:
    return presentation is not None and presentation.local_player_id is not None and presentation.local_player_id == player_id


class SignalRecorder:
    """Presentation that keeps signals as plain dicts.

    Used by headless clients and tests; ``drain()`` hands over whatever was
    emitted since the last call.
    """

    def __init__(self, local_player_id: Optional[int] = None) -> None:
        self.local_player_id = local_player_id
        self.camera_shake = 0.0
        self.announcement = ""
        self.restart_requests = 0
        self.signals: List[Dict[str, Any]] = []

    def wall_hit(self, kind: EntityKind, is_local_ship: bool) -> None:
        # Ships get the heavy collide cue, everything else the small one
        sound = "collide" if kind == "ship" else "smallCollide"
        if is_local_ship:
            self.camera_shake += WALL_SHAKE
        self.signals.append({"type": "wall_hit", "kind": kind, "sound": sound, "local": is_local_ship})

    def fire_shake(self, magnitude: float) -> None:
        self.camera_shake = magnitude
        self.signals.append({"type": "fire_shake", "magnitude": magnitude})

    def restart_requested(self) -> None:
        self.restart_requests += 1
        self.signals.append({"type": "restart_requested"})

    def clear_announcement(self) -> None:
        self.announcement = ""
        self.signals.append({"type": "announcement_clear"})

    def drain(self) -> List[Dict[str, Any]]:
        out, self.signals = self.signals, []
        return out
