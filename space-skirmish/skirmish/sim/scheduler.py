from __future__ import annotations
import heapq
import itertools
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple

from loguru import logger


@dataclass
class ScheduledTask:
    task_id: int
    due_tick: int
    action: Callable[[], None]
    target_id: Optional[int] = None
    cancelled: bool = field(default=False, repr=False)


class TickScheduler:
    """One-shot callbacks keyed to the simulation tick counter.

    Tasks fire synchronously from ``advance()`` once ``now`` reaches their due
    tick. Tasks bound to a target entity are cancelled via ``cancel_for`` when
    that entity leaves the world.
    """

    def __init__(self, start_tick: int = 0) -> None:
        self.now = start_tick
        self._heap: List[Tuple[int, int, ScheduledTask]] = []
        self._tasks: Dict[int, ScheduledTask] = {}
        self._by_target: Dict[int, Set[int]] = {}
        self._ids = itertools.count(1)

    def add(self, delay: float, action: Callable[[], None], target_id: Optional[int] = None) -> ScheduledTask:
        if not math.isfinite(delay):
            raise ValueError(f"timer delay must be finite, got {delay}")
        # Fractional delays (e.g. 60 / fire_rate) round up to the next whole tick
        due = self.now + max(0, math.ceil(delay))
        task = ScheduledTask(task_id=next(self._ids), due_tick=due, action=action, target_id=target_id)
        self._tasks[task.task_id] = task
        if target_id is not None:
            self._by_target.setdefault(target_id, set()).add(task.task_id)
        heapq.heappush(self._heap, (due, task.task_id, task))
        return task

    def _forget(self, task: ScheduledTask) -> None:
        self._tasks.pop(task.task_id, None)
        if task.target_id is not None:
            ids = self._by_target.get(task.target_id)
            if ids is not None:
                ids.discard(task.task_id)
                if not ids:
                    del self._by_target[task.target_id]

    def cancel(self, task_id: int) -> bool:
        task = self._tasks.get(task_id)
        if task is None:
            return False
        task.cancelled = True
        self._forget(task)
        return True

    def cancel_for(self, target_id: int) -> int:
        ids = list(self._by_target.get(target_id, ()))
        for tid in ids:
            self.cancel(tid)
        if ids:
            logger.debug(f"cancelled {len(ids)} timer(s) for entity {target_id}")
        return len(ids)

    def pending(self, target_id: Optional[int] = None) -> List[ScheduledTask]:
        if target_id is None:
            return sorted(self._tasks.values(), key=lambda t: (t.due_tick, t.task_id))
        return [self._tasks[i] for i in sorted(self._by_target.get(target_id, ()))]

    def advance(self) -> int:
        """Move to the next tick and run everything now due. Returns the number run."""
        self.now += 1
        ran = 0
        while self._heap and self._heap[0][0] <= self.now:
            _, _, task = heapq.heappop(self._heap)
            if task.cancelled:
                continue
            # Drop bookkeeping first so the action may reschedule or cancel freely
            self._forget(task)
            task.action()
            ran += 1
        return ran
