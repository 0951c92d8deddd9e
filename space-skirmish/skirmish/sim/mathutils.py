from __future__ import annotations
import math
from typing import Optional, Protocol


LERP_SNAP = 0.001


class _XY(Protocol):
    x: float
    y: float


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def lerp(start: float, end: float, weight: float = 0.10) -> float:
    """Linear interpolation that snaps to ``end`` once within LERP_SNAP.

    Without the snap, repeated calls approach ``end`` asymptotically and never
    reach it.
    """
    if abs(end - start) < LERP_SNAP:
        return end
    return start + (end - start) * weight


def vector_distance(a: Optional[_XY], b: Optional[_XY]) -> float:
    """Euclidean distance between two 2D points; NaN if either is missing or non-finite."""
    if a is None or b is None:
        return math.nan
    for v in (a.x, a.y, b.x, b.y):
        if not math.isfinite(v):
            return math.nan
    return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2)
