import math
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'space-skirmish')))

from skirmish.models import Vec2
from skirmish.sim.mathutils import clamp, lerp, vector_distance


def test_lerp_moves_a_tenth_by_default_and_snaps_when_close():
    assert lerp(0.0, 10.0) == 1.0
    assert lerp(0.0, 10.0, 0.5) == 5.0
    # Within the snap threshold the target is returned exactly
    assert lerp(1.0, 1.0005) == 1.0005
    assert lerp(5.0, 5.0) == 5.0


def test_lerp_reaches_target_in_finite_steps():
    v = 0.0
    for _ in range(200):
        v = lerp(v, 1.0)
        if v == 1.0:
            break
    assert v == 1.0


def test_vector_distance_euclidean():
    assert vector_distance(Vec2(x=0, y=0), Vec2(x=3, y=4)) == 5.0
    assert vector_distance(Vec2(x=-1, y=-1), Vec2(x=-1, y=-1)) == 0.0


def test_vector_distance_nan_for_missing_or_non_finite():
    assert math.isnan(vector_distance(None, Vec2()))
    assert math.isnan(vector_distance(Vec2(), None))
    assert math.isnan(vector_distance(Vec2(x=math.nan, y=0), Vec2()))
    assert math.isnan(vector_distance(Vec2(), Vec2(x=0, y=math.inf)))


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10
