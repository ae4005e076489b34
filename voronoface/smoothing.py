"""
Per-frame update of the Voronoi sites.

Every frame, a target point list is built from the latest face and hand snapshots,
and the current (displayed) point list is moved a fixed fraction of the way toward
it. Whenever the number of points changes (a hand shows up or leaves), the current
list is reset to a copy of the target instead.

>>> state = update(VoronoiState(), faces=[[Landmark(10, 10)]], hands=[])
>>> state.current
[[10.0, 10.0]]
>>> state = update(state, faces=[[Landmark(20, 20)]], hands=[])
>>> state.current
[[17.0, 17.0]]
>>> update(state, faces=[], hands=[])
VoronoiState(current=[], target=[], reserved=[])
"""

from typing import List, NamedTuple, Optional

import numpy as np

from voronoface.config import VoronoiConfig
from voronoface.point_features import Points, random_points, synthesize_target
from voronoface.util import Landmark, clone_points, lerp

DFLT_LERP_SPEED = 0.7


class VoronoiState(NamedTuple):
    current: Points = ()
    target: Points = ()
    reserved: Points = ()


def advance_points(current: Points, target: Points, lerp_speed=DFLT_LERP_SPEED):
    """
    Move ``current`` toward ``target`` by the fraction ``lerp_speed``.

    If the two lists differ in length, a copy of ``target`` is returned: no blending
    happens that frame.

    >>> advance_points([[10, 10]], [[20, 20]], 0.7)
    [[17.0, 17.0]]
    >>> advance_points([], [[1, 2], [3, 4]])
    [[1.0, 2.0], [3.0, 4.0]]
    """
    if len(current) != len(target):
        return clone_points(target)
    return [
        [lerp(cx, tx, lerp_speed), lerp(cy, ty, lerp_speed)]
        for (cx, cy), (tx, ty) in zip(current, target)
    ]


def update(
    state: VoronoiState,
    faces,
    hands,
    config: Optional[VoronoiConfig] = None,
    *,
    frame_size=None,
    rng: Optional[np.random.Generator] = None,
) -> VoronoiState:
    """
    Compute the next state from the previous one and the latest detections.

    Args:
        state: The previous state
        faces: Face snapshots; only the first one is used
        hands: Hand snapshots, in detector order
        config: Sampling and smoothing settings
        frame_size: ``(width, height)``, needed to seed random reserved points
        rng: Random generator for the reserved points

    Returns:
        VoronoiState: The new state. Empty when there's no face.
    """
    config = config or VoronoiConfig()
    if not faces:
        return VoronoiState([], [], [])

    reserved = list(state.reserved)
    if not reserved and config.random_points and frame_size is not None:
        width, height = frame_size
        reserved = random_points(config.random_points, width, height, rng=rng)

    target = synthesize_target(
        faces[0],
        hands,
        reserved,
        face_point_skip=config.face_point_skip,
        finger_tips=config.finger_tips,
        knuckles=config.knuckles,
        palm=config.palm,
    )
    current = advance_points(state.current, target, config.lerp_speed)
    return VoronoiState(current, target, reserved)


class LatestSnapshot:
    """
    Holds the most recent detection result (last write wins).

    Pass an instance as a detector's result callback, and read ``value`` when
    updating a frame.

    >>> faces = LatestSnapshot()
    >>> faces.value
    []
    >>> faces(['first']); faces(['second'])
    >>> faces.value
    ['second']
    """

    def __init__(self, value: Optional[List] = None):
        self.value = list(value) if value is not None else []

    def __call__(self, results):
        self.value = results

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"
