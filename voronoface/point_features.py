"""Point sampling from face and hand landmarks, for the Voronoi sites."""

import math
from typing import List, Optional, Sequence

import numpy as np

from voronoface.util import (
    FINGER_TIPS,
    KNUCKLES,
    PALM_CENTER,
    BoundingBox,
    clone_points,
)

Point = List[float]
Points = List[Point]

DFLT_FACE_POINT_SKIP = 3

# -------------------------------------------------------------------------------
# Face points
# -------------------------------------------------------------------------------


def sample_face_points(face, skip: int = DFLT_FACE_POINT_SKIP) -> Points:
    """
    Take every ``skip``-th face landmark (starting at index 0) as an ``[x, y]`` point.

    Args:
        face: Sequence of landmarks (anything with ``x`` and ``y`` attributes)
        skip: Keep one landmark out of ``skip``

    Returns:
        list: ``ceil(len(face) / skip)`` points, in landmark order
    """
    if skip < 1:
        raise ValueError(f"skip must be at least 1, got {skip}")
    return [[float(lm.x), float(lm.y)] for lm in face[::skip]]


def n_face_points(n_landmarks: int, skip: int = DFLT_FACE_POINT_SKIP) -> int:
    """Number of points ``sample_face_points`` yields for ``n_landmarks`` landmarks."""
    return math.ceil(n_landmarks / skip)


def face_bounding_box(face) -> BoundingBox:
    """
    The axis-aligned box enclosing all the landmarks of a face.

    Raises:
        ValueError: If the face has no landmarks
    """
    if len(face) == 0:
        raise ValueError("Can't compute the bounding box of a face with no landmarks")
    xs = [lm.x for lm in face]
    ys = [lm.y for lm in face]
    min_x, min_y = min(xs), min(ys)
    return BoundingBox(
        x=min_x, y=min_y, width=max(xs) - min_x, height=max(ys) - min_y
    )


# -------------------------------------------------------------------------------
# Hand points
# -------------------------------------------------------------------------------


def sample_hand_points(
    hand,
    finger_tips: Sequence[int] = FINGER_TIPS,
    knuckles: Sequence[int] = KNUCKLES,
    palm: int = PALM_CENTER,
) -> Points:
    """
    Fingertip and knuckle points of a hand, followed by the palm point.

    For each finger (thumb to pinky) the tip is emitted, then its knuckle. With the
    default indices that's always 11 points.

    A hand with fewer landmarks than the indices refer to raises ``IndexError``.
    """
    if len(finger_tips) != len(knuckles):
        raise ValueError(
            f"Need as many knuckles as finger tips: {len(finger_tips)} != {len(knuckles)}"
        )
    points = []
    for tip_idx, knuckle_idx in zip(finger_tips, knuckles):
        tip = hand[tip_idx]
        knuckle = hand[knuckle_idx]
        points.append([float(tip.x), float(tip.y)])
        points.append([float(knuckle.x), float(knuckle.y)])

    palm_lm = hand[palm]
    points.append([float(palm_lm.x), float(palm_lm.y)])
    return points


def many_hand_points(
    hands,
    finger_tips: Sequence[int] = FINGER_TIPS,
    knuckles: Sequence[int] = KNUCKLES,
    palm: int = PALM_CENTER,
) -> Points:
    """Calls sample_hand_points for each hand, concatenating in the given hand order."""
    return [
        point
        for hand in hands
        for point in sample_hand_points(
            hand, finger_tips=finger_tips, knuckles=knuckles, palm=palm
        )
    ]


# -------------------------------------------------------------------------------
# Merging
# -------------------------------------------------------------------------------


def synthesize_target(
    face,
    hands,
    reserved: Points = (),
    *,
    face_point_skip: int = DFLT_FACE_POINT_SKIP,
    finger_tips: Sequence[int] = FINGER_TIPS,
    knuckles: Sequence[int] = KNUCKLES,
    palm: int = PALM_CENTER,
) -> Points:
    """
    The target point list of a frame: face points, then hand points, then the
    reserved points (copied, otherwise unchanged).
    """
    target = sample_face_points(face, skip=face_point_skip)
    target.extend(
        many_hand_points(hands, finger_tips=finger_tips, knuckles=knuckles, palm=palm)
    )
    target.extend(clone_points(reserved))
    return target


def random_points(
    n: int, width: float, height: float, rng: Optional[np.random.Generator] = None
) -> Points:
    """``n`` points drawn uniformly in the ``width`` x ``height`` frame."""
    rng = rng if rng is not None else np.random.default_rng()
    xy = rng.uniform((0.0, 0.0), (width, height), size=(n, 2))
    return xy.tolist()
