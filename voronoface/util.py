"""Utils for voronoface."""

from collections import namedtuple


def return_none(*args, **kwargs):
    """
    An empty function that returns None no matter the arguments.
    Often used as a "do nothing" general callback function.
    """
    return None


# --------------------------------------------------------------------------------------
# Constants


class HandLandmark:
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


N_HAND_LANDMARKS = 21

# Thumb, index, middle, ring, pinky
FINGER_TIPS = (
    HandLandmark.THUMB_TIP,
    HandLandmark.INDEX_FINGER_TIP,
    HandLandmark.MIDDLE_FINGER_TIP,
    HandLandmark.RING_FINGER_TIP,
    HandLandmark.PINKY_TIP,
)
KNUCKLES = (
    HandLandmark.THUMB_MCP,
    HandLandmark.INDEX_FINGER_PIP,
    HandLandmark.MIDDLE_FINGER_PIP,
    HandLandmark.RING_FINGER_PIP,
    HandLandmark.PINKY_PIP,
)
PALM_CENTER = HandLandmark.WRIST


# --------------------------------------------------------------------------------------
# Types

Landmark = namedtuple('Landmark', ['x', 'y', 'z'], defaults=[0.0])
Landmark.__doc__ = "A keypoint in pixel coordinates (z is the detector's relative depth)"

BoundingBox = namedtuple('BoundingBox', ['x', 'y', 'width', 'height'])


# --------------------------------------------------------------------------------------
# Point utils


def lerp(a, b, alpha):
    """
    Linear interpolation from ``a`` toward ``b`` by the fraction ``alpha``.

    >>> lerp(10, 20, 0.7)
    17.0
    >>> lerp(5, 5, 0.3)
    5.0
    """
    return a + alpha * (b - a)


def clone_points(points):
    """
    Return a value copy of a list of coordinate pairs.

    >>> pts = [[1, 2], [3, 4]]
    >>> copy = clone_points(pts)
    >>> copy == pts, copy is pts, copy[0] is pts[0]
    (True, False, False)
    """
    return [[float(x), float(y)] for x, y in points]


# --------------------------------------------------------------------------------------
# String utils


def format_float(value, ndigits=4):
    """
    >>> format_float(3.14159, 2)
    '3.14'
    """
    return f"{value:.{ndigits}f}"
