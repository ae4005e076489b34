import pytest

from voronoface.util import Landmark, N_HAND_LANDMARKS


def make_face(n, *, x0=100.0, y0=50.0):
    """A face snapshot whose landmark ``i`` sits at ``(x0 + i, y0 + 2 * i)``."""
    return [Landmark(x0 + i, y0 + 2 * i, 0.5 * i) for i in range(n)]


def make_hand(*, x0=0.0, y0=0.0, n=N_HAND_LANDMARKS):
    """A hand snapshot whose landmark ``i`` sits at ``(x0 + 10 * i, y0 + i)``."""
    return [Landmark(x0 + 10 * i, y0 + i) for i in range(n)]


@pytest.fixture
def face():
    return make_face(9)


@pytest.fixture
def two_hands():
    return [make_hand(x0=300, y0=300), make_hand(x0=500, y0=100)]
