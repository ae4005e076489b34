import cv2
import numpy as np
import pytest

from voronoface.tessellation import (
    clip_polygon,
    n_drawable_cells,
    rect_polygon,
    voronoi_cells,
)
from voronoface.smoothing import VoronoiState, update

from conftest import make_face, make_hand

CLIP = (0, 0, 100, 100)
POINTS = [[20.0, 30.0], [70.0, 25.0], [30.0, 80.0], [80.0, 70.0], [50.0, 52.0]]


def _area(cell):
    return cv2.contourArea(np.asarray(cell, dtype=np.float32))


def test_one_cell_per_point():
    cells = voronoi_cells(POINTS, CLIP)
    assert len(cells) == len(POINTS)
    assert n_drawable_cells(cells) == len(POINTS)
    for point, cell in zip(POINTS, cells):
        assert cell.ndim == 2 and cell.shape[1] == 2
        assert cv2.pointPolygonTest(cell.astype(np.float32), tuple(point), False) >= 0


def test_cells_tile_the_clip_rect():
    cells = voronoi_cells(POINTS, CLIP)
    assert sum(_area(cell) for cell in cells) == pytest.approx(100 * 100, rel=1e-3)
    for cell in cells:
        assert cell[:, 0].min() >= -1e-3 and cell[:, 0].max() <= 100 + 1e-3
        assert cell[:, 1].min() >= -1e-3 and cell[:, 1].max() <= 100 + 1e-3


def test_duplicate_points_have_no_cell():
    points = [[10.0, 10.0], [10.0, 10.0], [60.0, 60.0]]
    cells = voronoi_cells(points, CLIP)
    assert cells[0] is not None
    assert cells[1] is None
    assert cells[2] is not None
    assert n_drawable_cells(cells) == 2


def test_points_outside_clip_rect_keep_their_cell():
    cells = voronoi_cells([[-5.0, 50.0], [55.0, 50.0]], CLIP)
    # the bisector is x = 25
    assert cells[0] is not None
    assert _area(cells[0]) == pytest.approx(25 * 100, rel=1e-3)
    assert _area(cells[1]) == pytest.approx(75 * 100, rel=1e-3)
    assert cells[0][:, 0].max() == pytest.approx(25, abs=1e-2)


def test_far_away_and_non_finite_points_have_no_cell():
    points = [[-5.0, 10.0], [50.0, 50.0], [50.0, 300.0], [float('nan'), 3.0]]
    cells = voronoi_cells(points, CLIP)
    assert [cell is None for cell in cells] == [False, False, True, True]
    assert _area(cells[0]) + _area(cells[1]) == pytest.approx(100 * 100, rel=1e-3)


def test_cells_match_nearest_site_with_off_frame_points():
    rng = np.random.default_rng(3)
    sites = rng.uniform((-80, -60), (720, 540), size=(40, 2))
    cells = voronoi_cells(sites.tolist(), (0, 0, 640, 480))
    samples = rng.uniform((1, 1), (639, 479), size=(300, 2))
    for sample in samples:
        dists = np.linalg.norm(sites - sample, axis=1)
        nearest = int(np.argmin(dists))
        if np.sort(dists)[1] - dists[nearest] < 1:
            continue  # too close to a cell border to tell
        cell = cells[nearest]
        assert cell is not None
        assert cv2.pointPolygonTest(cell, tuple(map(float, sample)), False) >= 0


def test_hand_crossing_the_frame_edge():
    # landmarks 0 to 4 of this hand are left of the frame
    face = make_face(9, x0=300, y0=200)
    hand = make_hand(x0=-50, y0=240)
    state = update(VoronoiState(), [face], [hand])
    cells = voronoi_cells(state.current, (0, 0, 640, 480))
    # tip 4 at x=-10 and knuckle 2 at x=-30 are near enough to reach into the frame
    assert cells[3] is not None and cells[4] is not None
    assert sum(_area(c) for c in cells if c is not None) == pytest.approx(
        640 * 480, rel=1e-3
    )


def test_points_on_the_border_are_kept():
    cells = voronoi_cells([[0.0, 0.0], [100.0, 100.0]], CLIP)
    assert n_drawable_cells(cells) == 2


def test_no_points():
    assert voronoi_cells([], CLIP) == []


def test_offset_clip_rect():
    clip = (200, 100, 50, 40)
    cells = voronoi_cells([[210.0, 110.0], [240.0, 130.0]], clip)
    assert sum(_area(cell) for cell in cells) == pytest.approx(50 * 40, rel=1e-3)


def test_clip_polygon_outside_is_none():
    square = np.array([[200, 200], [210, 200], [210, 210], [200, 210]], np.float32)
    assert clip_polygon(square, CLIP) is None
    inside = clip_polygon(rect_polygon((10, 10, 20, 20)), CLIP)
    assert _area(inside) == pytest.approx(400)
