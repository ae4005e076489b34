"""Voronoi cells of a point list, clipped to a rectangle, using OpenCV's Subdiv2D."""

from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

Rect = Tuple[float, float, float, float]  # x, y, width, height
Cell = np.ndarray  # (k, 2) float32 polygon vertices


def rect_polygon(clip_rect: Rect) -> np.ndarray:
    """The four corners of ``clip_rect``, clockwise in image coordinates."""
    x, y, w, h = clip_rect
    return np.array(
        [[x, y], [x + w, y], [x + w, y + h], [x, y + h]], dtype=np.float32
    )


def _is_finite(point) -> bool:
    return bool(np.isfinite(point[0]) and np.isfinite(point[1]))


def subdiv_rect(points: Sequence, clip_rect: Rect, pad: int = 1):
    """
    An integer rect holding ``clip_rect`` and every finite point, with ``pad``
    pixels to spare on each side (Subdiv2D rejects points on its far edges).
    """
    x, y, w, h = clip_rect
    xs = [x, x + w] + [float(p[0]) for p in points if _is_finite(p)]
    ys = [y, y + h] + [float(p[1]) for p in points if _is_finite(p)]
    x0, y0 = int(np.floor(min(xs))) - pad, int(np.floor(min(ys))) - pad
    x1, y1 = int(np.ceil(max(xs))) + pad, int(np.ceil(max(ys))) + pad
    return x0, y0, x1 - x0 + 1, y1 - y0 + 1


def clip_polygon(polygon: np.ndarray, clip_rect: Rect) -> Optional[Cell]:
    """
    Intersect a convex polygon with ``clip_rect``.

    Returns None when the intersection is empty or degenerate.
    """
    area, clipped = cv2.intersectConvexConvex(
        np.asarray(polygon, dtype=np.float32), rect_polygon(clip_rect)
    )
    if clipped is None or area <= 0:
        return None
    clipped = clipped.reshape(-1, 2)
    if len(clipped) < 3:
        return None
    return clipped


def voronoi_cells(points: Sequence, clip_rect: Rect) -> List[Optional[Cell]]:
    """
    The Voronoi cell of each point, clipped to ``clip_rect``.

    The output is aligned with ``points``: entry ``i`` is the cell polygon of
    ``points[i]``, or None when that point has no drawable cell. That happens for
    non-finite points, for a point coinciding with an earlier one (the earlier one
    owns the cell), and for cells lying entirely outside ``clip_rect``. Points
    outside ``clip_rect`` still take part in the diagram, and get the part of their
    cell that falls inside it.

    Args:
        points: Sequence of ``(x, y)`` pairs
        clip_rect: ``(x, y, width, height)`` of the clip region

    Returns:
        list: One ``(k, 2)`` float32 array or None per input point
    """
    cells: List[Optional[Cell]] = [None] * len(points)
    if not len(points):
        return cells

    subdiv = cv2.Subdiv2D(subdiv_rect(points, clip_rect))

    vertex_of_point = {}  # index in points -> Subdiv2D vertex id
    owner_of_vertex = {}  # Subdiv2D vertex id -> first index that inserted it
    for i, point in enumerate(points):
        if not _is_finite(point):
            continue
        vertex = subdiv.insert((float(point[0]), float(point[1])))
        if vertex in owner_of_vertex:
            continue
        owner_of_vertex[vertex] = i
        vertex_of_point[i] = vertex

    if not vertex_of_point:
        return cells

    indices = list(vertex_of_point)
    facets, _centers = subdiv.getVoronoiFacetList([vertex_of_point[i] for i in indices])
    for i, facet in zip(indices, facets):
        cells[i] = clip_polygon(facet, clip_rect)
    return cells


def n_drawable_cells(cells) -> int:
    """Number of cells that are not None."""
    return sum(cell is not None for cell in cells)
