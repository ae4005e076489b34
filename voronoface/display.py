"""Display utilities for the Voronoi visualization."""

import cv2
import numpy as np
from typing import Union, Tuple, Optional, Sequence

from voronoface.util import BoundingBox, format_float

# -------------------------------------------------------------------------------
# Types
# -------------------------------------------------------------------------------

Color = Union[Tuple[int, int, int], Tuple[int, int, int, int]]  # BGR or BGRA

# -------------------------------------------------------------------------------
# Canvas and colors
# -------------------------------------------------------------------------------


class TrailCanvas:
    """
    A persistent black canvas the cells are drawn on, and that fades a little every
    frame, so that moving cells leave trails.
    """

    def __init__(self, width: int, height: int):
        self.img = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def size(self):
        h, w = self.img.shape[:2]
        return w, h

    def fade(self, amount: int = 25):
        """Darken the canvas as if painting black with opacity ``amount / 255``."""
        self.img = cv2.convertScaleAbs(self.img, alpha=1 - amount / 255.0)
        return self.img

    def resize(self, width: int, height: int):
        """Start over with a black canvas if the size changed."""
        if (width, height) != self.size:
            self.img = np.zeros((height, width, 3), dtype=np.uint8)
        return self.img


class HueCycler:
    """Hue that advances by ``step`` degrees (modulo 360) each time it's stepped."""

    def __init__(self, step: int = 2, hue: int = 0):
        self.step = step
        self.hue = hue % 360

    def __call__(self) -> Tuple[int, int, int]:
        self.hue = (self.hue + self.step) % 360
        return self.color()

    def color(self) -> Tuple[int, int, int]:
        """The current hue at full saturation and value, as BGR."""
        return hsv_to_bgr(self.hue)


def hsv_to_bgr(hue: float, saturation: float = 100, value: float = 100):
    """
    Convert HSB (hue in degrees, saturation and value in percent) to a BGR tuple.

    OpenCV's 8-bit HSV stores the hue halved, and saturation and value in 0-255.
    """
    hsv = np.uint8(
        [[[int(hue) // 2, round(saturation * 2.55), round(value * 2.55)]]]
    )
    b, g, r = cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR)[0, 0]
    return int(b), int(g), int(r)


# -------------------------------------------------------------------------------
# Screen drawing functions
# -------------------------------------------------------------------------------


def _polyline(cell):
    return [np.round(np.asarray(cell)).astype(np.int32).reshape(-1, 1, 2)]


def draw_voronoi_cells(
    img: np.ndarray,
    cells: Sequence[Optional[np.ndarray]],
    color: Color = (0, 255, 0),
    thickness: int = 1,
):
    """
    Draw the outline of each cell. Cells that are None are skipped.
    """
    for cell in cells:
        if cell is None:
            continue
        cv2.polylines(img, _polyline(cell), True, color[:3], thickness, cv2.LINE_AA)
    return img


def draw_glow_cells(
    img: np.ndarray,
    cells: Sequence[Optional[np.ndarray]],
    color: Color,
    *,
    glow_layers: int = 3,
    glow_spread: float = 2.0,
):
    """
    Draw cells as stacked outlines, widest and faintest first, for a glow effect.

    Layer ``i`` (from ``glow_layers`` down to 0) has stroke width ``i * glow_spread``
    and opacity ``1 / (i + 1)``. All cells of a layer share one overlay, blended
    once. Cells that are None are skipped.
    """
    pts = [_polyline(cell) for cell in cells if cell is not None]
    if not pts:
        return img
    for i in range(glow_layers, -1, -1):
        thickness = max(1, int(round(i * glow_spread)))
        alpha = 1.0 / (i + 1)
        overlay = img.copy()
        for cell_pts in pts:
            cv2.polylines(overlay, cell_pts, True, color[:3], thickness, cv2.LINE_AA)
        cv2.addWeighted(overlay, alpha, img, 1 - alpha, 0, img)
    return img


def draw_glow_cell(
    img: np.ndarray,
    cell: Optional[np.ndarray],
    color: Color,
    *,
    glow_layers: int = 3,
    glow_spread: float = 2.0,
):
    """Glow drawing of a single cell (see ``draw_glow_cells``)."""
    return draw_glow_cells(
        img, [cell], color, glow_layers=glow_layers, glow_spread=glow_spread
    )
    pts = _polyline(cell)
    for i in range(glow_layers, -1, -1):
        thickness = max(1, int(round(i * glow_spread)))
        alpha = 1.0 / (i + 1)
        overlay = img.copy()
        cv2.polylines(overlay, pts, True, color[:3], thickness, cv2.LINE_AA)
        img[:] = cv2.addWeighted(overlay, alpha, img, 1 - alpha, 0)
    return img


def draw_face_box(
    img: np.ndarray, box: BoundingBox, color: Color = (255, 255, 255), thickness=1
):
    """Draw the face bounding box."""
    top_left = (int(box.x), int(box.y))
    bottom_right = (int(box.x + box.width), int(box.y + box.height))
    cv2.rectangle(img, top_left, bottom_right, color[:3], thickness)
    return img


def display_stats_on_image(
    img: np.ndarray,
    stats: dict,
    *,
    font=cv2.FONT_HERSHEY_SIMPLEX,
    font_scale: float = 0.6,
    color: Color = (0, 255, 0),
    thickness: int = 1,
    ndigits: int = 2,
    x_pos=10,
    y_pos=30,
    y_increment=25,
    bg_color: Color = (
        150,
        150,
        150,
        128,
    ),  # Light grey, semi-transparent (BGR + alpha)
):
    """
    Display key/value stats on the image with a semi-transparent background.

    Args:
        img: The image to draw on
        stats: Dictionary of values to show
        font: Font type to use
        font_scale: Size of the font
        color: Text color in BGR format
        thickness: Line thickness of text
        ndigits: Number of decimals for float values
        x_pos: Starting x position for text
        y_pos: Starting y position for text
        y_increment: Vertical space between lines
        bg_color: Background color (BGR + alpha) where alpha is 0-255
    """
    if not stats:
        return img

    if len(bg_color) == 4:
        bg_rgb = bg_color[:3]
        alpha = bg_color[3] / 255.0
    else:
        bg_rgb = bg_color
        alpha = 0.5

    lines = [
        f"{key}: {format_float(value, ndigits) if isinstance(value, float) else value}"
        for key, value in stats.items()
    ]

    overlay = img.copy()
    padding = 5
    for idx, text in enumerate(lines):
        (text_width, text_height), _ = cv2.getTextSize(
            text, font, font_scale, thickness
        )
        cv2.rectangle(
            overlay,
            (x_pos - padding, y_pos + idx * y_increment - text_height - padding),
            (x_pos + text_width + padding, y_pos + idx * y_increment + padding),
            bg_rgb,
            -1,
        )
    cv2.addWeighted(overlay, alpha, img, 1 - alpha, 0, img)

    for idx, text in enumerate(lines):
        cv2.putText(
            img,
            text,
            (x_pos, y_pos + idx * y_increment),
            font,
            font_scale,
            color[:3],
            thickness,
        )

    return img


def draw_on_screen(
    canvas: TrailCanvas,
    img: np.ndarray,
    cells,
    color: Color,
    *,
    thickness: int = 1,
    glow_layers: int = 0,
    glow_spread: float = 2.0,
    trail_fade: int = 25,
    face_box: Optional[BoundingBox] = None,
    stats: Optional[dict] = None,
):
    """
    Fade the trail canvas, draw the cells on it, and return it as the frame to show.

    Args:
        canvas: The trail canvas (resized to ``img`` if needed)
        img: The camera frame, only used for its size
        cells: Cell polygons (None entries are skipped)
        color: Stroke color of the cells
        thickness: Stroke width, when there's no glow
        glow_layers: Number of glow layers (0 for plain outlines)
        glow_spread: Stroke width increment per glow layer
        trail_fade: How much the trails darken per frame (0-255)
        face_box: Face bounding box to draw, if any
        stats: Values to display in the corner, if any

    Returns:
        img: The image to display
    """
    h, w = img.shape[:2]
    canvas.resize(w, h)
    canvas.fade(trail_fade)

    if glow_layers > 0:
        draw_glow_cells(
            canvas.img, cells, color, glow_layers=glow_layers, glow_spread=glow_spread
        )
    else:
        draw_voronoi_cells(canvas.img, cells, color, thickness)

    out = canvas.img.copy()
    if face_box is not None:
        draw_face_box(out, face_box, color)
    if stats:
        display_stats_on_image(out, stats)
    return out
