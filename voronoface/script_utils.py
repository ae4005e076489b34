"""Utility functions for running the voronoface scripts."""

import cv2
import json
from functools import partial
from typing import Union, Callable, Dict, Optional, Any, TypeVar

from voronoface.config import (
    AppConfig,
    DetectionConfig,
    DisplayConfig,
    VoronoiConfig,
    get_default_config,
)
from voronoface.detection import FaceHandDetector
from voronoface.display import HueCycler, TrailCanvas, draw_on_screen
from voronoface.point_features import face_bounding_box
from voronoface.smoothing import LatestSnapshot, VoronoiState, update
from voronoface.tessellation import n_drawable_cells, voronoi_cells
from voronoface.util import return_none as do_nothing

# -------------------------------------------------------------------------------
# Object resolution
# -------------------------------------------------------------------------------

T = TypeVar('T')


def resolve_object(
    obj: Union[str, T],
    *,
    object_map: Dict[str, T],
    expected_type: type = None,
    error_message: str = None,
) -> T:
    """
    Resolves an object by either returning it directly if it's of the correct type,
    or looking it up in a mapping if it's a string.

    Args:
        obj: The object to resolve. Can be a string (to be looked up in object_map)
             or the object itself (if it's already of type T).
        object_map: A dictionary mapping strings to objects of type T.
        expected_type: (Optional) The expected type of the resolved object.
        error_message: (Optional) A custom error message to use if a ValueError
                       or TypeError is raised. If None, a default message is used.

    Returns:
        The resolved object of type T.

    Raises:
        TypeError: If obj is not a string or of the expected type.
        ValueError: If obj is a string but is not found in object_map.
    """
    if isinstance(obj, str):
        if obj in object_map:
            resolved_obj = object_map[obj]
        else:
            msg = error_message or f"Unknown object identifier: {obj}"
            raise ValueError(msg)
    elif expected_type is None or isinstance(obj, expected_type):
        resolved_obj = obj
    else:
        msg = error_message or f"Expected type {expected_type}, got {type(obj)}"
        raise TypeError(msg)

    if expected_type and not isinstance(resolved_obj, expected_type):
        msg = (
            error_message
            or f"Resolved object should be of type {expected_type}, got {type(resolved_obj)}"
        )
        raise TypeError(msg)

    return resolved_obj


# -------------------------------------------------------------------------------
# Logging utilities
# -------------------------------------------------------------------------------


def print_json_if_possible(x):
    """Prints the input as json if it can be, as is if not, and adds a newline."""
    try:
        x = json.dumps(x)
    except (TypeError, ValueError):
        pass
    print(x)
    print()


def print_point_count(points):
    print(f"{len(points)} points")


point_loggers = {
    'json': print_json_if_possible,
    'count': print_point_count,
}

resolve_point_logger = partial(resolve_object, object_map=point_loggers)


# -------------------------------------------------------------------------------
# Keyboard handling functions
# -------------------------------------------------------------------------------

ESCAPE_KEY_ASCII = 27
BREAK_KEYS = {ESCAPE_KEY_ASCII, ord('q')}


class KeyboardBreakSignal(Exception):
    """Exception raised when a break key is pressed."""


def read_keyboard(wait_time: int = 5) -> int:
    """
    Read keyboard input with the specified wait time.

    Args:
        wait_time: Time to wait for keyboard input in milliseconds

    Returns:
        The key code (255 if no key was pressed)
    """
    return cv2.waitKey(wait_time) & 0xFF


def check_break_key(key_code: int) -> int:
    """
    Return the key code, unless it is one of the ``BREAK_KEYS``.

    Raises:
        KeyboardBreakSignal: If a key that signals program termination is pressed
    """
    if key_code in BREAK_KEYS:
        raise KeyboardBreakSignal(f"Break key pressed: {key_code}")
    return key_code


# -------------------------------------------------------------------------------
# Camera handling functions
# -------------------------------------------------------------------------------


class CameraReadError(Exception):
    """Exception raised when camera read fails."""


def read_camera(cap: cv2.VideoCapture) -> Any:
    """
    Read a frame from the camera and flip it horizontally.

    Raises:
        CameraReadError: If the camera read operation fails
    """
    success, img = cap.read()
    if not success:
        raise CameraReadError("Failed to read from camera")

    # Flip image horizontally for a more natural interaction
    return cv2.flip(img, 1)


# -------------------------------------------------------------------------------
# Frame step
# -------------------------------------------------------------------------------


def frame_stats(state: VoronoiState, cells, n_hands: int) -> Dict[str, Any]:
    return {
        'points': len(state.current),
        'cells': n_drawable_cells(cells),
        'hands': n_hands,
    }


def step_frame(
    state: VoronoiState,
    faces,
    hands,
    frame_size,
    config: Optional[VoronoiConfig] = None,
    rng=None,
):
    """
    Update the point state from the latest snapshots and tessellate it.

    Returns:
        tuple: (new state, cells). There are no cells when there's no face.
    """
    state = update(state, faces, hands, config, frame_size=frame_size, rng=rng)
    if not state.current:
        return state, []
    width, height = frame_size
    cells = voronoi_cells(state.current, (0, 0, width, height))
    return state, cells


# -------------------------------------------------------------------------------
# Main run function
# -------------------------------------------------------------------------------


def run_voronoface(
    config: Optional[AppConfig] = None,
    *,
    log_points: Optional[Callable] = None,
    draw_on_screen: Callable = draw_on_screen,
):
    """
    Run the face and hands Voronoi application.

    Args:
        config: Application configuration (defaults are used if None)
        log_points: Function called with the current points every frame (or None)
        draw_on_screen: Function making the displayed image
    """
    config = config or get_default_config()
    log_points = log_points or do_nothing
    display_cfg = config.display

    cap = cv2.VideoCapture(config.detection.camera_index)
    if not cap.isOpened():
        raise CameraReadError(
            f"Could not open video capture device {config.detection.camera_index}"
        )

    faces = LatestSnapshot()
    hands = LatestSnapshot()
    detector = FaceHandDetector.from_config(config.detection)
    detector.detect_start(faces, hands)

    state = VoronoiState()
    canvas = None
    hue = HueCycler(step=display_cfg.hue_step)
    print(f"\nStarting {config.window_name}. Press Escape or q to quit.\n")

    try:
        with detector:
            while cap.isOpened():
                try:
                    check_break_key(read_keyboard())
                    img = read_camera(cap)
                except (CameraReadError, KeyboardBreakSignal):
                    break

                h, w = img.shape[:2]
                if canvas is None:
                    canvas = TrailCanvas(w, h)

                detector.process(img)
                state, cells = step_frame(
                    state, faces.value, hands.value, (w, h), config.voronoi
                )
                log_points(state.current)

                face_box = None
                if display_cfg.draw_face_box and faces.value:
                    face_box = face_bounding_box(faces.value[0])
                stats = None
                if display_cfg.draw_stats:
                    stats = frame_stats(state, cells, len(hands.value))

                out = draw_on_screen(
                    canvas,
                    img,
                    cells,
                    hue(),
                    thickness=display_cfg.thickness,
                    glow_layers=display_cfg.glow_layers,
                    glow_spread=display_cfg.glow_spread,
                    trail_fade=display_cfg.trail_fade,
                    face_box=face_box,
                    stats=stats,
                )
                cv2.imshow(config.window_name, out)
    finally:
        cap.release()
        cv2.destroyAllWindows()
        print("Stopped.")


def voronoface_cli(
    # Camera and detection
    camera_index: int = 0,
    max_hands: int = 2,
    refine_landmarks: bool = False,
    # Points
    lerp_speed: float = 0.7,
    face_point_skip: int = 3,
    random_points: int = 0,
    # Display
    window_name: str = "Voronoi Face",
    trail_fade: int = 25,
    glow_layers: int = 0,
    glow_spread: float = 2.0,
    face_box: bool = False,
    stats: bool = False,
    # Logging
    log_points: str = None,
):
    """
    Run the face and hands Voronoi application with the specified parameters.

    Args:
        camera_index: Index of the camera to capture from
        max_hands: Maximum number of hands to track
        refine_landmarks: Use the refined face mesh
        lerp_speed: Fraction of the way points move toward their target each frame
        face_point_skip: Keep one face landmark out of this many
        random_points: Number of extra random points to add to the diagram
        window_name: Title for the display window
        trail_fade: How fast the cell trails fade (0-255)
        glow_layers: Number of glow layers around cell outlines (0 for none)
        glow_spread: Stroke width increment per glow layer
        face_box: Draw the face bounding box
        stats: Show point and cell counts
        log_points: Print the points every frame: 'json' or 'count'
    """
    config = AppConfig(
        voronoi=VoronoiConfig(
            lerp_speed=lerp_speed,
            face_point_skip=face_point_skip,
            random_points=random_points,
        ),
        detection=DetectionConfig(
            camera_index=camera_index,
            max_hands=max_hands,
            refine_landmarks=refine_landmarks,
        ),
        display=DisplayConfig(
            trail_fade=trail_fade,
            glow_layers=glow_layers,
            glow_spread=glow_spread,
            draw_face_box=face_box,
            draw_stats=stats,
        ),
        window_name=window_name,
    )
    run_voronoface(
        config,
        log_points=resolve_point_logger(log_points) if log_points else None,
    )
