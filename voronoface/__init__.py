"""

Voronoi cells drawn live over the webcam, with face and hand landmarks as sites.

Every frame, a few points are taken from the tracked face (every third face mesh
landmark) and from each tracked hand (fingertips, knuckles and palm), the displayed
points are moved part of the way toward them, and the Voronoi diagram of the
displayed points is drawn on a fading canvas with a cycling hue.

Here's a bit about what exists so far:

* point_features.py: Picks the Voronoi sites out of face and hand landmarks.
* smoothing.py: The per-frame update of the sites: merge, then lerp toward the
    new targets (or reset when the number of sites changes).
* tessellation.py: Voronoi cells of the sites, clipped to the frame, with OpenCV.
* detection.py: Face mesh and hand landmarks from MediaPipe.
* display.py: Trails, hue cycling and glow.
* script_utils.py: The camera loop, and the function behind the command line
    (see main.py).

"""

from voronoface.config import (
    AppConfig,
    DetectionConfig,
    DisplayConfig,
    VoronoiConfig,
    get_default_config,
)
from voronoface.point_features import (
    face_bounding_box,
    many_hand_points,
    sample_face_points,
    sample_hand_points,
    synthesize_target,
)
from voronoface.smoothing import LatestSnapshot, VoronoiState, advance_points, update
from voronoface.tessellation import voronoi_cells
from voronoface.util import Landmark, lerp
