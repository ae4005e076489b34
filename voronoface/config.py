"""
Configuration for voronoface.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from voronoface.util import FINGER_TIPS, KNUCKLES, PALM_CENTER


@dataclass(frozen=True)
class VoronoiConfig:
    """Point sampling and smoothing configuration."""
    lerp_speed: float = 0.7
    random_points: int = 0
    finger_tips: Tuple[int, ...] = FINGER_TIPS
    knuckles: Tuple[int, ...] = KNUCKLES
    palm: int = PALM_CENTER
    face_point_skip: int = 3

    def __post_init__(self):
        if not 0 < self.lerp_speed <= 1:
            raise ValueError(f"lerp_speed must be in (0, 1], got {self.lerp_speed}")
        if self.face_point_skip < 1:
            raise ValueError(
                f"face_point_skip must be at least 1, got {self.face_point_skip}"
            )
        if len(self.finger_tips) != len(self.knuckles):
            raise ValueError(
                f"Need as many knuckles as finger tips: "
                f"{len(self.finger_tips)} != {len(self.knuckles)}"
            )
        if self.random_points < 0:
            raise ValueError(
                f"random_points can't be negative, got {self.random_points}"
            )


@dataclass(frozen=True)
class DetectionConfig:
    """Face and hand landmark detection configuration."""
    max_faces: int = 1
    refine_landmarks: bool = False
    max_hands: int = 2
    detection_con: float = 0.5
    track_con: float = 0.5
    flip_horizontal: bool = False
    camera_index: int = 0


@dataclass(frozen=True)
class DisplayConfig:
    """Canvas drawing configuration."""
    trail_fade: int = 25  # 0-255, how much the trail canvas darkens per frame
    hue_step: int = 2
    thickness: int = 1
    glow_layers: int = 0
    glow_spread: float = 2.0
    draw_face_box: bool = False
    draw_stats: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    voronoi: VoronoiConfig = field(default_factory=VoronoiConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    window_name: str = 'Voronoi Face'


def get_default_config(
    voronoi: Optional[VoronoiConfig] = None,
    detection: Optional[DetectionConfig] = None,
    display: Optional[DisplayConfig] = None,
) -> AppConfig:
    """Get the application configuration, filling in defaults for missing parts."""
    return AppConfig(
        voronoi=voronoi or VoronoiConfig(),
        detection=detection or DetectionConfig(),
        display=display or DisplayConfig(),
    )
