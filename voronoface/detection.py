"""Face and hand landmark detection with MediaPipe."""

from typing import Callable, List, Optional

import cv2
import mediapipe as mp

from voronoface.util import Landmark, return_none

Snapshot = List[Landmark]
ResultCallback = Callable[[List[Snapshot]], None]

# -------------------------------------------------------------------------------
# Landmark conversion
# -------------------------------------------------------------------------------


def landmarks_to_snapshot(
    landmark_list, width: int, height: int, *, flip_horizontal: bool = False
) -> Snapshot:
    """
    Convert MediaPipe normalized landmarks to pixel-space ``Landmark``s.

    Args:
        landmark_list: A MediaPipe ``NormalizedLandmarkList`` (or anything with a
            ``landmark`` sequence of objects having ``x``, ``y`` and ``z``)
        width: Frame width, in pixels
        height: Frame height, in pixels
        flip_horizontal: Mirror the x coordinates

    Returns:
        list: One ``Landmark`` per detector keypoint, in detector order
    """
    snapshot = []
    for lm in landmark_list.landmark:
        x = (1.0 - lm.x) if flip_horizontal else lm.x
        # MediaPipe's z uses roughly the same scale as x
        snapshot.append(Landmark(x * width, lm.y * height, lm.z * width))
    return snapshot


def results_to_snapshots(multi_landmarks, width, height, *, flip_horizontal=False):
    """Convert each landmark list of a MediaPipe result (None meaning no detection)."""
    if not multi_landmarks:
        return []
    return [
        landmarks_to_snapshot(
            landmark_list, width, height, flip_horizontal=flip_horizontal
        )
        for landmark_list in multi_landmarks
    ]


# -------------------------------------------------------------------------------
# Detector
# -------------------------------------------------------------------------------


class FaceHandDetector:
    """
    Detects face mesh and hand landmarks on video frames, with MediaPipe.

    Results are delivered to the callbacks registered with ``detect_start``, each
    time ``process`` is called on a frame.

    Attributes:
        max_faces (int): Maximum number of faces to detect.
        refine_landmarks (bool): Use the refined (iris) face mesh.
        max_hands (int): Maximum number of hands to detect.
        detection_con (float): Minimum detection confidence threshold.
        track_con (float): Minimum tracking confidence threshold.
        flip_horizontal (bool): Mirror the landmark x coordinates.
    """

    def __init__(
        self,
        *,
        max_faces=1,
        refine_landmarks=False,
        max_hands=2,
        detection_con=0.5,
        track_con=0.5,
        flip_horizontal=False,
    ):
        self.max_faces = max_faces
        self.refine_landmarks = refine_landmarks
        self.max_hands = max_hands
        self.detection_con = detection_con
        self.track_con = track_con
        self.flip_horizontal = flip_horizontal

        self.mp_face_mesh = mp.solutions.face_mesh
        self.face_mesh = self.mp_face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=self.max_faces,
            refine_landmarks=self.refine_landmarks,
            min_detection_confidence=self.detection_con,
            min_tracking_confidence=self.track_con,
        )

        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=self.max_hands,
            min_detection_confidence=self.detection_con,
            min_tracking_confidence=self.track_con,
        )

        self.on_faces: ResultCallback = return_none
        self.on_hands: ResultCallback = return_none

    @classmethod
    def from_config(cls, config):
        """Make a detector from a ``DetectionConfig``."""
        return cls(
            max_faces=config.max_faces,
            refine_landmarks=config.refine_landmarks,
            max_hands=config.max_hands,
            detection_con=config.detection_con,
            track_con=config.track_con,
            flip_horizontal=config.flip_horizontal,
        )

    def detect_start(
        self,
        on_faces: Optional[ResultCallback] = None,
        on_hands: Optional[ResultCallback] = None,
    ):
        """Register the callbacks that receive face and hand snapshots."""
        self.on_faces = on_faces or return_none
        self.on_hands = on_hands or return_none
        return self

    def process(self, img):
        """
        Run both models on a BGR image and deliver the results to the callbacks.

        Args:
            img: The input image (BGR, as read by OpenCV)

        Returns:
            tuple: (face snapshots, hand snapshots)
        """
        h, w = img.shape[:2]
        img_rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
        # Lets MediaPipe pass the image by reference
        img_rgb.flags.writeable = False

        face_detection = self.face_mesh.process(img_rgb)
        faces = results_to_snapshots(
            face_detection.multi_face_landmarks,
            w,
            h,
            flip_horizontal=self.flip_horizontal,
        )
        self.on_faces(faces)

        hand_detection = self.hands.process(img_rgb)
        hands = results_to_snapshots(
            hand_detection.multi_hand_landmarks,
            w,
            h,
            flip_horizontal=self.flip_horizontal,
        )
        self.on_hands(hands)

        return faces, hands

    def close(self):
        self.face_mesh.close()
        self.hands.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
