import json

import numpy as np
import pytest

from voronoface.config import AppConfig, VoronoiConfig, get_default_config
from voronoface.script_utils import (
    ESCAPE_KEY_ASCII,
    CameraReadError,
    KeyboardBreakSignal,
    check_break_key,
    frame_stats,
    print_json_if_possible,
    read_camera,
    resolve_object,
    resolve_point_logger,
    step_frame,
)
from voronoface.smoothing import VoronoiState

from conftest import make_face, make_hand


def test_resolve_object():
    object_map = {'a': 1}
    assert resolve_object('a', object_map=object_map) == 1
    assert resolve_object(2, object_map=object_map, expected_type=int) == 2
    with pytest.raises(ValueError):
        resolve_object('b', object_map=object_map)
    with pytest.raises(TypeError):
        resolve_object(2.5, object_map=object_map, expected_type=int)


def test_resolve_point_logger(capsys):
    resolve_point_logger('count')([[1, 2], [3, 4]])
    assert capsys.readouterr().out == "2 points\n"
    with pytest.raises(ValueError):
        resolve_point_logger('nope')


def test_print_json_if_possible(capsys):
    print_json_if_possible([[1.5, 2.0]])
    assert json.loads(capsys.readouterr().out) == [[1.5, 2.0]]
    print_json_if_possible({1, 2})  # not json serializable: printed as is
    assert capsys.readouterr().out.strip() in ("{1, 2}", "{2, 1}")


def test_check_break_key():
    assert check_break_key(0xFF) == 0xFF
    assert check_break_key(ord('a')) == ord('a')
    with pytest.raises(KeyboardBreakSignal):
        check_break_key(ESCAPE_KEY_ASCII)
    with pytest.raises(KeyboardBreakSignal):
        check_break_key(ord('q'))


class FakeCapture:
    def __init__(self, frame=None):
        self.frame = frame

    def read(self):
        return self.frame is not None, self.frame


def test_read_camera_mirrors_frame():
    frame = np.zeros((2, 3, 3), np.uint8)
    frame[:, 0] = 255
    img = read_camera(FakeCapture(frame))
    assert img[:, 2].all() and not img[:, 0].any()


def test_read_camera_failure():
    with pytest.raises(CameraReadError):
        read_camera(FakeCapture(None))


def test_step_frame_with_face_and_hands():
    face = make_face(9, x0=100, y0=50)
    hands = [make_hand(x0=300, y0=300), make_hand(x0=400, y0=100)]
    state, cells = step_frame(VoronoiState(), [face], hands, (640, 480))
    assert len(state.current) == len(cells) == 25
    stats = frame_stats(state, cells, len(hands))
    assert stats['points'] == 25 and stats['hands'] == 2
    assert 0 < stats['cells'] <= 25


def test_step_frame_without_face():
    state = VoronoiState(current=[[1.0, 1.0]], target=[[1.0, 1.0]])
    state, cells = step_frame(state, [], [make_hand()], (640, 480))
    assert state == VoronoiState([], [], [])
    assert cells == []


def test_default_config():
    config = get_default_config()
    assert isinstance(config, AppConfig)
    assert config.voronoi.lerp_speed == 0.7
    assert config.voronoi.face_point_skip == 3
    assert config.detection.max_faces == 1
    assert config.voronoi.finger_tips == (4, 8, 12, 16, 20)
    assert config.voronoi.knuckles == (2, 6, 10, 14, 18)


@pytest.mark.parametrize(
    'kwargs',
    [
        {'lerp_speed': 0},
        {'lerp_speed': 1.5},
        {'face_point_skip': 0},
        {'random_points': -1},
        {'finger_tips': (4, 8), 'knuckles': (2,)},
    ],
)
def test_bad_voronoi_config(kwargs):
    with pytest.raises(ValueError):
        VoronoiConfig(**kwargs)


class FakeDetector:
    def __init__(self, faces):
        self.faces = faces

    def detect_start(self, on_faces, on_hands):
        self.on_faces, self.on_hands = on_faces, on_hands

    def process(self, img):
        self.on_faces(self.faces)
        self.on_hands([])

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_run_voronoface_stops_on_break_key(monkeypatch):
    from voronoface import script_utils

    class OpenCapture(FakeCapture):
        def isOpened(self):
            return True

        def release(self):
            pass

    keys = iter([0xFF, 0xFF, ord('q'), 0xFF])
    shown = []
    monkeypatch.setattr(
        script_utils.cv2,
        'VideoCapture',
        lambda index: OpenCapture(np.zeros((48, 64, 3), np.uint8)),
    )
    monkeypatch.setattr(script_utils.cv2, 'imshow', lambda name, img: shown.append(img))
    monkeypatch.setattr(script_utils.cv2, 'destroyAllWindows', lambda: None)
    monkeypatch.setattr(script_utils, 'read_keyboard', lambda: next(keys))
    monkeypatch.setattr(
        script_utils.FaceHandDetector,
        'from_config',
        classmethod(lambda cls, config: FakeDetector([make_face(9, x0=10, y0=5)])),
    )
    script_utils.run_voronoface()
    assert len(shown) == 2
    assert shown[0].shape == (48, 64, 3)
