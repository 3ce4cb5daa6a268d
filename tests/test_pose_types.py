import math
from types import SimpleNamespace

from src.B_pose_estimation.types import Keypoint, Pose, poses_from_records


def test_keypoint_reads_flat_fields() -> None:
    kp = Keypoint.from_record({"x": 1, "y": 2, "confidence": 0.5, "name": "nose"})

    assert (kp.name, kp.x, kp.y, kp.confidence) == ("nose", 1.0, 2.0, 0.5)


def test_keypoint_falls_back_to_position_and_score() -> None:
    kp = Keypoint.from_record({"position": {"x": 3, "y": 4}, "score": 0.7}, name="left_wrist")

    assert kp.x == 3.0
    assert kp.y == 4.0
    assert kp.confidence == 0.7
    assert kp.name == "left_wrist"


def test_zero_is_a_present_value_not_a_missing_one() -> None:
    record = SimpleNamespace(x=0, y=5, position=SimpleNamespace(x=9, y=9), confidence=0, score=0.8)
    kp = Keypoint.from_record(record)

    assert kp.x == 0.0
    assert kp.y == 5.0
    assert kp.confidence == 0.0


def test_confidence_uses_visibility_as_last_resort_and_defaults_to_zero() -> None:
    assert Keypoint.from_record({"x": 1, "y": 1, "visibility": 0.4}).confidence == 0.4
    assert Keypoint.from_record({"x": 1, "y": 1}).confidence == 0.0
    assert Keypoint.from_record({"x": 1, "y": 1, "score": None, "confidence": None}).confidence == 0.0


def test_keypoint_without_position_is_never_confident() -> None:
    kp = Keypoint.from_record({"confidence": 0.99})

    assert math.isnan(kp.x)
    assert not kp.has_position
    assert not kp.is_confident(0.1)


def test_confidence_threshold_is_strict() -> None:
    kp = Keypoint(name="a", x=1.0, y=1.0, confidence=0.09)

    assert not kp.is_confident(0.09)
    assert kp.is_confident(0.089)


def test_pose_from_object_record_and_list() -> None:
    record = {"keypoints": [{"x": 1, "y": 2, "score": 0.3}, {"x": 3, "y": 4, "score": 0.6}], "score": 0.9}
    pose = Pose.from_record(record, names=("nose", "left_eye"))

    assert len(pose) == 2
    assert pose.score == 0.9
    assert pose.get(1).name == "left_eye"
    assert pose.get(2) is None
    assert pose.get(-1) is None

    from_list = Pose.from_record([{"x": 5, "y": 6, "confidence": 1.0}])
    assert from_list.get(0).x == 5.0
    assert from_list.get(0).name == "0"


def test_confident_keypoints_filters_by_threshold() -> None:
    pose = Pose.from_record([{"x": 1, "y": 1, "confidence": 0.5}, {"x": 2, "y": 2, "confidence": 0.01}])

    assert [kp.x for kp in pose.confident_keypoints(0.09)] == [1.0]


def test_poses_from_records_tolerates_none() -> None:
    assert poses_from_records(None) == []
    poses = poses_from_records([{"keypoints": []}, {"keypoints": [{"x": 1, "y": 1}]}])
    assert [len(p) for p in poses] == [0, 1]
