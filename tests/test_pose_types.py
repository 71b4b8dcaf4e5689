import json

import numpy as np
import pytest

from surfscore.B_pose_estimation.constants import LANDMARK_COUNT, LANDMARK_NAMES, REQUIRED_JOINTS, landmark_name
from surfscore.B_pose_estimation.types import FramePose, JointSample, as_frame_pose
from surfscore.C_analysis.errors import InvalidFrameError


def test_joint_sample_behaves_like_mapping() -> None:
    joint = JointSample(name="left_knee", x=10.0, y=20.0, z=-0.1, confidence=0.8)

    assert joint["x"] == 10.0
    assert joint["y"] == 20.0
    assert joint["visibility"] == pytest.approx(0.8)
    assert set(joint) == {"x", "y", "z", "confidence"}
    with pytest.raises(KeyError):
        joint["w"]


def test_from_mapping_accepts_visibility_alias_and_skips_invalid() -> None:
    frame = FramePose.from_mapping(
        {
            "left_hip": {"x": 40, "y": 60, "visibility": 0.7},
            "right_hip": {"x": "bad", "y": 60},
            "nose": 5,
        }
    )

    assert list(frame) == ["left_hip"]
    assert frame["left_hip"].confidence == pytest.approx(0.7)


def test_from_samples_keeps_last_duplicate() -> None:
    frame = FramePose.from_samples(
        [
            {"name": "left_knee", "x": 1.0, "y": 2.0, "confidence": 0.9},
            JointSample(name="left_knee", x=3.0, y=4.0),
        ]
    )

    assert len(frame) == 1
    assert frame["left_knee"].xy == (3.0, 4.0)


def test_from_landmark_array_scales_to_percent_and_names_joints() -> None:
    arr = np.full((LANDMARK_COUNT, 4), 0.5)
    arr[23] = [0.25, 0.75, 0.0, 0.9]
    arr[24, 0] = np.nan

    frame = FramePose.from_landmark_array(arr)

    assert len(frame) == LANDMARK_COUNT - 1
    assert "right_hip" not in frame
    left_hip = frame["left_hip"]
    assert left_hip.xy == pytest.approx((25.0, 75.0))
    assert left_hip.confidence == pytest.approx(0.9)


def test_from_landmark_array_without_visibility_uses_default_confidence() -> None:
    arr = np.full((LANDMARK_COUNT, 3), 0.1)
    frame = FramePose.from_landmark_array(arr, normalized=False)

    assert frame["nose"].xy == pytest.approx((0.1, 0.1))
    assert frame["nose"].confidence == pytest.approx(0.5)


def test_filtered_drops_low_confidence_joints() -> None:
    frame = FramePose.from_samples(
        [
            JointSample(name="left_hip", x=1.0, y=1.0, confidence=0.2),
            JointSample(name="right_hip", x=2.0, y=1.0, confidence=0.8),
        ]
    )

    assert frame.filtered(0.0) is frame
    assert list(frame.filtered(0.5)) == ["right_hip"]


def test_as_frame_pose_normalises_supported_inputs() -> None:
    assert len(as_frame_pose(None)) == 0
    assert "left_hip" in as_frame_pose({"left_hip": {"x": 1, "y": 2}})
    assert "nose" in as_frame_pose([{"name": "nose", "x": 1, "y": 2}])
    assert len(as_frame_pose(np.zeros((LANDMARK_COUNT, 4)))) == LANDMARK_COUNT

    with pytest.raises(InvalidFrameError):
        as_frame_pose(42)


def test_landmark_names_follow_mediapipe_order() -> None:
    assert len(LANDMARK_NAMES) == LANDMARK_COUNT
    assert landmark_name(11) == "left_shoulder"
    assert landmark_name(28) == "right_ankle"
    assert landmark_name(40) == "landmark_40"


def test_frame_pose_to_dict_is_json_serialisable() -> None:
    frame = FramePose.from_samples([JointSample(name="nose", x=1.0, y=2.0)])
    payload = json.loads(json.dumps(frame.to_dict()))
    assert payload["nose"]["x"] == 1.0
    assert payload["nose"]["z"] is None


def test_synthetic_pose_covers_required_joints(make_pose) -> None:
    frame = make_pose(85.0, 30.0, 20.0)
    assert frame.has_all(REQUIRED_JOINTS)
    assert not frame.filtered(0.95).has_all(REQUIRED_JOINTS)


def test_zero_visibility_counts_as_unreported() -> None:
    arr = np.full((LANDMARK_COUNT, 4), 0.5)
    arr[:, 3] = 0.0
    arr[0, 3] = 0.8

    frame = FramePose.from_landmark_array(arr)

    assert frame["nose"].confidence == pytest.approx(0.8)
    assert frame["left_hip"].confidence == pytest.approx(0.5)


def test_mean_confidence_averages_present_joints() -> None:
    frame = FramePose.from_samples(
        [
            JointSample(name="left_hip", x=1.0, y=1.0, confidence=0.2),
            JointSample(name="right_hip", x=2.0, y=1.0, confidence=0.8),
        ]
    )

    assert frame.mean_confidence == pytest.approx(0.5)
    assert FramePose().mean_confidence == 0.0
