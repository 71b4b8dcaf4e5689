from __future__ import annotations

import json
import textwrap

import pytest

from surfscore.C_analysis.errors import InvalidConfigError
from surfscore.config import TurnConfig, from_dict, from_yaml, load_default


def test_defaults_match_documented_thresholds():
    cfg = load_default()

    assert cfg.signal.smoothing_alpha == pytest.approx(0.9)
    assert cfg.signal.history_capacity == 30
    assert cfg.detection.min_state_frames == 6
    assert cfg.detection.transition_frames == 3
    assert cfg.detection.cooldown_frames == 12
    assert cfg.detection.bt_exit_torso_threshold == pytest.approx(18.0)
    assert cfg.detection.tt_torso_max == pytest.approx(30.0)
    assert cfg.scoring.compression_bands[0] == (70.0, 100.0)


def test_copy_is_deep():
    cfg = TurnConfig()
    clone = cfg.copy()
    clone.detection.bt_knee_min = 60.0

    assert cfg.detection.bt_knee_min == 70.0


def test_partial_yaml_overrides_only_named_keys(tmp_path):
    path = tmp_path / "surf.yaml"
    path.write_text(
        textwrap.dedent(
            """
            signal:
              smoothing_alpha: 0.5
            detection:
              cooldown_frames: 20
              unknown_threshold: 3
            scoring:
              compression_bands:
                - [75, 95]
                - [65, 105]
                - [55, 115]
            """
        ),
        encoding="utf-8",
    )

    cfg = from_yaml(path)

    assert cfg.signal.smoothing_alpha == 0.5
    assert cfg.detection.cooldown_frames == 20
    assert cfg.detection.min_state_frames == 6
    assert not hasattr(cfg.detection, "unknown_threshold")
    assert cfg.scoring.compression_bands == ((75, 95), (65, 105), (55, 115))
    assert isinstance(cfg.scoring.compression_bands, tuple)


def test_empty_yaml_yields_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert from_yaml(path).to_dict() == TurnConfig().to_dict()


def test_derived_properties_are_not_overridable():
    cfg = from_dict({"detection": {"bt_exit_torso_threshold": 99}})
    assert cfg.detection.bt_exit_torso_threshold == pytest.approx(18.0)


@pytest.mark.parametrize(
    "data",
    [
        {"signal": {"smoothing_alpha": 1.2}},
        {"signal": {"min_joint_confidence": -0.1}},
        {"signal": {"history_capacity": 0}},
        {"detection": {"cooldown_frames": 0}},
        {"detection": {"bt_knee_min": 120.0}},
        {"detection": {"bt_torso_min": 50.0}},
        {"scoring": {"smooth_min_samples": 0}},
        {"scoring": 3},
        {"detection": [1, 2]},
        {"signal": "fast"},
    ],
)
def test_invalid_values_raise(data):
    with pytest.raises(InvalidConfigError):
        from_dict(data)


def test_non_mapping_root_is_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(InvalidConfigError):
        from_yaml(path)


def test_fingerprint_tracks_parameter_changes():
    base = TurnConfig()
    same = TurnConfig()
    changed = from_dict({"scoring": {"smooth_std_max": 6.0}})

    assert base.fingerprint() == same.fingerprint()
    assert base.fingerprint() != changed.fingerprint()
    assert len(base.fingerprint()) == 40


def test_to_dict_is_json_serialisable():
    payload = json.loads(json.dumps(TurnConfig().to_dict()))
    assert set(payload) == {"signal", "detection", "scoring"}
    assert payload["scoring"]["torso_lean_bands"][0] == [20.0, 40.0]


def test_empty_yaml_section_keeps_defaults(tmp_path):
    path = tmp_path / "sections.yaml"
    path.write_text("detection:\nscoring:\n  smooth_std_max: 6.0\n", encoding="utf-8")

    cfg = from_yaml(path)

    assert cfg.detection.min_state_frames == 6
    assert cfg.scoring.smooth_std_max == 6.0
    assert from_dict({"detection": None}).to_dict() == TurnConfig().to_dict()


def test_non_mapping_section_error_names_the_key():
    with pytest.raises(InvalidConfigError, match="scoring"):
        from_dict({"scoring": 3})
