import pytest

from conftest import MAPPER, make_body
from hand_activation import detect_activation, is_hand_activated, spine_scale, spine_scale_px
from sensor import Body
from skeletal_points import SkeletalPointSet, SPointType


def test_threshold_is_half_spine_above_base():
    assert not is_hand_activated(0.25, 0.0, 0.5)
    assert is_hand_activated(0.25 + 1e-6, 0.0, 0.5)
    assert not is_hand_activated(0.25 - 1e-6, 0.0, 0.5)


def test_spine_scale():
    body = make_body()
    assert spine_scale(body) == pytest.approx(0.3)
    # 0.3 m at 2 m with f=500 px
    assert spine_scale_px(body, MAPPER) == pytest.approx(75.0)


def test_spine_scale_missing_joints():
    body = Body(1, {})
    assert spine_scale(body) == 0.0
    assert spine_scale_px(body, MAPPER) == 0.0


def test_detect_activation_per_hand():
    body = make_body(left_raised=True)
    spoints = SkeletalPointSet()
    spoints.update(body.joints, None, spine_scale(body))
    assert detect_activation(spoints, spine_scale(body)) == (True, False)


def test_detect_activation_uses_spine_base():
    spoints = SkeletalPointSet()
    spoints[SPointType.BODY_SPINE_BASE] = (0.0, 1.0, 2.0)
    spoints[SPointType.BODY_WRIST_LEFT] = (0.0, 1.2, 2.0)
    spoints[SPointType.BODY_WRIST_RIGHT] = (0.0, 1.1, 2.0)
    assert detect_activation(spoints, 0.3) == (True, False)
