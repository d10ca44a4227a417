import numpy as np
import pytest

from conftest import make_body
from skeletal_points import SPOINT_SIZE, SkeletalPointSet, SPointType, spoint_columns


def test_catalog_size():
    assert SPOINT_SIZE == 37
    assert len(spoint_columns()) == 37 * 3
    assert spoint_columns()[:3] == ["HEAD_HAIR_x", "HEAD_HAIR_y", "HEAD_HAIR_z"]


def test_joints_copied():
    body = make_body(left_raised=True)
    spoints = SkeletalPointSet()
    spoints.update(body.joints, None, 0.3)
    assert np.allclose(spoints[SPointType.BODY_WRIST_LEFT], (-0.2, 0.2, 2.0))
    assert np.allclose(spoints[SPointType.BODY_SPINE_BASE], (0.0, -0.3, 2.0))


def test_derived_points_offset_by_spine_scale():
    body = make_body()
    spoints = SkeletalPointSet()
    face = {SPointType.HEAD_HAIR: (0.0, 0.6, 2.0), SPointType.HEAD_FACE_NOSE: (0.0, 0.45, 1.9)}
    spoints.update(body.joints, face, 0.3)

    assert np.allclose(spoints[SPointType.HEAD_TOP], (0.0, 0.9, 2.0))
    assert np.allclose(spoints[SPointType.HEAD_SIDE_LEFT], (-0.3, 0.45, 1.9))
    assert np.allclose(spoints[SPointType.HEAD_SIDE_RIGHT], (0.3, 0.45, 1.9))
    assert np.allclose(spoints[SPointType.BODY_HIP_SIDE_LEFT], (-0.4, -0.35, 2.0))
    assert np.allclose(spoints[SPointType.BODY_SPINE_MID_SIDE_RIGHT], (0.3, 0.0, 2.0))


def test_face_kept_while_untracked():
    body = make_body()
    spoints = SkeletalPointSet()
    spoints.update(body.joints, {SPointType.HEAD_FACE_NOSE: (0.1, 0.4, 1.9)}, 0.3)
    spoints.update(body.joints, None, 0.3)
    assert np.allclose(spoints[SPointType.HEAD_FACE_NOSE], (0.1, 0.4, 1.9))


def test_snapshot_is_independent():
    spoints = SkeletalPointSet()
    copy = spoints.snapshot()
    spoints[SPointType.BODY_NECK] = (1.0, 1.0, 1.0)
    assert copy[SPointType.BODY_NECK].tolist() == [0.0, 0.0, 0.0]


def test_flatten_order():
    spoints = SkeletalPointSet()
    spoints[SPointType.HEAD_FACE_EYE_LEFT] = (1.0, 2.0, 3.0)
    assert spoints.flatten()[3:6].tolist() == pytest.approx([1.0, 2.0, 3.0])
