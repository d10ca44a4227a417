"""
skeletal_points.py - Named anatomical landmarks tracked for every recorded frame

Usage:
    from skeletal_points import SkeletalPointSet, SPointType

    spoints = SkeletalPointSet()
    spoints.update(body.joints, tick.face, spine_scale)
    wrist = spoints[SPointType.BODY_WRIST_LEFT]
"""

from enum import IntEnum

import numpy as np

from sensor import JointType


class SPointType(IntEnum):
    # face landmarks
    HEAD_HAIR = 0
    HEAD_FACE_EYE_LEFT = 1
    HEAD_FACE_EYE_RIGHT = 2
    HEAD_FACE_NOSE = 3
    HEAD_FACE_LIP = 4
    HEAD_FACE_CHEEK_LEFT = 5
    HEAD_FACE_CHEEK_RIGHT = 6
    HEAD_FACE_JAW = 7
    # derived head points
    HEAD_TOP = 8
    HEAD_SIDE_LEFT = 9
    HEAD_SIDE_RIGHT = 10
    # upper body
    BODY_NECK = 11
    BODY_SPINE_MID = 12
    BODY_SPINE_BASE = 13
    BODY_SPINE_SHOULDER = 14
    BODY_SHOULDER_LEFT = 15
    BODY_SHOULDER_RIGHT = 16
    BODY_ELBOW_LEFT = 17
    BODY_ELBOW_RIGHT = 18
    BODY_WRIST_LEFT = 19
    BODY_WRIST_RIGHT = 20
    BODY_HAND_TIP_LEFT = 21
    BODY_HAND_TIP_RIGHT = 22
    # lower body
    BODY_HIP_LEFT = 23
    BODY_HIP_RIGHT = 24
    BODY_KNEE_LEFT = 25
    BODY_KNEE_RIGHT = 26
    BODY_ANKLE_LEFT = 27
    BODY_ANKLE_RIGHT = 28
    # derived side points
    BODY_HIP_SIDE_LEFT = 29
    BODY_HIP_SIDE_RIGHT = 30
    BODY_SHOULDER_SIDE_LEFT = 31
    BODY_SHOULDER_SIDE_RIGHT = 32
    BODY_KNEE_SIDE_LEFT = 33
    BODY_KNEE_SIDE_RIGHT = 34
    BODY_SPINE_MID_SIDE_LEFT = 35
    BODY_SPINE_MID_SIDE_RIGHT = 36


SPOINT_SIZE = len(SPointType)

FACE_POINTS = [
    SPointType.HEAD_HAIR,
    SPointType.HEAD_FACE_EYE_LEFT,
    SPointType.HEAD_FACE_EYE_RIGHT,
    SPointType.HEAD_FACE_NOSE,
    SPointType.HEAD_FACE_LIP,
    SPointType.HEAD_FACE_CHEEK_LEFT,
    SPointType.HEAD_FACE_CHEEK_RIGHT,
    SPointType.HEAD_FACE_JAW,
]

# landmark slot <- sensor joint
JOINT_POINTS = {
    SPointType.BODY_NECK: JointType.NECK,
    SPointType.BODY_SPINE_MID: JointType.SPINE_MID,
    SPointType.BODY_SPINE_BASE: JointType.SPINE_BASE,
    SPointType.BODY_SPINE_SHOULDER: JointType.SPINE_SHOULDER,
    SPointType.BODY_SHOULDER_LEFT: JointType.SHOULDER_LEFT,
    SPointType.BODY_SHOULDER_RIGHT: JointType.SHOULDER_RIGHT,
    SPointType.BODY_ELBOW_LEFT: JointType.ELBOW_LEFT,
    SPointType.BODY_ELBOW_RIGHT: JointType.ELBOW_RIGHT,
    SPointType.BODY_WRIST_LEFT: JointType.WRIST_LEFT,
    SPointType.BODY_WRIST_RIGHT: JointType.WRIST_RIGHT,
    SPointType.BODY_HAND_TIP_LEFT: JointType.HAND_TIP_LEFT,
    SPointType.BODY_HAND_TIP_RIGHT: JointType.HAND_TIP_RIGHT,
    SPointType.BODY_HIP_LEFT: JointType.HIP_LEFT,
    SPointType.BODY_HIP_RIGHT: JointType.HIP_RIGHT,
    SPointType.BODY_KNEE_LEFT: JointType.KNEE_LEFT,
    SPointType.BODY_KNEE_RIGHT: JointType.KNEE_RIGHT,
    SPointType.BODY_ANKLE_LEFT: JointType.ANKLE_LEFT,
    SPointType.BODY_ANKLE_RIGHT: JointType.ANKLE_RIGHT,
}

# derived slot <- (source slot, offset in spine-scale units)
DERIVED_POINTS = {
    SPointType.HEAD_TOP: (SPointType.HEAD_HAIR, (0.0, 1.0, 0.0)),
    SPointType.HEAD_SIDE_LEFT: (SPointType.HEAD_FACE_NOSE, (-1.0, 0.0, 0.0)),
    SPointType.HEAD_SIDE_RIGHT: (SPointType.HEAD_FACE_NOSE, (1.0, 0.0, 0.0)),
    SPointType.BODY_HIP_SIDE_LEFT: (SPointType.BODY_HIP_LEFT, (-1.0, 0.0, 0.0)),
    SPointType.BODY_HIP_SIDE_RIGHT: (SPointType.BODY_HIP_RIGHT, (1.0, 0.0, 0.0)),
    SPointType.BODY_SHOULDER_SIDE_LEFT: (SPointType.BODY_SHOULDER_LEFT, (-1.0, 0.0, 0.0)),
    SPointType.BODY_SHOULDER_SIDE_RIGHT: (SPointType.BODY_SHOULDER_RIGHT, (1.0, 0.0, 0.0)),
    SPointType.BODY_KNEE_SIDE_LEFT: (SPointType.BODY_KNEE_LEFT, (-1.0, 0.0, 0.0)),
    SPointType.BODY_KNEE_SIDE_RIGHT: (SPointType.BODY_KNEE_RIGHT, (1.0, 0.0, 0.0)),
    SPointType.BODY_SPINE_MID_SIDE_LEFT: (SPointType.BODY_SPINE_MID, (-1.0, 0.0, 0.0)),
    SPointType.BODY_SPINE_MID_SIDE_RIGHT: (SPointType.BODY_SPINE_MID, (1.0, 0.0, 0.0)),
}


class SkeletalPointSet:
    """
    Fixed-size table of camera-space landmarks, one row per SPointType

    The table is refreshed every tracked tick. Rows whose source is missing
    (face not tracked, joint absent) keep their previous value.
    """

    def __init__(self, points=None):
        if points is None:
            points = np.zeros((SPOINT_SIZE, 3), dtype=np.float64)
        self.points = np.asarray(points, dtype=np.float64).reshape(SPOINT_SIZE, 3)

    def __getitem__(self, spoint):
        return self.points[int(spoint)]

    def __setitem__(self, spoint, point):
        self.points[int(spoint)] = point

    def __len__(self):
        return SPOINT_SIZE

    def update(self, joints, face, spine_scale):
        """
        Refresh every landmark from one sensor tick

        Args:
            joints: mapping JointType -> Joint of the selected body
            face: mapping SPointType -> camera point, or None when the face
                  is not tracked this tick
            spine_scale: spine length in meters, used for the derived points
        """
        if face:
            for spoint in FACE_POINTS:
                if spoint in face:
                    self[spoint] = face[spoint]

        for spoint, joint_type in JOINT_POINTS.items():
            joint = joints.get(joint_type)
            if joint is not None:
                self[spoint] = joint.position

        for spoint, (source, offset) in DERIVED_POINTS.items():
            self[spoint] = self[source] + np.asarray(offset) * spine_scale

    def snapshot(self):
        """Independent copy for storing inside a Frame"""
        return SkeletalPointSet(self.points.copy())

    def flatten(self):
        return self.points.flatten()


def spoint_columns():
    """CSV column names for a flattened landmark table"""
    return [f"{spoint.name}_{axis}" for spoint in SPointType for axis in "xyz"]
