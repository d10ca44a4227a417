import numpy as np
import pytest

from sensor import Body, Joint, JointType, PinholeMapper, SensorTick, TrackingState

# 640x480 colour frame, focal length 500 px
MAPPER = PinholeMapper(500, 640, 480)

IDLE_WRIST_Y = -0.4
RAISED_WRIST_Y = 0.2


def make_body(tracking_id=1, depth=2.0, left_raised=False, right_raised=False,
              head=None, tracked=True, hands_tracked=True):
    """
    Upright body facing the sensor

    Spine base at y=-0.3, spine mid at 0, spine shoulder at 0.3 (spine
    scale 0.3 m). Wrists hang at y=-0.4 or are raised to y=0.2.
    """
    ly = RAISED_WRIST_Y if left_raised else IDLE_WRIST_Y
    ry = RAISED_WRIST_Y if right_raised else IDLE_WRIST_Y
    hand_state = TrackingState.TRACKED if hands_tracked else TrackingState.NOT_TRACKED
    positions = {
        JointType.SPINE_BASE: (0.0, -0.3, depth),
        JointType.SPINE_MID: (0.0, 0.0, depth),
        JointType.SPINE_SHOULDER: (0.0, 0.3, depth),
        JointType.NECK: (0.0, 0.4, depth),
        JointType.HEAD: head if head is not None else (0.0, 0.5, depth),
        JointType.SHOULDER_LEFT: (-0.2, 0.3, depth),
        JointType.SHOULDER_RIGHT: (0.2, 0.3, depth),
        JointType.ELBOW_LEFT: (-0.25, 0.0, depth),
        JointType.ELBOW_RIGHT: (0.25, 0.0, depth),
        JointType.WRIST_LEFT: (-0.2, ly, depth),
        JointType.WRIST_RIGHT: (0.2, ry, depth),
        JointType.HAND_TIP_LEFT: (-0.2, ly - 0.1, depth),
        JointType.HAND_TIP_RIGHT: (0.2, ry - 0.1, depth),
        JointType.HIP_LEFT: (-0.1, -0.35, depth),
        JointType.HIP_RIGHT: (0.1, -0.35, depth),
        JointType.KNEE_LEFT: (-0.1, -0.8, depth),
        JointType.KNEE_RIGHT: (0.1, -0.8, depth),
        JointType.ANKLE_LEFT: (-0.1, -1.2, depth),
        JointType.ANKLE_RIGHT: (0.1, -1.2, depth),
    }
    joints = {jt: Joint(pos) for jt, pos in positions.items()}
    joints[JointType.HAND_LEFT] = Joint((-0.2, ly, depth), hand_state)
    joints[JointType.HAND_RIGHT] = Joint((0.2, ry, depth), hand_state)
    return Body(tracking_id, joints, tracked)


def make_image(value=(10, 20, 30, 255)):
    image = np.zeros((480, 640, 4), dtype=np.uint8)
    image[:] = value
    return image


def make_tick(timestamp, bodies, image=None, face=None, mapper=MAPPER):
    return SensorTick(timestamp, bodies, make_image() if image is None else image, face, mapper)


@pytest.fixture
def image():
    return make_image()
