"""
sensor.py - Data handed over by a body-tracking sensor on every tick

A sensor source produces one SensorTick per frame: the tracked bodies with
their joints in camera space (meters, Y up, Z away from the sensor), optional
face landmarks, the BGRA colour buffer, a relative timestamp in milliseconds
and a mapper that projects camera points into colour pixels.
"""

from enum import IntEnum

import numpy as np


class JointType(IntEnum):
    SPINE_BASE = 0
    SPINE_MID = 1
    NECK = 2
    HEAD = 3
    SHOULDER_LEFT = 4
    ELBOW_LEFT = 5
    WRIST_LEFT = 6
    HAND_LEFT = 7
    SHOULDER_RIGHT = 8
    ELBOW_RIGHT = 9
    WRIST_RIGHT = 10
    HAND_RIGHT = 11
    HIP_LEFT = 12
    KNEE_LEFT = 13
    ANKLE_LEFT = 14
    FOOT_LEFT = 15
    HIP_RIGHT = 16
    KNEE_RIGHT = 17
    ANKLE_RIGHT = 18
    FOOT_RIGHT = 19
    SPINE_SHOULDER = 20
    HAND_TIP_LEFT = 21
    THUMB_LEFT = 22
    HAND_TIP_RIGHT = 23
    THUMB_RIGHT = 24


class TrackingState(IntEnum):
    NOT_TRACKED = 0
    INFERRED = 1
    TRACKED = 2


class Joint:
    def __init__(self, position, tracking_state=TrackingState.TRACKED):
        self.position = np.asarray(position, dtype=np.float64)
        self.tracking_state = TrackingState(tracking_state)

    @property
    def tracked(self):
        return self.tracking_state != TrackingState.NOT_TRACKED

    def __repr__(self):
        return f"Joint({self.position.tolist()}, {self.tracking_state.name})"


class Body:
    """One body slot reported by the sensor"""

    def __init__(self, tracking_id, joints, tracked=True):
        self.tracking_id = tracking_id
        self.joints = dict(joints)
        self.tracked = tracked

    def joint(self, joint_type):
        return self.joints.get(joint_type)


class PinholeMapper:
    """
    Camera space -> colour pixel projection

    Args:
        focal_length: focal length in pixels
        width, height: colour image size in pixels
    """

    def __init__(self, focal_length, width, height):
        self.focal_length = float(focal_length)
        self.width = width
        self.height = height
        self.cx = width / 2.0
        self.cy = height / 2.0

    def map_camera_to_color(self, point):
        """Project a camera point; points at or behind the sensor map to NaN"""
        x, y, z = point
        if z <= 0:
            return np.array([np.nan, np.nan])
        return np.array([
            self.cx + self.focal_length * x / z,
            self.cy - self.focal_length * y / z,
        ])

    def map_color_to_camera(self, px, py, z):
        """Back-project a pixel at depth z (inverse of map_camera_to_color)"""
        return np.array([
            (px - self.cx) * z / self.focal_length,
            (self.cy - py) * z / self.focal_length,
            z,
        ])


class SensorTick:
    def __init__(self, timestamp, bodies, color_image=None, face=None, mapper=None):
        self.timestamp = int(timestamp)
        self.bodies = list(bodies)
        self.color_image = color_image
        self.face = face
        self.mapper = mapper


class SensorSource:
    """Base class for anything that feeds ticks into the pipeline"""

    def read(self):
        """Return the next SensorTick, or None when no frame is available"""
        raise NotImplementedError

    def bind_tracking_id(self, tracking_id):
        """Re-target identity dependent tracking (face) to a new body"""

    def release(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False
