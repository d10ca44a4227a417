"""
lp_filt.py - Interpolation filter for 3D hand positions

Usage:
    from lp_filt import HandPositionSmoother

    smoother = HandPositionSmoother(alpha=0.3)
    left, right = smoother.update(body)
"""

import numpy as np

import config
from sensor import JointType


def lerp(previous, raw, alpha):
    """previous + alpha * (raw - previous), per coordinate"""
    previous = np.asarray(previous, dtype=np.float64)
    raw = np.asarray(raw, dtype=np.float64)
    return previous + alpha * (raw - previous)


class LerpFilter:
    """
    Exponential interpolation toward the newest sample

    Args:
        alpha: Blend factor in (0, 1]
               small = heavy smoothing, 1 = no smoothing
    """

    def __init__(self, alpha=config.LERP_PERCENT):
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")
        self.alpha = alpha
        self.value = None

    def update(self, measurement):
        """Update with new measurement, first sample seeds the filter"""
        measurement = np.array(measurement, dtype=np.float64)
        if self.value is None:
            self.value = measurement
        else:
            self.value = lerp(self.value, measurement, self.alpha)
        return self.value.copy()

    def reset(self):
        self.value = None


class HandPositionSmoother:
    """Smoothed left/right hand positions of the selected body"""

    HAND_JOINTS = (JointType.HAND_LEFT, JointType.HAND_RIGHT)

    def __init__(self, alpha=config.LERP_PERCENT):
        self.filters = [LerpFilter(alpha), LerpFilter(alpha)]
        self.positions = [np.zeros(3), np.zeros(3)]

    @property
    def left(self):
        return self.positions[0]

    @property
    def right(self):
        return self.positions[1]

    def update(self, body):
        """
        Blend both hands toward the body's hand joints

        A hand whose joint is not tracked keeps its last smoothed position.

        Returns:
            (left, right) smoothed camera points
        """
        for i, joint_type in enumerate(self.HAND_JOINTS):
            joint = body.joint(joint_type)
            if joint is None or not joint.tracked:
                continue
            self.positions[i] = self.filters[i].update(joint.position)
        return self.left.copy(), self.right.copy()

    def reset(self):
        for f in self.filters:
            f.reset()
        self.positions = [np.zeros(3), np.zeros(3)]
