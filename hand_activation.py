"""
hand_activation.py - Raised/idle decision for each hand

A hand is active while its wrist is more than half a spine scale above the
spine base. The spine scale is the distance between the spine-shoulder and
spine-mid joints and normalises thresholds and crop sizes to body size.
"""

import numpy as np

from sensor import JointType
from skeletal_points import SPointType


def spine_scale(body):
    """Spine-shoulder to spine-mid distance in camera space (meters)"""
    a = body.joint(JointType.SPINE_SHOULDER)
    b = body.joint(JointType.SPINE_MID)
    if a is None or b is None:
        return 0.0
    return float(np.linalg.norm(a.position - b.position))


def spine_scale_px(body, mapper):
    """Same spine segment measured in colour pixels"""
    a = body.joint(JointType.SPINE_SHOULDER)
    b = body.joint(JointType.SPINE_MID)
    if a is None or b is None or mapper is None:
        return 0.0
    pa = mapper.map_camera_to_color(a.position)
    pb = mapper.map_camera_to_color(b.position)
    dist = float(np.linalg.norm(pa - pb))
    return dist if np.isfinite(dist) else 0.0


def is_hand_activated(wrist_y, spine_base_y, scale):
    return wrist_y > spine_base_y + scale / 2


def detect_activation(spoints, scale):
    """
    Args:
        spoints: SkeletalPointSet of the current tick
        scale: spine scale in the same space as spoints

    Returns:
        (left_activated, right_activated)
    """
    base_y = spoints[SPointType.BODY_SPINE_BASE][1]
    left = is_hand_activated(spoints[SPointType.BODY_WRIST_LEFT][1], base_y, scale)
    right = is_hand_activated(spoints[SPointType.BODY_WRIST_RIGHT][1], base_y, scale)
    return bool(left), bool(right)
