"""
body_selector.py - Picks the tracked body closest to the sensor on every tick
"""

import logging
import math

from sensor import JointType

logger = logging.getLogger(__name__)


class BodySelection:
    """Result of one selection pass"""

    def __init__(self, index, distance, tracked, tracking_id, identity_changed):
        self.index = index
        self.distance = distance
        self.tracked = tracked
        self.tracking_id = tracking_id
        self.identity_changed = identity_changed

    def __repr__(self):
        return (f"BodySelection(index={self.index}, distance={self.distance:.3f}, "
                f"tracked={self.tracked}, tracking_id={self.tracking_id}, "
                f"identity_changed={self.identity_changed})")


class BodySelector:
    """
    Closest-body selection with a stable tracking identity

    Distance is the Euclidean distance from the sensor origin to the head
    joint. On an exact tie the previously selected identity wins.
    """

    def __init__(self):
        self.tracking_id = None
        self.index = 0
        self.distance = 0.0

    @staticmethod
    def head_distance(body):
        head = body.joint(JointType.HEAD)
        if head is None or not head.tracked:
            return None
        x, y, z = head.position
        return math.sqrt(x ** 2 + y ** 2 + z ** 2)

    def select(self, bodies):
        """
        Args:
            bodies: list of sensor Body slots for the current tick

        Returns:
            BodySelection; when nothing is tracked, tracked is False and the
            previous index/distance are reported unchanged
        """
        best_index = None
        best_distance = math.inf
        best_id = None

        for index, body in enumerate(bodies):
            if not body.tracked:
                continue
            distance = self.head_distance(body)
            if distance is None:
                continue
            closer = distance < best_distance
            tie_to_current = (distance == best_distance
                              and body.tracking_id == self.tracking_id)
            if closer or tie_to_current:
                best_index, best_distance, best_id = index, distance, body.tracking_id

        if best_index is None:
            return BodySelection(self.index, self.distance, False, self.tracking_id, False)

        identity_changed = best_id != self.tracking_id
        if identity_changed:
            logger.info(f"Tracking body {best_id} (slot {best_index}, {best_distance:.2f} m)")

        self.tracking_id = best_id
        self.index = best_index
        self.distance = best_distance
        return BodySelection(best_index, best_distance, True, best_id, identity_changed)
