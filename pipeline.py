"""
pipeline.py - Drives one sensor tick through the whole recording chain

    BodySelector -> HandPositionSmoother -> SkeletalPointSet
        -> hand activation -> HandROIExtractor -> RecordingSession

Ticks are processed synchronously, one at a time.
"""

import logging

from body_selector import BodySelector
from hand_activation import detect_activation, spine_scale, spine_scale_px
from lp_filt import HandPositionSmoother
from recorder import SessionOutcome
from roi_extractor import HandROIExtractor
from skeletal_points import SkeletalPointSet

logger = logging.getLogger(__name__)


class PipelineStatus:
    """Read-only view of the latest tick for the display"""

    def __init__(self):
        self.tracked = False
        self.distance = 0.0
        self.spine_scale = 0.0
        self.spine_scale_px = 0.0
        self.lhand = None
        self.rhand = None
        self.l_activated = False
        self.r_activated = False
        self.recording = False
        self.stacked = 0
        self.recorded = 0
        self.outcome = SessionOutcome.NONE
        self.fps = 0.0
        self.timestamp = None


class GesturePipeline:
    """
    Args:
        session: RecordingSession owning the live collections
        on_identity_change: called with the new tracking id whenever the
                            selected body changes (e.g. sensor.bind_tracking_id)
    """

    def __init__(self, session, on_identity_change=None, alpha=None):
        self.session = session
        self.on_identity_change = on_identity_change
        self.selector = BodySelector()
        self.smoother = HandPositionSmoother() if alpha is None else HandPositionSmoother(alpha)
        self.spoints = SkeletalPointSet()
        self.roi = HandROIExtractor()
        self.status = PipelineStatus()
        self.last_timestamp = None

    def process(self, tick):
        """Run one tick; returns the updated PipelineStatus"""
        status = self.status
        status.outcome = SessionOutcome.NONE
        self.update_fps(tick.timestamp)

        selection = self.selector.select(tick.bodies)
        status.tracked = selection.tracked
        status.distance = selection.distance

        if selection.identity_changed:
            self.session.identity_changed()
            if self.on_identity_change is not None:
                self.on_identity_change(selection.tracking_id)

        if not selection.tracked:
            status.l_activated = status.r_activated = False
            self.refresh_session_status()
            return status

        body = tick.bodies[selection.index]
        lhand, rhand = self.smoother.update(body)

        scale = spine_scale(body)
        scale_px = spine_scale_px(body, tick.mapper)
        self.spoints.update(body.joints, tick.face, scale)
        l_on, r_on = detect_activation(self.spoints, scale)

        self.roi.update(tick.color_image, tick.mapper, (lhand, rhand), scale_px)

        status.outcome = self.session.update(
            tick.timestamp, lhand, rhand, self.spoints, l_on, r_on,
            self.roi.left, self.roi.right,
        )

        status.spine_scale = scale
        status.spine_scale_px = scale_px
        status.lhand, status.rhand = lhand, rhand
        status.l_activated, status.r_activated = l_on, r_on
        self.refresh_session_status()
        return status

    def refresh_session_status(self):
        self.status.recording = self.session.stacking
        self.status.stacked = len(self.session.frames)
        self.status.recorded = self.session.recorded

    def update_fps(self, timestamp):
        if self.last_timestamp is not None:
            duration = timestamp - self.last_timestamp
            if duration > 0:
                self.status.fps = 1000.0 / duration
        self.last_timestamp = timestamp
        self.status.timestamp = timestamp
