"""
recorder.py - Session controller turning hand activity into recordings

States:
    IDLE      nothing is accumulated
    STACKING  every tick appends one Frame and both hand crops

IDLE -> STACKING when either hand activates (never in OFF mode).
STACKING -> IDLE when both hands are idle; the session is standardized and
exported if it stacked more frames than the mode's minimum, then cleared.
"""

import logging
from enum import Enum

import config
from exporter import PersistedExport, TransientExport
from frame_collection import Frame, FrameCollection, ImageFrame

logger = logging.getLogger(__name__)


class RecordingMode(Enum):
    OFF = "off"
    PREDICT = "predict"    # immediate use, shared temp folder
    OUTPUT = "output"      # persisted dataset


class RecordingState(Enum):
    IDLE = "idle"
    STACKING = "stacking"


class SessionOutcome(Enum):
    NONE = "none"
    STARTED = "started"
    EXPORTED = "exported"
    TOO_SHORT = "too_short"
    STANDARDIZE_FAILED = "standardize_failed"
    EXPORT_FAILED = "export_failed"


MIN_STACKED_FRAMES = {
    RecordingMode.PREDICT: config.PREDICT_MIN_FRAMES,
    RecordingMode.OUTPUT: config.OUTPUT_MIN_FRAMES,
}

MODE_ORDER = [RecordingMode.OFF, RecordingMode.PREDICT, RecordingMode.OUTPUT]


def export_policy_for(mode, label, label_name, worker):
    if mode == RecordingMode.PREDICT:
        return TransientExport(label, label_name)
    return PersistedExport(label, label_name, worker)


class RecordingSession:
    """
    Owns the three live collections of the current recording

    Args:
        exporter: Exporter used when a session is finalized
        mode: RecordingMode
        label: label id attached to exports
        labels: LabelMapper for label names (optional)
        worker: operator name for persisted exports
    """

    def __init__(self, exporter, mode=RecordingMode.OFF, label=0, labels=None,
                 worker=config.DEFAULT_WORKER,
                 frame_size=config.FRAME_STANDARD_SIZE,
                 image_size=config.IMAGE_STANDARD_FRAME_SIZE):
        self.exporter = exporter
        self.mode = mode
        self.label = label
        self.labels = labels
        self.worker = worker

        self.state = RecordingState.IDLE
        self.record_start_time = None
        self.recorded = 0
        # exported for the current tracked identity; read by identity-dependent consumers
        self.produced = False

        self.frames = FrameCollection(frame_size, label)
        self.lhand_images = FrameCollection(image_size, label)
        self.rhand_images = FrameCollection(image_size, label)

    @property
    def stacking(self):
        return self.state == RecordingState.STACKING

    @property
    def label_name(self):
        return self.labels.name(self.label) if self.labels is not None else str(self.label)

    def set_mode(self, mode):
        if mode == self.mode:
            return
        if self.stacking:
            logger.info(f"Mode changed to {mode.value}, dropping current recording")
            self.reset()
        self.mode = mode

    def set_label(self, label):
        self.label = label
        for collection in (self.frames, self.lhand_images, self.rhand_images):
            collection.label = label

    def identity_changed(self):
        self.produced = False

    def reset(self):
        self.state = RecordingState.IDLE
        self.record_start_time = None
        self.frames.clear()
        self.lhand_images.clear()
        self.rhand_images.clear()

    def update(self, timestamp, lhand, rhand, spoints, l_activated, r_activated, lhand_image, rhand_image):
        """
        Advance the state machine by one tracked tick

        Returns:
            SessionOutcome describing what happened this tick
        """
        outcome = SessionOutcome.NONE
        if self.mode == RecordingMode.OFF:
            return outcome

        if not self.stacking:
            if l_activated or r_activated:
                self.record_start_time = timestamp
                self.state = RecordingState.STACKING
                outcome = SessionOutcome.STARTED
                logger.debug(f"Recording started at {timestamp}")
        elif not l_activated and not r_activated:
            outcome = self.finish()

        if self.stacking:
            self.frames.stack_frame(Frame(timestamp, lhand, rhand, spoints, l_activated, r_activated))
            self.lhand_images.stack_frame(ImageFrame(timestamp, lhand_image))
            self.rhand_images.stack_frame(ImageFrame(timestamp, rhand_image))

        return outcome

    def finish(self):
        """Close the running session: standardize, export or discard, then clear"""
        try:
            return self.finalize()
        finally:
            self.reset()

    def finalize(self):
        needed = MIN_STACKED_FRAMES[self.mode]
        stacked = len(self.frames)

        if stacked <= needed:
            logger.debug(f"Recording dropped, {stacked} frames <= {needed}")
            return SessionOutcome.TOO_SHORT

        for collection in (self.frames, self.lhand_images, self.rhand_images):
            collection.standardize(self.record_start_time)

        if not (self.frames.is_standard() and self.lhand_images.is_standard() and self.rhand_images.is_standard()):
            logger.warning(
                f"{self.label_name} Record saving ... fail (standardize bug): "
                f"{len(self.frames)}/{self.frames.standard_size} frames, "
                f"{len(self.lhand_images)}/{self.lhand_images.standard_size} left, "
                f"{len(self.rhand_images)}/{self.rhand_images.standard_size} right"
            )
            return SessionOutcome.STANDARDIZE_FAILED

        policy = export_policy_for(self.mode, self.label, self.label_name, self.worker)
        ok, _ = self.exporter.export(policy, self.frames, self.lhand_images, self.rhand_images)
        if not ok:
            return SessionOutcome.EXPORT_FAILED

        self.recorded += 1
        self.produced = True
        if self.mode == RecordingMode.PREDICT:
            logger.info(f"[Predict] example {self.recorded} ready for the classifier")
        return SessionOutcome.EXPORTED
