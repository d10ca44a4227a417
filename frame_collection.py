"""
frame_collection.py - Timestamped sample buffers and fixed-length resampling

Usage:
    from frame_collection import Frame, FrameCollection

    frames = FrameCollection(standard_size=35)
    frames.stack_frame(Frame(t, lhand, rhand, spoints, l_on, r_on))
    frames.standardize(record_start_time)
    ok = frames.is_standard()
"""

import numpy as np

from skeletal_points import spoint_columns

FRAME_COLUMNS = [
    "timestamp", "l_activated", "r_activated",
    "lhand_x", "lhand_y", "lhand_z",
    "rhand_x", "rhand_y", "rhand_z",
    *spoint_columns(),
]


class Frame:
    """Keypoint sample: both hands, all landmarks and activation flags"""

    def __init__(self, timestamp, lhand, rhand, spoints, l_activated, r_activated):
        self.timestamp = int(timestamp)
        self.lhand = np.array(lhand, dtype=np.float64)
        self.rhand = np.array(rhand, dtype=np.float64)
        self.spoints = spoints.snapshot()
        self.l_activated = bool(l_activated)
        self.r_activated = bool(r_activated)

    def to_row(self):
        return [
            self.timestamp, int(self.l_activated), int(self.r_activated),
            *self.lhand.tolist(), *self.rhand.tolist(),
            *self.spoints.flatten().tolist(),
        ]


class ImageFrame:
    """One hand crop captured at a tick"""

    def __init__(self, timestamp, image):
        self.timestamp = int(timestamp)
        self.image = image.copy()


class FrameCollection:
    """
    Ordered samples of one recording, resampled to standard_size on demand

    Args:
        standard_size: number of samples after standardization
        label: label id the recording belongs to
    """

    def __init__(self, standard_size, label=None):
        if standard_size < 1:
            raise ValueError(f"standard_size must be positive, got {standard_size}")
        self.standard_size = standard_size
        self.label = label
        self.samples = []

    def __len__(self):
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    def __getitem__(self, index):
        return self.samples[index]

    def stack_frame(self, sample):
        if self.samples and sample.timestamp < self.samples[-1].timestamp:
            raise ValueError(
                f"timestamp {sample.timestamp} is older than the last sample "
                f"({self.samples[-1].timestamp})"
            )
        self.samples.append(sample)

    def last_frame(self):
        return self.samples[-1] if self.samples else None

    def clear(self):
        self.samples = []

    def is_standard(self):
        return len(self.samples) == self.standard_size

    def timestamps(self):
        return [s.timestamp for s in self.samples]

    def standardize(self, start_time):
        """
        Resample the recording to standard_size samples in place

        Output sample k is the captured sample nearest to the synthetic
        timestamp start_time + k * step, with step spreading the synthetic
        timestamps evenly up to the last captured timestamp. Samples are
        duplicated or dropped as needed.

        The synthetic timestamp is accumulated step by step. When rounding
        pushes the final one past the last captured timestamp it is not
        emitted and the collection ends up one sample short; callers detect
        this with is_standard().
        """
        if not self.samples:
            return
        size = self.standard_size
        end_time = self.samples[-1].timestamp
        step = (end_time - start_time) / (size - 1) if size > 1 else 0.0

        standardized = []
        last = len(self.samples) - 1
        index = 0
        synthetic = float(start_time)
        for _ in range(size):
            if synthetic > end_time:
                break
            while (index < last and abs(self.samples[index + 1].timestamp - synthetic)
                   <= abs(self.samples[index].timestamp - synthetic)):
                index += 1
            standardized.append(self.samples[index])
            synthetic += step

        self.samples = standardized

    def to_rows(self):
        """Keypoint rows, one per Frame (keypoint collections only)"""
        return [frame.to_row() for frame in self.samples]

    def images(self):
        """Stacked crops, one per ImageFrame (image collections only)"""
        return np.stack([frame.image for frame in self.samples]) if self.samples else None
