"""
exporter.py - Writes a standardized recording to disk

Layout (persisted dataset):
    <root>/<label>_<name>/<date>_<label>_<worker>/Spoints.txt
    <root>/<label>_<name>/<date>_<label>_<worker>/0.png ... (left, then right hand)

Layout (transient, overwritten by every export):
    <root>/temp/Spoints.txt
    <root>/temp/0.png ...
"""

import csv
import logging
import os
from datetime import datetime

import cv2

import config
from frame_collection import FRAME_COLUMNS

logger = logging.getLogger(__name__)


class PersistedExport:
    """Export into the labelled dataset tree"""

    transient = False

    def __init__(self, label, label_name, worker=config.DEFAULT_WORKER, date=None):
        self.label = label
        self.label_name = label_name
        self.worker = worker
        self.date = date

    def directory(self, root):
        """Example folder; a numeric suffix keeps same-second exports apart"""
        date = self.date or datetime.now().strftime(config.DATE_FORMAT)
        base = os.path.join(
            root,
            f"{self.label}_{self.label_name}",
            f"{date}_{self.label}_{self.worker}",
        )
        path = base
        n = 1
        while os.path.exists(path):
            path = f"{base}_{n}"
            n += 1
        return path


class TransientExport:
    """Export into a single shared folder for immediate consumption"""

    transient = True

    def __init__(self, label=None, label_name=""):
        self.label = label
        self.label_name = label_name
        self.worker = ""

    def directory(self, root):
        return os.path.join(root, config.TEMP_FOLDER)


class Exporter:
    """
    Best-effort writer for keypoint logs and hand crops

    A failed artifact is logged and the remaining ones are still written.
    Nothing already written is rolled back.
    """

    def __init__(self, root=config.PATH_DATA_FOLDER, image_offset=config.IMAGE_STANDARD_FRAME_SIZE):
        self.root = root
        self.image_offset = image_offset
        self.saved = 0

    def export(self, policy, frames, lhand_images, rhand_images):
        """
        Args:
            policy: PersistedExport or TransientExport
            frames: standardized keypoint FrameCollection
            lhand_images, rhand_images: standardized ImageFrame collections

        Returns:
            (ok, path) where ok is False if any artifact failed
        """
        path = policy.directory(self.root)
        try:
            os.makedirs(path, exist_ok=True)
        except (OSError, ValueError) as e:
            logger.error(f"{policy.label_name} Record saving ... fail, cannot create {path}: {e}")
            return False, path

        ok = self.write_keypoints(os.path.join(path, config.KEYPOINT_FILE), policy, frames)
        ok = self.write_images(path, lhand_images, 0) and ok
        ok = self.write_images(path, rhand_images, self.image_offset) and ok

        self.saved += 1
        if ok:
            logger.info(f"{policy.label_name} Record saving ... done {self.saved} {path}")
        else:
            logger.error(f"{policy.label_name} Record saving ... fail {self.saved} {path}")
        return ok, path

    def write_keypoints(self, filename, policy, frames):
        try:
            with open(filename, "w", newline="", encoding="utf-8") as f:
                f.write(f"# label: {policy.label}\n")
                f.write(f"# name: {policy.label_name}\n")
                f.write(f"# worker: {policy.worker}\n")
                f.write(f"# frames: {len(frames)}\n")
                w = csv.writer(f, lineterminator="\n")
                w.writerow(FRAME_COLUMNS)
                w.writerows(frames.to_rows())
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write {filename}: {e}")
            return False
        return True

    def write_images(self, path, images, offset):
        ok = True
        for i, frame in enumerate(images):
            filename = os.path.join(path, f"{offset + i}{config.IMAGE_EXT}")
            try:
                written = cv2.imwrite(filename, frame.image)
            except (cv2.error, ValueError) as e:
                logger.error(f"Failed to write {filename}: {e}")
                ok = False
                continue
            if not written:
                logger.error(f"Failed to write {filename}")
                ok = False
        return ok
