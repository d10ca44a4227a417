"""
roi_extractor.py - Square hand crops from the colour frame

The crop is centred on the projected hand position, its side is ROI_SCALE
spine lengths in pixels, and it is resized to IMAGE_WIDTH x IMAGE_HEIGHT.
A region that leaves the image is skipped and the previous crop is kept.
"""

import cv2
import numpy as np

import config


def hand_roi(hand_px, spine_px, scale=config.ROI_SCALE):
    """
    Args:
        hand_px: projected hand position (x, y) in pixels
        spine_px: spine scale in pixels

    Returns:
        (x, y, w, h) integer rectangle, or None if the position is not finite
    """
    if not np.all(np.isfinite(hand_px)) or not np.isfinite(spine_px):
        return None
    width = height = spine_px * scale
    x = hand_px[0] - width / 2
    y = hand_px[1] - height / 2
    # truncate toward zero like an integer pixel rect
    return int(x), int(y), int(width), int(height)


def roi_inside(roi, image_shape):
    x, y, w, h = roi
    rows, cols = image_shape[:2]
    return 0 <= x and 0 <= w and x + w <= cols and 0 <= y and 0 <= h and y + h <= rows


def extract_hand(image, hand_px, spine_px, size=(config.IMAGE_WIDTH, config.IMAGE_HEIGHT)):
    """
    Crop and resize one hand region

    Returns:
        BGR uint8 crop of shape (size[1], size[0], 3), or None when the region
        is empty or not fully inside the image
    """
    if image is None or image.size == 0:
        return None
    roi = hand_roi(hand_px, spine_px)
    if roi is None or not roi_inside(roi, image.shape):
        return None
    x, y, w, h = roi
    if w == 0 or h == 0:
        return None

    patch = image[y:y + h, x:x + w]
    if patch.ndim == 3 and patch.shape[2] == 4:
        patch = cv2.cvtColor(patch, cv2.COLOR_BGRA2BGR)
    elif patch.ndim == 2:
        patch = cv2.cvtColor(patch, cv2.COLOR_GRAY2BGR)
    return cv2.resize(patch, size)


class HandROIExtractor:
    """Keeps the latest valid crop for each hand"""

    def __init__(self, size=(config.IMAGE_WIDTH, config.IMAGE_HEIGHT)):
        self.size = size
        blank = np.zeros((size[1], size[0], 3), dtype=np.uint8)
        self.crops = [blank, blank.copy()]

    @property
    def left(self):
        return self.crops[0]

    @property
    def right(self):
        return self.crops[1]

    def update(self, image, mapper, hand_positions, spine_px):
        """
        Args:
            image: BGRA/BGR colour frame
            mapper: camera -> colour projection
            hand_positions: (left, right) smoothed camera points
            spine_px: spine scale in pixels

        Returns:
            (left_updated, right_updated) flags
        """
        updated = [False, False]
        if image is None or mapper is None:
            return tuple(updated)
        for i, position in enumerate(hand_positions):
            hand_px = mapper.map_camera_to_color(position)
            crop = extract_hand(image, hand_px, spine_px, self.size)
            if crop is not None:
                self.crops[i] = crop
                updated[i] = True
        return tuple(updated)
