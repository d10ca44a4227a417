import numpy as np

from conftest import MAPPER, make_image
from roi_extractor import HandROIExtractor, extract_hand, hand_roi, roi_inside


def test_hand_roi_truncates():
    assert hand_roi((270.0, 340.0), 75.0) == (226, 296, 86, 86)
    assert hand_roi((np.nan, 10.0), 75.0) is None


def test_roi_inside():
    shape = (480, 640, 4)
    assert roi_inside((0, 0, 640, 480), shape)
    assert not roi_inside((-1, 0, 10, 10), shape)
    assert not roi_inside((600, 0, 41, 10), shape)
    assert not roi_inside((0, 475, 10, 6), shape)


def test_extract_hand_converts_and_resizes():
    crop = extract_hand(make_image((10, 20, 30, 255)), (320.0, 240.0), 75.0, (64, 64))
    assert crop.shape == (64, 64, 3)
    assert crop.dtype == np.uint8
    assert tuple(crop[0, 0]) == (10, 20, 30)


def test_extract_hand_rejects_bad_regions():
    image = make_image()
    assert extract_hand(image, (5.0, 240.0), 75.0) is None
    assert extract_hand(image, (320.0, 240.0), 0.0) is None
    assert extract_hand(np.zeros((0, 0, 4), dtype=np.uint8), (0.0, 0.0), 75.0) is None


def test_initial_crops_are_black():
    roi = HandROIExtractor((64, 64))
    assert roi.left.shape == (64, 64, 3)
    assert roi.left.max() == 0 and roi.right.max() == 0


def test_update_is_idempotent():
    roi = HandROIExtractor((64, 64))
    image = make_image((50, 60, 70, 255))
    hands = (np.array([-0.2, -0.4, 2.0]), np.array([0.2, -0.4, 2.0]))

    assert roi.update(image, MAPPER, hands, 75.0) == (True, True)
    first = roi.left.copy()
    roi.update(image, MAPPER, hands, 75.0)
    assert np.array_equal(first, roi.left)


def test_out_of_bounds_keeps_previous_crop():
    roi = HandROIExtractor((64, 64))
    hands = (np.array([-0.2, -0.4, 2.0]), np.array([0.2, -0.4, 2.0]))
    roi.update(make_image((50, 60, 70, 255)), MAPPER, hands, 75.0)
    kept = roi.left.copy()

    # left hand projected off the left edge
    off_frame = (np.array([-1.5, -0.4, 2.0]), np.array([0.2, -0.4, 2.0]))
    updated = roi.update(make_image((1, 2, 3, 255)), MAPPER, off_frame, 75.0)
    assert updated == (False, True)
    assert np.array_equal(roi.left, kept)
    assert tuple(roi.right[0, 0]) == (1, 2, 3)


def test_missing_frame_keeps_crops():
    roi = HandROIExtractor((64, 64))
    assert roi.update(None, MAPPER, (np.zeros(3), np.zeros(3)), 75.0) == (False, False)
