import numpy as np
import pytest

from frame_collection import FRAME_COLUMNS, Frame, FrameCollection, ImageFrame
from skeletal_points import SkeletalPointSet


def stamped(timestamps, standard_size=35):
    collection = FrameCollection(standard_size)
    image = np.zeros((4, 4, 3), dtype=np.uint8)
    for t in timestamps:
        collection.stack_frame(ImageFrame(t, image))
    return collection


def test_invalid_standard_size():
    with pytest.raises(ValueError):
        FrameCollection(0)


def test_stack_rejects_older_timestamp():
    collection = stamped([0, 10])
    with pytest.raises(ValueError):
        collection.stack_frame(ImageFrame(5, np.zeros((4, 4, 3), dtype=np.uint8)))
    assert collection.timestamps() == [0, 10]


def test_equal_timestamps_allowed():
    collection = stamped([0, 10, 10])
    assert len(collection) == 3


def test_standardize_downsample_40_frames():
    collection = stamped(range(0, 4000, 100))
    collection.standardize(0)

    ts = collection.timestamps()
    assert collection.is_standard()
    assert ts[0] == 0
    assert ts[-1] <= 3900
    assert ts == sorted(ts)


def test_standardize_upsample_duplicates():
    timestamps = [i * 34 for i in range(20)]
    collection = stamped(timestamps)
    collection.standardize(0)

    ts = collection.timestamps()
    assert len(ts) == 35
    assert set(ts) <= set(timestamps)
    assert ts == sorted(ts)
    assert len(set(ts)) < len(ts)


def test_standardize_picks_nearest():
    collection = stamped([0, 10, 100], standard_size=3)
    collection.standardize(0)
    assert collection.timestamps() == [0, 10, 100]


def test_standardize_tie_takes_later_sample():
    collection = stamped([0, 40, 60, 100], standard_size=3)
    collection.standardize(0)
    assert collection.timestamps() == [0, 60, 100]


@pytest.mark.parametrize("count", [19, 20])
def test_standardize_can_end_one_short(count):
    # 33 ms spacing accumulates rounding past the last timestamp
    collection = stamped([i * 33 for i in range(count)])
    collection.standardize(0)
    assert len(collection) == 34
    assert not collection.is_standard()


def test_standardize_empty_is_noop():
    collection = FrameCollection(35)
    collection.standardize(0)
    assert len(collection) == 0


def test_standard_size_one():
    collection = stamped([0, 5, 9], standard_size=1)
    collection.standardize(0)
    assert collection.timestamps() == [0]


def test_clear_and_last_frame():
    collection = stamped([0, 10])
    assert collection.last_frame().timestamp == 10
    collection.clear()
    assert collection.last_frame() is None
    assert len(collection) == 0


def test_frame_row_layout():
    spoints = SkeletalPointSet()
    spoints.points[:] = 1.5
    frame = Frame(42, (1, 2, 3), (4, 5, 6), spoints, True, False)
    spoints.points[:] = 0.0  # snapshot is independent

    row = frame.to_row()
    assert len(row) == len(FRAME_COLUMNS)
    assert row[:9] == [42, 1, 0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    assert all(v == 1.5 for v in row[9:])


def test_image_frame_copies():
    image = np.zeros((4, 4, 3), dtype=np.uint8)
    frame = ImageFrame(0, image)
    image[:] = 255
    assert frame.image.max() == 0


def test_images_stack():
    collection = stamped([0, 1, 2])
    assert collection.images().shape == (3, 4, 4, 3)
    assert FrameCollection(3).images() is None
