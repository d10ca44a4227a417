import numpy as np
import pytest

from conftest import make_body
from lp_filt import HandPositionSmoother, LerpFilter, lerp


def test_lerp():
    assert np.allclose(lerp((0, 0, 0), (10, 20, -10), 0.3), (3, 6, -3))
    assert np.allclose(lerp((1, 1, 1), (5, 5, 5), 1.0), (5, 5, 5))


@pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5])
def test_invalid_alpha(alpha):
    with pytest.raises(ValueError):
        LerpFilter(alpha)


def test_first_sample_seeds():
    f = LerpFilter(0.3)
    assert np.allclose(f.update((1, 2, 3)), (1, 2, 3))
    assert np.allclose(f.update((2, 2, 3)), (1.3, 2, 3))
    f.reset()
    assert np.allclose(f.update((9, 9, 9)), (9, 9, 9))


def test_converges_to_constant_input():
    f = LerpFilter(0.3)
    f.update((0, 0, 0))
    for _ in range(100):
        value = f.update((1, 1, 1))
    assert np.allclose(value, (1, 1, 1))


def test_smoother_tracks_hand_joints():
    smoother = HandPositionSmoother(0.5)
    left, right = smoother.update(make_body())
    assert np.allclose(left, (-0.2, -0.4, 2.0))
    assert np.allclose(right, (0.2, -0.4, 2.0))

    left, _ = smoother.update(make_body(left_raised=True))
    assert np.allclose(left, (-0.2, -0.1, 2.0))


def test_untracked_hand_keeps_position():
    smoother = HandPositionSmoother(0.5)
    smoother.update(make_body())
    left, right = smoother.update(make_body(left_raised=True, hands_tracked=False))
    assert np.allclose(left, (-0.2, -0.4, 2.0))
    assert np.allclose(right, (0.2, -0.4, 2.0))


def test_smoother_reset():
    smoother = HandPositionSmoother()
    smoother.update(make_body())
    smoother.reset()
    assert smoother.left.tolist() == [0.0, 0.0, 0.0]
