import numpy as np
import pytest

from limb_ik import ChainState, LENGTH_TOLERANCE
from limb_ik.reach import anchor_root, apply_targets, backward_reach, forward_reach

ZIGZAG = [
    [0.0, 0.0, 0.0],
    [1.0, 1.0, 0.0],
    [2.0, 0.0, 0.5],
    [2.5, -1.0, 1.0],
    [4.0, 0.0, 0.0],
    [4.0, 2.0, 1.0],
]


@pytest.fixture
def zigzag():
    return ChainState.from_joints(ZIGZAG)


def assert_lengths_kept(state):
    np.testing.assert_allclose(state.segment_lengths(), state.lengths, atol=LENGTH_TOLERANCE)


@pytest.mark.parametrize("end", [[10.0, -3.0, 2.0], [0.5, 0.5, 0.5], [-4.0, 1.0, 7.0]])
def test_forward_pass_keeps_lengths(zigzag, end):
    zigzag.joints[-1] = end
    forward_reach(zigzag)
    assert_lengths_kept(zigzag)
    np.testing.assert_array_equal(zigzag.joints[-1], end)


@pytest.mark.parametrize("root", [[1.0, 1.0, 1.0], [-2.0, 0.0, 3.0]])
def test_backward_pass_keeps_lengths(zigzag, root):
    zigzag.joints[0] = root
    backward_reach(zigzag)
    assert_lengths_kept(zigzag)
    np.testing.assert_array_equal(zigzag.joints[0], root)


def test_alternating_passes_keep_lengths(zigzag):
    zigzag.targets = [(5, np.array([1.0, 3.0, -1.0]))]
    for _ in range(5):
        apply_targets(zigzag)
        forward_reach(zigzag)
        assert_lengths_kept(zigzag)
        anchor_root(zigzag)
        backward_reach(zigzag)
        assert_lengths_kept(zigzag)


def test_apply_targets_overwrites_joints(zigzag):
    zigzag.targets = [(2, np.array([7.0, 7.0, 7.0])), (4, np.array([1.0, 2.0, 3.0]))]
    apply_targets(zigzag)
    np.testing.assert_array_equal(zigzag.joints[2], [7.0, 7.0, 7.0])
    np.testing.assert_array_equal(zigzag.joints[4], [1.0, 2.0, 3.0])


def test_anchor_root_pins_origin(zigzag):
    zigzag.joints[0] = [3.0, 2.0, 1.0]
    anchor_root(zigzag)
    np.testing.assert_array_equal(zigzag.joints[0], np.zeros(3))


def test_collapsed_segment_uses_rest_direction(straight_joints, caplog):
    state = ChainState.from_joints(straight_joints)
    state.joints[3] = state.joints[4].copy()

    with caplog.at_level("WARNING"):
        forward_reach(state)

    assert np.all(np.isfinite(state.joints))
    np.testing.assert_allclose(state.joints[3], [3.0, 0.0, 0.0])
    assert_lengths_kept(state)
    assert "Segment 3" in caplog.text


def test_collapsed_segment_backward(straight_joints):
    state = ChainState.from_joints(straight_joints)
    state.joints[2] = state.joints[1].copy()
    backward_reach(state)
    assert np.all(np.isfinite(state.joints))
    np.testing.assert_allclose(state.joints[2], [2.0, 0.0, 0.0])
    assert_lengths_kept(state)
