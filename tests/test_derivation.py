import numpy as np
import pytest

from limb_ik import MIN_ELAPSED_TIME, ChainState
from limb_ik.derivation import (
    derive_angular_velocities,
    derive_segment_frames,
    recalculate_angles,
    segment_rotation,
)

LOCAL_AXIS = np.array([0.0, 1.0, 0.0])


def test_straight_chain_is_straight_everywhere(straight_joints):
    state = ChainState.from_joints(straight_joints)
    angles = recalculate_angles(state)
    np.testing.assert_allclose(angles, np.full(5, np.pi))
    assert angles[0] == np.pi
    assert angles[-1] == np.pi


def test_right_angle_bend():
    state = ChainState.from_joints([[0, 0, 0], [1, 0, 0], [1, 1, 0]])
    angles = recalculate_angles(state)
    assert angles[0] == np.pi
    assert angles[1] == pytest.approx(np.pi / 2)
    assert angles[2] == np.pi


def test_two_joint_chain_has_only_boundaries():
    state = ChainState.from_joints([[0, 0, 0], [0, 0, 2]])
    np.testing.assert_array_equal(recalculate_angles(state), [np.pi, np.pi])


def test_recalculation_keeps_previous_set(straight_joints):
    state = ChainState.from_joints(straight_joints)
    recalculate_angles(state)
    first = state.angles
    state.joints[4] = [3.0, 1.0, 0.0]
    recalculate_angles(state)
    assert state.prev_angles is first
    assert state.angles[3] == pytest.approx(np.pi / 2)


def test_first_velocity_derivation_is_empty(straight_joints):
    state = ChainState.from_joints(straight_joints, now=1.0)
    recalculate_angles(state)
    velocities = derive_angular_velocities(state, now=2.0)
    assert velocities.shape == (0,)
    assert state.last_update_time == 2.0


def test_velocity_is_angle_change_over_elapsed(straight_joints):
    state = ChainState.from_joints(straight_joints, now=1.0)
    recalculate_angles(state)
    state.joints[4] = [3.0, 1.0, 0.0]
    recalculate_angles(state)

    velocities = derive_angular_velocities(state, now=1.5)

    expected = np.zeros(5)
    expected[3] = (np.pi / 2 - np.pi) / 0.5
    np.testing.assert_allclose(velocities, expected)


def test_zero_elapsed_is_clamped(straight_joints):
    state = ChainState.from_joints(straight_joints, now=3.0)
    recalculate_angles(state)
    state.joints[4] = [3.0, 1.0, 0.0]
    recalculate_angles(state)

    velocities = derive_angular_velocities(state, now=3.0)

    assert np.all(np.isfinite(velocities))
    assert velocities[3] == pytest.approx(-(np.pi / 2) / MIN_ELAPSED_TIME)


def test_frames_sit_at_segment_midpoints(straight_joints):
    state = ChainState.from_joints(straight_joints)
    transforms = derive_segment_frames(state)
    assert len(transforms) == 4
    assert state.segment_transforms is transforms
    for k, transform in enumerate(transforms):
        np.testing.assert_allclose(transform.translation, [k + 0.5, 0.0, 0.0])


def test_frame_local_axis_follows_segment():
    state = ChainState.from_joints([[0, 0, 0], [1, 0, 0], [1, 0, 2], [0, 3, 2]])
    for k, transform in enumerate(derive_segment_frames(state)):
        along = state.joints[k + 1] - state.joints[k]
        along /= np.linalg.norm(along)
        np.testing.assert_allclose(transform.rotation.apply(LOCAL_AXIS), along, atol=1e-9)


@pytest.mark.parametrize("vertical", [[0.0, 1.0, 0.0], [0.0, -1.0, 0.0]])
def test_vertical_segment_has_defined_frame(vertical):
    state = ChainState.from_joints([[0.0, 0.0, 0.0], vertical])
    (transform,) = derive_segment_frames(state)

    assert transform.is_finite()
    matrix = transform.rotation.as_matrix()
    np.testing.assert_allclose(matrix @ matrix.T, np.eye(3), atol=1e-9)
    assert np.linalg.det(matrix) == pytest.approx(1.0)
    np.testing.assert_allclose(transform.rotation.apply(LOCAL_AXIS), vertical, atol=1e-9)


def test_segment_rotation_is_proper_for_arbitrary_direction():
    unit = np.array([1.0, 2.0, -2.0]) / 3.0
    matrix = segment_rotation(unit).as_matrix()
    np.testing.assert_allclose(matrix.T @ matrix, np.eye(3), atol=1e-9)
    np.testing.assert_allclose(matrix @ LOCAL_AXIS, -unit, atol=1e-9)


def test_collapsed_segment_angles_and_frames_use_rest_direction(straight_joints, caplog):
    state = ChainState.from_joints(straight_joints)
    state.joints[2] = state.joints[1].copy()

    with caplog.at_level("WARNING"):
        angles = recalculate_angles(state)
        frames = derive_segment_frames(state)

    assert np.all(np.isfinite(angles))
    np.testing.assert_allclose(angles, np.full(5, np.pi))
    assert len(frames) == 4
    assert all(transform.is_finite() for transform in frames)
    np.testing.assert_allclose(frames[1].rotation.apply(LOCAL_AXIS), [1.0, 0.0, 0.0], atol=1e-9)
    assert "Segment 1" in caplog.text
