"""Forward and backward reaching passes.

Each pass walks the chain once and re-projects every joint onto the sphere
of radius lengths[k] around its already placed neighbour, so all segment
lengths hold exactly when a pass completes.
"""

import numpy as np

from .geometry import direction
from .state import ChainState


def apply_targets(state: ChainState) -> None:
    """Overwrite every targeted joint with its target position."""
    for index, position in state.targets:
        state.joints[index] = position


def forward_reach(state: ChainState) -> None:
    """Sweep from the end effector to the root, fixing each earlier joint.

    For i = n-1 ... 1, joints[i-1] is moved along its current direction from
    joints[i] until it lies lengths[i-1] away.
    """
    joints = state.joints
    for i in range(state.n_joints - 1, 0, -1):
        k = i - 1
        unit = direction(joints[i], joints[k], fallback=-state.rest_directions[k], index=k)
        joints[k] = joints[i] + unit * state.lengths[k]


def backward_reach(state: ChainState) -> None:
    """Sweep from the root to the end effector, fixing each later joint.

    For i = 0 ... n-2, joints[i+1] is moved along its current direction from
    joints[i] until it lies lengths[i] away.
    """
    joints = state.joints
    for i in range(state.n_segments):
        unit = direction(joints[i], joints[i + 1], fallback=state.rest_directions[i], index=i)
        joints[i + 1] = joints[i] + unit * state.lengths[i]


def anchor_root(state: ChainState) -> None:
    """Pin the root joint to the world origin."""
    state.joints[0] = np.zeros(3)
