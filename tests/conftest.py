import numpy as np
import pytest

from limb_ik import KinematicChain


class FakeClock:
    """Manually advanced clock in seconds."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


STRAIGHT_JOINTS = [
    [0.0, 0.0, 0.0],
    [1.0, 0.0, 0.0],
    [2.0, 0.0, 0.0],
    [3.0, 0.0, 0.0],
    [4.0, 0.0, 0.0],
]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def straight_joints():
    return np.array(STRAIGHT_JOINTS)


@pytest.fixture
def chain(clock):
    return KinematicChain(STRAIGHT_JOINTS, clock=clock)
