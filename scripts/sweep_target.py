"""Headless host loop: sweep the end effector around a circle and log velocities.

Run from the repository root:
    python scripts/sweep_target.py --ticks 120
"""

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))
from limb_ik import KinematicChain, PoseDiscrepancy, VelocityHistory

logger = logging.getLogger("sweep_target")

# --- Constants ---
JOINTS = [
    [0.0, 0.0, 0.0],
    [1.0, 0.0, 0.0],
    [2.0, 0.0, 0.0],
    [3.0, 0.0, 0.0],
    [4.0, 0.0, 0.0],
]
DT = 1.0 / 60.0  # 60 Hz update tick
RADIUS = 1.0
CENTER = np.array([3.0, 0.5, 0.0])
COMMIT_EVERY = 30  # ticks between preview commits


class SweepController:
    def __init__(self, iterations: int, ground_lock: bool = True):
        self.iterations = iterations
        self.chain = KinematicChain(JOINTS, ground_lock=ground_lock)
        self.history = VelocityHistory()
        self.phase = 0.0

    def target(self) -> np.ndarray:
        return CENTER + RADIUS * np.array([np.cos(self.phase), np.sin(self.phase), 0.0])

    def control_step(self, tick: int) -> None:
        # Targets are replaced every tick, never accumulated
        self.chain.set_targets([(self.chain.state.n_joints - 1, self.target())])
        self.chain.solve(self.iterations, PoseDiscrepancy.WITHIN_TOLERANCE)
        self.history.record(self.chain.angular_velocities)

        if tick % COMMIT_EVERY == 0:
            self.chain.commit()

        error = np.linalg.norm(self.chain.end_effector - self.target())
        logger.info(
            "tick %4d  ee=%s  error=%.2e  max|w|=%.3f rad/s",
            tick,
            np.round(self.chain.end_effector, 3),
            error,
            float(np.max(np.abs(self.chain.angular_velocities), initial=0.0)),
        )
        self.phase += 2.0 * np.pi * DT

    def run(self, ticks: int) -> None:
        for tick in range(ticks):
            started = time.perf_counter()
            self.control_step(tick)
            time.sleep(max(0.0, DT - (time.perf_counter() - started)))

        peak = np.abs(self.history.as_array()).max() if len(self.history) else 0.0
        logger.info("Recorded %d velocity samples, peak %.3f rad/s", len(self.history), peak)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--ticks", type=int, default=120)
    parser.add_argument("--iterations", type=int, default=10)
    parser.add_argument("--free-root", action="store_true", help="disable ground lock")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(name)s] %(levelname)s: %(message)s",
    )
    SweepController(args.iterations, ground_lock=not args.free_root).run(args.ticks)


if __name__ == "__main__":
    main()
