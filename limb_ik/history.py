"""Per-tick angular velocity recording for plotting hosts."""

from typing import List, Tuple

import numpy as np
import numpy.typing as npt


class VelocityHistory:
    """Accumulates the angular velocities produced by successive solves.

    Empty velocity vectors (ticks without a previous angle set) are skipped,
    so tick numbers count recorded samples only.
    """

    def __init__(self):
        self._samples: List[np.ndarray] = []

    def __len__(self) -> int:
        return len(self._samples)

    def record(self, velocities: npt.ArrayLike) -> bool:
        """Append one tick of velocities.

        Returns:
            True if the sample was recorded, False if it was empty.
        """
        sample = np.array(velocities, dtype=np.float64).reshape(-1)
        if sample.size == 0:
            return False
        self._samples.append(sample)
        return True

    def clear(self) -> None:
        self._samples.clear()

    def series(self) -> List[List[Tuple[int, float]]]:
        """Regroup samples into one (tick, value) series per joint.

        Samples of different widths are tolerated: a joint's series only
        contains the ticks that reported it.
        """
        series: List[List[Tuple[int, float]]] = []
        for tick, sample in enumerate(self._samples):
            for joint, value in enumerate(sample):
                if joint == len(series):
                    series.append([])
                series[joint].append((tick, float(value)))
        return series

    def as_array(self) -> np.ndarray:
        """Samples stacked into shape (ticks, joints).

        Raises:
            ValueError: If the recorded samples differ in width.
        """
        if not self._samples:
            return np.zeros((0, 0))
        return np.vstack(self._samples)
