"""Constants used throughout the chain solver."""

import numpy as np

# Numerical tolerances
LENGTH_TOLERANCE = 1e-5
EPSILON_FLOAT32 = 1e-5
EPSILON_FLOAT64 = 1e-10

# Default solver parameters
DEFAULT_ITERATIONS = 10
MIN_ELAPSED_TIME = 1e-6  # [s], floor for the velocity finite difference
MILD_DIVERGENCE_BLEND = 0.5

# Segment frame conventions
WORLD_UP = np.array([0.0, 1.0, 0.0])
FALLBACK_AXIS = np.array([1.0, 0.0, 0.0])  # Replaces WORLD_UP for vertical segments
SEGMENT_CORRECTION_ANGLE = np.pi / 2  # About local Z, segment assets are modelled along Y
STRAIGHT_ANGLE = np.pi


def get_epsilon(dtype: np.dtype) -> float:
    """Get numerical epsilon for a given dtype."""
    return {
        np.dtype("float32"): EPSILON_FLOAT32,
        np.dtype("float64"): EPSILON_FLOAT64,
    }.get(dtype, EPSILON_FLOAT64)
