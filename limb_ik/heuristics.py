"""Auxiliary motion heuristics carried alongside a chain.

The solver never interprets these values; they are copied with the chain
through commit and reset so a host can attach its own priorities.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .lie import SO3

# (joint index, anchor position, anchor orientation)
AnchorPoint = Tuple[int, np.ndarray, SO3]
# (joint index, parent joint index, priority)
ParentRank = Tuple[int, int, int]


@dataclass
class MotionHeuristics:
    """Anchor points and parent-priority ranking for a chain."""

    anchor_points: List[AnchorPoint] = field(default_factory=list)
    parent_ranking: List[ParentRank] = field(default_factory=list)

    def copy(self) -> MotionHeuristics:
        return copy.deepcopy(self)
