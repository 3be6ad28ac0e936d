"""
Per-corner weight functions for vertex normal accumulation.

A weight function takes an F x 3 x 3 array of triangle corner positions and a
corner index (0, 1 or 2) and returns an array of F weights: how much each
triangle's face normal counts toward the vertex sitting at that corner.
"""

from typing import Callable

import numpy as np
from numpy.typing import NDArray

from .geometry import corner_angles_vectorized


WeightFunction = Callable[[NDArray[np.float64], int], NDArray[np.float64]]


def angle_weight(triangles: NDArray[np.float64], corner: int) -> NDArray[np.float64]:
    """Interior angle at the corner, in raw radians."""
    return corner_angles_vectorized(triangles)[:, corner]


def uniform_weight(triangles: NDArray[np.float64], corner: int) -> NDArray[np.float64]:
    """Every incident face counts equally."""
    return np.ones(len(triangles), dtype=np.float64)


POLICIES = {
    "face_weighted": angle_weight,
    "smooth": uniform_weight,
}


def get_weight_function(policy: str) -> WeightFunction:
    if policy not in POLICIES:
        raise ValueError(f"Unknown normal policy '{policy}'. Available policies: {', '.join(POLICIES)}")
    return POLICIES[policy]
