import numpy as np
from numpy.typing import NDArray


NORMAL_ARROW_LENGTH = 1.0


def to_plot_coords(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Map Y-up world points (x, y, z) to matplotlib's Z-up axes as (x, -z, y)."""
    points = np.asarray(points, dtype=np.float64)
    return np.stack([points[..., 0], -points[..., 2], points[..., 1]], axis=-1)


def normal_arrow_segments(
    vertices: NDArray[np.float64],
    normals: NDArray[np.float64],
    offset=(0.0, 0.0, 0.0),
    length: float = NORMAL_ARROW_LENGTH,
) -> NDArray[np.float64]:
    """
    Line segments from each vertex along its normal, in world space.

    Returns an N x 2 x 3 array. Vertices with a zero normal are skipped, so N
    can be smaller than the vertex count.
    """
    vertices = np.asarray(vertices, dtype=np.float64)
    normals = np.asarray(normals, dtype=np.float64)
    if vertices.shape != normals.shape:
        raise ValueError(f"Vertices {vertices.shape} and normals {normals.shape} must be index-aligned")

    visible = np.any(normals != 0.0, axis=1)
    starts = vertices[visible] + np.asarray(offset, dtype=np.float64)
    ends = starts + length * normals[visible]
    return np.stack([starts, ends], axis=1)
