"""
Geometry primitives shared by the vertex normal estimators.
"""

import numpy as np
from numpy.typing import NDArray
import trimesh


def unitize(vectors: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalize vectors along the last axis, mapping zero-length rows to exactly zero."""
    vectors = np.asarray(vectors, dtype=np.float64)
    lengths = np.linalg.norm(vectors, axis=-1, keepdims=True)
    unit = np.zeros_like(vectors)
    np.divide(vectors, lengths, out=unit, where=lengths > 0.0)
    return unit


def face_normal(pa: NDArray[np.float64], pb: NDArray[np.float64], pc: NDArray[np.float64]) -> NDArray[np.float64]:
    """Unit normal of triangle (pa, pb, pc) by the right-hand rule, or zero for a degenerate triangle."""
    return face_normals_vectorized(np.array([[pa, pb, pc]], dtype=np.float64))[0]


def face_normals_vectorized(triangles: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Unit normals for an F x 3 x 3 array of triangle corner positions.

    Triangles whose cross product has zero length (coincident or exactly
    collinear corners) get the zero vector. Any triangle with nonzero area,
    however thin or small, keeps its unit normal.
    """
    triangles = np.asarray(triangles, dtype=np.float64)
    edge_ab = triangles[:, 1] - triangles[:, 0]
    edge_ac = triangles[:, 2] - triangles[:, 0]
    cross = np.cross(edge_ab, edge_ac)

    cross_lengths = np.linalg.norm(cross, axis=1)
    valid = cross_lengths > 0.0

    normals = np.zeros_like(cross)
    normals[valid] = cross[valid] / cross_lengths[valid, np.newaxis]
    return normals


def corner_angle(triangle: NDArray[np.float64], corner: int) -> float:
    """Interior angle (radians) of a 3 x 3 triangle at corner 0, 1 or 2."""
    return float(corner_angles_vectorized(np.asarray(triangle, dtype=np.float64)[np.newaxis])[0, corner])


def corner_angles_vectorized(triangles: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Interior angles for an F x 3 x 3 array of triangles.

    Returns an F x 3 array where column k is the angle between the two edges
    leaving corner k, computed as atan2(|e1 x e2|, e1 . e2) so needle corners
    keep their tiny angle instead of rounding to zero. A zero-length edge
    yields 0 rather than NaN; such triangles have a zero face normal anyway.
    """
    triangles = np.asarray(triangles, dtype=np.float64)
    num_faces = len(triangles)
    angles = np.zeros((num_faces, 3), dtype=np.float64)
    if num_faces == 0:
        return angles

    for corner in range(3):
        origin = triangles[:, corner]
        edge_next = triangles[:, (corner + 1) % 3] - origin
        edge_prev = triangles[:, (corner + 2) % 3] - origin
        sines = np.linalg.norm(np.cross(edge_next, edge_prev), axis=1)
        cosines = trimesh.util.diagonal_dot(edge_next, edge_prev)
        angles[:, corner] = np.arctan2(sines, cosines)
    return angles
