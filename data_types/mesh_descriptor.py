from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import NDArray
import trimesh

from .errors import MalformedTopologyError, MissingAttributeError


def validate_topology(vertices, faces):
    """
    Coerce vertices and faces into (V, 3) finite float and (F, 3) int arrays and check
    that every face index points at an existing vertex.

    Returns fresh copies of both arrays, so callers never alias the input.
    """
    vertices = np.array(vertices, dtype=np.float64)
    if vertices.size == 0:
        vertices = vertices.reshape(0, 3)
    if vertices.ndim != 2 or vertices.shape[1] != 3:
        raise MalformedTopologyError(f"Vertices must be a V x 3 array, got shape {vertices.shape}")
    if not np.all(np.isfinite(vertices)):
        bad_vertex = int(np.where(~np.all(np.isfinite(vertices), axis=1))[0][0])
        raise MalformedTopologyError(
            f"Vertex {bad_vertex} has a non-finite position {vertices[bad_vertex].tolist()}"
        )

    faces = np.array(faces)
    if faces.size == 0:
        faces = faces.reshape(0, 3).astype(np.int64)
    if faces.ndim != 2 or faces.shape[1] != 3:
        raise MalformedTopologyError(f"Faces must be an F x 3 array, got shape {faces.shape}")
    if not np.issubdtype(faces.dtype, np.integer):
        raise MalformedTopologyError(f"Face indices must be integers, got dtype {faces.dtype}")
    faces = faces.astype(np.int64)

    out_of_range = (faces < 0) | (faces >= len(vertices))
    if np.any(out_of_range):
        bad_face = int(np.where(np.any(out_of_range, axis=1))[0][0])
        raise MalformedTopologyError(
            f"Face {bad_face} {faces[bad_face].tolist()} references a vertex outside 0-{len(vertices) - 1}"
        )

    return vertices, faces


@dataclass(eq=False)
class MeshDescriptor:
    vertices: NDArray[np.float64]  # V x 3 array of vertex positions
    faces: NDArray[np.int64]  # F x 3 array of vertex *indices* which are face corners
    normals: Optional[NDArray[np.float64]] = field(default=None)  # V x 3, set by a normal estimator

    def __post_init__(self):
        self.vertices, self.faces = validate_topology(self.vertices, self.faces)
        if self.normals is not None:
            normals = self.normals
            self.normals = None
            self.set_normals(normals)

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    @property
    def num_faces(self) -> int:
        return len(self.faces)

    def copy(self) -> "MeshDescriptor":
        """Deep copy; the clone shares no arrays with this mesh."""
        return MeshDescriptor(
            vertices=self.vertices.copy(),
            faces=self.faces.copy(),
            normals=None if self.normals is None else self.normals.copy(),
        )

    def set_normals(self, normals: NDArray[np.float64]) -> None:
        """Attach or replace the per-vertex normal attribute wholesale."""
        normals = np.array(normals, dtype=np.float64)
        if normals.shape != self.vertices.shape:
            raise MalformedTopologyError(
                f"Normals must match the vertex array shape {self.vertices.shape}, got {normals.shape}"
            )
        self.normals = normals

    def normal(self, index: int) -> NDArray[np.float64]:
        if self.normals is None:
            raise MissingAttributeError("Vertex normals have not been computed for this mesh")
        return self.normals[index]

    def split_vertices(self) -> "MeshDescriptor":
        """
        Return a mesh where every face owns its own three corners.

        Vertex i of face f in the result is vertex 3 * f + i. Normals are dropped,
        since they have to be recomputed for the new topology.
        """
        split_vertices = self.vertices[self.faces].reshape(-1, 3)
        split_faces = np.arange(len(split_vertices), dtype=np.int64).reshape(-1, 3)
        return MeshDescriptor(vertices=split_vertices, faces=split_faces)

    def to_trimesh(self) -> trimesh.Trimesh:
        # process=False keeps vertex order and degenerate faces intact
        mesh = trimesh.Trimesh(vertices=self.vertices.copy(), faces=self.faces.copy(), process=False)
        if self.normals is not None:
            mesh.vertex_normals = self.normals.copy()
        return mesh
