"""
Vertex normal estimation by weighted accumulation of face normals.

Both policies go through the same accumulation and normalization code; they
differ only in the per-corner weight function they plug in.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np
from numpy.typing import NDArray
from tqdm import tqdm

from data_types import MeshDescriptor, validate_topology
from .geometry import face_normal, face_normals_vectorized, unitize
from .weights import WeightFunction, angle_weight, get_weight_function, uniform_weight


METHODS = ("loop", "vectorized", "partitioned")
DEFAULT_METHOD = "vectorized"
DEFAULT_PARTITIONS = 4


def accumulate_vertex_normals(
    vertices: NDArray[np.float64],
    faces: NDArray[np.int64],
    weight_fn: WeightFunction,
    verbose: bool = False,
) -> NDArray[np.float64]:
    """Sum weighted face normals into a V x 3 accumulator, one triangle at a time."""
    accumulator = np.zeros((len(vertices), 3), dtype=np.float64)

    for face in tqdm(faces, desc="Accumulating face normals", disable=not verbose):
        triangle = vertices[face]
        normal = face_normal(*triangle)
        for corner in range(3):
            weight = weight_fn(triangle[np.newaxis], corner)[0]
            accumulator[face[corner]] += normal * weight

    return accumulator


def accumulate_vertex_normals_vectorized(
    vertices: NDArray[np.float64],
    faces: NDArray[np.int64],
    weight_fn: WeightFunction,
) -> NDArray[np.float64]:
    """
    Vectorized implementation of the accumulation.

    Args:
        vertices: V x 3 vertex positions
        faces: F x 3 vertex indices
        weight_fn: per-corner weight function

    Returns:
        numpy.ndarray: V x 3 unnormalized accumulator
    """
    accumulator = np.zeros((len(vertices), 3), dtype=np.float64)
    if len(faces) == 0:
        return accumulator

    triangles = vertices[faces]
    normals = face_normals_vectorized(triangles)

    # add.at is unbuffered, so faces sharing a vertex all land in its slot
    for corner in range(3):
        weights = weight_fn(triangles, corner)
        np.add.at(accumulator, faces[:, corner], normals * weights[:, np.newaxis])

    return accumulator


def accumulate_vertex_normals_partitioned(
    vertices: NDArray[np.float64],
    faces: NDArray[np.int64],
    weight_fn: WeightFunction,
    num_partitions: int = DEFAULT_PARTITIONS,
    max_workers: int = None,
    verbose: bool = False,
) -> NDArray[np.float64]:
    """
    Map-reduce accumulation: every partition of faces is summed into its own
    private accumulator on a worker thread, then the accumulators are merged.

    Partials are merged in partition order regardless of completion order, so
    the result does not depend on thread scheduling.
    """
    if num_partitions < 1:
        raise ValueError(f"num_partitions must be at least 1, got {num_partitions}")

    partitions = [part for part in np.array_split(np.arange(len(faces)), num_partitions) if len(part)]
    partials = [None] * len(partitions)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(accumulate_vertex_normals_vectorized, vertices, faces[part], weight_fn): idx
            for idx, part in enumerate(partitions)
        }
        for future in tqdm(as_completed(futures), total=len(futures), desc="Merging partitions", disable=not verbose):
            partials[futures[future]] = future.result()

    accumulator = np.zeros((len(vertices), 3), dtype=np.float64)
    for partial in partials:
        accumulator += partial
    return accumulator


def compute_vertex_normals(
    vertices,
    faces,
    weight_fn: WeightFunction,
    method: str = DEFAULT_METHOD,
    num_partitions: int = DEFAULT_PARTITIONS,
    max_workers: int = None,
    verbose: bool = False,
) -> NDArray[np.float64]:
    """
    Estimate one normal per vertex from the faces around it.

    Every face contributes its unit normal scaled by weight_fn at each of its
    corners; the per-vertex sums are then normalized. A vertex with no incident
    faces, or whose contributions cancel, gets the zero vector.

    Args:
        vertices: V x 3 vertex positions
        faces: F x 3 vertex indices, all in range 0..V-1
        weight_fn: per-corner weight function, see normals.weights
        method: "loop", "vectorized" or "partitioned"
        num_partitions: number of face partitions for the partitioned method
        max_workers: thread pool size for the partitioned method
        verbose: show progress bars

    Returns:
        NDArray[np.float64]: V x 3 array of unit or zero normals

    Raises:
        MalformedTopologyError: if a face references a missing vertex
        ValueError: if method is unknown
    """
    vertices, faces = validate_topology(vertices, faces)

    if method == "loop":
        accumulator = accumulate_vertex_normals(vertices, faces, weight_fn, verbose=verbose)
    elif method == "vectorized":
        accumulator = accumulate_vertex_normals_vectorized(vertices, faces, weight_fn)
    elif method == "partitioned":
        accumulator = accumulate_vertex_normals_partitioned(
            vertices, faces, weight_fn,
            num_partitions=num_partitions,
            max_workers=max_workers,
            verbose=verbose,
        )
    else:
        raise ValueError(f"Unknown accumulation method '{method}'. Available methods: {', '.join(METHODS)}")

    return unitize(accumulator)


def compute_face_weighted_normals(mesh: MeshDescriptor, **kwargs) -> MeshDescriptor:
    """Weight each face by its interior angle at the vertex and store the normals on the mesh."""
    mesh.set_normals(compute_vertex_normals(mesh.vertices, mesh.faces, angle_weight, **kwargs))
    return mesh


def compute_smooth_normals(mesh: MeshDescriptor, **kwargs) -> MeshDescriptor:
    """Average the incident face normals with equal weight and store the normals on the mesh."""
    mesh.set_normals(compute_vertex_normals(mesh.vertices, mesh.faces, uniform_weight, **kwargs))
    return mesh


def compute_normals(mesh: MeshDescriptor, policy: str, **kwargs) -> MeshDescriptor:
    mesh.set_normals(compute_vertex_normals(mesh.vertices, mesh.faces, get_weight_function(policy), **kwargs))
    return mesh
