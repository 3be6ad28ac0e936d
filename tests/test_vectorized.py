"""
Test script to verify that the loop, vectorized and partitioned accumulations
produce the same normals.
"""

import os
import sys
import numpy as np
import pytest
import trimesh

# Add the parent directory to the Python path so we can import the normals module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from meshes import generate_demo_mesh
from normals import compute_vertex_normals, angle_weight, uniform_weight
from normals.estimator import (
    accumulate_vertex_normals,
    accumulate_vertex_normals_vectorized,
    accumulate_vertex_normals_partitioned,
)

TOLERANCE = 1e-9


def create_sphere():
    """An icosphere has many vertices shared by five or six faces."""
    sphere = trimesh.creation.icosphere(subdivisions=2)
    return np.array(sphere.vertices), np.array(sphere.faces)


@pytest.mark.parametrize("weight_fn", [angle_weight, uniform_weight])
def test_loop_matches_vectorized(weight_fn):
    mesh = generate_demo_mesh()
    loop = accumulate_vertex_normals(mesh.vertices, mesh.faces, weight_fn)
    vectorized = accumulate_vertex_normals_vectorized(mesh.vertices, mesh.faces, weight_fn)

    diff = np.abs(loop - vectorized).max()
    print(f"Max accumulator difference: {diff}")
    assert diff < TOLERANCE


@pytest.mark.parametrize("weight_fn", [angle_weight, uniform_weight])
@pytest.mark.parametrize("num_partitions", [1, 2, 3, 16])
def test_partitioned_matches_vectorized(weight_fn, num_partitions):
    """Partition counts larger than the face count leave some partitions empty."""
    vertices, faces = create_sphere()
    vectorized = accumulate_vertex_normals_vectorized(vertices, faces, weight_fn)
    partitioned = accumulate_vertex_normals_partitioned(
        vertices, faces, weight_fn, num_partitions=num_partitions, max_workers=4)
    assert np.allclose(partitioned, vectorized, atol=TOLERANCE)

    mesh = generate_demo_mesh()
    partitioned_small = accumulate_vertex_normals_partitioned(
        mesh.vertices, mesh.faces, weight_fn, num_partitions=num_partitions)
    vectorized_small = accumulate_vertex_normals_vectorized(mesh.vertices, mesh.faces, weight_fn)
    assert np.allclose(partitioned_small, vectorized_small, atol=TOLERANCE)


@pytest.mark.parametrize("method", ["loop", "vectorized", "partitioned"])
def test_methods_agree_on_normals(method):
    vertices, faces = create_sphere()
    baseline = compute_vertex_normals(vertices, faces, angle_weight, method="vectorized")
    normals = compute_vertex_normals(vertices, faces, angle_weight, method=method, num_partitions=5)
    assert np.allclose(normals, baseline, atol=TOLERANCE)


def test_partitioned_is_deterministic():
    """Merging in partition order makes repeated runs bit-identical."""
    vertices, faces = create_sphere()
    first = accumulate_vertex_normals_partitioned(vertices, faces, uniform_weight, num_partitions=7)
    second = accumulate_vertex_normals_partitioned(vertices, faces, uniform_weight, num_partitions=7)
    assert np.array_equal(first, second)


def test_partitioned_rejects_zero_partitions():
    mesh = generate_demo_mesh()
    with pytest.raises(ValueError):
        accumulate_vertex_normals_partitioned(mesh.vertices, mesh.faces, angle_weight, num_partitions=0)


def test_sphere_normals_point_outward():
    """On a unit sphere centred at the origin the vertex normal is the vertex position."""
    vertices, faces = create_sphere()
    for weight_fn in (angle_weight, uniform_weight):
        normals = compute_vertex_normals(vertices, faces, weight_fn)
        assert np.all(np.einsum('ij,ij->i', normals, vertices) > 0.99)


if __name__ == "__main__":
    # Run tests directly
    test_loop_matches_vectorized(angle_weight)
    test_loop_matches_vectorized(uniform_weight)
    test_partitioned_is_deterministic()
    test_sphere_normals_point_outward()
    print("All tests passed!")
