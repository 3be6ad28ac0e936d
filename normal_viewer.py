import argparse
import sys
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import matplotlib.pyplot as plt

from meshes import generate_demo_mesh
from normals import compute_face_weighted_normals, compute_smooth_normals
from normals.estimator import METHODS, DEFAULT_METHOD, DEFAULT_PARTITIONS
from plotting.mesh_plotting import DEFAULT_SUBDIVISIONS
from viewing.viewer import NormalComparisonViewer


READOUT_VERTEX = 0


def parse_cli(argv=None):
    """Parse command-line arguments for the normal comparison viewer."""
    parser = argparse.ArgumentParser(
        description='Compare face-weighted and smooth vertex normals on a spire-and-gable mesh.')
    parser.add_argument('--method', choices=METHODS, default=DEFAULT_METHOD,
                        help='How face contributions are accumulated into vertices')
    parser.add_argument('--partitions', type=int, default=DEFAULT_PARTITIONS,
                        help='Number of face partitions for the partitioned method')
    parser.add_argument('--parallel', action='store_true',
                        help='Compute the two policies on separate threads')
    parser.add_argument('--wireframe', action='store_true', help='Start with triangle edges visible')
    parser.add_argument('--show-normals', action='store_true', help='Start with normal arrows visible')
    parser.add_argument('--subdivisions', type=int, default=DEFAULT_SUBDIVISIONS,
                        help='Pieces per triangle edge used for the interpolated shading')
    parser.add_argument('--no-gui', action='store_true', help='Only print the normals, do not open a window')
    parser.add_argument('--save', type=str, default=None, help='Write the comparison figure to this path instead of showing it')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output with progress bars')

    args = parser.parse_args(argv)
    if args.partitions < 1:
        parser.error(f"--partitions must be at least 1, got {args.partitions}")
    if args.subdivisions < 1:
        parser.error(f"--subdivisions must be at least 1, got {args.subdivisions}")
    return args


def build_demo_meshes(method=DEFAULT_METHOD, num_partitions=DEFAULT_PARTITIONS, parallel=False, verbose=False):
    """
    Build the demo mesh once, clone it, and run one normal policy on each copy.

    Returns (face_weighted_mesh, smooth_mesh). The copies share no arrays, so
    the two computations can run concurrently.
    """
    mesh_a = generate_demo_mesh()
    mesh_b = mesh_a.copy()
    kwargs = dict(method=method, num_partitions=num_partitions, verbose=verbose)

    if parallel:
        with ThreadPoolExecutor(max_workers=2) as executor:
            future_a = executor.submit(compute_face_weighted_normals, mesh_a, **kwargs)
            future_b = executor.submit(compute_smooth_normals, mesh_b, **kwargs)
            mesh_a, mesh_b = future_a.result(), future_b.result()
    else:
        compute_face_weighted_normals(mesh_a, **kwargs)
        compute_smooth_normals(mesh_b, **kwargs)

    return mesh_a, mesh_b


def print_normal_readout(mesh_a, mesh_b, vertex=READOUT_VERTEX):
    with np.printoptions(precision=6, suppress=True):
        print(f"Face weighted normal at vertex {vertex}: {mesh_a.normal(vertex)}")
        print(f"Smooth normal at vertex {vertex}: {mesh_b.normal(vertex)}")


def main(argv=None):
    args = parse_cli(argv)

    mesh_a, mesh_b = build_demo_meshes(
        method=args.method,
        num_partitions=args.partitions,
        parallel=args.parallel,
        verbose=args.verbose,
    )
    if args.verbose:
        print(f"Mesh built with {mesh_a.num_vertices} vertices and {mesh_a.num_faces} faces.")
    print_normal_readout(mesh_a, mesh_b)

    if args.no_gui:
        return 0

    if args.save:
        plt.switch_backend('Agg')

    viewer = NormalComparisonViewer(
        mesh_a, mesh_b,
        wireframe=args.wireframe,
        show_normals=args.show_normals,
        subdivisions=args.subdivisions,
    )
    if args.save:
        viewer.save(args.save)
    else:
        viewer.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
