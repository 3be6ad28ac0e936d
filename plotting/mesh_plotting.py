import numpy as np
from numpy.typing import NDArray
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Poly3DCollection, Line3DCollection

from data_types import MeshDescriptor, MissingAttributeError
from normals.geometry import unitize
from viewing.overlay import normal_arrow_segments, to_plot_coords, NORMAL_ARROW_LENGTH


DEFAULT_SUBDIVISIONS = 6
ZERO_NORMAL_COLOR = (0.5, 0.5, 0.5)
ARROW_COLOR = 'orange'


def _subdivision_barycentrics(subdivisions: int):
    """Barycentric corners (K x 3 x 3) and centroids (K x 3) of a triangle split into subdivisions**2 pieces."""
    s = subdivisions
    corners = []
    for i in range(s):
        for j in range(s - i):
            corners.append([(i, j), (i + 1, j), (i, j + 1)])
            if i + j < s - 1:
                corners.append([(i + 1, j), (i + 1, j + 1), (i, j + 1)])

    corners = np.array(corners, dtype=np.float64) / s  # K x 3 x 2 as (u, v) toward corners 1 and 2
    barycentric = np.stack([1.0 - corners[..., 0] - corners[..., 1], corners[..., 0], corners[..., 1]], axis=-1)
    return barycentric, barycentric.mean(axis=1)


def interpolated_face_colors(
    vertices: NDArray[np.float64],
    faces: NDArray[np.int64],
    normals: NDArray[np.float64],
    subdivisions: int = DEFAULT_SUBDIVISIONS,
):
    """
    Split every triangle into subdivisions**2 pieces and colour each piece by
    the vertex normal interpolated at its centroid, mapped to RGB as (n + 1) / 2.

    Returns
    -------
    polygons : (F * K, 3, 3) np.ndarray
        Sub-triangle corners in world space.
    colors : (F * K, 3) np.ndarray
        RGB colour per sub-triangle. Pieces whose interpolated normal vanishes are gray.
    """
    if subdivisions < 1:
        raise ValueError(f"subdivisions must be at least 1, got {subdivisions}")

    corner_weights, centroid_weights = _subdivision_barycentrics(subdivisions)
    triangles = vertices[faces]  # F x 3 x 3
    triangle_normals = normals[faces]  # F x 3 x 3

    polygons = np.einsum('kcw,fwd->fkcd', corner_weights, triangles).reshape(-1, 3, 3)
    centroid_normals = unitize(np.einsum('kw,fwd->fkd', centroid_weights, triangle_normals).reshape(-1, 3))

    colors = (centroid_normals + 1.0) / 2.0
    colors[~np.any(centroid_normals != 0.0, axis=1)] = ZERO_NORMAL_COLOR
    return polygons, colors


def plot_mesh_with_normals(mesh: MeshDescriptor, title="Vertex Normals", figsize=(10, 8), ax=None,
                           offset=(0.0, 0.0, 0.0), wireframe=False, show_normals=False,
                           subdivisions=DEFAULT_SUBDIVISIONS, arrow_length=NORMAL_ARROW_LENGTH):
    """
    Plots a Y-up mesh coloured by its interpolated vertex normals.

    Parameters
    ----------
    mesh : MeshDescriptor
        Mesh with normals already computed.

    title : str, optional
        Title for the plot. Default is "Vertex Normals".

    figsize : tuple, optional
        Figure size as (width, height) in inches, used when ax is None.

    ax : matplotlib.axes.Axes, optional
        Existing 3D axes to plot on. If None, new figure and axes are created.

    offset : sequence of 3 floats, optional
        World-space translation applied to the mesh before drawing.

    wireframe : bool, optional
        Whether to draw the triangle edges on top of the surface.

    show_normals : bool, optional
        Whether to draw one arrow per vertex along its normal.

    subdivisions : int, optional
        Pieces per triangle edge used to show the interpolated shading.

    arrow_length : float, optional
        Length of the normal arrows in world units.

    Returns
    -------
    fig : matplotlib.figure.Figure
        The figure containing the plot.

    ax : matplotlib.axes.Axes
        The 3D axes containing the plot.

    artists : dict
        'surface', 'wireframe' and 'normals' collections, so callers can toggle them.
    """
    if mesh.normals is None:
        raise MissingAttributeError("Compute vertex normals before plotting the mesh")

    if ax is None:
        fig = plt.figure(figsize=figsize)
        ax = fig.add_subplot(111, projection='3d')
    else:
        fig = ax.figure

    vertices = mesh.vertices + np.asarray(offset, dtype=np.float64)

    polygons, colors = interpolated_face_colors(vertices, mesh.faces, mesh.normals, subdivisions)
    surface = Poly3DCollection(to_plot_coords(polygons), facecolors=colors, edgecolors='none', linewidths=0)
    ax.add_collection3d(surface)

    edges = Poly3DCollection(to_plot_coords(vertices[mesh.faces]), facecolors='none',
                             edgecolors='black', linewidths=0.8)
    edges.set_visible(wireframe)
    ax.add_collection3d(edges)

    segments = normal_arrow_segments(mesh.vertices, mesh.normals, offset=offset, length=arrow_length)
    arrows = Line3DCollection(to_plot_coords(segments), colors=ARROW_COLOR, linewidths=2)
    arrows.set_visible(show_normals)
    ax.add_collection3d(arrows)

    ax.set_title(title)
    ax.set_xlabel("X")
    ax.set_ylabel("-Z")
    ax.set_zlabel("Y")

    return fig, ax, {'surface': surface, 'wireframe': edges, 'normals': arrows}


def set_equal_limits(ax, points: NDArray[np.float64], padding=0.05, center=None):
    """
    Fit the axes around Y-up world points with a cube-shaped view volume.

    The cube is centered on the world-space point `center` when given, otherwise
    on the middle of the points' bounding box. It always contains every point.
    """
    plot_points = to_plot_coords(points).reshape(-1, 3)
    if center is None:
        mins, maxs = plot_points.min(axis=0), plot_points.max(axis=0)
        center = (mins + maxs) / 2.0
    else:
        center = to_plot_coords(np.asarray(center, dtype=np.float64))
    half_extent = np.abs(plot_points - center).max() * (1.0 + padding)

    ax.set_xlim(center[0] - half_extent, center[0] + half_extent)
    ax.set_ylim(center[1] - half_extent, center[1] + half_extent)
    ax.set_zlim(center[2] - half_extent, center[2] + half_extent)
    ax.set_box_aspect([1, 1, 1])
