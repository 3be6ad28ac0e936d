from .mesh_plotting import plot_mesh_with_normals, interpolated_face_colors, set_equal_limits
