from .estimator import (
    compute_vertex_normals,
    compute_face_weighted_normals,
    compute_smooth_normals,
    compute_normals,
)
from .weights import POLICIES, angle_weight, uniform_weight, get_weight_function
