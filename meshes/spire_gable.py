import numpy as np

from data_types import MeshDescriptor


SPIRE_HEIGHT = 10.0
CENTER_Y = SPIRE_HEIGHT / 2.0


def generate_demo_mesh() -> MeshDescriptor:
    """
    A spire on a square base with a gable leaning against its left side.

    The peak (vertex 0) is shared by five faces with unequal apex angles, and
    vertex 2 joins thin spire faces to wide gable faces, so the two normal
    policies visibly disagree there.
    """
    vertices = np.array([
        [0.0, SPIRE_HEIGHT, 0.0],  # spire peak (0)
        [-1.0, 0.0, -1.0],  # spire back left (1)
        [-0.2, 8.0, 0.0],  # spire left center (2)
        [-1.0, 0.0, 1.0],  # spire front left (3)
        [1.0, 0.0, 1.0],  # spire front right (4)
        [1.0, 0.0, -1.0],  # spire back right (5)
        [-2.0, 0.0, -1.0],  # gable back left (6)
        [-2.0, 8.0, 0.0],  # gable left center (7)
        [-2.0, 0.0, 1.0],  # gable front left (8)
    ])
    faces = np.array([
        [0, 5, 1],  # spire peak
        [0, 1, 2],  # spire left back
        [0, 2, 3],  # spire left front
        [0, 3, 4],  # spire front
        [0, 4, 5],  # spire right

        [2, 1, 7],  # gable back tri A
        [7, 1, 6],  # gable back tri B
        [2, 7, 3],  # gable front tri A
        [3, 7, 8],  # gable front tri B
        [7, 6, 8],  # gable end
    ])
    return MeshDescriptor(vertices=vertices, faces=faces)
