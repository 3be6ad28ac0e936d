from .spire_gable import generate_demo_mesh, SPIRE_HEIGHT, CENTER_Y
