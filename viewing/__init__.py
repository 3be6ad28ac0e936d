from .camera import OrbitCamera, InputState
from .overlay import normal_arrow_segments, to_plot_coords
