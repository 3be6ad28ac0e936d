import time

import numpy as np
import matplotlib.pyplot as plt

from data_types import MeshDescriptor
from meshes import CENTER_Y
from plotting import plot_mesh_with_normals, set_equal_limits
from plotting.mesh_plotting import DEFAULT_SUBDIVISIONS
from .camera import InputState, OrbitCamera


MESH_OFFSET = 4.0
FRAME_INTERVAL_MS = 16

CONTROLS_TEXT = "arrows: orbit   x/y/z: snap view   w: wireframe   n: normals"


class NormalComparisonViewer:
    """
    Shows two meshes with precomputed normals side by side in one 3D scene.

    The left mesh is drawn at x = -MESH_OFFSET and the right one at
    x = +MESH_OFFSET, and the view is centered on the point (0, CENTER_Y, 0)
    between them. Normals are read from the meshes as given; the viewer
    never recomputes them.
    """

    def __init__(self, left_mesh: MeshDescriptor, right_mesh: MeshDescriptor,
                 left_title="Face weighted", right_title="Smooth",
                 wireframe=False, show_normals=False, subdivisions=DEFAULT_SUBDIVISIONS,
                 figsize=(12, 8)):
        self.camera = OrbitCamera()
        self.input = InputState()
        self.wireframe = wireframe
        self.show_normals = show_normals
        self._last_frame = None
        self._timer = None

        self.fig = plt.figure(figsize=figsize)
        self.ax = self.fig.add_subplot(111, projection='3d')
        self.ax.disable_mouse_rotation()

        offsets = [(-MESH_OFFSET, 0.0, 0.0), (MESH_OFFSET, 0.0, 0.0)]
        self.artists = []
        for mesh, offset in zip((left_mesh, right_mesh), offsets):
            _, _, artists = plot_mesh_with_normals(
                mesh, ax=self.ax, offset=offset, wireframe=wireframe,
                show_normals=show_normals, subdivisions=subdivisions,
            )
            self.artists.append(artists)

        self.ax.set_title(f"{left_title}  |  {right_title}")
        self.fig.text(0.5, 0.03, CONTROLS_TEXT, ha='center', va='center', fontsize=10)

        all_points = np.concatenate([
            left_mesh.vertices + np.array(offsets[0]),
            right_mesh.vertices + np.array(offsets[1]),
        ])
        set_equal_limits(self.ax, all_points, center=(0.0, CENTER_Y, 0.0))
        self._apply_camera()

        # Arrow keys would otherwise trigger matplotlib's back/forward navigation
        manager = self.fig.canvas.manager
        if manager is not None and manager.key_press_handler_id is not None:
            self.fig.canvas.mpl_disconnect(manager.key_press_handler_id)
        self.fig.canvas.mpl_connect('key_press_event', self.on_key_press)
        self.fig.canvas.mpl_connect('key_release_event', self.on_key_release)

    def on_key_press(self, event):
        if event.key:
            self.input.press(event.key)

    def on_key_release(self, event):
        if event.key:
            self.input.release(event.key)

    def toggle_wireframe(self):
        self.wireframe = not self.wireframe
        for artists in self.artists:
            artists['wireframe'].set_visible(self.wireframe)

    def toggle_normals(self):
        self.show_normals = not self.show_normals
        for artists in self.artists:
            artists['normals'].set_visible(self.show_normals)

    def step(self, dt: float) -> None:
        """Run one frame with dt seconds elapsed since the previous one."""
        if 'w' in self.input.just_pressed:
            self.toggle_wireframe()
        if 'n' in self.input.just_pressed:
            self.toggle_normals()

        self.camera.update(self.input.pressed, self.input.just_pressed, dt)
        self.input.end_frame()
        self._apply_camera()
        self.fig.canvas.draw_idle()

    def _on_timer(self):
        now = time.perf_counter()
        dt = 0.0 if self._last_frame is None else now - self._last_frame
        self._last_frame = now
        self.step(dt)

    def _apply_camera(self):
        elev, azim = self.camera.view_angles()
        self.ax.view_init(elev=elev, azim=azim)

    def show(self):
        self._timer = self.fig.canvas.new_timer(interval=FRAME_INTERVAL_MS)
        self._timer.add_callback(self._on_timer)
        self._timer.start()
        plt.show()

    def save(self, path, dpi=150):
        self.fig.savefig(path, dpi=dpi)
        print(f"Saved comparison figure to {path}")
