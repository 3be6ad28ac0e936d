"""
Orbit camera driven by held keys and per-frame elapsed time.

Angles follow a Y-up world: yaw turns about +Y, pitch tilts about the camera's
X axis, and (yaw, pitch) = (0, 0) looks at the scene from +Z.
"""

from dataclasses import dataclass, field

import numpy as np


HALF_PI = np.pi / 2.0

SIDE_VIEW = (-HALF_PI, 0.0)
TOP_VIEW = (0.0, -HALF_PI)
FRONT_VIEW = (0.0, 0.0)

SNAP_KEYS = {
    "x": SIDE_VIEW,
    "y": TOP_VIEW,
    "z": FRONT_VIEW,
}


@dataclass
class InputState:
    """Keys held down, plus keys that went down since the last frame."""
    pressed: set = field(default_factory=set)
    just_pressed: set = field(default_factory=set)

    def press(self, key: str) -> None:
        if key not in self.pressed:
            self.just_pressed.add(key)
        self.pressed.add(key)

    def release(self, key: str) -> None:
        self.pressed.discard(key)

    def end_frame(self) -> None:
        self.just_pressed.clear()


@dataclass
class OrbitCamera:
    yaw: float = TOP_VIEW[0]
    pitch: float = TOP_VIEW[1]

    def update(self, pressed, just_pressed, dt: float) -> None:
        """Advance one frame: arrows orbit at one radian per second, x/y/z snap to axis views."""
        if "left" in pressed:
            self.yaw -= dt
        if "right" in pressed:
            self.yaw += dt
        if "up" in pressed:
            self.pitch = float(np.clip(self.pitch - dt, -HALF_PI, HALF_PI))
        if "down" in pressed:
            self.pitch = float(np.clip(self.pitch + dt, -HALF_PI, HALF_PI))

        for key, (yaw, pitch) in SNAP_KEYS.items():
            if key in just_pressed:
                self.yaw, self.pitch = yaw, pitch

    def direction(self) -> np.ndarray:
        """Unit vector from the orbit center toward the camera."""
        return np.array([
            np.sin(self.yaw) * np.cos(self.pitch),
            -np.sin(self.pitch),
            np.cos(self.yaw) * np.cos(self.pitch),
        ])

    def view_angles(self):
        """
        Matplotlib (elev, azim) in degrees for this camera.

        The world is drawn with (x, y, z) -> (x, -z, y) so Y points up on
        matplotlib's Z axis; the mapping keeps the axes right-handed.
        """
        elev = np.degrees(-self.pitch)
        azim = np.degrees(self.yaw) - 90.0
        return float(elev), float(azim)
