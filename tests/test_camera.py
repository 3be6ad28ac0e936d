"""
Test script to verify the orbit camera and keyboard input tracking.
"""

import os
import sys
import numpy as np

# Add the parent directory to the Python path so we can import the viewing module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from viewing.camera import OrbitCamera, InputState, HALF_PI


def test_starts_in_top_view():
    camera = OrbitCamera()
    assert np.isclose(camera.yaw, 0.0)
    assert np.isclose(camera.pitch, -HALF_PI)
    assert np.allclose(camera.direction(), [0.0, 1.0, 0.0])


def test_arrows_orbit_by_elapsed_time():
    camera = OrbitCamera(yaw=0.0, pitch=0.0)
    camera.update({"left"}, set(), 0.5)
    assert np.isclose(camera.yaw, -0.5)
    camera.update({"right"}, set(), 0.2)
    assert np.isclose(camera.yaw, -0.3)
    camera.update({"down"}, set(), 0.25)
    assert np.isclose(camera.pitch, 0.25)
    camera.update({"up"}, set(), 0.75)
    assert np.isclose(camera.pitch, -0.5)


def test_pitch_is_clamped():
    camera = OrbitCamera()
    camera.update({"up"}, set(), 1.0)
    assert np.isclose(camera.pitch, -HALF_PI)
    camera.update({"down"}, set(), 10.0)
    assert np.isclose(camera.pitch, HALF_PI)


def test_snap_views():
    camera = OrbitCamera(yaw=1.0, pitch=0.3)
    camera.update(set(), {"x"}, 0.1)
    assert (camera.yaw, camera.pitch) == (-HALF_PI, 0.0)
    camera.update(set(), {"y"}, 0.1)
    assert (camera.yaw, camera.pitch) == (0.0, -HALF_PI)
    camera.update(set(), {"z"}, 0.1)
    assert (camera.yaw, camera.pitch) == (0.0, 0.0)


def test_view_angles():
    """Matplotlib angles place its camera at the same point as the Y-up camera."""
    for yaw, pitch in [(0.0, 0.0), (0.0, -HALF_PI), (-HALF_PI, 0.0), (0.7, -0.4)]:
        camera = OrbitCamera(yaw=yaw, pitch=pitch)
        elev, azim = np.radians(camera.view_angles())
        mpl_eye = np.array([np.cos(elev) * np.cos(azim), np.cos(elev) * np.sin(azim), np.sin(elev)])
        x, y, z = camera.direction()
        assert np.allclose(mpl_eye, [x, -z, y])


def test_input_state():
    state = InputState()
    state.press("left")
    state.press("left")
    assert state.pressed == {"left"}
    assert state.just_pressed == {"left"}

    state.end_frame()
    assert state.pressed == {"left"}
    assert state.just_pressed == set()

    state.release("left")
    state.release("right")
    assert state.pressed == set()


if __name__ == "__main__":
    # Run tests directly
    test_starts_in_top_view()
    test_arrows_orbit_by_elapsed_time()
    test_snap_views()
    test_view_angles()
    print("All tests passed!")
