"""Unit tests for the camera module.

Tests cover:
- Viewport derivation for the fixed 90 degree camera
- Camera validation and aspect-ratio construction
- Jittered primary rays stay inside their pixel
"""

import math

import numpy as np
import pytest


class TestViewport:
    """Tests for compute_viewport."""

    def test_square_image(self):
        from spheretrace.camera.camera import compute_viewport

        vp = compute_viewport(100, 100)
        # 2 * tan(45 degrees) * focal length 1
        assert vp.viewport_height == pytest.approx(2.0)
        assert vp.viewport_width == pytest.approx(2.0)
        np.testing.assert_allclose(vp.pixel_delta_u, [0.02, 0.0, 0.0])
        np.testing.assert_allclose(vp.pixel_delta_v, [0.0, -0.02, 0.0])
        np.testing.assert_allclose(vp.pixel00, [-0.99, 0.99, -1.0])

    def test_wide_image(self):
        from spheretrace.camera.camera import compute_viewport

        vp = compute_viewport(800, 450)
        assert vp.viewport_width == pytest.approx(2.0 * 800 / 450)
        # Pixels are square
        assert vp.pixel_delta_u[0] == pytest.approx(-vp.pixel_delta_v[1])

    def test_viewport_is_symmetric(self):
        """Test the last pixel center mirrors the first."""
        from spheretrace.camera.camera import compute_viewport

        w, h = 7, 5
        vp = compute_viewport(w, h)
        last = vp.pixel00 + (w - 1) * vp.pixel_delta_u + (h - 1) * vp.pixel_delta_v
        np.testing.assert_allclose(last[:2], -vp.pixel00[:2])
        assert last[2] == pytest.approx(-1.0)


class TestCameraConfig:
    """Tests for Camera construction and validation."""

    def test_defaults(self):
        from spheretrace.camera.camera import Camera
        from spheretrace.core.integrator import AbsorptionPolicy

        camera = Camera()
        assert camera.samples_per_pixel == 16
        assert camera.max_depth == 10
        assert camera.seed is None
        assert camera.absorption is AbsorptionPolicy.BLACK

    def test_with_aspect_ratio(self):
        from spheretrace.camera.camera import Camera

        camera = Camera.with_aspect_ratio(800, 16.0 / 9.0)
        assert (camera.width, camera.height) == (800, 450)
        assert camera.aspect_ratio == pytest.approx(16.0 / 9.0)

    def test_with_aspect_ratio_never_zero_height(self):
        from spheretrace.camera.camera import Camera

        camera = Camera.with_aspect_ratio(2, 10.0)
        assert camera.height == 1

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0},
            {"height": -1},
            {"width": 5000},
            {"samples_per_pixel": 0},
            {"max_depth": 0},
        ],
    )
    def test_invalid_config_rejected(self, kwargs):
        from spheretrace.camera.camera import Camera

        with pytest.raises(ValueError):
            Camera(**kwargs)

    def test_invalid_aspect_ratio_rejected(self):
        from spheretrace.camera.camera import Camera

        with pytest.raises(ValueError, match="Aspect ratio"):
            Camera.with_aspect_ratio(100, 0.0)

    def test_camera_is_immutable(self):
        from dataclasses import FrozenInstanceError

        from spheretrace.camera.camera import Camera

        camera = Camera()
        with pytest.raises(FrozenInstanceError):
            camera.width = 10


class TestRayGeneration:
    """Tests for get_ray through setup_camera."""

    def test_setup_camera_uploads_viewport(self):
        from spheretrace.camera.camera import Camera, get_camera_info, setup_camera

        setup_camera(Camera(width=100, height=100))
        info = get_camera_info()
        assert info["center"] == pytest.approx((0.0, 0.0, 0.0))
        assert info["pixel00"] == pytest.approx((-0.99, 0.99, -1.0), abs=1e-6)
        assert info["pixel_delta_u"] == pytest.approx((0.02, 0.0, 0.0), abs=1e-6)

    def test_jittered_rays_stay_in_pixel(self):
        """Test every sample lands within half a pixel of the pixel center."""
        from spheretrace.camera.camera import Camera, sample_ray_direction, setup_camera
        from spheretrace.core.sampler import seed_sampler

        vp = setup_camera(Camera(width=10, height=10))
        seed_sampler(31)
        i, j = 3, 7
        center = vp.pixel00 + i * vp.pixel_delta_u + j * vp.pixel_delta_v
        half = 0.5 * vp.pixel_delta_u[0]
        for _ in range(50):
            d = sample_ray_direction(i, j)
            assert d[2] == pytest.approx(-1.0)
            assert abs(d[0] - center[0]) <= half + 1e-6
            assert abs(d[1] - center[1]) <= half + 1e-6

    def test_center_pixel_points_forward(self):
        from spheretrace.camera.camera import Camera, sample_ray_direction, setup_camera

        setup_camera(Camera(width=1, height=1))
        d = sample_ray_direction(0, 0)
        # One pixel covers the whole 90 degree view
        assert abs(math.atan2(d[0], -d[2])) <= math.radians(45.0) + 1e-6
        assert abs(math.atan2(d[1], -d[2])) <= math.radians(45.0) + 1e-6
