"""End-to-end rendering tests.

Tests cover:
- An empty scene renders as the sky gradient
- Progress callbacks per row
- Same seed gives byte-identical output
- Rendered colors stay finite and non-negative
"""

import numpy as np
import pytest


class TestRender:
    """Tests for camera.render."""

    def test_empty_scene_is_sky(self):
        """Test a 2x2, 1 sample, depth 1 render of nothing is four sky pixels."""
        from spheretrace.camera.camera import Camera
        from spheretrace.scene.world import World

        image = Camera(width=2, height=2, samples_per_pixel=1, max_depth=1, seed=0).render(
            World()
        )
        assert (image.width, image.height) == (2, 2)
        pixels = image.pixels.reshape(-1, 3)
        assert pixels.shape == (4, 3)
        for r, g, b in pixels:
            # Blend of white and (0.5, 0.7, 1.0) with a in [0, 1]
            a = (1.0 - r) / 0.5
            assert 0.0 <= a <= 1.0
            assert g == pytest.approx(1.0 - 0.3 * a, abs=1e-4)
            assert b == pytest.approx(1.0, abs=1e-5)

    def test_top_row_is_bluer(self):
        """Test row 0 is the top of the image (rays point up)."""
        from spheretrace.camera.camera import Camera
        from spheretrace.scene.world import World

        image = Camera(width=4, height=4, samples_per_pixel=4, max_depth=1, seed=0).render(
            World()
        )
        assert image.pixels[0, :, 0].mean() < image.pixels[-1, :, 0].mean()

    def test_callback_reports_each_row(self):
        from spheretrace.camera.camera import Camera
        from spheretrace.scene.world import World

        calls = []
        Camera(width=3, height=4, samples_per_pixel=1, max_depth=1, seed=0).render(
            World(), callback=lambda done, total: calls.append((done, total))
        )
        assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_same_seed_is_reproducible(self, tmp_path):
        from spheretrace.camera.camera import Camera
        from spheretrace.scene.default_scene import create_default_scene

        world = create_default_scene()
        camera = Camera(width=16, height=9, samples_per_pixel=2, max_depth=5, seed=42)

        first = tmp_path / "first.ppm"
        second = tmp_path / "second.ppm"
        camera.render(world).save(first)
        camera.render(world).save(second)
        assert first.read_bytes() == second.read_bytes()

    def test_different_seeds_differ(self):
        from spheretrace.camera.camera import Camera
        from spheretrace.scene.default_scene import create_default_scene

        world = create_default_scene()
        a = Camera(width=16, height=9, samples_per_pixel=2, max_depth=5, seed=1).render(world)
        b = Camera(width=16, height=9, samples_per_pixel=2, max_depth=5, seed=2).render(world)
        assert not np.array_equal(a.pixels, b.pixels)

    def test_default_scene_colors_are_valid(self):
        from spheretrace.camera.camera import Camera
        from spheretrace.core.integrator import AbsorptionPolicy
        from spheretrace.scene.default_scene import create_default_scene

        world = create_default_scene()
        for policy in AbsorptionPolicy:
            image = Camera(
                width=16, height=9, samples_per_pixel=2, max_depth=5, seed=3, absorption=policy
            ).render(world)
            assert np.isfinite(image.pixels).all()
            assert image.pixels.min() >= 0.0
            assert image.pixels.max() <= 1.0 + 1e-6
