"""Unit tests for the default scene and camera."""


class TestDefaultScene:
    """Tests for create_default_scene."""

    def test_five_spheres_in_order(self):
        from spheretrace.materials import Dielectric, Lambertian, Metal
        from spheretrace.scene.default_scene import create_default_scene

        world = create_default_scene()
        spheres = list(world)
        assert len(spheres) == 5

        ground, center, glass, bubble, metal = spheres
        assert ground.center == (0.0, -100.5, -1.0)
        assert ground.radius == 100.0
        assert ground.material == Lambertian((0.8, 0.8, 0.0))

        assert center.center == (0.0, 0.0, -1.2)
        assert center.material == Lambertian((0.1, 0.2, 0.5))

        assert glass.center == bubble.center == (-1.0, 0.0, -1.0)
        assert glass.radius == 0.5
        assert bubble.radius == 0.4
        assert glass.material == Dielectric(1.5)
        assert abs(bubble.material.refraction_index - 1.0 / 1.5) < 1e-12

        assert metal.center == (1.0, 0.0, -1.0)
        assert metal.material == Metal((0.8, 0.6, 0.2), fuzz=1.0)

    def test_uploads_five_materials(self):
        from spheretrace.materials import get_material_count
        from spheretrace.scene.default_scene import create_default_scene
        from spheretrace.scene.world import get_sphere_count

        create_default_scene().upload()
        assert get_sphere_count() == 5
        assert get_material_count() == 5


class TestDefaultCamera:
    """Tests for create_default_camera."""

    def test_size(self):
        from spheretrace.scene.default_scene import create_default_camera

        camera = create_default_camera()
        assert (camera.width, camera.height) == (800, 450)

    def test_overrides(self):
        from spheretrace.scene.default_scene import create_default_camera

        camera = create_default_camera(samples_per_pixel=4, seed=9)
        assert camera.samples_per_pixel == 4
        assert camera.seed == 9
