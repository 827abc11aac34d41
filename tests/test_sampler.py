"""Unit tests for the seedable sampler.

Tests cover:
- Uniform floats stay in [0, 1) and ranges in [lo, hi)
- Same seed gives the same stream
- Sample-square offsets and random unit vectors
"""

import taichi as ti

N_SAMPLES = 2000


class TestUniformSampling:
    """Tests for random_float and random_range."""

    def test_random_float_in_unit_range(self):
        from spheretrace.core.sampler import random_float, seed_sampler

        values = ti.field(dtype=ti.f32, shape=N_SAMPLES)

        @ti.kernel
        def test_kernel():
            ti.loop_config(serialize=True)
            for i in range(N_SAMPLES):
                values[i] = random_float()

        seed_sampler(11)
        test_kernel()
        samples = values.to_numpy()
        assert samples.min() >= 0.0
        assert samples.max() < 1.0
        # Uniform mean is 0.5
        assert abs(samples.mean() - 0.5) < 0.05

    def test_random_range_bounds(self):
        from spheretrace.core.sampler import random_range, seed_sampler

        values = ti.field(dtype=ti.f32, shape=N_SAMPLES)

        @ti.kernel
        def test_kernel():
            ti.loop_config(serialize=True)
            for i in range(N_SAMPLES):
                values[i] = random_range(-2.0, 3.0)

        seed_sampler(5)
        test_kernel()
        samples = values.to_numpy()
        assert samples.min() >= -2.0
        assert samples.max() < 3.0

    def test_same_seed_same_stream(self):
        from spheretrace.core.sampler import random_float, seed_sampler

        values = ti.field(dtype=ti.f32, shape=16)

        @ti.kernel
        def test_kernel():
            ti.loop_config(serialize=True)
            for i in range(16):
                values[i] = random_float()

        seed_sampler(1234)
        test_kernel()
        first = values.to_numpy()

        seed_sampler(1234)
        test_kernel()
        second = values.to_numpy()

        seed_sampler(4321)
        test_kernel()
        third = values.to_numpy()

        assert (first == second).all()
        assert not (first == third).all()

    def test_seed_state_is_nonzero(self):
        from spheretrace.core.sampler import get_sampler_state, seed_sampler

        for seed in range(20):
            seed_sampler(seed)
            assert get_sampler_state() != 0

    def test_draw_advances_state(self):
        from spheretrace.core.sampler import get_sampler_state, random_float, seed_sampler

        @ti.kernel
        def test_kernel() -> ti.f32:
            return random_float()

        seed_sampler(3)
        before = get_sampler_state()
        test_kernel()
        assert get_sampler_state() != before


class TestDirectionSampling:
    """Tests for sample_square and random_unit_vector."""

    def test_sample_square_bounds(self):
        from spheretrace.core.sampler import sample_square, seed_sampler

        values = ti.Vector.field(3, dtype=ti.f32, shape=N_SAMPLES)

        @ti.kernel
        def test_kernel():
            ti.loop_config(serialize=True)
            for i in range(N_SAMPLES):
                values[i] = sample_square()

        seed_sampler(8)
        test_kernel()
        samples = values.to_numpy()
        assert samples[:, :2].min() >= -0.5
        assert samples[:, :2].max() < 0.5
        assert (samples[:, 2] == 0.0).all()

    def test_random_unit_vector_length(self):
        from spheretrace.core.sampler import random_unit_vector, seed_sampler

        lengths = ti.field(dtype=ti.f32, shape=N_SAMPLES)

        @ti.kernel
        def test_kernel():
            ti.loop_config(serialize=True)
            for i in range(N_SAMPLES):
                lengths[i] = random_unit_vector().norm()

        seed_sampler(9)
        test_kernel()
        samples = lengths.to_numpy()
        assert abs(samples - 1.0).max() < 1e-4

    def test_random_unit_vector_covers_sphere(self):
        """Test the mean direction is near zero (no hemisphere bias)."""
        from spheretrace.core.sampler import random_unit_vector, seed_sampler

        values = ti.Vector.field(3, dtype=ti.f32, shape=N_SAMPLES)

        @ti.kernel
        def test_kernel():
            ti.loop_config(serialize=True)
            for i in range(N_SAMPLES):
                values[i] = random_unit_vector()

        seed_sampler(10)
        test_kernel()
        mean = values.to_numpy().mean(axis=0)
        assert abs(mean).max() < 0.1
